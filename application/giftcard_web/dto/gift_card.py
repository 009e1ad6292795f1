from decimal import Decimal
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic_core import PydanticCustomError

from giftcard_web.core.constants import (
    ErrorMessages,
    GiftCardStatus,
    MAX_AMOUNT,
    MAX_EXPIRATION_DAYS,
    MIN_EXPIRATION_DAYS,
    MIN_NAME_LENGTH,
    MIN_PHONE_LENGTH,
)
from giftcard_web.utils.currency import amount_to_cents, parse_positive_amount


def _field_error(message: str) -> PydanticCustomError:
    # Custom error type keeps the message free of pydantic's "Value error, " prefix
    return PydanticCustomError("form_field", message)


def _as_text(value: Any) -> str:
    if value is None:
        return ""
    if not isinstance(value, str):
        raise _field_error("Invalid value")
    return value.strip()


def _require_min_length(value: Any, length: int, message: str) -> str:
    text = _as_text(value)
    if len(text) < length:
        raise _field_error(message)
    return text


# ---------------------------------------------------------------------------
# API resources
# ---------------------------------------------------------------------------

class GiftCard(BaseModel):
    """Gift card as returned by the gift card API"""
    model_config = ConfigDict(extra="ignore")

    id: str = Field(..., description="Opaque gift card identifier")
    issuer_name: str = Field("", description="Name of the person who issued the card")
    recipient_name: str = Field("", description="Name of the recipient")
    recipient_phone: str = Field("", description="Phone number of the recipient")
    balance: int = Field(0, description="Remaining balance in cents")
    initial_balance: int = Field(0, description="Original balance in cents")
    expiration_date: str = Field(..., description="ISO expiration date")
    is_accepted: bool = Field(False, description="Set once the recipient accepts the card")
    is_active: bool = Field(True, description="False means permanently unusable")
    qr_code: Optional[str] = Field(None, description="QR code image reference, once accepted")
    created_at: Optional[str] = Field(None, description="ISO creation timestamp")


class GiftCardView(BaseModel):
    """Gift card plus the display fields derived for one render"""
    gift_card: GiftCard
    short_id: str
    formatted_balance: str
    formatted_initial_balance: str
    formatted_expiration_date: Optional[str] = None
    formatted_created_at: Optional[str] = None
    days_until_expiration: int
    is_expired: bool
    status: GiftCardStatus
    show_qr_block: bool


# ---------------------------------------------------------------------------
# API request payloads
# ---------------------------------------------------------------------------

class GiftCardCreateRequest(BaseModel):
    """Body of POST /api/gift-cards"""
    issuer_name: str
    recipient_name: str
    recipient_phone: str
    balance: int = Field(..., description="Balance in cents")
    expiration_days: int


class GiftCardAcceptRequest(BaseModel):
    """Body of POST /api/gift-cards/{id}/accept"""
    gift_card_id: str
    recipient_phone: str


# ---------------------------------------------------------------------------
# HTML forms (field aliases are the input names used in the templates)
# ---------------------------------------------------------------------------

class GiftCardCreateForm(BaseModel):
    """New gift card form"""

    issuer_name: str = Field("", alias="issuerName", validate_default=True)
    recipient_name: str = Field("", alias="recipientName", validate_default=True)
    recipient_phone: str = Field("", alias="recipientPhone", validate_default=True)
    amount: Decimal = Field("", alias="amount", validate_default=True)
    expiration_days: int = Field("", alias="expirationDays", validate_default=True)

    @field_validator("issuer_name", mode="before")
    @classmethod
    def validate_issuer_name(cls, v):
        return _require_min_length(v, MIN_NAME_LENGTH, ErrorMessages.ISSUER_NAME_REQUIRED)

    @field_validator("recipient_name", mode="before")
    @classmethod
    def validate_recipient_name(cls, v):
        return _require_min_length(v, MIN_NAME_LENGTH, ErrorMessages.RECIPIENT_NAME_REQUIRED)

    @field_validator("recipient_phone", mode="before")
    @classmethod
    def validate_recipient_phone(cls, v):
        return _require_min_length(v, MIN_PHONE_LENGTH, ErrorMessages.VALID_PHONE_REQUIRED)

    @field_validator("amount", mode="before")
    @classmethod
    def validate_amount(cls, v):
        if isinstance(v, (int, float, Decimal)) and not isinstance(v, bool):
            v = str(v)
        amount = parse_positive_amount(v) if isinstance(v, str) else None
        if amount is None or amount > MAX_AMOUNT:
            raise _field_error(ErrorMessages.AMOUNT_POSITIVE)
        return amount

    @field_validator("expiration_days", mode="before")
    @classmethod
    def validate_expiration_days(cls, v):
        try:
            days = int(str(v).strip())
        except ValueError:
            raise _field_error(ErrorMessages.EXPIRATION_RANGE)
        if not MIN_EXPIRATION_DAYS <= days <= MAX_EXPIRATION_DAYS:
            raise _field_error(ErrorMessages.EXPIRATION_RANGE)
        return days

    @property
    def balance_cents(self) -> int:
        return amount_to_cents(self.amount)

    def to_create_request(self) -> GiftCardCreateRequest:
        return GiftCardCreateRequest(
            issuer_name=self.issuer_name,
            recipient_name=self.recipient_name,
            recipient_phone=self.recipient_phone,
            balance=self.balance_cents,
            expiration_days=self.expiration_days,
        )


class GiftCardAcceptForm(BaseModel):
    """Accept panel on the detail page"""

    phone: str = Field("", validate_default=True)

    @field_validator("phone", mode="before")
    @classmethod
    def validate_phone(cls, v):
        return _require_min_length(v, 1, ErrorMessages.PHONE_REQUIRED)


class GiftCardSearchForm(BaseModel):
    """Search by recipient phone"""

    phone: str = Field("", validate_default=True)
    page: int = Field(1)
    per_page: Optional[int] = Field(None, alias="perPage")

    @field_validator("phone", mode="before")
    @classmethod
    def validate_phone(cls, v):
        return _require_min_length(v, MIN_PHONE_LENGTH, ErrorMessages.VALID_PHONE_REQUIRED)

    @field_validator("page", "per_page", mode="before")
    @classmethod
    def validate_positive_int(cls, v, info):
        if v is None or (isinstance(v, str) and not v.strip()):
            return 1 if info.field_name == "page" else None
        try:
            number = int(str(v).strip())
        except ValueError:
            raise _field_error(ErrorMessages.PAGE_POSITIVE)
        if number < 1:
            raise _field_error(ErrorMessages.PAGE_POSITIVE)
        return number
