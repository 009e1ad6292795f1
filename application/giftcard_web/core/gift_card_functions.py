"""
Core gift card functions behind the three pages: create, detail/accept and search.
All gift card rules live in the external API; this module validates input,
relays one request and derives the fields shown on the page.
"""

from datetime import datetime
from typing import Any, Dict, List, Mapping, Optional

from pydantic import ValidationError

# Logger
from giftcard_web.logging.utils import get_app_logger
logger = get_app_logger("gift_card_core")

# Settings
from giftcard_web.config.settings import GiftCardWebConfigs
configs = GiftCardWebConfigs()

# Services
from giftcard_web.integrations.gift_card_api import GiftCardAPIService

# Core
from giftcard_web.core.constants import ErrorMessages, FORM_ERROR_KEY, GiftCardStatus, SubmissionOutcome
from giftcard_web.core.form_submission import FormSubmissionResult, submit_form
from giftcard_web.middlewares.request_context import request_context

# DTOs
from giftcard_web.dto.gift_card import (
    GiftCard,
    GiftCardAcceptForm,
    GiftCardAcceptRequest,
    GiftCardCreateForm,
    GiftCardSearchForm,
    GiftCardView,
)

# Utils
from giftcard_web.utils.currency import format_cents
from giftcard_web.utils.datetime_helpers import (
    days_until,
    format_date_long,
    format_date_short,
    get_utc_now,
    parse_api_datetime,
)


PAGINATION_FIELDS = ("page", "perPage")


class GiftCardLookupError(Exception):
    """A detail lookup that cannot render the page; carries the status to show"""

    def __init__(self, status_code: int, message: str):
        super().__init__(message)
        self.status_code = status_code
        self.message = message


def compute_gift_card_status(is_active: bool, is_expired: bool, is_accepted: bool) -> GiftCardStatus:
    """
    Composite status, first match wins:
    inactive > expired > accepted and active > pending.
    """
    if not is_active:
        return GiftCardStatus.INACTIVE
    if is_expired:
        return GiftCardStatus.EXPIRED
    if is_accepted:
        return GiftCardStatus.ACTIVE
    return GiftCardStatus.PENDING


def build_gift_card_view(gift_card: GiftCard, now: Optional[datetime] = None) -> GiftCardView:
    """Derive the display fields of a gift card for one render"""
    now = now or get_utc_now()
    expiration = parse_api_datetime(gift_card.expiration_date)
    if expiration is None:
        raise ValueError(f"Unparseable expiration_date: {gift_card.expiration_date!r}")

    days_until_expiration = days_until(expiration, now)
    is_expired = days_until_expiration < 0

    return GiftCardView(
        gift_card=gift_card,
        short_id=gift_card.id[:8],
        formatted_balance=format_cents(gift_card.balance),
        formatted_initial_balance=format_cents(gift_card.initial_balance),
        formatted_expiration_date=format_date_long(expiration),
        formatted_created_at=format_date_short(parse_api_datetime(gift_card.created_at)),
        days_until_expiration=days_until_expiration,
        is_expired=is_expired,
        status=compute_gift_card_status(gift_card.is_active, is_expired, gift_card.is_accepted),
        show_qr_block=gift_card.is_accepted and gift_card.is_active and not is_expired,
    )


def _malformed_payload(result: FormSubmissionResult, event: str, error: Exception) -> FormSubmissionResult:
    logger.error(f"{event}_malformed_payload | error={error}")
    return FormSubmissionResult(
        outcome=SubmissionOutcome.TRANSPORT_ERROR,
        errors={FORM_ERROR_KEY: ErrorMessages.UNEXPECTED},
        values=result.values,
    )


async def create_gift_card_core(raw_data: Mapping[str, Any], service: Optional[GiftCardAPIService] = None) -> FormSubmissionResult:
    """
    Validate the new gift card form and issue the card.
    Args:
        raw_data: submitted form fields (issuerName, recipientName, recipientPhone, amount, expirationDays)
        service: gift card API client
    Returns:
        FormSubmissionResult whose data is the new gift card id on success
    """
    service = service or GiftCardAPIService()

    async def send(form: GiftCardCreateForm):
        logger.info(f"gift_card_create_start | balance={form.balance_cents} expiration_days={form.expiration_days}")
        return await service.create_gift_card(form.to_create_request())

    result = await submit_form(GiftCardCreateForm, raw_data, send, ErrorMessages.CREATE_FAILED)
    if not result.ok:
        return result

    data = result.data if isinstance(result.data, dict) else {}
    gift_card_id = data.get("id")
    if not gift_card_id:
        logger.error("gift_card_create_missing_id | response carried no gift card id")
        return FormSubmissionResult(
            outcome=SubmissionOutcome.SERVER_ERROR,
            errors={FORM_ERROR_KEY: ErrorMessages.CREATE_FAILED},
            values=result.values,
            status_code=result.status_code,
        )

    logger.info(f"gift_card_create_success | gift_card={gift_card_id}")
    return result.model_copy(update={"data": str(gift_card_id)})


async def get_gift_card_details_core(gift_card_id: Optional[str], service: Optional[GiftCardAPIService] = None) -> GiftCardView:
    """
    Fetch one gift card and derive its display fields.
    Args:
        gift_card_id: gift card identifier from the URL
        service: gift card API client
    Returns:
        GiftCardView
    Raises:
        GiftCardLookupError: 400 for a blank id, the API's status for a
            failed lookup (404 = not found), 502 when the API is unreachable
            or answers with a payload that is not a gift card
    """
    if not gift_card_id or not gift_card_id.strip():
        raise GiftCardLookupError(400, ErrorMessages.ID_REQUIRED)

    request_context.gift_card_id = gift_card_id
    service = service or GiftCardAPIService()
    details_result = await service.get_gift_card(gift_card_id)

    if details_result.is_transport_error:
        raise GiftCardLookupError(502, ErrorMessages.LOAD_FAILED)
    if not details_result.success:
        raise GiftCardLookupError(details_result.status_code, details_result.message or ErrorMessages.NOT_FOUND)

    try:
        return build_gift_card_view(GiftCard.model_validate(details_result.data))
    except (ValidationError, ValueError) as e:
        logger.error(f"gift_card_details_malformed_payload | gift_card={gift_card_id} error={e}")
        raise GiftCardLookupError(502, ErrorMessages.LOAD_FAILED)


async def accept_gift_card_core(gift_card_id: str, raw_data: Mapping[str, Any], service: Optional[GiftCardAPIService] = None) -> FormSubmissionResult:
    """
    Accept a gift card with the phone number the user typed.
    The phone is not compared with the recipient phone here; the API decides.
    Args:
        gift_card_id: gift card identifier from the URL
        raw_data: submitted form fields (phone)
        service: gift card API client
    Returns:
        FormSubmissionResult; data is the updated card payload on success
    """
    request_context.gift_card_id = gift_card_id
    service = service or GiftCardAPIService()

    async def send(form: GiftCardAcceptForm):
        logger.info(f"gift_card_accept_start | gift_card={gift_card_id}")
        return await service.accept_gift_card(
            gift_card_id,
            GiftCardAcceptRequest(gift_card_id=gift_card_id, recipient_phone=form.phone),
        )

    result = await submit_form(GiftCardAcceptForm, raw_data, send, ErrorMessages.ACCEPT_FAILED)
    if result.ok:
        logger.info(f"gift_card_accept_success | gift_card={gift_card_id}")
    return result


async def search_gift_cards_core(raw_data: Mapping[str, Any], service: Optional[GiftCardAPIService] = None) -> FormSubmissionResult:
    """
    Search gift cards by recipient phone.
    Args:
        raw_data: submitted form fields (phone, optional page / perPage)
        service: gift card API client
    Returns:
        FormSubmissionResult whose data is a (possibly empty) list of GiftCardView
    """
    service = service or GiftCardAPIService()

    async def send(form: GiftCardSearchForm):
        per_page = form.per_page or configs.SEARCH_PAGE_SIZE
        return await service.list_by_recipient(form.phone, page=form.page, per_page=per_page)

    result = await submit_form(GiftCardSearchForm, raw_data, send, ErrorMessages.SEARCH_FAILED)
    if result.outcome == SubmissionOutcome.VALIDATION_FAILED:
        # page / perPage are hidden inputs, so their errors go to the form banner
        for field in PAGINATION_FIELDS:
            message = result.errors.pop(field, None)
            if message:
                result.errors.setdefault(FORM_ERROR_KEY, message)
    if not result.ok:
        return result

    items = result.data if result.data is not None else []
    if not isinstance(items, list):
        return _malformed_payload(result, "gift_card_search", TypeError(f"expected a list, got {type(items).__name__}"))

    now = get_utc_now()
    try:
        views: List[GiftCardView] = [build_gift_card_view(GiftCard.model_validate(item), now) for item in items]
    except (ValidationError, ValueError) as e:
        return _malformed_payload(result, "gift_card_search", e)

    logger.info(f"gift_card_search_success | results={len(views)}")
    return result.model_copy(update={"data": views})


def search_pagination(result: FormSubmissionResult) -> Dict[str, Optional[int]]:
    """Previous/next page numbers for a successful search, None where there is none"""
    values = result.values
    try:
        page = max(int(values.get("page") or 1), 1)
    except ValueError:
        page = 1
    try:
        per_page = int(values.get("perPage") or configs.SEARCH_PAGE_SIZE)
    except ValueError:
        per_page = configs.SEARCH_PAGE_SIZE
    count = len(result.data or [])
    return {
        "page": page,
        "per_page": per_page,
        "previous_page": page - 1 if page > 1 else None,
        "next_page": page + 1 if count >= per_page else None,
    }
