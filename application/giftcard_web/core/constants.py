from decimal import Decimal
from enum import Enum


class GiftCardStatus(str, Enum):
    """Composite display status, see compute_gift_card_status for precedence"""
    PENDING = "Pending"
    ACTIVE = "Active"
    INACTIVE = "Inactive"
    EXPIRED = "Expired"


class SubmissionOutcome(str, Enum):
    SUCCESS = "success"
    VALIDATION_FAILED = "validation_failed"
    SERVER_ERROR = "server_error"
    TRANSPORT_ERROR = "transport_error"


# Expiration periods offered on the create form (value, label)
EXPIRATION_DAY_OPTIONS = [
    (30, "30 days"),
    (60, "60 days"),
    (90, "90 days"),
    (180, "180 days"),
    (365, "1 year"),
]
DEFAULT_EXPIRATION_DAYS = 90
MIN_EXPIRATION_DAYS = 1
MAX_EXPIRATION_DAYS = 365

# Largest amount the create form accepts; keeps cents within a 64-bit integer
MAX_AMOUNT = Decimal("1000000000")

MIN_NAME_LENGTH = 2
MIN_PHONE_LENGTH = 10

# Key used for form-level (not field-specific) errors
FORM_ERROR_KEY = "_form"


class ErrorMessages:
    ISSUER_NAME_REQUIRED = "Issuer name is required"
    RECIPIENT_NAME_REQUIRED = "Recipient name is required"
    VALID_PHONE_REQUIRED = "Valid phone number is required"
    PHONE_REQUIRED = "Phone number is required"
    AMOUNT_POSITIVE = "Amount must be a positive number"
    EXPIRATION_RANGE = "Expiration must be between 1 and 365 days"
    PAGE_POSITIVE = "Page must be a positive whole number"

    UNEXPECTED = "An unexpected error occurred"
    CREATE_FAILED = "Failed to create gift card"
    ACCEPT_FAILED = "Failed to accept gift card"
    SEARCH_FAILED = "Failed to search for gift cards"
    NOT_FOUND = "Gift card not found"
    LOAD_FAILED = "Failed to load gift card"
    ID_REQUIRED = "Gift card ID is required"
