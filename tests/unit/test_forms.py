"""
Tests for form validation rules and their messages.
"""

import pytest

from giftcard_web.core.constants import ErrorMessages, FORM_ERROR_KEY, SubmissionOutcome
from giftcard_web.core.form_submission import validate_form
from giftcard_web.dto.gift_card import GiftCardAcceptForm, GiftCardCreateForm, GiftCardSearchForm


def _create_data(**overrides):
    data = {
        "issuerName": "Alice",
        "recipientName": "Bob",
        "recipientPhone": "5551234567",
        "amount": "25.00",
        "expirationDays": "90",
    }
    data.update(overrides)
    return data


class TestGiftCardCreateForm:

    def test_valid_form(self):
        form, failed = validate_form(GiftCardCreateForm, _create_data())
        assert failed is None
        assert form.balance_cents == 2500
        assert form.expiration_days == 90

    def test_create_request_payload(self):
        form, _ = validate_form(GiftCardCreateForm, _create_data(amount="0.29", expirationDays="30"))
        assert form.to_create_request().model_dump() == {
            "issuer_name": "Alice",
            "recipient_name": "Bob",
            "recipient_phone": "5551234567",
            "balance": 29,
            "expiration_days": 30,
        }

    def test_values_are_stripped(self):
        form, _ = validate_form(GiftCardCreateForm, _create_data(issuerName="  Alice  ", recipientPhone=" 5551234567 "))
        assert form.issuer_name == "Alice"
        assert form.recipient_phone == "5551234567"

    @pytest.mark.parametrize("field,value,message", [
        ("issuerName", "A", ErrorMessages.ISSUER_NAME_REQUIRED),
        ("issuerName", "   ", ErrorMessages.ISSUER_NAME_REQUIRED),
        ("recipientName", "", ErrorMessages.RECIPIENT_NAME_REQUIRED),
        ("recipientPhone", "555123456", ErrorMessages.VALID_PHONE_REQUIRED),
        ("amount", "0", ErrorMessages.AMOUNT_POSITIVE),
        ("amount", "-10", ErrorMessages.AMOUNT_POSITIVE),
        ("amount", "ten", ErrorMessages.AMOUNT_POSITIVE),
        ("amount", "", ErrorMessages.AMOUNT_POSITIVE),
        ("amount", "1e5000", ErrorMessages.AMOUNT_POSITIVE),
        ("amount", "1e999999999", ErrorMessages.AMOUNT_POSITIVE),
        ("amount", "1000000000.01", ErrorMessages.AMOUNT_POSITIVE),
        ("expirationDays", "0", ErrorMessages.EXPIRATION_RANGE),
        ("expirationDays", "366", ErrorMessages.EXPIRATION_RANGE),
        ("expirationDays", "soon", ErrorMessages.EXPIRATION_RANGE),
    ])
    def test_field_messages(self, field, value, message):
        form, failed = validate_form(GiftCardCreateForm, _create_data(**{field: value}))
        assert form is None
        assert failed.outcome == SubmissionOutcome.VALIDATION_FAILED
        assert failed.errors == {field: message}

    def test_boundary_days_are_valid(self):
        for days in ("1", "365"):
            form, failed = validate_form(GiftCardCreateForm, _create_data(expirationDays=days))
            assert failed is None
            assert form.expiration_days == int(days)

    def test_largest_amount_is_valid(self):
        form, failed = validate_form(GiftCardCreateForm, _create_data(amount="1000000000"))
        assert failed is None
        assert form.balance_cents == 100000000000

    def test_all_errors_reported_at_once(self):
        _, failed = validate_form(GiftCardCreateForm, {})
        assert failed.errors == {
            "issuerName": ErrorMessages.ISSUER_NAME_REQUIRED,
            "recipientName": ErrorMessages.RECIPIENT_NAME_REQUIRED,
            "recipientPhone": ErrorMessages.VALID_PHONE_REQUIRED,
            "amount": ErrorMessages.AMOUNT_POSITIVE,
            "expirationDays": ErrorMessages.EXPIRATION_RANGE,
        }
        assert FORM_ERROR_KEY not in failed.errors

    def test_submitted_values_preserved(self):
        data = _create_data(amount="abc")
        _, failed = validate_form(GiftCardCreateForm, data)
        assert failed.values == data


class TestGiftCardAcceptForm:

    def test_phone_required(self):
        _, failed = validate_form(GiftCardAcceptForm, {"phone": "  "})
        assert failed.errors == {"phone": ErrorMessages.PHONE_REQUIRED}

    def test_any_non_blank_phone_passes(self):
        form, failed = validate_form(GiftCardAcceptForm, {"phone": "123"})
        assert failed is None
        assert form.phone == "123"


class TestGiftCardSearchForm:

    def test_short_phone_rejected(self):
        _, failed = validate_form(GiftCardSearchForm, {"phone": "555123456"})
        assert failed.errors == {"phone": ErrorMessages.VALID_PHONE_REQUIRED}

    def test_phone_is_stripped_before_length_check(self):
        _, failed = validate_form(GiftCardSearchForm, {"phone": "  555123456  "})
        assert failed.errors == {"phone": ErrorMessages.VALID_PHONE_REQUIRED}

    def test_pagination_defaults(self):
        form, _ = validate_form(GiftCardSearchForm, {"phone": "5551234567"})
        assert form.page == 1
        assert form.per_page is None

    def test_pagination_values(self):
        form, _ = validate_form(GiftCardSearchForm, {"phone": "5551234567", "page": "3", "perPage": "5"})
        assert form.page == 3
        assert form.per_page == 5

    @pytest.mark.parametrize("field", ["page", "perPage"])
    def test_pagination_must_be_positive(self, field):
        _, failed = validate_form(GiftCardSearchForm, {"phone": "5551234567", field: "0"})
        assert failed.errors == {field: ErrorMessages.PAGE_POSITIVE}
