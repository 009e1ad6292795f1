"""
Tests for currency parsing, cents conversion and formatting.
"""

from decimal import Decimal

import pytest

from giftcard_web.utils.currency import amount_to_cents, format_cents, parse_positive_amount


class TestParsePositiveAmount:
    """Amount strings from the create form."""

    @pytest.mark.parametrize("text,expected", [
        ("25", Decimal("25")),
        ("25.00", Decimal("25.00")),
        (" 0.01 ", Decimal("0.01")),
        ("1e2", Decimal("100")),
    ])
    def test_accepts_positive_decimals(self, text, expected):
        assert parse_positive_amount(text) == expected

    @pytest.mark.parametrize("text", ["", "   ", "0", "0.00", "-5", "abc", "12abc", "NaN", "Infinity", None])
    def test_rejects_non_positive_or_non_numeric(self, text):
        assert parse_positive_amount(text) is None


class TestAmountToCents:
    """floor(amount * 100)."""

    @pytest.mark.parametrize("text,cents", [
        ("25.00", 2500),
        ("25", 2500),
        ("0.29", 29),
        ("19.999", 1999),
        ("0.005", 0),
        ("1234.56", 123456),
    ])
    def test_floor_of_hundredfold(self, text, cents):
        assert amount_to_cents(Decimal(text)) == cents


class TestFormatCents:

    def test_two_decimal_places(self):
        assert format_cents(2500) == "25.00"
        assert format_cents(5) == "0.05"
        assert format_cents(123456) == "1234.56"
        assert format_cents(0) == "0.00"
