"""
Tests for API date parsing, display formatting and day differences.
"""

from datetime import date, datetime, timedelta, timezone

import pytest

from giftcard_web.utils.datetime_helpers import (
    days_until,
    format_date_long,
    format_date_short,
    parse_api_datetime,
)

NOW = datetime(2026, 3, 15, 12, 0, tzinfo=timezone.utc)


class TestParseApiDatetime:

    def test_parses_zulu_timestamp(self):
        dt = parse_api_datetime("2026-04-01T10:30:00Z")
        assert dt == datetime(2026, 4, 1, 10, 30, tzinfo=timezone.utc)

    def test_parses_offset_timestamp(self):
        dt = parse_api_datetime("2026-04-01T12:30:00+02:00")
        assert dt == datetime(2026, 4, 1, 10, 30, tzinfo=timezone.utc)

    def test_date_only_is_midnight_utc(self):
        assert parse_api_datetime("2026-04-01") == datetime(2026, 4, 1, tzinfo=timezone.utc)

    def test_naive_timestamp_is_utc(self):
        assert parse_api_datetime("2026-04-01T08:00:00").tzinfo is not None

    def test_accepts_date_objects(self):
        assert parse_api_datetime(date(2026, 4, 1)) == datetime(2026, 4, 1, tzinfo=timezone.utc)

    @pytest.mark.parametrize("value", [None, "", "   ", "not a date"])
    def test_unparseable_is_none(self, value):
        assert parse_api_datetime(value) is None


class TestDaysUntil:
    """Whole days, truncated toward zero."""

    def test_future(self):
        assert days_until(NOW + timedelta(days=30, hours=2), NOW) == 30

    def test_later_today_is_zero(self):
        assert days_until(NOW + timedelta(hours=5), NOW) == 0

    def test_earlier_today_is_zero(self):
        assert days_until(NOW - timedelta(hours=5), NOW) == 0

    def test_past(self):
        assert days_until(NOW - timedelta(days=2, hours=1), NOW) == -2

    def test_exactly_one_day_ago(self):
        assert days_until(NOW - timedelta(days=1), NOW) == -1


class TestFormatting:

    def test_long_format(self):
        assert format_date_long(datetime(2026, 1, 5, tzinfo=timezone.utc)) == "January 5, 2026"

    def test_short_format(self):
        assert format_date_short(datetime(2026, 1, 5, tzinfo=timezone.utc)) == "Jan 5, 2026"

    def test_formats_in_utc(self):
        dt = datetime(2026, 1, 5, 23, 30, tzinfo=timezone(timedelta(hours=-5)))
        assert format_date_long(dt) == "January 6, 2026"

    def test_none_passthrough(self):
        assert format_date_long(None) is None
        assert format_date_short(None) is None
