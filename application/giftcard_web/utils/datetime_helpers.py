"""
Utility functions for date parsing, formatting and day arithmetic.
"""

from datetime import date, datetime, timedelta, timezone
from typing import Optional, Union

ONE_DAY = timedelta(days=1)


def get_utc_now() -> datetime:
    """
    Get current datetime in UTC.
    Returns:
        Current timezone-aware datetime
    """
    return datetime.now(timezone.utc)


def parse_api_datetime(value: Union[str, date, datetime, None]) -> Optional[datetime]:
    """
    Parse a date or datetime as sent by the gift card API.

    Accepts ISO strings with or without a time part (a trailing "Z" is
    understood), as well as date/datetime objects. Naive values are taken
    to be UTC.

    Returns:
        Timezone-aware datetime, or None if the value cannot be parsed
    """
    if value is None:
        return None

    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            value = datetime.fromisoformat(text.replace('Z', '+00:00'))
        except ValueError:
            try:
                value = datetime.strptime(text, '%Y-%m-%d %H:%M:%S')
            except ValueError:
                return None

    if isinstance(value, datetime):
        dt = value
    elif isinstance(value, date):
        dt = datetime(value.year, value.month, value.day)
    else:
        return None

    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt


def days_until(target: datetime, now: Optional[datetime] = None) -> int:
    """
    Whole days from now until target, truncated toward zero.

    A target later today (or earlier today, less than 24h ago) gives 0;
    negative values mean the target lies at least one full day in the past.
    """
    now = now or get_utc_now()
    return int((target - now) / ONE_DAY)


def format_date_long(dt: Optional[datetime]) -> Optional[str]:
    """
    Format like "January 5, 2026".
    """
    if dt is None:
        return None
    dt = dt.astimezone(timezone.utc)
    return f"{dt.strftime('%B')} {dt.day}, {dt.year}"


def format_date_short(dt: Optional[datetime]) -> Optional[str]:
    """Format like "Jan 5, 2026"."""
    if dt is None:
        return None
    dt = dt.astimezone(timezone.utc)
    return f"{dt.strftime('%b')} {dt.day}, {dt.year}"
