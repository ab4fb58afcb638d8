"""
Wall-clock time utilities.

All planning happens on the caller's local day, so these helpers work with
naive datetimes anchored at that day's midnight.
"""

import re
from datetime import date, datetime, time, timedelta, timezone

from dayplan.core.exceptions import ValidationError

UTC = timezone.utc
QUARTER_HOUR = timedelta(minutes=15)
END_OF_DAY_CLOCK = "24:00"

_CLOCK_PATTERN = re.compile(r"(\d{2}):(\d{2})")


def start_of_day(day: date) -> datetime:
    """Midnight that opens the given day."""
    if isinstance(day, datetime):
        day = day.date()
    return datetime.combine(day, time.min)


def ceil_to_quarter_hour(value: datetime) -> datetime:
    """
    Round a datetime up to the next exact 15-minute boundary.

    A value already on a boundary (minute divisible by 15, no seconds or
    microseconds) is returned unchanged, so the function is idempotent.

    Example:
        >>> ceil_to_quarter_hour(datetime(2024, 1, 20, 9, 7))
        datetime(2024, 1, 20, 9, 15)
    """
    floored = value.replace(second=0, microsecond=0)
    remainder = floored.minute % 15
    if remainder == 0:
        if floored == value:
            return value
        return floored + QUARTER_HOUR
    return floored + timedelta(minutes=15 - remainder)


def format_clock(value: datetime, day: date | None = None) -> str:
    """
    Format a datetime as a 24-hour "HH:mm" clock string.

    Args:
        value: Datetime to format
        day: Reference day; the midnight closing it is rendered as "24:00"

    Returns:
        Zero-padded clock string
    """
    if day is not None and value == start_of_day(day) + timedelta(days=1):
        return END_OF_DAY_CLOCK
    return value.strftime("%H:%M")


def parse_clock(value: str, day: date) -> datetime:
    """
    Parse an "HH:mm" clock string into a datetime on the given day.

    "24:00" is accepted and means the midnight that ends the day.

    Raises:
        ValidationError: If the string is not a valid clock value
    """
    match = _CLOCK_PATTERN.fullmatch(value or "")
    if not match:
        raise ValidationError(f"Invalid clock value: {value!r} (expected HH:mm)")
    hours, minutes = int(match.group(1)), int(match.group(2))
    if value != END_OF_DAY_CLOCK and (hours > 23 or minutes > 59):
        raise ValidationError(f"Invalid clock value: {value!r} (out of range)")
    return start_of_day(day) + timedelta(hours=hours, minutes=minutes)


def overlaps(
    a_start: datetime,
    a_end: datetime,
    b_start: datetime,
    b_end: datetime,
) -> bool:
    """Half-open overlap test; back-to-back intervals do not overlap."""
    return a_start < b_end and a_end > b_start


def to_wall_clock(value: datetime) -> datetime:
    """Drop tzinfo, keeping the local wall-clock fields."""
    if value.tzinfo is None:
        return value
    return value.replace(tzinfo=None)


def ensure_utc(dt: datetime) -> datetime:
    """
    Ensure datetime is timezone-aware and in UTC.

    Naive values are assumed to already be UTC.
    """
    if dt.tzinfo is None:
        return dt.replace(tzinfo=UTC)
    return dt.astimezone(UTC)
