"""Calendar-day helpers.

Weekday indices follow the goal convention: 0 = Sunday ... 6 = Saturday.
"""

from datetime import date, datetime

ALL_WEEKDAYS: frozenset[int] = frozenset(range(7))


def weekday_index(d: date) -> int:
    """Return the Sunday-based weekday index of d."""
    return d.isoweekday() % 7


def to_calendar_day(value: date | datetime) -> date:
    """Drop the time-of-day from a datetime; dates pass through."""
    if isinstance(value, datetime):
        return value.date()
    return value


def coerce_calendar_date(value: object) -> date | None:
    """Parse a calendar date from a date, datetime or ISO string.

    Returns None when the value cannot be read as a date.
    """
    if isinstance(value, (date, datetime)):
        return to_calendar_day(value)
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            if "T" in text or " " in text:
                return datetime.fromisoformat(text.replace("Z", "+00:00")).date()
            return date.fromisoformat(text)
        except ValueError:
            return None
    return None
