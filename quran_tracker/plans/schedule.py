"""Reading-day enumeration."""

from collections.abc import Collection
from datetime import date, timedelta

from quran_tracker.utils.calendar import weekday_index

# Upper bound on calendar days walked per reading day needed
MAX_DAYS_PER_READING_DAY = 10


def enumerate_reading_dates(
    start: date,
    deadline: date | None,
    active_weekdays: Collection[int],
    days_needed: int,
) -> list[date]:
    """Collect reading days walking forward from start.

    A day qualifies when its weekday is active. Walking stops once
    `days_needed` days are collected, or at the first qualifying day past the
    deadline (that day is not included). The walk is capped at
    `MAX_DAYS_PER_READING_DAY * days_needed` calendar days.

    Args:
        start: First candidate day
        deadline: Last allowed reading day, or None
        active_weekdays: Weekday indices, 0 = Sunday ... 6 = Saturday
        days_needed: Number of reading days wanted

    Returns:
        Strictly increasing list of reading days
    """
    dates: list[date] = []
    if days_needed <= 0:
        return dates

    current = start
    max_iterations = days_needed * MAX_DAYS_PER_READING_DAY
    iterations = 0
    while len(dates) < days_needed and iterations < max_iterations:
        iterations += 1
        if weekday_index(current) in active_weekdays:
            if deadline is not None and current > deadline:
                break
            dates.append(current)
        current += timedelta(days=1)

    return dates
