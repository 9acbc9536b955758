"""Streak and progress statistics over a plan.

All numbers here are derived from the assignment list and are recomputed
after every completion change. The current streak also depends on the day
it is evaluated on, which callers pass in as `today`.
"""

import math
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date

from loguru import logger
from pydantic import BaseModel

from quran_tracker.index.location_index import LocationIndex
from quran_tracker.index.refs import parse_verse_ref
from quran_tracker.plans.types import Assignment

DEFAULT_STREAK_WINDOW_DAYS = 1


@dataclass(frozen=True)
class StreakSummary:
    """Current and best streak of completed assignments.

    Attributes:
        current: Length of the run ending at a completed assignment dated
            today or within the streak window before today
        best: Longest run of consecutive completed assignments in the plan
    """

    current: int
    best: int


class ProgressStats(BaseModel):
    """Derived progress for a plan."""

    current_streak: int = 0
    best_streak: int = 0
    total_completed: int = 0
    total_in_plan: int = 0
    progress_percentage: int = 0
    pages_read: int = 0
    verses_read: int = 0


def compute_streaks(
    assignments: Iterable[Assignment],
    today: date,
    window_days: int = DEFAULT_STREAK_WINDOW_DAYS,
) -> StreakSummary:
    """Compute current and best streaks.

    Assignments are ordered by date (stable). A completed assignment extends
    the running streak and an incomplete one resets it. The running value is
    captured as the current streak at each completed assignment dated between
    `today - window_days` and `today`.

    Args:
        assignments: Plan assignments in any order
        today: Evaluation day
        window_days: How many days before today still count as current

    Returns:
        StreakSummary for the plan
    """
    run = 0
    best = 0
    current = 0
    for assignment in sorted(assignments, key=lambda a: a.date):
        if assignment.completed:
            run += 1
            best = max(best, run)
            if 0 <= (today - assignment.date).days <= window_days:
                current = run
        else:
            run = 0
    return StreakSummary(current=current, best=best)


def progress_percentage(completed: int, total: int) -> int:
    """Whole-number completion percentage, halves rounded up; 0 for an empty plan."""
    if total <= 0:
        return 0
    return math.floor(100 * completed / total + 0.5)


def compute_progress(
    assignments: Iterable[Assignment],
    today: date,
    index: LocationIndex | None = None,
    window_days: int = DEFAULT_STREAK_WINDOW_DAYS,
) -> ProgressStats:
    """Compute streaks, totals and reading volume for a plan.

    Args:
        assignments: Plan assignments
        today: Evaluation day for the current streak
        index: Location index used to count verses read; without one,
            verses_read stays 0
        window_days: Streak window, see compute_streaks

    Returns:
        ProgressStats for the plan
    """
    plan = list(assignments)
    streaks = compute_streaks(plan, today, window_days)
    completed = [a for a in plan if a.completed]

    pages_read = sum(a.to_page - a.from_page + 1 for a in completed)
    verses_read = 0
    if index is not None:
        for a in completed:
            first = parse_verse_ref(a.from_verse)
            last = parse_verse_ref(a.to_verse)
            if first is not None and last is not None:
                verses_read += index.verse_count_between(first, last)

    stats = ProgressStats(
        current_streak=streaks.current,
        best_streak=streaks.best,
        total_completed=len(completed),
        total_in_plan=len(plan),
        progress_percentage=progress_percentage(len(completed), len(plan)),
        pages_read=pages_read,
        verses_read=verses_read,
    )
    logger.debug(
        f"[STREAK] {stats.total_completed}/{stats.total_in_plan} done, "
        f"current={stats.current_streak}, best={stats.best_streak}"
    )
    return stats
