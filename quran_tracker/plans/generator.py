"""Plan generation - goal to dated reading assignments.

Generation runs in three steps:
1. Resolve how many units the goal covers (pages, parts, chapters or verses)
2. Pick reading days: active weekdays from the start date, enough to cover
   the units at the daily pace, cut off at the deadline
3. Walk a cursor through the scope, one day's worth per reading day

The generator trusts its caller to have validated the goal. It never raises
for bad input: degenerate goals produce an empty plan, and unresolvable
lookups fall back to the start of the text.
"""

import math

from loguru import logger

from quran_tracker.index.location_index import LocationIndex, get_location_index
from quran_tracker.index.refs import VerseRef
from quran_tracker.index.types import ScopeSpan
from quran_tracker.plans.schedule import enumerate_reading_dates
from quran_tracker.plans.types import Assignment, Goal, ReadingUnit


def resolve_total_units(goal: Goal, index: LocationIndex) -> int:
    """Count the units of `goal.unit` the goal's scope covers.

    Returns:
        Unit count, 0 when the scope cannot be resolved
    """
    scope = goal.scope
    unit = goal.unit

    if scope.kind == "whole":
        if unit == ReadingUnit.PAGE:
            return index.total_pages
        if unit == ReadingUnit.PART:
            return index.total_parts
        if unit == ReadingUnit.CHAPTER:
            return index.total_chapters
        return index.total_verses

    if scope.index is None:
        return 0

    if scope.kind == "part":
        part = index.part_bounds(scope.index)
        if part is None:
            return 0
        if unit == ReadingUnit.PAGE:
            return part.end_page - part.start_page + 1
        return 1

    if scope.kind == "chapter":
        chapter = index.chapter_bounds(scope.index)
        if chapter is None:
            return 0
        if unit == ReadingUnit.PAGE:
            return chapter.end_page - chapter.start_page + 1
        if unit == ReadingUnit.VERSE:
            return chapter.verse_count
        return 1

    return 0


def generate_plan(goal: Goal, index: LocationIndex | None = None) -> list[Assignment]:
    """Generate the full reading plan for a goal.

    Args:
        goal: Goal to plan (expected to be validated)
        index: Location index; defaults to the shared configured index

    Returns:
        Assignments in strictly increasing date order, or an empty list when
        there is nothing to schedule
    """
    index = index or get_location_index()

    start = goal.start_day
    if start is None or goal.daily_amount <= 0:
        logger.debug(f"[PLAN] Goal {goal.id} has no usable start date or pace; empty plan")
        return []

    total_units = resolve_total_units(goal, index)
    if total_units <= 0:
        logger.debug(f"[PLAN] Goal {goal.id} resolved to zero units; empty plan")
        return []

    days_needed = math.ceil(total_units / goal.daily_amount)
    reading_dates = enumerate_reading_dates(start, goal.deadline_day, goal.active_weekdays, days_needed)
    if not reading_dates:
        logger.debug(f"[PLAN] Goal {goal.id} has no reading days before its deadline; empty plan")
        return []

    span = index.resolve_scope(goal.scope)
    if goal.unit == ReadingUnit.VERSE:
        assignments = _distribute_verses(reading_dates, span, goal.daily_amount, index)
    else:
        assignments = _distribute_pages(reading_dates, span, goal.daily_amount, index)

    logger.info(
        f"[PLAN] Generated {len(assignments)} assignments for goal {goal.id} "
        f"({goal.scope.kind}, {goal.daily_amount} {goal.unit}/day, {total_units} units)"
    )
    if len(assignments) < days_needed:
        logger.info(f"[PLAN] Goal {goal.id} needs {days_needed} reading days; only {len(assignments)} fit")
    return assignments


def _distribute_pages(dates, span: ScopeSpan, amount: int, index: LocationIndex) -> list[Assignment]:
    """Consume `amount` pages per reading day.

    Part and chapter units are paced in pages as well.
    """
    assignments: list[Assignment] = []
    cursor = span.start_page
    for day in dates:
        last_page = min(cursor + amount - 1, span.end_page)
        first_verse, last_verse = index.verse_span_of_pages(cursor, last_page)
        assignments.append(
            Assignment(
                date=day,
                from_verse=str(span.clamp(first_verse)),
                to_verse=str(span.clamp(last_verse)),
                from_page=cursor,
                to_page=last_page,
            )
        )
        cursor = last_page + 1
        if cursor > span.end_page:
            break
    return assignments


def _distribute_verses(dates, span: ScopeSpan, amount: int, index: LocationIndex) -> list[Assignment]:
    """Consume `amount` verses per reading day, rolling across chapters."""
    assignments: list[Assignment] = []
    cursor: VerseRef = span.start_verse
    for day in dates:
        last_verse = min(index.advance_verse(cursor, amount - 1), span.end_verse)
        assignments.append(
            Assignment(
                date=day,
                from_verse=str(cursor),
                to_verse=str(last_verse),
                from_page=index.page_of_ref(cursor),
                to_page=index.page_of_ref(last_verse),
            )
        )
        if last_verse >= span.end_verse:
            break
        cursor = index.advance_verse(last_verse, 1)
    return assignments
