"""Plans module - reading goals and the plans generated from them.

This module provides:
- Goal, scope and assignment models
- Goal validation that reports every violated rule
- Reading-day enumeration over active weekdays with a deadline cutoff
- Plan generation in pages, parts, chapters or verses
"""

from quran_tracker.plans.generator import generate_plan, resolve_total_units
from quran_tracker.plans.schedule import enumerate_reading_dates
from quran_tracker.plans.types import (
    Assignment,
    Goal,
    GoalValidation,
    NamedChapter,
    NamedPart,
    ReadingUnit,
    Scope,
    WholeText,
)
from quran_tracker.plans.validators import validate_goal

__all__ = [
    "Assignment",
    "Goal",
    "GoalValidation",
    "NamedChapter",
    "NamedPart",
    "ReadingUnit",
    "Scope",
    "WholeText",
    "enumerate_reading_dates",
    "generate_plan",
    "resolve_total_units",
    "validate_goal",
]
