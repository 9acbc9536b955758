"""Goal validation.

Checks every rule and collects all violations instead of stopping at the
first one. Messages appear in the order the checks run:

1. weekday selection
2. start date
3. deadline
4. daily amount
5. part / chapter number

Validation never raises; the caller decides whether to block the goal.
"""

from loguru import logger

from quran_tracker.plans.types import Goal, GoalValidation
from quran_tracker.utils.calendar import ALL_WEEKDAYS

MAX_PART = 30
MAX_CHAPTER = 114


def validate_goal(goal: Goal) -> GoalValidation:
    """Validate a goal before generating its plan.

    Args:
        goal: Goal to check

    Returns:
        GoalValidation with valid=True when no rule is violated
    """
    errors: list[str] = []

    if not goal.active_weekdays:
        errors.append("At least one day of the week must be selected")
    elif not goal.active_weekdays <= ALL_WEEKDAYS:
        errors.append("Days of the week must be between 0 (Sunday) and 6 (Saturday)")

    start = goal.start_day
    if start is None:
        errors.append("Invalid start date")

    if goal.deadline is not None:
        deadline = goal.deadline_day
        if deadline is None:
            errors.append("Invalid deadline")
        elif start is not None and deadline < start:
            errors.append("Deadline must be after start date")

    if goal.daily_amount <= 0:
        errors.append("Daily amount must be greater than 0")

    scope = goal.scope
    if scope.kind in ("part", "chapter"):
        if scope.index is None:
            errors.append("Target value is required for specific part or chapter goals")
        elif scope.kind == "part" and not 1 <= scope.index <= MAX_PART:
            errors.append(f"Part number must be between 1 and {MAX_PART}")
        elif scope.kind == "chapter" and not 1 <= scope.index <= MAX_CHAPTER:
            errors.append(f"Chapter number must be between 1 and {MAX_CHAPTER}")

    if errors:
        logger.debug(f"[GOAL] Goal {goal.id} failed validation: {errors}")

    return GoalValidation(valid=not errors, errors=errors)
