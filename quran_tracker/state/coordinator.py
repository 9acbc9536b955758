"""Goal coordinator - owner of the active goal, its plan and derived stats.

One coordinator is created at startup and handed to whatever needs it. It
holds the only writable copy of the goal and plan; every command runs to
completion and leaves the derived stats in step with the plan.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import date, datetime

from loguru import logger

from quran_tracker.config.settings import settings
from quran_tracker.index.location_index import LocationIndex, get_location_index
from quran_tracker.metrics.streaks import ProgressStats, compute_progress
from quran_tracker.plans.generator import generate_plan
from quran_tracker.plans.types import Assignment, Goal, GoalValidation
from quran_tracker.plans.validators import validate_goal
from quran_tracker.utils.calendar import to_calendar_day


class GoalCoordinator:
    """Holds the current goal and plan and keeps their statistics current.

    Attributes:
        index: Location index used for plan generation and verse counts
        clock: Returns "now"; injected so streaks can be evaluated on a fixed day
        streak_window_days: Days before today that still count as current
    """

    def __init__(
        self,
        index: LocationIndex | None = None,
        clock: Callable[[], datetime] = datetime.now,
        streak_window_days: int | None = None,
    ) -> None:
        self.index = index or get_location_index()
        self.clock = clock
        self.streak_window_days = settings.streak_window_days if streak_window_days is None else streak_window_days
        self._goal: Goal | None = None
        self._plan: list[Assignment] = []
        self._stats = ProgressStats()
        self._last_updated: datetime | None = None

    # ---- queries -------------------------------------------------------

    @property
    def goal(self) -> Goal | None:
        return self._goal

    @property
    def plan(self) -> list[Assignment]:
        """Copy of the current plan; edits to it do not reach the coordinator."""
        return [a.model_copy() for a in self._plan]

    @property
    def stats(self) -> ProgressStats:
        return self._stats.model_copy()

    @property
    def last_updated(self) -> datetime | None:
        return self._last_updated

    @property
    def progress_percentage(self) -> int:
        return self._stats.progress_percentage

    @property
    def completed_count(self) -> int:
        return self._stats.total_completed

    @property
    def total_count(self) -> int:
        return self._stats.total_in_plan

    def today(self) -> date:
        return to_calendar_day(self.clock())

    def todays_assignment(self) -> Assignment | None:
        """Assignment scheduled for the clock's current day, if any."""
        return self._find(self.today())

    def assignments_between(self, start: date | datetime, end: date | datetime) -> list[Assignment]:
        """Assignments dated within [start, end], for calendar views."""
        first = to_calendar_day(start)
        last = to_calendar_day(end)
        return [a.model_copy() for a in self._plan if first <= a.date <= last]

    def upcoming(self, limit: int = 7) -> list[Assignment]:
        """Next incomplete assignments from today on."""
        today = self.today()
        pending = [a for a in self._plan if a.date >= today and not a.completed]
        return [a.model_copy() for a in pending[: max(limit, 0)]]

    # ---- commands ------------------------------------------------------

    def set_goal(self, goal: Goal) -> GoalValidation:
        """Validate a goal and, if it passes, replace the current goal and plan.

        An invalid goal leaves the current state untouched.

        Returns:
            The validation result
        """
        validation = validate_goal(goal)
        if not validation.valid:
            logger.warning(f"[GOAL] Rejected goal {goal.id}: {'; '.join(validation.errors)}")
            return validation

        self._goal = goal
        self._plan = generate_plan(goal, self.index)
        self._refresh()
        logger.info(f"[GOAL] Goal {goal.id} set with {len(self._plan)} assignments")
        return validation

    def mark_complete(self, day: date | datetime) -> bool:
        """Mark the assignment on `day` complete. Returns False if none matches."""
        return self._set_completed(day, True)

    def mark_incomplete(self, day: date | datetime) -> bool:
        """Mark the assignment on `day` incomplete. Returns False if none matches."""
        return self._set_completed(day, False)

    def update_streaks(self) -> ProgressStats:
        """Recompute derived stats against the clock, e.g. after midnight."""
        self._stats = self._compute()
        return self.stats

    def clear_plan(self) -> None:
        """Drop the goal, the plan and all derived stats."""
        self._goal = None
        self._plan = []
        self._stats = ProgressStats()
        self._last_updated = None
        logger.info("[GOAL] Plan cleared")

    # ---- internals -----------------------------------------------------

    def _find(self, day: date) -> Assignment | None:
        for assignment in self._plan:
            if assignment.date == day:
                return assignment
        return None

    def _set_completed(self, day: date | datetime, completed: bool) -> bool:
        assignment = self._find(to_calendar_day(day))
        if assignment is None:
            logger.debug(f"[GOAL] No assignment on {to_calendar_day(day)}")
            return False
        assignment.completed = completed
        self._refresh()
        logger.debug(f"[GOAL] Assignment on {assignment.date} marked {'complete' if completed else 'incomplete'}")
        return True

    def _refresh(self) -> None:
        self._stats = self._compute()
        self._last_updated = self.clock()

    def _compute(self) -> ProgressStats:
        return compute_progress(self._plan, self.today(), self.index, self.streak_window_days)
