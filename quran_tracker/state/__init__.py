"""Stateful coordination of the active goal and plan."""

from quran_tracker.state.coordinator import GoalCoordinator

__all__ = ["GoalCoordinator"]
