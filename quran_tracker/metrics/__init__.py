"""Derived plan statistics: streaks, totals and progress."""

from quran_tracker.metrics.streaks import (
    ProgressStats,
    StreakSummary,
    compute_progress,
    compute_streaks,
    progress_percentage,
)

__all__ = [
    "ProgressStats",
    "StreakSummary",
    "compute_progress",
    "compute_streaks",
    "progress_percentage",
]
