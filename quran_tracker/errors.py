"""Error types for the tracker.

Validation problems with a goal are reported as messages, not raised. These
exceptions cover conditions the caller cannot recover from by editing input.
"""


class TrackerError(Exception):
    """Base exception for all tracker errors."""

    pass


class LocationIndexError(TrackerError):
    """Raised when the location dataset is missing or structurally invalid."""

    pass
