"""Goal and assignment models.

A goal names what to read (scope), how to pace it (unit and daily amount) and
when (start date, optional deadline, active weekdays). The model accepts
values that break the goal rules (zero daily amount, no weekdays, a part
number of 31) so that `validate_goal` can report every problem at once.

Weekday indices are 0 = Sunday ... 6 = Saturday.
"""

from datetime import date as date_type
from enum import StrEnum
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from quran_tracker.utils.calendar import coerce_calendar_date


class ReadingUnit(StrEnum):
    PAGE = "page"
    PART = "part"
    CHAPTER = "chapter"
    VERSE = "verse"


class WholeText(BaseModel):
    """The whole text, first page to last."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    kind: Literal["whole"] = "whole"


class NamedPart(BaseModel):
    """One part (juz), 1-30."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    kind: Literal["part"] = "part"
    index: int | None = None


class NamedChapter(BaseModel):
    """One chapter (surah), 1-114."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    kind: Literal["chapter"] = "chapter"
    index: int | None = None


Scope = Annotated[WholeText | NamedPart | NamedChapter, Field(discriminator="kind")]


class Goal(BaseModel):
    """A reading goal. Immutable; edits replace the whole goal.

    Attributes:
        id: Opaque goal identifier
        scope: What to read
        unit: Pacing unit for `daily_amount`
        daily_amount: Units to read per reading day
        start_date: First candidate reading day. A string that is not a date is
            kept as-is so validation can flag it.
        deadline: Optional last reading day (same parsing rules as start_date)
        active_weekdays: Weekdays to read on, 0 = Sunday ... 6 = Saturday
    """

    model_config = ConfigDict(frozen=True)

    id: str
    scope: Scope = Field(default_factory=WholeText)
    unit: ReadingUnit = ReadingUnit.PAGE
    daily_amount: int
    start_date: date_type | str
    deadline: date_type | str | None = None
    active_weekdays: frozenset[int]

    @field_validator("start_date", "deadline", mode="before")
    @classmethod
    def normalize_calendar_date(cls, value: object) -> object:
        """Reduce datetimes and ISO strings to calendar dates; keep anything else readable."""
        if value is None:
            return None
        parsed = coerce_calendar_date(value)
        if parsed is not None:
            return parsed
        return value if isinstance(value, str) else str(value)

    @property
    def start_day(self) -> date_type | None:
        """Start date, or None if it could not be parsed."""
        return self.start_date if isinstance(self.start_date, date_type) else None

    @property
    def deadline_day(self) -> date_type | None:
        """Deadline, or None if absent or unparseable."""
        return self.deadline if isinstance(self.deadline, date_type) else None


class Assignment(BaseModel):
    """One scheduled reading day.

    Attributes:
        date: Calendar date of the reading
        from_verse: First verse, "<chapter>:<verse>"
        to_verse: Last verse, "<chapter>:<verse>"
        from_page: First page
        to_page: Last page
        completed: Whether the reading was done
        is_catch_up: Reserved for make-up days; always False for generated plans
    """

    date: date_type
    from_verse: str
    to_verse: str
    from_page: int
    to_page: int
    completed: bool = False
    is_catch_up: bool = False


class GoalValidation(BaseModel):
    """Outcome of validating a goal; errors are in check order."""

    valid: bool
    errors: list[str] = Field(default_factory=list)
