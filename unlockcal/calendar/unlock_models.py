"""Data models for parsed unlock calendar events."""

from __future__ import annotations

import datetime
from enum import Enum
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator, model_validator


class ActivityType(str, Enum):
    """Activity categories tracked on the unlock calendar."""

    LAUNCH = "Launch"
    UNSTAKE = "Unstake"
    SELL = "Sell"
    OTHER = "Other"


class DateOnly(BaseModel):
    """All-day start: a bare calendar date with no time of day or zone."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["date"] = "date"
    value: datetime.date

    @field_validator("value", mode="before")
    @classmethod
    def keep_date_part(cls, value: object) -> object:
        # datetime is a date subclass; keep only the calendar part
        if isinstance(value, datetime.datetime):
            return value.date()
        return value

    @classmethod
    def of(cls, year: int, month: int, day: int) -> DateOnly:
        """Build from year, month and day."""
        return cls(value=datetime.date(year, month, day))

    @property
    def is_all_day(self) -> bool:
        return True

    def calendar_date(self) -> datetime.date:
        return self.value

    def comparison_key(self) -> datetime.datetime:
        """Midnight of the date, so all-day events sort before timed ones that day."""
        return datetime.datetime.combine(self.value, datetime.time.min)


class DateTime(BaseModel):
    """Timed start: a naive local wall-clock instant."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["datetime"] = "datetime"
    value: datetime.datetime

    @field_validator("value")
    @classmethod
    def drop_offset(cls, value: datetime.datetime) -> datetime.datetime:
        # Offsets are never retained; the wall-clock fields are kept as-is.
        if value.tzinfo is not None:
            return value.replace(tzinfo=None)
        return value

    @classmethod
    def of(
        cls,
        year: int,
        month: int,
        day: int,
        hour: int = 0,
        minute: int = 0,
        second: int = 0,
    ) -> DateTime:
        """Build from decomposed wall-clock fields."""
        return cls(value=datetime.datetime(year, month, day, hour, minute, second))

    @property
    def is_all_day(self) -> bool:
        return False

    def calendar_date(self) -> datetime.date:
        return self.value.date()

    def comparison_key(self) -> datetime.datetime:
        return self.value


EventStart = Annotated[Union[DateOnly, DateTime], Field(discriminator="kind")]


class CalendarEvent(BaseModel):
    """A single VEVENT materialized from the feed."""

    model_config = ConfigDict(frozen=True)

    summary: str = Field(..., min_length=1, description="Event title")
    start: EventStart = Field(..., description="All-day date or naive timed start")
    all_day: bool = Field(..., description="True when start is a DateOnly")
    description: Optional[str] = Field(default=None, description="Free-form event text")

    @model_validator(mode="after")
    def check_all_day_matches_start(self) -> CalendarEvent:
        if self.all_day != self.start.is_all_day:
            raise ValueError(
                f"all_day={self.all_day} disagrees with start kind {self.start.kind!r}"
            )
        return self

    @classmethod
    def create(
        cls,
        summary: str,
        start: Union[DateOnly, DateTime],
        description: Optional[str] = None,
    ) -> CalendarEvent:
        """Build an event deriving ``all_day`` from the start tag."""
        return cls(
            summary=summary,
            start=start,
            all_day=start.is_all_day,
            description=description,
        )

    @computed_field  # type: ignore[prop-decorator]
    @property
    def activity_type(self) -> ActivityType:
        """Classifier label, recomputed from the summary on every access."""
        from unlockcal.domain.activity_classifier import classify_activity

        return classify_activity(self.summary)

    def comparison_key(self) -> datetime.datetime:
        """Value used for ordering and the upcoming filter."""
        return self.start.comparison_key()

    def calendar_date(self) -> datetime.date:
        return self.start.calendar_date()


class ParseResult(BaseModel):
    """Outcome of one parse pass over a feed, with feed-quality counters."""

    events: list[CalendarEvent] = Field(default_factory=list, description="Sorted parsed events")

    total_blocks: int = 0
    dropped_blocks: int = Field(default=0, description="Blocks discarded for lacking a summary")
    undated_blocks: int = Field(
        default=0, description="Blocks with a summary but no usable DTSTART"
    )
    unterminated_blocks: int = Field(
        default=0, description="BEGIN:VEVENT blocks never closed by END:VEVENT"
    )
    skipped_tokens: int = Field(default=0, description="DTSTART tokens that were empty or unparseable")
    folded_lines: int = Field(default=0, description="Continuation lines seen but not unfolded")

    warnings: list[str] = Field(default_factory=list)

    @property
    def event_count(self) -> int:
        return len(self.events)

    @property
    def discarded_blocks(self) -> int:
        """Total event blocks that did not become a CalendarEvent."""
        return self.dropped_blocks + self.undated_blocks + self.unterminated_blocks

    def add_warning(self, warning: str) -> None:
        """Add a warning message."""
        self.warnings.append(warning)
