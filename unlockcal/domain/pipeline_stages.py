"""Pipeline stages wrapping the event_filter functions.

The default order is category -> upcoming -> sort -> search -> truncation.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Optional

from unlockcal.calendar.unlock_models import CalendarEvent

from . import event_filter
from .pipeline import EventProcessingPipeline, ProcessingContext, ProcessingResult

logger = logging.getLogger(__name__)


class _EventListStage:
    """Shared bookkeeping for stages that map one event list to another."""

    _name = "EventList"

    @property
    def name(self) -> str:
        """Stage name for logging."""
        return self._name

    def _apply(
        self,
        context: ProcessingContext,
        transform: Callable[[list[CalendarEvent]], list[CalendarEvent]],
    ) -> ProcessingResult:
        result = ProcessingResult(stage_name=self.name, events_in=len(context.events))
        context.events = transform(context.events)
        result.events = context.events
        result.events_out = len(context.events)
        result.events_filtered = result.events_in - result.events_out
        if result.events_filtered > 0:
            logger.debug(
                "%s: %s -> %s events", self.name, result.events_in, result.events_out
            )
        return result


class CategoryFilterStage(_EventListStage):
    """Drop events whose summary matches none of the configured keywords."""

    _name = "CategoryFilter"

    def __init__(self, keywords: Optional[list[str]] = None) -> None:
        """Initialize category stage.

        Args:
            keywords: Keywords to match; context.keywords wins when set
        """
        self.keywords = keywords

    def process(self, context: ProcessingContext) -> ProcessingResult:
        keywords = context.keywords if context.keywords is not None else self.keywords
        return self._apply(context, lambda events: event_filter.filter_by_category(events, keywords))


class UpcomingFilterStage(_EventListStage):
    """Keep events on or after the day of ``context.now``."""

    _name = "UpcomingFilter"

    def process(self, context: ProcessingContext) -> ProcessingResult:
        now = context.now
        if now is None:
            raise ValueError("UpcomingFilterStage requires context.now to be set")
        return self._apply(context, lambda events: event_filter.filter_upcoming(events, now))


class ChronologicalSortStage(_EventListStage):
    """Stable ascending sort by start."""

    _name = "ChronologicalSort"

    def process(self, context: ProcessingContext) -> ProcessingResult:
        return self._apply(context, event_filter.sort_chronologically)


class SearchFilterStage(_EventListStage):
    """Keep events whose summary or display date contains the search term."""

    _name = "SearchFilter"

    def __init__(self, term: Optional[str] = None) -> None:
        self.term = term

    def process(self, context: ProcessingContext) -> ProcessingResult:
        term = context.search_term if context.search_term is not None else self.term
        return self._apply(context, lambda events: event_filter.filter_by_search(events, term))


class TruncationStage(_EventListStage):
    """Keep only the first N events."""

    _name = "Truncation"

    def __init__(self, limit: Optional[int] = None) -> None:
        """Initialize truncation stage.

        Args:
            limit: Maximum events to keep; context.limit wins when set

        Raises:
            ValueError: If limit is negative
        """
        if limit is not None and limit < 0:
            raise ValueError(f"Truncation limit must be >= 0, got {limit}")
        self.limit = limit

    def process(self, context: ProcessingContext) -> ProcessingResult:
        limit = context.limit if context.limit is not None else self.limit
        return self._apply(context, lambda events: event_filter.truncate(events, limit))


def build_default_pipeline() -> EventProcessingPipeline:
    """Category, upcoming, sort, search and truncation stages in that order."""
    return (
        EventProcessingPipeline()
        .add_stage(CategoryFilterStage())
        .add_stage(UpcomingFilterStage())
        .add_stage(ChronologicalSortStage())
        .add_stage(SearchFilterStage())
        .add_stage(TruncationStage())
    )
