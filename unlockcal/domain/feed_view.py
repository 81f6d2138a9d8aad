"""End-to-end composition of one feed refresh.

Mirrors what the unlock page shows: the upcoming list and its stats, the
search-filtered matches and their highlight dates, and the compact
"next events" window.
"""

from __future__ import annotations

import datetime
import logging
from typing import Optional, Union

from pydantic import BaseModel, Field

from unlockcal.calendar.ics_parser import parse_ics
from unlockcal.calendar.unlock_models import CalendarEvent, ParseResult

from . import event_filter
from .activity_classifier import ActivityStats, count_activities
from .pipeline import EventProcessingPipeline, ProcessingContext
from .pipeline_stages import CategoryFilterStage, ChronologicalSortStage, UpcomingFilterStage

logger = logging.getLogger(__name__)

DEFAULT_NEXT_EVENTS_COUNT = 5


class FeedView(BaseModel):
    """Everything the presentation layer needs from one feed pass."""

    upcoming: list[CalendarEvent] = Field(
        default_factory=list, description="Category-matched events from today on, sorted"
    )
    matches: list[CalendarEvent] = Field(
        default_factory=list, description="Upcoming events matching the search term"
    )
    next_events: list[CalendarEvent] = Field(
        default_factory=list, description="First N matches for the compact widget"
    )
    highlight_dates: list[datetime.date] = Field(
        default_factory=list, description="Dates with at least one matching event"
    )
    stats: ActivityStats = Field(default_factory=ActivityStats)
    parse_result: ParseResult = Field(default_factory=ParseResult)


def build_upcoming_pipeline() -> EventProcessingPipeline:
    """Category, upcoming and sort stages; the list stats are computed from."""
    return (
        EventProcessingPipeline()
        .add_stage(CategoryFilterStage())
        .add_stage(UpcomingFilterStage())
        .add_stage(ChronologicalSortStage())
    )


def build_feed_view(
    feed_text: str,
    now: Union[datetime.date, datetime.datetime],
    search_term: Optional[str] = None,
    keywords: Optional[list[str]] = None,
    next_events_count: Optional[int] = DEFAULT_NEXT_EVENTS_COUNT,
    source_name: Optional[str] = None,
) -> FeedView:
    """Parse a feed and run every presentation stage over it.

    Args:
        feed_text: Raw ICS text
        now: Reference time for the upcoming filter
        search_term: Optional free-text filter
        keywords: Category keywords; defaults to Launch/Unstake/Sell
        next_events_count: Size of the next-events window, None for no limit
        source_name: Optional feed name for log messages

    Returns:
        FeedView with all derived lists

    Raises:
        TypeError: If feed_text is not a str
        ValueError: If next_events_count is negative
    """
    if next_events_count is not None and next_events_count < 0:
        raise ValueError(f"next_events_count must be >= 0, got {next_events_count}")

    parsed = parse_ics(feed_text, source_name=source_name)

    context = ProcessingContext(events=list(parsed.events), now=now, keywords=keywords)
    upcoming = build_upcoming_pipeline().process(context).events

    matches = event_filter.filter_by_search(upcoming, search_term)
    next_events = event_filter.truncate(matches, next_events_count)

    view = FeedView(
        upcoming=upcoming,
        matches=matches,
        next_events=next_events,
        highlight_dates=event_filter.event_dates(matches),
        stats=count_activities(upcoming),
        parse_result=parsed,
    )
    logger.info(
        "Feed view built: parsed=%d, upcoming=%d, matches=%d, next=%d",
        parsed.event_count,
        len(upcoming),
        len(matches),
        len(next_events),
    )
    return view
