"""Category, upcoming, search and truncation stages for event lists.

Every function here returns a new list and leaves its input untouched, so
callers can compose any subset (stats only need the category stage, the
"next events" widget needs all of them).
"""

from __future__ import annotations

import datetime
import logging
from collections.abc import Iterable, Sequence
from typing import Optional, Union

from unlockcal.calendar.datetime_utils import format_display_date, reference_day
from unlockcal.calendar.ics_parser import sort_by_start
from unlockcal.calendar.unlock_models import CalendarEvent

from .activity_classifier import DEFAULT_KEYWORDS

logger = logging.getLogger(__name__)


def filter_by_category(
    events: Iterable[CalendarEvent],
    keywords: Optional[Iterable[str]] = None,
) -> list[CalendarEvent]:
    """Keep events whose summary contains at least one keyword.

    Args:
        events: Events to filter
        keywords: Case-insensitive keywords; defaults to Launch/Unstake/Sell

    Returns:
        Events matching any keyword, in input order
    """
    lowered = [k.lower() for k in (DEFAULT_KEYWORDS if keywords is None else keywords)]
    kept = [e for e in events if any(k in e.summary.lower() for k in lowered)]
    logger.debug("Category filter kept %d events for keywords %s", len(kept), lowered)
    return kept


def filter_upcoming(
    events: Iterable[CalendarEvent],
    now: Union[datetime.date, datetime.datetime],
) -> list[CalendarEvent]:
    """Keep events starting on or after the reference day.

    The cutoff is midnight of ``now``'s calendar date, so anything earlier
    today still counts as upcoming.

    Args:
        events: Events to filter
        now: Caller-supplied reference time

    Returns:
        Events whose start is not before the reference day
    """
    cutoff = reference_day(now)
    kept = [e for e in events if e.comparison_key() >= cutoff]
    logger.debug("Upcoming filter kept %d events on or after %s", len(kept), cutoff.date())
    return kept


def sort_chronologically(events: Iterable[CalendarEvent]) -> list[CalendarEvent]:
    """Stable ascending sort by start."""
    return sort_by_start(list(events))


def filter_by_search(
    events: Iterable[CalendarEvent],
    term: Optional[str] = None,
) -> list[CalendarEvent]:
    """Keep events whose summary or display date contains the term.

    Args:
        events: Events to filter
        term: Case-insensitive search text; empty or None matches everything

    Returns:
        Matching events, in input order
    """
    if not term:
        return list(events)

    needle = term.lower()
    return [
        e
        for e in events
        if needle in e.summary.lower() or needle in format_display_date(e.start).lower()
    ]


def truncate(events: Sequence[CalendarEvent], count: Optional[int] = None) -> list[CalendarEvent]:
    """Return the first ``count`` events, or all of them when count is None.

    Raises:
        ValueError: If count is negative
    """
    if count is None:
        return list(events)
    if count < 0:
        raise ValueError(f"Truncation count must be >= 0, got {count}")
    return list(events[:count])


def event_dates(events: Iterable[CalendarEvent]) -> list[datetime.date]:
    """Calendar dates carrying at least one event, first-seen order, no duplicates."""
    seen: dict[datetime.date, None] = {}
    for event in events:
        seen.setdefault(event.calendar_date(), None)
    return list(seen)


def events_on_date(events: Iterable[CalendarEvent], day: datetime.date) -> list[CalendarEvent]:
    """Events whose start falls on ``day``."""
    if isinstance(day, datetime.datetime):
        day = day.date()
    return [e for e in events if e.calendar_date() == day]
