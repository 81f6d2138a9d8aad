"""Keyword classification of event summaries into activity types."""

from __future__ import annotations

from collections.abc import Iterable

from pydantic import BaseModel

from unlockcal.calendar.unlock_models import ActivityType, CalendarEvent

# Checked in order; the first keyword contained in the summary wins.
ACTIVITY_KEYWORDS: tuple[tuple[str, ActivityType], ...] = (
    ("launch", ActivityType.LAUNCH),
    ("unstake", ActivityType.UNSTAKE),
    ("sell", ActivityType.SELL),
)

DEFAULT_KEYWORDS: tuple[str, ...] = tuple(t.value for _, t in ACTIVITY_KEYWORDS)


def classify_activity(summary: str) -> ActivityType:
    """Map a summary to its activity type by case-insensitive containment.

    Examples:
        >>> classify_activity("Launch Agent X")
        <ActivityType.LAUNCH: 'Launch'>
        >>> classify_activity("Weekly sync")
        <ActivityType.OTHER: 'Other'>
    """
    lowered = summary.lower()
    for keyword, activity in ACTIVITY_KEYWORDS:
        if keyword in lowered:
            return activity
    return ActivityType.OTHER


class ActivityStats(BaseModel):
    """Event counts per activity type."""

    total: int = 0
    launches: int = 0
    unstakes: int = 0
    sells: int = 0
    others: int = 0


def count_activities(events: Iterable[CalendarEvent]) -> ActivityStats:
    """Tally events by classifier label."""
    stats = ActivityStats()
    for event in events:
        stats.total += 1
        activity = classify_activity(event.summary)
        if activity is ActivityType.LAUNCH:
            stats.launches += 1
        elif activity is ActivityType.UNSTAKE:
            stats.unstakes += 1
        elif activity is ActivityType.SELL:
            stats.sells += 1
        else:
            stats.others += 1
    return stats
