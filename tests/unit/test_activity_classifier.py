"""Unit tests for unlockcal.domain.activity_classifier."""

from datetime import datetime

import pytest

from unlockcal.calendar.unlock_models import ActivityType
from unlockcal.domain.activity_classifier import (
    DEFAULT_KEYWORDS,
    ActivityStats,
    classify_activity,
    count_activities,
)

pytestmark = pytest.mark.unit


class TestClassifyActivity:
    """Tests for classify_activity."""

    @pytest.mark.parametrize(
        ("summary", "expected"),
        [
            ("Launch Agent X", ActivityType.LAUNCH),
            ("UNSTAKE window for Agent Y", ActivityType.UNSTAKE),
            ("Token Sell Event", ActivityType.SELL),
            ("Random Meeting", ActivityType.OTHER),
            ("", ActivityType.OTHER),
        ],
    )
    def test_labels(self, summary, expected):
        assert classify_activity(summary) is expected

    def test_launch_takes_precedence_over_later_keywords(self):
        assert classify_activity("Sell after unstake after launch") is ActivityType.LAUNCH

    def test_unstake_takes_precedence_over_sell(self):
        assert classify_activity("Sell or unstake") is ActivityType.UNSTAKE

    def test_substring_match_inside_words(self):
        assert classify_activity("Relaunched agent") is ActivityType.LAUNCH
        assert classify_activity("Bestseller") is ActivityType.SELL

    def test_equal_summaries_classify_identically(self):
        assert classify_activity("Launch Agent X") is classify_activity("Launch Agent X")

    def test_default_keywords(self):
        assert DEFAULT_KEYWORDS == ("Launch", "Unstake", "Sell")


class TestCountActivities:
    """Tests for activity statistics."""

    def test_counts_per_label(self, make_event):
        events = [
            make_event("Launch A", (2025, 6, 1)),
            make_event("Launch B", (2025, 6, 2)),
            make_event("Unstake C", datetime(2025, 6, 3, 9)),
            make_event("Sell D", (2025, 6, 4)),
            make_event("Meetup", (2025, 6, 5)),
        ]

        assert count_activities(events) == ActivityStats(
            total=5, launches=2, unstakes=1, sells=1, others=1
        )

    def test_empty(self):
        assert count_activities([]) == ActivityStats()
