"""Unit tests for unlockcal.domain.event_filter."""

from datetime import date, datetime, timezone

import pytest

from unlockcal.domain.event_filter import (
    event_dates,
    events_on_date,
    filter_by_category,
    filter_by_search,
    filter_upcoming,
    sort_chronologically,
    truncate,
)

pytestmark = pytest.mark.unit


def _summaries(events):
    return [e.summary for e in events]


class TestFilterByCategory:
    """Tests for the keyword gate."""

    @pytest.mark.smoke
    def test_single_keyword(self, make_event):
        events = [
            make_event("Token Sell Event", (2025, 6, 1)),
            make_event("Random Meeting", (2025, 6, 1)),
        ]

        assert _summaries(filter_by_category(events, {"Sell"})) == ["Token Sell Event"]

    def test_default_keywords(self, make_event):
        events = [
            make_event("launch agent", (2025, 6, 1)),
            make_event("UNSTAKE", (2025, 6, 2)),
            make_event("sell-off", (2025, 6, 3)),
            make_event("AMA session", (2025, 6, 4)),
        ]

        kept = filter_by_category(events)

        assert _summaries(kept) == ["launch agent", "UNSTAKE", "sell-off"]

    def test_every_kept_event_contains_a_keyword(self, make_event):
        keywords = ["Launch", "Airdrop"]
        events = [
            make_event(s, (2025, 6, 1))
            for s in ["Airdrop A", "Launch B", "Sell C", "airdrop d", "Nothing"]
        ]

        for event in filter_by_category(events, keywords):
            assert any(k.lower() in event.summary.lower() for k in keywords)

    def test_empty_keyword_set_drops_everything(self, make_event):
        assert filter_by_category([make_event("Launch", (2025, 6, 1))], []) == []

    def test_input_is_not_mutated(self, make_event):
        events = [make_event("Random", (2025, 6, 1)), make_event("Launch", (2025, 6, 2))]
        snapshot = list(events)
        filter_by_category(events)
        assert events == snapshot


class TestFilterUpcoming:
    """Tests for the reference-day filter."""

    @pytest.mark.smoke
    def test_keeps_only_event_after_now(self, make_event, reference_now):
        events = [
            make_event("Launch past", datetime(2025, 5, 31, 23, 59)),
            make_event("Launch future", datetime(2025, 6, 2, 9, 0)),
        ]

        assert _summaries(filter_upcoming(events, reference_now)) == ["Launch future"]

    def test_earlier_today_still_upcoming(self, make_event, reference_now):
        events = [make_event("Launch this morning", datetime(2025, 6, 1, 8, 0))]
        assert len(filter_upcoming(events, reference_now)) == 1

    def test_all_day_today_is_upcoming(self, make_event, reference_now):
        events = [
            make_event("Launch yesterday", (2025, 5, 31)),
            make_event("Launch today", (2025, 6, 1)),
        ]

        assert _summaries(filter_upcoming(events, reference_now)) == ["Launch today"]

    def test_accepts_date_reference(self, make_event):
        events = [make_event("Launch", (2025, 6, 1))]
        assert len(filter_upcoming(events, date(2025, 6, 1))) == 1
        assert filter_upcoming(events, date(2025, 6, 2)) == []

    def test_aware_reference_uses_its_wall_clock_date(self, make_event):
        now = datetime(2025, 6, 1, 23, 0, tzinfo=timezone.utc)
        events = [make_event("Launch", datetime(2025, 6, 1, 1, 0))]
        assert len(filter_upcoming(events, now)) == 1

    def test_all_kept_events_not_before_reference_day(self, sample_ics_feed, reference_now):
        from unlockcal.calendar.ics_parser import parse_events

        for event in filter_upcoming(parse_events(sample_ics_feed), reference_now):
            assert event.comparison_key() >= datetime(2025, 6, 1)


class TestSortChronologically:
    """Tests for the stable sort stage."""

    def test_sorts_mixed_kinds(self, make_event):
        events = [
            make_event("C", datetime(2025, 6, 2, 9)),
            make_event("A", (2025, 6, 1)),
            make_event("B", datetime(2025, 6, 1, 9)),
        ]

        assert _summaries(sort_chronologically(events)) == ["A", "B", "C"]

    def test_ties_keep_input_order(self, make_event):
        events = [
            make_event("first", datetime(2025, 6, 1, 0, 0)),
            make_event("second", (2025, 6, 1)),
        ]

        assert _summaries(sort_chronologically(events)) == ["first", "second"]


class TestFilterBySearch:
    """Tests for the free-text filter."""

    def test_empty_term_matches_all(self, make_event):
        events = [make_event("Launch", (2025, 6, 1)), make_event("Sell", (2025, 6, 2))]
        assert filter_by_search(events, "") == events
        assert filter_by_search(events, None) == events

    def test_matches_summary_case_insensitive(self, make_event):
        events = [make_event("Launch Agent X", (2025, 6, 1)), make_event("Sell", (2025, 6, 2))]
        assert _summaries(filter_by_search(events, "agent x")) == ["Launch Agent X"]

    def test_matches_formatted_date(self, make_event):
        events = [
            make_event("Launch A", (2025, 6, 1)),
            make_event("Launch B", (2025, 7, 4)),
        ]

        assert _summaries(filter_by_search(events, "july")) == ["Launch B"]
        assert _summaries(filter_by_search(events, "sunday")) == ["Launch A"]

    def test_matches_formatted_time(self, make_event):
        events = [
            make_event("Unstake A", datetime(2025, 6, 1, 15, 0)),
            make_event("Unstake B", datetime(2025, 6, 1, 9, 0)),
        ]

        assert _summaries(filter_by_search(events, "03:00 pm")) == ["Unstake A"]


class TestTruncate:
    """Tests for truncation."""

    def test_keeps_first_n(self, make_event):
        events = [make_event(f"Launch {i}", (2025, 6, i + 1)) for i in range(7)]
        assert _summaries(truncate(events, 5)) == [f"Launch {i}" for i in range(5)]
        assert len(events) == 7

    def test_none_keeps_all(self, make_event):
        events = [make_event("Launch", (2025, 6, 1))]
        assert truncate(events, None) == events

    def test_count_larger_than_list(self, make_event):
        events = [make_event("Launch", (2025, 6, 1))]
        assert truncate(events, 10) == events

    def test_zero(self, make_event):
        assert truncate([make_event("Launch", (2025, 6, 1))], 0) == []

    def test_negative_count_raises(self, make_event):
        with pytest.raises(ValueError):
            truncate([make_event("Launch", (2025, 6, 1))], -1)


class TestDateHelpers:
    """Tests for highlight-date helpers."""

    def test_event_dates_unique_in_order(self, make_event):
        events = [
            make_event("A", (2025, 6, 1)),
            make_event("B", datetime(2025, 6, 1, 15)),
            make_event("C", datetime(2025, 6, 3, 9)),
        ]

        assert event_dates(events) == [date(2025, 6, 1), date(2025, 6, 3)]

    def test_events_on_date(self, make_event):
        events = [
            make_event("A", (2025, 6, 1)),
            make_event("B", datetime(2025, 6, 1, 15)),
            make_event("C", datetime(2025, 6, 3, 9)),
        ]

        assert _summaries(events_on_date(events, date(2025, 6, 1))) == ["A", "B"]
        assert events_on_date(events, date(2025, 6, 2)) == []
        assert _summaries(events_on_date(events, datetime(2025, 6, 3, 23))) == ["C"]
