"""Tests for time statistics."""

import pytest
from conftest import FIXED_NOW, make_entry

from did.model.date_range import DateRangeType
from did.query.filter import create_filter
from did.repository import entry as entry_repository
from did.service.stats import NO_PROJECT, NO_TAGS, calculate_stats, summarize_entries
from did.time import resolve_date_range

THIS_WEEK = resolve_date_range(DateRangeType.THIS_WEEK, FIXED_NOW)


def _groups(groups):
    return [(g["name"], g["minutes"], g["entry_count"]) for g in groups]


class TestSummarizeEntries:
    def test_totals_and_groups(self):
        entries = [
            make_entry("a", 60, project="acme", tags=["dev", "review"]),
            make_entry("b", 30, project="acme", tags=["dev"]),
            make_entry("c", 90, timestamp=FIXED_NOW.add(days=1)),
            make_entry("d", 30, project="beta", timestamp=FIXED_NOW.add(days=2)),
        ]

        stats = summarize_entries(entries, THIS_WEEK)

        assert stats["total_minutes"] == 210
        assert stats["entry_count"] == 4
        assert stats["days_tracked"] == 3
        assert stats["average_minutes_per_day"] == pytest.approx(30.0)
        assert _groups(stats["projects"]) == [
            (NO_PROJECT, 90, 1),
            ("acme", 90, 2),
            ("beta", 30, 1),
        ]
        assert _groups(stats["tags"]) == [
            (NO_TAGS, 120, 2),
            ("dev", 90, 2),
            ("review", 60, 1),
        ]

    def test_ignores_entries_outside_range_and_deleted(self):
        entries = [
            make_entry("old", timestamp=FIXED_NOW.subtract(days=7)),
            make_entry("gone", deleted_at=FIXED_NOW),
            make_entry("kept", 15),
        ]

        stats = summarize_entries(entries, THIS_WEEK)

        assert stats["total_minutes"] == 15
        assert stats["entry_count"] == 1

    def test_empty(self):
        stats = summarize_entries([], THIS_WEEK)
        assert stats["total_minutes"] == 0
        assert stats["days_tracked"] == 0
        assert stats["average_minutes_per_day"] == 0
        assert stats["projects"] == []
        assert stats["tags"] == []

    def test_days_follow_range_timezone(self):
        now = FIXED_NOW.in_tz("America/New_York")
        week = resolve_date_range(DateRangeType.THIS_WEEK, now)
        # Two UTC dates, both on Monday in New York
        entries = [
            make_entry("a", timestamp=FIXED_NOW.set(hour=6)),
            make_entry("b", timestamp=FIXED_NOW.add(days=1).set(hour=3)),
        ]
        assert summarize_entries(entries, week)["days_tracked"] == 1


class TestCalculateStats:
    def test_reads_store_and_filters(self, store):
        store.path.write_bytes(
            b"".join(
                entry_repository.serialize_entry(e) + b"\n"
                for e in [
                    make_entry("a", 60, project="acme"),
                    make_entry("b", 45, project="beta"),
                ]
            )
            + b"not json\n"
        )

        stats = calculate_stats(store, THIS_WEEK, create_filter(project="acme"))

        assert stats["total_minutes"] == 60
        assert _groups(stats["projects"]) == [("acme", 60, 1)]
