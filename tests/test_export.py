"""Tests for JSON and CSV export."""

import csv
import io
import json

from conftest import FIXED_NOW, make_entry

from did.model.date_range import DateRangeType
from did.query.filter import create_filter
from did.repository import entry as entry_repository
from did.service.entry import list_entries
from did.service.export import CSV_HEADERS, export_csv, export_json
from did.time import resolve_date_range


def _write(store, *entries) -> None:
    store.path.write_bytes(
        b"".join(entry_repository.serialize_entry(e) + b"\n" for e in entries)
    )


class TestExportJson:
    def test_all_active_entries_by_default(self, store):
        _write(
            store,
            make_entry("old", 30, timestamp=FIXED_NOW.subtract(days=40)),
            make_entry("gone", deleted_at=FIXED_NOW),
            make_entry("new", 90, project="acme", tags=["dev"]),
        )

        document = json.loads(export_json(list_entries(store, None), FIXED_NOW))

        assert document["metadata"] == {
            "export_timestamp": "2024-01-15T12:00:00+00:00",
            "total_entries": 2,
            "filter_criteria": {},
        }
        assert [e["description"] for e in document["entries"]] == ["old", "new"]
        assert document["entries"][1]["project"] == "acme"
        assert document["entries"][1]["tags"] == ["dev"]
        assert "deleted_at" not in document["entries"][1]

    def test_records_range_and_filters(self, store):
        _write(
            store,
            make_entry("a", project="acme", tags=["x"]),
            make_entry("b", project="beta"),
        )
        filter = create_filter(project="acme", tags=["x"])
        today = resolve_date_range(DateRangeType.TODAY, FIXED_NOW)

        document = json.loads(
            export_json(list_entries(store, today, filter), FIXED_NOW, filter)
        )

        assert document["metadata"]["total_entries"] == 1
        assert document["metadata"]["filter_criteria"] == {
            "period": "today",
            "from": "2024-01-15",
            "to": "2024-01-15",
            "project": "acme",
            "tags": ["x"],
        }


class TestExportCsv:
    def test_rows(self, store):
        _write(
            store,
            make_entry("review, then merge", 90, project="acme", tags=["a", "b"]),
            make_entry("lunch", 45),
        )

        output = export_csv(list_entries(store, None), "UTC")
        rows = list(csv.reader(io.StringIO(output)))

        assert rows == [
            CSV_HEADERS,
            ["2024-01-15", "review, then merge", "90", "1.50", "acme", "a;b"],
            ["2024-01-15", "lunch", "45", "0.75", "", ""],
        ]

    def test_date_follows_timezone(self, store):
        _write(store, make_entry("late", timestamp=FIXED_NOW.set(hour=23)))
        output = export_csv(list_entries(store, None), "Asia/Tokyo")
        assert output.splitlines()[1].startswith("2024-01-16,")

    def test_empty_store_has_only_headers(self, store):
        assert export_csv(list_entries(store, None)) == ",".join(CSV_HEADERS) + "\n"
