"""Tests for the line-oriented entry store."""

import json
import stat

import pytest
from conftest import FIXED_NOW, make_entry

from did.errors import IndexOutOfRangeError, StorageError
from did.repository import entry as entry_repository
from did.repository.backup import get_backup_path


def _write_lines(store, *lines: bytes) -> None:
    store.path.write_bytes(b"".join(line + b"\n" for line in lines))


def _line(entry) -> bytes:
    return entry_repository.serialize_entry(entry)


class TestSerialization:
    def test_optional_fields_left_out_when_empty(self):
        data = json.loads(entry_repository.serialize_entry(make_entry("write docs")))
        assert set(data) == {"timestamp", "description", "duration_minutes", "raw_input"}
        assert data["description"] == "write docs"

    def test_project_tags_and_deleted_at_written_when_set(self):
        entry = make_entry(project="acme", tags=["a", "b"], deleted_at=FIXED_NOW)
        data = json.loads(entry_repository.serialize_entry(entry))
        assert data["project"] == "acme"
        assert data["tags"] == ["a", "b"]
        assert data["deleted_at"].startswith("2024-01-15T12:00:00")

    def test_null_optional_fields_are_accepted(self):
        raw = (
            b'{"timestamp":"2024-01-15T12:00:00+00:00","description":"x",'
            b'"duration_minutes":5,"raw_input":"x for 5m","project":null,'
            b'"tags":null,"deleted_at":null}'
        )
        entry = entry_repository.parse_line(raw)
        assert entry["project"] is None
        assert entry["tags"] == []
        assert entry["deleted_at"] is None

    def test_non_ascii_text_survives(self):
        entry = make_entry("café réunion ☕")
        assert entry_repository.parse_line(_line(entry))["description"] == (
            "café réunion ☕"
        )


class TestAppend:
    def test_creates_file_and_directory(self, tmp_path, store):
        nested = store.with_path(tmp_path / "a" / "b" / "entries.jsonl")
        entry_repository.append_entry(nested, make_entry())
        assert nested.path.is_file()
        assert stat.S_IMODE(nested.path.stat().st_mode) & 0o644 == 0o644

    def test_appends_one_line_per_entry(self, store):
        entry_repository.append_entry(store, make_entry("one"))
        entry_repository.append_entry(store, make_entry("two"))
        lines = store.path.read_bytes().splitlines()
        assert len(lines) == 2
        assert [e["description"] for e in entry_repository.read_entries(store)] == [
            "one",
            "two",
        ]

    def test_never_creates_backup(self, store):
        entry_repository.append_entry(store, make_entry("one"))
        entry_repository.append_entry(store, make_entry("two"))
        assert not get_backup_path(store.path, 1).exists()

    def test_failure_raises_storage_error(self, store, fs):
        fs.fail("append_text")
        with pytest.raises(StorageError) as excinfo:
            entry_repository.append_entry(store, make_entry())
        assert isinstance(excinfo.value.__cause__, PermissionError)
        assert excinfo.value.path == store.path


class TestRead:
    def test_missing_file_is_empty(self, store):
        result = entry_repository.read_entries_with_warnings(store)
        assert result == {"entries": [], "warnings": [], "storage_indexes": []}

    def test_read_back_what_was_appended(self, store):
        entry = make_entry("fix bug", 90, project="acme", tags=["bugfix"])
        entry_repository.append_entry(store, entry)
        assert entry_repository.read_entries(store) == [entry]

    def test_corrupted_lines_become_warnings(self, store):
        _write_lines(
            store,
            _line(make_entry("first")),
            b"{not json",
            b"[1, 2, 3]",
            b'{"description": "no timestamp"}',
            b"",
            _line(make_entry("second")),
            b'{"timestamp": "2024-01-15T12:00:00+00:00", "duration_minutes": "5"}',
        )

        result = entry_repository.read_entries_with_warnings(store)

        assert [e["description"] for e in result["entries"]] == ["first", "second"]
        assert result["storage_indexes"] == [0, 5]
        assert [w["line_number"] for w in result["warnings"]] == [2, 3, 4, 5, 7]
        assert result["warnings"][0]["content"] == "{not json"

    def test_invalid_utf8_line_is_a_warning(self, store):
        _write_lines(store, b"\xff\xfe broken", _line(make_entry("ok")))
        result = entry_repository.read_entries_with_warnings(store)
        assert len(result["entries"]) == 1
        assert result["warnings"][0]["line_number"] == 1

    def test_read_active_entries_skips_deleted(self, store):
        _write_lines(
            store,
            _line(make_entry("kept")),
            _line(make_entry("gone", deleted_at=FIXED_NOW)),
        )
        assert [e["description"] for e in entry_repository.read_active_entries(store)] == [
            "kept"
        ]

    def test_read_failure_raises_storage_error(self, store, fs):
        _write_lines(store, _line(make_entry()))
        fs.fail("read_bytes")
        with pytest.raises(StorageError):
            entry_repository.read_entries(store)


class TestUpdate:
    def test_replaces_only_the_target_line(self, store):
        corrupted = b"\xff not json \xfe"
        _write_lines(
            store,
            _line(make_entry("first")),
            corrupted,
            _line(make_entry("third")),
        )

        entry_repository.update_entry(store, 2, make_entry("third, edited"))

        lines = store.path.read_bytes().split(b"\n")
        assert lines[0] == _line(make_entry("first"))
        assert lines[1] == corrupted
        assert json.loads(lines[2])["description"] == "third, edited"
        assert lines[3] == b""

    def test_backs_up_previous_content(self, store):
        _write_lines(store, _line(make_entry("before")))
        original = store.path.read_bytes()

        entry_repository.update_entry(store, 0, make_entry("after"))

        assert get_backup_path(store.path, 1).read_bytes() == original

    def test_out_of_range_raises_without_backup(self, store):
        _write_lines(store, _line(make_entry()))
        with pytest.raises(IndexOutOfRangeError):
            entry_repository.update_entry(store, 1, make_entry())
        with pytest.raises(IndexOutOfRangeError):
            entry_repository.update_entry(store, -1, make_entry())
        assert not get_backup_path(store.path, 1).exists()

    def test_failed_backup_leaves_store_untouched(self, store, fs):
        _write_lines(store, _line(make_entry("before")))
        original = store.path.read_bytes()
        fs.fail("copy_file")

        with pytest.raises(StorageError):
            entry_repository.update_entry(store, 0, make_entry("after"))

        assert store.path.read_bytes() == original

    def test_failed_write_leaves_store_and_no_temp_file(self, store, fs):
        _write_lines(store, _line(make_entry("before")))
        original = store.path.read_bytes()
        fs.fail("write_atomic")

        with pytest.raises(StorageError):
            entry_repository.update_entry(store, 0, make_entry("after"))

        assert store.path.read_bytes() == original
        assert not store.path.with_name("entries.jsonl.tmp").exists()


class TestValidateStorage:
    def test_counts_lines(self, store):
        _write_lines(store, _line(make_entry()), b"garbage", _line(make_entry()))
        health = entry_repository.validate_storage(store)
        assert health["total_lines"] == 3
        assert health["valid_entries"] == 2
        assert health["corrupted_entries"] == 1
        assert health["warnings"][0]["line_number"] == 2

    def test_missing_file_is_healthy(self, store):
        health = entry_repository.validate_storage(store)
        assert health == {
            "total_lines": 0,
            "valid_entries": 0,
            "corrupted_entries": 0,
            "warnings": [],
        }
