"""Tests for the storage health report."""

from conftest import make_entry

from did.repository import entry as entry_repository
from did.service.health import check_storage_health, format_warning, truncate_content


class TestTruncateContent:
    def test_short_content_unchanged(self):
        assert truncate_content("x" * 50) == "x" * 50

    def test_long_content_cut_to_fifty(self):
        truncated = truncate_content("y" * 80)
        assert truncated == "y" * 47 + "..."
        assert len(truncated) == 50


class TestCheckStorageHealth:
    def test_reports_counts_and_truncated_warnings(self, store):
        long_garbage = b"z" * 120
        store.path.write_bytes(
            entry_repository.serialize_entry(make_entry())
            + b"\n"
            + long_garbage
            + b"\n"
        )

        health = check_storage_health(store)

        assert health["total_lines"] == 2
        assert health["valid_entries"] == 1
        assert health["corrupted_entries"] == 1
        assert health["warnings"][0]["content"] == "z" * 47 + "..."
        assert health["warnings"][0]["line_number"] == 2

    def test_does_not_modify_store(self, store):
        store.path.write_bytes(b"garbage\n")
        check_storage_health(store)
        assert store.path.read_bytes() == b"garbage\n"


class TestFormatWarning:
    def test_format(self):
        text = format_warning(
            {"line_number": 3, "content": "{bad", "error": "Expecting value"}
        )
        assert text == "line 3: Expecting value ({bad)"
