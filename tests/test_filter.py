"""Tests for entry filters."""

from conftest import make_entry

from did.query.filter import create_filter, filter_entries, is_empty, matches


class TestCreateFilter:
    def test_strips_prefixes(self):
        assert create_filter(project="@acme", tags=["#a", "b"]) == {
            "keyword": None,
            "project": "acme",
            "tags": ["a", "b"],
        }

    def test_empty(self):
        assert is_empty(None)
        assert is_empty(create_filter())
        assert is_empty(create_filter(keyword="", tags=[]))
        assert not is_empty(create_filter(keyword="x"))


class TestMatches:
    def test_keyword_is_case_insensitive_substring(self):
        entry = make_entry("Fixed the Login page")
        assert matches(entry, create_filter(keyword="login"))
        assert not matches(entry, create_filter(keyword="logout"))

    def test_project(self):
        assert matches(make_entry(project="Acme"), create_filter(project="acme"))
        assert not matches(make_entry(), create_filter(project="acme"))

    def test_all_tags_required(self):
        entry = make_entry(tags=["Bug", "urgent"])
        assert matches(entry, create_filter(tags=["bug"]))
        assert matches(entry, create_filter(tags=["urgent", "BUG"]))
        assert not matches(entry, create_filter(tags=["bug", "frontend"]))

    def test_criteria_combine(self):
        entry = make_entry("deploy", project="ops", tags=["release"])
        assert matches(entry, create_filter("dep", "ops", ["release"]))
        assert not matches(entry, create_filter("dep", "dev", ["release"]))


def test_filter_entries_keeps_order():
    entries = [
        make_entry("a", project="x"),
        make_entry("b"),
        make_entry("c", project="x"),
    ]
    filtered = filter_entries(entries, create_filter(project="x"))
    assert [e["description"] for e in filtered] == ["a", "c"]
    assert filter_entries(entries, None) is entries
