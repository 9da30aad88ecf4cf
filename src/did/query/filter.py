# SPDX-License-Identifier: MIT

from typing import Optional

from did.model.entry import Entry
from did.model.filter import Filter


def create_filter(
    keyword: Optional[str] = None,
    project: Optional[str] = None,
    tags: Optional[list[str]] = None,
) -> Filter:
    return {
        "keyword": keyword or None,
        "project": project.lstrip("@") if project else None,
        "tags": [tag.lstrip("#") for tag in tags] if tags else None,
    }


def is_empty(filter: Optional[Filter]) -> bool:
    if filter is None:
        return True
    return not filter["keyword"] and not filter["project"] and not filter["tags"]


def matches(entry: Entry, filter: Filter) -> bool:
    """
    Case-insensitive match of `entry` against every criterion set in `filter`.

    keyword: substring of the description
    project: equal to the entry's project
    tags: every one present on the entry
    """
    if filter["keyword"]:
        if filter["keyword"].lower() not in entry["description"].lower():
            return False

    if filter["project"]:
        if entry["project"] is None:
            return False
        if entry["project"].lower() != filter["project"].lower():
            return False

    if filter["tags"]:
        entry_tags = {tag.lower() for tag in entry["tags"]}
        for tag in filter["tags"]:
            if tag.lower() not in entry_tags:
                return False

    return True


def filter_entries(entries: list[Entry], filter: Optional[Filter]) -> list[Entry]:
    if filter is None or is_empty(filter):
        return entries
    return [entry for entry in entries if matches(entry, filter)]
