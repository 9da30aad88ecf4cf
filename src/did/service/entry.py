# SPDX-License-Identifier: MIT

import logging
from typing import Optional, cast

from did.errors import (
    EmptyDescriptionError,
    IndexOutOfRangeError,
    InvalidDurationError,
    InvalidIndexError,
    NoChangesSpecifiedError,
    NoEntriesError,
)
from did.model.date_range import DateRange
from did.model.entry import Entry, IndexedEntry
from did.model.filter import Filter
from did.model.listing import EntryListing
from did.model.storage import ReadResult
from did.query.filter import is_empty, matches
from did.repository import entry as entry_repository
from did.repository.store_context import StoreContext
from did.service.parse import (
    MAX_DURATION_MINUTES,
    build_raw_input,
    parse_duration,
    parse_entry_input,
    parse_project_and_tags,
)
from did.template.entry import get_entry_template
from did.time import is_in_range

log = logging.getLogger(__name__)


def create_entry(store: StoreContext, raw_input: str) -> Entry:
    """Parse "<description> for <duration>" and append it to the store."""
    description, project, tags, duration_minutes = parse_entry_input(raw_input)

    entry = get_entry_template(store.clock)
    entry["description"] = description
    entry["duration_minutes"] = duration_minutes
    entry["raw_input"] = raw_input
    entry["project"] = project
    entry["tags"] = tags

    entry_repository.append_entry(store, entry)
    return entry


def create_entry_from_parts(
    store: StoreContext,
    description: str,
    duration_minutes: int,
    project: Optional[str] = None,
    tags: Optional[list[str]] = None,
) -> Entry:
    if not description.strip():
        raise EmptyDescriptionError()
    if duration_minutes < 1 or duration_minutes > MAX_DURATION_MINUTES:
        raise InvalidDurationError(
            f"invalid duration: must be 1-{MAX_DURATION_MINUTES} minutes"
        )

    entry = get_entry_template(store.clock)
    entry["description"] = description.strip()
    entry["duration_minutes"] = duration_minutes
    entry["project"] = project
    entry["tags"] = list(tags) if tags else []
    entry["raw_input"] = build_raw_input(entry)

    entry_repository.append_entry(store, entry)
    return entry


def index_active_entries(read_result: ReadResult) -> list[IndexedEntry]:
    """Number the active entries 1..n in file order, keeping their line positions."""
    indexed_entries: list[IndexedEntry] = []
    for entry, storage_index in zip(
        read_result["entries"], read_result["storage_indexes"]
    ):
        if entry["deleted_at"] is not None:
            continue
        indexed_entries.append(
            {
                "entry": entry,
                "active_index": len(indexed_entries) + 1,
                "storage_index": storage_index,
            }
        )
    return indexed_entries


def resolve_active_index(read_result: ReadResult, user_index: int) -> IndexedEntry:
    if user_index < 1:
        raise InvalidIndexError(user_index)

    active_entries = index_active_entries(read_result)
    if len(active_entries) == 0:
        raise NoEntriesError()
    if user_index > len(active_entries):
        raise IndexOutOfRangeError(user_index, len(active_entries))

    return active_entries[user_index - 1]


def get_entry_by_index(store: StoreContext, user_index: int) -> IndexedEntry:
    return resolve_active_index(
        entry_repository.read_entries_with_warnings(store), user_index
    )


def list_entries(
    store: StoreContext,
    date_range: Optional[DateRange],
    filter: Optional[Filter] = None,
) -> EntryListing:
    """Active entries in `date_range` (all of them when None), oldest first."""
    read_result = entry_repository.read_entries_with_warnings(store)

    indexed_entries = index_active_entries(read_result)
    if date_range is not None:
        indexed_entries = [
            indexed_entry
            for indexed_entry in indexed_entries
            if is_in_range(
                indexed_entry["entry"]["timestamp"],
                date_range["start"],
                date_range["end"],
            )
        ]
    if not is_empty(filter):
        indexed_entries = [
            indexed_entry
            for indexed_entry in indexed_entries
            if matches(indexed_entry["entry"], cast(Filter, filter))
        ]

    indexed_entries.sort(key=lambda indexed_entry: indexed_entry["entry"]["timestamp"])

    return {
        "entries": indexed_entries,
        "warnings": read_result["warnings"],
        "date_range": date_range,
        "total_minutes": sum(
            indexed_entry["entry"]["duration_minutes"]
            for indexed_entry in indexed_entries
        ),
    }


def edit_entry(
    store: StoreContext,
    user_index: int,
    description: Optional[str] = None,
    duration: Optional[str] = None,
) -> Entry:
    """
    Change the description and/or duration of the active entry `user_index`.

    A new description is re-parsed, so its @project and #tags replace the
    old ones. The raw input is rebuilt from the result.
    """
    if not description and not duration:
        raise NoChangesSpecifiedError()

    indexed_entry = get_entry_by_index(store, user_index)
    entry = indexed_entry["entry"]

    if description:
        clean_description, project, tags = parse_project_and_tags(description)
        if not clean_description:
            raise EmptyDescriptionError()
        entry["description"] = clean_description
        entry["project"] = project
        entry["tags"] = tags

    if duration:
        entry["duration_minutes"] = parse_duration(duration)

    entry["raw_input"] = build_raw_input(entry)

    entry_repository.update_entry(store, indexed_entry["storage_index"], entry)
    log.debug("edited entry %d (line %d)", user_index, indexed_entry["storage_index"])
    return entry
