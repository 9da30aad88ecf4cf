# SPDX-License-Identifier: MIT

"""
Soft delete and undo on top of the line store.

Deleting stamps `deleted_at` on the entry and leaves the line in place, so
it drops out of the active numbering but can still be brought back with
`restore_entry`. Lines are only removed for good by `purge_deleted` or by
the retention sweep `cleanup_old_deleted`, which runs after every delete
unless the retention is 0.
"""

import logging
from typing import Callable, Optional

import pendulum

from did.errors import DidError, NoDeletedEntriesError
from did.model.entry import Entry, IndexedEntry
from did.repository import entry as entry_repository
from did.repository.store_context import StoreContext
from did.service.entry import resolve_active_index

log = logging.getLogger(__name__)

DEFAULT_RETENTION_DAYS = 7


def delete_entry(
    store: StoreContext,
    user_index: int,
    confirm: Optional[Callable[[Entry], bool]] = None,
    retention_days: int = DEFAULT_RETENTION_DAYS,
) -> Optional[Entry]:
    """
    Soft-delete the active entry numbered `user_index` (1-based).

    `confirm` is shown the entry before anything is written; returning False
    cancels and the function returns None. Otherwise the deleted entry is
    returned.
    """
    read_result = entry_repository.read_entries_with_warnings(store)
    indexed_entry = resolve_active_index(read_result, user_index)
    entry = indexed_entry["entry"]

    if confirm is not None and not confirm(entry):
        log.debug("delete of entry %d cancelled", user_index)
        return None

    entry["deleted_at"] = store.clock()
    entry_repository.update_entry(store, indexed_entry["storage_index"], entry)
    log.debug(
        "soft-deleted entry %d (line %d)", user_index, indexed_entry["storage_index"]
    )

    try:
        cleanup_old_deleted(store, retention_days)
    except DidError as e:
        # The delete itself is already on disk
        log.warning("cleanup of old deleted entries failed: %s", e)

    return entry


def get_most_recently_deleted(store: StoreContext) -> IndexedEntry:
    """
    Return the soft-deleted entry with the latest `deleted_at`.

    `active_index` is 0 since the entry is not active. Equal timestamps are
    resolved in favour of the later line.
    """
    read_result = entry_repository.read_entries_with_warnings(store)

    most_recent: Optional[IndexedEntry] = None
    most_recent_deleted_at: Optional[pendulum.DateTime] = None
    for entry, storage_index in zip(
        read_result["entries"], read_result["storage_indexes"]
    ):
        deleted_at = entry["deleted_at"]
        if deleted_at is None:
            continue
        if most_recent_deleted_at is None or deleted_at >= most_recent_deleted_at:
            most_recent_deleted_at = deleted_at
            most_recent = {
                "entry": entry,
                "active_index": 0,
                "storage_index": storage_index,
            }

    if most_recent is None:
        raise NoDeletedEntriesError()
    return most_recent


def restore_entry(store: StoreContext) -> Entry:
    indexed_entry = get_most_recently_deleted(store)
    entry = indexed_entry["entry"]
    entry["deleted_at"] = None
    entry_repository.update_entry(store, indexed_entry["storage_index"], entry)
    log.debug("restored entry at line %d", indexed_entry["storage_index"])
    return entry


def count_deleted(store: StoreContext) -> int:
    return sum(
        1 for entry in entry_repository.read_entries(store) if entry["deleted_at"]
    )


def __remove_deleted_lines(
    store: StoreContext, should_remove: Callable[[Entry], bool]
) -> int:
    lines = entry_repository.read_raw_lines(store)
    read_result = entry_repository.parse_lines(lines)

    removed_indexes = {
        storage_index
        for entry, storage_index in zip(
            read_result["entries"], read_result["storage_indexes"]
        )
        if entry["deleted_at"] is not None and should_remove(entry)
    }
    if not removed_indexes:
        return 0

    # Corrupted lines are not entries, so they always survive
    kept_lines = [
        line for index, line in enumerate(lines) if index not in removed_indexes
    ]
    entry_repository.rewrite_lines(store, kept_lines)
    return len(removed_indexes)


def purge_deleted(store: StoreContext) -> int:
    """Permanently drop every soft-deleted entry. Returns how many were dropped."""
    purged_count = __remove_deleted_lines(store, lambda entry: True)
    log.debug("purged %d deleted entries from %s", purged_count, store.path)
    return purged_count


def cleanup_old_deleted(
    store: StoreContext, retention_days: int = DEFAULT_RETENTION_DAYS
) -> int:
    """
    Permanently drop entries deleted `retention_days` or more days ago.

    A retention of 0 turns the sweep off; deleted entries then stay until
    `purge_deleted`.
    """
    if retention_days < 1:
        return 0

    cutoff = store.clock().subtract(days=retention_days)
    removed_count = __remove_deleted_lines(
        store,
        lambda entry: entry["deleted_at"] is not None and entry["deleted_at"] <= cutoff,
    )
    if removed_count:
        log.debug(
            "removed %d entries deleted before %s", removed_count, cutoff.isoformat()
        )
    return removed_count
