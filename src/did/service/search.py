# SPDX-License-Identifier: MIT

from typing import Optional

from did.model.date_range import DateRange
from did.model.filter import Filter
from did.model.listing import SearchResult
from did.query.filter import create_filter, is_empty, matches
from did.repository import entry as entry_repository
from did.repository.store_context import StoreContext
from did.service.entry import index_active_entries
from did.time import is_in_range


def search_entries(
    store: StoreContext,
    keyword: str,
    date_range: Optional[DateRange] = None,
    filter: Optional[Filter] = None,
) -> SearchResult:
    """
    Find active entries whose description contains `keyword`.

    `date_range` and the project/tags of `filter` narrow the search further.
    Results are ordered most recent first and keep their active index so
    they can be passed straight to edit or delete.
    """
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

    search_filter = create_filter(
        keyword=keyword,
        project=filter["project"] if filter is not None else None,
        tags=filter["tags"] if filter is not None else None,
    )
    if not is_empty(search_filter):
        indexed_entries = [
            indexed_entry
            for indexed_entry in indexed_entries
            if matches(indexed_entry["entry"], search_filter)
        ]

    indexed_entries.sort(
        key=lambda indexed_entry: indexed_entry["entry"]["timestamp"], reverse=True
    )

    return {
        "entries": indexed_entries,
        "warnings": read_result["warnings"],
        "query": keyword,
        "date_range": date_range,
        "total_minutes": sum(
            indexed_entry["entry"]["duration_minutes"]
            for indexed_entry in indexed_entries
        ),
    }
