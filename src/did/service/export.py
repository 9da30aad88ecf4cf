# SPDX-License-Identifier: MIT

import csv
import io
import json
from typing import Any, Optional

import pendulum

from did import time
from did.model.filter import Filter
from did.model.listing import EntryListing
from did.repository import entry as entry_repository

CSV_HEADERS = [
    "date",
    "description",
    "duration_minutes",
    "duration_hours",
    "project",
    "tags",
]


def get_filter_criteria(
    listing: EntryListing, filter: Optional[Filter] = None
) -> dict[str, Any]:
    criteria: dict[str, Any] = {}
    date_range = listing["date_range"]
    if date_range is not None:
        criteria["period"] = date_range["period"]
        criteria["from"] = date_range["start"].to_date_string()
        criteria["to"] = date_range["end"].to_date_string()
    if filter is not None and filter["project"]:
        criteria["project"] = filter["project"]
    if filter is not None and filter["tags"]:
        criteria["tags"] = list(filter["tags"])
    return criteria


def export_json(
    listing: EntryListing,
    exported_at: pendulum.DateTime,
    filter: Optional[Filter] = None,
) -> str:
    """
    Render the listing as an indented JSON document.

    The entries use the same field names as the store lines, under a
    `metadata` object holding the export time, the entry count and the
    range and filters that selected them.
    """
    document = {
        "metadata": {
            "export_timestamp": time.datetime_to_iso_str(exported_at),
            "total_entries": len(listing["entries"]),
            "filter_criteria": get_filter_criteria(listing, filter),
        },
        "entries": [
            entry_repository.convert_entry_for_serialization(indexed_entry["entry"])
            for indexed_entry in listing["entries"]
        ],
    }
    return json.dumps(document, ensure_ascii=False, indent=2) + "\n"


def export_csv(listing: EntryListing, tz: str = "local") -> str:
    """One row per entry; dates are local to `tz`, tags joined with ";"."""
    output = io.StringIO()
    writer = csv.writer(output, lineterminator="\n")
    writer.writerow(CSV_HEADERS)
    for indexed_entry in listing["entries"]:
        entry = indexed_entry["entry"]
        writer.writerow(
            [
                entry["timestamp"].in_tz(tz).to_date_string(),
                entry["description"],
                entry["duration_minutes"],
                f"{entry['duration_minutes'] / 60:.2f}",
                entry["project"] or "",
                ";".join(entry["tags"]),
            ]
        )
    return output.getvalue()
