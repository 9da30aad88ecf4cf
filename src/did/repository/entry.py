# SPDX-License-Identifier: MIT

import json
import logging
from typing import Any

from did import time
from did.errors import IndexOutOfRangeError, StorageError
from did.model.entry import Entry
from did.model.storage import ReadResult, StorageHealth
from did.repository.backup import create_backup
from did.repository.store_context import StoreContext

log = logging.getLogger(__name__)


def convert_entry_for_serialization(entry: Entry) -> dict[str, Any]:
    serializable_entry: dict[str, Any] = {
        "timestamp": time.datetime_to_iso_str(entry["timestamp"]),
        "description": entry["description"],
        "duration_minutes": entry["duration_minutes"],
        "raw_input": entry["raw_input"],
    }
    # Empty optional fields are left out of the line entirely
    if entry["project"]:
        serializable_entry["project"] = entry["project"]
    if entry["tags"]:
        serializable_entry["tags"] = list(entry["tags"])
    if entry["deleted_at"] is not None:
        serializable_entry["deleted_at"] = time.datetime_to_iso_str(
            entry["deleted_at"]
        )
    return serializable_entry


def convert_entry_for_deserialization(raw_entry: Any) -> Entry:
    """
    Build an Entry from a decoded JSON value.

    Raises ValueError or TypeError when the value is not a usable entry.
    Optional fields may be missing or null.
    """
    if not isinstance(raw_entry, dict):
        raise ValueError(
            f"expected a JSON object, got {type(raw_entry).__name__}"
        )

    timestamp = raw_entry.get("timestamp")
    if not isinstance(timestamp, str):
        raise ValueError("missing or invalid timestamp")

    description = raw_entry.get("description") or ""
    raw_input = raw_entry.get("raw_input") or ""
    if not isinstance(description, str) or not isinstance(raw_input, str):
        raise TypeError("description and raw_input must be strings")

    duration_minutes = raw_entry.get("duration_minutes", 0)
    if isinstance(duration_minutes, bool) or not isinstance(duration_minutes, int):
        raise TypeError("duration_minutes must be an integer")

    project = raw_entry.get("project") or None
    if project is not None and not isinstance(project, str):
        raise TypeError("project must be a string")

    tags = raw_entry.get("tags") or []
    if not isinstance(tags, list) or not all(isinstance(tag, str) for tag in tags):
        raise TypeError("tags must be a list of strings")

    deleted_at = raw_entry.get("deleted_at")
    if deleted_at is not None and not isinstance(deleted_at, str):
        raise TypeError("deleted_at must be a timestamp string")

    return {
        "timestamp": time.datetime_from_str(timestamp),
        "description": description,
        "duration_minutes": duration_minutes,
        "raw_input": raw_input,
        "project": project,
        "tags": tags,
        "deleted_at": time.datetime_from_str_optional(deleted_at),
    }


def serialize_entry(entry: Entry) -> bytes:
    line = json.dumps(
        convert_entry_for_serialization(entry),
        ensure_ascii=False,
        separators=(",", ":"),
    )
    return line.encode("utf-8")


def parse_line(raw_line: bytes) -> Entry:
    return convert_entry_for_deserialization(json.loads(raw_line.decode("utf-8")))


def split_lines(data: bytes) -> list[bytes]:
    lines = data.split(b"\n")
    if lines[-1] == b"":
        lines.pop()
    return lines


def read_raw_lines(store: StoreContext) -> list[bytes]:
    """Return the store's lines without their newline; [] when the file is absent."""
    try:
        data = store.fs.read_bytes(store.path)
    except FileNotFoundError:
        return []
    except OSError as e:
        raise StorageError(f"failed to read {store.path}: {e}", store.path) from e
    return split_lines(data)


def write_raw_lines(store: StoreContext, lines: list[bytes]) -> None:
    data = b"".join(line + b"\n" for line in lines)
    try:
        store.fs.write_atomic(store.path, data)
    except OSError as e:
        raise StorageError(f"failed to write {store.path}: {e}", store.path) from e


def append_entry(store: StoreContext, entry: Entry) -> None:
    try:
        store.fs.make_dirs(store.path.parent)
        store.fs.append_text(store.path, serialize_entry(entry).decode("utf-8") + "\n")
    except OSError as e:
        raise StorageError(
            f"failed to append entry to {store.path}: {e}", store.path
        ) from e
    log.debug("appended entry to %s", store.path)


def read_entries_with_warnings(store: StoreContext) -> ReadResult:
    result = parse_lines(read_raw_lines(store))
    if result["warnings"]:
        log.debug(
            "skipped %d corrupted line(s) in %s",
            len(result["warnings"]),
            store.path,
        )
    return result


def parse_lines(lines: list[bytes]) -> ReadResult:
    result: ReadResult = {"entries": [], "warnings": [], "storage_indexes": []}

    for index, raw_line in enumerate(lines):
        try:
            entry = parse_line(raw_line)
        except (ValueError, TypeError) as e:
            # One bad line must never hide its neighbours
            result["warnings"].append(
                {
                    "line_number": index + 1,
                    "content": raw_line.decode("utf-8", errors="replace"),
                    "error": str(e),
                }
            )
            continue
        result["entries"].append(entry)
        result["storage_indexes"].append(index)
    return result


def read_entries(store: StoreContext) -> list[Entry]:
    return read_entries_with_warnings(store)["entries"]


def read_active_entries(store: StoreContext) -> list[Entry]:
    return [entry for entry in read_entries(store) if entry["deleted_at"] is None]


def update_entry(store: StoreContext, index: int, entry: Entry) -> None:
    """
    Replace the line at `index` (0-based, counting every line) with `entry`.

    The current file is backed up first. Every other line, corrupted ones
    included, is written back unchanged.
    """
    lines = read_raw_lines(store)
    if index < 0 or index >= len(lines):
        raise IndexOutOfRangeError(index, len(lines), first=0)

    create_backup(store)

    lines[index] = serialize_entry(entry)
    write_raw_lines(store, lines)
    log.debug("updated line %d of %s", index, store.path)


def rewrite_lines(store: StoreContext, lines: list[bytes]) -> None:
    """Back up the store, then replace its whole content with `lines`."""
    create_backup(store)
    write_raw_lines(store, lines)
    log.debug("rewrote %s with %d line(s)", store.path, len(lines))


def validate_storage(store: StoreContext) -> StorageHealth:
    lines = read_raw_lines(store)
    result = parse_lines(lines)
    return {
        "total_lines": len(lines),
        "valid_entries": len(result["entries"]),
        "corrupted_entries": len(result["warnings"]),
        "warnings": result["warnings"],
    }
