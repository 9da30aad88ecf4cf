# SPDX-License-Identifier: MIT

from did.model.storage import ParseWarning, StorageHealth
from did.repository.entry import validate_storage
from did.repository.store_context import StoreContext

MAX_WARNING_CONTENT_LENGTH = 50
TRUNCATION_MARKER = "..."


def truncate_content(content: str) -> str:
    if len(content) <= MAX_WARNING_CONTENT_LENGTH:
        return content
    keep = MAX_WARNING_CONTENT_LENGTH - len(TRUNCATION_MARKER)
    return content[:keep] + TRUNCATION_MARKER


def check_storage_health(store: StoreContext) -> StorageHealth:
    """Read-only scan of the store; warning contents are shortened for display."""
    health = validate_storage(store)
    health["warnings"] = [
        {
            "line_number": warning["line_number"],
            "content": truncate_content(warning["content"]),
            "error": warning["error"],
        }
        for warning in health["warnings"]
    ]
    return health


def format_warning(warning: ParseWarning) -> str:
    return (
        f"line {warning['line_number']}: {warning['error']} "
        f"({truncate_content(warning['content'])})"
    )
