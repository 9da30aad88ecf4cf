# SPDX-License-Identifier: MIT

import logging
from pathlib import Path

from did.errors import BackupNotFoundError, InvalidBackupNumberError, StorageError
from did.model.storage import BackupInfo
from did.repository.store_context import StoreContext

log = logging.getLogger(__name__)

BACKUP_SUFFIX = ".bak"
MAX_BACKUP_COUNT = 3


def get_backup_path(path: Path, number: int) -> Path:
    """`entries.jsonl` -> `entries.jsonl.bak.<number>`; 1 is the most recent."""
    return path.with_name(f"{path.name}{BACKUP_SUFFIX}.{number}")


def __rotate_backups(store: StoreContext) -> None:
    # Drop the oldest, then shift .bak.(k) -> .bak.(k+1) from the top down
    oldest_path = get_backup_path(store.path, MAX_BACKUP_COUNT)
    if store.fs.exists(oldest_path):
        store.fs.remove(oldest_path)

    for number in range(MAX_BACKUP_COUNT - 1, 0, -1):
        current_path = get_backup_path(store.path, number)
        if store.fs.exists(current_path):
            store.fs.rename(current_path, get_backup_path(store.path, number + 1))


def create_backup(store: StoreContext) -> None:
    """
    Preserve the current store file as `.bak.1`, shifting older backups up.

    Does nothing when the store file does not exist yet. Any filesystem
    failure raises StorageError, in which case the caller must not go on
    to overwrite the store.
    """
    if not store.fs.exists(store.path):
        return

    backup_path = get_backup_path(store.path, 1)
    try:
        __rotate_backups(store)
        store.fs.copy_file(store.path, backup_path)
    except OSError as e:
        raise StorageError(
            f"failed to back up {store.path}: {e}", store.path
        ) from e
    log.debug("backed up %s to %s", store.path, backup_path)


def list_backups(store: StoreContext) -> list[BackupInfo]:
    backups: list[BackupInfo] = []
    for number in range(1, MAX_BACKUP_COUNT + 1):
        backup_path = get_backup_path(store.path, number)
        if store.fs.is_file(backup_path):
            backups.append({"number": number, "path": backup_path})
    return backups


def restore_backup(store: StoreContext, number: int) -> None:
    """
    Overwrite the store with the content of backup `number`.

    The current store content is itself backed up first, so it ends up in
    `.bak.1`. The backup content is read before that rotation runs.
    """
    if number < 1 or number > MAX_BACKUP_COUNT:
        raise InvalidBackupNumberError(number, MAX_BACKUP_COUNT)

    backup_path = get_backup_path(store.path, number)
    if not store.fs.exists(backup_path):
        raise BackupNotFoundError(number)

    try:
        content = store.fs.read_bytes(backup_path)
    except OSError as e:
        raise StorageError(
            f"failed to read backup {backup_path}: {e}", backup_path
        ) from e

    create_backup(store)

    try:
        store.fs.write_atomic(store.path, content)
    except OSError as e:
        raise StorageError(
            f"failed to restore {store.path} from backup {number}: {e}", store.path
        ) from e
    log.debug("restored %s from %s", store.path, backup_path)
