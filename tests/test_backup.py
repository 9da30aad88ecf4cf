"""Tests for backup rotation and restore."""

import stat

import pytest

from did.errors import BackupNotFoundError, InvalidBackupNumberError, StorageError
from did.repository import backup


def _backup(store, number):
    return backup.get_backup_path(store.path, number)


class TestGetBackupPath:
    def test_suffix(self, tmp_path):
        path = tmp_path / "entries.jsonl"
        assert backup.get_backup_path(path, 2) == tmp_path / "entries.jsonl.bak.2"


class TestCreateBackup:
    def test_no_store_file_is_a_no_op(self, store):
        backup.create_backup(store)
        assert backup.list_backups(store) == []

    def test_first_backup(self, store):
        store.path.write_text("v1\n")
        backup.create_backup(store)
        assert _backup(store, 1).read_text() == "v1\n"
        assert stat.S_IMODE(_backup(store, 1).stat().st_mode) == 0o644

    def test_rotation_keeps_three_newest(self, store):
        for version in ("v1", "v2", "v3", "v4", "v5"):
            store.path.write_text(f"{version}\n")
            backup.create_backup(store)

        assert _backup(store, 1).read_text() == "v5\n"
        assert _backup(store, 2).read_text() == "v4\n"
        assert _backup(store, 3).read_text() == "v3\n"
        assert not _backup(store, 4).exists()

    def test_rotation_with_gap(self, store):
        store.path.write_text("current\n")
        _backup(store, 2).write_text("old\n")

        backup.create_backup(store)

        assert _backup(store, 1).read_text() == "current\n"
        assert not _backup(store, 2).exists()
        assert _backup(store, 3).read_text() == "old\n"

    def test_store_is_left_in_place(self, store):
        store.path.write_text("v1\n")
        backup.create_backup(store)
        assert store.path.read_text() == "v1\n"

    @pytest.mark.parametrize("operation", ["copy_file", "rename", "remove"])
    def test_filesystem_failure_raises_storage_error(self, store, fs, operation):
        store.path.write_text("v1\n")
        backup.create_backup(store)
        store.path.write_text("v2\n")
        backup.create_backup(store)
        store.path.write_text("v3\n")
        backup.create_backup(store)
        fs.fail(operation)

        with pytest.raises(StorageError) as excinfo:
            backup.create_backup(store)
        assert isinstance(excinfo.value.__cause__, OSError)


class TestListBackups:
    def test_ascending(self, store):
        _backup(store, 3).write_text("c")
        _backup(store, 1).write_text("a")
        assert [b["number"] for b in backup.list_backups(store)] == [1, 3]
        assert backup.list_backups(store)[0]["path"] == _backup(store, 1)


class TestRestoreBackup:
    @pytest.mark.parametrize("number", [0, 4, -1])
    def test_invalid_number(self, store, number):
        with pytest.raises(InvalidBackupNumberError) as excinfo:
            backup.restore_backup(store, number)
        assert str(excinfo.value) == (
            f"invalid backup number {number}, must be between 1 and 3"
        )

    def test_missing_backup(self, store):
        with pytest.raises(BackupNotFoundError) as excinfo:
            backup.restore_backup(store, 2)
        assert str(excinfo.value) == "backup 2 does not exist"

    def test_restore_most_recent(self, store):
        store.path.write_text("v1\n")
        backup.create_backup(store)
        store.path.write_text("v2\n")

        backup.restore_backup(store, 1)

        assert store.path.read_text() == "v1\n"
        # The pre-restore content is itself kept
        assert _backup(store, 1).read_text() == "v2\n"
        assert _backup(store, 2).read_text() == "v1\n"

    def test_restore_oldest_uses_content_from_before_rotation(self, store):
        for version in ("v1", "v2", "v3"):
            store.path.write_text(f"{version}\n")
            backup.create_backup(store)
        store.path.write_text("v4\n")

        backup.restore_backup(store, 3)

        assert store.path.read_text() == "v1\n"
        assert _backup(store, 1).read_text() == "v4\n"
        assert _backup(store, 2).read_text() == "v3\n"
        assert _backup(store, 3).read_text() == "v2\n"

    def test_restore_when_store_is_missing(self, store):
        _backup(store, 1).write_text("saved\n")
        backup.restore_backup(store, 1)
        assert store.path.read_text() == "saved\n"
        assert _backup(store, 1).read_text() == "saved\n"

    def test_failed_backup_aborts_restore(self, store, fs):
        store.path.write_text("v1\n")
        backup.create_backup(store)
        store.path.write_text("v2\n")
        fs.fail("copy_file")

        with pytest.raises(StorageError):
            backup.restore_backup(store, 1)
        assert store.path.read_text() == "v2\n"
