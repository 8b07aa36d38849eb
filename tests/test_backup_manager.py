"""Tests for page backups."""

from __future__ import annotations

import os
from pathlib import Path

import pytest

from backup import BackupManager


@pytest.fixture
def page(tmp_path: Path) -> Path:
    path = tmp_path / "page.html"
    path.write_text("<p>original</p>", encoding="utf-8")
    return path


def make_backup(path: Path, mtime: int) -> Path:
    path.write_text(f"<p>{mtime}</p>", encoding="utf-8")
    os.utime(path, (mtime, mtime))
    return path


class TestBackupManager:
    """Create, list, restore and prune."""

    def test_backup_next_to_page(self, page: Path) -> None:
        backup = BackupManager().create_backup(str(page))
        assert backup is not None
        backup_path = Path(backup)
        assert backup_path.parent == page.parent
        assert backup_path.name.startswith("page_backup_")
        assert backup_path.suffix == ".html"
        assert backup_path.read_text(encoding="utf-8") == "<p>original</p>"

    def test_backup_into_directory(self, page: Path, tmp_path: Path) -> None:
        backup_dir = tmp_path / "backups"
        backup = BackupManager(str(backup_dir)).create_backup(str(page))
        assert backup is not None
        assert Path(backup).parent == backup_dir
        assert Path(backup).name.startswith("page_")

    def test_backups_in_same_second_do_not_overwrite(self, page: Path) -> None:
        manager = BackupManager()
        first = manager.create_backup(str(page))
        page.write_text("<p>highlighted</p>", encoding="utf-8")
        second = manager.create_backup(str(page))

        assert first != second
        assert Path(first).read_text(encoding="utf-8") == "<p>original</p>"
        assert Path(second).read_text(encoding="utf-8") == "<p>highlighted</p>"
        assert len(manager.list_backups(str(page))) == 2

    def test_restore_right_after_backup(self, page: Path) -> None:
        manager = BackupManager()
        backup = manager.create_backup(str(page))
        page.write_text("<p>highlighted</p>", encoding="utf-8")

        assert manager.restore_backup(backup, str(page))
        assert page.read_text(encoding="utf-8") == "<p>original</p>"
        assert Path(backup).read_text(encoding="utf-8") == "<p>original</p>"

    def test_missing_page(self, tmp_path: Path) -> None:
        assert BackupManager().create_backup(str(tmp_path / "nope.html")) is None

    def test_list_newest_first(self, page: Path) -> None:
        old = make_backup(page.parent / "page_backup_20240101_000000.html", 1_700_000_000)
        new = make_backup(page.parent / "page_backup_20240102_000000.html", 1_700_100_000)
        assert BackupManager().list_backups(str(page)) == [str(new), str(old)]

    def test_cleanup_keeps_newest(self, page: Path) -> None:
        for day, mtime in enumerate([1_700_000_000, 1_700_100_000, 1_700_200_000], start=1):
            make_backup(page.parent / f"page_backup_2024010{day}_000000.html", mtime)

        manager = BackupManager()
        assert manager.cleanup_old_backups(str(page), keep_count=1) == 2
        remaining = manager.list_backups(str(page))
        assert [Path(p).name for p in remaining] == ["page_backup_20240103_000000.html"]

    def test_restore_derives_page_name(self, page: Path) -> None:
        backup = make_backup(page.parent / "page_backup_20240101_000000.html", 1_700_000_000)
        page.write_text("<p>changed</p>", encoding="utf-8")

        manager = BackupManager()
        assert manager.restore_backup(str(backup))
        assert page.read_text(encoding="utf-8") == "<p>1700000000</p>"
        # The overwritten page was backed up too
        assert len(manager.list_backups(str(page))) == 2

    def test_restore_needs_page_for_unknown_name(self, tmp_path: Path) -> None:
        backup = tmp_path / "something.html"
        backup.write_text("x", encoding="utf-8")
        assert BackupManager().restore_backup(str(backup)) is False

    def test_backup_info(self, page: Path) -> None:
        backup = BackupManager().create_backup(str(page))
        info = BackupManager().get_backup_info(backup)
        assert info["name"] == Path(backup).name
        assert info["size"] == len("<p>original</p>")
        assert BackupManager().get_backup_info(str(page.parent / "gone.html")) == {}
