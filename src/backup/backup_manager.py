"""
Backups for HTML pages that are highlighted in place.
A timestamped copy is made before a page is overwritten.
"""

import shutil
from pathlib import Path
from datetime import datetime
from typing import Optional, List


class BackupManager:
    """
    Creates, lists, restores and prunes page backups.

    Without a backup directory, backups sit next to the page as
    <name>_backup_<timestamp><ext>. With one, they are stored there as
    <name>_<timestamp><ext>.
    """

    TIMESTAMP_FORMAT = '%Y%m%d_%H%M%S'

    def __init__(self, backup_dir: Optional[str] = None):
        self.backup_dir = Path(backup_dir) if backup_dir else None

    def _backup_root(self, page: Path) -> Path:
        return self.backup_dir if self.backup_dir else page.parent

    def _backup_stem(self, page: Path) -> str:
        return f"{page.stem}_" if self.backup_dir else f"{page.stem}_backup_"

    def create_backup(self, file_path: str) -> Optional[str]:
        """
        Copy a page to a timestamped backup.

        Args:
            file_path: Page to back up

        Returns:
            Path to backup file, or None if backup failed
        """
        try:
            page = Path(file_path)

            if not page.exists():
                print(f"Page does not exist: {file_path}")
                return None

            backup_root = self._backup_root(page)
            backup_root.mkdir(parents=True, exist_ok=True)
            timestamp = datetime.now().strftime(self.TIMESTAMP_FORMAT)
            backup_path = backup_root / f"{self._backup_stem(page)}{timestamp}{page.suffix}"

            # Several backups within one second get a counter, never overwrite
            counter = 1
            while backup_path.exists():
                backup_path = backup_root / f"{self._backup_stem(page)}{timestamp}_{counter}{page.suffix}"
                counter += 1

            shutil.copy2(page, backup_path)
            return str(backup_path)

        except Exception as e:
            print(f"Backup failed: {e}")
            return None

    def list_backups(self, original_file: str) -> List[str]:
        """Backups of a page, newest first."""
        try:
            page = Path(original_file)
            backup_root = self._backup_root(page)
            if not backup_root.exists():
                return []

            backups = sorted(
                backup_root.glob(f"{self._backup_stem(page)}*{page.suffix}"),
                key=lambda p: p.stat().st_mtime,
                reverse=True
            )
            return [str(b) for b in backups]

        except Exception as e:
            print(f"Error listing backups: {e}")
            return []

    def restore_backup(self, backup_path: str, target_path: Optional[str] = None) -> bool:
        """
        Copy a backup back over a page.

        The current page is itself backed up first.

        Args:
            backup_path: Backup file
            target_path: Page to restore. If None, derived from a <name>_backup_<timestamp> filename

        Returns:
            True if successful
        """
        try:
            backup = Path(backup_path)

            if not backup.exists():
                print(f"Backup file does not exist: {backup_path}")
                return False

            if target_path:
                target = Path(target_path)
            elif '_backup_' in backup.stem:
                original_name = backup.stem.rsplit('_backup_', 1)[0]
                target = backup.parent / f"{original_name}{backup.suffix}"
            else:
                print("Cannot determine page name from backup, pass the page path")
                return False

            if target.exists():
                self.create_backup(str(target))

            shutil.copy2(backup, target)

            print(f"Backup restored: {backup_path} -> {target}")
            return True

        except Exception as e:
            print(f"Restore failed: {e}")
            return False

    def cleanup_old_backups(self, original_file: str, keep_count: int = 10) -> int:
        """
        Delete all but the newest keep_count backups of a page.

        Returns:
            Number of backups deleted
        """
        deleted = 0
        for backup in self.list_backups(original_file)[keep_count:]:
            try:
                Path(backup).unlink()
                deleted += 1
            except Exception as e:
                print(f"Failed to delete {backup}: {e}")

        return deleted

    def get_backup_info(self, backup_path: str) -> dict:
        try:
            backup = Path(backup_path)

            if not backup.exists():
                return {}

            stat = backup.stat()

            return {
                'path': str(backup),
                'name': backup.name,
                'size': stat.st_size,
                'modified': datetime.fromtimestamp(stat.st_mtime).isoformat()
            }

        except Exception as e:
            print(f"Error getting backup info: {e}")
            return {}
