"""Backups of pages before they are rewritten."""

from .backup_manager import BackupManager

__all__ = ['BackupManager']
