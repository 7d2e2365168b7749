"""
Storage Services Package

Provides the abstract interface and concrete implementations for persisting
the month state. The JSON file backend doubles as the backup format.
"""

from targetlock.services.storage.interface import (
    BackupFormatError,
    InMemoryStorage,
    MonthStateStorageInterface,
    StorageError,
)
from targetlock.services.storage.backup import backup_filename, dump_backup, parse_backup
from targetlock.services.storage.json_file import JsonFileStorage

__all__ = [
    # Interfaces
    "InMemoryStorage",
    "MonthStateStorageInterface",
    # Exceptions
    "BackupFormatError",
    "StorageError",
    # Backup codec
    "backup_filename",
    "dump_backup",
    "parse_backup",
    # JSON file implementation
    "JsonFileStorage",
]
