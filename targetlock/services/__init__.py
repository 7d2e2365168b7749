"""Services package."""

from targetlock.services.storage import (
    BackupFormatError,
    InMemoryStorage,
    JsonFileStorage,
    MonthStateStorageInterface,
    StorageError,
)

__all__ = [
    "BackupFormatError",
    "InMemoryStorage",
    "JsonFileStorage",
    "MonthStateStorageInterface",
    "StorageError",
]
