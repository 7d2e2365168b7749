"""
Abstract Storage Interface

DESIGN DECISION: We define an abstract interface for storage operations.
This allows us to:
1. Keep the JSON file for now and swap it for something else later
2. Use in-memory storage for testing
3. Keep the tracker decoupled from where the state lives

The whole month state is loaded and saved as one document; at a few
hundred records there is nothing to gain from partial writes.
"""

from abc import ABC, abstractmethod
from typing import Optional

from targetlock.models.records import MonthState


class MonthStateStorageInterface(ABC):
    """
    Abstract interface for month state persistence.

    Any storage implementation must implement these methods.
    """

    @abstractmethod
    def load(self) -> Optional[MonthState]:
        """
        Load the saved state.

        Returns:
            The saved state, or None if nothing has been saved yet

        Raises:
            StorageError: If the saved state cannot be read
        """
        pass

    @abstractmethod
    def save(self, state: MonthState) -> bool:
        """
        Replace the saved state with `state`.

        Returns:
            True if saved successfully

        Raises:
            StorageError: If save fails
        """
        pass


class InMemoryStorage(MonthStateStorageInterface):
    """Keeps the state in memory. Used by tests and when no file is configured."""

    def __init__(self, state: Optional[MonthState] = None):
        self._state = state
        self.save_count = 0

    def load(self) -> Optional[MonthState]:
        return self._state

    def save(self, state: MonthState) -> bool:
        self._state = state
        self.save_count += 1
        return True


class StorageError(Exception):
    """Base exception for storage operations."""
    pass


class BackupFormatError(StorageError):
    """A backup document is not valid JSON or lacks required fields."""
    pass
