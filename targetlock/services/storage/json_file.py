"""
JSON File Storage Implementation

DESIGN DECISION: The state is kept in a single JSON document on disk in the
same shape as an exported backup. That means a saved file can be handed to
the import screen as-is, and a backup can be dropped in place of the file.

TRADEOFFS:
- Every save rewrites the whole document (fine for a few hundred records)
- No locking; the app serializes edits itself
"""

import os
import tempfile
from pathlib import Path
from typing import Optional, Union

from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential

from targetlock.models.records import MonthState
from targetlock.services.storage.backup import dump_backup, parse_backup
from targetlock.services.storage.interface import (
    MonthStateStorageInterface,
    StorageError,
)


class JsonFileStorage(MonthStateStorageInterface):
    """
    Stores the month state as a JSON backup document.

    Writes go to a temporary file in the same directory which then replaces
    the target, so a crash mid-write leaves the previous document intact.
    """

    def __init__(self, path: Union[str, Path]):
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    @retry(
        retry=retry_if_exception_type(OSError),
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=0.1, min=0.1, max=1),
        reraise=True,
    )
    def _read_text(self) -> str:
        return self._path.read_text(encoding="utf-8")

    @retry(
        retry=retry_if_exception_type(OSError),
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=0.1, min=0.1, max=1),
        reraise=True,
    )
    def _write_text(self, text: str) -> None:
        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{self._path.name}.",
            suffix=".tmp",
            dir=self._path.parent,
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                handle.write(text)
            os.replace(tmp_name, self._path)
        except OSError:
            if os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise

    def load(self) -> Optional[MonthState]:
        """Load the saved state, or None if the file does not exist yet."""
        if not self._path.exists():
            return None
        try:
            text = self._read_text()
        except OSError as e:
            raise StorageError(f"Failed to read {self._path}: {e}") from e
        return parse_backup(text)

    def save(self, state: MonthState) -> bool:
        """Write the state to disk, replacing the previous document."""
        try:
            self._write_text(dump_backup(state))
        except OSError as e:
            raise StorageError(f"Failed to save {self._path}: {e}") from e
        return True
