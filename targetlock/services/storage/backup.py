"""
Backup Document Codec

The backup format is an open JSON object with the fields
monthlyTarget, mealCost, currentYear, currentMonth and records.
Existing backups must stay importable, so field names are fixed.
"""

import json
from datetime import date
from typing import Optional, Union

from pydantic import ValidationError

from targetlock.config import TrackerSettings
from targetlock.models.records import MonthState
from targetlock.services.storage.interface import BackupFormatError


def parse_backup(
    text: Union[str, bytes],
    defaults: Optional[TrackerSettings] = None,
    today: Optional[date] = None,
) -> MonthState:
    """
    Parse a backup document into a MonthState.

    Raw bytes (an uploaded file) must be UTF-8. Documents without a truthy
    monthlyTarget or without a records object are rejected. mealCost,
    currentYear and currentMonth fall back to the configured meal cost and
    the current month.

    Raises:
        BackupFormatError: If the document cannot be used
    """
    if isinstance(text, bytes):
        try:
            text = text.decode("utf-8")
        except UnicodeDecodeError as e:
            raise BackupFormatError(f"Backup is not UTF-8 text: {e}") from e

    try:
        data = json.loads(text)
    except (TypeError, ValueError) as e:
        raise BackupFormatError(f"Backup is not valid JSON: {e}") from e

    if not isinstance(data, dict):
        raise BackupFormatError("Backup must be a JSON object")

    missing = []
    if not data.get("monthlyTarget"):
        missing.append("monthlyTarget")
    if not isinstance(data.get("records"), dict):
        missing.append("records")
    if missing:
        raise BackupFormatError(f"Backup is missing required fields: {', '.join(missing)}")

    defaults = defaults or TrackerSettings()
    today = today or date.today()
    data.setdefault("mealCost", defaults.default_meal_cost)
    if not data.get("currentYear"):
        data["currentYear"] = today.year
    data.setdefault("currentMonth", today.month - 1)

    try:
        return MonthState.model_validate(data)
    except ValidationError as e:
        raise BackupFormatError(f"Backup does not describe a valid month state: {e}") from e


def dump_backup(state: MonthState) -> str:
    """Serialize a state to the backup document format."""
    return json.dumps(state.to_backup_dict(), indent=2, ensure_ascii=False)


def backup_filename(day: date) -> str:
    return f"backup_targetlock_{day.isoformat()}.json"
