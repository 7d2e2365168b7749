"""
Tests for state persistence and the backup document codec.
"""

import json
from datetime import date

import pytest

from targetlock.config import TrackerSettings
from targetlock.models.records import DailyRecord, MonthState
from targetlock.services.storage import (
    BackupFormatError,
    InMemoryStorage,
    JsonFileStorage,
    StorageError,
    backup_filename,
    dump_backup,
    parse_backup,
)


@pytest.fixture
def state():
    return MonthState(
        monthly_target=3_100_000,
        meal_allowance_per_day=15_000,
        year=2024,
        month=6,
    ).with_record(DailyRecord(date="2024-07-01", items={"tas": 2}, kasbon=10_000, notes="Hujan ☔"))


class TestBackupCodec:
    """Tests for parse_backup and dump_backup."""

    def test_dump_uses_wire_names(self, state):
        data = json.loads(dump_backup(state))
        assert data["monthlyTarget"] == 3_100_000
        assert data["mealCost"] == 15_000
        assert data["currentMonth"] == 6
        record = data["records"]["2024-07-01"]
        assert record["isWorkDay"] is True
        assert record["manualDeductions"] == {"meal": True}

    def test_dump_keeps_unicode(self, state):
        assert "Hujan ☔" in dump_backup(state)

    def test_parse_restores_state(self, state):
        assert parse_backup(dump_backup(state)) == state

    def test_missing_fields_use_defaults(self):
        text = json.dumps({"monthlyTarget": 2_000_000, "records": {}, "currentYear": 0})
        state = parse_backup(
            text,
            defaults=TrackerSettings(default_meal_cost=20_000),
            today=date(2025, 3, 15),
        )
        assert state.meal_allowance_per_day == 20_000
        assert state.year == 2025
        assert state.month == 2

    def test_unknown_fields_in_records_are_kept_readable(self):
        text = json.dumps({
            "monthlyTarget": 2_000_000,
            "mealCost": 15_000,
            "currentYear": 2024,
            "currentMonth": 6,
            "records": {
                "2024-07-01": {
                    "date": "2024-07-01",
                    "isWorkDay": True,
                    "items": {"tas": -2, "retired_item": 3},
                    "kasbon": -100,
                    "manualDeductions": {"meal": True, "legacy": False},
                },
            },
        })
        record = parse_backup(text).records["2024-07-01"]
        assert record.items == {"tas": 0, "retired_item": 3}
        assert record.kasbon == 0

    @pytest.mark.parametrize("text", [
        "",
        "{not json",
        "42",
        '{"monthlyTarget": 0, "records": {}}',
        '{"monthlyTarget": 1000, "records": null}',
        '{"monthlyTarget": 1000, "records": {}, "currentMonth": 12}',
        '{"monthlyTarget": 1000, "records": {"2024-07-01": {"date": "2024-07-02"}}}',
    ])
    def test_rejects_bad_documents(self, text):
        with pytest.raises(BackupFormatError):
            parse_backup(text, today=date(2024, 7, 1))

    def test_parse_bytes(self, state):
        assert parse_backup(dump_backup(state).encode("utf-8")) == state

    def test_rejects_non_utf8_bytes(self):
        with pytest.raises(BackupFormatError, match="not UTF-8"):
            parse_backup(b"\xff\xfe{}")

    def test_backup_format_error_is_storage_error(self):
        assert issubclass(BackupFormatError, StorageError)

    def test_backup_filename(self):
        assert backup_filename(date(2024, 7, 1)) == "backup_targetlock_2024-07-01.json"


class TestJsonFileStorage:
    """Tests for the JSON file backend."""

    def test_load_missing_file(self, tmp_path):
        assert JsonFileStorage(tmp_path / "state.json").load() is None

    def test_save_then_load(self, tmp_path, state):
        storage = JsonFileStorage(tmp_path / "state.json")
        assert storage.save(state) is True
        assert storage.load() == state

    def test_saved_file_is_a_backup(self, tmp_path, state):
        path = tmp_path / "state.json"
        JsonFileStorage(path).save(state)
        assert parse_backup(path.read_text(encoding="utf-8")) == state

    def test_save_overwrites_without_leftovers(self, tmp_path, state):
        path = tmp_path / "state.json"
        storage = JsonFileStorage(path)
        storage.save(state)
        storage.save(state.replace(monthly_target=9_000_000))

        assert storage.load().monthly_target == 9_000_000
        assert [p.name for p in tmp_path.iterdir()] == ["state.json"]

    def test_load_drops_non_finite_values(self, tmp_path):
        """Test a saved file holding Infinity/NaN loads instead of crashing."""
        path = tmp_path / "state.json"
        path.write_text(
            '{"monthlyTarget": 5000000, "mealCost": 15000, "currentYear": 2024, "currentMonth": 6,'
            ' "records": {"2024-07-01": {"date": "2024-07-01",'
            ' "items": {"tas": Infinity, "topi": NaN, "koper": 2}, "kasbon": -Infinity}}}',
            encoding="utf-8",
        )
        record = JsonFileStorage(path).load().records["2024-07-01"]
        assert record.items == {"koper": 2}
        assert record.kasbon == 0

    def test_corrupt_file(self, tmp_path):
        path = tmp_path / "state.json"
        path.write_text("{oops", encoding="utf-8")
        with pytest.raises(StorageError):
            JsonFileStorage(path).load()

    def test_save_to_missing_directory(self, tmp_path, state):
        storage = JsonFileStorage(tmp_path / "missing" / "state.json")
        with pytest.raises(StorageError, match="Failed to save"):
            storage.save(state)


class TestInMemoryStorage:
    """Tests for the in-memory backend."""

    def test_empty(self):
        assert InMemoryStorage().load() is None

    def test_save_counts(self, state):
        storage = InMemoryStorage()
        storage.save(state)
        storage.save(state)
        assert storage.load() is state
        assert storage.save_count == 2
