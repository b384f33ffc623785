"""Tests for SQLiteSettingsStore."""

from __future__ import annotations

from datetime import date

from apex.core.storage.database import AppDatabase
from apex.core.storage.settings_store import SettingsStore, SQLiteSettingsStore


class TestIntegers:
    def test_missing_defaults_to_zero(self, settings_store):
        assert settings_store.get_integer("streak_count") == 0

    def test_round_trip(self, settings_store):
        settings_store.set_integer("streak_count", 4)
        assert settings_store.get_integer("streak_count") == 4

    def test_overwrite(self, settings_store):
        settings_store.set_integer("streak_count", 4)
        settings_store.set_integer("streak_count", 0)
        assert settings_store.get_integer("streak_count") == 0

    def test_garbage_value_reads_as_zero(self, settings_store, app_db):
        app_db.connection.execute(
            "INSERT INTO settings (key, value) VALUES ('streak_count', 'lots')"
        )
        assert settings_store.get_integer("streak_count") == 0


class TestDates:
    def test_missing_is_none(self, settings_store):
        assert settings_store.get_date("last_briefing_date") is None

    def test_stored_as_iso_day(self, settings_store, app_db):
        settings_store.set_date("last_briefing_date", date(2026, 3, 9))
        row = app_db.connection.execute(
            "SELECT value FROM settings WHERE key = 'last_briefing_date'"
        ).fetchone()
        assert row["value"] == "2026-03-09"
        assert settings_store.get_date("last_briefing_date") == date(2026, 3, 9)

    def test_garbage_value_reads_as_none(self, settings_store, app_db):
        app_db.connection.execute(
            "INSERT INTO settings (key, value) VALUES ('last_briefing_date', 'yesterday')"
        )
        assert settings_store.get_date("last_briefing_date") is None


def test_protocol_conformance(settings_store):
    assert isinstance(settings_store, SettingsStore)


def test_writes_survive_reopen(tmp_path):
    path = str(tmp_path / "apex.db")
    with AppDatabase(path) as db:
        store = SQLiteSettingsStore(db)
        store.set_integer("streak_count", 3)
        store.set_date("last_briefing_date", date(2026, 1, 2))
    with AppDatabase(path) as db:
        store = SQLiteSettingsStore(db)
        assert store.get_integer("streak_count") == 3
        assert store.get_date("last_briefing_date") == date(2026, 1, 2)
