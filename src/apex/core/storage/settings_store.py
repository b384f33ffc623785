"""Key-value settings store backed by the ``settings`` table."""

from __future__ import annotations

import logging
from datetime import date
from typing import Protocol, runtime_checkable

from apex.core.storage.database import AppDatabase

logger = logging.getLogger(__name__)


@runtime_checkable
class SettingsStore(Protocol):
    """Small persisted key-value interface used by the streak tracker."""

    def get_integer(self, key: str) -> int: ...

    def get_date(self, key: str) -> date | None: ...

    def set_integer(self, key: str, value: int) -> None: ...

    def set_date(self, key: str, value: date) -> None: ...


class SQLiteSettingsStore:
    """SettingsStore over SQLite. Every write is committed immediately.

    Dates are stored as ISO ``YYYY-MM-DD`` calendar days, so the value
    read back is the same day regardless of the reader's timezone.
    """

    def __init__(self, database: AppDatabase) -> None:
        self._db = database

    def get_integer(self, key: str) -> int:
        raw = self._get(key)
        if raw is None:
            return 0
        try:
            return int(raw)
        except ValueError:
            logger.warning("Ignoring non-integer value stored under %r", key)
            return 0

    def get_date(self, key: str) -> date | None:
        raw = self._get(key)
        if not raw:
            return None
        try:
            return date.fromisoformat(raw)
        except ValueError:
            logger.warning("Ignoring unparsable date stored under %r", key)
            return None

    def set_integer(self, key: str, value: int) -> None:
        self._set(key, str(int(value)))

    def set_date(self, key: str, value: date) -> None:
        self._set(key, value.isoformat())

    # ------------------------------------------------------------------

    def _get(self, key: str) -> str | None:
        row = self._db.connection.execute(
            "SELECT value FROM settings WHERE key = ?", (key,)
        ).fetchone()
        return None if row is None else row["value"]

    def _set(self, key: str, value: str) -> None:
        conn = self._db.connection
        conn.execute(
            """INSERT INTO settings (key, value, updated_at)
               VALUES (?, ?, datetime('now'))
               ON CONFLICT(key) DO UPDATE SET
                   value = excluded.value,
                   updated_at = excluded.updated_at""",
            (key, value),
        )
        conn.commit()
