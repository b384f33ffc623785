"""Day-over-day briefing streak.

The streak counts consecutive calendar days with at least one successful
morning briefing. State is ``{count, last_success_date}``, persisted in the
settings store under ``streak_count`` and ``last_briefing_date``.

Day boundaries come from ``calendar_today``: the device-local calendar day
unless an IANA timezone is configured, in which case that zone's day is
used. Comparisons are by calendar date only, so a briefing at 23:59 and
another at 00:01 count as two consecutive days.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Callable
from zoneinfo import ZoneInfo

from apex.core.storage.settings_store import SettingsStore

logger = logging.getLogger(__name__)

STREAK_COUNT_KEY = "streak_count"
LAST_SUCCESS_DATE_KEY = "last_briefing_date"


def calendar_today(tz_name: str = "") -> date:
    """Current calendar day under the configured timezone policy."""
    if tz_name:
        return datetime.now(ZoneInfo(tz_name)).date()
    return date.today()


@dataclass(frozen=True)
class StreakState:
    count: int
    last_success_date: date | None


class StreakTracker:
    """State machine over the persisted streak fields.

    Usage::

        tracker = StreakTracker(store)
        tracker.load()              # once, at startup
        ...
        tracker.record_success()    # after each successful briefing
    """

    def __init__(
        self,
        store: SettingsStore,
        today: Callable[[], date] = calendar_today,
    ) -> None:
        self._store = store
        self._today = today
        self._lock = threading.RLock()
        self._count = 0
        self._last_date: date | None = None
        self._loaded = False

    @property
    def count(self) -> int:
        return self._count

    @property
    def last_success_date(self) -> date | None:
        return self._last_date

    def snapshot(self) -> StreakState:
        return StreakState(count=self._count, last_success_date=self._last_date)

    def load(self) -> StreakState:
        """Adopt the persisted streak, zeroing it if it has already lapsed.

        A lapsed streak persists ``count = 0`` immediately but leaves the
        stored date alone; the next success then takes the "gap" branch of
        ``record_success`` and starts again at 1.
        """
        with self._lock:
            stored_date = self._store.get_date(LAST_SUCCESS_DATE_KEY)
            self._last_date = stored_date
            self._loaded = True
            if stored_date is None:
                self._count = 0
                return self.snapshot()

            today = self._today()
            if stored_date in (today, today - timedelta(days=1)):
                self._count = self._store.get_integer(STREAK_COUNT_KEY)
            else:
                logger.info("Streak lapsed (last briefing %s); resetting to 0", stored_date)
                self._count = 0
                self._store.set_integer(STREAK_COUNT_KEY, 0)
            return self.snapshot()

    def record_success(self) -> bool:
        """Advance the streak after a successful briefing.

        Returns:
            True if the streak changed, False if today was already counted.
        """
        with self._lock:
            if not self._loaded:
                self.load()
            today = self._today()
            last = self._store.get_date(LAST_SUCCESS_DATE_KEY)

            if last is None:
                new_count = 1
            elif last == today:
                return False
            elif last == today - timedelta(days=1):
                new_count = self._count + 1
            else:
                # Gap of more than one day, or a stored date in the future.
                new_count = 1

            self._store.set_integer(STREAK_COUNT_KEY, new_count)
            self._store.set_date(LAST_SUCCESS_DATE_KEY, today)
            self._count = new_count
            self._last_date = today
            logger.info("Streak advanced to %d (%s)", new_count, today.isoformat())
            return True
