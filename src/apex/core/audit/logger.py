"""Audit logger — local record of assistant skill invocations.

Every skill call leaves one row in ``audit_log`` so the user can answer
"how often did my logs leave this device?". Rows never contain the text
the user typed:

* ``input_hash``    — SHA-256 of canonical JSON of the skill input.
* ``llm_disclosed`` — whether the input was actually sent to the chat endpoint.
"""

from __future__ import annotations

import hashlib
import json
import logging
import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any

from apex.core.storage.database import AppDatabase

logger = logging.getLogger(__name__)


def _hash_input(data: Any) -> str:
    """SHA-256 hash of canonical JSON, or empty string on failure."""
    try:
        canonical = json.dumps(data, sort_keys=True, separators=(",", ":"))
        return hashlib.sha256(canonical.encode()).hexdigest()
    except (TypeError, ValueError):
        return ""


@dataclass
class AuditEvent:
    """A single audit log entry."""

    skill: str                      # 'briefing' | 'journaling' | 'motivation' | 'energizer'
    status: str                     # SkillOutcome status
    input_hash: str = ""
    llm_disclosed: bool = False
    duration_ms: float | None = None
    error_kind: str | None = None


class AuditLogger:
    """Records audit events to the ``audit_log`` SQLite table.

    Usage::

        audit = AuditLogger(db)
        audit.log_invocation("journaling", {"problem": "..."}, status="success",
                             llm_disclosed=True, duration_ms=412.0)
    """

    def __init__(self, database: AppDatabase) -> None:
        self._db = database

    def log_event(self, event: AuditEvent) -> str:
        """Insert an audit event and return its UUID, or "" if the write failed."""
        event_id = str(uuid.uuid4())
        now = datetime.now(timezone.utc).isoformat()

        try:
            conn = self._db.connection
            conn.execute(
                """INSERT INTO audit_log
                   (id, timestamp, skill, input_hash, llm_disclosed,
                    duration_ms, status, error_kind)
                   VALUES (?, ?, ?, ?, ?, ?, ?, ?)""",
                (
                    event_id,
                    now,
                    event.skill,
                    event.input_hash or None,
                    1 if event.llm_disclosed else 0,
                    event.duration_ms,
                    event.status,
                    event.error_kind,
                ),
            )
            conn.commit()
        except Exception:
            logger.exception("Failed to write audit event — event lost")
            return ""

        return event_id

    def log_invocation(
        self,
        skill: str,
        skill_input: Any = None,
        *,
        status: str,
        llm_disclosed: bool = False,
        duration_ms: float | None = None,
        error_kind: str | None = None,
    ) -> str:
        """Convenience wrapper for logging one skill invocation.

        Args:
            skill: Skill name.
            skill_input: Input data (hashed, never stored raw).
            status: Outcome status of the invocation.
            llm_disclosed: Whether the input was sent to the chat endpoint.
            duration_ms: Wall-clock duration of the invocation.
            error_kind: Failure kind, when the call failed.
        """
        return self.log_event(AuditEvent(
            skill=skill,
            status=status,
            input_hash=_hash_input(skill_input) if skill_input else "",
            llm_disclosed=llm_disclosed,
            duration_ms=duration_ms,
            error_kind=error_kind,
        ))

    def get_events(
        self,
        *,
        skill: str | None = None,
        since: str | None = None,
        limit: int = 50,
    ) -> list[dict[str, Any]]:
        """Query audit events, newest first."""
        conditions: list[str] = []
        params: list[Any] = []

        if skill:
            conditions.append("skill = ?")
            params.append(skill)
        if since:
            conditions.append("timestamp >= ?")
            params.append(since)

        where = (" WHERE " + " AND ".join(conditions)) if conditions else ""
        query = f"SELECT * FROM audit_log{where} ORDER BY timestamp DESC LIMIT ?"
        params.append(limit)

        rows = self._db.connection.execute(query, params).fetchall()
        return [dict(row) for row in rows]

    def count_events(self, *, since: str | None = None) -> int:
        """Count audit events, optionally since a timestamp."""
        if since:
            row = self._db.connection.execute(
                "SELECT COUNT(*) FROM audit_log WHERE timestamp >= ?", (since,)
            ).fetchone()
        else:
            row = self._db.connection.execute("SELECT COUNT(*) FROM audit_log").fetchone()
        return row[0]

    def count_disclosures(self, *, since: str | None = None) -> int:
        """Count invocations whose input was sent to the chat endpoint."""
        if since:
            row = self._db.connection.execute(
                "SELECT COUNT(*) FROM audit_log WHERE llm_disclosed = 1 AND timestamp >= ?",
                (since,),
            ).fetchone()
        else:
            row = self._db.connection.execute(
                "SELECT COUNT(*) FROM audit_log WHERE llm_disclosed = 1"
            ).fetchone()
        return row[0]
