"""
Repository for ``generated_actions``.

Writes are insert-only: ``insert_missing`` relies on the
``UNIQUE (assessment_id, template_id)`` constraint with ``INSERT OR IGNORE``,
so an existing row (possibly edited by a user since) is never updated or
deleted by the engine.
"""

from __future__ import annotations

import json
import logging
import sqlite3
from collections.abc import Sequence
from typing import Any, Optional

from dealer_diagnostics.db.repositories.base import BaseRepository
from dealer_diagnostics.models.action import GeneratedAction, StoredAction

logger = logging.getLogger(__name__)

_COLUMNS = (
    "assessment_id", "organization_id", "template_id", "signal_code", "module_key",
    "title", "description", "owner_role", "priority", "due_date", "status",
    "triggering_question_ids", "implementation_steps", "rationale",
)


class GeneratedActionRepository(BaseRepository):
    """CRUD-less access to generated actions: insert-if-missing and read."""

    def insert_missing(self, actions: Sequence[GeneratedAction]) -> int:
        """Insert actions whose ``(assessment_id, template_id)`` is not stored yet.

        Args:
            actions: Actions to persist.

        Returns:
            Number of rows actually inserted.
        """
        if not actions:
            return 0

        placeholders = ", ".join("?" for _ in _COLUMNS)
        sql = (
            f"INSERT OR IGNORE INTO generated_actions ({', '.join(_COLUMNS)}) "
            f"VALUES ({placeholders});"
        )
        before = self.conn.total_changes
        self.executemany(sql, [self._to_row(a) for a in actions])
        inserted = self.conn.total_changes - before

        skipped = len(actions) - inserted
        if skipped:
            logger.info("Skipped %d action(s) already stored.", skipped)
        return inserted

    def get_for_assessment(
        self,
        assessment_id: str,
        organization_id: Optional[str] = None,
    ) -> list[StoredAction]:
        """Rows stored for one assessment, in insertion order, edits included."""
        sql = "SELECT * FROM generated_actions WHERE assessment_id = ?"
        params: tuple[str, ...] = (assessment_id,)
        if organization_id is not None:
            sql += " AND organization_id = ?"
            params += (organization_id,)
        rows = self.fetchall(sql + " ORDER BY action_id;", params)
        return [self._from_row(r) for r in rows]

    def get_existing_keys(self, assessment_id: str) -> list[tuple[str, str]]:
        """(template_id, signal_code) of every row stored for one assessment."""
        rows = self.fetchall(
            "SELECT template_id, signal_code FROM generated_actions "
            "WHERE assessment_id = ? ORDER BY action_id;",
            (assessment_id,),
        )
        return [(r["template_id"], r["signal_code"]) for r in rows]

    def count_for_assessment(self, assessment_id: str) -> int:
        row = self.fetchone(
            "SELECT COUNT(*) AS n FROM generated_actions WHERE assessment_id = ?;",
            (assessment_id,),
        )
        return int(row["n"]) if row is not None else 0

    @staticmethod
    def _to_row(a: GeneratedAction) -> tuple:
        return (
            a.assessment_id,
            a.organization_id,
            a.template_id,
            a.signal_code.value,
            a.module_key,
            a.title,
            a.description,
            a.owner_role,
            a.priority.value,
            a.due_date.isoformat(),
            a.status.value,
            json.dumps(list(a.triggering_question_ids)),
            json.dumps(list(a.implementation_steps)),
            a.rationale,
        )

    @staticmethod
    def _from_row(row: sqlite3.Row) -> StoredAction:
        return StoredAction(
            action_id=row["action_id"],
            assessment_id=row["assessment_id"],
            organization_id=row["organization_id"],
            template_id=row["template_id"],
            signal_code=row["signal_code"],
            module_key=row["module_key"],
            title=row["title"] or "",
            description=row["description"] or "",
            owner_role=row["owner_role"] or "",
            priority=row["priority"] or "",
            due_date=row["due_date"] or "",
            status=row["status"] or "",
            triggering_question_ids=_decode_list(row["triggering_question_ids"]),
            implementation_steps=_decode_list(row["implementation_steps"]),
            rationale=row["rationale"] or "",
        )


def _decode_list(raw: Any) -> tuple[str, ...]:
    """Decode a JSON list column; anything else becomes an empty tuple."""
    try:
        value = json.loads(raw) if raw else []
    except (TypeError, json.JSONDecodeError):
        logger.warning("Unreadable list column value %r; treated as empty.", raw)
        return ()
    if not isinstance(value, list):
        return ()
    return tuple(str(v) for v in value)
