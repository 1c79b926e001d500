"""
SQLite schema DDL for generated actions.

All statements use ``IF NOT EXISTS`` so ``apply_schema()`` is idempotent.

``generated_actions`` carries ``UNIQUE (assessment_id, template_id)``: the
idempotency key for actions.  Writers use ``INSERT OR IGNORE`` against it, so
two concurrent completions of the same assessment can never create a
duplicate, and a re-run never overwrites a row a user has since edited.
"""

from __future__ import annotations

import logging
import sqlite3

logger = logging.getLogger(__name__)

# ── DDL statements ─────────────────────────────────────────────────────────────

_DDL_GENERATED_ACTIONS = """
CREATE TABLE IF NOT EXISTS generated_actions (
    action_id               INTEGER PRIMARY KEY AUTOINCREMENT,
    assessment_id           TEXT    NOT NULL,
    organization_id         TEXT    NOT NULL,
    template_id             TEXT    NOT NULL,
    signal_code             TEXT    NOT NULL,
    module_key              TEXT    NOT NULL,
    title                   TEXT    NOT NULL,
    description             TEXT    NOT NULL,
    owner_role              TEXT    NOT NULL,
    priority                TEXT    NOT NULL CHECK (priority IN ('LOW', 'MEDIUM', 'HIGH')),
    due_date                TEXT    NOT NULL,
    status                  TEXT    NOT NULL DEFAULT 'Open'
                                    CHECK (status IN ('Open', 'In Progress', 'Completed')),
    triggering_question_ids TEXT    NOT NULL DEFAULT '[]',
    implementation_steps    TEXT    NOT NULL DEFAULT '[]',
    rationale               TEXT    NOT NULL DEFAULT '',
    created_at              TEXT    NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%SZ', 'now')),
    UNIQUE (assessment_id, template_id)
);
"""

_DDL_GENERATED_ACTIONS_INDEXES = """
CREATE INDEX IF NOT EXISTS idx_generated_actions_org
    ON generated_actions (organization_id, assessment_id);
"""

_ALL_DDL: list[str] = [
    _DDL_GENERATED_ACTIONS,
    _DDL_GENERATED_ACTIONS_INDEXES,
]

# Table names for introspection / tests
ALL_TABLE_NAMES = [
    "generated_actions",
]


def apply_schema(conn: sqlite3.Connection) -> None:
    """Apply all DDL statements to ``conn``.  Idempotent."""
    logger.debug("Applying schema to database...")

    for ddl in _ALL_DDL:
        for statement in _split_ddl(ddl):
            conn.execute(statement)

    conn.commit()
    logger.info("Schema applied: %d table(s), indexes created/verified.", len(ALL_TABLE_NAMES))


def _split_ddl(ddl: str) -> list[str]:
    """Split a multi-statement DDL block on semicolons."""
    return [s.strip() for s in ddl.split(";") if s.strip()]


def get_existing_tables(conn: sqlite3.Connection) -> list[str]:
    """Return table names present in the database (sorted)."""
    rows = conn.execute(
        "SELECT name FROM sqlite_master WHERE type='table' ORDER BY name;"
    ).fetchall()
    return [row["name"] for row in rows]
