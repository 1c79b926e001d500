"""
Shared pytest fixtures for the dealership diagnostics test suite.

Provides:
  - ``in_memory_db``: A fresh in-memory SQLite connection with the schema
    applied. Created anew for each test that requests it.
  - ``make_answers``: factory building an answers dict for the live
    questionnaire with per-module ratings.
  - ``app_config``: an ``AppConfig`` pointing at a temporary DB and report dir.
  - Identity constants and sample signals/actions.
"""

from __future__ import annotations

import sqlite3
from datetime import date
from typing import Callable, Generator, Optional

import pytest

from dealer_diagnostics.config import AppConfig, DatabaseConfig, LoggingConfig, OutputConfig
from dealer_diagnostics.data.questionnaire import QUESTIONNAIRE
from dealer_diagnostics.db.schema import apply_schema
from dealer_diagnostics.models.signal import Signal
from dealer_diagnostics.taxonomy.module_taxonomy import ModuleKey
from dealer_diagnostics.taxonomy.signal_taxonomy import Severity, SignalCode

ORG_ID = "3f2b8c1e-9a4d-4e6f-8b2a-1c3d5e7f9a0b"
ASSESSMENT_ID = "a1b2c3d4-e5f6-4a7b-8c9d-0e1f2a3b4c5d"
OTHER_ASSESSMENT_ID = "b2c3d4e5-f6a7-4b8c-9d0e-1f2a3b4c5d6e"
COMPLETION_DATE = date(2026, 1, 10)


# ── Database fixture ──────────────────────────────────────────────────────────

@pytest.fixture
def in_memory_db() -> Generator[sqlite3.Connection, None, None]:
    """Yield a fresh in-memory SQLite connection with the schema applied."""
    conn = sqlite3.connect(":memory:")
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA foreign_keys = ON;")
    apply_schema(conn)
    yield conn
    conn.close()


# ── Config fixture ────────────────────────────────────────────────────────────

@pytest.fixture
def app_config(tmp_path) -> AppConfig:
    """An ``AppConfig`` with DB, reports and logs under ``tmp_path``."""
    return AppConfig(
        database=DatabaseConfig(db_path=str(tmp_path / "db" / "test.db")),
        output=OutputConfig(report_dir=str(tmp_path / "reports")),
        logging=LoggingConfig(log_file=""),
    )


# ── Answer factories ──────────────────────────────────────────────────────────

def ratings_for_score(module_key: str, score: int) -> dict[str, int]:
    """Ratings for one module that produce exactly ``score`` (100, 90, 40 or 20)."""
    questions = QUESTIONNAIRE.questions_for_module(module_key)
    if score == 90:
        # Alternating 5/4 over an even question count averages 4.5.
        return {q.question_id: (5 if i % 2 == 0 else 4) for i, q in enumerate(questions)}
    per_question = {100: 5, 80: 4, 60: 3, 40: 2, 20: 1}[score]
    return {q.question_id: per_question for q in questions}


@pytest.fixture
def make_answers() -> Callable[..., dict[str, int]]:
    """Factory: ``make_answers(default=100, **{module_key: score})``.

    Pass ``None`` as a module score to leave that module unanswered.
    """

    def _make(default: Optional[int] = 100, overrides: Optional[dict[str, Optional[int]]] = None):
        overrides = overrides or {}
        answers: dict[str, int] = {}
        for key in QUESTIONNAIRE.module_keys():
            score = overrides.get(key, default)
            if score is not None:
                answers.update(ratings_for_score(key, score))
        return answers

    return _make


# ── Sample signals ────────────────────────────────────────────────────────────

def make_signal(
    code: SignalCode,
    module_key: str = ModuleKey.PARTS_INVENTORY,
    severity: Severity = Severity.HIGH,
    question_ids: tuple[str, ...] = ("pts-1",),
) -> Signal:
    return Signal(
        signal_code=code,
        severity=severity,
        module_key=module_key,
        triggering_question_ids=question_ids,
        rationale=f"{code} test rationale",
    )


@pytest.fixture
def sample_signal() -> Signal:
    return make_signal(SignalCode.GOVERNANCE_WEAK, question_ids=("pts-1", "pts-10", "pts-4"))
