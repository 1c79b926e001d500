"""
Tests for dealer_diagnostics/pipeline/complete_assessment.py.

What we test
------------
analyze_assessment():
  - Scenario A: all 100 → overall 100, no signals, no actions.
  - Scenario B: overall 82.5, ten actions, two per signal.
  - generate=False skips identity checks and actions.
  - Live questionnaire raises no UnmappedQuestion diagnostics.

AssessmentCompletionStage.run():
  - Persists actions to a temporary SQLite file.
  - A second run inserts nothing and leaves edits untouched, including a
    rewritten description and priority.
  - Feature flag off → success with zero actions, nothing stored.
  - Missing context → success=False, actions_generated=0, a MissingContext
    diagnostic, nothing stored.
  - write_report writes JSON + CSV; a re-run still reports every stored action.
"""

from __future__ import annotations

import csv
import json

import pytest

from dealer_diagnostics.config import ActionsConfig
from dealer_diagnostics.db.connection import get_connection
from dealer_diagnostics.db.repositories.action_repo import GeneratedActionRepository
from dealer_diagnostics.db.schema import apply_schema
from dealer_diagnostics.diagnostics import DiagnosticCode
from dealer_diagnostics.pipeline.complete_assessment import (
    AssessmentCompletionStage,
    analyze_assessment,
)

from conftest import ASSESSMENT_ID, COMPLETION_DATE, ORG_ID


def _stored(db_path: str) -> list:
    with get_connection(db_path) as conn:
        apply_schema(conn)
        return GeneratedActionRepository(conn).get_for_assessment(ASSESSMENT_ID)


class TestAnalyzeAssessment:
    def test_scenario_a(self, make_answers):
        analysis = analyze_assessment(
            make_answers(),
            assessment_id=ASSESSMENT_ID,
            organization_id=ORG_ID,
            completion_date=COMPLETION_DATE,
        )
        assert analysis.score_card.overall_score == pytest.approx(100.0)
        assert analysis.signals == ()
        assert analysis.generation.actions == ()
        assert analysis.diagnostics == ()

    def test_scenario_b(self, make_answers):
        analysis = analyze_assessment(
            make_answers(default=90, overrides={"parts-inventory": 40}),
            assessment_id=ASSESSMENT_ID,
            organization_id=ORG_ID,
            completion_date=COMPLETION_DATE,
        )
        assert analysis.score_card.module_scores["parts-inventory"] == 40
        assert analysis.score_card.overall_score == pytest.approx(82.5)
        assert len(analysis.signals) == 5
        assert len(analysis.generation.actions) == 10

    def test_generate_false(self, make_answers):
        analysis = analyze_assessment(make_answers(default=40), generate=False)
        assert analysis.signals
        assert analysis.generation.actions == ()

    def test_partial_answers_reported(self, make_answers):
        analysis = analyze_assessment(
            make_answers(overrides={"financial-operations": None}), generate=False
        )
        assert [d.code for d in analysis.diagnostics] == [DiagnosticCode.DATA_INCOMPLETE]


class TestAssessmentCompletionStage:
    def test_persists_actions(self, app_config, make_answers):
        stage = AssessmentCompletionStage(config=app_config)
        result = stage.run(
            assessment_id=ASSESSMENT_ID,
            organization_id=ORG_ID,
            answers=make_answers(default=90, overrides={"parts-inventory": 40}),
            completion_date=COMPLETION_DATE,
        )
        assert result.success
        assert result.actions_generated == 10
        assert len(_stored(app_config.database.db_path)) == 10

    def test_second_run_is_idempotent(self, app_config, make_answers):
        stage = AssessmentCompletionStage(config=app_config)
        answers = make_answers(default=90, overrides={"parts-inventory": 40})
        stage.run(ASSESSMENT_ID, ORG_ID, answers, completion_date=COMPLETION_DATE)

        with get_connection(app_config.database.db_path) as conn:
            conn.execute(
                "UPDATE generated_actions SET status = 'Completed' WHERE template_id = 'ACT-GWK-001';"
            )

        second = stage.run(ASSESSMENT_ID, ORG_ID, answers, completion_date=COMPLETION_DATE)
        assert second.success
        assert second.actions_generated == 0

        stored = {a.template_id: a for a in _stored(app_config.database.db_path)}
        assert len(stored) == 10
        assert stored["ACT-GWK-001"].status == "Completed"

    def test_feature_flag_off(self, app_config, make_answers):
        config = app_config.model_copy(
            update={"actions": ActionsConfig(enable_auto_actions=False)}
        )
        result = AssessmentCompletionStage(config=config).run(
            ASSESSMENT_ID, ORG_ID, make_answers(default=40), completion_date=COMPLETION_DATE
        )
        assert result.success
        assert result.actions_generated == 0
        assert result.analysis.signals
        assert _stored(config.database.db_path) == []

    def test_missing_context(self, app_config, make_answers):
        result = AssessmentCompletionStage(config=app_config).run(
            ASSESSMENT_ID, "", make_answers(default=40), completion_date=COMPLETION_DATE
        )
        assert not result.success
        assert result.actions_generated == 0
        assert "organization_id" in result.error
        assert [d.code for d in result.diagnostics] == [DiagnosticCode.MISSING_CONTEXT]
        assert result.diagnostics[0].subject == "organization_id"
        assert _stored(app_config.database.db_path) == []

    def test_no_persist(self, app_config, make_answers):
        result = AssessmentCompletionStage(config=app_config).run(
            ASSESSMENT_ID, ORG_ID, make_answers(default=40),
            completion_date=COMPLETION_DATE, persist=False,
        )
        assert result.success
        assert result.actions_generated == len(result.analysis.generation.actions) > 0
        assert _stored(app_config.database.db_path) == []

    def test_write_report(self, app_config, make_answers, tmp_path):
        result = AssessmentCompletionStage(config=app_config).run(
            ASSESSMENT_ID, ORG_ID, make_answers(default=40),
            completion_date=COMPLETION_DATE, write_report=True,
        )
        names = sorted(p.name for p in result.report_paths)
        assert names == [f"action_plan_{ASSESSMENT_ID}.csv", f"action_plan_{ASSESSMENT_ID}.json"]
        assert all(p.exists() for p in result.report_paths)

    def test_rerun_after_description_and_priority_edit(self, app_config, make_answers):
        stage = AssessmentCompletionStage(config=app_config)
        answers = make_answers(default=90, overrides={"parts-inventory": 40})
        stage.run(ASSESSMENT_ID, ORG_ID, answers, completion_date=COMPLETION_DATE)

        with get_connection(app_config.database.db_path) as conn:
            conn.execute(
                "UPDATE generated_actions SET description = 'Owner notes: call vendor', "
                "priority = 'LOW' WHERE template_id = 'ACT-GWK-001';"
            )

        second = stage.run(ASSESSMENT_ID, ORG_ID, answers, completion_date=COMPLETION_DATE)
        assert second.success
        assert second.actions_generated == 0
        assert len(second.plan_actions) == 10

        stored = {a.template_id: a for a in _stored(app_config.database.db_path)}
        assert stored["ACT-GWK-001"].description == "Owner notes: call vendor"
        assert stored["ACT-GWK-001"].priority == "LOW"

    def test_rerun_report_lists_stored_actions(self, app_config, make_answers):
        stage = AssessmentCompletionStage(config=app_config)
        answers = make_answers(default=90, overrides={"parts-inventory": 40})
        first = stage.run(
            ASSESSMENT_ID, ORG_ID, answers, completion_date=COMPLETION_DATE, write_report=True
        )
        with get_connection(app_config.database.db_path) as conn:
            conn.execute(
                "UPDATE generated_actions SET status = 'In Progress' "
                "WHERE template_id = 'ACT-GWK-001';"
            )

        second = stage.run(
            ASSESSMENT_ID, ORG_ID, answers, completion_date=COMPLETION_DATE, write_report=True
        )
        assert first.actions_generated == 10
        assert second.actions_generated == 0

        paths = {p.suffix: p for p in second.report_paths}
        payload = json.loads(paths[".json"].read_text(encoding="utf-8"))
        assert len(payload["actions"]) == 10
        with paths[".csv"].open(newline="", encoding="utf-8") as f:
            rows = list(csv.DictReader(f))
        assert len(rows) == 10
        assert {r["template_id"]: r["status"] for r in rows}["ACT-GWK-001"] == "In Progress"
