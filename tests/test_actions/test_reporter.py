"""Tests for action plan JSON / CSV writers."""

from __future__ import annotations

import csv
import json

from dealer_diagnostics.actions.reporter import write_action_plan_csv, write_action_plan_json
from dealer_diagnostics.pipeline.complete_assessment import analyze_assessment

from conftest import ASSESSMENT_ID, COMPLETION_DATE, ORG_ID


def _analysis(make_answers, **overrides):
    return analyze_assessment(
        make_answers(default=90, overrides={"parts-inventory": 40, **overrides}),
        assessment_id=ASSESSMENT_ID,
        organization_id=ORG_ID,
        completion_date=COMPLETION_DATE,
    )


class TestWriteActionPlanJson:
    def test_payload(self, make_answers, tmp_path):
        path = write_action_plan_json(_analysis(make_answers), tmp_path / "out", ASSESSMENT_ID)
        payload = json.loads(path.read_text(encoding="utf-8"))

        assert payload["assessment_id"] == ASSESSMENT_ID
        assert payload["overall_score"] == 82.5
        assert payload["maturity_level"] == "mature"
        assert [m["module_key"] for m in payload["module_scores"]][0] == "new-vehicle-sales"
        assert len(payload["signals"]) == 5
        assert payload["signals"][1]["title"] == "Governance improvement opportunity"
        assert len(payload["actions"]) == 10
        assert payload["actions"][0]["due_date"] == "2026-02-09"
        assert payload["diagnostics"] == []

    def test_unscored_assessment(self, make_answers, tmp_path):
        analysis = analyze_assessment({}, generate=False)
        payload = json.loads(write_action_plan_json(analysis, tmp_path, "x").read_text())
        assert payload["overall_score"] is None
        assert payload["maturity_level"] is None
        assert len(payload["diagnostics"]) == 6


class TestWriteActionPlanCsv:
    def test_rows(self, make_answers, tmp_path):
        actions = _analysis(make_answers).generation.actions
        path = write_action_plan_csv(actions, tmp_path, ASSESSMENT_ID)
        with path.open(newline="", encoding="utf-8") as f:
            rows = list(csv.DictReader(f))

        assert len(rows) == 10
        assert rows[0]["template_id"] == "ACT-CMA-001"
        assert rows[0]["module"] == "Parts & Inventory"
        assert rows[0]["status"] == "Open"
        assert rows[0]["triggering_questions"] == "pts-2;pts-8"

    def test_empty(self, tmp_path):
        path = write_action_plan_csv([], tmp_path, ASSESSMENT_ID)
        assert path.read_text(encoding="utf-8").startswith("template_id,")
