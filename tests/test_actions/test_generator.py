"""
Tests for dealer_diagnostics/actions/generator.py.

What we test
------------
  - Identity: missing, blank and non-UUID ids raise MissingContextError
    before anything is produced; UUID check can be relaxed.
  - Templates taken in declared order up to the per-signal cap.
  - KPI_NOT_DEFINED produces exactly one action.
  - Cap is per signal code across modules (global template dedup).
  - Existing (template_id, signal_code) keys count toward the cap and are
    never returned.
  - Re-running with the previous output as existing → zero new actions.
  - Due date = completion date + template timeframe; status Open.
  - Missing entry / template → TemplateNotFound diagnostics.
  - Scenario A (no signals) and scenario B (two actions per signal).
"""

from __future__ import annotations

from datetime import date

import pytest

import dealer_diagnostics.actions.generator as generator_module
from dealer_diagnostics.actions.generator import generate_actions
from dealer_diagnostics.diagnostics import DiagnosticCode, MissingContextError
from dealer_diagnostics.models.action import SignalToActionEntry
from dealer_diagnostics.signals.aggregator import aggregate_signals
from dealer_diagnostics.taxonomy.module_taxonomy import CATEGORY_WEIGHTS
from dealer_diagnostics.taxonomy.signal_taxonomy import ActionStatus, Priority, SignalCode

from conftest import ASSESSMENT_ID, COMPLETION_DATE, ORG_ID, make_signal


def _keys(actions):
    return [(a.template_id, a.signal_code) for a in actions]


def _generate(signals, **kwargs):
    params = dict(
        assessment_id=ASSESSMENT_ID,
        organization_id=ORG_ID,
        completion_date=COMPLETION_DATE,
    )
    params.update(kwargs)
    return generate_actions(signals, **params)


# ── Identity ──────────────────────────────────────────────────────────────────

class TestIdentity:
    @pytest.mark.parametrize("field, value", [
        ("organization_id", None),
        ("organization_id", ""),
        ("organization_id", "   "),
        ("organization_id", "org-123"),
        ("assessment_id", None),
        ("assessment_id", "not-a-uuid"),
        ("assessment_id", "a1b2c3d4-e5f6-4a7b-8c9d-0e1f2a3b4c5"),
    ])
    def test_bad_identity_raises(self, field, value, sample_signal):
        with pytest.raises(MissingContextError) as exc_info:
            _generate([sample_signal], **{field: value})
        assert exc_info.value.field == field
        assert exc_info.value.to_diagnostic().code == DiagnosticCode.MISSING_CONTEXT

    def test_raises_even_without_signals(self):
        with pytest.raises(MissingContextError):
            _generate([], organization_id=None)

    def test_uppercase_uuid_accepted(self, sample_signal):
        result = _generate([sample_signal], organization_id=ORG_ID.upper())
        assert len(result.actions) == 2

    def test_uuid_check_can_be_relaxed(self, sample_signal):
        result = _generate(
            [sample_signal], assessment_id="asmt-1", organization_id="org-1",
            require_uuid_identity=False,
        )
        assert len(result.actions) == 2

    def test_blank_rejected_even_when_relaxed(self, sample_signal):
        with pytest.raises(MissingContextError):
            _generate([sample_signal], organization_id="", require_uuid_identity=False)


# ── Generation ────────────────────────────────────────────────────────────────

class TestGeneration:
    def test_no_signals_no_actions(self):
        result = _generate([])
        assert result.actions == ()
        assert result.diagnostics == ()

    def test_templates_in_declared_order(self, sample_signal):
        result = _generate([sample_signal])
        assert [a.template_id for a in result.actions] == ["ACT-GWK-001", "ACT-GWK-002"]

    def test_action_fields(self, sample_signal):
        action = _generate([sample_signal]).actions[1]
        assert action.assessment_id == ASSESSMENT_ID
        assert action.organization_id == ORG_ID
        assert action.signal_code == SignalCode.GOVERNANCE_WEAK
        assert action.module_key == "parts-inventory"
        assert action.title == "Improve inventory and aged stock management"
        assert action.description.startswith("Triggered because: GOVERNANCE_WEAK.")
        assert action.owner_role == "Used Vehicle Manager"
        assert action.priority == Priority.HIGH
        assert action.status == ActionStatus.OPEN
        assert action.triggering_question_ids == ("pts-1", "pts-10", "pts-4")
        assert action.rationale == sample_signal.rationale
        assert len(action.implementation_steps) == 6

    def test_due_date(self):
        signal = make_signal(SignalCode.PROCESS_NOT_EXECUTED)
        actions = _generate([signal]).actions
        assert actions[0].due_date == date(2026, 1, 24)   # +14 days
        assert actions[1].due_date == date(2026, 1, 17)   # +7 days

    def test_kpi_not_defined_single_action(self):
        result = _generate([make_signal(SignalCode.KPI_NOT_DEFINED)])
        assert [a.template_id for a in result.actions] == ["ACT-KND-001"]

    def test_cap_applies_across_modules(self):
        signals = [
            make_signal(SignalCode.TOOL_UNDERUTILISED, module_key="new-vehicle-sales"),
            make_signal(SignalCode.TOOL_UNDERUTILISED, module_key="service-performance"),
        ]
        result = _generate(signals)
        assert [a.template_id for a in result.actions] == ["ACT-TUU-001", "ACT-TUU-002"]
        assert {a.module_key for a in result.actions} == {"new-vehicle-sales"}

    def test_no_duplicate_template_ids(self):
        signals = aggregate_signals({str(k): 30 for k in CATEGORY_WEIGHTS})
        result = _generate(signals)
        ids = [a.template_id for a in result.actions]
        assert len(ids) == len(set(ids))

    def test_cap_never_exceeded(self):
        signals = aggregate_signals({str(k): 30 for k in CATEGORY_WEIGHTS})
        result = _generate(signals)
        per_code: dict = {}
        for a in result.actions:
            per_code[a.signal_code] = per_code.get(a.signal_code, 0) + 1
        assert all(n <= 2 for n in per_code.values())

    def test_scenario_b(self):
        scores = {str(k): 90 for k in CATEGORY_WEIGHTS}
        scores["parts-inventory"] = 40
        result = _generate(aggregate_signals(scores))
        per_code: dict = {}
        for a in result.actions:
            per_code[a.signal_code] = per_code.get(a.signal_code, 0) + 1
        assert per_code == {
            SignalCode.CAPACITY_MISALIGNED: 2,
            SignalCode.GOVERNANCE_WEAK: 2,
            SignalCode.KPI_NOT_REVIEWED: 2,
            SignalCode.PROCESS_NOT_EXECUTED: 2,
            SignalCode.PROCESS_NOT_STANDARDISED: 2,
        }


# ── Existing actions / idempotency ────────────────────────────────────────────

class TestExistingActions:
    def test_rerun_generates_nothing(self, sample_signal):
        first = _generate([sample_signal])
        second = _generate([sample_signal], existing_keys=_keys(first.actions))
        assert second.actions == ()

    def test_existing_count_toward_cap(self, sample_signal):
        result = _generate([sample_signal], existing_keys=[("ACT-GWK-002", "GOVERNANCE_WEAK")])
        assert [a.template_id for a in result.actions] == ["ACT-GWK-001"]

    def test_existing_not_returned(self, sample_signal):
        result = _generate([sample_signal], existing_keys=[("ACT-GWK-001", "GOVERNANCE_WEAK")])
        assert [a.template_id for a in result.actions] == ["ACT-GWK-002"]

    def test_existing_key_of_another_code_still_blocks_template(self, sample_signal):
        # Template ids are deduplicated regardless of the stored signal code.
        result = _generate([sample_signal], existing_keys=[("ACT-GWK-001", "EDITED_CODE")])
        assert [a.template_id for a in result.actions] == ["ACT-GWK-002"]


# ── Diagnostics ───────────────────────────────────────────────────────────────

class TestTemplateNotFound:
    def test_missing_entry(self, monkeypatch, sample_signal):
        monkeypatch.setattr(generator_module, "get_signal_to_action_entry", lambda code: None)
        result = _generate([sample_signal])
        assert result.actions == ()
        assert [d.code for d in result.diagnostics] == [DiagnosticCode.TEMPLATE_NOT_FOUND]
        assert result.diagnostics[0].subject == "GOVERNANCE_WEAK"

    def test_missing_template_skipped(self, monkeypatch):
        entry = SignalToActionEntry(
            signal_code=SignalCode.PROCESS_NOT_STANDARDISED,
            template_ids=("ACT-XXX-999", "ACT-PNS-001"),
            max_actions_per_assessment=2,
        )
        monkeypatch.setattr(generator_module, "get_signal_to_action_entry", lambda code: entry)
        signals = [
            make_signal(SignalCode.PROCESS_NOT_STANDARDISED, module_key="parts-inventory"),
            make_signal(SignalCode.PROCESS_NOT_STANDARDISED, module_key="used-vehicle-sales"),
        ]
        result = _generate(signals)
        assert [a.template_id for a in result.actions] == ["ACT-PNS-001"]
        assert len(result.diagnostics) == 1
        assert result.diagnostics[0].subject == "ACT-XXX-999"
