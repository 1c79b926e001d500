"""
Tests for dealer_diagnostics/signals/aggregator.py.

What we test
------------
  - Scenario A: all modules at 100 → no signals.
  - Threshold edge: 70 → nothing, 69 → MEDIUM signals.
  - Severity edge: 49 → HIGH, 50 → MEDIUM.
  - Undefined modules and unknown modules contribute nothing.
  - Weighted rows add the secondary code; standard rows do not.
  - Grouping unions question ids (sorted) per (code, module).
  - Ordering: severity desc, then code, then module.
  - Scenario B: parts-inventory at 40 → five HIGH signals.
  - Category fallback questions still produce signals.
  - Custom thresholds are honoured.
"""

from __future__ import annotations

from dealer_diagnostics.models.question import Question, Questionnaire, QuestionnaireSection
from dealer_diagnostics.signals.aggregator import aggregate_signals, build_rationale
from dealer_diagnostics.taxonomy.module_taxonomy import CATEGORY_WEIGHTS, ModuleKey
from dealer_diagnostics.taxonomy.signal_taxonomy import Severity, SignalCode


def _scores(default=100, **overrides) -> dict:
    scores = {str(k): default for k in CATEGORY_WEIGHTS}
    for key, value in overrides.items():
        scores[key.replace("_", "-")] = value
    return scores


def _codes(signals) -> set:
    return {s.signal_code for s in signals}


class TestEligibility:
    def test_all_100_no_signals(self):
        assert aggregate_signals(_scores()) == []

    def test_score_70_is_not_weak(self):
        assert aggregate_signals(_scores(parts_inventory=70)) == []

    def test_score_69_is_weak(self):
        signals = aggregate_signals(_scores(parts_inventory=69))
        assert signals
        assert all(s.severity == Severity.MEDIUM for s in signals)
        assert all(s.module_key == ModuleKey.PARTS_INVENTORY for s in signals)

    def test_undefined_module_contributes_nothing(self):
        assert aggregate_signals(_scores(parts_inventory=None)) == []

    def test_unknown_module_contributes_nothing(self):
        assert aggregate_signals({"mystery-module": 10}) == []


class TestSeverity:
    def test_49_is_high(self):
        signals = aggregate_signals(_scores(financial_operations=49))
        assert {s.severity for s in signals} == {Severity.HIGH}

    def test_50_is_medium(self):
        signals = aggregate_signals(_scores(financial_operations=50))
        assert {s.severity for s in signals} == {Severity.MEDIUM}


class TestCandidates:
    def test_new_vehicle_sales_signals(self):
        signals = aggregate_signals(_scores(new_vehicle_sales=60))
        assert _codes(signals) == {
            SignalCode.CAPACITY_MISALIGNED,
            SignalCode.KPI_NOT_REVIEWED,
            SignalCode.PROCESS_NOT_EXECUTED,
            SignalCode.PROCESS_NOT_STANDARDISED,
            SignalCode.TOOL_UNDERUTILISED,
            SignalCode.ROLE_OWNERSHIP_MISSING,
            SignalCode.GOVERNANCE_WEAK,
        }

    def test_question_ids_are_unioned_and_sorted(self):
        signals = aggregate_signals(_scores(new_vehicle_sales=60))
        knr = next(s for s in signals if s.signal_code == SignalCode.KPI_NOT_REVIEWED)
        assert knr.triggering_question_ids == ("nvs-1", "nvs-2", "nvs-3", "nvs-4", "nvs-9")

    def test_weighted_secondary_registered(self):
        # GOVERNANCE_WEAK in NVS only comes from nvs-8's weighted secondary.
        signals = aggregate_signals(_scores(new_vehicle_sales=60))
        gwk = next(s for s in signals if s.signal_code == SignalCode.GOVERNANCE_WEAK)
        assert gwk.triggering_question_ids == ("nvs-8",)

    def test_standard_secondary_ignored(self):
        section = QuestionnaireSection(
            module_key="new-vehicle-sales",
            title="NVS",
            questions=(
                Question(question_id="nvs-3", module_key="new-vehicle-sales",
                         text="CSI", category="satisfaction"),
            ),
        )
        qn = Questionnaire(title="T", sections=(section,))
        signals = aggregate_signals({"new-vehicle-sales": 30}, qn)
        assert _codes(signals) == {SignalCode.KPI_NOT_REVIEWED}

    def test_one_signal_per_code_and_module(self):
        signals = aggregate_signals(_scores(new_vehicle_sales=60, parts_inventory=60))
        keys = [(s.signal_code, s.module_key) for s in signals]
        assert len(keys) == len(set(keys))

    def test_category_fallback_question(self):
        section = QuestionnaireSection(
            module_key="service-performance",
            title="Service",
            questions=(
                Question(question_id="svc-new", module_key="service-performance",
                         text="Loaner fleet size", category=" Facility "),
                Question(question_id="svc-odd", module_key="service-performance",
                         text="Something else", category="astrology"),
            ),
        )
        qn = Questionnaire(title="T", sections=(section,))
        signals = aggregate_signals({"service-performance": 40}, qn)
        assert len(signals) == 1
        assert signals[0].signal_code == SignalCode.CAPACITY_MISALIGNED
        assert signals[0].triggering_question_ids == ("svc-new",)


class TestOrdering:
    def test_severity_then_code_then_module(self):
        signals = aggregate_signals(_scores(new_vehicle_sales=60, parts_inventory=40))
        keys = [(-s.severity.rank, s.signal_code.value, s.module_key) for s in signals]
        assert keys == sorted(keys)
        assert signals[0].severity == Severity.HIGH
        assert signals[-1].severity == Severity.MEDIUM

    def test_deterministic(self):
        scores = _scores(used_vehicle_sales=55, service_performance=35)
        first = aggregate_signals(scores)
        for _ in range(5):
            assert aggregate_signals(dict(reversed(list(scores.items())))) == first


class TestScenarioB:
    def test_parts_inventory_at_40(self):
        signals = aggregate_signals(_scores(default=90, parts_inventory=40))
        assert [s.signal_code for s in signals] == [
            SignalCode.CAPACITY_MISALIGNED,
            SignalCode.GOVERNANCE_WEAK,
            SignalCode.KPI_NOT_REVIEWED,
            SignalCode.PROCESS_NOT_EXECUTED,
            SignalCode.PROCESS_NOT_STANDARDISED,
        ]
        assert {s.severity for s in signals} == {Severity.HIGH}

        by_code = {s.signal_code: s for s in signals}
        assert by_code[SignalCode.GOVERNANCE_WEAK].triggering_question_ids == (
            "pts-1", "pts-10", "pts-4",
        )
        assert by_code[SignalCode.PROCESS_NOT_STANDARDISED].triggering_question_ids == (
            "pts-1", "pts-3", "pts-5", "pts-6",
        )


class TestThresholdOverrides:
    def test_custom_thresholds(self):
        scores = _scores(parts_inventory=75)
        assert aggregate_signals(scores) == []
        signals = aggregate_signals(scores, improvement_threshold=80, high_severity_below=76)
        assert signals and {s.severity for s in signals} == {Severity.HIGH}


class TestRationale:
    def test_format(self):
        text = build_rationale(SignalCode.GOVERNANCE_WEAK, "parts-inventory", 3)
        assert text == (
            "Management oversight and governance structures need improvement "
            "in Parts & Inventory (3 questions flagged)."
        )

    def test_singular(self):
        assert build_rationale(SignalCode.KPI_NOT_REVIEWED, "service-performance", 1).endswith(
            "(1 question flagged)."
        )
