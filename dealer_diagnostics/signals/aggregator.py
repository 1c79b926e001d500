"""
Signal aggregation: module scores → ordered, deduplicated ``Signal`` list.

Algorithm
---------
1. A module is eligible when its score is defined and below
   ``improvement_threshold`` (default 70).
2. Every question in an eligible module is a candidate source.  Its mapping
   (explicit or category fallback) registers the primary code, plus the
   secondary code when the row's rule is ``weighted``.  ``NONE`` registers
   nothing.
3. Severity comes from the module score: below ``high_severity_below``
   (default 50) → HIGH, otherwise MEDIUM.
4. Candidates are grouped by ``(signal_code, module_key)``: question ids are
   unioned and the highest severity wins.
5. Output order: severity descending, then signal code, then module key.

Aggregation is a pure function of its inputs and never raises for
incomplete tables or modules missing from the questionnaire.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Optional

from dealer_diagnostics.data.questionnaire import QUESTIONNAIRE
from dealer_diagnostics.models.question import Questionnaire
from dealer_diagnostics.models.signal import Signal
from dealer_diagnostics.scoring.engine import HIGH_SEVERITY_BELOW, IMPROVEMENT_THRESHOLD
from dealer_diagnostics.signals.mapping import resolve_question_mapping
from dealer_diagnostics.taxonomy.module_taxonomy import module_display_name
from dealer_diagnostics.taxonomy.signal_taxonomy import SIGNAL_DESCRIPTIONS, Severity, SignalCode

logger = logging.getLogger(__name__)


@dataclass
class _Candidate:
    severity:     Severity
    question_ids: set[str] = field(default_factory=set)


def severity_for_score(score: int, high_severity_below: int = HIGH_SEVERITY_BELOW) -> Severity:
    return Severity.HIGH if score < high_severity_below else Severity.MEDIUM


def build_rationale(signal_code: SignalCode, module_key: str, trigger_count: int) -> str:
    """``"<description> in <Module> (<n> question(s) flagged)."``"""
    description = SIGNAL_DESCRIPTIONS.get(signal_code, signal_code.value)
    noun = "question" if trigger_count == 1 else "questions"
    return f"{description} in {module_display_name(module_key)} ({trigger_count} {noun} flagged)."


def aggregate_signals(
    module_scores: Mapping[str, Optional[int]],
    questionnaire: Questionnaire = QUESTIONNAIRE,
    *,
    improvement_threshold: int = IMPROVEMENT_THRESHOLD,
    high_severity_below: int = HIGH_SEVERITY_BELOW,
) -> list[Signal]:
    """Derive signals from module scores.

    Args:
        module_scores:         module_key → score (``None`` = undefined).
        questionnaire:         Question set supplying each module's questions.
        improvement_threshold: Modules scoring at or above this are skipped.
        high_severity_below:   Modules scoring below this yield HIGH signals.

    Returns:
        Signals sorted by severity (desc), signal code, module key.
    """
    candidates: dict[tuple[SignalCode, str], _Candidate] = {}

    for module_key, score in module_scores.items():
        if score is None or score >= improvement_threshold:
            continue

        questions = questionnaire.questions_for_module(module_key)
        if not questions:
            logger.warning("Module '%s' has a score but no questions; no signals derived.", module_key)
            continue

        severity = severity_for_score(score, high_severity_below)
        for question in questions:
            mapping = resolve_question_mapping(question)
            for code in mapping.candidate_codes():
                cand = candidates.setdefault((code, module_key), _Candidate(severity=severity))
                if severity.rank > cand.severity.rank:
                    cand.severity = severity
                cand.question_ids.add(question.question_id)

    signals = [
        Signal(
            signal_code=code,
            severity=cand.severity,
            module_key=module_key,
            triggering_question_ids=tuple(sorted(cand.question_ids)),
            rationale=build_rationale(code, module_key, len(cand.question_ids)),
        )
        for (code, module_key), cand in candidates.items()
    ]
    signals.sort(key=lambda s: (-s.severity.rank, s.signal_code.value, s.module_key))

    logger.debug("Aggregated %d signal(s) from %d module score(s).", len(signals), len(module_scores))
    return signals
