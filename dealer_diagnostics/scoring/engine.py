"""
Scoring engine: converts raw per-question ratings into module scores and one
weighted overall score.

Module score
------------
    module_score = round_half_up(mean(valid answers in module) / 5 * 100)

Computed with ``fractions.Fraction`` so ``x.5`` always rounds up (no binary
float surprises, no banker's rounding).  A module with no valid answer has
score ``None``, never 0.

A *valid* answer is an ``int`` in 1..5.  Booleans, floats, strings and
out-of-range integers are treated as unanswered and logged at WARNING.

Overall score
-------------
    overall = Σ score(m) * w(m) / Σ w(m)      over modules with a defined score

The division by ``Σ w(m)`` (renormalization) keeps a partially answered
assessment on the 0–100 scale.  With ``renormalize=False`` undefined modules
simply contribute nothing.  Summation order is fixed (sorted module keys,
``math.fsum``) so the result does not depend on dict ordering.  The result is
clamped to [0, 100] and rounded to 2 dp.

Thresholds
----------
IMPROVEMENT_THRESHOLD : modules scoring below this are eligible for signals.
HIGH_SEVERITY_BELOW   : modules scoring below this produce HIGH signals.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from fractions import Fraction
from typing import Any, Optional

from dealer_diagnostics.data.questionnaire import QUESTIONNAIRE
from dealer_diagnostics.diagnostics import Diagnostic, DiagnosticCode
from dealer_diagnostics.models.question import Question, Questionnaire
from dealer_diagnostics.taxonomy.module_taxonomy import CATEGORY_WEIGHTS

logger = logging.getLogger(__name__)

IMPROVEMENT_THRESHOLD: int = 70
HIGH_SEVERITY_BELOW: int = 50

SCALE_MIN: int = 1
SCALE_MAX: int = 5

_WEIGHT_TOLERANCE = 1e-9


def _clamp(value: float, lo: float = 0.0, hi: float = 100.0) -> float:
    return max(lo, min(hi, value))


def is_valid_answer(value: Any) -> bool:
    """True for an ``int`` rating in 1..5 (``bool`` is rejected)."""
    return type(value) is int and SCALE_MIN <= value <= SCALE_MAX


# ── Module scores ─────────────────────────────────────────────────────────────


def compute_module_score(
    module_questions: Iterable[Question],
    answers: Mapping[str, Any],
) -> Optional[int]:
    """Score one module from the answers to its questions.

    Args:
        module_questions: Questions belonging to the module.
        answers:          Mapping of question_id → rating.  Missing keys are
                          unanswered; invalid values are treated the same.

    Returns:
        Integer score 0..100, or ``None`` if no question was validly answered.
    """
    total = 0
    count = 0
    for question in module_questions:
        if question.question_id not in answers:
            continue
        value = answers[question.question_id]
        if not is_valid_answer(value):
            logger.warning(
                "Ignoring invalid answer %r for question %s (expected int %d..%d).",
                value, question.question_id, SCALE_MIN, SCALE_MAX,
            )
            continue
        total += value
        count += 1

    if count == 0:
        return None

    exact = Fraction(total * 100, count * SCALE_MAX)
    return math.floor(exact + Fraction(1, 2))


def compute_module_scores(
    answers: Mapping[str, Any],
    questionnaire: Questionnaire = QUESTIONNAIRE,
) -> dict[str, Optional[int]]:
    """Score every section of ``questionnaire``, in questionnaire order."""
    known_ids = set(questionnaire.all_question_ids())
    unknown = sorted(qid for qid in answers if qid not in known_ids)
    if unknown:
        logger.warning("Ignoring answers to %d unknown question(s): %s", len(unknown), unknown)

    return {
        section.module_key: compute_module_score(section.questions, answers)
        for section in questionnaire.sections
    }


# ── Overall score ─────────────────────────────────────────────────────────────


def validate_weights(weights: Mapping[str, float]) -> None:
    """Raise ``ValueError`` unless ``weights`` are non-negative and sum to 1.0."""
    negative = sorted(k for k, w in weights.items() if w < 0)
    if negative:
        raise ValueError(f"Category weights must be >= 0; negative for {negative}.")
    total = math.fsum(weights.values())
    if abs(total - 1.0) > _WEIGHT_TOLERANCE:
        raise ValueError(f"Category weights must sum to 1.0, got {total!r}.")


def compute_overall_score(
    module_scores: Mapping[str, Optional[int]],
    weights: Mapping[str, float] = CATEGORY_WEIGHTS,
    renormalize: bool = True,
) -> float:
    """Weighted overall score across modules with a defined score.

    Args:
        module_scores: module_key → score (``None`` = undefined).
        weights:       module_key → weight.  Modules missing here are ignored.
        renormalize:   Divide by the sum of weights actually used.

    Returns:
        Score in [0.0, 100.0] rounded to 2 dp; ``0.0`` when no module is defined.
    """
    terms: list[float] = []
    used_weights: list[float] = []

    for key in sorted(module_scores):
        score = module_scores[key]
        if score is None:
            continue
        weight = weights.get(key)
        if weight is None:
            logger.warning("Module '%s' has no category weight; excluded from overall score.", key)
            continue
        terms.append(score * weight)
        used_weights.append(weight)

    weight_sum = math.fsum(used_weights)
    if not terms or weight_sum <= 0:
        return 0.0

    weighted = math.fsum(terms)
    if renormalize:
        weighted /= weight_sum

    return round(_clamp(weighted), 2)


# ── Score card ────────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class ScoreCard:
    """Scores for one assessment plus the data-quality diagnostics found.

    Attributes:
        module_scores: module_key → score or ``None``, in questionnaire order.
        overall_score: Weighted overall score (see ``compute_overall_score``).
        diagnostics:   ``DataIncomplete`` entries for undefined modules.
    """

    module_scores: dict[str, Optional[int]]
    overall_score: float
    diagnostics:   tuple[Diagnostic, ...] = field(default_factory=tuple)

    @property
    def is_complete(self) -> bool:
        """True when every module has a defined score."""
        return all(score is not None for score in self.module_scores.values())

    @property
    def has_score(self) -> bool:
        """False when no module is defined and ``overall_score`` is meaningless."""
        return any(score is not None for score in self.module_scores.values())


def score_assessment(
    answers: Mapping[str, Any],
    questionnaire: Questionnaire = QUESTIONNAIRE,
    weights: Mapping[str, float] = CATEGORY_WEIGHTS,
    renormalize: bool = True,
) -> ScoreCard:
    """Compute module scores, the overall score and DataIncomplete diagnostics."""
    module_scores = compute_module_scores(answers, questionnaire)
    overall = compute_overall_score(module_scores, weights, renormalize)

    diagnostics: list[Diagnostic] = [
        Diagnostic(
            code=DiagnosticCode.DATA_INCOMPLETE,
            message=f"No valid answers for module '{key}'; module score is undefined.",
            subject=key,
        )
        for key, score in module_scores.items()
        if score is None
    ]
    if module_scores and all(score is None for score in module_scores.values()):
        diagnostics.append(
            Diagnostic(
                code=DiagnosticCode.DATA_INCOMPLETE,
                message="No module has a defined score; overall score is not valid.",
            )
        )

    for diag in diagnostics:
        logger.info("%s: %s", diag.code, diag.message)

    return ScoreCard(
        module_scores=module_scores,
        overall_score=overall,
        diagnostics=tuple(diagnostics),
    )
