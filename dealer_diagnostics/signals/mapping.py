"""
Signal mapping resolution: question → ``SignalMapping`` lookups and the
coverage check over the live questionnaire.

Resolution order for a question:
  1. The explicit row in ``SIGNAL_MAPPINGS`` (keyed by question id).
  2. Otherwise a synthesized ``standard`` row whose primary code comes from
     ``CATEGORY_SIGNAL_MAP`` via the question's category (``NONE`` when the
     category is unknown as well).

The live questionnaire must never need (2); ``validate_mapping_coverage``
reports any question that would.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass

from dealer_diagnostics.data.signal_mappings import CATEGORY_SIGNAL_MAP, SIGNAL_MAPPINGS
from dealer_diagnostics.models.question import Question
from dealer_diagnostics.models.signal import SignalMapping
from dealer_diagnostics.taxonomy.signal_taxonomy import SeverityRule, SignalCode

logger = logging.getLogger(__name__)

_MAPPINGS_BY_QUESTION: dict[str, SignalMapping] = {m.question_id: m for m in SIGNAL_MAPPINGS}


def resolve_category_signal(category: str) -> SignalCode:
    """Look up a category key (trimmed, case-insensitive); unknown → ``NONE``."""
    return CATEGORY_SIGNAL_MAP.get(category.strip().lower(), SignalCode.NONE)


def get_signal_mapping(question_id: str) -> SignalMapping | None:
    return _MAPPINGS_BY_QUESTION.get(question_id)


def get_mappings_for_module(module_key: str) -> list[SignalMapping]:
    """All explicit rows for one module, in table order."""
    return [m for m in SIGNAL_MAPPINGS if m.module_key == module_key]


def resolve_question_mapping(question: Question) -> SignalMapping:
    """Return the explicit mapping for ``question`` or a category fallback row."""
    explicit = get_signal_mapping(question.question_id)
    if explicit is not None:
        return explicit

    primary = resolve_category_signal(question.category)
    logger.warning(
        "No signal mapping for question %s; falling back to category '%s' → %s.",
        question.question_id, question.category, primary,
    )
    return SignalMapping(
        question_id=question.question_id,
        module_key=question.module_key,
        primary_signal_code=primary,
        secondary_signal_code=None,
        severity_rule=SeverityRule.STANDARD,
        notes=f"Category fallback ({question.category})",
    )


# ── Coverage ──────────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class CoverageReport:
    """Result of checking question ids against the mapping table.

    Attributes:
        covered:          Ids with an explicit row, in input order.
        missing:          Ids without an explicit row, in input order.
        coverage_percent: ``len(covered) / total * 100`` (100.0 for no ids).
    """

    covered:          tuple[str, ...]
    missing:          tuple[str, ...]
    coverage_percent: float

    @property
    def is_complete(self) -> bool:
        return not self.missing


def validate_mapping_coverage(all_question_ids: Iterable[str]) -> CoverageReport:
    """Partition ``all_question_ids`` into covered and missing."""
    covered: list[str] = []
    missing: list[str] = []
    for qid in all_question_ids:
        (covered if qid in _MAPPINGS_BY_QUESTION else missing).append(qid)

    total = len(covered) + len(missing)
    percent = 100.0 if total == 0 else round(len(covered) / total * 100, 2)
    return CoverageReport(covered=tuple(covered), missing=tuple(missing), coverage_percent=percent)
