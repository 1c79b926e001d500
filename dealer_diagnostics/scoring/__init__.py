"""
Assessment scoring: raw 1..5 ratings → per-module scores → overall score.

Modules
-------
engine   : compute_module_score() + compute_module_scores() +
           compute_overall_score() + score_assessment() → ScoreCard.
           Pure functions, no DB or I/O.
maturity : MaturityLevel bands for an overall score.
"""

from dealer_diagnostics.scoring.engine import (
    HIGH_SEVERITY_BELOW,
    IMPROVEMENT_THRESHOLD,
    ScoreCard,
    compute_module_score,
    compute_module_scores,
    compute_overall_score,
    score_assessment,
    validate_weights,
)
from dealer_diagnostics.scoring.maturity import MaturityLevel, maturity_level

__all__ = [
    "HIGH_SEVERITY_BELOW",
    "IMPROVEMENT_THRESHOLD",
    "MaturityLevel",
    "ScoreCard",
    "compute_module_score",
    "compute_module_scores",
    "compute_overall_score",
    "maturity_level",
    "score_assessment",
    "validate_weights",
]
