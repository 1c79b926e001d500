"""Maturity bands for an overall assessment score."""

from __future__ import annotations

from enum import StrEnum


class MaturityLevel(StrEnum):
    ADVANCED = "advanced"
    MATURE = "mature"
    DEVELOPING = "developing"
    BASIC = "basic"


# Highest band first; a score belongs to the first band whose floor it reaches.
_BANDS: tuple[tuple[float, MaturityLevel], ...] = (
    (85.0, MaturityLevel.ADVANCED),
    (70.0, MaturityLevel.MATURE),
    (50.0, MaturityLevel.DEVELOPING),
    (0.0,  MaturityLevel.BASIC),
)


def maturity_level(score: float) -> MaturityLevel:
    """Map a 0–100 score to its maturity band (below 0 is still ``basic``)."""
    for floor, level in _BANDS:
        if score >= floor:
            return level
    return MaturityLevel.BASIC
