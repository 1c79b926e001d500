"""Tests for maturity bands."""

from __future__ import annotations

import pytest

from dealer_diagnostics.scoring.maturity import MaturityLevel, maturity_level


@pytest.mark.parametrize(
    "score, expected",
    [
        (100.0, MaturityLevel.ADVANCED),
        (85.0, MaturityLevel.ADVANCED),
        (84.99, MaturityLevel.MATURE),
        (70.0, MaturityLevel.MATURE),
        (69.99, MaturityLevel.DEVELOPING),
        (50.0, MaturityLevel.DEVELOPING),
        (49.99, MaturityLevel.BASIC),
        (0.0, MaturityLevel.BASIC),
        (-5.0, MaturityLevel.BASIC),
    ],
)
def test_bands(score, expected):
    assert maturity_level(score) == expected
