"""
Signal taxonomy for dealership diagnostics.

Every detected weakness is described by three orthogonal enums:
  - ``SignalCode``    — the *what*: which operational weakness was found?
  - ``Severity``      — the *how urgent*: derived from the module score.
  - ``SeverityRule``  — the *how to read the mapping*: does a question's
                        secondary signal count?

``Priority`` and ``ActionStatus`` describe the generated actions built from
signals.

``SIGNAL_DESCRIPTIONS`` holds the canonical one-line description of each code
(used in signal rationales); ``SIGNAL_RATIONALES`` holds the consulting-grade
title/summary/recommendation shown in reports.

This module has NO imports from any other ``dealer_diagnostics`` package.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum


class SignalCode(StrEnum):
    """Coded operational weakness, shared by all assessment modules."""

    PROCESS_NOT_STANDARDISED = "PROCESS_NOT_STANDARDISED"
    """Standard operating procedures are missing or inconsistent."""

    PROCESS_NOT_EXECUTED = "PROCESS_NOT_EXECUTED"
    """Processes exist but are not followed consistently."""

    ROLE_OWNERSHIP_MISSING = "ROLE_OWNERSHIP_MISSING"
    """No clear owner or accountability for a function."""

    KPI_NOT_DEFINED = "KPI_NOT_DEFINED"
    """No measurable KPIs or targets in place."""

    KPI_NOT_REVIEWED = "KPI_NOT_REVIEWED"
    """KPIs exist but are not reviewed or acted upon."""

    CAPACITY_MISALIGNED = "CAPACITY_MISALIGNED"
    """Staffing or resources do not match demand."""

    TOOL_UNDERUTILISED = "TOOL_UNDERUTILISED"
    """Available systems (CRM, DMS, digital tools) are under-used."""

    GOVERNANCE_WEAK = "GOVERNANCE_WEAK"
    """Management oversight and approval structures are weak."""

    NONE = "NONE"
    """Explicit "no signal" fallback; never materialises as a Signal."""


class Severity(StrEnum):
    """Urgency of a signal.  Compare with ``rank``, not with string order."""

    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"

    @property
    def rank(self) -> int:
        """Numeric rank: HIGH (3) > MEDIUM (2) > LOW (1)."""
        return _SEVERITY_RANK[self]


_SEVERITY_RANK: dict[Severity, int] = {
    Severity.LOW: 1,
    Severity.MEDIUM: 2,
    Severity.HIGH: 3,
}


class SeverityRule(StrEnum):
    """How a question's mapping row contributes candidates."""

    STANDARD = "standard"
    """Only the primary signal counts; any secondary is ignored."""

    WEIGHTED = "weighted"
    """Primary and secondary signals both count as independent candidates."""


class Priority(StrEnum):
    """Default priority carried by an action template."""

    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"


class ActionStatus(StrEnum):
    """Lifecycle status of a generated action.

    The engine only ever writes ``OPEN``; later transitions belong to the
    action-plan management UI.
    """

    OPEN = "Open"
    IN_PROGRESS = "In Progress"
    COMPLETED = "Completed"


SIGNAL_DESCRIPTIONS: dict[SignalCode, str] = {
    SignalCode.PROCESS_NOT_STANDARDISED: "Standard operating procedures are missing or inconsistent",
    SignalCode.PROCESS_NOT_EXECUTED: "Defined processes are not being followed consistently",
    SignalCode.ROLE_OWNERSHIP_MISSING: "Clear accountability and role ownership is not established",
    SignalCode.KPI_NOT_DEFINED: "Key performance indicators are not clearly defined",
    SignalCode.KPI_NOT_REVIEWED: "Performance metrics are not regularly reviewed or acted upon",
    SignalCode.CAPACITY_MISALIGNED: "Resources and capacity are not aligned with demand",
    SignalCode.TOOL_UNDERUTILISED: "Available tools and technology are not being fully leveraged",
    SignalCode.GOVERNANCE_WEAK: "Management oversight and governance structures need improvement",
}


@dataclass(frozen=True)
class SignalRationale:
    """Human-readable framing of a signal code for reports.

    Attributes:
        title:          Short headline, e.g. "Role clarity needed".
        summary:        One-sentence finding.
        recommendation: One-sentence suggested direction.
    """

    title: str
    summary: str
    recommendation: str


SIGNAL_RATIONALES: dict[SignalCode, SignalRationale] = {
    SignalCode.PROCESS_NOT_STANDARDISED: SignalRationale(
        title="Process standardization needed",
        summary="Business processes lack consistent documentation and standards",
        recommendation="Develop and document standard operating procedures to ensure consistency across the team",
    ),
    SignalCode.PROCESS_NOT_EXECUTED: SignalRationale(
        title="Process execution gaps identified",
        summary="Defined processes are not being consistently followed",
        recommendation="Reinforce process adherence through training and accountability measures",
    ),
    SignalCode.ROLE_OWNERSHIP_MISSING: SignalRationale(
        title="Role clarity needed",
        summary="Key responsibilities lack clear ownership assignment",
        recommendation="Define and document role responsibilities to ensure accountability",
    ),
    SignalCode.GOVERNANCE_WEAK: SignalRationale(
        title="Governance improvement opportunity",
        summary="Management oversight and decision-making structures need strengthening",
        recommendation="Establish regular review cadences and clear escalation paths",
    ),
    SignalCode.KPI_NOT_DEFINED: SignalRationale(
        title="Performance metrics needed",
        summary="Key performance indicators are not yet established",
        recommendation="Define measurable KPIs aligned with business objectives",
    ),
    SignalCode.KPI_NOT_REVIEWED: SignalRationale(
        title="Performance tracking gaps",
        summary="Performance metrics need more consistent tracking and review",
        recommendation="Implement regular KPI review meetings with trend analysis",
    ),
    SignalCode.CAPACITY_MISALIGNED: SignalRationale(
        title="Capacity alignment needed",
        summary="Resource allocation may not match current workload requirements",
        recommendation="Review and optimize staffing levels and workload distribution",
    ),
    SignalCode.TOOL_UNDERUTILISED: SignalRationale(
        title="Technology optimization opportunity",
        summary="Available tools and systems are not being fully leveraged",
        recommendation="Provide training and integrate tools into daily workflows",
    ),
}


def triggered_because_prefix(signal_code: SignalCode | str) -> str:
    """Return the traceability prefix every action description must start with."""
    return f"Triggered because: {SignalCode(signal_code).value}."
