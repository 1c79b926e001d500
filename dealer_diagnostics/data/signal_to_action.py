"""
Signal → action template mapping.

Each entry lists the templates to instantiate for a signal, in priority
order, and caps how many actions that signal may produce per assessment.
Template ids must exist in ``ACTION_TEMPLATES`` and belong to the same
signal code (checked by ``validate_catalog_integrity``).
"""

from __future__ import annotations

from dealer_diagnostics.models.action import SignalToActionEntry
from dealer_diagnostics.taxonomy.signal_taxonomy import SignalCode

SIGNAL_TO_ACTION_MAP: tuple[SignalToActionEntry, ...] = (
    SignalToActionEntry(
        signal_code=SignalCode.PROCESS_NOT_STANDARDISED,
        template_ids=("ACT-PNS-001", "ACT-PNS-002"),
        max_actions_per_assessment=2,
    ),
    SignalToActionEntry(
        signal_code=SignalCode.PROCESS_NOT_EXECUTED,
        template_ids=("ACT-PNE-001", "ACT-PNE-002"),
        max_actions_per_assessment=2,
    ),
    SignalToActionEntry(
        signal_code=SignalCode.ROLE_OWNERSHIP_MISSING,
        template_ids=("ACT-ROM-001", "ACT-ROM-002"),
        max_actions_per_assessment=2,
    ),
    SignalToActionEntry(
        signal_code=SignalCode.KPI_NOT_DEFINED,
        template_ids=("ACT-KND-001",),
        max_actions_per_assessment=1,
    ),
    SignalToActionEntry(
        signal_code=SignalCode.KPI_NOT_REVIEWED,
        template_ids=("ACT-KNR-001", "ACT-KNR-002"),
        max_actions_per_assessment=2,
    ),
    SignalToActionEntry(
        signal_code=SignalCode.CAPACITY_MISALIGNED,
        template_ids=("ACT-CMA-001", "ACT-CMA-002"),
        max_actions_per_assessment=2,
    ),
    SignalToActionEntry(
        signal_code=SignalCode.TOOL_UNDERUTILISED,
        template_ids=("ACT-TUU-001", "ACT-TUU-002"),
        max_actions_per_assessment=2,
    ),
    SignalToActionEntry(
        signal_code=SignalCode.GOVERNANCE_WEAK,
        template_ids=("ACT-GWK-001", "ACT-GWK-002"),
        max_actions_per_assessment=2,
    ),
)
