"""
Assessment module taxonomy and overall-score weights.

The five modules (a.k.a. categories or departments) are the business areas
covered by the questionnaire.  ``CATEGORY_WEIGHTS`` is the canonical weight
table for the overall score:

  - Every ``ModuleKey`` must have a weight.
  - Weights must sum to 1.0 (±1e-9); see
    ``dealer_diagnostics.scoring.engine.validate_weights``.

This module has NO imports from any other ``dealer_diagnostics`` package.
"""

from __future__ import annotations

from enum import StrEnum


class ModuleKey(StrEnum):
    """Slug of one assessed business area."""

    NEW_VEHICLE_SALES = "new-vehicle-sales"
    USED_VEHICLE_SALES = "used-vehicle-sales"
    SERVICE_PERFORMANCE = "service-performance"
    PARTS_INVENTORY = "parts-inventory"
    FINANCIAL_OPERATIONS = "financial-operations"


CATEGORY_WEIGHTS: dict[str, float] = {
    ModuleKey.NEW_VEHICLE_SALES:    0.25,
    ModuleKey.USED_VEHICLE_SALES:   0.20,
    ModuleKey.SERVICE_PERFORMANCE:  0.20,
    ModuleKey.FINANCIAL_OPERATIONS: 0.20,
    ModuleKey.PARTS_INVENTORY:      0.15,
}

# Short department names used in rationales and action rows.
MODULE_DISPLAY_NAMES: dict[str, str] = {
    ModuleKey.NEW_VEHICLE_SALES:    "New Vehicle Sales",
    ModuleKey.USED_VEHICLE_SALES:   "Used Vehicle Sales",
    ModuleKey.SERVICE_PERFORMANCE:  "Service",
    ModuleKey.PARTS_INVENTORY:      "Parts & Inventory",
    ModuleKey.FINANCIAL_OPERATIONS: "Financial Operations",
}


def module_display_name(module_key: str) -> str:
    """Return the display name for a module, falling back to the raw key."""
    return MODULE_DISPLAY_NAMES.get(module_key, module_key)
