"""
Action plan engine: signals → generated, assessment-scoped actions.

Modules
-------
catalog   : template / signal-to-action lookups + validate_catalog_integrity().
generator : generate_actions() → ActionGenerationResult — cap, dedup,
            idempotency and identity checks.  Pure, no DB or I/O.
reporter  : write_action_plan_json() + write_action_plan_csv() — file output.
"""

from dealer_diagnostics.actions.catalog import (
    get_default_template_for_signal,
    get_signal_to_action_entry,
    get_template_by_id,
    get_templates_for_signal,
    validate_catalog_integrity,
)
from dealer_diagnostics.actions.generator import ActionGenerationResult, generate_actions

__all__ = [
    "ActionGenerationResult",
    "generate_actions",
    "get_default_template_for_signal",
    "get_signal_to_action_entry",
    "get_template_by_id",
    "get_templates_for_signal",
    "validate_catalog_integrity",
]
