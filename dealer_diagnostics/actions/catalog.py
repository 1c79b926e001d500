"""
Action template catalog lookups and integrity checks.

All lookups are over the ordered static tables in ``dealer_diagnostics.data``;
declared order is preserved everywhere.
"""

from __future__ import annotations

from collections.abc import Sequence

from dealer_diagnostics.data.action_templates import ACTION_TEMPLATES
from dealer_diagnostics.data.signal_to_action import SIGNAL_TO_ACTION_MAP
from dealer_diagnostics.models.action import ActionTemplate, SignalToActionEntry
from dealer_diagnostics.taxonomy.signal_taxonomy import SignalCode


def get_template_by_id(template_id: str) -> ActionTemplate | None:
    for template in ACTION_TEMPLATES:
        if template.template_id == template_id:
            return template
    return None


def get_templates_for_signal(signal_code: SignalCode) -> list[ActionTemplate]:
    """Templates owned by ``signal_code``, in declared order."""
    return [t for t in ACTION_TEMPLATES if t.signal_code == signal_code]


def get_default_template_for_signal(signal_code: SignalCode) -> ActionTemplate | None:
    """The first template declared for ``signal_code``, or ``None``."""
    templates = get_templates_for_signal(signal_code)
    return templates[0] if templates else None


def get_signal_to_action_entry(signal_code: SignalCode) -> SignalToActionEntry | None:
    for entry in SIGNAL_TO_ACTION_MAP:
        if entry.signal_code == signal_code:
            return entry
    return None


def validate_catalog_integrity(
    templates: Sequence[ActionTemplate] = ACTION_TEMPLATES,
    entries: Sequence[SignalToActionEntry] = SIGNAL_TO_ACTION_MAP,
) -> list[str]:
    """Check the template catalog against the signal-to-action table.

    Returns:
        Human-readable problem descriptions; empty when the tables agree.
    """
    problems: list[str] = []

    by_id: dict[str, ActionTemplate] = {}
    for template in templates:
        if template.template_id in by_id:
            problems.append(f"Duplicate template id '{template.template_id}'.")
        by_id.setdefault(template.template_id, template)

    seen_signals: set[SignalCode] = set()
    for entry in entries:
        if entry.signal_code in seen_signals:
            problems.append(f"Duplicate signal-to-action entry for {entry.signal_code}.")
        seen_signals.add(entry.signal_code)

        if not entry.template_ids:
            problems.append(f"Entry for {entry.signal_code} lists no templates.")
        for template_id in entry.template_ids:
            template = by_id.get(template_id)
            if template is None:
                problems.append(
                    f"Entry for {entry.signal_code} references unknown template '{template_id}'."
                )
            elif template.signal_code != entry.signal_code:
                problems.append(
                    f"Template '{template_id}' belongs to {template.signal_code}, "
                    f"but is listed under {entry.signal_code}."
                )

    for code in SignalCode:
        if code != SignalCode.NONE and code not in seen_signals:
            problems.append(f"Signal {code} has no signal-to-action entry.")

    return problems
