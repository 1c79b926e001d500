"""
Action generation: signals → concrete, assessment-scoped ``GeneratedAction``s.

Rules (applied in this order)
-----------------------------
1. Identity first.  A missing, blank or malformed organization/assessment id
   raises ``MissingContextError`` before anything is produced.
2. Signals are processed in the order given (the aggregator's
   severity-sorted order), so higher-severity signals claim templates first.
3. For each signal, the ``SignalToActionEntry`` supplies an ordered list of
   template ids; only the first ``max_actions_per_assessment`` are considered.
4. A template id already instantiated for this assessment (in
   ``existing_keys`` or earlier in this run) is skipped.
5. The cap is per signal code per assessment: existing rows with the same
   signal code count toward it.
6. Existing rows are only seen as ``(template_id, signal_code)`` keys, so
   whatever else was edited on them downstream cannot affect a run.  They are
   never returned, modified or removed; the result holds only new actions.

Missing entries and templates are recovered as ``TemplateNotFound``
diagnostics.
"""

from __future__ import annotations

import logging
import re
from collections import Counter
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import Optional

from dealer_diagnostics.actions.catalog import get_signal_to_action_entry, get_template_by_id
from dealer_diagnostics.diagnostics import Diagnostic, DiagnosticCode, MissingContextError
from dealer_diagnostics.models.action import ActionTemplate, GeneratedAction
from dealer_diagnostics.models.signal import Signal
from dealer_diagnostics.taxonomy.signal_taxonomy import ActionStatus

logger = logging.getLogger(__name__)

_UUID_RE = re.compile(
    r"^[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}$",
    re.IGNORECASE,
)


@dataclass(frozen=True)
class ActionGenerationResult:
    """Output of one ``generate_actions`` call.

    Attributes:
        actions:     Newly created actions (never includes existing ones).
        diagnostics: Recovered ``TemplateNotFound`` conditions.
    """

    actions:     tuple[GeneratedAction, ...] = field(default_factory=tuple)
    diagnostics: tuple[Diagnostic, ...] = field(default_factory=tuple)


def validate_identity(
    assessment_id: Optional[str],
    organization_id: Optional[str],
    require_uuid: bool = True,
) -> None:
    """Raise ``MissingContextError`` if either id is missing or malformed."""
    for name, value in (("organization_id", organization_id), ("assessment_id", assessment_id)):
        if value is None or not isinstance(value, str) or not value.strip():
            raise MissingContextError(name, value)
        if require_uuid and not _UUID_RE.match(value):
            raise MissingContextError(name, value)


def build_action(
    template: ActionTemplate,
    signal: Signal,
    assessment_id: str,
    organization_id: str,
    completion_date: date,
) -> GeneratedAction:
    """Instantiate ``template`` for one assessment."""
    return GeneratedAction(
        assessment_id=assessment_id,
        organization_id=organization_id,
        template_id=template.template_id,
        signal_code=template.signal_code,
        module_key=signal.module_key,
        title=template.title,
        description=template.description,
        owner_role=template.default_owner_role,
        priority=template.default_priority,
        due_date=completion_date + timedelta(days=template.default_timeframe_days),
        status=ActionStatus.OPEN,
        triggering_question_ids=signal.triggering_question_ids,
        implementation_steps=template.implementation_steps,
        rationale=signal.rationale,
    )


def generate_actions(
    signals: Sequence[Signal],
    *,
    assessment_id: str,
    organization_id: str,
    completion_date: date,
    existing_keys: Iterable[tuple[str, str]] = (),
    require_uuid_identity: bool = True,
) -> ActionGenerationResult:
    """Resolve signals into new actions for one assessment.

    Args:
        signals:               Signals in processing order (severity-sorted).
        assessment_id:         Owning assessment id.
        organization_id:       Owning organization id.
        completion_date:       Date the assessment was completed; due dates
                               are offset from it.
        existing_keys:         ``(template_id, signal_code)`` of the rows
                               already stored for ``assessment_id``.
        require_uuid_identity: Enforce the 8-4-4-4-12 UUID shape on both ids.

    Returns:
        ``ActionGenerationResult`` with the new actions and diagnostics.

    Raises:
        MissingContextError: If an id is missing or malformed.
    """
    validate_identity(assessment_id, organization_id, require_uuid_identity)

    existing = list(existing_keys)
    instantiated: set[str] = {template_id for template_id, _ in existing}
    per_signal: Counter[str] = Counter(str(code) for _, code in existing)

    actions: list[GeneratedAction] = []
    diagnostics: list[Diagnostic] = []
    reported: set[tuple[str, str]] = set()

    def _report(subject: str, message: str) -> None:
        if (subject, message) in reported:
            return
        reported.add((subject, message))
        logger.warning("TemplateNotFound: %s", message)
        diagnostics.append(
            Diagnostic(code=DiagnosticCode.TEMPLATE_NOT_FOUND, message=message, subject=subject)
        )

    for signal in signals:
        entry = get_signal_to_action_entry(signal.signal_code)
        if entry is None:
            _report(signal.signal_code.value, f"No signal-to-action entry for {signal.signal_code}.")
            continue

        cap = entry.max_actions_per_assessment
        for template_id in entry.template_ids[:cap]:
            if per_signal[str(signal.signal_code)] >= cap:
                break
            if template_id in instantiated:
                continue
            template = get_template_by_id(template_id)
            if template is None:
                _report(
                    template_id,
                    f"Template '{template_id}' listed for {signal.signal_code} is not in the catalog.",
                )
                continue

            actions.append(
                build_action(template, signal, assessment_id, organization_id, completion_date)
            )
            instantiated.add(template_id)
            per_signal[str(signal.signal_code)] += 1

    logger.info(
        "Generated %d new action(s) for assessment %s from %d signal(s) (%d existing).",
        len(actions), assessment_id, len(signals), len(existing),
    )
    return ActionGenerationResult(actions=tuple(actions), diagnostics=tuple(diagnostics))
