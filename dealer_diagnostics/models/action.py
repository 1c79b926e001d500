"""
Action templates, signal-to-action entries and generated actions.

``ActionTemplate`` and ``SignalToActionEntry`` are static catalog rows.
``GeneratedAction`` is the concrete, assessment-scoped action instantiated
from a template.

All three are frozen.  A ``GeneratedAction`` is written once by the engine;
any later edits (status, owner, due date) happen downstream and are never
overwritten by a re-run.  Rows read back from the database are
``StoredAction``s, which accept whatever those edits left behind.

Traceability contract: every template and generated action description
starts with ``"Triggered because: <SIGNAL_CODE>."``.
"""

from __future__ import annotations

from datetime import date

from pydantic import BaseModel, ConfigDict, field_validator, model_validator

from dealer_diagnostics.taxonomy.signal_taxonomy import (
    ActionStatus,
    Priority,
    SignalCode,
    triggered_because_prefix,
)


def _check_traceable(description: str, signal_code: SignalCode) -> None:
    prefix = triggered_because_prefix(signal_code)
    if not description.startswith(prefix):
        raise ValueError(f"description must start with '{prefix}'.")


class ActionTemplate(BaseModel):
    """A reusable improvement action owned by exactly one signal code.

    Attributes:
        template_id: Stable identifier, e.g. ``"ACT-PNS-001"``.
        signal_code: The signal this template remedies.
        title: Action headline.
        description: Full description, starting with the traceability prefix.
        default_owner_role: Role that owns the action by default.
        default_timeframe_days: Days from completion until the due date.
        default_priority: Priority copied onto generated actions.
        implementation_steps: Ordered checklist.
    """

    model_config = ConfigDict(frozen=True)

    template_id: str
    signal_code: SignalCode
    title: str
    description: str
    default_owner_role: str
    default_timeframe_days: int
    default_priority: Priority
    implementation_steps: tuple[str, ...] = ()

    @field_validator("signal_code")
    @classmethod
    def validate_not_none(cls, v: SignalCode) -> SignalCode:
        if v == SignalCode.NONE:
            raise ValueError("An ActionTemplate cannot belong to the NONE signal.")
        return v

    @field_validator("default_timeframe_days")
    @classmethod
    def validate_timeframe(cls, v: int) -> int:
        if v < 1:
            raise ValueError(f"default_timeframe_days must be >= 1, got {v}.")
        return v

    @model_validator(mode="after")
    def validate_description_prefix(self) -> "ActionTemplate":
        _check_traceable(self.description, self.signal_code)
        return self


class SignalToActionEntry(BaseModel):
    """Ordered template ids and per-assessment cap for one signal code."""

    model_config = ConfigDict(frozen=True)

    signal_code: SignalCode
    template_ids: tuple[str, ...]
    max_actions_per_assessment: int

    @field_validator("max_actions_per_assessment")
    @classmethod
    def validate_cap(cls, v: int) -> int:
        if v < 1:
            raise ValueError(f"max_actions_per_assessment must be >= 1, got {v}.")
        return v


class GeneratedAction(BaseModel):
    """A concrete action instantiated for one assessment.

    ``(assessment_id, template_id)`` is the idempotency key.

    Attributes:
        assessment_id: Owning assessment (opaque id from the persistence layer).
        organization_id: Owning organization (tenant).
        template_id: Source template.
        signal_code: Signal that caused the action.
        module_key: Module the triggering signal was detected in.
        title: Copied verbatim from the template.
        description: Copied verbatim from the template.
        owner_role: Template ``default_owner_role``.
        priority: Template ``default_priority``.
        due_date: Completion date plus template ``default_timeframe_days``.
        status: Always ``Open`` when created by the engine.
        triggering_question_ids: Questions behind the triggering signal.
        implementation_steps: Copied from the template.
        rationale: Rationale of the triggering signal.
    """

    model_config = ConfigDict(frozen=True)

    assessment_id: str
    organization_id: str
    template_id: str
    signal_code: SignalCode
    module_key: str
    title: str
    description: str
    owner_role: str
    priority: Priority
    due_date: date
    status: ActionStatus = ActionStatus.OPEN
    triggering_question_ids: tuple[str, ...] = ()
    implementation_steps: tuple[str, ...] = ()
    rationale: str = ""

    @property
    def idempotency_key(self) -> tuple[str, str]:
        return (self.assessment_id, self.template_id)

    @model_validator(mode="after")
    def validate_description_prefix(self) -> "GeneratedAction":
        _check_traceable(self.description, self.signal_code)
        return self


class StoredAction(BaseModel):
    """A ``generated_actions`` row as read back from the database.

    Downstream tools may edit any column after the engine writes it, so no
    field is checked against the catalog enums or the traceability prefix.
    ``due_date`` stays the stored ISO text.
    """

    model_config = ConfigDict(frozen=True)

    action_id: int
    assessment_id: str
    organization_id: str
    template_id: str
    signal_code: str
    module_key: str
    title: str = ""
    description: str = ""
    owner_role: str = ""
    priority: str = ""
    due_date: str = ""
    status: str = ""
    triggering_question_ids: tuple[str, ...] = ()
    implementation_steps: tuple[str, ...] = ()
    rationale: str = ""
