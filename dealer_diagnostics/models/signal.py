"""
Signal mapping rows and derived signals.

``SignalMapping`` is one static row of the question → signal table.

``Signal`` is a derived diagnostic finding.  Signals are never persisted:
they are recomputed from module scores on every analysis, so the model is
frozen and carries no identity beyond ``(signal_code, module_key)``.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, field_validator

from dealer_diagnostics.taxonomy.signal_taxonomy import Severity, SeverityRule, SignalCode


class SignalMapping(BaseModel):
    """Static mapping of one question to its signal codes.

    Attributes:
        question_id: Question this row covers.
        module_key: Module the question belongs to.
        primary_signal_code: Signal nominated when the module is weak.
            ``NONE`` means the question never nominates a signal.
        secondary_signal_code: Optional second signal, only honoured when
            ``severity_rule`` is ``weighted``.
        severity_rule: ``standard`` (primary only) or ``weighted``
            (primary + secondary).
        notes: Authoring note explaining the mapping choice.
    """

    model_config = ConfigDict(frozen=True)

    question_id: str
    module_key: str
    primary_signal_code: SignalCode
    secondary_signal_code: Optional[SignalCode] = None
    severity_rule: SeverityRule = SeverityRule.STANDARD
    notes: str = ""

    def candidate_codes(self) -> list[SignalCode]:
        """Signal codes this row nominates, primary first, ``NONE`` excluded."""
        codes: list[SignalCode] = []
        if self.primary_signal_code != SignalCode.NONE:
            codes.append(self.primary_signal_code)
        if (
            self.severity_rule == SeverityRule.WEIGHTED
            and self.secondary_signal_code is not None
            and self.secondary_signal_code != SignalCode.NONE
            and self.secondary_signal_code not in codes
        ):
            codes.append(self.secondary_signal_code)
        return codes


class Signal(BaseModel):
    """A detected operational weakness in one module.

    Attributes:
        signal_code: The weakness code (never ``NONE``).
        severity: Maximum severity among contributing questions.
        module_key: Module the weakness was detected in.
        triggering_question_ids: Sorted ids of the questions that nominated
            this ``(signal_code, module_key)`` pair.
        rationale: Human-readable explanation.
    """

    model_config = ConfigDict(frozen=True)

    signal_code: SignalCode
    severity: Severity
    module_key: str
    triggering_question_ids: tuple[str, ...]
    rationale: str

    @field_validator("signal_code")
    @classmethod
    def validate_not_none(cls, v: SignalCode) -> SignalCode:
        if v == SignalCode.NONE:
            raise ValueError("A Signal cannot carry the NONE code.")
        return v

    @field_validator("triggering_question_ids")
    @classmethod
    def validate_has_triggers(cls, v: tuple[str, ...]) -> tuple[str, ...]:
        if not v:
            raise ValueError("triggering_question_ids must not be empty.")
        return v
