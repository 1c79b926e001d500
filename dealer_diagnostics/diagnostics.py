"""
Diagnostic conditions reported by the scoring and action engine.

Propagation policy
------------------
``DataIncomplete``, ``UnmappedQuestion`` and ``TemplateNotFound`` describe
malformed or incomplete *data*.  They are recovered locally: the affected
module, question or signal is skipped, a ``Diagnostic`` is attached to the
result, and processing continues.

``MissingContext`` describes missing *identity* (no valid organization or
assessment id).  It is the only condition raised to the caller, as
``MissingContextError``.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Optional


class DiagnosticCode(StrEnum):
    DATA_INCOMPLETE = "DataIncomplete"
    UNMAPPED_QUESTION = "UnmappedQuestion"
    TEMPLATE_NOT_FOUND = "TemplateNotFound"
    MISSING_CONTEXT = "MissingContext"


@dataclass(frozen=True)
class Diagnostic:
    """One recovered (or escalated) condition.

    Attributes:
        code:    Which taxonomy member this is.
        message: Human-readable description.
        subject: The module key, question id, signal code or template id
                 concerned, or ``None`` for run-wide conditions.
    """

    code:    DiagnosticCode
    message: str
    subject: Optional[str] = None


class MissingContextError(ValueError):
    """Raised when action generation lacks a valid organization/assessment id.

    Attributes:
        field: Name of the missing or invalid identifier.
        value: The rejected value (may be ``None``).
    """

    code = DiagnosticCode.MISSING_CONTEXT

    def __init__(self, field: str, value: Optional[str]) -> None:
        self.field = field
        self.value = value
        super().__init__(
            f"Missing or invalid {field} ({value!r}).  "
            "Refusing to generate actions without a valid tenant/assessment scope."
        )

    def to_diagnostic(self) -> Diagnostic:
        return Diagnostic(code=self.code, message=str(self), subject=self.field)
