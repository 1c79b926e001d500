"""
Questionnaire models.

``Question`` is one scaled (1..5) survey item.  ``QuestionnaireSection``
groups the questions of one assessment module, and ``Questionnaire`` is the
complete, ordered live question set.

All three models are frozen: the questionnaire is static configuration built
once at import time.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, field_validator, model_validator


class Question(BaseModel):
    """A single scaled assessment question.

    Attributes:
        question_id: Stable identifier, e.g. ``"nvs-1"``.
        module_key: Slug of the owning module, e.g. ``"new-vehicle-sales"``.
        text: Question text shown to the respondent.
        category: Free-text category key, used by the category fallback table.
        weight: Relative importance of the question within its module.
        scale_min: Lowest allowed rating (always 1).
        scale_max: Highest allowed rating (always 5).
        linked_kpis: KPIs this question is a proxy for.
    """

    model_config = ConfigDict(frozen=True)

    question_id: str
    module_key: str
    text: str
    category: str
    weight: float = 1.0
    scale_min: int = 1
    scale_max: int = 5
    linked_kpis: tuple[str, ...] = ()

    @field_validator("weight")
    @classmethod
    def validate_weight_positive(cls, v: float) -> float:
        if v <= 0:
            raise ValueError(f"weight must be > 0, got {v}.")
        return v

    @model_validator(mode="after")
    def validate_scale(self) -> "Question":
        if (self.scale_min, self.scale_max) != (1, 5):
            raise ValueError(
                f"Question '{self.question_id}' must use a 1..5 scale, "
                f"got {self.scale_min}..{self.scale_max}."
            )
        return self


class QuestionnaireSection(BaseModel):
    """All questions belonging to one assessment module."""

    model_config = ConfigDict(frozen=True)

    module_key: str
    title: str
    questions: tuple[Question, ...]

    @model_validator(mode="after")
    def validate_question_modules(self) -> "QuestionnaireSection":
        for q in self.questions:
            if q.module_key != self.module_key:
                raise ValueError(
                    f"Question '{q.question_id}' declares module '{q.module_key}' "
                    f"but sits in section '{self.module_key}'."
                )
        return self


class Questionnaire(BaseModel):
    """The complete, ordered question set."""

    model_config = ConfigDict(frozen=True)

    title: str
    sections: tuple[QuestionnaireSection, ...]

    @model_validator(mode="after")
    def validate_unique_ids(self) -> "Questionnaire":
        ids = self.all_question_ids()
        if len(ids) != len(set(ids)):
            dupes = sorted({qid for qid in ids if ids.count(qid) > 1})
            raise ValueError(f"Duplicate question ids in questionnaire: {dupes}")
        return self

    def all_question_ids(self) -> list[str]:
        """Every question id, in questionnaire order."""
        return [q.question_id for s in self.sections for q in s.questions]

    def module_keys(self) -> list[str]:
        return [s.module_key for s in self.sections]

    def questions_for_module(self, module_key: str) -> tuple[Question, ...]:
        """Questions of one module; empty tuple for an unknown module."""
        for section in self.sections:
            if section.module_key == module_key:
                return section.questions
        return ()

    def get_question(self, question_id: str) -> Optional[Question]:
        for section in self.sections:
            for q in section.questions:
                if q.question_id == question_id:
                    return q
        return None
