"""
AssessmentCompletionStage — score a completed assessment and create its
action plan.

Completion flow
---------------
  1. Score answers → module scores + overall score (``scoring.engine``).
  2. Check mapping coverage of the questionnaire; gaps become
     ``UnmappedQuestion`` diagnostics (the category fallback covers them).
  3. Aggregate signals from module scores (``signals.aggregator``).
  4. If ``actions.enable_auto_actions`` is on:
       a. Load the (template_id, signal_code) keys already stored for the
          assessment (DB).
       b. Generate new actions (``actions.generator``).
       c. Insert them with ``INSERT OR IGNORE`` on (assessment_id, template_id).
  5. Optionally write JSON + CSV action plan reports.  When persisting, the
     reports list every stored action for the assessment, not only this
     run's new ones.

``MissingContextError`` from step 4b is caught here and reported as a failed
``CompletionResult`` carrying a ``MissingContext`` diagnostic; every other
exception propagates.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from datetime import date
from pathlib import Path
from typing import Any, Optional

from dealer_diagnostics.actions.generator import ActionGenerationResult, generate_actions
from dealer_diagnostics.config import AppConfig, ScoringConfig
from dealer_diagnostics.data.questionnaire import QUESTIONNAIRE
from dealer_diagnostics.diagnostics import Diagnostic, DiagnosticCode, MissingContextError
from dealer_diagnostics.models.action import GeneratedAction, StoredAction
from dealer_diagnostics.models.question import Questionnaire
from dealer_diagnostics.models.signal import Signal
from dealer_diagnostics.scoring.engine import ScoreCard, score_assessment
from dealer_diagnostics.signals.aggregator import aggregate_signals
from dealer_diagnostics.signals.mapping import validate_mapping_coverage
from dealer_diagnostics.taxonomy.module_taxonomy import CATEGORY_WEIGHTS
from dealer_diagnostics.utils.time_utils import today_utc

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AssessmentAnalysis:
    """Everything derived from one assessment's answers.

    Attributes:
        score_card:           Module scores, overall score, DataIncomplete.
        signals:              Severity-sorted signals.
        generation:           New actions + TemplateNotFound diagnostics.
        coverage_diagnostics: UnmappedQuestion diagnostics.
    """

    score_card:           ScoreCard
    signals:              tuple[Signal, ...]
    generation:           ActionGenerationResult = field(default_factory=ActionGenerationResult)
    coverage_diagnostics: tuple[Diagnostic, ...] = field(default_factory=tuple)

    @property
    def diagnostics(self) -> tuple[Diagnostic, ...]:
        return (
            self.score_card.diagnostics
            + self.coverage_diagnostics
            + self.generation.diagnostics
        )


def coverage_diagnostics(questionnaire: Questionnaire) -> tuple[Diagnostic, ...]:
    """One ``UnmappedQuestion`` diagnostic per question without an explicit row."""
    report = validate_mapping_coverage(questionnaire.all_question_ids())
    return tuple(
        Diagnostic(
            code=DiagnosticCode.UNMAPPED_QUESTION,
            message=f"Question '{qid}' has no signal mapping; category fallback used.",
            subject=qid,
        )
        for qid in report.missing
    )


def analyze_assessment(
    answers: Mapping[str, Any],
    *,
    assessment_id: Optional[str] = None,
    organization_id: Optional[str] = None,
    completion_date: Optional[date] = None,
    questionnaire: Questionnaire = QUESTIONNAIRE,
    scoring: ScoringConfig = ScoringConfig(),
    existing_keys: Iterable[tuple[str, str]] = (),
    generate: bool = True,
    require_uuid_identity: bool = True,
) -> AssessmentAnalysis:
    """Score, diagnose and (optionally) generate actions, without any I/O.

    Args:
        answers:               question_id → 1..5 rating.
        assessment_id:         Required when ``generate`` is ``True``.
        organization_id:       Required when ``generate`` is ``True``.
        completion_date:       Base date for due dates. Defaults to today (UTC).
        questionnaire:         Question set to score against.
        scoring:               Thresholds and renormalization switch.
        existing_keys:         (template_id, signal_code) of stored rows.
        generate:              Skip action generation when ``False``.
        require_uuid_identity: Enforce UUID-shaped ids.

    Returns:
        ``AssessmentAnalysis``.

    Raises:
        MissingContextError: If ``generate`` and an id is missing or malformed.
    """
    card = score_assessment(
        answers,
        questionnaire=questionnaire,
        weights=CATEGORY_WEIGHTS,
        renormalize=scoring.renormalize_missing_modules,
    )
    signals = aggregate_signals(
        card.module_scores,
        questionnaire,
        improvement_threshold=scoring.improvement_threshold,
        high_severity_below=scoring.high_severity_below,
    )

    generation = ActionGenerationResult()
    if generate:
        generation = generate_actions(
            signals,
            assessment_id=assessment_id,
            organization_id=organization_id,
            completion_date=completion_date or today_utc(),
            existing_keys=existing_keys,
            require_uuid_identity=require_uuid_identity,
        )

    return AssessmentAnalysis(
        score_card=card,
        signals=tuple(signals),
        generation=generation,
        coverage_diagnostics=coverage_diagnostics(questionnaire),
    )


# ── Stage ─────────────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class CompletionResult:
    """Outcome of ``AssessmentCompletionStage.run``.

    Attributes:
        success:           ``False`` only for a MissingContext failure.
        actions_generated: Rows inserted (or actions built when not persisting).
        analysis:          The analysis, when one was produced.
        error:             Error message on failure.
        diagnostics:       The ``MissingContext`` diagnostic on failure.
        plan_actions:      The assessment's full action plan: every stored
                           row when persisting, else this run's new actions.
        report_paths:      Files written when ``write_report`` was requested.
    """

    success:           bool
    actions_generated: int
    analysis:          Optional[AssessmentAnalysis] = None
    error:             Optional[str] = None
    diagnostics:       tuple[Diagnostic, ...] = ()
    plan_actions:      tuple[GeneratedAction | StoredAction, ...] = ()
    report_paths:      tuple[Path, ...] = ()


class AssessmentCompletionStage:
    """Runs the completion flow for one assessment.

    Attributes:
        config:  Application configuration.
        db_path: SQLite path (defaults to ``config.database.db_path``).
    """

    stage_name = "complete_assessment"

    def __init__(self, config: AppConfig, db_path: str | None = None) -> None:
        self.config = config
        self.db_path = db_path or config.database.db_path

    def run(
        self,
        assessment_id: str,
        organization_id: str,
        answers: Mapping[str, Any],
        completion_date: Optional[date] = None,
        persist: bool = True,
        write_report: bool = False,
    ) -> CompletionResult:
        """Score the assessment, generate and store its actions.

        Args:
            assessment_id:   Completed assessment id.
            organization_id: Owning organization id.
            answers:         question_id → 1..5 rating.
            completion_date: Base date for due dates. Defaults to today (UTC).
            persist:         Read existing and insert new actions in the DB.
            write_report:    Write JSON + CSV reports to ``output.report_dir``.

        Returns:
            ``CompletionResult``.
        """
        logger.info(
            "Stage [%s] starting | assessment_id=%s", self.stage_name, assessment_id
        )
        enabled = self.config.actions.enable_auto_actions
        if not enabled:
            logger.info("Auto action generation disabled; no actions will be created.")

        completion_date = completion_date or today_utc()

        try:
            if persist and enabled:
                analysis, inserted, plan = self._analyze_and_persist(
                    assessment_id, organization_id, answers, completion_date
                )
            else:
                analysis = self._analyze(
                    assessment_id, organization_id, answers, completion_date,
                    existing_keys=(), generate=enabled,
                )
                inserted = len(analysis.generation.actions)
                plan = analysis.generation.actions
        except MissingContextError as exc:
            logger.error("Stage [%s] failed: %s", self.stage_name, exc)
            return CompletionResult(
                success=False,
                actions_generated=0,
                error=str(exc),
                diagnostics=(exc.to_diagnostic(),),
            )

        report_paths: tuple[Path, ...] = ()
        if write_report:
            report_paths = self._write_reports(analysis, plan, assessment_id)

        logger.info(
            "Stage [%s] completed | actions=%d | plan=%d | signals=%d | overall=%s",
            self.stage_name, inserted, len(plan), len(analysis.signals),
            analysis.score_card.overall_score,
        )
        return CompletionResult(
            success=True,
            actions_generated=inserted,
            analysis=analysis,
            plan_actions=tuple(plan),
            report_paths=report_paths,
        )

    def _analyze(
        self,
        assessment_id: str,
        organization_id: str,
        answers: Mapping[str, Any],
        completion_date: date,
        existing_keys: Iterable[tuple[str, str]],
        generate: bool,
    ) -> AssessmentAnalysis:
        return analyze_assessment(
            answers,
            assessment_id=assessment_id,
            organization_id=organization_id,
            completion_date=completion_date,
            scoring=self.config.scoring,
            existing_keys=existing_keys,
            generate=generate,
            require_uuid_identity=self.config.actions.require_uuid_identity,
        )

    def _analyze_and_persist(
        self,
        assessment_id: str,
        organization_id: str,
        answers: Mapping[str, Any],
        completion_date: date,
    ) -> tuple[AssessmentAnalysis, int, list[StoredAction]]:
        from dealer_diagnostics.db.connection import get_connection
        from dealer_diagnostics.db.repositories.action_repo import GeneratedActionRepository
        from dealer_diagnostics.db.schema import apply_schema

        with get_connection(
            self.db_path,
            wal_mode=self.config.database.wal_mode,
            busy_timeout_ms=self.config.database.busy_timeout_ms,
        ) as conn:
            apply_schema(conn)
            repo = GeneratedActionRepository(conn)
            analysis = self._analyze(
                assessment_id, organization_id, answers, completion_date,
                existing_keys=repo.get_existing_keys(assessment_id), generate=True,
            )
            inserted = repo.insert_missing(analysis.generation.actions)
            plan = repo.get_for_assessment(assessment_id, organization_id=organization_id)

        return analysis, inserted, plan

    def _write_reports(
        self,
        analysis: AssessmentAnalysis,
        plan: Sequence[GeneratedAction | StoredAction],
        assessment_id: str,
    ) -> tuple[Path, ...]:
        from dealer_diagnostics.actions.reporter import write_action_plan_csv, write_action_plan_json

        output_dir = Path(self.config.output.report_dir)
        return (
            write_action_plan_json(analysis, output_dir, assessment_id, actions=plan),
            write_action_plan_csv(plan, output_dir, assessment_id),
        )
