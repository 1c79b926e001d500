"""
Action plan report writer: JSON and CSV output for one analyzed assessment.

All functions are pure I/O with no DB access.  They consume an in-memory
``AssessmentAnalysis`` and the action plan to list, either freshly
generated ``GeneratedAction``s or ``StoredAction`` rows read back after a
run, and write human-readable + machine-readable files.

Output files (written by AssessmentCompletionStage when ``write_report``)
-----------------------------------------------------------------------
  data/outputs/action_plans/
    action_plan_{assessment_id}.json   -- scores, signals, actions, diagnostics
    action_plan_{assessment_id}.csv    -- one row per action in the plan
"""

from __future__ import annotations

import csv
import json
import logging
from collections.abc import Sequence
from pathlib import Path
from typing import TYPE_CHECKING, Optional, Union

from dealer_diagnostics.models.action import GeneratedAction, StoredAction
from dealer_diagnostics.scoring.maturity import maturity_level
from dealer_diagnostics.taxonomy.module_taxonomy import module_display_name
from dealer_diagnostics.taxonomy.signal_taxonomy import SIGNAL_RATIONALES
from dealer_diagnostics.utils.time_utils import utcnow

if TYPE_CHECKING:
    from dealer_diagnostics.pipeline.complete_assessment import AssessmentAnalysis

logger = logging.getLogger(__name__)

SCHEMA_VERSION = "v1.0.0"

PlanAction = Union[GeneratedAction, StoredAction]


def write_action_plan_json(
    analysis: "AssessmentAnalysis",
    output_dir: Path,
    assessment_id: str,
    actions: Optional[Sequence[PlanAction]] = None,
) -> Path:
    """Write the full analysis of one assessment to a structured JSON file.

    Args:
        analysis:      Output of ``analyze_assessment()``.
        output_dir:    Target directory (created if missing).
        assessment_id: Used in the filename and metadata.
        actions:       Action plan to list; defaults to the analysis's new
                       actions.

    Returns:
        Path to the written JSON file.
    """
    output_dir.mkdir(parents=True, exist_ok=True)
    json_path = output_dir / f"action_plan_{assessment_id}.json"

    if actions is None:
        actions = analysis.generation.actions

    card = analysis.score_card
    payload: dict = {
        "schema_version": SCHEMA_VERSION,
        "assessment_id":  assessment_id,
        "generated_at":   utcnow().isoformat(),
        "overall_score":  card.overall_score if card.has_score else None,
        "maturity_level": maturity_level(card.overall_score).value if card.has_score else None,
        "module_scores": [
            {
                "module_key":   key,
                "module_name":  module_display_name(key),
                "score":        score,
            }
            for key, score in card.module_scores.items()
        ],
        "signals": [
            {
                "signal_code":  s.signal_code.value,
                "severity":     s.severity.value,
                "module_key":   s.module_key,
                "title":        SIGNAL_RATIONALES[s.signal_code].title,
                "summary":      SIGNAL_RATIONALES[s.signal_code].summary,
                "recommendation": SIGNAL_RATIONALES[s.signal_code].recommendation,
                "rationale":    s.rationale,
                "triggering_question_ids": list(s.triggering_question_ids),
            }
            for s in analysis.signals
        ],
        "actions": [
            a.model_dump(mode="json") for a in actions
        ],
        "diagnostics": [
            {"code": d.code.value, "message": d.message, "subject": d.subject}
            for d in analysis.diagnostics
        ],
    }

    json_path.write_text(json.dumps(payload, indent=2, default=str), encoding="utf-8")
    logger.info("Action plan JSON written: %s", json_path)
    return json_path


def write_action_plan_csv(
    actions: Sequence[PlanAction],
    output_dir: Path,
    assessment_id: str,
) -> Path:
    """Write an action plan to a CSV file, one row per action.

    Columns: template_id, signal_code, module, title, owner_role,
             priority, due_date, status, triggering_questions.

    Rows keep the given order: generation order for new actions, insertion
    order for stored rows.
    """
    output_dir.mkdir(parents=True, exist_ok=True)
    csv_path = output_dir / f"action_plan_{assessment_id}.csv"

    fieldnames = [
        "template_id", "signal_code", "module", "title", "owner_role",
        "priority", "due_date", "status", "triggering_questions",
    ]

    with csv_path.open("w", newline="", encoding="utf-8") as f:
        writer = csv.DictWriter(f, fieldnames=fieldnames)
        writer.writeheader()
        for a in actions:
            row = a.model_dump(mode="json")
            writer.writerow(
                {
                    "template_id":  row["template_id"],
                    "signal_code":  row["signal_code"],
                    "module":       module_display_name(row["module_key"]),
                    "title":        row["title"],
                    "owner_role":   row["owner_role"],
                    "priority":     row["priority"],
                    "due_date":     row["due_date"],
                    "status":       row["status"],
                    "triggering_questions": ";".join(row["triggering_question_ids"]),
                }
            )

    logger.info("Action plan CSV written: %s (%d rows)", csv_path, len(actions))
    return csv_path
