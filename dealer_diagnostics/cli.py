"""
Dealership diagnostics — CLI entry point.

All commands follow this pattern:
  1. Load ``AppConfig`` via ``load_config()``.
  2. Configure logging.
  3. Validate inputs.
  4. Execute action (DB init, table check, scoring, completion).
  5. Report result to stdout.

Install and run::

    pip install -e .
    dealer-diagnostics --help
    dealer-diagnostics init-db
    dealer-diagnostics validate-config
    dealer-diagnostics check-tables
    dealer-diagnostics score --answers answers.json
    dealer-diagnostics analyze --answers answers.json \\
        --assessment-id <uuid> --organization-id <uuid> --report

Answers files are JSON objects mapping question id to a 1..5 rating, either
at the top level or under an ``"answers"`` key.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Optional

import typer

app = typer.Typer(
    name="dealer-diagnostics",
    help="Dealership self-assessment scoring and action plan engine.",
    add_completion=False,
)


# ── Helpers ───────────────────────────────────────────────────────────────────

def _load_config_or_exit(config_path: Optional[str] = None):
    """Load AppConfig, printing a friendly error and exiting on failure."""
    from dealer_diagnostics.config import load_config

    try:
        cfg_path = Path(config_path) if config_path else None
        return load_config(cfg_path)
    except FileNotFoundError as exc:
        typer.echo(f"[ERROR] {exc}", err=True)
        raise typer.Exit(code=1)
    except Exception as exc:
        typer.echo(f"[ERROR] Config validation failed: {exc}", err=True)
        raise typer.Exit(code=1)


def _configure_logging(config):
    """Set up logging from config."""
    from dealer_diagnostics.utils.logging import configure_logging
    configure_logging(config.logging)


def _load_answers_or_exit(answers_path: str) -> dict[str, Any]:
    """Read an answers JSON file, exiting with code 1 on any problem."""
    path = Path(answers_path)
    if not path.exists():
        typer.echo(f"[ERROR] Answers file not found: {path}", err=True)
        raise typer.Exit(code=1)
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        typer.echo(f"[ERROR] Answers file is not valid JSON: {exc}", err=True)
        raise typer.Exit(code=1)

    if isinstance(raw, dict) and isinstance(raw.get("answers"), dict):
        raw = raw["answers"]
    if not isinstance(raw, dict):
        typer.echo("[ERROR] Answers file must contain a JSON object of question_id → rating.", err=True)
        raise typer.Exit(code=1)
    return raw


def _echo_scores(card) -> None:
    from dealer_diagnostics.scoring.maturity import maturity_level
    from dealer_diagnostics.taxonomy.module_taxonomy import module_display_name

    typer.echo("Module scores:")
    for key, score in card.module_scores.items():
        shown = "n/a" if score is None else f"{score:>3d}"
        typer.echo(f"  {module_display_name(key):<22} {shown}")
    if card.has_score:
        level = maturity_level(card.overall_score)
        typer.echo(f"Overall score: {card.overall_score:.2f} ({level.value})")
    else:
        typer.echo("Overall score: n/a (no module answered)")


def _echo_signals(signals) -> None:
    from dealer_diagnostics.taxonomy.module_taxonomy import module_display_name

    typer.echo(f"Signals: {len(signals)}")
    for s in signals:
        typer.echo(
            f"  [{s.severity.value:<6}] {s.signal_code.value:<26} "
            f"{module_display_name(s.module_key)}  ({', '.join(s.triggering_question_ids)})"
        )


def _echo_diagnostics(diagnostics) -> None:
    for d in diagnostics:
        typer.echo(f"  [WARN] {d.code.value}: {d.message}")


# ── Commands ──────────────────────────────────────────────────────────────────

@app.command("init-db")
def init_db(
    db_path: Optional[str] = typer.Option(
        None,
        "--db-path",
        help="Override DB path from config (e.g. data/db/test.db).",
    ),
    config_path: Optional[str] = typer.Option(
        None,
        "--config",
        help="Path to TOML config file.",
    ),
) -> None:
    """Initialize the SQLite database and apply the schema.

    Safe to run multiple times — all DDL uses IF NOT EXISTS.
    """
    from dealer_diagnostics.db.connection import get_connection
    from dealer_diagnostics.db.schema import ALL_TABLE_NAMES, apply_schema

    config = _load_config_or_exit(config_path)
    _configure_logging(config)

    target_path = db_path or config.database.db_path
    typer.echo(f"Initializing database at: {target_path}")

    with get_connection(
        target_path,
        wal_mode=config.database.wal_mode,
        busy_timeout_ms=config.database.busy_timeout_ms,
    ) as conn:
        apply_schema(conn)

    typer.echo(f"  Tables: {len(ALL_TABLE_NAMES)} created/verified.")
    typer.echo("[OK] Database ready.")


@app.command("validate-config")
def validate_config(
    config_path: Optional[str] = typer.Option(
        None,
        "--config",
        help="Path to TOML config file (default: config/default.toml).",
    ),
    show_full: bool = typer.Option(
        False,
        "--full",
        help="Print full config including all fields.",
    ),
) -> None:
    """Validate the configuration file and print parsed values.

    Exits with code 1 if the config fails validation.
    """
    config = _load_config_or_exit(config_path)

    typer.echo("Configuration validated successfully.")
    typer.echo("")
    typer.echo(f"  Database path:         {config.database.db_path}")
    typer.echo(f"  Improvement threshold: {config.scoring.improvement_threshold}")
    typer.echo(f"  High severity below:   {config.scoring.high_severity_below}")
    typer.echo(f"  Renormalize missing:   {config.scoring.renormalize_missing_modules}")
    typer.echo(f"  Auto actions enabled:  {config.actions.enable_auto_actions}")
    typer.echo(f"  Report dir:            {config.output.report_dir}")
    typer.echo(f"  Log level:             {config.logging.level}")
    typer.echo(f"  Debug mode:            {config.debug}")

    if show_full:
        typer.echo("")
        typer.echo("Full config (JSON):")
        typer.echo(json.dumps(config.model_dump(), indent=2, default=str))

    typer.echo("")
    typer.echo("[OK] Config valid.")


@app.command("check-tables")
def check_tables() -> None:
    """Check the static tables: weights, mapping coverage, action catalog.

    Exits with code 1 on any gap, so it can gate a build.
    """
    from dealer_diagnostics.actions.catalog import validate_catalog_integrity
    from dealer_diagnostics.data.questionnaire import QUESTIONNAIRE
    from dealer_diagnostics.scoring.engine import validate_weights
    from dealer_diagnostics.signals.mapping import validate_mapping_coverage
    from dealer_diagnostics.taxonomy.module_taxonomy import CATEGORY_WEIGHTS

    problems: list[str] = []

    try:
        validate_weights(CATEGORY_WEIGHTS)
    except ValueError as exc:
        problems.append(str(exc))
    unweighted = [k for k in QUESTIONNAIRE.module_keys() if k not in CATEGORY_WEIGHTS]
    problems.extend(f"Module '{k}' has no category weight." for k in unweighted)

    coverage = validate_mapping_coverage(QUESTIONNAIRE.all_question_ids())
    typer.echo(
        f"Mapping coverage: {len(coverage.covered)}/{len(coverage.covered) + len(coverage.missing)} "
        f"({coverage.coverage_percent:.2f}%)"
    )
    problems.extend(f"Question '{qid}' has no signal mapping." for qid in coverage.missing)

    problems.extend(validate_catalog_integrity())

    if problems:
        for problem in problems:
            typer.echo(f"  [FAIL] {problem}", err=True)
        typer.echo(f"[ERROR] {len(problems)} table problem(s) found.", err=True)
        raise typer.Exit(code=1)

    typer.echo("[OK] Static tables consistent.")


@app.command("score")
def score(
    answers_path: str = typer.Option(..., "--answers", help="Answers JSON file."),
    config_path: Optional[str] = typer.Option(None, "--config", help="Path to TOML config file."),
) -> None:
    """Score an answers file and list the signals it raises (no actions, no DB)."""
    from dealer_diagnostics.scoring.engine import score_assessment
    from dealer_diagnostics.signals.aggregator import aggregate_signals

    config = _load_config_or_exit(config_path)
    _configure_logging(config)
    answers = _load_answers_or_exit(answers_path)

    card = score_assessment(answers, renormalize=config.scoring.renormalize_missing_modules)
    signals = aggregate_signals(
        card.module_scores,
        improvement_threshold=config.scoring.improvement_threshold,
        high_severity_below=config.scoring.high_severity_below,
    )

    _echo_scores(card)
    _echo_signals(signals)
    _echo_diagnostics(card.diagnostics)


@app.command("analyze")
def analyze(
    answers_path: str = typer.Option(..., "--answers", help="Answers JSON file."),
    assessment_id: str = typer.Option(..., "--assessment-id", help="Assessment UUID."),
    organization_id: str = typer.Option(..., "--organization-id", help="Organization UUID."),
    completion_date: Optional[str] = typer.Option(
        None,
        "--completion-date",
        help="Completion date YYYY-MM-DD (default: today, UTC).",
    ),
    persist: bool = typer.Option(True, "--persist/--no-persist", help="Store actions in the DB."),
    report: bool = typer.Option(False, "--report", help="Write JSON + CSV action plan reports."),
    db_path: Optional[str] = typer.Option(None, "--db-path", help="Override DB path from config."),
    config_path: Optional[str] = typer.Option(None, "--config", help="Path to TOML config file."),
) -> None:
    """Complete an assessment: score, derive signals, generate and store actions."""
    from dealer_diagnostics.pipeline.complete_assessment import AssessmentCompletionStage
    from dealer_diagnostics.utils.time_utils import parse_iso_date

    config = _load_config_or_exit(config_path)
    _configure_logging(config)
    answers = _load_answers_or_exit(answers_path)

    parsed_date = None
    if completion_date:
        try:
            parsed_date = parse_iso_date(completion_date)
        except ValueError:
            typer.echo(f"[ERROR] Invalid --completion-date '{completion_date}' (expected YYYY-MM-DD).", err=True)
            raise typer.Exit(code=1)

    stage = AssessmentCompletionStage(config=config, db_path=db_path)
    result = stage.run(
        assessment_id=assessment_id,
        organization_id=organization_id,
        answers=answers,
        completion_date=parsed_date,
        persist=persist,
        write_report=report,
    )

    if not result.success:
        typer.echo(f"[ERROR] {result.error}", err=True)
        raise typer.Exit(code=1)

    analysis = result.analysis
    _echo_scores(analysis.score_card)
    _echo_signals(analysis.signals)
    typer.echo(f"Actions generated: {result.actions_generated}")
    typer.echo(f"Action plan size: {len(result.plan_actions)}")
    for a in analysis.generation.actions:
        typer.echo(f"  {a.template_id}  {a.priority.value:<6} due {a.due_date}  {a.title}")
    _echo_diagnostics(analysis.diagnostics)
    for path in result.report_paths:
        typer.echo(f"  Report: {path}")
    typer.echo("[OK] Assessment analyzed.")


if __name__ == "__main__":
    app()
