"""
Application configuration management.

Load order (each layer overrides the previous):
  1. ``config/default.toml``      — committed static defaults
  2. ``config/local.toml``        — optional local overrides (gitignored)
  3. ``.env``                     — local env overrides (gitignored)
  4. Environment variables        — ``DEALER_DIAG_*`` prefix

Entry point: ``load_config(config_path=None) -> AppConfig``

The completion stage and CLI commands receive an ``AppConfig`` instance —
never raw dicts or individual env var lookups scattered through the codebase.
"""

from __future__ import annotations

import os
import tomllib
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, field_validator, model_validator

# ── Sub-config models ─────────────────────────────────────────────────────────


class DatabaseConfig(BaseModel):
    """SQLite database connection settings."""

    model_config = ConfigDict(frozen=True)

    db_path: str = "data/db/dealer_diagnostics.db"
    wal_mode: bool = True
    busy_timeout_ms: int = 5000


class ScoringConfig(BaseModel):
    """Thresholds for signal derivation and overall-score behaviour.

    ``renormalize_missing_modules`` divides the overall score by the sum of the
    weights of modules that actually have a score.
    """

    model_config = ConfigDict(frozen=True)

    improvement_threshold: int = 70
    high_severity_below: int = 50
    renormalize_missing_modules: bool = True

    @model_validator(mode="after")
    def validate_thresholds(self) -> "ScoringConfig":
        if not 0 < self.high_severity_below <= self.improvement_threshold <= 100:
            raise ValueError(
                "Expected 0 < high_severity_below <= improvement_threshold <= 100, got "
                f"high_severity_below={self.high_severity_below}, "
                f"improvement_threshold={self.improvement_threshold}."
            )
        return self


class ActionsConfig(BaseModel):
    """Action generation switches."""

    model_config = ConfigDict(frozen=True)

    enable_auto_actions: bool = True
    require_uuid_identity: bool = True


class OutputConfig(BaseModel):
    """Report output locations."""

    model_config = ConfigDict(frozen=True)

    report_dir: str = "data/outputs/action_plans"


class LoggingConfig(BaseModel):
    """Logging output settings."""

    model_config = ConfigDict(frozen=True)

    level: str = "INFO"
    log_file: str = "data/logs/dealer_diagnostics.log"
    json_format: bool = False

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        valid = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in valid:
            raise ValueError(f"Log level must be one of {sorted(valid)}, got '{v}'.")
        return v.upper()


class AppConfig(BaseModel):
    """Complete application configuration — the single source of truth.

    Constructed by ``load_config()`` which merges TOML + .env + env vars.
    """

    model_config = ConfigDict(frozen=True)

    database: DatabaseConfig = DatabaseConfig()
    scoring: ScoringConfig = ScoringConfig()
    actions: ActionsConfig = ActionsConfig()
    output: OutputConfig = OutputConfig()
    logging: LoggingConfig = LoggingConfig()
    debug: bool = False


# ── Loader ────────────────────────────────────────────────────────────────────

_PROJECT_ROOT = Path(__file__).parent.parent

_TRUTHY = ("1", "true", "yes", "on")


def _find_project_root() -> Path:
    """Walk up from this file to find the project root (contains pyproject.toml)."""
    candidate = Path(__file__).parent
    for _ in range(5):
        if (candidate / "pyproject.toml").exists():
            return candidate
        candidate = candidate.parent
    return _PROJECT_ROOT


def load_config(config_path: Optional[Path] = None) -> AppConfig:
    """Load and merge application configuration.

    Args:
        config_path: Explicit path to a TOML config file. Defaults to
            ``<project_root>/config/default.toml``.

    Returns:
        Fully validated ``AppConfig`` instance.

    Raises:
        FileNotFoundError: If the specified ``config_path`` does not exist.
        pydantic.ValidationError: If merged config values fail validation.
    """
    root = _find_project_root()

    # 1. Load .env file (silently skip if missing)
    load_dotenv(dotenv_path=root / ".env", override=False)

    # 2. Load TOML config
    if config_path is None:
        config_path = root / "config" / "default.toml"

    config_path = Path(config_path)
    if not config_path.exists():
        raise FileNotFoundError(
            f"Config file not found: {config_path}\n"
            "Create config/default.toml or pass --config."
        )

    with open(config_path, "rb") as f:
        raw: dict[str, Any] = tomllib.load(f)

    local_config_path = config_path.parent / "local.toml"
    if local_config_path.exists():
        with open(local_config_path, "rb") as f:
            local_raw: dict[str, Any] = tomllib.load(f)
        raw = _deep_merge(raw, local_raw)

    # 3. Apply DEALER_DIAG_* environment variable overrides
    raw = _apply_env_overrides(raw)

    # 4. Build and validate AppConfig
    return _build_app_config(raw)


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Recursively merge ``override`` into ``base``."""
    result = dict(base)
    for key, val in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(val, dict):
            result[key] = _deep_merge(result[key], val)
        else:
            result[key] = val
    return result


def _apply_env_overrides(raw: dict[str, Any]) -> dict[str, Any]:
    """Apply DEALER_DIAG_* env vars to the raw config dict.

    Supported overrides:
      DEALER_DIAG_DB_PATH              → raw["database"]["db_path"]
      DEALER_DIAG_LOG_LEVEL            → raw["logging"]["level"]
      DEALER_DIAG_DEBUG                → raw["debug"]
      DEALER_DIAG_ENABLE_AUTO_ACTIONS  → raw["actions"]["enable_auto_actions"]
    """
    if db_path := os.environ.get("DEALER_DIAG_DB_PATH"):
        raw.setdefault("database", {})["db_path"] = db_path

    if log_level := os.environ.get("DEALER_DIAG_LOG_LEVEL"):
        raw.setdefault("logging", {})["level"] = log_level

    if debug := os.environ.get("DEALER_DIAG_DEBUG"):
        raw["debug"] = debug.lower() in _TRUTHY

    if auto_actions := os.environ.get("DEALER_DIAG_ENABLE_AUTO_ACTIONS"):
        raw.setdefault("actions", {})["enable_auto_actions"] = auto_actions.lower() in _TRUTHY

    return raw


def _build_app_config(raw: dict[str, Any]) -> AppConfig:
    """Map raw TOML dict to ``AppConfig`` model structure."""
    project = raw.pop("project", {})

    return AppConfig(
        database=DatabaseConfig(**raw.get("database", {})),
        scoring=ScoringConfig(**raw.get("scoring", {})),
        actions=ActionsConfig(**raw.get("actions", {})),
        output=OutputConfig(**raw.get("output", {})),
        logging=LoggingConfig(**raw.get("logging", {})),
        debug=raw.get("debug", project.get("debug", False)),
    )
