"""Run settings and canonical artifact locations."""

from __future__ import annotations

import os
from dataclasses import dataclass
from datetime import UTC, datetime
from pathlib import Path
from typing import Literal

Mode = Literal["fast", "full"]
TimestampMode = Literal["deterministic", "wallclock"]

GUARD_MODE_ENV = "GUARD_MODE"
DEBUG_ENV = "HEALTHGUARD_DEBUG"

DEFAULT_MANIFEST_DIR = Path("scripts") / "sentinel"
DEFAULT_AUDIT_DIR = Path("tmp")
DEFAULT_REPORT_DIR = Path("tmp")

REPORT_SNAPSHOT_TEMPLATE = "health_guard_report_{date}.md"
REPORT_LATEST_FILENAME = "health_guard_violations.md"

DETERMINISTIC_TIMESTAMP = "1970-01-01T00:00:00Z"


@dataclass(frozen=True)
class GuardSettings:
    """Resolved locations and switches for one validation run."""

    project_root: Path
    manifest_dir: Path
    audit_dir: Path
    report_dir: Path
    timestamp_mode: TimestampMode = "wallclock"
    debug: bool = False


def normalize_mode(mode: str | None) -> Mode:
    """Normalize a CLI or environment mode value; unset means full."""
    normalized = (mode or "full").strip().lower().lstrip("-")
    if normalized in {"fast", "full"}:
        return normalized  # type: ignore[return-value]
    raise ValueError(f"Unsupported mode: {mode}. Expected one of: fast, full.")


def normalize_timestamp_mode(timestamp_mode: str) -> TimestampMode:
    normalized = timestamp_mode.strip().lower()
    if normalized in {"deterministic", "wallclock"}:
        return normalized  # type: ignore[return-value]
    if normalized == "now":
        return "wallclock"
    raise ValueError(
        f"Unsupported timestamp mode: {timestamp_mode}. "
        "Expected one of: deterministic, wallclock, now."
    )


def debug_enabled() -> bool:
    return os.getenv(DEBUG_ENV, "0").strip().lower() in {"1", "true", "yes"}


def resolve_settings(
    project_root: Path | None = None,
    *,
    manifest_dir: Path | None = None,
    timestamp_mode: str = "wallclock",
    debug: bool = False,
) -> GuardSettings:
    """Resolve settings using CLI values first, then conventional locations."""
    root = (project_root or Path.cwd()).expanduser().resolve()

    if manifest_dir is None:
        resolved_manifest_dir = root / DEFAULT_MANIFEST_DIR
    elif manifest_dir.is_absolute():
        resolved_manifest_dir = manifest_dir
    else:
        resolved_manifest_dir = root / manifest_dir

    return GuardSettings(
        project_root=root,
        manifest_dir=resolved_manifest_dir,
        audit_dir=root / DEFAULT_AUDIT_DIR,
        report_dir=root / DEFAULT_REPORT_DIR,
        timestamp_mode=normalize_timestamp_mode(timestamp_mode),
        debug=debug or debug_enabled(),
    )


def current_time(timestamp_mode: TimestampMode) -> datetime:
    """Timestamp stamped on the run and its report."""
    if timestamp_mode == "deterministic":
        return datetime(1970, 1, 1, tzinfo=UTC)
    return datetime.now(UTC)


def format_timestamp(moment: datetime, timestamp_mode: TimestampMode) -> str:
    if timestamp_mode == "deterministic":
        return DETERMINISTIC_TIMESTAMP
    return moment.isoformat()
