"""Persist the rendered report as a dated snapshot plus a latest pointer."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from healthguard.config import REPORT_LATEST_FILENAME, REPORT_SNAPSHOT_TEMPLATE
from healthguard.pipeline.types import ValidationRun


@dataclass(frozen=True)
class ReportPaths:
    """Locations of the two report copies."""

    snapshot: Path
    latest: Path


def snapshot_filename(run: ValidationRun) -> str:
    """Dated snapshot name, using the date part of the run timestamp."""
    return REPORT_SNAPSHOT_TEMPLATE.format(date=run.generated_at[:10])


def write_report(markdown: str, out_dir: Path, run: ValidationRun) -> ReportPaths:
    """Write the snapshot first, then overwrite the latest pointer."""
    out_dir.mkdir(parents=True, exist_ok=True)

    snapshot = out_dir / snapshot_filename(run)
    latest = out_dir / REPORT_LATEST_FILENAME

    snapshot.write_text(markdown, encoding="utf-8")
    latest.write_text(markdown, encoding="utf-8")

    return ReportPaths(snapshot=snapshot, latest=latest)
