"""End-to-end validation run: change set, manifests, gates, report."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime

from rich.console import Console

from healthguard import __version__
from healthguard.config import GuardSettings, Mode, current_time, format_timestamp
from healthguard.git.changeset import resolve_change_set
from healthguard.manifests.registry import load_manifests
from healthguard.manifests.types import ManifestBundle
from healthguard.pipeline.runner import run_pipeline
from healthguard.pipeline.types import GateContext, ValidationRun
from healthguard.report.markdown import render_report
from healthguard.report.writer import ReportPaths, write_report

console = Console()


@dataclass(frozen=True)
class GuardResult:
    """Outcome of one invocation.

    ``run`` and ``report`` are None when the change set was empty, which is
    a trivial pass.
    """

    mode: Mode
    run: ValidationRun | None
    manifests: ManifestBundle | None
    report: ReportPaths | None

    @property
    def passed(self) -> bool:
        return self.run is None or self.run.passed


def run_guard(
    mode: Mode,
    settings: GuardSettings,
    *,
    base: str | None = None,
    files: list[str] | None = None,
    now: datetime | None = None,
    out: Console | None = None,
) -> GuardResult:
    """
    Validate the change set and persist the report.

    Args:
        mode: "fast" (critical gates) or "full" (all gates)
        settings: Resolved run settings
        base: Compare against this ref instead of the staged files
        files: Explicit file list instead of asking git
        now: Clock used for audit freshness (wallclock by default)
        out: Console for the transcript

    Returns:
        GuardResult; violations are data, never exceptions

    Raises:
        Exception: Any unexpected failure aborts the run before a report
            is written
    """
    out = out or console
    out.print(f"🏥 Health Guard v{__version__} ({mode.upper()} mode)")

    change_set = resolve_change_set(settings.project_root, base=base, explicit=files)
    if not change_set:
        out.print("[green]✅ No staged files to validate[/green]")
        return GuardResult(mode=mode, run=None, manifests=None, report=None)

    out.print(f"📋 Validating {len(change_set)} staged files...")

    manifests = load_manifests(settings.manifest_dir)
    ctx = GateContext(
        settings=settings,
        files=tuple(change_set),
        manifests=manifests,
        now=now or datetime.now(UTC),
    )
    generated_at = format_timestamp(current_time(settings.timestamp_mode), settings.timestamp_mode)

    run = run_pipeline(mode, ctx, generated_at=generated_at, out=out)

    markdown = render_report(run, manifests)
    report = write_report(markdown, settings.report_dir, run)

    return GuardResult(mode=mode, run=run, manifests=manifests, report=report)


def result_to_dict(result: GuardResult) -> dict:
    """Machine-readable summary of a result."""
    run = result.run
    return {
        "schema_version": "1.0",
        "guard_version": __version__,
        "mode": result.mode,
        "status": "passed" if result.passed else "failed",
        "generated_at": run.generated_at if run else None,
        "files": run.files if run else [],
        "violations": {
            "count": len(run.violations) if run else 0,
            "items": [
                {"code": v.code.value, "message": v.message, "description": v.description}
                for v in (run.violations if run else [])
            ],
        },
        "gates": [
            {
                "number": o.gate.number,
                "name": o.gate.name,
                "status": o.status,
                "violations": len(o.violations),
            }
            for o in (run.outcomes if run else [])
        ],
        "manifests": dict(result.manifests.sources) if result.manifests else {},
        "report": {
            "snapshot": str(result.report.snapshot),
            "latest": str(result.report.latest),
        } if result.report else None,
    }
