"""Gate pipeline runner.

Gates execute strictly in the fixed order below. ``fast`` mode runs the
critical subset; the rest are recorded as skipped. A gate finding
violations never stops the pipeline, while an exception from any gate
propagates and aborts the whole run.
"""

from __future__ import annotations

from rich.console import Console

from healthguard.config import Mode
from healthguard.gates.a11y import check_accessibility
from healthguard.gates.audit import check_audit_summary
from healthguard.gates.duplicates import check_duplicates
from healthguard.gates.layers import check_layer_boundaries
from healthguard.gates.paths import check_import_paths
from healthguard.gates.schemas import check_schema_validation
from healthguard.gates.tenancy import check_tenant_isolation
from healthguard.gates.tokens import check_design_tokens
from healthguard.gates.wrappers import check_wrappers
from healthguard.pipeline.collector import ViolationCollector
from healthguard.pipeline.types import GateContext, GateOutcome, GateSpec, ValidationRun
from healthguard.reasons import ReasonCode

GATES: tuple[GateSpec, ...] = (
    GateSpec(1, "audit", "AUDIT SUMMARY", ReasonCode.NO_AUDIT, True,
             "Enhanced validation with content quality checks", check_audit_summary),
    GateSpec(2, "paths", "PATH VALIDATION", ReasonCode.PATH_GUESS, True,
             "Confirmed imports and TypeScript aliases", check_import_paths),
    GateSpec(3, "duplicates", "DUPLICATE DETECTION", ReasonCode.DUPLICATE_FOUND, False,
             "No duplicate components or functionality", check_duplicates),
    GateSpec(4, "layers", "SOC BOUNDARIES", ReasonCode.SOC_VIOLATION, True,
             "Manifest-driven layer isolation validation", check_layer_boundaries),
    GateSpec(5, "tenancy", "RLS COMPLIANCE", ReasonCode.RLS_RISK, False,
             "Manifest-driven organization filtering", check_tenant_isolation),
    GateSpec(6, "tokens", "UI TOKENS", ReasonCode.UI_HARDCODE, True,
             "Allowlist-driven semantic token validation", check_design_tokens),
    GateSpec(7, "a11y", "ACCESSIBILITY", ReasonCode.A11Y_FAIL, False,
             "WCAG 2.1 AA compliance", check_accessibility),
    GateSpec(8, "schemas", "ZOD VALIDATION", ReasonCode.NO_ZOD_SCHEMA, False,
             "Zod schemas for forms and APIs", check_schema_validation),
    GateSpec(9, "wrappers", "BFF WRAPPERS", ReasonCode.WRAPPERS_MISSING, False,
             "Correct security wrapper order", check_wrappers),
)

console = Console()


def gates_for_mode(mode: Mode) -> tuple[GateSpec, ...]:
    """Gates executed in ``mode``, in pipeline order."""
    if mode == "fast":
        return tuple(gate for gate in GATES if gate.critical)
    return GATES


def run_pipeline(
    mode: Mode,
    ctx: GateContext,
    *,
    generated_at: str,
    out: Console | None = None,
) -> ValidationRun:
    """
    Run every gate selected by ``mode`` against ``ctx``.

    Args:
        mode: "fast" or "full"
        ctx: Explicit gate inputs (settings, change set, manifests, clock)
        generated_at: Timestamp recorded on the run
        out: Console for the gate transcript (module console by default)

    Returns:
        ValidationRun with violations in gate order and one outcome per gate
    """
    out = out or console
    selected = {gate.number for gate in gates_for_mode(mode)}
    collector = ViolationCollector()
    outcomes: list[GateOutcome] = []

    for gate in GATES:
        if gate.number not in selected:
            outcomes.append(GateOutcome(gate=gate, status="skipped"))
            continue

        out.print(f"🔍 [GATE {gate.number}] Validating {gate.title}...")
        found = gate.check(ctx)
        collector.extend(found)
        outcomes.append(GateOutcome(gate=gate, status="fail" if found else "pass", violations=tuple(found)))
        out.print(f"✅ {gate.title} validation completed")

    if ctx.settings.debug:
        out.print(f"[dim]Manifest provenance: {ctx.manifests.sources}[/dim]")

    return ValidationRun(
        mode=mode,
        files=list(ctx.files),
        generated_at=generated_at,
        timestamp_mode=ctx.settings.timestamp_mode,
        violations=list(collector.violations),
        outcomes=outcomes,
    )
