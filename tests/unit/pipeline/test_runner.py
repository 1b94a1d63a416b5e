"""Tests for gate ordering, mode selection and violation collection."""

from __future__ import annotations

import io

import pytest
from rich.console import Console

from healthguard.pipeline import runner
from healthguard.pipeline.collector import ViolationCollector, group_by_code
from healthguard.pipeline.runner import GATES, gates_for_mode, run_pipeline
from healthguard.pipeline.types import GateSpec, Violation, make_violation
from healthguard.reasons import ReasonCode

FULL_ONLY_CODES = {
    ReasonCode.DUPLICATE_FOUND,
    ReasonCode.RLS_RISK,
    ReasonCode.A11Y_FAIL,
    ReasonCode.NO_ZOD_SCHEMA,
    ReasonCode.WRAPPERS_MISSING,
}

# Clean for the critical gates, dirty for every non-critical one.
NON_CRITICAL_FILES = {
    "src/ui/Form.tsx": "<button onClick={go}>Go</button>\nconst form = useForm({})\n",
    "src/app/api/intake/route.ts": "export async function POST(req) {}\n",
    "src/data/patients.repo.ts": "client.from('patients').select('*')\n",
}


def _quiet() -> Console:
    return Console(file=io.StringIO(), width=200)


@pytest.fixture
def audited_context(project, make_context, valid_audit):
    (project / "tmp").mkdir()
    (project / "tmp" / "audit_summary.md").write_text(valid_audit, encoding="utf-8")
    return make_context(NON_CRITICAL_FILES)


def test_gate_table_is_fixed():
    assert [g.number for g in GATES] == list(range(1, 10))
    assert [g.number for g in gates_for_mode("fast")] == [1, 2, 4, 6]
    assert gates_for_mode("full") == GATES


def test_fast_mode_never_reports_non_critical_codes(audited_context):
    run = run_pipeline("fast", audited_context, generated_at="1970-01-01T00:00:00Z", out=_quiet())

    assert run.violations == []
    assert run.passed
    statuses = {o.gate.number: o.status for o in run.outcomes}
    assert statuses == {1: "pass", 2: "pass", 3: "skipped", 4: "pass", 5: "skipped",
                        6: "pass", 7: "skipped", 8: "skipped", 9: "skipped"}


def test_full_mode_collects_in_gate_order(audited_context):
    run = run_pipeline("full", audited_context, generated_at="1970-01-01T00:00:00Z", out=_quiet())

    assert [v.code for v in run.violations] == [
        ReasonCode.RLS_RISK,
        ReasonCode.A11Y_FAIL,
        ReasonCode.A11Y_FAIL,
        ReasonCode.NO_ZOD_SCHEMA,
        ReasonCode.NO_ZOD_SCHEMA,
        ReasonCode.WRAPPERS_MISSING,
    ]
    assert not run.passed
    assert {v.code for v in run.violations} <= FULL_ONLY_CODES
    assert all(o.status != "skipped" for o in run.outcomes)


def test_transcript_lists_only_selected_gates(audited_context):
    out = _quiet()
    run_pipeline("fast", audited_context, generated_at="x", out=out)
    transcript = out.file.getvalue()

    assert "[GATE 1] Validating AUDIT SUMMARY..." in transcript
    assert "✅ UI TOKENS validation completed" in transcript
    assert "[GATE 3]" not in transcript
    assert transcript.index("[GATE 2]") < transcript.index("[GATE 4]")


def test_violations_in_one_gate_do_not_stop_later_gates(project, make_context):
    # No audit directory: gate 1 fails, gate 2 must still run.
    ctx = make_context({"src/ui/Step.tsx": "import { x } from '@/missing/thing'\n"})

    run = run_pipeline("fast", ctx, generated_at="x", out=_quiet())

    assert [v.code for v in run.violations] == [ReasonCode.NO_AUDIT, ReasonCode.PATH_GUESS]


def test_gate_exception_aborts_run(audited_context, monkeypatch):
    def _boom(ctx):
        raise RuntimeError("gate exploded")

    broken = GateSpec(1, "audit", "AUDIT SUMMARY", ReasonCode.NO_AUDIT, True, "boom", _boom)
    monkeypatch.setattr(runner, "GATES", (broken, *GATES[1:]))

    with pytest.raises(RuntimeError, match="gate exploded"):
        run_pipeline("full", audited_context, generated_at="x", out=_quiet())


def test_collector_keeps_arrival_order_and_groups_by_first_seen_code():
    collector = ViolationCollector()
    collector.extend([make_violation(ReasonCode.UI_HARDCODE, "one"), make_violation(ReasonCode.PATH_GUESS, "two")])
    collector.extend([make_violation(ReasonCode.UI_HARDCODE, "three")])

    assert [v.message for v in collector.violations] == ["one", "two", "three"]

    grouped = group_by_code(collector.violations)

    assert list(grouped) == [ReasonCode.UI_HARDCODE, ReasonCode.PATH_GUESS]
    assert [v.message for v in grouped[ReasonCode.UI_HARDCODE]] == ["one", "three"]


def test_collector_rejects_unknown_codes():
    collector = ViolationCollector()

    with pytest.raises(TypeError, match="unknown reason code"):
        collector.extend([Violation(code="MADE_UP", message="m", description="d")])  # type: ignore[arg-type]
