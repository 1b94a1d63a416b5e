"""Render a validation run as a deterministic Markdown report."""

from __future__ import annotations

from healthguard import __version__
from healthguard.manifests.registry import MANIFEST_KINDS, MANIFEST_LABELS
from healthguard.manifests.types import ManifestBundle
from healthguard.pipeline.collector import group_by_code
from healthguard.pipeline.types import GateOutcome, ValidationRun
from healthguard.reasons import CRITICAL_CODES

STATUS_ICONS = {"pass": "✅", "fail": "❌", "skipped": "⏭️"}


def _gate_row(outcome: GateOutcome) -> str:
    gate = outcome.gate
    icon = STATUS_ICONS[outcome.status]
    summary = "Skipped in fast mode" if outcome.status == "skipped" else gate.summary
    return f"| {gate.number} - {gate.title} | {icon} | {summary} |"


def render_report(run: ValidationRun, manifests: ManifestBundle) -> str:
    """Render the full report; identical inputs give identical text."""
    grouped = group_by_code(run.violations)
    status = "✅ PASSED" if run.passed else "❌ FAILED"
    mode_line = (
        "⚡ **Fast Mode**: Critical gates only (pre-commit validation)"
        if run.mode == "fast"
        else "🔍 **Full Mode**: Complete validation (pre-push/CI)"
    )

    lines = [
        f"# Health Guard Violations Report v{__version__}",
        "",
        f"**Generated**: {run.generated_at}",
        f"**Mode**: {run.mode.upper()}",
        f"**Guard Version**: Health Guard v{__version__}",
        f"**Files Analyzed**: {len(run.files)}",
        "",
        "## 📊 Summary",
        "",
        f"- **Total Violations**: {len(run.violations)}",
        f"- **Violation Types**: {len(grouped)}",
        f"- **Status**: {status}",
        "",
        mode_line,
        "",
        "## 🚦 GATES Status",
        "",
        "| Gate | Status | Description |",
        "|------|--------|-------------|",
    ]
    lines.extend(_gate_row(outcome) for outcome in run.outcomes)

    lines.extend(["", "## 🚫 Violations by Category", ""])
    if not run.violations:
        lines.append("✨ **No violations found!** All compliance checks passed.")
    for code, violations in grouped.items():
        plural = "s" if len(violations) > 1 else ""
        lines.extend([
            f"### {code.value} ({len(violations)} occurrence{plural})",
            "",
            f"**Impact**: {code.description}",
            "",
        ])
        lines.extend(f"{i}. {v.message}" for i, v in enumerate(violations, 1))
        lines.extend(["", f"**Resolution**: {code.resolution}", ""])

    lines.extend(["", "## 📋 Configuration Status", ""])
    for kind in MANIFEST_KINDS:
        source = "✅ Custom" if manifests.is_custom(kind) else "⚠️  Default"
        lines.append(f"- **{MANIFEST_LABELS[kind]}**: {source}")

    lines.extend(["", "## 🔧 Next Steps", ""])
    lines.extend(_next_steps(run))

    lines.extend([
        "",
        "---",
        "",
        f"*Health Guard v{__version__} - Automated architecture compliance enforcement*",
        "",
    ])
    return "\n".join(lines)


def _next_steps(run: ValidationRun) -> list[str]:
    if run.passed:
        lines = ["### ✅ All Validations Passed!", "", "Your changes are ready for:"]
        if run.mode == "fast":
            lines.extend([
                "- **Commit**: Continue with `git commit`",
                "- **Full validation**: Will run on `git push`",
            ])
        else:
            lines.extend([
                "- **Push to remote**: `git push origin <branch>`",
                "- **Pull request creation**: All gates passed",
            ])
        return lines

    lines = [
        "### ❌ Violations Must Be Fixed",
        "",
        "1. **Review each violation** listed above with its specific resolution steps",
        "2. **Update your code** to address the violations",
        "3. **Re-run validation**: `healthguard check --mode fast` or `healthguard check --mode full`",
        "4. **Ensure AUDIT SUMMARY** is complete and follows the template requirements",
        "5. **Follow the manifest-driven rules** for SoC, RLS, and UI tokens",
        "",
        "### 🚨 Critical Violations",
        "",
    ]
    critical = [v for v in run.violations if v.code in CRITICAL_CODES]
    if critical:
        lines.append("The following violations are critical for healthcare compliance and must be fixed immediately:")
        lines.extend(f"- **{v.code.value}**: {v.message}" for v in critical)
    else:
        lines.append("No critical violations detected.")
    return lines
