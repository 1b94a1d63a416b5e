"""Gate 1: audit summary completeness.

The most recently modified audit artifact under the audit directory must be
fresh and contain the eight template sections, each long enough and
mentioning its required keywords. The decision section must state GO or
NO-GO explicitly.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

from rich.console import Console

from healthguard.pipeline.types import GateContext, Violation, make_violation
from healthguard.reasons import ReasonCode

MAX_AGE_HOURS = 24
SECTION_MARKER = "###"

console = Console()


@dataclass(frozen=True)
class AuditSection:
    header: str
    min_length: int
    keywords: tuple[str, ...]


DECISION_HEADER = "### 🚦 Go/No-Go Decision"

REQUIRED_SECTIONS: tuple[AuditSection, ...] = (
    AuditSection("### 📋 Contexto de la Tarea", 100, ("objetivo", "alcance")),
    AuditSection("### 🔍 Búsqueda por Directorios", 50, ("src/", "modules/")),
    AuditSection("### 🏗️ Arquitectura & Capas", 80, ("UI→Application→Domain→Infrastructure",)),
    AuditSection("### 🔒 RLS/Multi-tenant", 60, ("organization_id", "tenant")),
    AuditSection("### ✅ Validación Zod", 40, ("schema", "validation")),
    AuditSection("### 🎨 UI & Accesibilidad", 60, ("semantic", "tokens", "WCAG")),
    AuditSection("### 🛡️ Wrappers BFF", 40, ("withAuth", "withSecurity")),
    AuditSection(DECISION_HEADER, 30, ("GO", "NO-GO")),
)

POSITIVE_DECISION = re.compile(r"\b(GO|PROCEED|CONTINUE)\b", re.IGNORECASE)
NEGATIVE_DECISION = re.compile(r"\b(NO-GO|STOP|BLOCK)\b", re.IGNORECASE)


def find_latest_audit(audit_dir: Path) -> Path | None:
    """Most recently modified ``*.md`` file whose name mentions audit."""
    candidates = [
        path
        for path in audit_dir.iterdir()
        if path.is_file() and path.suffix == ".md" and ("audit" in path.name or "AUDIT" in path.name)
    ]
    if not candidates:
        return None
    # Name breaks mtime ties so the choice is stable.
    candidates.sort(key=lambda p: (p.stat().st_mtime, p.name), reverse=True)
    return candidates[0]


def extract_section(content: str, header: str) -> str | None:
    """Text from ``header`` up to the next section marker, or None if absent."""
    start = content.find(header)
    if start == -1:
        return None
    end = content.find(SECTION_MARKER, start + 1)
    return content[start:] if end == -1 else content[start:end]


def check_audit_content(content: str) -> list[Violation]:
    """Validate the sections of an audit summary document."""
    violations: list[Violation] = []

    for section in REQUIRED_SECTIONS:
        text = extract_section(content, section.header)
        if text is None:
            violations.append(make_violation(
                ReasonCode.NO_AUDIT,
                f"AUDIT SUMMARY missing required section: {section.header}",
            ))
            continue

        if len(text) < section.min_length:
            violations.append(make_violation(
                ReasonCode.NO_AUDIT,
                f"AUDIT SUMMARY section '{section.header}' too brief "
                f"({len(text)} chars, min {section.min_length})",
            ))

        lowered = text.lower()
        missing = [keyword for keyword in section.keywords if keyword.lower() not in lowered]
        if missing:
            violations.append(make_violation(
                ReasonCode.NO_AUDIT,
                f"AUDIT SUMMARY section '{section.header}' missing required content: {', '.join(missing)}",
            ))

    decision = extract_section(content, DECISION_HEADER)
    if decision is not None:
        # The header itself says "Go/No-Go"; only the body counts.
        _, _, body = decision.partition("\n")
        if not POSITIVE_DECISION.search(body) and not NEGATIVE_DECISION.search(body):
            violations.append(make_violation(
                ReasonCode.NO_AUDIT,
                "AUDIT SUMMARY Go/No-Go decision must explicitly state GO or NO-GO",
            ))

    return violations


def check_audit_summary(ctx: GateContext) -> list[Violation]:
    audit_dir = ctx.settings.audit_dir
    if not audit_dir.is_dir():
        return [make_violation(
            ReasonCode.NO_AUDIT,
            f"No {audit_dir.name}/ directory found for AUDIT SUMMARY reports",
        )]

    latest = find_latest_audit(audit_dir)
    if latest is None:
        return [make_violation(
            ReasonCode.NO_AUDIT,
            f"No AUDIT SUMMARY found in {audit_dir.name}/ directory. Create one using the audit template",
        )]

    violations: list[Violation] = []

    modified = datetime.fromtimestamp(latest.stat().st_mtime, tz=ctx.now.tzinfo)
    age_hours = (ctx.now - modified).total_seconds() / 3600
    if age_hours > MAX_AGE_HOURS:
        violations.append(make_violation(
            ReasonCode.NO_AUDIT,
            f"AUDIT SUMMARY is stale ({round(age_hours)} hours old). Create fresh audit for current changes",
        ))

    violations.extend(check_audit_content(latest.read_text(encoding="utf-8", errors="replace")))

    if ctx.settings.debug:
        console.print(f"[dim]Using AUDIT SUMMARY: {latest.name} ({round(age_hours * 60)} minutes old)[/dim]")
    return violations
