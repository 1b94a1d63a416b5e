"""Gate 8: forms and mutating handlers must validate through a schema library."""

from __future__ import annotations

from healthguard.gates._source import iter_sources
from healthguard.pipeline.types import GateContext, Violation, make_violation
from healthguard.reasons import ReasonCode

FORM_MARKERS: tuple[str, ...] = ("useForm", "validation")
SCHEMA_MARKERS: tuple[str, ...] = ("zodResolver", "z.")
ASYNC_HANDLER_MARKER = "export async function"
MUTATING_VERBS: tuple[str, ...] = ("POST", "PUT", "PATCH")
PARSE_MARKERS: tuple[str, ...] = ("z.", ".parse(")


def check_file(rel_path: str, content: str) -> list[Violation]:
    violations: list[Violation] = []

    if any(marker in content for marker in FORM_MARKERS):
        if not any(marker in content for marker in SCHEMA_MARKERS):
            violations.append(make_violation(
                ReasonCode.NO_ZOD_SCHEMA,
                f"Form validation in {rel_path} not using Zod schema",
            ))

    if ASYNC_HANDLER_MARKER in content and any(verb in content for verb in MUTATING_VERBS):
        if not any(marker in content for marker in PARSE_MARKERS):
            violations.append(make_violation(
                ReasonCode.NO_ZOD_SCHEMA,
                f"API endpoint in {rel_path} missing Zod validation",
            ))

    return violations


def check_schema_validation(ctx: GateContext) -> list[Violation]:
    violations: list[Violation] = []
    for rel_path, content in iter_sources(ctx):
        violations.extend(check_file(rel_path, content))
    return violations
