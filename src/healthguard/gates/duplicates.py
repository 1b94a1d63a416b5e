"""Gate 3: the same exported component name declared in two changed files."""

from __future__ import annotations

import re

from healthguard.gates._source import iter_sources
from healthguard.pipeline.types import GateContext, Violation, make_violation
from healthguard.reasons import ReasonCode

EXPORT_PATTERN = re.compile(r"export\s+(?:function|const)\s+(\w+)")


def exported_names(content: str) -> list[str]:
    return EXPORT_PATTERN.findall(content)


def check_duplicates(ctx: GateContext) -> list[Violation]:
    violations: list[Violation] = []
    first_seen: dict[str, str] = {}

    for rel_path, content in iter_sources(ctx):
        if not rel_path.endswith(".tsx"):
            continue
        for name in exported_names(content):
            owner = first_seen.get(name)
            if owner is None:
                first_seen[name] = rel_path
            elif owner != rel_path:
                violations.append(make_violation(
                    ReasonCode.DUPLICATE_FOUND,
                    f"Duplicate component '{name}' in {rel_path} and {owner}",
                ))

    return violations
