"""Gate 2: aliased import paths must exist in the repository."""

from __future__ import annotations

from pathlib import Path

from healthguard.gates._source import ALIAS_PREFIX, ALIAS_TARGET, aliased_imports, iter_sources
from healthguard.pipeline.types import GateContext, Violation, make_violation
from healthguard.reasons import ReasonCode

RESOLVE_EXTENSIONS: tuple[str, ...] = (".ts", ".tsx")


def resolve_alias(project_root: Path, import_path: str) -> Path:
    """Map ``@/x/y`` onto ``<root>/src/x/y``."""
    return project_root / (ALIAS_TARGET + import_path[len(ALIAS_PREFIX):])


def alias_exists(project_root: Path, import_path: str) -> bool:
    target = resolve_alias(project_root, import_path)
    candidates = (target, *(Path(f"{target}{ext}") for ext in RESOLVE_EXTENSIONS))
    try:
        return any(candidate.exists() for candidate in candidates)
    except OSError:
        # ENAMETOOLONG and friends: unresolved
        return False


def check_import_paths(ctx: GateContext) -> list[Violation]:
    violations: list[Violation] = []
    for rel_path, content in iter_sources(ctx):
        for import_path in aliased_imports(content):
            if not alias_exists(ctx.project_root, import_path):
                violations.append(make_violation(
                    ReasonCode.PATH_GUESS,
                    f"Invalid import path in {rel_path}: {import_path}",
                ))
    return violations
