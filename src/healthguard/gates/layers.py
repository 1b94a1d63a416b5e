"""Gate 4: layer-boundary compliance driven by the SoC manifest."""

from __future__ import annotations

import re
from functools import lru_cache

from healthguard.gates._source import MODULES_PREFIX, aliased_imports, read_source
from healthguard.manifests.types import LayerRule
from healthguard.pipeline.types import GateContext, Violation, make_violation
from healthguard.reasons import ReasonCode

# First match wins; a path matching several markers gets the earliest layer.
LAYER_MARKERS: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("ui", ("/ui/", "/components/")),
    ("application", ("/application/",)),
    ("domain", ("/domain/",)),
    ("infrastructure", ("/infrastructure/",)),
)


def detect_layer(rel_path: str) -> str | None:
    for layer, markers in LAYER_MARKERS:
        if any(marker in rel_path for marker in markers):
            return layer
    return None


@lru_cache(maxsize=256)
def compile_pattern(pattern: str) -> re.Pattern[str]:
    """Compile a wildcard import pattern into a whole-string regex."""
    literal_parts = (re.escape(part) for part in pattern.split("*"))
    return re.compile("^" + ".*".join(literal_parts) + "$")


def matches_pattern(import_path: str, pattern: str) -> bool:
    return compile_pattern(pattern).match(import_path) is not None


def check_import(layer: str, rule: LayerRule, rel_path: str, import_path: str) -> list[Violation]:
    """Both checks run independently; each can flag an import once."""
    violations: list[Violation] = []

    if any(matches_pattern(import_path, p) for p in rule.forbidden_imports):
        violations.append(make_violation(
            ReasonCode.SOC_VIOLATION,
            f"{layer.upper()} layer violation in {rel_path}: '{import_path}' violates boundary rules. "
            f"{rule.description}",
        ))

    if rule.allowed_imports and import_path.startswith(MODULES_PREFIX):
        if not any(matches_pattern(import_path, p) for p in rule.allowed_imports):
            violations.append(make_violation(
                ReasonCode.SOC_VIOLATION,
                f"{layer.upper()} layer violation in {rel_path}: '{import_path}' not in allowed imports. "
                f"{rule.description}",
            ))

    return violations


def check_layer_boundaries(ctx: GateContext) -> list[Violation]:
    violations: list[Violation] = []
    layers = ctx.manifests.soc.layers

    for rel_path in ctx.files:
        layer = detect_layer(rel_path)
        if layer is None or layer not in layers:
            continue
        content = read_source(ctx, rel_path)
        if content is None:
            continue
        for import_path in aliased_imports(content):
            violations.extend(check_import(layer, layers[layer], rel_path, import_path))

    return violations
