"""Gate 7: accessibility basics in component files."""

from __future__ import annotations

import re

from healthguard.gates._source import iter_sources
from healthguard.pipeline.types import GateContext, Violation, make_violation
from healthguard.reasons import ReasonCode

INTERACTIVE_MARKERS: tuple[str, ...] = ("<button", "<input", "<select")
ACCESSIBLE_NAME_MARKERS: tuple[str, ...] = ("aria-label", "aria-labelledby")
FOCUS_MARKERS: tuple[str, ...] = ("focus:", "focus-visible:")
TOUCH_TARGET_PATTERN = re.compile(r"min-h-\[(\d+)px\]")
MIN_TOUCH_TARGET_PX = 44


def undersized_touch_targets(content: str) -> list[str]:
    return [
        match.group(0)
        for match in TOUCH_TARGET_PATTERN.finditer(content)
        if int(match.group(1)) < MIN_TOUCH_TARGET_PX
    ]


def check_file(rel_path: str, content: str) -> list[Violation]:
    violations: list[Violation] = []

    if any(marker in content for marker in INTERACTIVE_MARKERS):
        if not any(marker in content for marker in ACCESSIBLE_NAME_MARKERS):
            violations.append(make_violation(
                ReasonCode.A11Y_FAIL,
                f"Interactive elements in {rel_path} missing ARIA labels",
            ))
        if not any(marker in content for marker in FOCUS_MARKERS):
            violations.append(make_violation(
                ReasonCode.A11Y_FAIL,
                f"Interactive elements in {rel_path} missing focus styles",
            ))

    small_targets = undersized_touch_targets(content)
    if small_targets:
        violations.append(make_violation(
            ReasonCode.A11Y_FAIL,
            f"Touch targets in {rel_path} smaller than {MIN_TOUCH_TARGET_PX}px: {', '.join(small_targets)}",
        ))

    return violations


def check_accessibility(ctx: GateContext) -> list[Violation]:
    violations: list[Violation] = []
    for rel_path, content in iter_sources(ctx, components_only=True):
        violations.extend(check_file(rel_path, content))
    return violations
