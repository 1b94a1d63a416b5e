"""Append-only accumulator of violations for one run."""

from __future__ import annotations

from collections.abc import Iterable

from healthguard.pipeline.types import Violation
from healthguard.reasons import ReasonCode


class ViolationCollector:
    """Collects violations in arrival order; entries are never removed."""

    def __init__(self) -> None:
        self._items: list[Violation] = []

    def extend(self, violations: Iterable[Violation]) -> None:
        for violation in violations:
            if not isinstance(violation.code, ReasonCode):
                raise TypeError(f"Violation has unknown reason code: {violation.code!r}")
            self._items.append(violation)

    @property
    def violations(self) -> tuple[Violation, ...]:
        return tuple(self._items)


def group_by_code(violations: Iterable[Violation]) -> dict[ReasonCode, list[Violation]]:
    """Group violations by code, codes in first-seen order."""
    grouped: dict[ReasonCode, list[Violation]] = {}
    for violation in violations:
        grouped.setdefault(violation.code, []).append(violation)
    return grouped
