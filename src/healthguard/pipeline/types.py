"""Pipeline types."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Literal

from healthguard.config import GuardSettings, Mode
from healthguard.manifests.types import ManifestBundle
from healthguard.reasons import ReasonCode

GateStatus = Literal["pass", "fail", "skipped"]


@dataclass(frozen=True)
class Violation:
    """Single compliance violation."""

    code: ReasonCode
    message: str
    description: str


def make_violation(code: ReasonCode, message: str) -> Violation:
    """Build a violation carrying the code's fixed description."""
    return Violation(code=code, message=message, description=code.description)


@dataclass(frozen=True)
class GateContext:
    """Everything a gate may read. Passed explicitly into every gate call."""

    settings: GuardSettings
    files: tuple[str, ...]
    manifests: ManifestBundle
    now: datetime

    @property
    def project_root(self) -> Path:
        return self.settings.project_root


GateFunc = Callable[[GateContext], list[Violation]]


@dataclass(frozen=True)
class GateSpec:
    """Static description of one gate in the pipeline."""

    number: int
    name: str
    title: str
    code: ReasonCode
    critical: bool  # critical gates also run in fast mode
    summary: str
    check: GateFunc


@dataclass(frozen=True)
class GateOutcome:
    """Result of one gate for one run."""

    gate: GateSpec
    status: GateStatus
    violations: tuple[Violation, ...] = ()


@dataclass
class ValidationRun:
    """Ephemeral record of one invocation; only its report is persisted."""

    mode: Mode
    files: list[str]
    generated_at: str
    timestamp_mode: str
    violations: list[Violation] = field(default_factory=list)
    outcomes: list[GateOutcome] = field(default_factory=list)

    @property
    def passed(self) -> bool:
        return not self.violations
