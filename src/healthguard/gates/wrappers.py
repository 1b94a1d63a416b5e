"""Gate 9: API handlers must be wrapped by the cross-cutting BFF wrappers.

Order is checked lexically: the first textual occurrence of the auth
wrapper must precede the first occurrence of the security wrapper. There is
no call-graph analysis.
"""

from __future__ import annotations

from healthguard.gates._source import iter_sources
from healthguard.pipeline.types import GateContext, Violation, make_violation
from healthguard.reasons import ReasonCode

HANDLER_PATH_MARKERS: tuple[str, ...] = ("/api/", "/actions/")
ASYNC_HANDLER_MARKER = "export async function"
REQUIRED_WRAPPERS: tuple[str, ...] = ("withAuth", "withSecurity", "withRateLimit", "withAudit")
AUTH_WRAPPER = "withAuth"
SECURITY_WRAPPER = "withSecurity"


def is_handler(rel_path: str, content: str) -> bool:
    return ASYNC_HANDLER_MARKER in content and any(marker in rel_path for marker in HANDLER_PATH_MARKERS)


def check_file(rel_path: str, content: str) -> list[Violation]:
    violations: list[Violation] = []

    missing = [wrapper for wrapper in REQUIRED_WRAPPERS if wrapper not in content]
    if missing:
        violations.append(make_violation(
            ReasonCode.WRAPPERS_MISSING,
            f"API endpoint in {rel_path} missing wrappers: {', '.join(missing)}",
        ))

    if AUTH_WRAPPER in content and SECURITY_WRAPPER in content:
        if content.index(AUTH_WRAPPER) > content.index(SECURITY_WRAPPER):
            violations.append(make_violation(
                ReasonCode.WRAPPERS_MISSING,
                f"Incorrect wrapper order in {rel_path} - should be {' → '.join(REQUIRED_WRAPPERS)}",
            ))

    return violations


def check_wrappers(ctx: GateContext) -> list[Violation]:
    violations: list[Violation] = []
    for rel_path, content in iter_sources(ctx):
        if is_handler(rel_path, content):
            violations.extend(check_file(rel_path, content))
    return violations
