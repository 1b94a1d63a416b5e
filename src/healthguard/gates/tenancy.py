"""Gate 5: multi-tenant data access must carry the required scoping filters."""

from __future__ import annotations

from healthguard.gates._source import iter_sources
from healthguard.manifests.types import RLSManifest
from healthguard.pipeline.types import GateContext, Violation, make_violation
from healthguard.reasons import ReasonCode

DATA_ACCESS_MARKERS: tuple[str, ...] = (".from(", ".select(", ".insert(", ".update(", ".delete(")
FILTER_HELPERS: tuple[str, ...] = ("whereOrganization", "withOrgFilter")
BYPASS_MARKERS: tuple[str, ...] = ("rlsDisabled", "bypassRLS", ".rls(false)")
EXEMPT_COMMENT_PREFIX = "@exempt:"
JOIN_MARKER = "JOIN"
JOIN_CONDITION_MARKER = "ON"
TENANT_SCOPE_MARKER = "organization_id"


def camel_case(field: str) -> str:
    head, *rest = field.split("_")
    return head + "".join(part.capitalize() for part in rest)


def filter_forms(field: str) -> tuple[str, ...]:
    """Spellings of a filter field accepted as evidence of filtering."""
    return (field, field.replace("_", ""), camel_case(field), *FILTER_HELPERS)


def is_exempt(rel_path: str, content: str, manifest: RLSManifest) -> bool:
    return any(
        marker in rel_path or f"{EXEMPT_COMMENT_PREFIX}{marker}" in content
        for marker in manifest.exempt_markers
    )


def references_entity(content: str, entity: str) -> bool:
    """Plural or naive singular (trailing character dropped)."""
    return entity in content or entity[:-1] in content


def missing_filters(content: str, entity: str, manifest: RLSManifest) -> list[str]:
    return [
        field
        for field in manifest.filters_for(entity)
        if not any(form in content for form in filter_forms(field))
    ]


def check_file(rel_path: str, content: str, manifest: RLSManifest) -> list[Violation]:
    violations: list[Violation] = []
    has_data_access = any(marker in content for marker in DATA_ACCESS_MARKERS)

    if has_data_access:
        for entity in manifest.protected_entities:
            if not references_entity(content, entity):
                continue
            missing = missing_filters(content, entity, manifest)
            if missing:
                remedy = " and ".join(f"{field} filtering" for field in missing)
                violations.append(make_violation(
                    ReasonCode.RLS_RISK,
                    f"Clinical entity '{entity}' in {rel_path} missing required filters: "
                    f"{', '.join(missing)}. Add {remedy} for HIPAA compliance",
                ))

    bypass = [marker for marker in BYPASS_MARKERS if marker in content]
    if bypass:
        violations.append(make_violation(
            ReasonCode.RLS_RISK,
            f"Explicit RLS bypass detected in {rel_path} ({', '.join(bypass)}). "
            "This is dangerous for PHI protection",
        ))

    if JOIN_MARKER in content and any(entity in content for entity in manifest.protected_entities):
        if JOIN_CONDITION_MARKER not in content or TENANT_SCOPE_MARKER not in content:
            violations.append(make_violation(
                ReasonCode.RLS_RISK,
                f"Cross-table JOIN in {rel_path} may leak data across organizations. "
                f"Ensure {TENANT_SCOPE_MARKER} filtering in JOIN conditions",
            ))

    return violations


def check_tenant_isolation(ctx: GateContext) -> list[Violation]:
    manifest = ctx.manifests.rls
    violations: list[Violation] = []
    for rel_path, content in iter_sources(ctx):
        if is_exempt(rel_path, content, manifest):
            continue
        violations.extend(check_file(rel_path, content, manifest))
    return violations
