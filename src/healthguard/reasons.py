"""Reason-code taxonomy for compliance violations.

The set of codes is closed: gates only ever tag violations with one of the
members below, and each member carries a fixed description and resolution.
"""

from enum import Enum


class ReasonCode(str, Enum):
    """Closed vocabulary of expected non-compliance."""

    NO_AUDIT = "NO_AUDIT"
    PATH_GUESS = "PATH_GUESS"
    DUPLICATE_FOUND = "DUPLICATE_FOUND"
    SOC_VIOLATION = "SOC_VIOLATION"
    RLS_RISK = "RLS_RISK"
    UI_HARDCODE = "UI_HARDCODE"
    A11Y_FAIL = "A11Y_FAIL"
    NO_ZOD_SCHEMA = "NO_ZOD_SCHEMA"
    WRAPPERS_MISSING = "WRAPPERS_MISSING"
    PROMPT_FORMAT_ERROR = "PROMPT_FORMAT_ERROR"

    @property
    def description(self) -> str:
        return DESCRIPTIONS[self]

    @property
    def resolution(self) -> str:
        return RESOLUTIONS[self]


DESCRIPTIONS: dict[ReasonCode, str] = {
    ReasonCode.NO_AUDIT: "AUDIT SUMMARY missing or incomplete",
    ReasonCode.PATH_GUESS: "Invented paths not confirmed in repository",
    ReasonCode.DUPLICATE_FOUND: "Duplicate functionality without consolidation plan",
    ReasonCode.SOC_VIOLATION: "Layer boundary violation (UI→App→Domain→Infra)",
    ReasonCode.RLS_RISK: "Missing organization_id filtering or RLS violation",
    ReasonCode.UI_HARDCODE: "Hardcoded colors/tokens instead of semantic Tailwind v4",
    ReasonCode.A11Y_FAIL: "Missing accessibility requirements (WCAG 2.1 AA)",
    ReasonCode.NO_ZOD_SCHEMA: "Validation without Zod schema",
    ReasonCode.WRAPPERS_MISSING: "Missing or incorrect BFF wrapper order",
    ReasonCode.PROMPT_FORMAT_ERROR: "Prompt format not following Health guidelines",
}

RESOLUTIONS: dict[ReasonCode, str] = {
    ReasonCode.NO_AUDIT: (
        "Create complete AUDIT SUMMARY in /tmp using the audit template "
        "with all 8 required sections"
    ),
    ReasonCode.PATH_GUESS: (
        "Verify all import paths exist in repository and use correct "
        "TypeScript aliases from tsconfig.json"
    ),
    ReasonCode.DUPLICATE_FOUND: (
        "Consolidate duplicate functionality or create consolidation plan "
        "in AUDIT SUMMARY"
    ),
    ReasonCode.SOC_VIOLATION: (
        "Respect layer boundaries: UI→Application→Domain→Infrastructure. "
        "Check SoC manifest rules"
    ),
    ReasonCode.RLS_RISK: (
        "Add organization_id filtering for clinical data access. "
        "Follow RLS manifest requirements"
    ),
    ReasonCode.UI_HARDCODE: "Replace hardcoded values with semantic tokens from Tailwind allowlist",
    ReasonCode.A11Y_FAIL: (
        "Add ARIA labels, focus styles, and ensure 44px minimum touch "
        "targets for healthcare accessibility"
    ),
    ReasonCode.NO_ZOD_SCHEMA: (
        "Implement Zod validation schemas for all forms and API endpoints "
        "handling clinical data"
    ),
    ReasonCode.WRAPPERS_MISSING: (
        "Add BFF security wrappers in correct order: "
        "withAuth→withSecurity→withRateLimit→withAudit"
    ),
    ReasonCode.PROMPT_FORMAT_ERROR: "Follow Health philosophy prompt templates and guidelines",
}

# Listed again under "Critical Violations" in the report.
CRITICAL_CODES: tuple[ReasonCode, ...] = (
    ReasonCode.RLS_RISK,
    ReasonCode.NO_AUDIT,
    ReasonCode.SOC_VIOLATION,
)
