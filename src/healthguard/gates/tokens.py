"""Gate 6: design-token compliance for component files."""

from __future__ import annotations

import re

from healthguard.gates._source import iter_sources
from healthguard.manifests.types import TokenAllowlist
from healthguard.pipeline.types import GateContext, Violation, make_violation
from healthguard.reasons import ReasonCode

COLOR_PATTERN = re.compile(r"(?:bg-|text-|border-|ring-|from-|to-|via-|fill-|stroke-)([a-zA-Z0-9-]+)")
SPACING_PATTERN = re.compile(r"(?:p|m|w|h|top|right|bottom|left|gap|space)-([a-zA-Z0-9-]+)")
HUE_SCALE_PATTERN = re.compile(
    r"(?:red|blue|green|yellow|purple|pink|indigo|gray|slate|zinc|neutral|stone|orange"
    r"|amber|lime|emerald|teal|cyan|sky|violet|fuchsia|rose)-\d+"
)
SHADE_PATTERN = re.compile(r"(\w+)-(\d+)")
HEX_PATTERN = re.compile(r"#[0-9A-Fa-f]{3,6}")
FUNCTIONAL_COLOR_PATTERN = re.compile(r"(?:rgb|hsl|rgba|hsla)\([^)]+\)")

SPACING_TOLERANCE = 3


def is_semantic_color(token: str, allowlist: TokenAllowlist) -> bool:
    return any(token == color or token.startswith(color) for color in allowlist.colors)


def has_allowed_shade(token: str, allowlist: TokenAllowlist) -> bool:
    match = SHADE_PATTERN.search(token)
    return match is not None and int(match.group(2)) in allowlist.allowed_numeric


def hardcoded_colors(content: str, allowlist: TokenAllowlist) -> list[str]:
    return [
        token
        for token in COLOR_PATTERN.findall(content)
        if HUE_SCALE_PATTERN.search(token)
        and not is_semantic_color(token, allowlist)
        and not has_allowed_shade(token, allowlist)
    ]


def hardcoded_spacing(content: str, allowlist: TokenAllowlist) -> list[str]:
    return [
        token
        for token in SPACING_PATTERN.findall(content)
        if token.isdigit()
        and token not in allowlist.spacing
        and int(token) not in allowlist.allowed_numeric
    ]


def check_file(rel_path: str, content: str, allowlist: TokenAllowlist) -> list[Violation]:
    violations: list[Violation] = []

    colors = hardcoded_colors(content, allowlist)
    if colors:
        violations.append(make_violation(
            ReasonCode.UI_HARDCODE,
            f"Hardcoded colors in {rel_path}: {', '.join(colors)}. "
            f"Use semantic tokens: {', '.join(allowlist.colors[:5])}, etc.",
        ))

    spacing = hardcoded_spacing(content, allowlist)
    if len(spacing) > SPACING_TOLERANCE:
        violations.append(make_violation(
            ReasonCode.UI_HARDCODE,
            f"Excessive hardcoded spacing in {rel_path}: {', '.join(spacing)}. "
            f"Use semantic tokens: {', '.join(allowlist.spacing)}",
        ))

    hex_colors = HEX_PATTERN.findall(content)
    if hex_colors:
        violations.append(make_violation(
            ReasonCode.UI_HARDCODE,
            f"Hex colors in {rel_path}: {', '.join(hex_colors)}. Use OKLCH-based semantic tokens instead",
        ))

    functional_colors = FUNCTIONAL_COLOR_PATTERN.findall(content)
    if functional_colors:
        violations.append(make_violation(
            ReasonCode.UI_HARDCODE,
            f"RGB/HSL colors in {rel_path}: {', '.join(functional_colors)}. "
            "Use OKLCH-based semantic tokens for accessibility",
        ))

    return violations


def check_design_tokens(ctx: GateContext) -> list[Violation]:
    violations: list[Violation] = []
    for rel_path, content in iter_sources(ctx, components_only=True):
        violations.extend(check_file(rel_path, content, ctx.manifests.tokens))
    return violations
