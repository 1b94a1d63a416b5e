"""Text helpers shared by the gates.

Everything here is plain pattern matching over file contents; no parsing.
"""

from __future__ import annotations

import re
from collections.abc import Iterator

from healthguard.pipeline.types import GateContext

ALIAS_PREFIX = "@/"
ALIAS_TARGET = "src/"
MODULES_PREFIX = "@/modules/"

COMPONENT_EXTENSIONS: tuple[str, ...] = (".tsx", ".jsx")

IMPORT_PATTERN = re.compile(r"""from\s+['"`]([^'"`]+)['"`]""")


def read_source(ctx: GateContext, rel_path: str) -> str | None:
    """Read a changed file; None when it is no longer on disk."""
    path = ctx.project_root / rel_path
    if not path.exists():
        return None
    return path.read_text(encoding="utf-8", errors="replace")


def iter_sources(ctx: GateContext, *, components_only: bool = False) -> Iterator[tuple[str, str]]:
    """Yield (path, content) for each existing file in the change set."""
    for rel_path in ctx.files:
        if components_only and not is_component(rel_path):
            continue
        content = read_source(ctx, rel_path)
        if content is None:
            continue
        yield rel_path, content


def is_component(rel_path: str) -> bool:
    return rel_path.endswith(COMPONENT_EXTENSIONS)


def extract_imports(content: str) -> list[str]:
    """All ``from '<path>'`` targets in document order."""
    return IMPORT_PATTERN.findall(content)


def aliased_imports(content: str) -> list[str]:
    return [target for target in extract_imports(content) if target.startswith(ALIAS_PREFIX)]
