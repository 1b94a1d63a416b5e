"""Change-set resolution: which source files are under review."""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

from healthguard.git.exec import GitError, run_git

SOURCE_EXTENSIONS: tuple[str, ...] = (".ts", ".tsx", ".js", ".jsx")


def resolve_change_set(
    project_root: Path,
    *,
    base: str | None = None,
    explicit: Iterable[str] | None = None,
) -> list[str]:
    """
    Resolve the list of source files to validate.

    Staged files are used by default; ``base`` switches to the files changed
    between ``base`` and HEAD, and ``explicit`` bypasses git entirely.

    Returns:
        POSIX-style relative paths filtered to source extensions. An empty
        list when git is unavailable, the directory is not a repository, or
        nothing is staged.
    """
    if explicit is not None:
        return _filter_sources(explicit)

    if base:
        args = ["diff", "--name-only", f"{base}...HEAD"]
    else:
        args = ["diff", "--cached", "--name-only"]

    try:
        stdout = run_git(args, repo_root=project_root)
    except (GitError, OSError):
        return []

    return _filter_sources(stdout.splitlines())


def _filter_sources(paths: Iterable[str]) -> list[str]:
    """Normalize, de-duplicate and keep only recognized source files."""
    seen: set[str] = set()
    files: list[str] = []
    for raw in paths:
        entry = raw.strip()
        if not entry:
            continue
        normalized = Path(entry).as_posix()
        if not normalized.endswith(SOURCE_EXTENSIONS):
            continue
        if normalized in seen:
            continue
        seen.add(normalized)
        files.append(normalized)
    return files
