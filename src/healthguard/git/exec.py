"""git invocation for change-set lookups."""

from __future__ import annotations

import subprocess
from pathlib import Path


class GitError(RuntimeError):
    """Raised when git exits non-zero (not a repository, unknown ref, ...)."""

    def __init__(self, args: list[str], returncode: int, stderr: str):
        super().__init__(f"git {' '.join(args)} failed ({returncode}): {stderr}")
        self.returncode = returncode
        self.stderr = stderr


def run_git(args: list[str], *, repo_root: Path) -> str:
    """Run ``git <args>`` inside ``repo_root`` and return stdout.

    Raises:
        GitError: git exited non-zero
        OSError: git could not be started
    """
    completed = subprocess.run(
        ["git", *args],
        cwd=repo_root,
        capture_output=True,
        text=True,
        encoding="utf-8",
        errors="replace",
        check=False,
    )
    if completed.returncode != 0:
        raise GitError(args, completed.returncode, completed.stderr.strip())
    return completed.stdout
