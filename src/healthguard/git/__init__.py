"""Version-control collaborators for Health Guard."""

from healthguard.git.changeset import SOURCE_EXTENSIONS, resolve_change_set
from healthguard.git.exec import GitError, run_git

__all__ = ["GitError", "SOURCE_EXTENSIONS", "resolve_change_set", "run_git"]
