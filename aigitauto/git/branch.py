"""Git branch, remote and commit utilities.

Contains:
- get_branch: Get the current branch name
- get_remotes: Get the configured remote names
- get_last_commit_hash: Get the short hash of HEAD
"""

from pathlib import Path
from typing import Optional

from aigitauto.git.runner import _run_git_command


def get_branch(repo_path: Optional[Path] = None) -> str:
    """Get the current branch name.

    Returns:
        The current branch name, or 'HEAD (detached)' if in detached state.
    """
    branch = _run_git_command(["branch", "--show-current"], repo_path)
    if not branch:
        # Detached HEAD state
        return "HEAD (detached)"
    return branch


def get_remotes(repo_path: Optional[Path] = None) -> list[str]:
    """Get the names of the configured remotes.

    Returns:
        List of remote names, empty if none are configured.
    """
    output = _run_git_command(["remote"], repo_path)
    return [line for line in output.split("\n") if line]


def get_last_commit_hash(repo_path: Optional[Path] = None) -> str:
    """Get the abbreviated hash of the last commit."""
    return _run_git_command(["rev-parse", "--short", "HEAD"], repo_path)
