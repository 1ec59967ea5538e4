"""Git commands that modify the repository.

Contains:
- stage_all: Stage every change in the work tree
- commit: Create a commit from a subject and optional body
- push: Push the current branch
- format_commit_command: Render the equivalent shell command for display
"""

import shlex
from pathlib import Path
from typing import Optional

from aigitauto.git.runner import _run_git_command


def stage_all(repo_path: Optional[Path] = None) -> None:
    """Run `git add .`."""
    _run_git_command(["add", "."], repo_path)


def _commit_args(subject: str, body: str = "") -> list[str]:
    args = ["commit", "-m", subject]
    if body:
        args += ["-m", body]
    return args


def commit(subject: str, body: str = "", repo_path: Optional[Path] = None) -> str:
    """Commit staged changes.

    The subject and body are passed as separate message parts, so git
    joins them with a blank line.

    Returns:
        The git commit output.

    Raises:
        GitError: If the commit fails.
    """
    return _run_git_command(_commit_args(subject, body), repo_path)


def push(repo_path: Optional[Path] = None) -> str:
    """Run `git push`.

    Raises:
        GitError: If the push fails.
    """
    return _run_git_command(["push"], repo_path)


def format_commit_command(subject: str, body: str = "") -> str:
    """Return the shell command equivalent to commit(subject, body)."""
    return shlex.join(["git"] + _commit_args(subject, body))
