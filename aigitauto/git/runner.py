"""Git command runner and repository utilities.

Contains:
- _run_git_command: Run a git command and return its output
- ensure_repository: Verify that a path is inside a git work tree
"""

import logging
import subprocess
from pathlib import Path
from typing import Optional

from aigitauto.git.exceptions import GitError, NotARepositoryError

logger = logging.getLogger(__name__)


def _run_git_command(args: list[str], repo_path: Optional[Path] = None, strip: bool = True) -> str:
    """Run a git command and return its output.

    Args:
        args: List of arguments to pass to git.
        repo_path: Directory to run git in. Defaults to the current directory.
        strip: Whether to strip surrounding whitespace from stdout.

    Returns:
        The stdout of the git command.

    Raises:
        GitError: If the command fails.
    """
    logger.debug("Running: git %s", " ".join(args))
    try:
        result = subprocess.run(
            ["git"] + args,
            capture_output=True,
            text=True,
            check=True,
            cwd=str(repo_path) if repo_path else None,
        )
    except subprocess.CalledProcessError as e:
        stderr = (e.stderr or "").strip()
        raise GitError(f"Git command failed: git {' '.join(args)}\n{stderr}")
    except FileNotFoundError:
        raise GitError("Git is not installed or not in PATH.")

    return result.stdout.strip() if strip else result.stdout


def ensure_repository(repo_path: Optional[Path] = None) -> None:
    """Check that repo_path is inside a git repository.

    Raises:
        NotARepositoryError: If not in a git repository.
    """
    try:
        _run_git_command(["rev-parse", "--git-dir"], repo_path)
    except GitError:
        raise NotARepositoryError(
            "Not in a git repository. Please run this command from within a git repo."
        )
