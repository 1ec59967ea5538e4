"""Git status utilities.

Contains:
- get_staged_name_status: Get the staged file listing with status letters
- get_unstaged_files: List modified-but-unstaged and untracked files

Listings are requested with ``-z`` so paths come back unquoted.
"""

from pathlib import Path
from typing import Optional

from aigitauto.git.exceptions import GitError
from aigitauto.git.runner import _run_git_command


def _split_nul(output: str) -> list[str]:
    return [item for item in output.split("\0") if item]


def get_staged_name_status(repo_path: Optional[Path] = None) -> str:
    """Get the staged files with their status letters.

    Fields are NUL separated: ``STATUS\\0PATH\\0``, or
    ``STATUS\\0OLD\\0NEW\\0`` for renames and copies.

    Returns:
        Raw ``git diff --cached --name-status -z`` output.
    """
    return _run_git_command(["diff", "--cached", "--name-status", "-z"], repo_path, strip=False)


def get_unstaged_files(repo_path: Optional[Path] = None) -> list[str]:
    """Get files that `git add .` would stage.

    Modified tracked files come first, followed by untracked files
    suffixed with " (untracked)".

    Returns:
        List of file descriptions.

    Raises:
        GitError: If the tracked-file query fails.
    """
    output = _run_git_command(["diff", "--name-only", "-z"], repo_path, strip=False)
    files = _split_nul(output)

    try:
        untracked = _run_git_command(
            ["ls-files", "--others", "--exclude-standard", "-z"], repo_path, strip=False
        )
    except GitError:
        # Untracked listing is informational only
        return files

    files.extend(f"{name} (untracked)" for name in _split_nul(untracked))
    return files
