"""Git diff utilities.

Contains:
- get_file_diff: Get the staged diff for a single file
"""

from pathlib import Path
from typing import Optional

from aigitauto.git.runner import _run_git_command


def get_file_diff(path: str, repo_path: Optional[Path] = None) -> str:
    """Get the staged diff for one file.

    The output is returned unstripped so the unified-diff text is kept
    exactly as git printed it.

    Args:
        path: Repository-relative path of the file.
        repo_path: The repository directory.

    Returns:
        The staged diff text (empty for files git cannot diff).

    Raises:
        GitError: If the diff query fails.
    """
    return _run_git_command(["diff", "--cached", "--", path], repo_path, strip=False)
