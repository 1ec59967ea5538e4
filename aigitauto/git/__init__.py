"""Git adapter for aigitauto.

This package wraps the git executable:
- exceptions: GitError, NotARepositoryError
- runner: _run_git_command, ensure_repository
- status: get_staged_name_status, get_unstaged_files
- diff: get_file_diff
- branch: get_branch, get_remotes, get_last_commit_hash
- actions: stage_all, commit, push, format_commit_command
"""

# Exceptions
from aigitauto.git.exceptions import (
    GitError,
    NotARepositoryError,
)

# Runner utilities
from aigitauto.git.runner import (
    _run_git_command,
    ensure_repository,
)

# Status utilities
from aigitauto.git.status import (
    get_staged_name_status,
    get_unstaged_files,
)

# Diff utilities
from aigitauto.git.diff import get_file_diff

# Branch utilities
from aigitauto.git.branch import (
    get_branch,
    get_remotes,
    get_last_commit_hash,
)

# Mutating commands
from aigitauto.git.actions import (
    stage_all,
    commit,
    push,
    format_commit_command,
)


__all__ = [
    # Exceptions
    "GitError",
    "NotARepositoryError",
    # Runner
    "_run_git_command",
    "ensure_repository",
    # Status
    "get_staged_name_status",
    "get_unstaged_files",
    # Diff
    "get_file_diff",
    # Branch
    "get_branch",
    "get_remotes",
    "get_last_commit_hash",
    # Actions
    "stage_all",
    "commit",
    "push",
    "format_commit_command",
]
