"""Git-related exception classes.

Contains all exception classes for Git operations:
- GitError: Raised when a git command fails or git is unavailable
- NotARepositoryError: Raised when the path is not inside a git work tree
"""


class GitError(Exception):
    """Custom exception for git-related errors."""

    pass


class NotARepositoryError(GitError):
    """Raised when the working directory is not under version control."""

    pass
