"""Staged change scanner.

Turns git's staged name-status listing and per-file diffs into a ChangeSet.

Contains:
- scan_staged_changes: Scan the repository's staged changes
- parse_change_kind: Map a git status code to a ChangeKind
- parse_name_status: Parse `git diff --cached --name-status -z` output
"""

import logging
from pathlib import Path
from typing import NamedTuple, Optional

from aigitauto.git import (
    GitError,
    ensure_repository,
    get_file_diff,
    get_staged_name_status,
)
from aigitauto.models import ChangeKind, ChangeSet, FileChange

logger = logging.getLogger(__name__)


STATUS_CODES = {
    "A": ChangeKind.ADDED,
    "M": ChangeKind.MODIFIED,
    "D": ChangeKind.DELETED,
    "R": ChangeKind.RENAMED,
    "C": ChangeKind.COPIED,
}


class StatusEntry(NamedTuple):
    """One line of name-status output."""

    status: str
    path: str
    old_path: Optional[str] = None


def parse_change_kind(status: str) -> ChangeKind:
    """Map a git status code to a ChangeKind.

    Only the first letter matters, so rename/copy codes with a similarity
    score (e.g. "R100") are handled. Unknown codes count as modified.
    """
    if not status:
        return ChangeKind.MODIFIED
    return STATUS_CODES.get(status[0].upper(), ChangeKind.MODIFIED)


def parse_name_status(output: str) -> list[StatusEntry]:
    """Parse `git diff --cached --name-status -z` output.

    Fields are NUL separated and paths are never quoted. Each entry is
    ``STATUS\\0PATH\\0``, or ``STATUS\\0OLD\\0NEW\\0`` for renames and
    copies. A truncated trailing entry is dropped.

    Args:
        output: Raw name-status output.

    Returns:
        Entries in the order git printed them.
    """
    fields = output.split("\0")
    entries = []
    i = 0
    while i < len(fields):
        status = fields[i].strip()
        if not status:
            i += 1
            continue

        if status[0] in ("R", "C"):
            if i + 2 >= len(fields) or not fields[i + 2]:
                break
            entries.append(StatusEntry(status, fields[i + 2], fields[i + 1]))
            i += 3
        else:
            if i + 1 >= len(fields) or not fields[i + 1]:
                break
            entries.append(StatusEntry(status, fields[i + 1]))
            i += 2
    return entries


def scan_staged_changes(repo_path: Optional[Path] = None) -> ChangeSet:
    """Scan the staged changes in a repository.

    A file whose diff cannot be read is skipped with a warning; the rest
    of the scan continues.

    Args:
        repo_path: The repository directory. Defaults to the current directory.

    Returns:
        A ChangeSet, empty if nothing is staged.

    Raises:
        NotARepositoryError: If repo_path is not in a git repository.
        GitError: If the staged file listing cannot be retrieved.
    """
    ensure_repository(repo_path)

    output = get_staged_name_status(repo_path)
    entries = parse_name_status(output)

    changes = []
    for entry in entries:
        try:
            diff = get_file_diff(entry.path, repo_path)
        except GitError as e:
            logger.warning("Failed to get diff for %s, skipping: %s", entry.path, e)
            continue

        changes.append(
            FileChange(
                path=entry.path,
                change_kind=parse_change_kind(entry.status),
                diff_text=diff,
                old_path=entry.old_path,
            )
        )

    logger.debug("Scanned %d staged file(s)", len(changes))
    return ChangeSet(changes)
