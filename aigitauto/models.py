"""Data models for aigitauto.

Contains:
- ChangeKind: How a staged file was changed
- FileChange: One staged path with its diff
- ChangeSet: Ordered collection of FileChange
- CommitSuggestion: Pydantic model for the generated commit message
"""

from collections import Counter
from dataclasses import dataclass
from enum import Enum
from typing import Iterator, Optional

from pydantic import BaseModel, Field, field_validator


# Placeholder score attached to every suggestion; not derived from the model
DEFAULT_CONFIDENCE = 0.8


class ChangeKind(Enum):
    """Change kinds reported by git for a staged file."""

    ADDED = "added"
    MODIFIED = "modified"
    DELETED = "deleted"
    RENAMED = "renamed"
    COPIED = "copied"


def count_diff_lines(diff: str) -> tuple[int, int]:
    """Count added and removed lines in a unified diff.

    The ``+++``/``---`` file header lines are not counted.

    Args:
        diff: Unified diff text.

    Returns:
        Tuple of (added, removed).
    """
    added = 0
    removed = 0
    for line in diff.split("\n"):
        if line.startswith("+") and not line.startswith("+++"):
            added += 1
        elif line.startswith("-") and not line.startswith("---"):
            removed += 1
    return added, removed


@dataclass(frozen=True)
class FileChange:
    """A staged file and its diff.

    Line counts are computed from diff_text on access, so they can never
    drift from the text they describe.
    """

    path: str
    change_kind: ChangeKind
    diff_text: str = ""
    old_path: Optional[str] = None

    @property
    def lines_added(self) -> int:
        return count_diff_lines(self.diff_text)[0]

    @property
    def lines_removed(self) -> int:
        return count_diff_lines(self.diff_text)[1]


class ChangeSet:
    """Staged changes in the order git reported them."""

    def __init__(self, changes: Optional[list[FileChange]] = None):
        self._changes = tuple(changes or ())

    def __iter__(self) -> Iterator[FileChange]:
        return iter(self._changes)

    def __len__(self) -> int:
        return len(self._changes)

    def __bool__(self) -> bool:
        return bool(self._changes)

    def __getitem__(self, index):
        return self._changes[index]

    def __eq__(self, other) -> bool:
        if not isinstance(other, ChangeSet):
            return NotImplemented
        return self._changes == other._changes

    def __repr__(self) -> str:
        return f"ChangeSet({list(self._changes)!r})"

    @property
    def paths(self) -> list[str]:
        return [change.path for change in self._changes]

    @property
    def total_added(self) -> int:
        return sum(change.lines_added for change in self._changes)

    @property
    def total_removed(self) -> int:
        return sum(change.lines_removed for change in self._changes)

    def counts_by_kind(self) -> dict[ChangeKind, int]:
        """Count files per change kind, keyed in first-seen order."""
        return dict(Counter(change.change_kind for change in self._changes))


class CommitSuggestion(BaseModel):
    """A commit message suggested by the model.

    Attributes:
        subject: Single-line subject taken from the first line of output.
        body: Optional explanatory body (may be empty).
        confidence: Fixed placeholder score, see DEFAULT_CONFIDENCE.
        files_affected: Paths of the changes the suggestion was built from.
    """

    subject: str = ""
    body: str = ""
    confidence: float = Field(default=DEFAULT_CONFIDENCE, ge=0.0, le=1.0)
    files_affected: list[str] = []

    @field_validator("subject")
    @classmethod
    def subject_single_line(cls, v: str) -> str:
        """Keep only the first line of the subject."""
        return v.strip().split("\n")[0].strip() if v else ""
