"""Prompt construction for commit message generation.

Contains:
- build_summary: Aggregate counts for a ChangeSet
- build_prompt: The full prompt sent to the model
- classify_file: Describe a file by its name and extension
- truncate_diff: Bound a diff to a character budget

The prompt is a pure function of the ChangeSet and the Config, so the
same staged changes always produce the same request.
"""

from enum import Enum
from pathlib import PurePosixPath

from aigitauto.config import Config
from aigitauto.models import ChangeSet, FileChange


TRUNCATION_MARKER = "\n... (truncated)"


class FileCategory(Enum):
    """Descriptive file categories shown to the model."""

    SOURCE = "source code"
    DOCUMENTATION = "documentation"
    CONFIG = "configuration"
    BUILD = "build script"
    UNKNOWN = "unknown"


# Checked before extensions: exact basenames
BUILD_FILENAMES = {
    "makefile", "gnumakefile", "cmakelists.txt", "dockerfile", "jenkinsfile",
    "rakefile", "gemfile", "build.gradle", "build.gradle.kts", "pom.xml",
    "setup.py", "setup.cfg", "pyproject.toml", "cargo.toml", "go.mod",
    "package.json", "build.sbt", "meson.build",
}

DOC_FILENAMES = {"readme", "license", "changelog", "contributing", "authors", "notice"}

EXTENSION_CATEGORIES = {
    # Source code
    ".py": FileCategory.SOURCE, ".go": FileCategory.SOURCE, ".rs": FileCategory.SOURCE,
    ".js": FileCategory.SOURCE, ".jsx": FileCategory.SOURCE, ".ts": FileCategory.SOURCE,
    ".tsx": FileCategory.SOURCE, ".java": FileCategory.SOURCE, ".kt": FileCategory.SOURCE,
    ".c": FileCategory.SOURCE, ".h": FileCategory.SOURCE, ".cpp": FileCategory.SOURCE,
    ".hpp": FileCategory.SOURCE, ".cc": FileCategory.SOURCE, ".cs": FileCategory.SOURCE,
    ".rb": FileCategory.SOURCE, ".php": FileCategory.SOURCE, ".swift": FileCategory.SOURCE,
    ".scala": FileCategory.SOURCE, ".sh": FileCategory.SOURCE, ".sql": FileCategory.SOURCE,
    ".html": FileCategory.SOURCE, ".css": FileCategory.SOURCE, ".vue": FileCategory.SOURCE,
    # Documentation
    ".md": FileCategory.DOCUMENTATION, ".rst": FileCategory.DOCUMENTATION,
    ".txt": FileCategory.DOCUMENTATION, ".adoc": FileCategory.DOCUMENTATION,
    # Structured config
    ".json": FileCategory.CONFIG, ".yaml": FileCategory.CONFIG, ".yml": FileCategory.CONFIG,
    ".toml": FileCategory.CONFIG, ".ini": FileCategory.CONFIG, ".cfg": FileCategory.CONFIG,
    ".xml": FileCategory.CONFIG, ".env": FileCategory.CONFIG, ".conf": FileCategory.CONFIG,
    # Build scripts
    ".mk": FileCategory.BUILD, ".gradle": FileCategory.BUILD, ".cmake": FileCategory.BUILD,
}

PROMPT_HEADER = (
    "You are a helpful assistant that generates concise, meaningful Git commit "
    "messages based on code changes.\n\n"
    "Here are the changes made to the repository:\n\n"
)

PROMPT_INSTRUCTIONS = """Please generate a commit message following conventional commit format:
- Use a clear, concise subject line (50 characters or less)
- Start with a type (feat, fix, docs, style, refactor, test, chore)
- Use present tense, imperative mood
- Include a body if needed to explain what and why, separated from the subject by a blank line

Good examples:
- feat: add user login endpoint
- fix: handle empty config file

Bad examples:
- Added some stuff
- fixed bug.

Respond with only the commit message, no additional text or formatting."""


def classify_file(path: str) -> FileCategory:
    """Classify a file by its name and extension.

    Args:
        path: Repository-relative path.

    Returns:
        The FileCategory, UNKNOWN if nothing matches.
    """
    name = PurePosixPath(path).name.lower()
    if name in BUILD_FILENAMES:
        return FileCategory.BUILD

    stem, _, _ = name.partition(".")
    if stem in DOC_FILENAMES:
        return FileCategory.DOCUMENTATION

    suffix = PurePosixPath(name).suffix
    return EXTENSION_CATEGORIES.get(suffix, FileCategory.UNKNOWN)


def truncate_diff(diff: str, max_chars: int) -> str:
    """Cut a diff to max_chars characters, appending TRUNCATION_MARKER if cut."""
    if len(diff) <= max_chars:
        return diff
    return diff[:max_chars] + TRUNCATION_MARKER


def build_summary(change_set: ChangeSet) -> str:
    """Summarize a ChangeSet: file count, line totals, and files per change kind.

    Example output:
        Files changed: 2
        Total lines: +15 -2
        By change type: 1 modified, 1 added
    """
    by_kind = ", ".join(
        f"{count} {kind.value}" for kind, count in change_set.counts_by_kind().items()
    )
    lines = [
        f"Files changed: {len(change_set)}",
        f"Total lines: +{change_set.total_added} -{change_set.total_removed}",
        f"By change type: {by_kind}",
    ]
    return "\n".join(lines)


def _describe_file(change: FileChange) -> str:
    kind = change.change_kind.value
    if change.old_path:
        kind = f"{kind} from {change.old_path}"
    category = classify_file(change.path).value
    return f"- {change.path} ({kind}, {category}): +{change.lines_added} -{change.lines_removed} lines"


def build_prompt(change_set: ChangeSet, config: Config) -> str:
    """Build the prompt for the model.

    At most config.max_detailed_files files are described, each with its
    diff cut to config.max_diff_chars. The rest are counted.

    Args:
        change_set: The staged changes. Must not be empty.
        config: The run configuration.

    Returns:
        The prompt text.

    Raises:
        ValueError: If change_set is empty.
    """
    if not change_set:
        raise ValueError("Cannot build a prompt from an empty change set")

    detailed = change_set[: config.max_detailed_files]
    remaining = len(change_set) - len(detailed)

    parts = [PROMPT_HEADER]
    parts.append("Summary:\n")
    parts.append(build_summary(change_set))
    parts.append("\n\nFiles changed:\n")
    parts.append("\n".join(_describe_file(change) for change in detailed))
    if remaining:
        parts.append(f"\n... and {remaining} more files")
    parts.append("\n\n")

    for change in detailed:
        if not change.diff_text:
            continue
        parts.append(f"Diff for {change.path}:\n")
        parts.append(truncate_diff(change.diff_text, config.max_diff_chars))
        parts.append("\n---\n\n")

    parts.append(PROMPT_INSTRUCTIONS)
    return "".join(parts)
