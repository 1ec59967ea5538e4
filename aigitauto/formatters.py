"""Text rendering for changes and suggestions shown to the user."""

from aigitauto.models import ChangeKind, ChangeSet, CommitSuggestion


CHANGE_ICONS = {
    ChangeKind.ADDED: "+",
    ChangeKind.MODIFIED: "~",
    ChangeKind.DELETED: "-",
    ChangeKind.RENAMED: ">",
    ChangeKind.COPIED: "=",
}


def render_change_summary(change_set: ChangeSet) -> str:
    """Render the staged files with line counts and totals.

    Example output:
        Found 2 staged file(s):
          ~ a.go (+5 -2 lines)
          + b.txt (+10 -0 lines)
        Total changes: +15 -2 lines
        Summary: 1 modified, 1 added
    """
    lines = [f"Found {len(change_set)} staged file(s):"]
    for change in change_set:
        icon = CHANGE_ICONS.get(change.change_kind, "?")
        name = f"{change.old_path} -> {change.path}" if change.old_path else change.path
        lines.append(f"  {icon} {name} (+{change.lines_added} -{change.lines_removed} lines)")

    lines.append(f"Total changes: +{change_set.total_added} -{change_set.total_removed} lines")
    summary = ", ".join(f"{count} {kind.value}" for kind, count in change_set.counts_by_kind().items())
    if summary:
        lines.append(f"Summary: {summary}")
    return "\n".join(lines)


def render_suggestion(suggestion: CommitSuggestion) -> str:
    """Render a CommitSuggestion framed by separator lines."""
    lines = [
        "=" * 60,
        "AI-GENERATED COMMIT MESSAGE",
        "=" * 60,
        f"Subject: {suggestion.subject}",
    ]
    if suggestion.body:
        lines.append("")
        lines.append("Body:")
        lines.append(suggestion.body)
    lines.append("")
    lines.append(f"Confidence: {suggestion.confidence:.0%}")
    lines.append(f"Files: {', '.join(suggestion.files_affected)}")
    lines.append("=" * 60)
    return "\n".join(lines)
