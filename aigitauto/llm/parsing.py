"""Parsing of raw model output into a CommitSuggestion.

Contains:
- parse_suggestion: Split raw text into subject and body
- clean_response: Remove markdown fences the model may add
"""

from aigitauto.models import DEFAULT_CONFIDENCE, ChangeSet, CommitSuggestion


def clean_response(raw_response: str) -> str:
    """Strip a surrounding markdown code fence, if any."""
    cleaned = raw_response.strip()

    # Remove markdown code fences if the model included them despite instructions
    if cleaned.startswith("```"):
        lines = cleaned.split("\n")
        # Remove first line (``` or ```text)
        lines = lines[1:]
        # Remove last line if it's ```
        if lines and lines[-1].strip() == "```":
            lines = lines[:-1]
        cleaned = "\n".join(lines)

    return cleaned


def _strip_quotes(subject: str) -> str:
    if len(subject) >= 2 and subject[0] == subject[-1] and subject[0] in "\"'`":
        return subject[1:-1].strip()
    return subject


def parse_suggestion(raw_text: str, change_set: ChangeSet) -> CommitSuggestion:
    """Parse the model output into a CommitSuggestion.

    The first line becomes the subject. The remaining lines, with leading
    blank lines dropped, become the body. This never fails: empty output
    yields an empty subject and body.

    Args:
        raw_text: The text returned by the model.
        change_set: The changes the prompt was built from.

    Returns:
        The parsed CommitSuggestion. Confidence is the fixed
        DEFAULT_CONFIDENCE placeholder.
    """
    lines = clean_response(raw_text).split("\n")

    subject = _strip_quotes(lines[0].strip()) if lines else ""

    body_lines = lines[1:]
    while body_lines and not body_lines[0].strip():
        body_lines = body_lines[1:]
    body = "\n".join(body_lines).strip()

    return CommitSuggestion(
        subject=subject,
        body=body,
        confidence=DEFAULT_CONFIDENCE,
        files_affected=change_set.paths,
    )
