"""Line-level cleanup of raw commit message text.

Every later stage works on the output of :func:`normalize_lines`: comment
lines removed, any appended patch preview cut off, trailing whitespace
stripped.

Example:
    >>> normalize_lines(["Fix crash  ", "# Please enter a message", "", "body\\t"])
    ['Fix crash', '', 'body']
"""

from __future__ import annotations

import re
from collections.abc import Iterable

DEFAULT_COMMENT_CHAR = "#"
_DIFF_MARKER_PATTERN = re.compile(r"^diff --git ")
_SIGNED_OFF_BY_PATTERN = re.compile(r"^Signed-off-by:")
_TRAILING_WHITESPACE = " \t"


def split_message(text: str) -> list[str]:
    """Split message text into lines without line terminators."""
    return text.splitlines()


def render_message(lines: Iterable[str]) -> str:
    """Join lines back into message text with a single terminal newline.

    Trailing blank lines are dropped; an empty message renders as ``""``.

    Example:
        >>> render_message(["Fix crash", "", "Bug: 1234", "", ""])
        'Fix crash\\n\\nBug: 1234\\n'
    """
    collected = list(lines)
    while collected and not collected[-1]:
        collected.pop()
    if not collected:
        return ""
    return "\n".join(collected) + "\n"


def is_comment(line: str, comment_char: str = DEFAULT_COMMENT_CHAR) -> bool:
    return bool(comment_char) and line.startswith(comment_char)


def is_diff_marker(line: str) -> bool:
    """Return whether ``line`` starts a ``git commit --verbose`` patch preview."""
    return bool(_DIFF_MARKER_PATTERN.match(line))


def normalize_lines(
    lines: Iterable[str], comment_char: str = DEFAULT_COMMENT_CHAR
) -> list[str]:
    """Strip comments, diff previews and trailing whitespace.

    Args:
        lines: Raw message lines.
        comment_char: Leading character marking a comment line.

    Returns:
        Cleaned lines. Processing stops at the first diff marker; that line
        and everything after it is discarded.
    """
    cleaned: list[str] = []
    for line in lines:
        if is_diff_marker(line):
            break
        if is_comment(line, comment_char):
            continue
        cleaned.append(line.rstrip(_TRAILING_WHITESPACE))
    return cleaned


def has_text(lines: Iterable[str]) -> bool:
    """Return whether any line carries non-whitespace content."""
    return any(line.strip() for line in lines)


def subject_line(lines: Iterable[str]) -> str | None:
    """Return the first non-blank line, or ``None`` for an empty message."""
    for line in lines:
        if line.strip():
            return line
    return None


def stripspace(lines: Iterable[str]) -> list[str]:
    """Collapse blank-line runs and trim blank lines at both ends.

    Mirrors ``git stripspace`` for already comment-free input.

    Example:
        >>> stripspace(["", "a", "", "", "b", ""])
        ['a', '', 'b']
    """
    result: list[str] = []
    pending_blank = False
    for line in lines:
        stripped = line.rstrip()
        if not stripped:
            pending_blank = bool(result)
            continue
        if pending_blank:
            result.append("")
            pending_blank = False
        result.append(stripped)
    return result


def clean_message(lines: Iterable[str], comment_char: str = DEFAULT_COMMENT_CHAR) -> str:
    """Return the message body fed into change identifier hashing.

    Sign-off lines are excluded so that adding ``Signed-off-by`` does not
    change the identifier.
    """
    normalized = normalize_lines(lines, comment_char)
    kept = [line for line in normalized if not _SIGNED_OFF_BY_PATTERN.match(line)]
    return render_message(stripspace(kept))
