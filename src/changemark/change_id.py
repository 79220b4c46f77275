"""Change identifier generation and trailer injection."""

from __future__ import annotations

import hashlib
import re
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import Protocol

from .footer import ClassifiedMessage, render_segments

CHANGE_ID_KEY = "Change-Id"
_CHANGE_ID_PATTERN = re.compile(r"^change-id:", re.IGNORECASE)
_TRAILER_KEY_PATTERN = re.compile(r"^([^:\s]+):")


@dataclass(frozen=True)
class ChangeIdInput:
    """Repository metadata hashed into a change identifier."""

    tree: str
    author: str
    committer: str
    message: str
    parent: str | None = None

    def render(self) -> str:
        """Render the hash input in ``git cat-file`` commit layout.

        Example:
            >>> ChangeIdInput(tree="t", author="a", committer="c", message="m\\n").render()
            'tree t\\nauthor a\\ncommitter c\\n\\nm\\n'
        """
        header = [f"tree {self.tree}"]
        if self.parent:
            header.append(f"parent {self.parent}")
        header.append(f"author {self.author}")
        header.append(f"committer {self.committer}")
        return "\n".join(header) + "\n\n" + self.message


class ChangeIdSource(Protocol):
    """Supplies repository metadata for a cleaned message."""

    def change_id_input(self, message: str) -> ChangeIdInput: ...


def compute_change_id(payload: ChangeIdInput) -> str:
    """Return the git blob SHA-1 of the rendered hash input.

    Matches ``git hash-object -t blob --stdin`` for the same bytes.
    """
    data = payload.render().encode("utf-8", errors="surrogateescape")
    digest = hashlib.sha1(b"blob %d\0" % len(data))
    digest.update(data)
    return digest.hexdigest()


def format_change_id(change_id: str) -> str:
    """Return the trailer line for ``change_id``.

    Example:
        >>> format_change_id("abc123")
        'Change-Id: Iabc123'
    """
    return f"{CHANGE_ID_KEY}: I{change_id}"


def has_change_id(lines: Iterable[str]) -> bool:
    """Return whether any line already carries a ``Change-Id`` trailer."""
    return any(_CHANGE_ID_PATTERN.match(line) for line in lines)


def trailer_key(line: str) -> str | None:
    match = _TRAILER_KEY_PATTERN.match(line)
    if match is None:
        return None
    return match.group(1)


def _is_priority_line(line: str, priority_keys: frozenset[str]) -> bool:
    key = trailer_key(line)
    return key is not None and key.lower() in priority_keys


def inject_change_id(
    classified: ClassifiedMessage,
    change_id: str,
    priority_keys: Sequence[str],
) -> list[str]:
    """Insert the ``Change-Id`` trailer into a classified message.

    Without a confirmed footer the trailer becomes a new footer block after
    exactly one blank line. Otherwise it is placed after the leading run of
    priority-key trailers and before every other trailer line.

    Args:
        classified: Output of :func:`changemark.footer.classify_footer`.
        change_id: Hex identifier without the ``I`` prefix.
        priority_keys: Trailer keys that sort before ``Change-Id``.

    Returns:
        Message lines with the trailer inserted. When a ``Change-Id`` is
        already present the message lines are returned unchanged.
    """
    lines = render_segments(classified.segments)
    if has_change_id(lines):
        return lines

    trailer = format_change_id(change_id)
    if not classified.footer_confirmed:
        body = render_segments(classified.segments)
        while body and not body[-1]:
            body.pop()
        return [*body, "", trailer]

    keys = frozenset(key.lower() for key in priority_keys)
    footer: list[str] = []
    inserted = False
    for line in classified.footer:
        if not inserted and not _is_priority_line(line, keys):
            footer.append(trailer)
            inserted = True
        footer.append(line)
    if not inserted:
        footer.append(trailer)
    return [*render_segments(classified.body), *footer]
