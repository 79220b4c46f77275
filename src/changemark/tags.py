"""Bug tag placement and formatting.

Issue references (``Bug: 12345``, ``Ping-Bug: 12345``) are collected from the
trailing trailer-like run of a message, written with canonical key casing and
a single space after the colon, and moved into their own block directly after
one blank line. Trailer-like runs followed by more prose are left alone, which
keeps ``bug: 12345 was caused by...`` inside a paragraph untouched.

A reference that is the last line of the message is always treated as a tag,
even when it reads as prose.

A blank line is put in front of the moved tags only when a tag line itself
opens the run right after prose; a run opened by another trailer is already
separated from the body by that trailer. Messages that carried a
``Change-Id`` before the hook ran have been laid out already, so callers pass
``relocate=False`` and only the tag spelling is fixed.
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import dataclass, replace
from enum import Enum

_TAG_PATTERN = re.compile(r"^(?P<key>(?:ping-)?bug):\s*(?P<value>\d{4,}.*)$", re.IGNORECASE)
_TRAILER_PATTERN = re.compile(r"^[a-zA-Z0-9-]+:")


class TagLineKind(Enum):
    TAG = "tag"
    TRAILER = "trailer"
    BLANK = "blank"
    TEXT = "text"


def classify_tag_line(line: str) -> TagLineKind:
    """Classify a normalized line for tag fixup.

    Example:
        >>> classify_tag_line("bug:1234")
        <TagLineKind.TAG: 'tag'>
        >>> classify_tag_line("bug: 12")
        <TagLineKind.TRAILER: 'trailer'>
    """
    if not line.strip():
        return TagLineKind.BLANK
    if _TAG_PATTERN.match(line):
        return TagLineKind.TAG
    if _TRAILER_PATTERN.match(line):
        return TagLineKind.TRAILER
    return TagLineKind.TEXT


def format_tag_line(line: str) -> str:
    """Return ``line`` with canonical key casing and spacing.

    Example:
        >>> format_tag_line("PING-BUG:   98765")
        'Ping-Bug: 98765'
    """
    match = _TAG_PATTERN.match(line)
    if match is None:
        return line
    key = "Ping-Bug" if match.group("key").lower() == "ping-bug" else "Bug"
    return f"{key}: {match.group('value')}"


@dataclass(frozen=True)
class TagFixupState:
    """Scanner state between two input lines."""

    output: tuple[str, ...] = ()
    buffer: tuple[str, ...] = ()
    seen_title: bool = False
    last_was_blank: bool = False
    needs_leading_blank: bool = False


def _emit(state: TagFixupState, *lines: str) -> TagFixupState:
    return replace(state, output=(*state.output, *lines))


def step(state: TagFixupState, line: str) -> TagFixupState:
    """Advance the tag scanner by one normalized line."""
    kind = classify_tag_line(line)

    if not state.seen_title:
        if kind is TagLineKind.BLANK:
            return replace(_emit(state, line), last_was_blank=True)
        return replace(_emit(state, line), seen_title=True, last_was_blank=False)

    if kind is TagLineKind.BLANK:
        if not state.buffer:
            return replace(_emit(state, line), last_was_blank=True)
        return replace(state, buffer=(*state.buffer, line), last_was_blank=True)

    if kind in (TagLineKind.TAG, TagLineKind.TRAILER):
        needs_leading_blank = state.needs_leading_blank
        if not state.buffer:
            # Only a tag opening the run asks for separation from the prose above.
            needs_leading_blank = kind is TagLineKind.TAG and not state.last_was_blank
        return replace(
            state,
            buffer=(*state.buffer, line),
            last_was_blank=False,
            needs_leading_blank=needs_leading_blank,
        )

    # Prose after the run: it was not a footer, keep it as written.
    return replace(
        _emit(state, *state.buffer, line),
        buffer=(),
        last_was_blank=False,
        needs_leading_blank=False,
    )


def rewrite_tag_run(
    run: Iterable[str], *, needs_leading_blank: bool, relocate: bool = True
) -> list[str]:
    """Rewrite the trailing trailer-like run of a message.

    Args:
        run: Buffered lines (tags, other trailers, blanks) in input order.
        needs_leading_blank: Whether the run directly follows prose.
        relocate: Move tags into their own block. When false, tags are only
            reformatted where they stand.

    Returns:
        Replacement lines with no trailing blank line.
    """
    lines = list(run)
    while lines and not lines[-1].strip():
        lines.pop()
    kinds = [classify_tag_line(line) for line in lines]
    tags = [format_tag_line(line) for line, kind in zip(lines, kinds) if kind is TagLineKind.TAG]
    if not tags:
        return lines
    if not relocate:
        return [format_tag_line(line) for line in lines]

    others = [line for line, kind in zip(lines, kinds) if kind is TagLineKind.TRAILER]
    rewritten = [""] if needs_leading_blank else []
    rewritten.extend(tags)
    if others:
        rewritten.append("")
        rewritten.extend(others)
    return rewritten


def finish(state: TagFixupState, *, relocate: bool = True) -> list[str]:
    tail = rewrite_tag_run(
        state.buffer, needs_leading_blank=state.needs_leading_blank, relocate=relocate
    )
    return [*state.output, *tail]


def fix_tags(lines: Iterable[str], *, relocate: bool = True) -> list[str]:
    """Normalize bug tags in a message.

    Args:
        lines: Normalized message lines.
        relocate: Whether tags may be moved ahead of the other trailers.

    Returns:
        Rewritten message lines.

    Example:
        >>> fix_tags(["Fix crash", "bug:4321"])
        ['Fix crash', '', 'Bug: 4321']
    """
    state = TagFixupState()
    for line in lines:
        state = step(state, line)
    return finish(state, relocate=relocate)
