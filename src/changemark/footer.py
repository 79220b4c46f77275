"""Footer block classification for commit messages.

A message is cut into segments: maximal runs of non-blank lines, each paired
with the number of blank lines that follow it. The last segment is the footer
candidate; it is confirmed only when every line in it is trailer-shaped (or
sits inside a bracketed continuation such as ``[Reviewed-on: ...`` ... ``]``)
and it is not the first segment of the message. A ``[key:`` line only opens
a continuation inside a block that is already trailer-shaped; on the first
line of a block it is an ordinary line.

The scanner is an explicit state machine: :func:`step` consumes one line and
returns the next :class:`ClassifierState`, :func:`classify_footer` folds it
over a normalized message.
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import dataclass, field, replace
from enum import Enum

_TRAILER_PATTERN = re.compile(r"^\[?[a-zA-Z0-9-]+:")
_URL_PATTERN = re.compile(r"^[a-zA-Z0-9-]+://")
_BRACKET_OPEN_PATTERN = re.compile(r"^\[[a-zA-Z0-9-]+:")


class BracketState(Enum):
    NONE = "none"
    OPEN = "open"
    CLOSING = "closing"


@dataclass(frozen=True)
class Segment:
    """A run of non-blank lines and the blank lines that follow it."""

    lines: tuple[str, ...]
    blank_after: int = 0

    def render(self) -> list[str]:
        return [*self.lines, *([""] * self.blank_after)]


@dataclass(frozen=True)
class ClassifierState:
    """Scanner state between two input lines."""

    segments: tuple[Segment, ...] = ()
    block: tuple[str, ...] = ()
    blank_run: int = 0
    is_footer: bool = False
    bracket: BracketState = BracketState.NONE
    seen_text: bool = False


@dataclass(frozen=True)
class ClassifiedMessage:
    """A message partitioned into body segments and a footer candidate."""

    segments: tuple[Segment, ...] = field(default_factory=tuple)
    footer_confirmed: bool = False

    @property
    def body(self) -> tuple[Segment, ...]:
        if self.footer_confirmed:
            return self.segments[:-1]
        return self.segments

    @property
    def footer(self) -> tuple[str, ...]:
        if not self.footer_confirmed or not self.segments:
            return ()
        return self.segments[-1].lines

    @property
    def is_empty(self) -> bool:
        return not any(segment.lines for segment in self.segments)


def is_footer_line(line: str) -> bool:
    """Return whether ``line`` looks like a footer trailer.

    Example:
        >>> is_footer_line("Signed-off-by: A U Thor <a@example.com>")
        True
        >>> is_footer_line("https://example.com/issue/1")
        False
    """
    return bool(_TRAILER_PATTERN.match(line)) and not _URL_PATTERN.match(line)


def _flush(state: ClassifierState) -> ClassifierState:
    segment = Segment(lines=state.block, blank_after=state.blank_run)
    return replace(
        state,
        segments=(*state.segments, segment),
        block=(),
        blank_run=0,
        is_footer=state.seen_text,
        bracket=BracketState.NONE,
    )


def step(state: ClassifierState, line: str) -> ClassifierState:
    """Advance the classifier by one normalized line."""
    if not line and state.bracket is BracketState.NONE:
        return replace(state, blank_run=state.blank_run + 1)

    bracket = state.bracket
    if bracket is BracketState.NONE and state.is_footer and _BRACKET_OPEN_PATTERN.match(line):
        bracket = BracketState.OPEN
    if bracket is BracketState.OPEN and line.endswith("]"):
        bracket = BracketState.CLOSING

    if state.blank_run > 0:
        # A new block never inherits a bracket opened against the previous one.
        state = _flush(state)
        bracket = state.bracket

    is_footer = state.is_footer
    if bracket is BracketState.NONE and not is_footer_line(line):
        is_footer = False

    if bracket is BracketState.CLOSING:
        bracket = BracketState.NONE

    return replace(
        state,
        block=(*state.block, line),
        is_footer=is_footer,
        bracket=bracket,
        seen_text=True,
    )


def finish(state: ClassifierState) -> ClassifiedMessage:
    """Close the last block and report whether it is a confirmed footer."""
    segments = state.segments
    if state.block or state.blank_run:
        segments = (*segments, Segment(lines=state.block, blank_after=state.blank_run))
    confirmed = state.is_footer and bool(state.block)
    return ClassifiedMessage(segments=segments, footer_confirmed=confirmed)


def classify_footer(lines: Iterable[str]) -> ClassifiedMessage:
    """Partition normalized lines into segments and detect the footer.

    Args:
        lines: Output of :func:`changemark.lines.normalize_lines`.

    Returns:
        A :class:`ClassifiedMessage` whose segments reconstruct the input.

    Example:
        >>> result = classify_footer(["Fix crash", "", "Bug: 1234"])
        >>> result.footer
        ('Bug: 1234',)
    """
    state = ClassifierState()
    for line in lines:
        state = step(state, line)
    return finish(state)


def render_segments(segments: Iterable[Segment]) -> list[str]:
    """Concatenate segments back into a list of lines."""
    rendered: list[str] = []
    for segment in segments:
        rendered.extend(segment.render())
    return rendered
