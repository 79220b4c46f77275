"""Subject line length checks."""

from __future__ import annotations

from dataclasses import dataclass

from .errors import TitleTooLongError

TITLE_WARN_LENGTH = 80
TITLE_MAX_LENGTH = 100


@dataclass(frozen=True)
class TitleCheck:
    """Result of a title length check that did not fail."""

    length: int
    warn_length: int
    warning: str | None = None

    @property
    def ok(self) -> bool:
        return self.warning is None


def check_title(
    title: str,
    *,
    warn_length: int = TITLE_WARN_LENGTH,
    max_length: int = TITLE_MAX_LENGTH,
) -> TitleCheck:
    """Check the subject line against the soft and hard length limits.

    Titles longer than ``warn_length`` produce a warning; titles longer than
    ``max_length`` raise. Revert commits commonly land between the two.

    Args:
        title: First line of the commit message.
        warn_length: Soft limit.
        max_length: Hard limit.

    Returns:
        ``TitleCheck`` carrying an optional warning message.

    Raises:
        TitleTooLongError: When the title exceeds ``max_length``.

    Example:
        >>> check_title("Fix crash").ok
        True
    """
    length = len(title)
    if length > max_length:
        raise TitleTooLongError(length, max_length)
    if length > warn_length:
        return TitleCheck(
            length=length,
            warn_length=warn_length,
            warning=(
                f"commit title is {length} characters long; "
                f"keep it under {warn_length + 1} characters"
            ),
        )
    return TitleCheck(length=length, warn_length=warn_length)
