"""Conditions under which the hook leaves a message alone."""

from __future__ import annotations

from collections.abc import Iterable
from fnmatch import fnmatchcase

_AUTOSQUASH_PREFIXES: tuple[str, ...] = ("fixup!", "squash!")


def is_autosquash_subject(subject: str) -> bool:
    """Return whether the subject marks a ``git rebase --autosquash`` commit.

    Example:
        >>> is_autosquash_subject("fixup! Fix crash")
        True
        >>> is_autosquash_subject("Fix fixup! handling")
        False
    """
    return subject.startswith(_AUTOSQUASH_PREFIXES)


def is_packaging_branch(branch: str | None, patterns: Iterable[str]) -> bool:
    """Return whether ``branch`` matches one of the packaging branch patterns.

    Example:
        >>> is_packaging_branch("upstream/1.2", ("upstream", "upstream/*"))
        True
        >>> is_packaging_branch(None, ("upstream",))
        False
    """
    if not branch:
        return False
    return any(fnmatchcase(branch, pattern) for pattern in patterns)
