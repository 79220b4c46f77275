"""Console I/O helpers for user-facing messages."""

from __future__ import annotations

import sys
from typing import NoReturn

from . import log as changemark_log


def say(message: str) -> None:
    """Print a normal message to stdout.

    Example:
        >>> say("Installed .git/hooks/commit-msg")
        Installed .git/hooks/commit-msg
    """
    print(message)


def die(message: str, code: int = 1) -> NoReturn:
    """Report ``message`` as an error and exit with ``code``."""
    changemark_log.error(message)
    sys.exit(code)
