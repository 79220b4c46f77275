"""Hook failure contracts.

Pipeline stages return typed outcomes on success and raise HookFailure on
expected policy/runtime failures. Skip conditions are not failures and never
raise. Programmer bugs raise normal exceptions.
"""

from __future__ import annotations

from typing import Literal

HookFailureCode = Literal[
    "title_too_long",
    "change_id_unavailable",
    "io_failed",
]


class HookFailure(Exception):
    """Expected hook failure: policy violation or collaborator error.

    Use ``raise HookFailure(...) from exc`` to chain a causing exception; it is
    available as ``__cause__``. The CLI catches HookFailure and maps ``code``
    to an exit status.
    """

    def __init__(
        self,
        code: HookFailureCode,
        message: str,
        *,
        recovery_hint: str | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.recovery_hint = recovery_hint


class TitleTooLongError(HookFailure):
    """The subject line exceeds the hard length limit."""

    def __init__(self, length: int, limit: int) -> None:
        super().__init__(
            "title_too_long",
            f"commit title is {length} characters long (limit {limit})",
            recovery_hint="shorten the first line of the commit message",
        )
        self.length = length
        self.limit = limit


class ChangeIdUnavailableError(HookFailure):
    """Repository metadata for the change identifier could not be resolved."""

    def __init__(self, message: str, *, recovery_hint: str | None = None) -> None:
        super().__init__("change_id_unavailable", message, recovery_hint=recovery_hint)


class IoFailedError(HookFailure):
    """Reading or writing the commit message file failed."""

    def __init__(self, message: str, *, recovery_hint: str | None = None) -> None:
        super().__init__("io_failed", message, recovery_hint=recovery_hint)
