"""Subprocess plumbing for the git calls the hook makes.

Commands run without a shell and their output is decoded with
``surrogateescape``, so identities and paths in legacy encodings reach the
identifier hash with their original bytes. A runner returns ``None`` when the
executable cannot be started, which lets callers tell a missing git apart
from a git command that failed.
"""

from __future__ import annotations

import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol


@dataclass(frozen=True)
class CommandRequest:
    argv: tuple[str, ...]
    cwd: Path | None = None

    def describe(self) -> str:
        return " ".join(self.argv)


@dataclass(frozen=True)
class CommandResult:
    argv: tuple[str, ...]
    returncode: int
    stdout: str
    stderr: str


class CommandRunner(Protocol):
    def run(self, request: CommandRequest) -> CommandResult | None: ...


class SubprocessCommandRunner:
    """Runner backed by :func:`subprocess.run`."""

    def run(self, request: CommandRequest) -> CommandResult | None:
        try:
            completed = subprocess.run(
                list(request.argv),
                cwd=request.cwd,
                check=False,
                capture_output=True,
                text=True,
                encoding="utf-8",
                errors="surrogateescape",
            )
        except FileNotFoundError:
            return None
        return CommandResult(
            argv=request.argv,
            returncode=completed.returncode,
            stdout=completed.stdout or "",
            stderr=completed.stderr or "",
        )


_DEFAULT_COMMAND_RUNNER: CommandRunner = SubprocessCommandRunner()


@dataclass(frozen=True)
class CommandExecutionError(RuntimeError):
    """Raised when git cannot be started or reports a failure."""

    request: CommandRequest
    detail: str
    result: CommandResult | None = None

    def __str__(self) -> str:
        return self.detail


def run_with_runner(
    request: CommandRequest, *, runner: CommandRunner | None = None
) -> CommandResult | None:
    return (runner or _DEFAULT_COMMAND_RUNNER).run(request)


def missing_command(request: CommandRequest) -> CommandExecutionError:
    """Build the error for an executable that could not be started.

    Example:
        >>> str(missing_command(CommandRequest(argv=("git", "write-tree"))))
        'missing required command: git'
    """
    name = request.argv[0] if request.argv else "command"
    return CommandExecutionError(request=request, detail=f"missing required command: {name}")


def command_failed(request: CommandRequest, result: CommandResult) -> CommandExecutionError:
    """Build the error for a command that exited non-zero, quoting its output."""
    output = (result.stderr or result.stdout).strip()
    detail = f"command failed: {request.describe()}"
    if output:
        detail = f"{detail}\n{output}"
    return CommandExecutionError(request=request, result=result, detail=detail)


def run_checked(
    request: CommandRequest, *, runner: CommandRunner | None = None
) -> CommandResult:
    """Run ``request`` and return its result, raising unless it exited zero.

    Raises:
        CommandExecutionError: When the command is missing or fails.
    """
    result = run_with_runner(request, runner=runner)
    if result is None:
        raise missing_command(request)
    if result.returncode != 0:
        raise command_failed(request, result)
    return result


def read_value(request: CommandRequest, *, runner: CommandRunner | None = None) -> str:
    """Run ``request`` and return its single-line output.

    Raises:
        CommandExecutionError: When the command fails or prints nothing.
    """
    result = run_checked(request, runner=runner)
    value = result.stdout.strip()
    if not value:
        raise CommandExecutionError(
            request=request,
            result=result,
            detail=f"empty output from: {request.describe()}",
        )
    return value
