"""Command-line entry point for Changemark."""

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace
from typing import Annotated

import typer

from . import __version__
from . import log as changemark_log
from .commands.commit_msg import run_commit_msg as commit_msg_cmd
from .commands.install import run_install as install_cmd

app = typer.Typer(
    name="changemark",
    help="Add Change-Id trailers and tidy bug tags in commit messages.",
    add_completion=False,
    no_args_is_help=True,
)


def _validate_log_level(value: str | None) -> str | None:
    if value is None:
        return None
    normalized = value.strip().lower()
    if normalized not in changemark_log.LEVEL_NAMES:
        choices = ", ".join(changemark_log.LEVEL_NAMES)
        raise typer.BadParameter(f"expected one of: {choices}")
    return normalized


def _show_version(value: bool) -> None:
    if value:
        typer.echo(__version__)
        raise typer.Exit()


@app.callback()
def root(
    log_level: Annotated[
        str | None,
        typer.Option(
            "--log-level",
            callback=_validate_log_level,
            help="Log level (debug, info, warning, error).",
        ),
    ] = None,
    no_color: Annotated[
        bool, typer.Option("--no-color", help="Disable colorized output.")
    ] = False,
    version: Annotated[
        bool,
        typer.Option("--version", callback=_show_version, is_eager=True, help="Show version."),
    ] = False,
) -> None:
    """Changemark commit message hook."""
    if log_level is not None:
        changemark_log.set_level(log_level)
    if no_color:
        changemark_log.set_no_color(True)


@app.command("commit-msg")
def commit_msg(
    message_file: Annotated[Path, typer.Argument(help="Commit message file passed by git.")],
    repo: Annotated[
        Path | None, typer.Option("--repo", help="Repository directory (default: cwd).")
    ] = None,
) -> None:
    """Run the commit-msg hook against MESSAGE_FILE."""
    commit_msg_cmd(SimpleNamespace(message_file=message_file, repo=repo))


@app.command("install")
def install(
    repo: Annotated[
        Path | None, typer.Option("--repo", help="Repository directory (default: cwd).")
    ] = None,
    force: Annotated[
        bool, typer.Option("--force", help="Replace an existing legacy hook file.")
    ] = False,
) -> None:
    """Install the managed commit-msg hook."""
    install_cmd(SimpleNamespace(repo=repo, force=force))


def main() -> None:
    app()


if __name__ == "__main__":
    main()
