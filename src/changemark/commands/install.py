"""``install`` command implementation."""

from __future__ import annotations

from .. import hooks
from ..errors import HookFailure
from ..io import die, say


def run_install(args: object) -> None:
    """Install the managed ``commit-msg`` hook into a repository."""
    try:
        hook_path = hooks.install_for_repo(
            getattr(args, "repo", None),
            force=bool(getattr(args, "force", False)),
        )
    except HookFailure as exc:
        detail = str(exc)
        if exc.recovery_hint:
            detail = f"{detail}\nhint: {exc.recovery_hint}"
        die(detail)
    say(f"Installed {hook_path}")
