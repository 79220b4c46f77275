"""``commit-msg`` command implementation."""

from __future__ import annotations

from pathlib import Path

from .. import config, git, pipeline
from ..errors import HookFailure
from ..io import die

EXIT_CODES = {
    "title_too_long": 1,
    "change_id_unavailable": 2,
    "io_failed": 3,
}


def run_commit_msg(args: object) -> None:
    """Apply the hook pipeline to the message file named in ``args``."""
    message_file = getattr(args, "message_file", None)
    if message_file is None:
        die("missing required argument: MESSAGE_FILE")
    repo_dir = getattr(args, "repo", None)
    hook_config = config.load_hook_config(repo_dir)
    try:
        pipeline.run_commit_msg_hook(
            Path(str(message_file)),
            hook_config,
            source=git.GitChangeIdSource(repo_dir),
            branch_lookup=lambda: git.git_current_branch(repo_dir),
        )
    except HookFailure as exc:
        detail = str(exc)
        if exc.recovery_hint:
            detail = f"{detail}\nhint: {exc.recovery_hint}"
        die(detail, code=EXIT_CODES[exc.code])
