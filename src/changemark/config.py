"""Configuration loading for the Changemark hook.

Settings live in git config so they follow the usual system/global/local
precedence:

- ``changemark.createChangeId`` (bool): master switch.
- ``core.commentChar``: comment marker used by ``git commit``.
- ``changemark.changeIdAfter`` (multi-valued): trailer keys placed before
  ``Change-Id``.
- ``changemark.skipBranch`` (multi-valued): packaging branch patterns.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import ValidationError

from . import exec as exec_util
from . import git
from . import log as changemark_log
from .models import HookConfig

ENABLED_KEY = "changemark.createChangeId"
COMMENT_CHAR_KEY = "core.commentChar"
PRIORITY_KEYS_KEY = "changemark.changeIdAfter"
SKIP_BRANCH_KEY = "changemark.skipBranch"


def parse_hook_config(payload: dict) -> HookConfig:
    """Validate a raw settings payload, dropping unset values.

    Example:
        >>> parse_hook_config({"enabled": "false", "priority_keys": None}).enabled
        False
    """
    return HookConfig.model_validate(
        {key: value for key, value in payload.items() if value is not None}
    )


def read_git_config_payload(repo_dir: Path | None = None, *, git_path: str | None = None) -> dict:
    """Collect raw hook settings from git config.

    Raises:
        CommandExecutionError: When git cannot be run.
    """
    priority_keys = git.git_config_get_all(PRIORITY_KEYS_KEY, repo_dir, git_path=git_path)
    skip_branches = git.git_config_get_all(SKIP_BRANCH_KEY, repo_dir, git_path=git_path)
    return {
        "enabled": git.git_config_get(
            ENABLED_KEY, repo_dir, value_type="bool", git_path=git_path
        ),
        "comment_char": git.git_config_get(COMMENT_CHAR_KEY, repo_dir, git_path=git_path),
        "priority_keys": priority_keys or None,
        "skip_branches": skip_branches or None,
    }


def load_hook_config(repo_dir: Path | None = None, *, git_path: str | None = None) -> HookConfig:
    """Load hook settings, falling back to defaults when they are unusable.

    Configuration problems never block a commit; they are reported as
    warnings and the defaults apply.
    """
    try:
        payload = read_git_config_payload(repo_dir, git_path=git_path)
    except exec_util.CommandExecutionError as exc:
        changemark_log.warning(f"failed to read git config, using defaults: {exc}")
        return HookConfig()
    try:
        return parse_hook_config(payload)
    except ValidationError as exc:
        changemark_log.warning(f"invalid changemark configuration, using defaults: {exc}")
        return HookConfig()
