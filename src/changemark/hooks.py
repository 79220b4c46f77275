"""Installation of the managed ``commit-msg`` hook script."""

from __future__ import annotations

from pathlib import Path

from . import exec as exec_util
from . import git
from .errors import IoFailedError

COMMIT_MSG_MARKER = "CHANGEMARK-MANAGED-COMMIT-MSG"
HOOK_NAME = "commit-msg"
LEGACY_HOOK_NAME = "commit-msg.changemark-legacy"
MANAGED_COMMIT_MSG_HOOK = f"""#!/bin/sh
# {COMMIT_MSG_MARKER}
set -eu

HOOK_DIR="$(CDPATH= cd -- "$(dirname -- "$0")" && pwd)"
LEGACY_HOOK="$HOOK_DIR/{LEGACY_HOOK_NAME}"

if [ -x "$LEGACY_HOOK" ]; then
  "$LEGACY_HOOK" "$@" || exit $?
fi

if ! command -v changemark >/dev/null 2>&1; then
  echo "changemark commit-msg hook: 'changemark' command not found in PATH." >&2
  exit 1
fi

if [ "$#" -lt 1 ]; then
  echo "changemark commit-msg hook expected a commit message file path." >&2
  exit 1
fi

exec changemark commit-msg "$1"
"""


def is_managed_hook(path: Path) -> bool:
    if not path.exists():
        return False
    try:
        return COMMIT_MSG_MARKER in path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError):
        return False


def install_commit_msg_hook(
    hooks_dir: Path,
    *,
    force: bool = False,
) -> Path:
    """Install the managed hook into ``hooks_dir``.

    An existing unmanaged hook is moved aside to ``commit-msg.changemark-legacy``
    and run first by the managed script.

    Args:
        hooks_dir: Target hooks directory.
        force: Replace an existing legacy hook file.

    Returns:
        Path of the installed hook.

    Raises:
        IoFailedError: When the hook cannot be written, or a legacy hook
            already exists and ``force`` is not set.
    """
    hook_path = hooks_dir / HOOK_NAME
    legacy_path = hooks_dir / LEGACY_HOOK_NAME
    try:
        hooks_dir.mkdir(parents=True, exist_ok=True)
        if hook_path.exists() and not is_managed_hook(hook_path):
            if legacy_path.exists() and not force:
                raise IoFailedError(
                    f"refusing to overwrite existing {legacy_path}",
                    recovery_hint="re-run with --force to replace it",
                )
            hook_path.replace(legacy_path)
        hook_path.write_text(MANAGED_COMMIT_MSG_HOOK, encoding="utf-8")
        hook_path.chmod(0o755)
    except OSError as exc:
        raise IoFailedError(f"failed to install {hook_path}: {exc}") from exc
    return hook_path


def install_for_repo(
    repo_dir: Path | None = None, *, force: bool = False, git_path: str | None = None
) -> Path:
    """Resolve the repository hooks directory and install the hook there."""
    try:
        hooks_dir = git.git_hooks_dir(repo_dir, git_path=git_path)
    except exec_util.CommandExecutionError as exc:
        raise IoFailedError(
            f"cannot locate git hooks directory: {exc}",
            recovery_hint="run inside a git repository or pass --repo",
        ) from exc
    return install_commit_msg_hook(hooks_dir, force=force)
