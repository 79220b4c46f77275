"""Git helper functions used by the Changemark hook."""

from __future__ import annotations

from pathlib import Path

from . import exec as exec_util
from .change_id import ChangeIdInput
from .errors import ChangeIdUnavailableError

# Exit status git uses for "no such value" in config, symbolic-ref and
# rev-parse --verify --quiet lookups.
_LOOKUP_MISSING = 1


def git_command(
    args: list[str], *, repo_dir: Path | None = None, git_path: str | None = None
) -> list[str]:
    """Build a git command using an optional executable path and directory.

    Example:
        >>> git_command(["write-tree"])
        ['git', 'write-tree']
        >>> git_command(["write-tree"], repo_dir=Path("/repo"), git_path="/usr/bin/git")
        ['/usr/bin/git', '-C', '/repo', 'write-tree']
    """
    resolved = git_path.strip() if isinstance(git_path, str) else ""
    if not resolved:
        resolved = "git"
    prefix = [resolved]
    if repo_dir is not None:
        prefix.extend(["-C", str(repo_dir)])
    return [*prefix, *args]


def _request(
    args: list[str], *, repo_dir: Path | None = None, git_path: str | None = None
) -> exec_util.CommandRequest:
    return exec_util.CommandRequest(argv=tuple(git_command(args, repo_dir=repo_dir, git_path=git_path)))


def _git_value(args: list[str], *, repo_dir: Path | None = None, git_path: str | None = None) -> str:
    return exec_util.read_value(_request(args, repo_dir=repo_dir, git_path=git_path))


def _git_lookup(
    args: list[str], *, repo_dir: Path | None = None, git_path: str | None = None
) -> str | None:
    """Run a lookup and return its stdout, or ``None`` when git reports "not set".

    Raises:
        CommandExecutionError: When git is missing or fails for another reason.
    """
    request = _request(args, repo_dir=repo_dir, git_path=git_path)
    result = exec_util.run_with_runner(request)
    if result is None:
        raise exec_util.missing_command(request)
    if result.returncode == _LOOKUP_MISSING:
        return None
    if result.returncode != 0:
        raise exec_util.command_failed(request, result)
    return result.stdout


def git_write_tree(repo_dir: Path | None = None, *, git_path: str | None = None) -> str:
    """Return the tree hash of the current index.

    Raises:
        CommandExecutionError: When git is missing or the index is unmerged.
    """
    return _git_value(["write-tree"], repo_dir=repo_dir, git_path=git_path)


def git_head_commit(repo_dir: Path | None = None, *, git_path: str | None = None) -> str | None:
    """Return the ``HEAD`` commit hash, or ``None`` on an unborn branch."""
    output = _git_lookup(
        ["rev-parse", "--verify", "--quiet", "HEAD^0"], repo_dir=repo_dir, git_path=git_path
    )
    return (output or "").strip() or None


def git_var(name: str, repo_dir: Path | None = None, *, git_path: str | None = None) -> str:
    """Return a ``git var`` value such as ``GIT_AUTHOR_IDENT``."""
    return _git_value(["var", name], repo_dir=repo_dir, git_path=git_path)


def git_current_branch(repo_dir: Path | None = None, *, git_path: str | None = None) -> str | None:
    """Return the current branch name.

    Returns:
        Branch name or ``None`` when ``HEAD`` is detached or git is unavailable.
    """
    result = exec_util.run_with_runner(
        _request(["symbolic-ref", "--quiet", "--short", "HEAD"], repo_dir=repo_dir, git_path=git_path)
    )
    if result is None or result.returncode != 0:
        return None
    return result.stdout.strip() or None


def git_config_get(
    key: str,
    repo_dir: Path | None = None,
    *,
    value_type: str | None = None,
    git_path: str | None = None,
) -> str | None:
    """Return a single git config value, or ``None`` when unset.

    Raises:
        CommandExecutionError: When git is missing or the lookup fails.
    """
    args = ["config"]
    if value_type:
        args.append(f"--type={value_type}")
    args.extend(["--get", key])
    output = _git_lookup(args, repo_dir=repo_dir, git_path=git_path)
    return None if output is None else output.strip()


def git_config_get_all(
    key: str, repo_dir: Path | None = None, *, git_path: str | None = None
) -> list[str]:
    """Return every value of a multi-valued git config key."""
    output = _git_lookup(["config", "--get-all", key], repo_dir=repo_dir, git_path=git_path)
    if output is None:
        return []
    return [line.strip() for line in output.splitlines() if line.strip()]


def git_hooks_dir(repo_dir: Path | None = None, *, git_path: str | None = None) -> Path:
    """Return the hooks directory, honouring ``core.hooksPath`` and worktrees."""
    path = Path(_git_value(["rev-parse", "--git-path", "hooks"], repo_dir=repo_dir, git_path=git_path))
    if path.is_absolute() or repo_dir is None:
        return path
    return repo_dir / path


class GitChangeIdSource:
    """Resolve change identifier metadata from the repository."""

    def __init__(self, repo_dir: Path | None = None, *, git_path: str | None = None) -> None:
        self.repo_dir = repo_dir
        self.git_path = git_path

    def change_id_input(self, message: str) -> ChangeIdInput:
        try:
            tree = git_write_tree(self.repo_dir, git_path=self.git_path)
            parent = git_head_commit(self.repo_dir, git_path=self.git_path)
            author = git_var("GIT_AUTHOR_IDENT", self.repo_dir, git_path=self.git_path)
            committer = git_var("GIT_COMMITTER_IDENT", self.repo_dir, git_path=self.git_path)
        except exec_util.CommandExecutionError as exc:
            raise ChangeIdUnavailableError(
                f"cannot compute Change-Id: {exc}",
                recovery_hint="check that git is installed and the index has no conflicts",
            ) from exc
        return ChangeIdInput(
            tree=tree,
            parent=parent,
            author=author,
            committer=committer,
            message=message,
        )
