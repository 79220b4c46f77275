"""Stage orchestration for the ``commit-msg`` hook.

Stages run in order over the message file: skip checks, title guard,
``Change-Id`` injection, bug tag fixup. Each stage that changes the message
writes it back before the next stage starts; a stage that changes nothing
leaves the file byte-for-byte intact.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from typing import Literal

from . import change_id as change_id_util
from . import lines as lines_util
from . import log as changemark_log
from . import skip, tags, title
from .errors import ChangeIdUnavailableError, IoFailedError
from .footer import classify_footer
from .models import HookConfig

SkipReason = Literal["disabled", "empty", "autosquash", "packaging_branch"]


@dataclass(frozen=True)
class HookOutcome:
    """What the hook did to a message."""

    skipped: SkipReason | None = None
    change_id: str | None = None
    tags_fixed: bool = False
    title_warning: str | None = None

    @property
    def modified(self) -> bool:
        return self.change_id is not None or self.tags_fixed


def read_message(path: Path) -> str:
    """Read the message file, keeping bytes that are not UTF-8 as surrogates.

    Messages written with a legacy ``i18n.commitEncoding`` round-trip through
    :func:`write_message` unchanged.
    """
    try:
        return path.read_text(encoding="utf-8", errors="surrogateescape")
    except OSError as exc:
        raise IoFailedError(f"failed to read commit message file: {exc}") from exc


def write_message(path: Path, text: str) -> None:
    try:
        path.write_text(text, encoding="utf-8", errors="surrogateescape")
    except OSError as exc:
        raise IoFailedError(f"failed to write commit message file: {exc}") from exc


def add_change_id(
    text: str,
    config: HookConfig,
    source: change_id_util.ChangeIdSource,
) -> tuple[str, str | None]:
    """Return ``text`` with a ``Change-Id`` trailer and the identifier used.

    The identifier is ``None`` (and ``text`` is returned as is) when the
    message already has one or is empty after cleanup.

    Raises:
        ChangeIdUnavailableError: When the metadata source fails.
    """
    raw_lines = lines_util.split_message(text)
    normalized = lines_util.normalize_lines(raw_lines, config.comment_char)
    if not lines_util.has_text(normalized):
        return text, None
    if change_id_util.has_change_id(normalized):
        changemark_log.debug("Change-Id already present")
        return text, None

    cleaned = lines_util.clean_message(raw_lines, config.comment_char)
    identifier = change_id_util.compute_change_id(source.change_id_input(cleaned))
    classified = classify_footer(normalized)
    updated = change_id_util.inject_change_id(classified, identifier, config.priority_keys)
    return lines_util.render_message(updated), identifier


def fix_bug_tags(text: str, config: HookConfig, *, relocate: bool = True) -> tuple[str, bool]:
    """Return ``text`` with normalized bug tags and whether anything changed."""
    normalized = lines_util.normalize_lines(lines_util.split_message(text), config.comment_char)
    fixed = tags.fix_tags(normalized, relocate=relocate)
    if lines_util.render_message(fixed) == lines_util.render_message(normalized):
        return text, False
    return lines_util.render_message(fixed), True


def check_skip(
    text: str,
    config: HookConfig,
    *,
    branch_lookup: Callable[[], str | None],
) -> SkipReason | None:
    """Return why the message must be left alone, if it must."""
    if not config.enabled:
        return "disabled"
    normalized = lines_util.normalize_lines(lines_util.split_message(text), config.comment_char)
    subject = lines_util.subject_line(normalized)
    if subject is None:
        return "empty"
    if skip.is_autosquash_subject(subject):
        return "autosquash"
    if skip.is_packaging_branch(branch_lookup(), config.skip_branches):
        return "packaging_branch"
    return None


def run_commit_msg_hook(
    path: Path,
    config: HookConfig,
    *,
    source: change_id_util.ChangeIdSource,
    branch_lookup: Callable[[], str | None],
) -> HookOutcome:
    """Run every stage against the message file at ``path``.

    Args:
        path: Commit message file passed to the hook by git.
        config: Hook settings.
        source: Metadata source for the change identifier.
        branch_lookup: Returns the current branch name, if any.

    Returns:
        A ``HookOutcome`` describing what happened.

    Raises:
        TitleTooLongError: Before any write, when the subject is too long.
        ChangeIdUnavailableError: After tag fixup has been applied, when the
            identifier could not be computed.
        IoFailedError: When the message file cannot be read or written.
    """
    text = read_message(path)
    reason = check_skip(text, config, branch_lookup=branch_lookup)
    if reason is not None:
        changemark_log.debug(f"skipping commit message processing: {reason}")
        return HookOutcome(skipped=reason)

    normalized = lines_util.normalize_lines(lines_util.split_message(text), config.comment_char)
    subject = lines_util.subject_line(normalized) or ""
    title_check = title.check_title(
        subject,
        warn_length=config.title_warn_length,
        max_length=config.title_max_length,
    )
    if title_check.warning:
        changemark_log.warning(title_check.warning)

    # An amended message keeps the trailer layout it already has.
    had_change_id = change_id_util.has_change_id(normalized)

    identifier: str | None = None
    unavailable: ChangeIdUnavailableError | None = None
    try:
        updated, identifier = add_change_id(text, config, source)
    except ChangeIdUnavailableError as exc:
        unavailable = exc
        updated = text
    if identifier is not None:
        write_message(path, updated)
        changemark_log.debug(f"added Change-Id: I{identifier}")
        text = updated

    fixed_text, tags_fixed = fix_bug_tags(text, config, relocate=not had_change_id)
    if tags_fixed:
        write_message(path, fixed_text)
        changemark_log.debug("normalized bug tags")

    if unavailable is not None:
        raise unavailable
    return HookOutcome(
        change_id=identifier,
        tags_fixed=tags_fixed,
        title_warning=title_check.warning,
    )
