import re
from pathlib import Path
from types import SimpleNamespace
from unittest.mock import patch

from typer.testing import CliRunner

import changemark.cli as cli

ANSI_ESCAPE_RE = re.compile(r"\x1b\[[0-9;]*[A-Za-z]")


def _strip_ansi(output: str) -> str:
    return ANSI_ESCAPE_RE.sub("", output)


def test_commit_msg_passes_message_file() -> None:
    captured: dict[str, object] = {}

    def fake_commit_msg(args: SimpleNamespace) -> None:
        captured["message_file"] = args.message_file
        captured["repo"] = args.repo

    runner = CliRunner()
    with patch("changemark.cli.commit_msg_cmd", fake_commit_msg):
        result = runner.invoke(cli.app, ["commit-msg", ".git/COMMIT_EDITMSG"])

    assert result.exit_code == 0
    assert captured == {"message_file": Path(".git/COMMIT_EDITMSG"), "repo": None}


def test_install_passes_force_flag() -> None:
    captured: dict[str, object] = {}

    def fake_install(args: SimpleNamespace) -> None:
        captured["force"] = args.force

    runner = CliRunner()
    with patch("changemark.cli.install_cmd", fake_install):
        result = runner.invoke(cli.app, ["install", "--force"])

    assert result.exit_code == 0
    assert captured["force"] is True


def test_global_log_level_flag_sets_runtime_level() -> None:
    runner = CliRunner()
    with (
        patch("changemark.cli.install_cmd", lambda _args: None),
        patch("changemark.cli.changemark_log.set_level") as mock_set_level,
    ):
        result = runner.invoke(cli.app, ["--log-level", "debug", "install"])

    assert result.exit_code == 0
    mock_set_level.assert_called_once_with("debug")


def test_global_log_level_rejects_unknown_values() -> None:
    runner = CliRunner()
    result = runner.invoke(cli.app, ["--log-level", "loud", "install"], color=False)
    clean_output = _strip_ansi(result.output)

    assert result.exit_code != 0
    assert "--log-level" in clean_output
    assert "expected one of" in clean_output.lower()


def test_no_color_flag_disables_colorized_output() -> None:
    runner = CliRunner()
    with (
        patch("changemark.cli.install_cmd", lambda _args: None),
        patch("changemark.cli.changemark_log.set_no_color") as mock_set_no_color,
    ):
        result = runner.invoke(cli.app, ["--no-color", "install"])

    assert result.exit_code == 0
    mock_set_no_color.assert_called_once_with(True)
