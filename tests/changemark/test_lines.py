from __future__ import annotations

import pytest

from changemark import lines


def test_normalize_lines_drops_comments_and_trailing_whitespace() -> None:
    raw = ["Fix crash \t", "# Please enter the commit message", "", "Details here.  "]

    assert lines.normalize_lines(raw) == ["Fix crash", "", "Details here."]


def test_normalize_lines_stops_at_diff_marker() -> None:
    raw = [
        "Fix crash",
        "",
        "Bug: 1234",
        "diff --git a/main.c b/main.c",
        "Change-Id: Ideadbeef",
        "+int main(void) {}",
    ]

    assert lines.normalize_lines(raw) == ["Fix crash", "", "Bug: 1234"]


def test_normalize_lines_honours_custom_comment_char() -> None:
    raw = ["; comment", "#include is not a comment here", "Title"]

    assert lines.normalize_lines(raw, ";") == ["#include is not a comment here", "Title"]


def test_normalize_lines_keeps_indented_comment_marker() -> None:
    assert lines.normalize_lines(["  # quoted"]) == ["  # quoted"]


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ([], None),
        (["", "  ", "Title", "body"], "Title"),
        (["Title"], "Title"),
    ],
)
def test_subject_line(raw: list[str], expected: str | None) -> None:
    assert lines.subject_line(raw) == expected


def test_render_message_drops_trailing_blank_lines() -> None:
    assert lines.render_message(["Title", "", "body", "", ""]) == "Title\n\nbody\n"
    assert lines.render_message(["", ""]) == ""


def test_clean_message_removes_sign_offs_and_extra_blank_lines() -> None:
    raw = [
        "",
        "Fix crash",
        "",
        "",
        "Details.",
        "# comment",
        "Signed-off-by: A U Thor <author@example.com>",
        "",
    ]

    assert lines.clean_message(raw) == "Fix crash\n\nDetails.\n"
