from __future__ import annotations

import pytest

from changemark import tags


@pytest.mark.parametrize(
    ("line", "expected"),
    [
        ("bug:1234", "Bug: 1234"),
        ("BUG:    1234", "Bug: 1234"),
        ("Bug: 1234, 5678", "Bug: 1234, 5678"),
        ("ping-bug:\t55555", "Ping-Bug: 55555"),
        ("Ping-Bug: 55555", "Ping-Bug: 55555"),
    ],
)
def test_format_tag_line(line: str, expected: str) -> None:
    assert tags.classify_tag_line(line) is tags.TagLineKind.TAG
    assert tags.format_tag_line(line) == expected


@pytest.mark.parametrize(
    ("line", "kind"),
    [
        ("", tags.TagLineKind.BLANK),
        ("bug: 123", tags.TagLineKind.TRAILER),
        ("bug: 1) open the app", tags.TagLineKind.TRAILER),
        ("Change-Id: Iabc", tags.TagLineKind.TRAILER),
        ("http://example.com", tags.TagLineKind.TRAILER),
        ("see bug: 12345", tags.TagLineKind.TEXT),
        ("Plain prose.", tags.TagLineKind.TEXT),
    ],
)
def test_classify_tag_line(line: str, kind: tags.TagLineKind) -> None:
    assert tags.classify_tag_line(line) is kind


def test_sole_trailing_tag_gets_leading_blank() -> None:
    assert tags.fix_tags(["Fix crash", "", "Details.", "bug:1234"]) == [
        "Fix crash",
        "",
        "Details.",
        "",
        "Bug: 1234",
    ]


def test_tag_after_blank_line_gains_no_extra_blank() -> None:
    assert tags.fix_tags(["Fix crash", "", "bug:  1234"]) == ["Fix crash", "", "Bug: 1234"]


def test_trailing_blank_lines_after_tags_are_dropped() -> None:
    assert tags.fix_tags(["Fix crash", "", "Bug: 1234", "", ""]) == [
        "Fix crash",
        "",
        "Bug: 1234",
    ]


def test_tags_move_ahead_of_other_trailers() -> None:
    lines = [
        "Fix crash",
        "",
        "Change-Id: Iabc",
        "bug: 1234",
        "",
        "ping-bug: 5678",
        "Signed-off-by: A <a@b.c>",
    ]

    assert tags.fix_tags(lines) == [
        "Fix crash",
        "",
        "Bug: 1234",
        "Ping-Bug: 5678",
        "",
        "Change-Id: Iabc",
        "Signed-off-by: A <a@b.c>",
    ]


def test_tag_followed_by_prose_is_left_alone() -> None:
    lines = [
        "Fix crash",
        "",
        "bug: 12345 was caused by",
        "a race in the frobnicator.",
    ]

    assert tags.fix_tags(lines) == lines


def test_trailing_run_without_tags_is_kept() -> None:
    lines = ["Fix crash", "", "Reviewed-by: R <r@b.c>", "", "Signed-off-by: A <a@b.c>"]

    assert tags.fix_tags(lines) == lines


def test_title_is_never_a_tag() -> None:
    assert tags.fix_tags(["bug: 1234"]) == ["bug: 1234"]


def test_fix_tags_is_stable_on_its_own_output() -> None:
    once = tags.fix_tags(["Fix crash", "body text", "bug:1234", "Change-Id: Iabc"])

    assert once == ["Fix crash", "body text", "", "Bug: 1234", "", "Change-Id: Iabc"]
    assert tags.fix_tags(once) == once


def test_last_line_reference_in_prose_is_rewritten() -> None:
    # Known ambiguity: a reference that ends the message is always a tag.
    assert tags.fix_tags(["Fix crash", "", "Reproduce with", "bug:12345"]) == [
        "Fix crash",
        "",
        "Reproduce with",
        "",
        "Bug: 12345",
    ]


def test_run_opened_by_other_trailer_gets_no_leading_blank() -> None:
    assert tags.fix_tags(["Fix crash", "prose", "Foo: bar", "bug:1234"]) == [
        "Fix crash",
        "prose",
        "Bug: 1234",
        "",
        "Foo: bar",
    ]


def test_without_relocation_tags_are_respelled_in_place() -> None:
    lines = ["Fix crash", "", "Change-Id: Iabc", "bug:  1234", "", "Signed-off-by: A <a@b.c>"]

    assert tags.fix_tags(lines, relocate=False) == [
        "Fix crash",
        "",
        "Change-Id: Iabc",
        "Bug: 1234",
        "",
        "Signed-off-by: A <a@b.c>",
    ]
