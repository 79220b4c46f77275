from __future__ import annotations

import pytest
from hypothesis import given
from hypothesis import strategies as st

from changemark import footer


def test_title_only_message_is_not_a_footer() -> None:
    result = footer.classify_footer(["Bug: 1234"])

    assert result.footer_confirmed is False
    assert result.footer == ()


def test_last_block_of_trailers_is_confirmed() -> None:
    result = footer.classify_footer(
        ["Fix crash", "", "Longer description.", "", "Bug: 1234", "Signed-off-by: A <a@b.c>"]
    )

    assert result.footer_confirmed is True
    assert result.footer == ("Bug: 1234", "Signed-off-by: A <a@b.c>")
    assert [segment.lines for segment in result.body] == [
        ("Fix crash",),
        ("Longer description.",),
    ]


def test_prose_line_demotes_block() -> None:
    result = footer.classify_footer(["Fix crash", "", "Bug: 1234", "and some prose"])

    assert result.footer_confirmed is False


def test_url_line_is_not_a_trailer() -> None:
    result = footer.classify_footer(["Fix crash", "", "https://example.com/bug/1"])

    assert result.footer_confirmed is False


def test_bracketed_continuation_stays_in_footer() -> None:
    message = [
        "Fix crash",
        "",
        "Bug: 1234",
        "[Reviewed-on: first line",
        "continuation without a key",
        "",
        "still inside the bracket]",
        "Signed-off-by: A <a@b.c>",
    ]

    result = footer.classify_footer(message)

    assert result.footer_confirmed is True
    assert result.footer[0] == "Bug: 1234"
    assert result.footer[-1] == "Signed-off-by: A <a@b.c>"
    assert "" in result.footer


def test_bracket_outside_footer_does_not_open_continuation() -> None:
    result = footer.classify_footer(["Fix crash", "prose", "[Key: value", "", "Bug: 1234"])

    assert result.footer_confirmed is True
    assert result.footer == ("Bug: 1234",)


def test_leading_blank_lines_do_not_promote_title() -> None:
    result = footer.classify_footer(["", "", "Bug: 1234"])

    assert result.footer_confirmed is False
    assert result.segments[0] == footer.Segment(lines=(), blank_after=2)


@pytest.mark.parametrize("lines", [[], [""], ["", ""]])
def test_empty_message_yields_no_footer(lines: list[str]) -> None:
    result = footer.classify_footer(lines)

    assert result.is_empty
    assert result.footer_confirmed is False


line_strategy = st.one_of(
    st.just(""),
    st.sampled_from(["Bug: 1234", "Test: ran it", "[Key: open", "close]", "http://x", "Title"]),
    st.text(alphabet="abcXYZ:-[] 0123", min_size=1, max_size=12).map(str.rstrip).filter(bool),
)


@given(st.lists(line_strategy, max_size=20))
def test_segments_reconstruct_input(lines: list[str]) -> None:
    result = footer.classify_footer(lines)

    assert footer.render_segments(result.segments) == lines


def test_bracket_on_first_line_of_block_is_not_a_continuation() -> None:
    result = footer.classify_footer(["Title", "", "[Ref: some", "more text]"])

    assert result.footer_confirmed is False
    assert result.segments[-1].lines == ("[Ref: some", "more text]")


def test_bracket_after_blank_in_footer_does_not_carry_over() -> None:
    result = footer.classify_footer(
        ["Title", "", "Bug: 1234", "", "[Reviewed-on: first", "second]"]
    )

    assert result.footer_confirmed is False
