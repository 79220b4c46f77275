from __future__ import annotations

import pytest

from changemark import title
from changemark.errors import TitleTooLongError


def test_title_at_soft_limit_passes_silently() -> None:
    result = title.check_title("x" * 80)

    assert result.ok
    assert result.warning is None


@pytest.mark.parametrize("length", [81, 95, 100])
def test_title_between_limits_warns(length: int) -> None:
    result = title.check_title("x" * length)

    assert not result.ok
    assert result.warning is not None
    assert str(length) in result.warning


def test_title_over_hard_limit_raises() -> None:
    with pytest.raises(TitleTooLongError) as excinfo:
        title.check_title("x" * 101)

    assert excinfo.value.code == "title_too_long"
    assert excinfo.value.length == 101
    assert excinfo.value.limit == 100


def test_custom_limits_are_honoured() -> None:
    assert title.check_title("x" * 51, warn_length=50, max_length=72).warning
    with pytest.raises(TitleTooLongError):
        title.check_title("x" * 73, warn_length=50, max_length=72)
