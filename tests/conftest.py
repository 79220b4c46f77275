# ruff: noqa: E402

import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

import changemark.log as changemark_log


@pytest.fixture(autouse=True)
def _quiet_logging(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(changemark_log, "_configured_level", changemark_log.LogLevel.INFO)
    monkeypatch.setattr(changemark_log, "_no_color_override", True)
