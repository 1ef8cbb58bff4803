# tests/test_diagnostics.py

from datetime import date
from unittest.mock import patch

import pytest

from novenacal.diagnostics import easter_scatter
from novenacal.diagnostics.easter_table import mmdd, parse_columns
from novenacal.diagnostics.pretty_month import rank_mark
from novenacal.core.types import DayInfo, Observance, Rank


def test_days_after_equinox():
    assert easter_scatter.days_after_equinox(date(2285, 3, 22)) == 1
    assert easter_scatter.days_after_equinox(date(2038, 4, 25)) == 35


def test_scatter_needs_numpy():
    with patch.dict("sys.modules", {"numpy": None}):
        with pytest.raises(RuntimeError, match="diagnostics"):
            easter_scatter._need_numpy()


def test_series_with_numpy():
    np = pytest.importorskip("numpy")
    years, y = easter_scatter.build_series(np, "easter", 2024, 2025)
    assert list(years) == [2024, 2025]
    assert list(y) == [10.0, 30.0]
    assert easter_scatter.histogram(np, y) == {10: 1, 30: 1}


def test_table_helpers():
    assert mmdd(date(2025, 4, 20)) == "04-20"
    assert parse_columns(" easter, pentecost ,,") == ["easter", "pentecost"]


def test_rank_mark():
    d = date(2025, 6, 29)
    assert rank_mark(DayInfo(d, "Ordinary Time")) == ""
    assert rank_mark(DayInfo(d, "Ordinary Time", (Observance("x", "X", Rank.SOLEMNITY),))) == "S"
    assert rank_mark(DayInfo(d, "Ordinary Time", (Observance("m", "M", Rank.WEEKDAY, season_marker=True),))) == "*"
