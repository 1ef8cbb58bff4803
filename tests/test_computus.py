# tests/test_computus.py

import pytest
from datetime import date

from novenacal.core.errors import InvalidRuleParameterError
from novenacal.engines.computus import easter_sunday


@pytest.mark.parametrize("year, expected", [
    (2024, date(2024, 3, 31)),
    (2025, date(2025, 4, 20)),
    (2000, date(2000, 4, 23)),
    (1900, date(1900, 4, 15)),
    (2019, date(2019, 4, 21)),
    (2026, date(2026, 4, 5)),
    (2027, date(2027, 3, 28)),
    (2008, date(2008, 3, 23)),
    (2011, date(2011, 4, 24)),
])
def test_known_easter_dates(year, expected):
    assert easter_sunday(year) == expected


def test_extreme_dates():
    # earliest possible (Mar 22) and latest possible (Apr 25)
    assert easter_sunday(1818) == date(1818, 3, 22)
    assert easter_sunday(2285) == date(2285, 3, 22)
    assert easter_sunday(1943) == date(1943, 4, 25)
    assert easter_sunday(2038) == date(2038, 4, 25)


def test_always_a_sunday_in_window():
    for y in range(1583, 4100):
        d = easter_sunday(y)
        assert d.isoweekday() == 7
        assert date(y, 3, 22) <= d <= date(y, 4, 25)


@pytest.mark.parametrize("year", [0, -5, 10000])
def test_out_of_range_years_raise(year):
    with pytest.raises(InvalidRuleParameterError):
        easter_sunday(year)


@pytest.mark.parametrize("year", [2025.0, "2025", True])
def test_non_integer_year_raises(year):
    with pytest.raises(TypeError):
        easter_sunday(year)
