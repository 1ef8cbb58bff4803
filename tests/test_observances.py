# tests/test_observances.py

import pytest
from datetime import date

from novenacal.core.types import Rank
from novenacal.engines.anchors import build_anchor_table
from novenacal.engines.observances import (
    MAX_ORDINARY_SUNDAY,
    build_observances_for_year,
    liturgical_color,
    ordinal,
    ordinary_time_sundays,
    season_for,
)


@pytest.fixture(scope="module")
def table_2025():
    return build_observances_for_year(2025)


def _ids(table, iso):
    return [o.id for o in table[iso]]


def test_keys_are_sorted_iso_dates(table_2025):
    keys = list(table_2025)
    assert keys == sorted(keys)
    assert all(len(k) == 10 and k.startswith("2025-") for k in keys)


def test_season_markers_2025(table_2025):
    expected = {
        "2025-11-30": "season_advent",
        "2025-12-25": "season_christmas",
        "2025-01-13": "season_ordinary_time_1",
        "2025-03-05": "season_lent",
        "2025-04-20": "season_easter",
        "2025-06-09": "season_ordinary_time_2",
    }
    for iso, marker in expected.items():
        obs = {o.id: o for o in table_2025[iso]}
        assert marker in obs
        assert obs[marker].season_marker is True
        assert obs[marker].rank == Rank.WEEKDAY


def test_markers_sort_below_celebrations(table_2025):
    assert _ids(table_2025, "2025-06-09") == ["mary_mother_of_the_church", "season_ordinary_time_2"]
    assert table_2025["2025-03-05"][0].id == "ash_wednesday"


def test_ordinary_time_numbering_2025(table_2025):
    numbered = dict(ordinary_time_sundays(build_anchor_table(2025)))
    assert numbered[date(2025, 1, 19)] == 2
    assert numbered[date(2025, 3, 2)] == 8
    # continues after Pentecost from the last pre-Lent number
    assert numbered[date(2025, 6, 15)] == 9
    assert numbered[date(2025, 6, 29)] == 11
    assert "ordinary_sunday_2" in _ids(table_2025, "2025-01-19")


def test_ordinary_time_numbering_properties():
    for y in range(1990, 2101):
        anchors = build_anchor_table(y)
        sundays = ordinary_time_sundays(anchors)
        numbers = [n for _, n in sundays]
        dates = [d for d, _ in sundays]
        assert numbers == sorted(set(numbers)), y
        assert dates == sorted(dates)
        assert numbers[0] == 2
        assert max(numbers) <= MAX_ORDINARY_SUNDAY
        before = [n for d, n in sundays if d < anchors["ash_wednesday"]]
        after = [n for d, n in sundays if d > anchors["pentecost"]]
        if before and after:
            assert after[0] == before[-1] + 1
        assert all(d.isoweekday() == 7 for d in dates)


def test_rank_then_title_ordering(table_2025):
    # Peter and Paul falls on a Sunday in 2025
    assert _ids(table_2025, "2025-06-29") == ["peter_and_paul", "ordinary_sunday_11"]
    obs = table_2025["2025-06-29"]
    assert obs[0].rank == Rank.SOLEMNITY
    assert obs[0].color == "red"
    assert obs[1].color == "green"


def test_seasonal_sundays(table_2025):
    assert "lent_sunday_1" in _ids(table_2025, "2025-03-09")
    lent_4 = {o.id: o for o in table_2025["2025-03-30"]}["lent_sunday_4"]
    assert lent_4.color == "rose"
    advent_3 = {o.id: o for o in table_2025["2025-12-14"]}["advent_sunday_3"]
    assert advent_3.color == "rose"
    assert "easter_sunday_2" in _ids(table_2025, "2025-04-27")
    assert "easter_sunday_7" in _ids(table_2025, "2025-06-01")
    assert "palm_sunday" in _ids(table_2025, "2025-04-13")


def test_triduum(table_2025):
    for iso, id in (("2025-04-17", "holy_thursday"), ("2025-04-18", "good_friday"),
                    ("2025-04-19", "holy_saturday"), ("2025-04-20", "easter_sunday")):
        first = table_2025[iso][0]
        assert first.id == id
        assert first.rank == Rank.TRIDUUM


def test_movable_catalogue_entries(table_2025):
    assert "pentecost" in _ids(table_2025, "2025-06-08")
    assert "sacred_heart" in _ids(table_2025, "2025-06-27")
    assert "christ_king" in _ids(table_2025, "2025-11-23")
    assert "holy_family" in _ids(table_2025, "2025-12-28")
    assert "baptism_of_the_lord" in _ids(table_2025, "2025-01-12")


def test_no_duplicate_ids_per_day(table_2025):
    for obs in table_2025.values():
        ids = [o.id for o in obs]
        assert len(ids) == len(set(ids))
        keys = [o.sort_key() for o in obs]
        assert keys == sorted(keys)


def test_empty_catalogue_keeps_generated_entries():
    table = build_observances_for_year(2025, catalogue=())
    assert _ids(table, "2025-06-29") == ["ordinary_sunday_11"]


@pytest.mark.parametrize("day, expected", [
    (date(2025, 1, 1), "Christmas"),
    (date(2025, 1, 12), "Christmas"),
    (date(2025, 1, 13), "Ordinary Time"),
    (date(2025, 3, 4), "Ordinary Time"),
    (date(2025, 3, 5), "Lent"),
    (date(2025, 4, 19), "Lent"),
    (date(2025, 4, 20), "Easter"),
    (date(2025, 6, 8), "Easter"),
    (date(2025, 6, 9), "Ordinary Time"),
    (date(2025, 11, 29), "Ordinary Time"),
    (date(2025, 11, 30), "Advent"),
    (date(2025, 12, 24), "Advent"),
    (date(2025, 12, 25), "Christmas"),
])
def test_season_boundaries(day, expected):
    assert season_for(day) == expected


def test_colors_and_ordinals():
    assert liturgical_color("Lent") == "violet"
    assert liturgical_color("Ordinary Time") == "green"
    assert liturgical_color("Unknown") is None
    assert ordinal(1) == "First"
    assert ordinal(34) == "Thirty-fourth"


def test_ordinary_time_numbering_stops_at_34():
    """A wide Ordinary Time window would run past 34; numbering stops there."""
    anchors = {
        "baptism_of_the_lord": date(2025, 1, 5),
        "ash_wednesday": date(2025, 3, 12),
        "pentecost": date(2025, 5, 4),
        "advent_1": date(2025, 12, 7),
    }
    sundays = ordinary_time_sundays(anchors)
    numbers = [n for _, n in sundays]
    # Jan 12 .. Mar 9 is 2..10, so May 11 continues at 11
    assert dict(sundays)[date(2025, 3, 9)] == 10
    assert dict(sundays)[date(2025, 5, 11)] == 11
    assert numbers == list(range(2, MAX_ORDINARY_SUNDAY + 1))
    assert sundays[-1] == (date(2025, 10, 19), 34)
    # Sundays Oct 26 .. Nov 30 still lie inside the window but are not emitted
    assert date(2025, 10, 26) not in dict(sundays)
