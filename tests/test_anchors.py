# tests/test_anchors.py

import pytest
from datetime import date, timedelta

from novenacal.core.errors import InvalidRuleParameterError, UnknownAnchorError
from novenacal.engines.anchors import (
    AnchorOffsetAnchor,
    EasterOffsetAnchor,
    FixedAnchor,
    build_anchor_table,
    resolve_anchor,
)
from novenacal.engines.computus import easter_sunday
from novenacal.engines.specs import ALL_ANCHORS, EASTER_OFFSETS


REQUIRED_KEYS = [
    "easter", "good_friday", "holy_thursday", "holy_saturday", "ash_wednesday", "shrove_tuesday",
    "palm_sunday", "divine_mercy_sunday", "ascension_thursday", "ascension_sunday", "pentecost",
    "trinity_sunday", "corpus_christi", "corpus_christi_sunday", "sacred_heart", "immaculate_heart",
    "christmas", "christmas_eve", "mary_mother_of_god", "epiphany", "baptism_of_the_lord",
    "holy_family", "advent_1", "christ_king",
]


def test_reference_keys_present():
    table = build_anchor_table(2025)
    for key in REQUIRED_KEYS:
        assert key in table


def test_easter_offsets_match_computus():
    for y in range(1990, 2061):
        table = build_anchor_table(y)
        easter = easter_sunday(y)
        for key, offset in EASTER_OFFSETS.items():
            assert table[key] == easter + timedelta(days=offset), (key, y)


def test_reference_offsets():
    assert EASTER_OFFSETS["ash_wednesday"] == -46
    assert EASTER_OFFSETS["shrove_tuesday"] == -47
    assert EASTER_OFFSETS["good_friday"] == -2
    assert EASTER_OFFSETS["ascension_thursday"] == 39
    assert EASTER_OFFSETS["pentecost"] == 49
    assert EASTER_OFFSETS["corpus_christi"] == 60
    assert EASTER_OFFSETS["corpus_christi_sunday"] == 63
    assert EASTER_OFFSETS["sacred_heart"] == 68
    assert EASTER_OFFSETS["immaculate_heart"] == 69


def test_anchor_table_2025():
    t = build_anchor_table(2025)
    assert t["easter"] == date(2025, 4, 20)
    assert t["ash_wednesday"] == date(2025, 3, 5)
    assert t["pentecost"] == date(2025, 6, 8)
    assert t["sacred_heart"] == date(2025, 6, 27)
    assert t["baptism_of_the_lord"] == date(2025, 1, 12)
    assert t["holy_family"] == date(2025, 12, 28)
    assert t["advent_1"] == date(2025, 11, 30)
    assert t["christ_king"] == date(2025, 11, 23)


def test_holy_family_falls_back_to_dec_30_when_christmas_is_sunday():
    # Christmas 2022 is a Sunday: no Sunday in Dec 26..31
    assert build_anchor_table(2022)["holy_family"] == date(2022, 12, 30)


def test_baptism_is_strictly_after_epiphany():
    # Jan 6 2019 is a Sunday
    assert build_anchor_table(2019)["baptism_of_the_lord"] == date(2019, 1, 13)


def test_advent_starts_on_nov_27_when_it_is_a_sunday():
    assert build_anchor_table(2022)["advent_1"] == date(2022, 11, 27)


def test_searched_anchors_are_sundays():
    for y in range(1990, 2061):
        t = build_anchor_table(y)
        for key in ("holy_family", "baptism_of_the_lord", "advent_1", "christ_king"):
            if key == "holy_family" and t[key] == date(y, 12, 30) and date(y, 12, 25).isoweekday() == 7:
                continue
            assert t[key].isoweekday() == 7, (key, y)


def test_unknown_anchor_raises_named_error():
    table = build_anchor_table(2025)
    with pytest.raises(UnknownAnchorError) as ei:
        table["nonexistent_key"]
    assert ei.value.key == "nonexistent_key"
    assert ei.value.year == 2025
    assert "nonexistent_key" in str(ei.value)


def test_unknown_anchor_is_a_key_error():
    table = build_anchor_table(2025)
    assert table.get("nonexistent_key") is None
    assert "nonexistent_key" not in table


def test_resolve_anchor_single_lookup():
    assert resolve_anchor("good_friday", 2024) == date(2024, 3, 29)
    with pytest.raises(UnknownAnchorError):
        resolve_anchor("nope", 2024)


def test_custom_definitions_with_dependencies():
    defs = {
        "feast": AnchorOffsetAnchor(base="easter", offset_days=3),
        "easter": EasterOffsetAnchor(0),
        "new_year": FixedAnchor(1, 1),
    }
    t = build_anchor_table(2025, defs)
    assert t["feast"] == date(2025, 4, 23)
    assert len(t) == 3
    assert t.year == 2025


def test_missing_base_and_cycles_fail_loudly():
    with pytest.raises(UnknownAnchorError):
        build_anchor_table(2025, {"x": AnchorOffsetAnchor(base="missing", offset_days=1)})
    cyc = {
        "a": AnchorOffsetAnchor(base="b", offset_days=1),
        "b": AnchorOffsetAnchor(base="a", offset_days=1),
    }
    with pytest.raises(InvalidRuleParameterError):
        build_anchor_table(2025, cyc)


def test_table_is_read_only_and_stable():
    t1 = build_anchor_table(2030)
    t2 = build_anchor_table(2030)
    assert dict(t1) == dict(t2)
    with pytest.raises(TypeError):
        t1["easter"] = date(2030, 1, 1)
    assert set(ALL_ANCHORS) == set(t1)
