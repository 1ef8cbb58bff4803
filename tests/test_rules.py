# tests/test_rules.py

import pytest
from datetime import date, timedelta

from novenacal.core.errors import (
    InvalidRuleParameterError,
    UnknownAnchorError,
    UnresolvableRuleError,
)
from novenacal.core.types import (
    AnchorRule,
    BeforeFeastRule,
    FixedRule,
    NthWeekdayAfterRule,
    RawRule,
    RelativeRule,
)
from novenacal.engines.anchors import build_anchor_table
from novenacal.engines.rules import ResolutionContext, align_to_weekday, resolve, resolve_iso


@pytest.fixture(scope="module")
def anchors_2025():
    return build_anchor_table(2025)


def test_fixed_and_anchor(anchors_2025):
    assert resolve(FixedRule(6, 29), 2025, anchors_2025) == date(2025, 6, 29)
    assert resolve(AnchorRule("pentecost"), 2025, anchors_2025) == date(2025, 6, 8)
    assert resolve_iso(AnchorRule("easter"), 2025, anchors_2025) == "2025-04-20"


def test_fixed_feb_29():
    assert resolve(FixedRule(2, 29), 2024, build_anchor_table(2024)) == date(2024, 2, 29)
    with pytest.raises(InvalidRuleParameterError) as ei:
        resolve(FixedRule(2, 29), 2025, build_anchor_table(2025))
    assert ei.value.year == 2025


def test_relative_without_snap(anchors_2025):
    assert resolve(RelativeRule("easter", -9), 2025, anchors_2025) == date(2025, 4, 11)
    assert resolve(RelativeRule("easter", 10), 2025, anchors_2025) == date(2025, 4, 30)


def test_relative_snap_policy_is_explicit(anchors_2025):
    # Pentecost 2025 is Sunday Jun 8; +1 is Monday Jun 9
    after = RelativeRule("pentecost", 1, weekday=0)
    before = RelativeRule("pentecost", 1, weekday=0, weekday_policy="on_or_before")
    assert resolve(after, 2025, anchors_2025) == date(2025, 6, 15)
    assert resolve(before, 2025, anchors_2025) == date(2025, 6, 8)


def test_relative_snap_on_or_before_negative_offset(anchors_2025):
    rule = RelativeRule("easter", -9, weekday=0, weekday_policy="on_or_before")
    assert resolve(rule, 2025, anchors_2025) == date(2025, 4, 6)


def test_snap_is_idempotent_on_target_weekday():
    sunday = date(2025, 6, 15)
    assert align_to_weekday(sunday, 0, "on_or_after") == sunday
    assert align_to_weekday(sunday, 0, "on_or_before") == sunday
    with pytest.raises(InvalidRuleParameterError):
        align_to_weekday(sunday, 0, "nearest")


def test_nth_weekday_after(anchors_2025):
    assert resolve(NthWeekdayAfterRule("easter", 0, 1), 2025, anchors_2025) == date(2025, 4, 27)
    assert resolve(NthWeekdayAfterRule("easter", 0, 2), 2025, anchors_2025) == date(2025, 5, 4)
    # Ascension 2025 is Thursday May 29
    assert resolve(NthWeekdayAfterRule("ascension_thursday", 6), 2025, anchors_2025) == date(2025, 5, 31)
    assert resolve(NthWeekdayAfterRule("ascension_thursday", 4), 2025, anchors_2025) == date(2025, 6, 5)


def test_nth_weekday_after_never_returns_anchor():
    for y in range(2000, 2041):
        table = build_anchor_table(y)
        for key in ("easter", "ascension_thursday", "christmas", "epiphany"):
            anchor = table[key]
            for wd in range(7):
                d = resolve(NthWeekdayAfterRule(key, wd, 1), y, table)
                assert timedelta(days=1) <= d - anchor <= timedelta(days=7)
                assert d.isoweekday() % 7 == wd


def test_before_feast_borrows_anchor_from_feast_rule():
    """Nine-day inclusive span ending on the feast: 21, 22, ..., 29."""
    anchors = {"peter_and_paul": date(2025, 6, 29)}
    ctx = ResolutionContext(feast_rule=AnchorRule("peter_and_paul"))
    assert resolve(BeforeFeastRule(9), 2025, anchors, ctx) == date(2025, 6, 21)


def test_before_feast_with_explicit_anchor(anchors_2025):
    assert resolve(BeforeFeastRule(9, anchor="sacred_heart"), 2025, anchors_2025) == date(2025, 6, 19)
    assert resolve(BeforeFeastRule(1, anchor="sacred_heart"), 2025, anchors_2025) == date(2025, 6, 27)


@pytest.mark.parametrize("ctx", [
    None,
    ResolutionContext(),
    ResolutionContext(feast_rule=FixedRule(6, 29)),
    ResolutionContext(feast_rule=RelativeRule("easter", 68)),
])
def test_before_feast_without_anchor_fails(anchors_2025, ctx):
    with pytest.raises(InvalidRuleParameterError):
        resolve(BeforeFeastRule(9), 2025, anchors_2025, ctx)


def test_unknown_anchor_never_defaults(anchors_2025):
    with pytest.raises(UnknownAnchorError) as ei:
        resolve(AnchorRule("nonexistent_key"), 2025, anchors_2025)
    assert ei.value.rule == AnchorRule("nonexistent_key")
    assert ei.value.year == 2025


def test_unknown_anchor_in_plain_dict():
    with pytest.raises(UnknownAnchorError) as ei:
        resolve(RelativeRule("missing", 3), 2025, {"easter": date(2025, 4, 20)})
    assert ei.value.key == "missing"


def test_raw_rule_is_unresolvable(anchors_2025):
    with pytest.raises(UnresolvableRuleError) as ei:
        resolve(RawRule("First Friday of Lent"), 2025, anchors_2025)
    assert "First Friday of Lent" in str(ei.value)


def test_unknown_rule_type_is_type_error(anchors_2025):
    with pytest.raises(TypeError):
        resolve("pentecost", 2025, anchors_2025)


def test_resolution_is_deterministic(anchors_2025):
    rules = [
        FixedRule(12, 8),
        AnchorRule("advent_1"),
        RelativeRule("christmas", -9, weekday=0, weekday_policy="on_or_before"),
        NthWeekdayAfterRule("pentecost", 5, 2),
        BeforeFeastRule(9, anchor="christ_king"),
    ]
    for rule in rules:
        assert resolve(rule, 2025, anchors_2025) == resolve(rule, 2025, build_anchor_table(2025))


@pytest.mark.parametrize("make", [
    lambda: FixedRule(13, 1),
    lambda: FixedRule(1, 0),
    lambda: AnchorRule(""),
    lambda: RelativeRule("easter", 1.5),
    lambda: RelativeRule("easter", 1, weekday=7),
    lambda: RelativeRule("easter", 1, weekday=True),
    lambda: RelativeRule("easter", 1, weekday=0, weekday_policy="nearest"),
    lambda: NthWeekdayAfterRule("easter", 0, 0),
    lambda: NthWeekdayAfterRule("easter", -1, 1),
    lambda: BeforeFeastRule(0),
])
def test_malformed_rules_rejected_on_construction(make):
    with pytest.raises(InvalidRuleParameterError):
        make()
