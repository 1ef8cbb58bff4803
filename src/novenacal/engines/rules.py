"""
novenacal.engines.rules
-----------------------
The rule interpreter: (rule, year, anchor table) -> calendar date.

Dispatch is exhaustive over the Rule union; anything else is a TypeError.
Nothing here catches and continues: every failure is a hard stop for the
single date being computed, raised with the rule and year attached.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Mapping, Optional

from novenacal.core.errors import (
    InvalidRuleParameterError,
    NovenacalError,
    UnknownAnchorError,
    UnresolvableRuleError,
)
from novenacal.core.time import add_days, next_weekday, prev_weekday, weekday_of
from novenacal.core.types import (
    AnchorRule,
    BeforeFeastRule,
    FixedRule,
    NthWeekdayAfterRule,
    RawRule,
    RelativeRule,
    Rule,
)


@dataclass(frozen=True)
class ResolutionContext:
    """Extra input for rules defined relative to the feast they precede."""
    feast_rule: Optional[Rule] = None


def _anchor_date(key: str, year: int, anchors: Mapping[str, date]) -> date:
    try:
        return anchors[key]
    except UnknownAnchorError:
        raise
    except KeyError:
        # plain dict tables
        raise UnknownAnchorError(key, year=year) from None


def align_to_weekday(base: date, weekday: int, policy: str = "on_or_after") -> date:
    """Snap to `weekday`; a date already on that weekday does not move."""
    if policy == "on_or_after":
        return next_weekday(base, weekday, include_same_day=True)
    if policy == "on_or_before":
        return prev_weekday(base, weekday, include_same_day=True)
    raise InvalidRuleParameterError(f"Unknown weekday policy {policy!r}")


def nth_weekday_after(anchor: date, weekday: int, n: int) -> date:
    """n-th `weekday` strictly after `anchor`, scanning day by day."""
    d = add_days(anchor, 1)
    count = 0
    while True:
        if weekday_of(d) == weekday:
            count += 1
            if count == n:
                return d
        d = add_days(d, 1)


def _resolve(rule: Rule, year: int, anchors: Mapping[str, date], context: Optional[ResolutionContext]) -> date:
    if isinstance(rule, FixedRule):
        try:
            return date(year, rule.month, rule.day)
        except ValueError as e:
            raise InvalidRuleParameterError(f"No such date: {e}") from None

    if isinstance(rule, AnchorRule):
        return _anchor_date(rule.anchor, year, anchors)

    if isinstance(rule, RelativeRule):
        moved = add_days(_anchor_date(rule.anchor, year, anchors), rule.offset_days)
        if rule.weekday is None:
            return moved
        return align_to_weekday(moved, rule.weekday, rule.weekday_policy)

    if isinstance(rule, NthWeekdayAfterRule):
        return nth_weekday_after(_anchor_date(rule.anchor, year, anchors), rule.weekday, rule.n)

    if isinstance(rule, BeforeFeastRule):
        key = rule.anchor
        if key is None:
            feast_rule = context.feast_rule if context is not None else None
            if not isinstance(feast_rule, AnchorRule):
                raise InvalidRuleParameterError(
                    "before_feast requires an anchor, or a feast rule of type 'anchor' to borrow one from"
                )
            # re-resolve the key for this year rather than reusing a feast date
            key = feast_rule.anchor
        return add_days(_anchor_date(key, year, anchors), -(rule.days_before - 1))

    if isinstance(rule, RawRule):
        raise UnresolvableRuleError(f"Unparsed rule text cannot be resolved: {rule.text!r}")

    raise TypeError(f"Unknown rule type: {type(rule).__name__}")


def resolve(
    rule: Rule,
    year: int,
    anchors: Mapping[str, date],
    context: Optional[ResolutionContext] = None,
) -> date:
    """Resolve `rule` to a date in (or, for anchors, around) `year`."""
    try:
        return _resolve(rule, year, anchors, context)
    except NovenacalError as e:
        raise e.with_context(rule=rule, year=year)


def resolve_iso(
    rule: Rule,
    year: int,
    anchors: Mapping[str, date],
    context: Optional[ResolutionContext] = None,
) -> str:
    return resolve(rule, year, anchors, context).isoformat()
