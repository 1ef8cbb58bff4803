"""
novenacal.engines.anchors
-------------------------
Named liturgical anchors and the per-year anchor table.

An anchor definition is pure data describing where an anchor falls; the
table is the concrete date of every anchor for one year. The table is
built once per year and handed to every rule resolution in that year.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import date
from typing import Dict, Iterator, Mapping as MappingT, Optional, Tuple

from novenacal.core.engine import AnchorDefinition
from novenacal.core.errors import InvalidRuleParameterError, UnknownAnchorError
from novenacal.core.time import SUNDAY, add_days, next_weekday, weekday_of
from novenacal.engines.computus import easter_sunday

logger = logging.getLogger(__name__)


# ============================================================
# Definition kinds
# ============================================================

@dataclass(frozen=True)
class FixedAnchor:
    month: int
    day: int
    depends_on: Tuple[str, ...] = ()

    def resolve(self, year: int, easter: date, resolved: MappingT[str, date]) -> date:
        return date(year, self.month, self.day)


@dataclass(frozen=True)
class EasterOffsetAnchor:
    offset_days: int
    depends_on: Tuple[str, ...] = ()

    def resolve(self, year: int, easter: date, resolved: MappingT[str, date]) -> date:
        return add_days(easter, self.offset_days)


@dataclass(frozen=True)
class SundayInWindowAnchor:
    """First Sunday in month/first_day..last_day, else month/fallback_day."""
    month: int
    first_day: int
    last_day: int
    fallback_day: int
    depends_on: Tuple[str, ...] = ()

    def resolve(self, year: int, easter: date, resolved: MappingT[str, date]) -> date:
        for day in range(self.first_day, self.last_day + 1):
            d = date(year, self.month, day)
            if weekday_of(d) == SUNDAY:
                return d
        return date(year, self.month, self.fallback_day)


@dataclass(frozen=True)
class WeekdayAfterAnchor:
    """`weekday` after month/day; on the day itself only if inclusive."""
    month: int
    day: int
    weekday: int = SUNDAY
    inclusive: bool = False
    depends_on: Tuple[str, ...] = ()

    def resolve(self, year: int, easter: date, resolved: MappingT[str, date]) -> date:
        return next_weekday(date(year, self.month, self.day), self.weekday, include_same_day=self.inclusive)


@dataclass(frozen=True)
class AnchorOffsetAnchor:
    """Offset from another anchor of the same year."""
    base: str
    offset_days: int

    @property
    def depends_on(self) -> Tuple[str, ...]:
        return (self.base,)

    def resolve(self, year: int, easter: date, resolved: MappingT[str, date]) -> date:
        if self.base not in resolved:
            raise UnknownAnchorError(self.base, year=year)
        return add_days(resolved[self.base], self.offset_days)


# ============================================================
# Per-year table
# ============================================================

class AnchorTable(Mapping):
    """Read-only anchor key -> date mapping for one year.

    Lookups of missing keys raise UnknownAnchorError (a KeyError), so
    `key in table` and `table.get(key)` keep their usual meaning.
    """

    def __init__(self, year: int, dates: MappingT[str, date]):
        self._year = year
        self._dates: Dict[str, date] = dict(dates)

    @property
    def year(self) -> int:
        return self._year

    def __getitem__(self, key: str) -> date:
        try:
            return self._dates[key]
        except KeyError:
            raise UnknownAnchorError(key, year=self._year) from None

    def __iter__(self) -> Iterator[str]:
        return iter(self._dates)

    def __len__(self) -> int:
        return len(self._dates)

    def __repr__(self) -> str:
        return f"AnchorTable(year={self._year}, anchors={len(self._dates)})"

    def iso(self) -> Dict[str, str]:
        return {k: v.isoformat() for k, v in sorted(self._dates.items(), key=lambda kv: (kv[1], kv[0]))}


def _resolve_order(definitions: MappingT[str, AnchorDefinition], year: int) -> Tuple[str, ...]:
    """Dependency order (bases before dependents); unknown bases and cycles raise."""
    order = []
    state: Dict[str, int] = {}  # 1 = visiting, 2 = done

    def visit(key: str, chain: Tuple[str, ...]) -> None:
        if state.get(key) == 2:
            return
        if state.get(key) == 1:
            raise InvalidRuleParameterError(f"Anchor cycle: {' -> '.join(chain + (key,))}", year=year)
        if key not in definitions:
            raise UnknownAnchorError(key, year=year)
        state[key] = 1
        for dep in definitions[key].depends_on:
            visit(dep, chain + (key,))
        state[key] = 2
        order.append(key)

    for key in definitions:
        visit(key, ())
    return tuple(order)


def build_anchor_table(year: int, definitions: Optional[MappingT[str, AnchorDefinition]] = None) -> AnchorTable:
    """Evaluate every anchor definition once for `year`."""
    if definitions is None:
        from novenacal.engines.specs import ALL_ANCHORS
        definitions = ALL_ANCHORS

    easter = easter_sunday(year)
    resolved: Dict[str, date] = {}
    for key in _resolve_order(definitions, year):
        resolved[key] = definitions[key].resolve(year, easter, resolved)

    logger.debug("Built anchor table for %d (%d anchors, easter=%s)", year, len(resolved), easter)
    return AnchorTable(year, resolved)


def resolve_anchor(key: str, year: int, definitions: Optional[MappingT[str, AnchorDefinition]] = None) -> date:
    """Single-anchor convenience. Batch callers should build the table once instead."""
    return build_anchor_table(year, definitions)[key]
