"""
novenacal.engines.observances
-----------------------------
One civil year of observances, keyed by ISO date.

Season boundaries, numbered Sundays of every season and the named
celebrations of the catalogue are all placed from a single anchor table
for the year. The Ordinary Time count runs across the Lent/Easter gap:
the first numbered Sunday after Pentecost continues from the last one
before Ash Wednesday.
"""

from __future__ import annotations

from datetime import date
from typing import Dict, List, Mapping, Optional, Sequence, Tuple

from novenacal.core.time import SUNDAY, add_days, next_weekday, sundays_between
from novenacal.core.types import Observance, Rank
from novenacal.engines.anchors import build_anchor_table
from novenacal.engines.rules import resolve
from novenacal.engines.specs import OBSERVANCE_CATALOGUE, ObservanceSpec

MAX_ORDINARY_SUNDAY = 34

SEASON_COLORS: Dict[str, str] = {
    "Advent": "violet",
    "Christmas": "white",
    "Lent": "violet",
    "Easter": "white",
    "Ordinary Time": "green",
}

ORDINALS = (
    "First", "Second", "Third", "Fourth", "Fifth", "Sixth", "Seventh", "Eighth", "Ninth", "Tenth",
    "Eleventh", "Twelfth", "Thirteenth", "Fourteenth", "Fifteenth", "Sixteenth", "Seventeenth",
    "Eighteenth", "Nineteenth", "Twentieth", "Twenty-first", "Twenty-second", "Twenty-third",
    "Twenty-fourth", "Twenty-fifth", "Twenty-sixth", "Twenty-seventh", "Twenty-eighth",
    "Twenty-ninth", "Thirtieth", "Thirty-first", "Thirty-second", "Thirty-third", "Thirty-fourth",
)


def ordinal(n: int) -> str:
    return ORDINALS[n - 1] if 1 <= n <= len(ORDINALS) else f"{n}th"


def liturgical_color(season: str) -> Optional[str]:
    return SEASON_COLORS.get(season)


def season_for(day: date, anchors: Optional[Mapping[str, date]] = None) -> str:
    """Season containing `day`. Christmas runs Dec 25 through the Baptism of the Lord."""
    if anchors is None:
        anchors = build_anchor_table(day.year)

    if day >= anchors["christmas"]:
        return "Christmas"
    if day >= anchors["advent_1"]:
        return "Advent"
    if day > anchors["pentecost"]:
        return "Ordinary Time"
    if day >= anchors["easter"]:
        return "Easter"
    if day >= anchors["ash_wednesday"]:
        return "Lent"
    if day <= anchors["baptism_of_the_lord"]:
        return "Christmas"
    return "Ordinary Time"


class _Collector:
    def __init__(self, anchors: Mapping[str, date]):
        self.anchors = anchors
        self.by_date: Dict[date, List[Observance]] = {}

    def add(self, d: date, id: str, title: str, rank: Rank, color: Optional[str] = None,
            *, season_marker: bool = False) -> None:
        season = season_for(d, self.anchors)
        obs = Observance(
            id=id,
            title=title,
            rank=rank,
            color=color if color is not None else liturgical_color(season),
            season=season,
            season_marker=season_marker,
        )
        self.by_date.setdefault(d, []).append(obs)

    def table(self) -> Dict[str, Tuple[Observance, ...]]:
        out: Dict[str, Tuple[Observance, ...]] = {}
        for d in sorted(self.by_date):
            seen = set()
            kept = []
            for obs in self.by_date[d]:
                if obs.id in seen:
                    continue
                seen.add(obs.id)
                kept.append(obs)
            out[d.isoformat()] = tuple(sorted(kept, key=Observance.sort_key))
        return out


def _season_markers(c: _Collector) -> None:
    a = c.anchors
    markers = (
        (a["advent_1"], "season_advent", "Season of Advent begins"),
        (a["christmas"], "season_christmas", "Christmas Season begins"),
        (add_days(a["baptism_of_the_lord"], 1), "season_ordinary_time_1", "Ordinary Time resumes"),
        (a["ash_wednesday"], "season_lent", "Season of Lent begins"),
        (a["easter"], "season_easter", "Easter Season begins"),
        (add_days(a["pentecost"], 1), "season_ordinary_time_2", "Ordinary Time resumes"),
    )
    for d, id, title in markers:
        c.add(d, id, title, Rank.WEEKDAY, season_marker=True)


def _seasonal_sundays(c: _Collector) -> None:
    a = c.anchors
    for k in range(4):
        n = k + 1
        c.add(add_days(a["advent_1"], 7 * k), f"advent_sunday_{n}", f"{ordinal(n)} Sunday of Advent",
              Rank.SUNDAY, "rose" if n == 3 else "violet")

    lent_1 = next_weekday(a["ash_wednesday"], SUNDAY)
    for k in range(5):
        n = k + 1
        c.add(add_days(lent_1, 7 * k), f"lent_sunday_{n}", f"{ordinal(n)} Sunday of Lent",
              Rank.SUNDAY, "rose" if n == 4 else "violet")

    for n in range(2, 8):
        c.add(add_days(a["easter"], 7 * (n - 1)), f"easter_sunday_{n}", f"{ordinal(n)} Sunday of Easter",
              Rank.SUNDAY, "white")


def ordinary_time_sundays(anchors: Mapping[str, date]) -> List[Tuple[date, int]]:
    """Numbered Sundays in Ordinary Time for the anchor table's year, in date order."""
    out: List[Tuple[date, int]] = []

    n = 1  # the Baptism of the Lord closes the first week
    for d in sundays_between(add_days(anchors["baptism_of_the_lord"], 1), anchors["ash_wednesday"]):
        n += 1
        if n > MAX_ORDINARY_SUNDAY:
            break
        out.append((d, n))

    for d in sundays_between(add_days(anchors["pentecost"], 1), anchors["advent_1"]):
        n += 1
        if n > MAX_ORDINARY_SUNDAY:
            break
        out.append((d, n))
    return out


def _catalogue(c: _Collector, year: int, catalogue: Sequence[ObservanceSpec]) -> None:
    for spec in catalogue:
        d = resolve(spec.rule, year, c.anchors)
        c.add(d, spec.id, spec.title, spec.rank, spec.color)


def build_observances_for_year(
    year: int,
    *,
    anchors: Optional[Mapping[str, date]] = None,
    catalogue: Sequence[ObservanceSpec] = OBSERVANCE_CATALOGUE,
) -> Dict[str, Tuple[Observance, ...]]:
    """ISO date -> observances, highest rank first, then by title."""
    if anchors is None:
        anchors = build_anchor_table(year)

    c = _Collector(anchors)
    _season_markers(c)
    _seasonal_sundays(c)
    for d, n in ordinary_time_sundays(anchors):
        c.add(d, f"ordinary_sunday_{n}", f"{ordinal(n)} Sunday in Ordinary Time", Rank.SUNDAY, "green")
    _catalogue(c, year, catalogue)
    return c.table()
