from __future__ import annotations
from typing import Any, Dict

from ..core.time import WEEKDAY_NAMES, weekday_of
from ..engines.anchors import build_anchor_table
from ..engines.observances import liturgical_color
from .registry import register_attribute

def weekday(info) -> Dict[str, Any]:
    # Convention: 0=Sun..6=Sat, same as rule weekdays.
    wd = weekday_of(info.civil_date)
    return {"weekday": wd, "weekday_name": WEEKDAY_NAMES[wd]}

def lectionary(info) -> Dict[str, Any]:
    """Liturgical year (named by the year Advent starts) and its reading cycles."""
    d = info.civil_date
    lit_year = d.year if d >= build_anchor_table(d.year)["advent_1"] else d.year - 1
    return {
        "liturgical_year": lit_year,
        "sunday_cycle": "ABC"[lit_year % 3],
        # Year I in odd civil years, counted from the January of the liturgical year
        "weekday_cycle": "I" if (lit_year + 1) % 2 == 1 else "II",
    }

def color(info) -> Dict[str, Any]:
    for obs in info.observances:
        if obs.color is not None and not obs.season_marker:
            return {"color": obs.color}
    return {"color": liturgical_color(info.season)}

register_attribute("weekday", weekday)
register_attribute("lectionary", lectionary)
register_attribute("color", color)
