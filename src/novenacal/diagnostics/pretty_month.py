from __future__ import annotations

from datetime import date, timedelta
import calendar as pycal
import argparse

import novenacal
from novenacal.core.time import weekday_of
from novenacal.core.types import DayInfo
from novenacal.engines.novena import active_novenas
from novenacal.engines.observances import season_for


def dow_header() -> str:
    return "Su     Mo     Tu     We     Th     Fr     Sa"


def cell(top: str, bot: str, w: int = 6) -> tuple[str, str]:
    return (top[:w].ljust(w), bot[:w].ljust(w))


def print_grid(title: str, weeks: list[list[tuple[str, str]]]) -> None:
    print(title)
    print(dow_header())
    print("-" * len(dow_header()))
    for wk in weeks:
        print(" ".join(c[0] for c in wk))
        print(" ".join(c[1] for c in wk))
    print()


def rank_mark(info) -> str:
    """One-letter mark for the highest-ranked observance of the day."""
    if not info.observances:
        return ""
    top = info.observances[0]
    if top.season_marker:
        return "*"
    return {
        "TRIDUUM": "T",
        "SOLEMNITY": "S",
        "SUNDAY": "",
        "FEAST": "F",
        "MEMORIAL": "m",
        "OPTIONAL_MEMORIAL": "o",
    }.get(top.rank.name, "")


def month_calendar(gy: int, gm: int) -> None:
    first = date(gy, gm, 1)
    last = date(gy, gm, pycal.monthrange(gy, gm)[1])

    table = novenacal.observances_for_year(gy)
    novenas = novenacal.novenas_for_year(gy).instances
    anchors = novenacal.anchor_table(gy)

    days = []
    notes = []
    d = first
    while d <= last:
        obs = table.get(d.isoformat(), ())
        info = DayInfo(d, season_for(d, anchors), obs)
        top = f"{d.day:2d}{rank_mark(info)}"
        running = active_novenas(novenas, d)
        bot = f"n{len(running)}" if running else ""
        days.append((d, top, bot))
        for o in obs:
            if not o.season_marker:
                notes.append(f"{d.isoformat()}  {o.rank.label:<17} {o.title}")
        d += timedelta(days=1)

    weeks: list[list[tuple[str, str]]] = []
    wk: list[tuple[str, str]] = []
    pad = weekday_of(first)  # Sunday=0
    for _ in range(pad):
        wk.append(cell("", ""))
    for _, top, bot in days:
        wk.append(cell(top, bot))
        if len(wk) == 7:
            weeks.append(wk)
            wk = []
    if wk:
        while len(wk) < 7:
            wk.append(cell("", ""))
        weeks.append(wk)

    print_grid(f"Gregorian month  {gy}-{gm:02d}   (S solemnity, F feast, m memorial, nK = K novenas running)", weeks)
    for line in notes:
        print(line)


def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser(
        description="Print a Gregorian month grid marked with observance ranks and running novenas."
    )
    p.add_argument("--greg", nargs=2, type=int, metavar=("GY", "GM"),
                   help="Gregorian month to print: GY GM (e.g. 2026 6)")
    args = p.parse_args(argv)

    if not args.greg:
        today = date.today()
        month_calendar(today.year, today.month)
        return 0

    gy, gm = args.greg
    month_calendar(gy, gm)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
