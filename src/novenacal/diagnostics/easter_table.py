from __future__ import annotations

from datetime import date
import argparse
from typing import List

import novenacal


DEFAULT_COLUMNS: List[str] = [
    "ash_wednesday",
    "easter",
    "ascension_thursday",
    "pentecost",
    "corpus_christi",
    "advent_1",
]


def mmdd(d: date) -> str:
    return f"{d.month:02d}-{d.day:02d}"


def parse_columns(arg: str) -> List[str]:
    """
    Parse anchor column list from CLI.
    Example:
      --anchors "easter,pentecost,holy_family"
    """
    return [x.strip() for x in arg.split(",") if x.strip()]


def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser(
        description="Print a table of Easter and other anchors for a range of years."
    )
    p.add_argument("--from-year", type=int, default=2020)
    p.add_argument("--to-year", type=int, default=2035)
    p.add_argument(
        "--anchors",
        type=str,
        default="",
        help='Comma list of anchor keys (default: "%s").' % ",".join(DEFAULT_COLUMNS),
    )
    p.add_argument(
        "--dates",
        choices=("mmdd", "iso"),
        default="mmdd",
        help="Display format in table columns (default: mmdd).",
    )
    p.add_argument(
        "--list-month",
        type=int,
        default=None,
        help="After the table, list Easter Sundays falling in this month (e.g. 3 for March).",
    )
    args = p.parse_args(argv)

    columns = parse_columns(args.anchors) if args.anchors else DEFAULT_COLUMNS

    def fmt(d: date) -> str:
        return mmdd(d) if args.dates == "mmdd" else d.isoformat()

    Y0, Y1 = args.from_year, args.to_year
    if Y1 < Y0:
        raise SystemExit("--to-year must be >= --from-year")

    headers = ["Year"] + columns
    width = 5 if args.dates == "mmdd" else 10
    colw = [5] + [max(width, len(h)) for h in headers[1:]]
    line = "  ".join(h.ljust(w) for h, w in zip(headers, colw))
    print(line)
    print("-" * len(line))

    hits: list[date] = []
    for Y in range(Y0, Y1 + 1):
        table = novenacal.anchor_table(Y)
        row = [str(Y).ljust(colw[0])]
        for key, w in zip(columns, colw[1:]):
            row.append(fmt(table[key]).ljust(w))
        print("  ".join(row))
        if args.list_month is not None and table["easter"].month == args.list_month:
            hits.append(table["easter"])

    if args.list_month is None:
        return 0

    print(f"\nEaster Sundays in month={args.list_month:02d}:")
    if not hits:
        print("(none)")
        return 0
    for d in hits:
        print(d.isoformat())
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
