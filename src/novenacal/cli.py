from __future__ import annotations

import argparse
import importlib
import inspect
import json
import logging
import re
import sys


_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def _configure_logging(verbose: bool) -> None:
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root = logging.getLogger("novenacal")
    root.handlers[:] = [handler]
    root.setLevel(logging.DEBUG if verbose else logging.INFO)


def _run_module_main(modpath: str, argv: list[str]) -> int:
    """
    Import module and run its main().

    Supports:
      - main(argv: list[str] | None = None) -> int|None
      - main() -> int|None
    """
    mod = importlib.import_module(modpath)
    if not hasattr(mod, "main"):
        raise SystemExit(f"Module {modpath} has no main()")
    fn = getattr(mod, "main")

    sig = inspect.signature(fn)
    if len(sig.parameters) == 0:
        rv = fn()
    else:
        rv = fn(argv)
    return int(rv or 0)


def cmd_easter(argv: list[str]) -> int:
    import novenacal

    p = argparse.ArgumentParser(prog="novenacal easter", description="Date of Easter Sunday")
    p.add_argument("year", type=int, nargs="+")
    args = p.parse_args(argv)

    for y in args.year:
        print(novenacal.easter(y).isoformat())
    return 0


def cmd_anchors(argv: list[str]) -> int:
    import novenacal

    p = argparse.ArgumentParser(prog="novenacal anchors", description="All named anchors for a year")
    p.add_argument("year", type=int)
    p.add_argument("--json", action="store_true")
    args = p.parse_args(argv)

    table = novenacal.anchor_table(args.year).iso()
    if args.json:
        print(json.dumps(table, indent=2))
        return 0
    w = max(len(k) for k in table)
    for key, iso in table.items():
        print(f"{key.ljust(w)}  {iso}")
    return 0


def cmd_resolve(argv: list[str]) -> int:
    import novenacal
    from novenacal.engines.codec import rule_from_dict

    p = argparse.ArgumentParser(prog="novenacal resolve", description="Resolve one rule (JSON) for a year")
    p.add_argument("year", type=int)
    p.add_argument("rule", help='e.g. \'{"type": "anchor", "anchor": "pentecost"}\'')
    p.add_argument("--feast-rule", default=None, help="feast rule (JSON), for before_feast rules without an anchor")
    args = p.parse_args(argv)

    try:
        raw_rule = json.loads(args.rule)
        raw_feast = json.loads(args.feast_rule) if args.feast_rule else None
    except ValueError as e:
        print(f"novenacal: error: rule is not valid JSON: {e}", file=sys.stderr)
        return 2

    rule = rule_from_dict(raw_rule)
    feast = rule_from_dict(raw_feast) if raw_feast is not None else None
    print(novenacal.resolve_rule(rule, args.year, feast_rule=feast).isoformat())
    return 0


def cmd_novenas(argv: list[str]) -> int:
    import novenacal
    from novenacal.engines.codec import instance_to_dict, load_novena_index

    p = argparse.ArgumentParser(prog="novenacal novenas", description="Resolve a novena index for a year")
    p.add_argument("year", type=int)
    p.add_argument("--index", default=None, help="novena index JSON (default: bundled sample)")
    p.add_argument("--json", action="store_true")
    args = p.parse_args(argv)

    defs = load_novena_index(args.index) if args.index else novenacal.default_novenas()
    batch = novenacal.novenas_for_year(args.year, defs)

    if args.json:
        print(json.dumps({
            "year": batch.year,
            "novenas": [instance_to_dict(i) for i in batch.instances],
            "failures": [{"id": f.id, "error": str(f.error)} for f in batch.failures],
        }, indent=2, ensure_ascii=False))
    else:
        for inst in batch.instances:
            flag = "" if inst.start_hint is None or inst.hint_accepted else "  (start hint discarded)"
            print(f"{inst.start_date}  ->  {inst.feast_date}  {inst.duration_days:3d}d  {inst.title}{flag}")
        for f in batch.failures:
            print(f"FAILED  {f.id}: {f.error}", file=sys.stderr)
    return 0 if batch.ok else 1


def cmd_observances(argv: list[str]) -> int:
    import novenacal

    p = argparse.ArgumentParser(prog="novenacal observances", description="Observances of a year by date")
    p.add_argument("year", type=int)
    p.add_argument("--month", type=int, default=None)
    p.add_argument("--json", action="store_true")
    args = p.parse_args(argv)

    table = novenacal.observances_for_year(args.year)
    if args.month is not None:
        prefix = f"{args.year:04d}-{args.month:02d}-"
        table = {k: v for k, v in table.items() if k.startswith(prefix)}

    if args.json:
        print(json.dumps({
            k: [{"id": o.id, "title": o.title, "rank": o.rank.label, "color": o.color,
                 "season": o.season, "seasonMarker": o.season_marker} for o in v]
            for k, v in table.items()
        }, indent=2, ensure_ascii=False))
        return 0

    for key, obs in table.items():
        for o in obs:
            marker = "*" if o.season_marker else " "
            print(f"{key} {marker} {o.rank.label:<17} {(o.color or '-'):<7} {o.title}")
    return 0


def cmd_day(argv: list[str]) -> int:
    import novenacal
    from novenacal.core.time import parse_ymd

    p = argparse.ArgumentParser(prog="novenacal day", description="Season and observances of one date")
    p.add_argument("date", help="YYYY-MM-DD")
    p.add_argument("--attr", action="append", default=[], help="attribute name (repeatable)")
    args = p.parse_args(argv)

    try:
        d = parse_ymd(args.date)
    except ValueError as e:
        print(f"novenacal: error: invalid date {args.date!r}: {e}", file=sys.stderr)
        return 2

    info = novenacal.day_info(d, attributes=tuple(args.attr))
    print(f"{info.civil_date}  {info.season}")
    for o in info.observances:
        print(f"  {o.rank.label:<17} {o.title}")
    for k, v in (info.attributes or {}).items():
        print(f"  {k} = {v}")
    return 0


def cmd_parse(argv: list[str]) -> int:
    from novenacal.engines.codec import rule_to_dict
    from novenacal.parsing.text_rules import parse_rule

    p = argparse.ArgumentParser(prog="novenacal parse", description="Parse a scraped date phrase into a rule")
    p.add_argument("text", nargs="+")
    args = p.parse_args(argv)

    print(json.dumps(rule_to_dict(parse_rule(" ".join(args.text)))))
    return 0


def main(argv: list[str] | None = None) -> int:
    from novenacal.core.errors import NovenacalError

    if argv is None:
        argv = sys.argv[1:]

    # Shorthand: `novenacal [-v] YYYY-MM-DD ...`
    i = 0
    while i < len(argv) and argv[i].startswith("-"):
        i += 1
    if i < len(argv) and _DATE_RE.match(argv[i]):
        argv = list(argv[:i]) + ["day"] + list(argv[i:])

    p = argparse.ArgumentParser(prog="novenacal", description="Liturgical anchors, observances and novena dates.")
    p.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    sub = p.add_subparsers(dest="cmd", required=True)

    sub.add_parser("easter", help="Date of Easter Sunday")
    sub.add_parser("anchors", help="All named anchors for a year")
    sub.add_parser("resolve", help="Resolve one rule (JSON) for a year")
    sub.add_parser("novenas", help="Resolve a novena index for a year")
    sub.add_parser("observances", help="Observances of a year by date")
    sub.add_parser("day", help="Season and observances of one date")
    sub.add_parser("parse", help="Parse a scraped date phrase into a rule")

    # diagnostics
    sub.add_parser("easter-table", help="Print Easter and movable anchors over a range of years (diagnostics)")
    sub.add_parser("pretty-month", help="Print a month grid with observances and novenas (diagnostics)")
    sub.add_parser("easter-scatter", help="Scatter plot of Easter dates (needs the diagnostics extra)")

    args, rest = p.parse_known_args(argv)
    _configure_logging(args.verbose)

    commands = {
        "easter": cmd_easter,
        "anchors": cmd_anchors,
        "resolve": cmd_resolve,
        "novenas": cmd_novenas,
        "observances": cmd_observances,
        "day": cmd_day,
        "parse": cmd_parse,
    }
    tool_map = {
        "easter-table": "novenacal.diagnostics.easter_table",
        "pretty-month": "novenacal.diagnostics.pretty_month",
        "easter-scatter": "novenacal.diagnostics.easter_scatter",
    }

    try:
        if args.cmd in commands:
            return commands[args.cmd](rest)
        if args.cmd in tool_map:
            return _run_module_main(tool_map[args.cmd], rest)
    except NovenacalError as e:
        print(f"novenacal: error: {e}", file=sys.stderr)
        return 2

    raise RuntimeError("unreachable")


if __name__ == "__main__":
    raise SystemExit(main())
