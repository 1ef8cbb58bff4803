from __future__ import annotations
from datetime import date, timedelta

# Weekdays on the wire: 0=Sun .. 6=Sat
SUNDAY = 0
MONDAY = 1
THURSDAY = 4
SATURDAY = 6

WEEKDAY_NAMES = ("sunday", "monday", "tuesday", "wednesday", "thursday", "friday", "saturday")


def add_days(d: date, days: int) -> date:
    return d + timedelta(days=days)


def days_between(a: date, b: date) -> int:
    """Signed whole days from a to b."""
    return (b - a).days


def weekday_of(d: date) -> int:
    """Weekday with Sunday=0 (isoweekday has Monday=1 .. Sunday=7)."""
    return d.isoweekday() % 7


def next_weekday(d: date, weekday: int, include_same_day: bool = False) -> date:
    """Move forward to `weekday`; stays put on a match only if include_same_day."""
    delta = (weekday - weekday_of(d)) % 7
    if delta == 0 and not include_same_day:
        delta = 7
    return add_days(d, delta)


def prev_weekday(d: date, weekday: int, include_same_day: bool = False) -> date:
    """Move backward to `weekday`; stays put on a match only if include_same_day."""
    delta = (weekday_of(d) - weekday) % 7
    if delta == 0 and not include_same_day:
        delta = 7
    return add_days(d, -delta)


def to_iso(d: date) -> str:
    return d.isoformat()


def parse_ymd(s: str) -> date:
    y, m, d = map(int, s.split("-"))
    return date(y, m, d)


def sundays_between(first: date, stop: date):
    """Yield Sundays d with first <= d < stop."""
    d = next_weekday(first, SUNDAY, include_same_day=True)
    while d < stop:
        yield d
        d = add_days(d, 7)
