"""
novenacal.engines.computus
--------------------------
Gregorian Easter computus. Every movable anchor is an offset from the
date computed here.
"""

from __future__ import annotations
from datetime import date

from novenacal.core.errors import InvalidRuleParameterError

MIN_YEAR = 1
MAX_YEAR = 9999


def easter_sunday(year: int) -> date:
    """
    Date of Easter Sunday in the proleptic Gregorian calendar.

    Anonymous Gregorian algorithm (Meeus/Jones/Butcher); integer arithmetic
    only. Years outside 1..9999 are refused rather than wrapped.
    """
    if isinstance(year, bool) or not isinstance(year, int):
        raise TypeError(f"year must be an int, got {type(year).__name__}")
    if not (MIN_YEAR <= year <= MAX_YEAR):
        raise InvalidRuleParameterError(f"year must be {MIN_YEAR}..{MAX_YEAR}", year=year)

    a = year % 19
    b, c = divmod(year, 100)
    d, e = divmod(b, 4)
    f = (b + 8) // 25
    g = (b - f + 1) // 3
    h = (19 * a + b - d - g + 15) % 30
    i, k = divmod(c, 4)
    l = (32 + 2 * e + 2 * i - h - k) % 7  # noqa: E741
    m = (a + 11 * h + 22 * l) // 451
    month, day0 = divmod(h + l - 7 * m + 114, 31)
    return date(year, month, day0 + 1)
