"""
novenacal.parsing.text_rules
----------------------------
Heuristic phrase -> Rule parser for scraped "Starts:" / "Feast:" texts.

Recognised shapes:
    "June 29"                               fixed
    "nine days before the feastday"         before_feast (anchor borrowed from the feast rule)
    "Pentecost"                             anchor (known anchor names only)
    "3 days before Ash Wednesday"           relative
    "10 days after Easter"                  relative
    "Saturday after Ascension Thursday"     nth_weekday_after (n=1)
    "second Sunday after Easter"            nth_weekday_after
    "the Sunday 9 days before Christmas"    relative, snapped on-or-before
    "Friday before Palm Sunday"             relative, snapped on-or-before

Anything else becomes a RawRule so the gap surfaces at resolution time.
"""

from __future__ import annotations

import re
from datetime import date
from typing import Collection, Dict, Optional

from ..core.time import WEEKDAY_NAMES
from ..core.types import (
    AnchorRule,
    BeforeFeastRule,
    FixedRule,
    MAX_DURATION_DAYS,
    NovenaDefinition,
    NthWeekdayAfterRule,
    RawRule,
    RelativeRule,
    Rule,
)
from ..engines.specs import ALL_ANCHORS

MONTHS: Dict[str, int] = {
    "january": 1, "february": 2, "march": 3, "april": 4, "may": 5, "june": 6,
    "july": 7, "august": 8, "september": 9, "october": 10, "november": 11, "december": 12,
}

WEEKDAYS: Dict[str, int] = {name: i for i, name in enumerate(WEEKDAY_NAMES)}

NUMBER_WORDS: Dict[str, int] = {
    "one": 1, "two": 2, "three": 3, "four": 4, "five": 5, "six": 6, "seven": 7,
    "eight": 8, "nine": 9, "ten": 10, "eleven": 11, "twelve": 12, "thirty": 30, "forty": 40,
}

ORDINAL_WORDS: Dict[str, int] = {
    "first": 1, "second": 2, "third": 3, "fourth": 4, "fifth": 5,
    "1st": 1, "2nd": 2, "3rd": 3, "4th": 4, "5th": 5,
}

# scraped phrase (snake-cased) -> anchor key
ANCHOR_ALIASES: Dict[str, str] = {
    "easter_sunday": "easter",
    "ascension": "ascension_thursday",
    "ascension_day": "ascension_thursday",
    "the_ascension": "ascension_thursday",
    "pentecost_sunday": "pentecost",
    "holy_trinity": "trinity_sunday",
    "most_holy_trinity": "trinity_sunday",
    "sacred_heart_of_jesus": "sacred_heart",
    "most_sacred_heart_of_jesus": "sacred_heart",
    "immaculate_heart_of_mary": "immaculate_heart",
    "divine_mercy": "divine_mercy_sunday",
    "christ_the_king": "christ_king",
    "first_sunday_of_advent": "advent_1",
    "christmas_day": "christmas",
    "ash_wed": "ash_wednesday",
    "maundy_thursday": "holy_thursday",
}

_NUM = r"(\d+|" + "|".join(NUMBER_WORDS) + r")"
_WD = r"(" + "|".join(WEEKDAY_NAMES) + r")"
_ORD = r"(" + "|".join(ORDINAL_WORDS) + r")"

_RE_MONTH_DAY = re.compile(r"^([a-z]+)\s+(\d{1,2})(?:st|nd|rd|th)?$")
_RE_BEFORE_FEAST = re.compile(r"^" + _NUM + r"\s+days?\s+before\s+(?:the\s+)?feast(?:\s*day)?$")
_RE_WD_DAYS_BEFORE = re.compile(r"^(?:the\s+)?" + _WD + r"\s+" + _NUM + r"\s+days?\s+before\s+(.+)$")
_RE_DAYS_BEFORE = re.compile(r"^" + _NUM + r"\s+days?\s+before\s+(.+)$")
_RE_DAYS_AFTER = re.compile(r"^" + _NUM + r"\s+days?\s+after\s+(.+)$")
_RE_NTH_WD_AFTER = re.compile(r"^(?:the\s+)?(?:" + _ORD + r"\s+)?" + _WD + r"\s+after\s+(.+)$")
_RE_WD_BEFORE = re.compile(r"^(?:the\s+)?" + _WD + r"\s+before\s+(.+)$")


def to_snake_case_id(s: str) -> str:
    s = s.lower().replace("’", "").replace("'", "").replace("&", " and ")
    return re.sub(r"[^a-z0-9]+", "_", s).strip("_")


def normalize_title(raw: str) -> str:
    return re.sub(r"\s+novena$", "", raw.strip(), flags=re.IGNORECASE).strip()


def _number(tok: str) -> int:
    return int(tok) if tok.isdigit() else NUMBER_WORDS[tok]


def anchor_key(phrase: str) -> str:
    """Snake-case a phrase naming an anchor and apply known aliases."""
    key = to_snake_case_id(phrase)
    for prefix in ("the_", "feast_of_the_", "feast_of_", "solemnity_of_the_", "solemnity_of_"):
        if key.startswith(prefix) and key not in ANCHOR_ALIASES:
            key = key[len(prefix):]
    return ANCHOR_ALIASES.get(key, key)


def _clean(text: str) -> str:
    t = re.sub(r"\s+", " ", text.strip().lower())
    return t.rstrip(".")


def parse_rule(text: str, *, known_anchors: Optional[Collection[str]] = None) -> Rule:
    if known_anchors is None:
        known_anchors = ALL_ANCHORS
    t = _clean(text)

    m = _RE_BEFORE_FEAST.match(t)
    if m:
        return BeforeFeastRule(days_before=_number(m.group(1)))

    m = _RE_MONTH_DAY.match(t)
    if m and m.group(1) in MONTHS:
        day = int(m.group(2))
        if 1 <= day <= 31:
            return FixedRule(MONTHS[m.group(1)], day)

    m = _RE_WD_DAYS_BEFORE.match(t)
    if m:
        return RelativeRule(
            anchor=anchor_key(m.group(3)),
            offset_days=-_number(m.group(2)),
            weekday=WEEKDAYS[m.group(1)],
            weekday_policy="on_or_before",
        )

    m = _RE_DAYS_BEFORE.match(t)
    if m:
        return RelativeRule(anchor=anchor_key(m.group(2)), offset_days=-_number(m.group(1)))

    m = _RE_DAYS_AFTER.match(t)
    if m:
        return RelativeRule(anchor=anchor_key(m.group(2)), offset_days=_number(m.group(1)))

    m = _RE_NTH_WD_AFTER.match(t)
    if m:
        n = ORDINAL_WORDS[m.group(1)] if m.group(1) else 1
        return NthWeekdayAfterRule(anchor=anchor_key(m.group(3)), weekday=WEEKDAYS[m.group(2)], n=n)

    m = _RE_WD_BEFORE.match(t)
    if m:
        # "Friday before X": the last Friday strictly before X
        return RelativeRule(anchor=anchor_key(m.group(2)), offset_days=-1,
                            weekday=WEEKDAYS[m.group(1)], weekday_policy="on_or_before")

    key = anchor_key(t)
    if key in known_anchors:
        return AnchorRule(key)

    return RawRule(text.strip())


def derive_duration_days(start_rule: Optional[Rule], feast_rule: Rule) -> Optional[int]:
    """Inclusive span implied by the two rules, when it does not depend on the year."""
    if isinstance(start_rule, BeforeFeastRule):
        return start_rule.days_before

    if isinstance(start_rule, FixedRule) and isinstance(feast_rule, FixedRule):
        # 2025 is a common year; Feb 29 cannot be measured this way
        y = 2025
        try:
            start = date(y, start_rule.month, start_rule.day)
            wraps = (feast_rule.month, feast_rule.day) < (start_rule.month, start_rule.day)
            feast = date(y + 1 if wraps else y, feast_rule.month, feast_rule.day)
        except ValueError:
            return None
        diff = (feast - start).days
        if 0 <= diff < MAX_DURATION_DAYS:
            return diff + 1

    return None


def compute_category(title: str) -> str:
    t = title.lower()
    if "our lady" in t or "mary" in t:
        return "Marian"
    if "holy" in t or "sacred" in t:
        return "Feast"
    if "saint" in t or t.startswith("st ") or t.startswith("st. "):
        return "Saint"
    return "Devotion"


def definition_from_scrape(
    title: str,
    start_text: str,
    feast_text: str,
    *,
    source_url: Optional[str] = None,
) -> NovenaDefinition:
    """Build a definition from one scraped "Starts: ... / Feast: ..." pair."""
    title = normalize_title(title)
    start_rule = parse_rule(start_text)
    feast_rule = parse_rule(feast_text)
    category = compute_category(title)
    return NovenaDefinition(
        id=to_snake_case_id(title),
        title=title,
        feast_rule=feast_rule,
        start_rule=start_rule,
        duration_days=derive_duration_days(start_rule, feast_rule),
        category=category,
        tags=tuple(dict.fromkeys(("Novena", category, title))),
        source_url=source_url,
    )
