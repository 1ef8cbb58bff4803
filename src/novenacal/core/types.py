from __future__ import annotations
from dataclasses import dataclass, field
from datetime import date
from enum import IntEnum
from typing import Any, ClassVar, Dict, Literal, Optional, Tuple, Union

from .errors import InvalidRuleParameterError

WeekdayPolicy = Literal["on_or_after", "on_or_before"]
WEEKDAY_POLICIES = ("on_or_after", "on_or_before")

DEFAULT_DURATION_DAYS = 9
MAX_DURATION_DAYS = 4000


def _check_int(name: str, value: Any, lo: int, hi: Optional[int] = None) -> None:
    # bool is an int subclass; True is not a weekday
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidRuleParameterError(f"{name} must be an integer, got {value!r}")
    if value < lo or (hi is not None and value > hi):
        bound = f"{lo}..{hi}" if hi is not None else f">= {lo}"
        raise InvalidRuleParameterError(f"{name} must be {bound}, got {value}")


def _check_key(name: str, value: Any) -> None:
    if not isinstance(value, str) or not value:
        raise InvalidRuleParameterError(f"{name} must be a non-empty string, got {value!r}")


# ============================================================
# Rules
# ============================================================

@dataclass(frozen=True)
class FixedRule:
    type: ClassVar[str] = "fixed"
    month: int
    day: int

    def __post_init__(self) -> None:
        _check_int("fixed.month", self.month, 1, 12)
        _check_int("fixed.day", self.day, 1, 31)


@dataclass(frozen=True)
class AnchorRule:
    type: ClassVar[str] = "anchor"
    anchor: str

    def __post_init__(self) -> None:
        _check_key("anchor.anchor", self.anchor)


@dataclass(frozen=True)
class RelativeRule:
    """anchor + offset_days, optionally snapped to a weekday (0=Sun..6=Sat)."""
    type: ClassVar[str] = "relative"
    anchor: str
    offset_days: int
    weekday: Optional[int] = None
    weekday_policy: WeekdayPolicy = "on_or_after"

    def __post_init__(self) -> None:
        _check_key("relative.anchor", self.anchor)
        if isinstance(self.offset_days, bool) or not isinstance(self.offset_days, int):
            raise InvalidRuleParameterError(f"relative.offset_days must be an integer, got {self.offset_days!r}")
        if self.weekday is not None:
            _check_int("relative.weekday", self.weekday, 0, 6)
        if self.weekday_policy not in WEEKDAY_POLICIES:
            raise InvalidRuleParameterError(
                f"relative.weekday_policy must be one of {WEEKDAY_POLICIES}, got {self.weekday_policy!r}"
            )


@dataclass(frozen=True)
class NthWeekdayAfterRule:
    """The n-th `weekday` strictly after the anchor (n=1 is the first)."""
    type: ClassVar[str] = "nth_weekday_after"
    anchor: str
    weekday: int
    n: int = 1

    def __post_init__(self) -> None:
        _check_key("nth_weekday_after.anchor", self.anchor)
        _check_int("nth_weekday_after.weekday", self.weekday, 0, 6)
        _check_int("nth_weekday_after.n", self.n, 1)


@dataclass(frozen=True)
class BeforeFeastRule:
    """Start of an inclusive span of `days_before` days ending on the feast."""
    type: ClassVar[str] = "before_feast"
    days_before: int
    anchor: Optional[str] = None

    def __post_init__(self) -> None:
        _check_int("before_feast.days_before", self.days_before, 1)
        if self.anchor is not None:
            _check_key("before_feast.anchor", self.anchor)


@dataclass(frozen=True)
class RawRule:
    """Unparsed text. Never resolvable."""
    type: ClassVar[str] = "raw"
    text: str


Rule = Union[FixedRule, AnchorRule, RelativeRule, NthWeekdayAfterRule, BeforeFeastRule, RawRule]
RULE_TYPES: Tuple[type, ...] = (FixedRule, AnchorRule, RelativeRule, NthWeekdayAfterRule, BeforeFeastRule, RawRule)


# ============================================================
# Novenas
# ============================================================

NovenaCategory = Literal["Devotion", "Marian", "Feast", "Saint", "Intention"]
NOVENA_CATEGORIES = ("Devotion", "Marian", "Feast", "Saint", "Intention")


@dataclass(frozen=True)
class NovenaDefinition:
    id: str
    title: str
    feast_rule: Rule                      # authoritative
    start_rule: Optional[Rule] = None     # scraped hint, advisory only
    duration_days: Optional[int] = None   # inclusive start..feast
    category: str = "Devotion"
    tags: Tuple[str, ...] = ()
    description: Optional[str] = None
    patronage: Tuple[str, ...] = ()
    image: Optional[str] = None
    notes: Optional[str] = None
    source_url: Optional[str] = None
    extra: Dict[str, Any] = field(default_factory=dict, compare=False, hash=False)

    def __post_init__(self) -> None:
        _check_key("novena.id", self.id)

    @property
    def effective_duration(self) -> int:
        return DEFAULT_DURATION_DAYS if self.duration_days is None else self.duration_days


@dataclass(frozen=True)
class NovenaInstance:
    id: str
    title: str
    start_date: date
    feast_date: date
    duration_days: int
    category: str = "Devotion"
    tags: Tuple[str, ...] = ()
    source_url: Optional[str] = None
    start_hint: Optional[date] = None
    hint_accepted: bool = False

    def contains(self, d: date) -> bool:
        return self.start_date <= d <= self.feast_date

    def day_number(self, d: date) -> Optional[int]:
        """1-based day of the novena on `d`, or None outside the window."""
        if not self.contains(d):
            return None
        return (d - self.start_date).days + 1


# ============================================================
# Observances
# ============================================================

class Rank(IntEnum):
    WEEKDAY = 0
    OPTIONAL_MEMORIAL = 1
    MEMORIAL = 2
    FEAST = 3
    SUNDAY = 4
    SOLEMNITY = 5
    TRIDUUM = 6

    @property
    def label(self) -> str:
        return self.name.replace("_", " ").title()


Season = Literal["Advent", "Christmas", "Lent", "Easter", "Ordinary Time"]
SEASONS = ("Advent", "Christmas", "Lent", "Easter", "Ordinary Time")

Color = Literal["white", "red", "violet", "rose", "green", "gold"]


@dataclass(frozen=True)
class Observance:
    id: str
    title: str
    rank: Rank
    color: Optional[str] = None
    season: Optional[str] = None
    season_marker: bool = False

    def sort_key(self) -> Tuple[int, str]:
        return (-int(self.rank), self.title)


@dataclass(frozen=True)
class DayInfo:
    civil_date: date
    season: str
    observances: Tuple[Observance, ...] = ()
    attributes: Optional[Dict[str, Any]] = None
