"""
novenacal.engines.novena
------------------------
Novena reconciliation: turn a declarative definition into a dated window
for one year.

The feast rule and the duration are authoritative. A start rule, when
present, is a scraped hint and only ever confirms the canonical start
(feast - (duration - 1)); a hint that disagrees is dropped, never merged.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Dict, Iterable, List, Mapping, Optional, Tuple

from novenacal.core.errors import InvalidRuleParameterError, InvariantViolationError, NovenacalError
from novenacal.core.time import add_days, days_between
from novenacal.core.types import MAX_DURATION_DAYS, FixedRule, NovenaDefinition, NovenaInstance
from novenacal.engines.anchors import build_anchor_table
from novenacal.engines.rules import ResolutionContext, resolve

logger = logging.getLogger(__name__)


def _checked_duration(defn: NovenaDefinition, year: int) -> int:
    duration = defn.effective_duration
    # bool is an int subclass
    if isinstance(duration, bool) or not isinstance(duration, int) or not 1 <= duration <= MAX_DURATION_DAYS:
        raise InvalidRuleParameterError(
            f"durationDays must be 1..{MAX_DURATION_DAYS}, got {duration!r}", year=year, entry_id=defn.id
        )
    return duration


def _resolve_start_hint(defn: NovenaDefinition, year: int, anchors: Mapping[str, date], feast: date) -> date:
    hinted = resolve(defn.start_rule, year, anchors, ResolutionContext(feast_rule=defn.feast_rule))
    # Fixed start after the feast: a December start for a January feast
    if isinstance(defn.start_rule, FixedRule) and hinted > feast:
        hinted = resolve(defn.start_rule, year - 1, anchors)
    return hinted


def resolve_novena_for_year(defn: NovenaDefinition, year: int, anchors: Mapping[str, date]) -> NovenaInstance:
    duration = _checked_duration(defn, year)

    try:
        feast = resolve(defn.feast_rule, year, anchors)
        canonical_start = add_days(feast, -(duration - 1))

        start = canonical_start
        hint: Optional[date] = None
        accepted = False
        if defn.start_rule is not None:
            hint = _resolve_start_hint(defn, year, anchors, feast)
            if hint == canonical_start:
                accepted = True
            else:
                logger.debug(
                    "Novena %s (%d): start hint %s disagrees with canonical start %s; using canonical",
                    defn.id, year, hint, canonical_start,
                )
    except NovenacalError as e:
        raise e.with_context(entry_id=defn.id)

    if start > feast:
        raise InvariantViolationError(
            f"start after feast ({start.isoformat()} > {feast.isoformat()})", year=year, entry_id=defn.id
        )
    span = days_between(start, feast) + 1
    if span != duration:
        raise InvariantViolationError(
            f"inclusive span is {span} days but durationDays={duration}", year=year, entry_id=defn.id
        )

    return NovenaInstance(
        id=defn.id,
        title=defn.title,
        start_date=start,
        feast_date=feast,
        duration_days=duration,
        category=defn.category,
        tags=defn.tags,
        source_url=defn.source_url,
        start_hint=hint,
        hint_accepted=accepted,
    )


# ============================================================
# Batch orchestration
# ============================================================

@dataclass(frozen=True)
class NovenaFailure:
    id: str
    error: NovenacalError


@dataclass(frozen=True)
class NovenaBatch:
    year: int
    instances: Tuple[NovenaInstance, ...]
    failures: Tuple[NovenaFailure, ...] = ()

    @property
    def ok(self) -> bool:
        return not self.failures

    def discarded_hints(self) -> List[NovenaInstance]:
        return [i for i in self.instances if i.start_hint is not None and not i.hint_accepted]


def resolve_novenas_for_year(
    defs: Iterable[NovenaDefinition],
    year: int,
    anchors: Optional[Mapping[str, date]] = None,
) -> NovenaBatch:
    """
    Resolve every definition for `year`. A failing entry is recorded and
    logged; the rest of the batch still resolves.
    """
    if anchors is None:
        anchors = build_anchor_table(year)

    out: List[NovenaInstance] = []
    failures: List[NovenaFailure] = []
    for defn in defs:
        try:
            out.append(resolve_novena_for_year(defn, year, anchors))
        except NovenacalError as e:
            logger.warning("Skipping novena %s for %d: %s", defn.id, year, e)
            failures.append(NovenaFailure(defn.id, e))

    out.sort(key=lambda i: (i.start_date, i.title))
    return NovenaBatch(year=year, instances=tuple(out), failures=tuple(failures))


@dataclass(frozen=True)
class CalendarMaps:
    starts: Dict[str, List[NovenaInstance]] = field(default_factory=dict)
    feasts: Dict[str, List[NovenaInstance]] = field(default_factory=dict)


def calendar_maps(instances: Iterable[NovenaInstance]) -> CalendarMaps:
    """ISO date -> novenas starting / ending that day. Starts may fall in the previous year."""
    maps = CalendarMaps()
    for inst in instances:
        maps.starts.setdefault(inst.start_date.isoformat(), []).append(inst)
        maps.feasts.setdefault(inst.feast_date.isoformat(), []).append(inst)
    return maps


def active_novenas(instances: Iterable[NovenaInstance], day: date) -> List[Tuple[NovenaInstance, int]]:
    """Novenas being prayed on `day`, with the day number within each."""
    out = []
    for inst in instances:
        n = inst.day_number(day)
        if n is not None:
            out.append((inst, n))
    out.sort(key=lambda pair: (pair[0].feast_date, pair[0].title))
    return out
