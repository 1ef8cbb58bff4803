from __future__ import annotations

from dataclasses import replace
from datetime import date
from importlib import resources
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from .core.engine import AnchorDefinition, AnchorRegistry
from .core.types import DayInfo, NovenaDefinition, NovenaInstance, Observance, Rule
from .attributes.registry import compute_attributes
from .engines.anchors import AnchorTable, build_anchor_table
from .engines.codec import load_novena_index
from .engines.computus import easter_sunday
from .engines.novena import CalendarMaps, NovenaBatch, calendar_maps, resolve_novena_for_year, resolve_novenas_for_year
from .engines.observances import build_observances_for_year, season_for
from .engines.rules import ResolutionContext, resolve

_registry: Optional[AnchorRegistry] = None

def set_registry(reg: AnchorRegistry) -> None:
    global _registry
    _registry = reg

def _reg() -> AnchorRegistry:
    if _registry is None:
        raise RuntimeError("Anchor registry not initialized")
    return _registry

def list_anchors() -> List[str]:
    return _reg().list()

def anchor_info(name: str) -> AnchorDefinition:
    return _reg().get(name)

def register_anchor(name: str, definition: AnchorDefinition, *, overwrite: bool = False) -> None:
    _reg().register(name, definition, overwrite=overwrite)

# ============================================================
# Dates
# ============================================================

def easter(year: int) -> date:
    return easter_sunday(year)

def anchor_table(year: int) -> AnchorTable:
    """All registered anchors for `year`. Build once, pass to every resolution."""
    return build_anchor_table(year, _reg().definitions())

def resolve_anchor(key: str, year: int) -> date:
    return anchor_table(year)[key]

def resolve_rule(
    rule: Rule,
    year: int,
    *,
    anchors: Optional[AnchorTable] = None,
    feast_rule: Optional[Rule] = None,
) -> date:
    if anchors is None:
        anchors = anchor_table(year)
    return resolve(rule, year, anchors, ResolutionContext(feast_rule=feast_rule))

# ============================================================
# Novenas
# ============================================================

def default_novenas() -> List[NovenaDefinition]:
    """The bundled sample novena index."""
    with (resources.files("novenacal") / "data" / "novenas_index.json").open("r", encoding="utf-8") as f:
        return load_novena_index(f)

def novena_for_year(defn: NovenaDefinition, year: int, *, anchors: Optional[AnchorTable] = None) -> NovenaInstance:
    if anchors is None:
        anchors = anchor_table(year)
    return resolve_novena_for_year(defn, year, anchors)

def novenas_for_year(year: int, defs: Optional[Iterable[NovenaDefinition]] = None) -> NovenaBatch:
    if defs is None:
        defs = default_novenas()
    return resolve_novenas_for_year(defs, year, anchor_table(year))

def novena_calendar(year: int, defs: Optional[Iterable[NovenaDefinition]] = None) -> CalendarMaps:
    return calendar_maps(novenas_for_year(year, defs).instances)

# ============================================================
# Observances
# ============================================================

def observances_for_year(year: int) -> Dict[str, Tuple[Observance, ...]]:
    return build_observances_for_year(year, anchors=anchor_table(year))

def season(d: date) -> str:
    return season_for(d, anchor_table(d.year))

def day_info(d: date, *, attributes: Sequence[str] = ()) -> DayInfo:
    anchors = anchor_table(d.year)
    table = build_observances_for_year(d.year, anchors=anchors)
    info = DayInfo(
        civil_date=d,
        season=season_for(d, anchors),
        observances=table.get(d.isoformat(), ()),
    )
    if attributes:
        attrs = compute_attributes(info, attributes)
        info = replace(info, attributes=attrs)
    return info
