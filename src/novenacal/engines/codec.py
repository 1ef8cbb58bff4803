"""
novenacal.engines.codec
-----------------------
Flat JSON shapes for rules and novena definitions.

Rules are objects with a "type" discriminator ("fixed", "anchor",
"relative", "nth_weekday_after", "before_feast", "raw") and camelCase
fields, the same layout the scraped novena index is written in.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import IO, Any, Dict, Iterable, List, Optional, Union

from novenacal.core.errors import InvalidRuleParameterError
from novenacal.core.types import (
    AnchorRule,
    BeforeFeastRule,
    FixedRule,
    NovenaDefinition,
    NovenaInstance,
    NthWeekdayAfterRule,
    RawRule,
    RelativeRule,
    Rule,
)

_POLICY_TO_WIRE = {"on_or_after": "onOrAfter", "on_or_before": "onOrBefore"}
_POLICY_FROM_WIRE = {v: k for k, v in _POLICY_TO_WIRE.items()}

_NOVENA_KEYS = {
    "id", "title", "feastRule", "startRule", "durationDays", "category", "tags",
    "description", "patronage", "image", "notes", "source",
}


def _require(d: Dict[str, Any], key: str, kind: str) -> Any:
    if key not in d:
        raise InvalidRuleParameterError(f"{kind} rule is missing '{key}': {d!r}")
    return d[key]


def rule_from_dict(d: Dict[str, Any]) -> Rule:
    if not isinstance(d, dict):
        raise InvalidRuleParameterError(f"Rule must be a JSON object, got {type(d).__name__}")
    kind = d.get("type")

    if kind == "fixed":
        return FixedRule(month=_require(d, "month", kind), day=_require(d, "day", kind))
    if kind == "anchor":
        return AnchorRule(anchor=_require(d, "anchor", kind))
    if kind == "relative":
        policy = d.get("weekdayPolicy", "onOrAfter")
        if policy not in _POLICY_FROM_WIRE:
            raise InvalidRuleParameterError(f"Unknown weekdayPolicy {policy!r}")
        return RelativeRule(
            anchor=_require(d, "anchor", kind),
            offset_days=_require(d, "offsetDays", kind),
            weekday=d.get("weekday"),
            weekday_policy=_POLICY_FROM_WIRE[policy],
        )
    if kind == "nth_weekday_after":
        return NthWeekdayAfterRule(
            anchor=_require(d, "anchor", kind),
            weekday=_require(d, "weekday", kind),
            n=_require(d, "n", kind),
        )
    if kind == "before_feast":
        return BeforeFeastRule(days_before=_require(d, "daysBefore", kind), anchor=d.get("anchor"))
    if kind == "raw":
        return RawRule(text=str(d.get("text", "")))

    raise InvalidRuleParameterError(f"Unknown rule type {kind!r}")


def rule_to_dict(rule: Rule) -> Dict[str, Any]:
    if isinstance(rule, FixedRule):
        return {"type": rule.type, "month": rule.month, "day": rule.day}
    if isinstance(rule, AnchorRule):
        return {"type": rule.type, "anchor": rule.anchor}
    if isinstance(rule, RelativeRule):
        out: Dict[str, Any] = {"type": rule.type, "anchor": rule.anchor, "offsetDays": rule.offset_days}
        if rule.weekday is not None:
            out["weekday"] = rule.weekday
            out["weekdayPolicy"] = _POLICY_TO_WIRE[rule.weekday_policy]
        return out
    if isinstance(rule, NthWeekdayAfterRule):
        return {"type": rule.type, "anchor": rule.anchor, "weekday": rule.weekday, "n": rule.n}
    if isinstance(rule, BeforeFeastRule):
        out = {"type": rule.type, "daysBefore": rule.days_before}
        if rule.anchor is not None:
            out["anchor"] = rule.anchor
        return out
    if isinstance(rule, RawRule):
        return {"type": rule.type, "text": rule.text}
    raise TypeError(f"Unknown rule type: {type(rule).__name__}")


def novena_from_dict(d: Dict[str, Any]) -> NovenaDefinition:
    if not isinstance(d, dict):
        raise InvalidRuleParameterError(f"Novena entry must be a JSON object, got {type(d).__name__}")
    entry_id = d.get("id")
    try:
        start = d.get("startRule")
        source = d.get("source") or {}
        return NovenaDefinition(
            id=entry_id,
            title=str(d.get("title", entry_id)),
            feast_rule=rule_from_dict(d.get("feastRule")),
            start_rule=rule_from_dict(start) if start is not None else None,
            duration_days=d.get("durationDays"),
            category=d.get("category") or "Devotion",
            tags=tuple(d.get("tags") or ()),
            description=d.get("description"),
            patronage=tuple(d.get("patronage") or ()),
            image=d.get("image"),
            notes=d.get("notes"),
            source_url=source.get("url") if isinstance(source, dict) else None,
            extra={k: v for k, v in d.items() if k not in _NOVENA_KEYS},
        )
    except InvalidRuleParameterError as e:
        raise e.with_context(entry_id=entry_id if isinstance(entry_id, str) else None)


def novena_to_dict(n: NovenaDefinition) -> Dict[str, Any]:
    out: Dict[str, Any] = {"id": n.id, "title": n.title}
    if n.start_rule is not None:
        out["startRule"] = rule_to_dict(n.start_rule)
    out["feastRule"] = rule_to_dict(n.feast_rule)
    if n.duration_days is not None:
        out["durationDays"] = n.duration_days
    out.update({
        "category": n.category,
        "tags": list(n.tags),
        "description": n.description,
        "patronage": list(n.patronage),
        "image": n.image,
        "notes": n.notes,
    })
    if n.source_url is not None:
        out["source"] = {"url": n.source_url}
    out.update(n.extra)
    return out


def instance_to_dict(inst: NovenaInstance) -> Dict[str, Any]:
    return {
        "id": inst.id,
        "title": inst.title,
        "category": inst.category,
        "tags": list(inst.tags),
        "startDate": inst.start_date.isoformat(),
        "feastDate": inst.feast_date.isoformat(),
        "durationDays": inst.duration_days,
        "hintAccepted": inst.hint_accepted,
    }


PathOrFile = Union[str, Path, IO[str]]


def load_novena_index(src: PathOrFile) -> List[NovenaDefinition]:
    if isinstance(src, (str, Path)):
        with open(src, "r", encoding="utf-8") as f:
            raw = json.load(f)
    else:
        raw = json.load(src)
    if not isinstance(raw, list):
        raise InvalidRuleParameterError("Novena index must be a JSON array")
    return [novena_from_dict(d) for d in raw]


def dump_novena_index(defs: Iterable[NovenaDefinition], dst: Optional[PathOrFile] = None) -> str:
    text = json.dumps([novena_to_dict(n) for n in defs], indent=2, ensure_ascii=False)
    if isinstance(dst, (str, Path)):
        # tmp + rename so readers never see a half-written index
        tmp = Path(str(dst) + ".tmp")
        tmp.write_text(text, encoding="utf-8")
        tmp.replace(dst)
    elif dst is not None:
        dst.write(text)
    return text
