"""novenacal public API.

Keep this surface small: users should mostly interact with functions re-exported here.
"""

# Initialize registry on import
from . import api_init as _api_init  # noqa: F401

from .api import (
    easter,
    anchor_table,
    resolve_anchor,
    resolve_rule,
    list_anchors,
    anchor_info,
    register_anchor,
    default_novenas,
    novena_for_year,
    novenas_for_year,
    novena_calendar,
    observances_for_year,
    season,
    day_info,
)
from .core.errors import (
    NovenacalError,
    UnknownAnchorError,
    UnresolvableRuleError,
    InvariantViolationError,
    InvalidRuleParameterError,
)
from .core.types import (
    FixedRule,
    AnchorRule,
    RelativeRule,
    NthWeekdayAfterRule,
    BeforeFeastRule,
    RawRule,
    NovenaDefinition,
    NovenaInstance,
    Observance,
    Rank,
)

__all__ = [
    "easter",
    "anchor_table",
    "resolve_anchor",
    "resolve_rule",
    "list_anchors",
    "anchor_info",
    "register_anchor",
    "default_novenas",
    "novena_for_year",
    "novenas_for_year",
    "novena_calendar",
    "observances_for_year",
    "season",
    "day_info",
    "NovenacalError",
    "UnknownAnchorError",
    "UnresolvableRuleError",
    "InvariantViolationError",
    "InvalidRuleParameterError",
    "FixedRule",
    "AnchorRule",
    "RelativeRule",
    "NthWeekdayAfterRule",
    "BeforeFeastRule",
    "RawRule",
    "NovenaDefinition",
    "NovenaInstance",
    "Observance",
    "Rank",
]
