from __future__ import annotations

from typing import Any, Optional


class NovenacalError(Exception):
    """Base error.

    Carries the context needed to diagnose a failure without re-deriving
    state: the rule being resolved, the target year and the entry id.
    """

    def __init__(
        self,
        message: str,
        *,
        rule: Any = None,
        year: Optional[int] = None,
        entry_id: Optional[str] = None,
    ):
        super().__init__(message)
        self.message = message
        self.rule = rule
        self.year = year
        self.entry_id = entry_id

    def with_context(self, *, rule: Any = None, year: Optional[int] = None, entry_id: Optional[str] = None):
        """Fill in context that is still missing and return self (for re-raise)."""
        if self.rule is None:
            self.rule = rule
        if self.year is None:
            self.year = year
        if self.entry_id is None:
            self.entry_id = entry_id
        return self

    def __str__(self) -> str:
        parts = []
        if self.entry_id is not None:
            parts.append(f"entry={self.entry_id}")
        if self.year is not None:
            parts.append(f"year={self.year}")
        if self.rule is not None:
            parts.append(f"rule={self.rule!r}")
        if not parts:
            return self.message
        return f"{self.message} ({', '.join(parts)})"


class UnknownAnchorError(NovenacalError, KeyError):
    """Raised when a rule references an anchor key absent from the year's table."""

    def __init__(self, key: str, **kw):
        super().__init__(f"Unknown anchor '{key}'", **kw)
        self.key = key


class UnresolvableRuleError(NovenacalError):
    """Raised when a raw (unparsed) rule reaches the engine."""


class InvariantViolationError(NovenacalError):
    """Raised when a resolved novena breaks the start/feast/duration contract."""


class InvalidRuleParameterError(NovenacalError, ValueError):
    """Raised for malformed rule data (bad weekday, n < 1, duration out of range, ...)."""
