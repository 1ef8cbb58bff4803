from __future__ import annotations
from dataclasses import dataclass
from datetime import date
from typing import Dict, List, Mapping, Protocol, Tuple


class AnchorDefinition(Protocol):
    """How one named anchor is placed in a given year."""

    @property
    def depends_on(self) -> Tuple[str, ...]: ...

    def resolve(self, year: int, easter: date, resolved: Mapping[str, date]) -> date: ...


@dataclass
class AnchorRegistry:
    _definitions: Dict[str, AnchorDefinition]

    def get(self, name: str) -> AnchorDefinition:
        if name not in self._definitions:
            raise KeyError(f"Unknown anchor definition '{name}'. Available: {sorted(self._definitions)}")
        return self._definitions[name]

    def list(self) -> List[str]:
        return sorted(self._definitions.keys())

    def definitions(self) -> Dict[str, AnchorDefinition]:
        return dict(self._definitions)

    def register(self, name: str, definition: AnchorDefinition, *, overwrite: bool = False) -> None:
        if (not overwrite) and (name in self._definitions):
            raise KeyError(f"Anchor '{name}' already exists. Use overwrite=True to replace.")
        self._definitions[name] = definition
