from __future__ import annotations
from novenacal.core.engine import AnchorRegistry
from novenacal.engines.specs import ALL_ANCHORS

def build_registry() -> AnchorRegistry:
    return AnchorRegistry(dict(ALL_ANCHORS))
