"""Registry bootstrap (import side-effect)."""
from .api import set_registry
from .bootstrap import build_registry
from .attributes import standard as _standard_attributes  # noqa: F401  (registers day attributes)

set_registry(build_registry())
