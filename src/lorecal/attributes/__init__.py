"""Optional per-day attributes computed on request (see DayInfo.attributes)."""

from .registry import compute_attributes, list_attributes, register_attribute
from . import standard as _standard  # noqa: F401  (registers the built-in attributes)

__all__ = ["compute_attributes", "list_attributes", "register_attribute"]
