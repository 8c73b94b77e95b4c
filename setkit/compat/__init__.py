"""Compatibility engine — lens mounts, accessories, and catalog-wide filtering."""

from .result import CompatStatus, CompatibilityResult
from .lenses import resolve_lens_compatibility, find_adapter_rule
from .accessories import resolve_accessory_compatibility, find_matrix_rule
from .bulk import CompatibleItem, get_compatible_lenses, get_compatible_accessories

__all__ = [
    "CompatStatus", "CompatibilityResult",
    "resolve_lens_compatibility", "find_adapter_rule",
    "resolve_accessory_compatibility", "find_matrix_rule",
    "CompatibleItem", "get_compatible_lenses", "get_compatible_accessories",
]
