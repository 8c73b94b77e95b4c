"""Catalog-wide filtering — every lens or accessory that works with one camera."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar

from setkit.catalog.models import Accessory, Camera, CatalogSnapshot, Lens
from .accessories import resolve_accessory_compatibility
from .lenses import resolve_lens_compatibility
from .result import CompatibilityResult

T = TypeVar("T")


@dataclass(frozen=True)
class CompatibleItem(Generic[T]):
    """A catalog record tagged with its verdict against one camera."""
    record: T
    compatibility: CompatibilityResult


def get_compatible_lenses(catalog: CatalogSnapshot, camera: Camera | None) -> list[CompatibleItem[Lens]]:
    """Lenses usable on *camera* (natively or via adapter), in catalog order."""
    if camera is None:
        return []
    out: list[CompatibleItem[Lens]] = []
    for lens in catalog.lenses:
        result = resolve_lens_compatibility(lens, camera, catalog.adapter_rules)
        if result is not None and result.compatible is True:
            out.append(CompatibleItem(lens, result))
    return out


def get_compatible_accessories(
    catalog: CatalogSnapshot, camera: Camera | None,
) -> list[CompatibleItem[Accessory]]:
    """Accessories confirmed compatible with *camera*; unknown ones are excluded."""
    if camera is None:
        return []
    out: list[CompatibleItem[Accessory]] = []
    for acc in catalog.accessories:
        result = resolve_accessory_compatibility(acc, camera, catalog.compatibility_matrix)
        if result is not None and result.compatible is True:
            out.append(CompatibleItem(acc, result))
    return out
