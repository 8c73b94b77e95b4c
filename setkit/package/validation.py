"""Package validation — check every lens and accessory against the reference camera."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable

from setkit.catalog.models import Accessory, Camera, CatalogSnapshot, Lens
from setkit.compat import CompatStatus, resolve_accessory_compatibility, resolve_lens_compatibility
from .models import ItemType, PackageItem


NO_CAMERA_WARNING = "Add a camera to validate compatibility"


@dataclass
class ValidationReport:
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return len(self.errors) == 0

    def to_dict(self) -> dict:
        return {"errors": list(self.errors), "warnings": list(self.warnings)}


def validate_package(items: Iterable[PackageItem], catalog: CatalogSnapshot) -> ValidationReport:
    """Validate a package against its first camera.

    Errors are confirmed incompatibilities; warnings are adapter-only
    lenses and accessories with unknown compatibility.  Items the
    resolvers cannot evaluate are skipped without an entry.  Additional
    cameras are not checked.
    """
    items = list(items)
    cameras = [i for i in items if i.item_type is ItemType.CAMERA]
    lenses = [i for i in items if i.item_type is ItemType.LENS]
    accessories = [i for i in items if i.item_type is ItemType.ACCESSORY]

    if not cameras:
        return ValidationReport(errors=[], warnings=[NO_CAMERA_WARNING])

    camera = cameras[0].record if isinstance(cameras[0].record, Camera) else None
    report = ValidationReport()

    for item in lenses:
        lens = item.record if isinstance(item.record, Lens) else None
        compat = resolve_lens_compatibility(lens, camera, catalog.adapter_rules)
        if compat is None:
            continue
        if not compat.compatible:
            report.errors.append(f"{item.brand} {item.model}: {compat.message}")
        elif compat.status is CompatStatus.ADAPTER:
            report.warnings.append(f"{item.brand} {item.model}: {compat.message}")

    for item in accessories:
        acc = item.record if isinstance(item.record, Accessory) else None
        compat = resolve_accessory_compatibility(acc, camera, catalog.compatibility_matrix)
        if compat is None:
            continue
        if compat.compatible is False:
            report.errors.append(f"{item.brand} {item.model}: {compat.message}")
        elif compat.status is CompatStatus.UNKNOWN:
            report.warnings.append(f"{item.brand} {item.model}: {compat.message}")

    return report
