"""Plain-text package list, the format of the downloadable camera-package.txt."""

from __future__ import annotations

from typing import Iterable

from setkit.catalog.models import Accessory, Camera, Lens
from setkit.errors import PackageError
from .models import PackageItem

EXPORT_FILENAME = "camera-package.txt"


def _block(n: int, item: PackageItem) -> str:
    r = item.record
    if isinstance(r, Lens):
        return (
            f"{n}. {r.manufacturer} {r.name} {r.focal_length}\n"
            f"   Category: {r.category}\n"
            f"   Mount: {r.mount or 'N/A'}\n"
            f"   Aperture: T{r.max_aperture or 'N/A'}\n"
        )
    if isinstance(r, Camera):
        return (
            f"{n}. {r.brand} {r.model}\n"
            f"   Mount: {r.native_mount}\n"
            f"   Sensor: {r.sensor or 'N/A'}\n"
        )
    if isinstance(r, Accessory):
        return (
            f"{n}. {r.brand} {r.model}\n"
            f"   Category: {r.category} - {r.subtype}\n"
        )
    text = f"{n}. {item.label or item.identity_key}\n"
    if item.notes:
        text += f"   Notes: {item.notes}\n"
    return text


def export_package_text(items: Iterable[PackageItem]) -> str:
    items = list(items)
    if not items:
        raise PackageError("No items in package to export")
    return "Camera Package List\n\n" + "\n".join(
        _block(i + 1, item) for i, item in enumerate(items)
    )
