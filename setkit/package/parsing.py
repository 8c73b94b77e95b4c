"""Package parsing — turn the browser's stored package items into typed PackageItems.

The browser stores whole catalog records with an ``itemType``
discriminator added.  Lens records may use either the lens database
column names ("focal length", "original mount", ...) or the API field
names ("focal_length", "max_aperture", ...).
"""

from __future__ import annotations

from typing import Any, Iterable

from setkit.catalog.loader import as_text, parse_accessory, parse_camera, parse_lens_row
from setkit.catalog.models import Accessory, Camera, Lens
from .models import ItemType, Package, PackageItem


# lens database column → API field name
_LENS_ALIASES = {
    "manufacturer": "brand",
    "name": "model",
    "focal length": "focal_length",
    "max aperture (T)": "max_aperture",
    "close focus": "close_focus",
    "image circle": "image_circle",
    "front diameter": "front_diameter",
    "notes / comments": "notes",
}


def _lens_from_payload(data: dict) -> Lens | None:
    row: dict[str, str] = {}
    for key in ("manufacturer", "name", "focal length", "mount", "original mount",
                "max aperture (T)", "close focus", "image circle", "weight",
                "front diameter", "length", "notes / comments", "notes"):
        value = data.get(key)
        if value in (None, "") and key in _LENS_ALIASES:
            value = data.get(_LENS_ALIASES[key])
        row[key] = as_text(value)
    lens = parse_lens_row(row, as_text(data.get("category")), as_text(data.get("type")) or "prime")
    if lens is None or not lens.mount:
        return None
    return lens


def _camera_from_payload(data: dict) -> Camera | None:
    if not as_text(data.get("native_mount")):
        return None
    return parse_camera({**data, "id": data.get("id") or ""})


def _accessory_from_payload(data: dict) -> Accessory | None:
    if not as_text(data.get("id")) and not as_text(data.get("category")):
        return None
    return parse_accessory({**data, "id": data.get("id") or ""})


def parse_package_item(data: dict[str, Any]) -> PackageItem:
    """Parse one stored package item.

    Items that cannot produce a usable record still come back as a
    PackageItem, with ``record=None``; the validator skips them.
    Unrecognised item types are treated as custom items.
    """
    raw_type = as_text(data.get("itemType")) or ItemType.LENS.value
    try:
        item_type = ItemType(raw_type)
    except ValueError:
        item_type = ItemType.CUSTOM

    name = as_text(data.get("name") or data.get("model"))
    notes = as_text(data.get("notes"))

    record = None
    try:
        if item_type is ItemType.LENS:
            record = _lens_from_payload(data)
        elif item_type is ItemType.CAMERA:
            record = _camera_from_payload(data)
        elif item_type is ItemType.ACCESSORY:
            record = _accessory_from_payload(data)
    except (KeyError, TypeError, AttributeError):
        record = None

    return PackageItem(
        item_type=item_type,
        record=record,
        name=name,
        notes=notes,
        item_id=as_text(data.get("id")),
    )


def parse_package(payloads: Iterable[dict[str, Any]]) -> Package:
    """Build a Package, dropping duplicates the way add-to-package does."""
    package = Package()
    for data in payloads:
        package.add(parse_package_item(data))
    return package
