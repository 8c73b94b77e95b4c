"""Catalog serialization — convert catalog dataclasses to JSON-safe dicts."""

from __future__ import annotations

from typing import Any

from .models import Lens, Camera, Accessory, CatalogResult


def lens_to_dict(lens: Lens) -> dict:
    return {
        "id": lens.id,
        "manufacturer": lens.manufacturer,
        "name": lens.name,
        "focal_length": lens.focal_length,
        "mount": lens.mount,
        "category": lens.category,
        "type": lens.type,
        "max_aperture": lens.max_aperture,
        "close_focus": lens.close_focus,
        "image_circle": lens.image_circle,
        "weight": lens.weight,
        "front_diameter": lens.front_diameter,
        "length": lens.length,
        "notes": lens.notes,
    }


def camera_to_dict(c: Camera) -> dict:
    d: dict[str, Any] = {
        "id": c.id,
        "brand": c.brand,
        "model": c.model,
        "native_mount": c.native_mount,
        "accepted_lens_mounts": list(c.accepted_lens_mounts),
        "video_io": list(c.video_io),
        "sensor_modes": [
            {"crop_class": m.crop_class, "resolution": m.resolution}
            for m in c.sensor_modes
        ],
        "media_slots": list(c.media_slots),
        "flags": list(c.flags),
    }
    if c.power is not None:
        d["power"] = {"mount": c.power.mount, "voltage": c.power.voltage}
    return d


def accessory_to_dict(a: Accessory) -> dict:
    return {
        "id": a.id,
        "brand": a.brand,
        "model": a.model,
        "category": a.category,
        "subtype": a.subtype,
        "specs": dict(a.specs),
        "compatible_with": a.compatible_with,
    }


def catalog_summary(result: CatalogResult) -> dict:
    """Counts, facet values and load issues for the web API."""
    cat = result.catalog
    return {
        "ok": result.ok,
        "lens_count": len(cat.lenses),
        "camera_count": len(cat.cameras),
        "accessory_count": len(cat.accessories),
        "adapter_rule_count": len(cat.adapter_rules),
        "compatibility_rule_count": len(cat.compatibility_matrix),
        "manufacturers": cat.manufacturers(),
        "camera_brands": cat.camera_brands(),
        "accessory_categories": cat.accessory_categories(),
        "issues": [{"source": i.source, "field": i.field, "message": i.message}
                   for i in result.issues],
    }
