"""
Catalog search — lens/camera/accessory filters, lens comparison and the lens recommender.

All functions are pure: they take catalog records and return a new list,
preserving catalog order.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Iterable, Sequence

from setkit.catalog.models import Accessory, Camera, Lens

log = logging.getLogger("setkit.search")

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")
_LEADING_FLOAT = re.compile(r"^\s*([+-]?(?:\d+\.?\d*|\.\d+))")


def leading_int(text: str) -> int | None:
    """Integer prefix of *text* ("24-70mm" → 24), None if there is none."""
    m = _LEADING_INT.match(text or "")
    return int(m.group(1)) if m else None


def leading_float(text: str) -> float | None:
    m = _LEADING_FLOAT.match(text or "")
    return float(m.group(1)) if m else None


# ── Lenses ─────────────────────────────────────────────────────────

@dataclass
class LensFilter:
    text: str = ""
    category: str = ""
    manufacturer: str = ""
    mount: str = ""
    lens_type: str = ""
    max_aperture: float | None = None   # keep lenses at least this fast (T-stop ≤ value)


def search_lenses(lenses: Iterable[Lens], flt: LensFilter) -> list[Lens]:
    needle = flt.text.lower()
    out: list[Lens] = []
    for lens in lenses:
        if needle and needle not in f"{lens.manufacturer} {lens.name} {lens.focal_length}".lower():
            continue
        if flt.category and lens.category != flt.category:
            continue
        if flt.manufacturer and lens.manufacturer != flt.manufacturer:
            continue
        # lenses with no recorded mount are not excluded by the mount filter
        if flt.mount and lens.mount and flt.mount not in lens.mount:
            continue
        if flt.lens_type and lens.type != flt.lens_type:
            continue
        if flt.max_aperture:
            t_stop = leading_float(lens.max_aperture)
            if t_stop is None or t_stop > flt.max_aperture:
                continue
        out.append(lens)
    return out


# ── Cameras ────────────────────────────────────────────────────────

@dataclass
class CameraFilter:
    text: str = ""
    brand: str = ""
    mount: str = ""
    sensor: str = ""


def search_cameras(cameras: Iterable[Camera], flt: CameraFilter) -> list[Camera]:
    needle = flt.text.lower()
    out: list[Camera] = []
    for cam in cameras:
        if needle and needle not in f"{cam.brand} {cam.model}".lower():
            continue
        if flt.brand and cam.brand != flt.brand:
            continue
        if flt.mount and cam.native_mount != flt.mount:
            continue
        if flt.sensor and not any(flt.sensor in m.crop_class for m in cam.sensor_modes):
            continue
        out.append(cam)
    return out


# ── Accessories ────────────────────────────────────────────────────

def filter_accessories(
    accessories: Iterable[Accessory], category: str = "all", text: str = "",
) -> list[Accessory]:
    """Category filter ("all"/empty keeps everything) plus case-insensitive text
    search over brand, model, category and subtype."""
    out = list(accessories)
    if category and category != "all":
        out = [a for a in out if a.category == category]
    needle = text.lower()
    if needle:
        out = [a for a in out
               if any(needle in f.lower() for f in (a.brand, a.model, a.category, a.subtype))]
    return out


# ── Lens comparison ────────────────────────────────────────────────

MAX_COMPARE = 3

# (Lens attribute, row label), in display order
COMPARISON_FIELDS: list[tuple[str, str]] = [
    ("manufacturer", "Manufacturer"),
    ("name", "Name"),
    ("focal_length", "Focal Length"),
    ("max_aperture", "Max Aperture"),
    ("close_focus", "Close Focus"),
    ("image_circle", "Image Circle"),
    ("mount", "Mount"),
    ("front_diameter", "Front Diameter"),
    ("weight", "Weight"),
    ("length", "Length"),
    ("category", "Category"),
]


@dataclass
class ComparisonRow:
    label: str
    values: list[str]


def compare_lenses(lenses: Sequence[Lens]) -> list[ComparisonRow]:
    """Side-by-side spec rows for up to three lenses; empty values read "N/A"."""
    if len(lenses) > MAX_COMPARE:
        raise ValueError(f"At most {MAX_COMPARE} lenses can be compared")
    if not lenses:
        return []
    return [
        ComparisonRow(label, [getattr(lens, attr) or "N/A" for lens in lenses])
        for attr, label in COMPARISON_FIELDS
    ]


# ── Recommendations ────────────────────────────────────────────────

@dataclass
class Recommendation:
    lenses: list[Lens]
    steps: list[str] = field(default_factory=list)


def _matches_format(lens: Lens, camera_format: str) -> bool:
    cat = lens.category.lower()
    if camera_format == "16mm":
        return "16mm" in cat
    if camera_format == "S35":
        return "35mm" in cat and "full frame" not in cat
    if camera_format == "FF":
        return "full frame" in cat
    if camera_format == "65mm":
        return "65mm" in cat
    return True


def _matches_aesthetic(lens: Lens, aesthetic: str) -> bool:
    cat = lens.category.lower()
    if aesthetic == "anamorphic":
        return "anamorphic" in cat
    if aesthetic == "vintage":
        return ("vintage" in cat
                or "vintage" in lens.name.lower()
                or lens.manufacturer == "Cooke"
                or "vintage" in lens.notes.lower())
    if aesthetic == "clean-modern":
        return "modern" in cat or lens.manufacturer in ("Arri", "Zeiss", "Leica")
    return True                         # "neutral" and anything unrecognised


def _matches_focal(lens: Lens, focal_need: str) -> bool:
    if focal_need == "zoom":
        return lens.type == "zoom"
    bounds = {
        "wide": (None, 27),
        "standard": (28, 50),
        "portrait": (51, 100),
        "telephoto": (101, None),
    }
    if focal_need not in bounds:
        return True
    mm = leading_int(lens.focal_length)
    if mm is None:
        return False
    lo, hi = bounds[focal_need]
    return (lo is None or mm >= lo) and (hi is None or mm <= hi)


def recommend_lenses(
    lenses: Sequence[Lens],
    camera_format: str,
    aesthetic: str,
    focal_need: str,
    limit: int = 15,
) -> Recommendation:
    """Narrow the catalog by format, then look, then focal length.

    A stage that leaves nothing falls back to the previous stage's set,
    so some lenses come back whenever the format filter matches any.
    """
    if not camera_format or not aesthetic or not focal_need:
        raise ValueError("camera_format, aesthetic and focal_need are all required")

    steps: list[str] = []

    by_format = [l for l in lenses if _matches_format(l, camera_format)]
    steps.append(f"After format filter ({camera_format}): {len(by_format)} lenses")

    by_look = [l for l in by_format if _matches_aesthetic(l, aesthetic)]
    if not by_look:
        by_look = by_format
    steps.append(f"After aesthetic filter ({aesthetic}): {len(by_look)} lenses")

    picks = [l for l in by_look if _matches_focal(l, focal_need)]
    steps.append(f"After focal length filter ({focal_need}): {len(picks)} lenses")

    if not picks:
        picks = by_look[:limit]
    if not picks:
        picks = by_format[:limit]

    for s in steps:
        log.debug(s)
    return Recommendation(lenses=picks[:limit], steps=steps)
