"""Catalog dataclasses — typed, immutable records for lenses, cameras and accessories."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass


@dataclass(frozen=True)
class Lens:
    manufacturer: str
    name: str
    focal_length: str = ""              # "50mm" or a zoom range "24-70mm"
    mount: str = ""
    category: str = ""                  # assigned by the source file
    type: str = "prime"                 # "prime" | "zoom" | "special"
    max_aperture: str = ""              # T-stop as written in the source
    close_focus: str = ""
    image_circle: str = ""
    weight: str = ""
    front_diameter: str = ""
    length: str = ""
    notes: str = ""

    @property
    def id(self) -> str:
        return f"{self.manufacturer}-{self.name}-{self.focal_length}"

    @property
    def is_zoom(self) -> bool:
        return self.type == "zoom"


@dataclass(frozen=True)
class Power:
    mount: str = ""                     # battery plate, e.g. "V-Mount / Gold Mount"
    voltage: str = ""


@dataclass(frozen=True)
class SensorMode:
    crop_class: str = ""
    resolution: str = ""


@dataclass(frozen=True)
class Camera:
    id: str
    brand: str
    model: str
    native_mount: str
    accepted_lens_mounts: tuple[str, ...] = ()
    video_io: tuple[str, ...] = ()
    power: Power | None = None
    sensor_modes: tuple[SensorMode, ...] = ()
    media_slots: tuple[str, ...] = ()
    flags: tuple[str, ...] = ()

    @property
    def sensor(self) -> str:
        """Crop class of the first sensor mode ("" when none)."""
        return self.sensor_modes[0].crop_class if self.sensor_modes else ""


@dataclass(frozen=True)
class Accessory:
    id: str
    brand: str
    model: str
    category: str = ""                  # "cable" | "rigging" | "monitor" | "Power" | ...
    subtype: str = ""
    specs: tuple[tuple[str, str], ...] = ()   # ordered (key, value) pairs; a dict is accepted
    compatible_with: str = ""

    def __post_init__(self):
        if isinstance(self.specs, Mapping):
            object.__setattr__(self, "specs", tuple(self.specs.items()))

    def spec(self, key: str) -> str:
        """Spec value as a string; "" when the key is absent."""
        for k, v in self.specs:
            if k == key:
                return v
        return ""


@dataclass(frozen=True)
class AdapterRule:
    camera_mount: str
    lens_mount: str
    allowed: bool
    notes: str = ""


@dataclass(frozen=True)
class CompatibilityRule:
    camera_id: str
    accessory_id: str
    compatible: bool
    reason: str = ""


@dataclass(frozen=True)
class CatalogSnapshot:
    """Everything loaded from one catalog source, read-only.

    Adapter rules travel with the camera payload but apply to every
    camera in the snapshot, not to a single camera.
    """
    lenses: tuple[Lens, ...] = ()
    cameras: tuple[Camera, ...] = ()
    accessories: tuple[Accessory, ...] = ()
    adapter_rules: tuple[AdapterRule, ...] = ()
    compatibility_matrix: tuple[CompatibilityRule, ...] = ()

    def get_camera(self, camera_id: str) -> Camera | None:
        for c in self.cameras:
            if c.id == camera_id:
                return c
        return None

    def get_accessory(self, accessory_id: str) -> Accessory | None:
        for a in self.accessories:
            if a.id == accessory_id:
                return a
        return None

    def find_lens(self, lens_id: str) -> Lens | None:
        for lens in self.lenses:
            if lens.id == lens_id:
                return lens
        return None

    def manufacturers(self) -> list[str]:
        return sorted({lens.manufacturer for lens in self.lenses if lens.manufacturer})

    def camera_brands(self) -> list[str]:
        return sorted({c.brand for c in self.cameras if c.brand})

    def accessory_categories(self) -> list[str]:
        return sorted({a.category for a in self.accessories if a.category})


@dataclass
class LoadIssue:
    source: str
    field: str
    message: str

    def __str__(self) -> str:
        return f"[{self.source}] {self.field}: {self.message}"


@dataclass
class CatalogResult:
    """Result of loading the catalog — the snapshot plus any load issues."""
    catalog: CatalogSnapshot
    issues: list[LoadIssue]

    @property
    def ok(self) -> bool:
        return len(self.issues) == 0
