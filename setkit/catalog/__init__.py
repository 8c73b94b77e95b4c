"""Equipment catalog — load, query, and serialize lenses, cameras and accessories."""

from .models import (
    Lens, Power, SensorMode, Camera, Accessory, AdapterRule, CompatibilityRule,
    CatalogSnapshot, LoadIssue, CatalogResult,
)
from .loader import (
    load_catalog, parse_lens_csv, parse_lens_row, parse_camera, parse_camera_payload,
    parse_accessory, parse_compatibility_csv, LENS_SOURCES,
)
from .serialization import lens_to_dict, camera_to_dict, accessory_to_dict, catalog_summary

__all__ = [
    # Models
    "Lens", "Power", "SensorMode", "Camera", "Accessory", "AdapterRule",
    "CompatibilityRule", "CatalogSnapshot", "LoadIssue", "CatalogResult",
    # Loader
    "load_catalog", "parse_lens_csv", "parse_lens_row", "parse_camera", "parse_camera_payload",
    "parse_accessory", "parse_compatibility_csv", "LENS_SOURCES",
    # Serialization
    "lens_to_dict", "camera_to_dict", "accessory_to_dict", "catalog_summary",
]
