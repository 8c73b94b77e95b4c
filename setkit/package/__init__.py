"""Equipment packages — items, parsing, validation, and text export."""

from .models import ItemType, PackageItem, Package
from .parsing import parse_package_item, parse_package
from .validation import ValidationReport, validate_package, NO_CAMERA_WARNING
from .export import export_package_text, EXPORT_FILENAME

__all__ = [
    # Models
    "ItemType", "PackageItem", "Package",
    # Parsing / Validation / Export
    "parse_package_item", "parse_package",
    "ValidationReport", "validate_package", "NO_CAMERA_WARNING",
    "export_package_text", "EXPORT_FILENAME",
]
