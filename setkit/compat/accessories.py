"""Accessory-to-camera resolution: authored matrix first, then category heuristics."""

from __future__ import annotations

from typing import Sequence

from setkit.catalog.models import Accessory, Camera, CompatibilityRule
from .result import CompatibilityResult, CompatStatus


UNIVERSAL_CATEGORIES = frozenset({"cable", "rigging"})
MONITOR_CATEGORY = "monitor"
POWER_CATEGORY = "Power"               # capitalised in the accessory data


def find_matrix_rule(
    matrix: Sequence[CompatibilityRule], camera_id: str, accessory_id: str,
) -> CompatibilityRule | None:
    """First matrix row for the pair, in table order."""
    for row in matrix:
        if row.camera_id == camera_id and row.accessory_id == accessory_id:
            return row
    return None


def _has_sdi_link(accessory: Accessory, camera: Camera) -> bool:
    camera_has_sdi = any("SDI" in out for out in camera.video_io)
    monitor_has_sdi = "SDI" in accessory.spec("inputs")
    return camera_has_sdi and monitor_has_sdi


def _power_mount_match(accessory: Accessory, camera: Camera) -> str | None:
    """The accessory's plate mount if the camera's power mount names it."""
    camera_power = camera.power.mount if camera.power is not None else ""
    accessory_mount = accessory.spec("mount")
    if camera_power and accessory_mount and accessory_mount in camera_power:
        return accessory_mount
    return None


def resolve_accessory_compatibility(
    accessory: Accessory | None,
    camera: Camera | None,
    matrix: Sequence[CompatibilityRule] = (),
) -> CompatibilityResult | None:
    """Decide whether *accessory* works with *camera*.

    Returns None when either side is missing.  When neither the matrix
    nor a category heuristic applies the verdict is unknown
    (``compatible is None``), not incompatible.
    """
    if accessory is None or camera is None:
        return None

    row = find_matrix_rule(matrix, camera.id, accessory.id)
    if row is not None:
        return CompatibilityResult(
            compatible=row.compatible,
            status=CompatStatus.COMPATIBLE if row.compatible else CompatStatus.INCOMPATIBLE,
            message=f"✓ {row.reason}" if row.compatible else f"✗ {row.reason}",
            reason=row.reason,
        )

    category = accessory.category

    if category in UNIVERSAL_CATEGORIES:
        return CompatibilityResult(
            compatible=True,
            status=CompatStatus.UNIVERSAL,
            message="✓ Universal accessory",
            reason="Universal compatibility",
        )

    if category == MONITOR_CATEGORY and _has_sdi_link(accessory, camera):
        return CompatibilityResult(
            compatible=True,
            status=CompatStatus.COMPATIBLE,
            message="✓ SDI compatible",
            reason="SDI video output supported",
        )

    if category == POWER_CATEGORY:
        mount = _power_mount_match(accessory, camera)
        if mount is not None:
            return CompatibilityResult(
                compatible=True,
                status=CompatStatus.COMPATIBLE,
                message="✓ Power mount compatible",
                reason=f"{mount} power compatible",
            )

    return CompatibilityResult(
        compatible=None,
        status=CompatStatus.UNKNOWN,
        message="? Compatibility unknown",
        reason="Not in compatibility database",
    )
