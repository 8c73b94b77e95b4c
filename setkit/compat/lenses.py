"""Lens-to-camera mount resolution.

Every (lens, camera) pair gets exactly one of three verdicts, checked in
this order:

1. native        lens mount == camera native mount
2. adapter       lens mount is one of the camera's accepted lens mounts
3. adapter rule  a rule for (camera native mount, lens mount) allows or forbids it
4. incompatible  nothing matched

Mount names are compared case-sensitively.
"""

from __future__ import annotations

from typing import Sequence

from setkit.catalog.models import AdapterRule, Camera, Lens
from .result import CompatibilityResult, CompatStatus


def find_adapter_rule(
    adapter_rules: Sequence[AdapterRule], camera_mount: str, lens_mount: str,
) -> AdapterRule | None:
    """First rule for the mount pair, in table order."""
    for rule in adapter_rules:
        if rule.camera_mount == camera_mount and rule.lens_mount == lens_mount:
            return rule
    return None


def resolve_lens_compatibility(
    lens: Lens | None,
    camera: Camera | None,
    adapter_rules: Sequence[AdapterRule] = (),
) -> CompatibilityResult | None:
    """Decide whether *lens* can be used on *camera*.

    Returns None when either side is missing (cannot evaluate).
    """
    if lens is None or camera is None:
        return None

    lens_mount = lens.mount
    camera_mount = camera.native_mount

    if lens_mount == camera_mount:
        return CompatibilityResult(
            compatible=True,
            status=CompatStatus.NATIVE,
            message=f"✓ Native {lens_mount} mount - direct compatibility",
        )

    if lens_mount in camera.accepted_lens_mounts:
        return CompatibilityResult(
            compatible=True,
            status=CompatStatus.ADAPTER,
            message=f"⚠ Requires {lens_mount}→{camera_mount} adapter",
            adapter=f"{lens_mount}→{camera_mount}",
        )

    rule = find_adapter_rule(adapter_rules, camera_mount, lens_mount)
    if rule is not None:
        if rule.allowed:
            return CompatibilityResult(
                compatible=True,
                status=CompatStatus.ADAPTER,
                message=f"⚠ {rule.notes or 'Adapter required'}",
                adapter=f"{lens_mount}→{camera_mount}",
            )
        return CompatibilityResult(
            compatible=False,
            status=CompatStatus.INCOMPATIBLE,
            message=f"✗ Incompatible: {rule.notes or 'No adapter available'}",
        )

    return CompatibilityResult(
        compatible=False,
        status=CompatStatus.INCOMPATIBLE,
        message=f"✗ {lens_mount} lens incompatible with {camera_mount} camera",
    )
