"""Compatibility verdicts — the value type every resolver returns."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class CompatStatus(str, Enum):
    NATIVE = "native"
    ADAPTER = "adapter"
    INCOMPATIBLE = "incompatible"
    COMPATIBLE = "compatible"
    UNIVERSAL = "universal"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class CompatibilityResult:
    """One verdict for one (item, camera) pair.

    ``compatible`` is a three-valued flag: True, False, or None when
    nothing is known about the pair.  None never means incompatible.
    """
    compatible: bool | None
    status: CompatStatus
    message: str
    adapter: str | None = None          # "LPL→PL" when an adapter is involved
    reason: str | None = None           # accessory verdicts only

    @property
    def is_unknown(self) -> bool:
        return self.compatible is None

    def to_dict(self) -> dict:
        d = {
            "compatible": self.compatible,
            "status": self.status.value,
            "message": self.message,
        }
        if self.adapter is not None:
            d["adapter"] = self.adapter
        if self.reason is not None:
            d["reason"] = self.reason
        return d
