"""Package dataclasses — the user's assembled equipment list."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Iterator, Union

from setkit.catalog.models import Accessory, Camera, Lens

log = logging.getLogger("setkit.package")

Record = Union[Lens, Camera, Accessory]


class ItemType(str, Enum):
    CAMERA = "camera"
    LENS = "lens"
    ACCESSORY = "accessory"
    CUSTOM = "custom"


@dataclass(frozen=True)
class PackageItem:
    item_type: ItemType
    record: Record | None = None        # None for custom items and malformed payloads
    name: str = ""                      # custom items / raw label fallback
    notes: str = ""
    item_id: str = ""                   # id carried by the stored payload, if any

    @property
    def brand(self) -> str:
        r = self.record
        if isinstance(r, Lens):
            return r.manufacturer
        if isinstance(r, (Camera, Accessory)):
            return r.brand
        return ""

    @property
    def model(self) -> str:
        r = self.record
        if isinstance(r, Lens):
            return r.name
        if isinstance(r, (Camera, Accessory)):
            return r.model
        return self.name

    @property
    def label(self) -> str:
        return f"{self.brand} {self.model}".strip()

    @property
    def identity_key(self) -> str:
        """Explicit id when there is one, else "brand-model"."""
        r = self.record
        if isinstance(r, Lens):
            return r.id
        if isinstance(r, (Camera, Accessory)) and r.id:
            return r.id
        if self.item_id:
            return self.item_id
        return f"{self.brand}-{self.model}"


class Package:
    """Ordered list of package items, unique by identity key."""

    def __init__(self, items: Iterable[PackageItem] = ()):
        self._items: list[PackageItem] = []
        for item in items:
            self.add(item)

    def add(self, item: PackageItem) -> bool:
        """Append *item*; returns False (and leaves the package alone) for a duplicate."""
        key = item.identity_key
        if any(i.identity_key == key for i in self._items):
            log.debug("Package already contains %s", key)
            return False
        self._items.append(item)
        return True

    def remove(self, key: str) -> bool:
        before = len(self._items)
        self._items = [i for i in self._items if i.identity_key != key]
        return len(self._items) != before

    def clear(self) -> None:
        self._items.clear()

    @property
    def items(self) -> list[PackageItem]:
        return list(self._items)

    @property
    def cameras(self) -> list[PackageItem]:
        return [i for i in self._items if i.item_type is ItemType.CAMERA]

    @property
    def reference_camera(self) -> Camera | None:
        """Record of the first camera in package order (None if absent or malformed)."""
        cameras = self.cameras
        if not cameras or not isinstance(cameras[0].record, Camera):
            return None
        return cameras[0].record

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[PackageItem]:
        return iter(self._items)
