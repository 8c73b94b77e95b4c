"""Catalog loader — reads the lens CSVs, camera/accessory JSON and the compatibility matrix."""

from __future__ import annotations

import csv
import io
import json
import logging
from pathlib import Path
from urllib.parse import quote

import requests

from setkit.config import DATA_DIR
from .models import (
    Lens, Power, SensorMode, Camera, Accessory, AdapterRule, CompatibilityRule,
    CatalogSnapshot, LoadIssue, CatalogResult,
)

log = logging.getLogger("setkit.catalog")


# (file, category, default type); zoom is re-derived per row from the focal length
LENS_SOURCES: list[tuple[str, str, str]] = [
    ("Full Motion Picture Lens Database - 16mm primes.csv", "16mm primes", "prime"),
    ("Full Motion Picture Lens Database - 16mm zooms.csv", "16mm zooms", "zoom"),
    ("Full Motion Picture Lens Database - Arri _ Zeiss 35mm primes.csv", "35mm primes", "prime"),
    ("Full Motion Picture Lens Database - Cooke 35mm primes.csv", "35mm primes", "prime"),
    ("Full Motion Picture Lens Database - Panavision 35mm primes.csv", "35mm primes", "prime"),
    ("Full Motion Picture Lens Database - Modern 35mm primes.csv", "35mm primes", "prime"),
    ("Full Motion Picture Lens Database - Vintage 35mm primes.csv", "35mm primes", "prime"),
    ("Full Motion Picture Lens Database - 35mm zooms.csv", "35mm zooms", "zoom"),
    ("Full Motion Picture Lens Database - Panavision anamorphic.csv", "anamorphic", "prime"),
    ("Full Motion Picture Lens Database - Hawk anamorphic.csv", "anamorphic", "prime"),
    ("Full Motion Picture Lens Database - Other anamorphic.csv", "anamorphic", "prime"),
    ("Full Motion Picture Lens Database - FF Anamorphic.csv", "anamorphic", "prime"),
    ("Full Motion Picture Lens Database - Zeiss FF primes.csv", "full frame primes", "prime"),
    ("Full Motion Picture Lens Database - Panavision FF Lenses.csv", "full frame primes", "prime"),
    ("Full Motion Picture Lens Database - Other FF Primes.csv", "full frame primes", "prime"),
    ("Full Motion Picture Lens Database - Converted 35mm stills.csv", "full frame primes", "prime"),
    ("Full Motion Picture Lens Database - FF Zooms.csv", "full frame zooms", "zoom"),
    ("Full Motion Picture Lens Database - 65mm lenses.csv", "65mm", "prime"),
    ("Full Motion Picture Lens Database - Secondary lenses.csv", "special", "special"),
    ("Full Motion Picture Lens Database - PC _ Tilt lenses.csv", "special", "special"),
    ("Full Motion Picture Lens Database - Relay lenses.csv", "special", "special"),
    ("Full Motion Picture Lens Database - Effects lenses.csv", "special", "special"),
]

CAMERAS_FILE = "setkit-cameras-data-clean.json"
ACCESSORY_FILES = (
    "setkit-accessories-video-monitoring-clean.json",
    "setkit-accessories-support-power-media-clean.json",
)
MATRIX_FILE = "setkit-compatibility-matrix.csv"


# ── Field helpers ──────────────────────────────────────────────────

def as_text(value) -> str:
    """Optional scalar → stripped string ("" for None)."""
    if value is None:
        return ""
    if isinstance(value, list):
        return ", ".join(as_text(v) for v in value)
    return str(value).strip()


def _strings(value) -> tuple[str, ...]:
    if not value:
        return ()
    if isinstance(value, str):
        return (value.strip(),)
    return tuple(as_text(v) for v in value)


def _bool(value) -> bool:
    if isinstance(value, str):
        return value.strip().lower() == "true"
    return bool(value)


# ── Lenses ─────────────────────────────────────────────────────────

def parse_lens_row(row: dict[str, str], category: str, default_type: str) -> Lens | None:
    manufacturer = row.get("manufacturer", "")
    name = row.get("name", "")
    if not manufacturer or not name:
        return None
    focal = row.get("focal length", "")
    return Lens(
        manufacturer=manufacturer,
        name=name,
        focal_length=focal,
        mount=row.get("mount") or row.get("original mount", ""),
        category=category,
        type="zoom" if "-" in focal else default_type,
        max_aperture=row.get("max aperture (T)", ""),
        close_focus=row.get("close focus", ""),
        image_circle=row.get("image circle", ""),
        weight=row.get("weight", ""),
        front_diameter=row.get("front diameter", ""),
        length=row.get("length", ""),
        notes=row.get("notes / comments") or row.get("notes", ""),
    )


def parse_lens_csv(text: str, category: str, default_type: str = "prime") -> list[Lens]:
    """Parse one lens database CSV.

    Rows whose field count differs from the header are dropped, as are
    rows without a manufacturer or name.
    """
    reader = csv.reader(io.StringIO(text))
    header = next(reader, None)
    if not header:
        return []
    header = [h.strip() for h in header]

    lenses: list[Lens] = []
    for values in reader:
        if not any(v.strip() for v in values):
            continue
        if len(values) != len(header):
            continue
        row = {h: v.strip() for h, v in zip(header, values)}
        lens = parse_lens_row(row, category, default_type)
        if lens is not None:
            lenses.append(lens)
    return lenses


# ── Cameras ────────────────────────────────────────────────────────

def _parse_power(data: dict | None) -> Power | None:
    if not isinstance(data, dict):
        return None
    return Power(mount=as_text(data.get("mount")), voltage=as_text(data.get("voltage")))


def _parse_sensor_mode(data) -> SensorMode:
    if not isinstance(data, dict):
        return SensorMode()
    return SensorMode(
        crop_class=as_text(data.get("crop_class")),
        resolution=as_text(data.get("resolution")),
    )


def parse_camera(data: dict) -> Camera:
    return Camera(
        id=as_text(data["id"]),
        brand=as_text(data.get("brand")),
        model=as_text(data.get("model")),
        native_mount=as_text(data.get("native_mount")),
        accepted_lens_mounts=_strings(data.get("accepted_lens_mounts")),
        video_io=_strings(data.get("video_io")),
        power=_parse_power(data.get("power")),
        sensor_modes=tuple(_parse_sensor_mode(m) for m in data.get("sensor_modes") or ()),
        media_slots=_strings(data.get("media_slots")),
        flags=_strings(data.get("flags")),
    )


def parse_adapter_rule(data: dict) -> AdapterRule:
    return AdapterRule(
        camera_mount=as_text(data["camera_mount"]),
        lens_mount=as_text(data["lens_mount"]),
        allowed=_bool(data.get("allowed", False)),
        notes=as_text(data.get("notes")),
    )


def parse_camera_payload(obj: dict) -> tuple[list[Camera], list[AdapterRule]]:
    """Split the combined camera payload into cameras and adapter rules."""
    cameras = [parse_camera(c) for c in obj.get("cameras") or []]
    rules = [parse_adapter_rule(r) for r in obj.get("adapter_rules") or []]
    return cameras, rules


# ── Accessories ────────────────────────────────────────────────────

def parse_accessory(data: dict) -> Accessory:
    specs = data.get("specs") or {}
    return Accessory(
        id=as_text(data["id"]),
        brand=as_text(data.get("brand")),
        model=as_text(data.get("model")),
        category=as_text(data.get("category")),
        subtype=as_text(data.get("subtype")),
        specs=tuple((str(k), as_text(v)) for k, v in specs.items()) if isinstance(specs, dict) else (),
        compatible_with=as_text(data.get("compatible_with")),
    )


# ── Compatibility matrix ───────────────────────────────────────────

def parse_compatibility_csv(text: str) -> list[CompatibilityRule]:
    """Parse the camera × accessory matrix.

    The first two lines (header and an info row) are skipped.  Fields are
    split on plain commas; anything past the fourth field is dropped.
    """
    rules: list[CompatibilityRule] = []
    for line in text.split("\n")[2:]:
        if not line.strip():
            continue
        parts = line.split(",")
        if len(parts) < 4:
            continue
        rules.append(CompatibilityRule(
            camera_id=parts[0].strip(),
            accessory_id=parts[1].strip(),
            compatible=parts[2].strip().lower() == "true",
            reason=parts[3].strip(),
        ))
    return rules


# ── Source access ──────────────────────────────────────────────────

def _is_url(source: str) -> bool:
    return source.startswith(("http://", "https://"))


def _is_not_found(exc: Exception) -> bool:
    if isinstance(exc, FileNotFoundError):
        return True
    resp = getattr(exc, "response", None)
    return resp is not None and resp.status_code == 404


def read_source(source: str, filename: str, timeout: float = 10.0) -> str:
    """Read one catalog file from a directory or an HTTP base URL."""
    if _is_url(source):
        url = source.rstrip("/") + "/" + quote(filename)
        resp = requests.get(url, timeout=timeout)
        resp.raise_for_status()
        resp.encoding = resp.encoding or "utf-8"
        return resp.text
    return (Path(source) / filename).read_text(encoding="utf-8")


# ── Public API ─────────────────────────────────────────────────────

def load_catalog(source: str | Path | None = None, *, timeout: float = 10.0) -> CatalogResult:
    """Load every catalog table from *source* into one snapshot.

    A file that is missing or cannot be parsed is recorded as a LoadIssue
    and contributes nothing; the remaining tables still load.  Lens
    sources are optional: an absent lens CSV is skipped without an issue.
    """
    src = str(source or DATA_DIR)
    issues: list[LoadIssue] = []

    def _fetch(filename: str, optional: bool = False) -> str | None:
        try:
            return read_source(src, filename, timeout=timeout)
        except (FileNotFoundError, requests.HTTPError) as exc:
            if optional and _is_not_found(exc):
                log.debug("Skipping absent lens source %s", filename)
                return None
            log.warning("Could not read %s: %s", filename, exc)
            issues.append(LoadIssue(filename, "file", f"Read error: {exc}"))
            return None
        except (OSError, requests.RequestException) as exc:
            log.warning("Could not read %s: %s", filename, exc)
            issues.append(LoadIssue(filename, "file", f"Read error: {exc}"))
            return None

    def _fetch_json(filename: str):
        text = _fetch(filename)
        if text is None:
            return None
        try:
            return json.loads(text)
        except json.JSONDecodeError as exc:
            log.warning("Invalid JSON in %s: %s", filename, exc)
            issues.append(LoadIssue(filename, "json", f"Parse error: {exc}"))
            return None

    # Lenses
    lenses: list[Lens] = []
    for filename, category, default_type in LENS_SOURCES:
        text = _fetch(filename, optional=True)
        if text is None:
            continue
        try:
            lenses.extend(parse_lens_csv(text, category, default_type))
        except csv.Error as exc:
            issues.append(LoadIssue(filename, "csv", f"Parse error: {exc}"))

    def _parse_each(filename: str, records, parse, what: str) -> list:
        """Parse each record on its own; a bad record is recorded and skipped."""
        if records is None:
            return []
        if not isinstance(records, list):
            issues.append(LoadIssue(filename, "parse", f"Expected a list of {what}"))
            return []
        out = []
        for n, data in enumerate(records):
            try:
                out.append(parse(data))
            except (KeyError, TypeError, AttributeError) as exc:
                log.warning("Skipping %s #%d in %s: %s", what, n, filename, exc)
                issues.append(LoadIssue(
                    filename, "parse", f"{what} #{n}: Missing/invalid field: {exc}"))
        return out

    # Cameras + adapter rules
    cameras: list[Camera] = []
    adapter_rules: list[AdapterRule] = []
    payload = _fetch_json(CAMERAS_FILE)
    if isinstance(payload, dict):
        cameras = _parse_each(CAMERAS_FILE, payload.get("cameras"), parse_camera, "cameras")
        adapter_rules = _parse_each(
            CAMERAS_FILE, payload.get("adapter_rules"), parse_adapter_rule, "adapter_rules")
    elif payload is not None:
        issues.append(LoadIssue(CAMERAS_FILE, "parse", "Expected an object with 'cameras'"))

    # Accessories (two sources, concatenated)
    accessories: list[Accessory] = []
    for filename in ACCESSORY_FILES:
        data = _fetch_json(filename)
        if data is None:
            continue
        accessories.extend(_parse_each(filename, data, parse_accessory, "accessories"))

    # Compatibility matrix
    matrix: list[CompatibilityRule] = []
    text = _fetch(MATRIX_FILE)
    if text is not None:
        matrix = parse_compatibility_csv(text)

    issues.extend(_duplicate_ids("cameras", [c.id for c in cameras]))
    issues.extend(_duplicate_ids("accessories", [a.id for a in accessories]))

    log.info("Loaded %d lenses", len(lenses))
    log.info("Loaded %d cameras, %d adapter rules", len(cameras), len(adapter_rules))
    log.info("Loaded %d accessories", len(accessories))
    log.info("Loaded %d compatibility rules", len(matrix))

    snapshot = CatalogSnapshot(
        lenses=tuple(lenses),
        cameras=tuple(cameras),
        accessories=tuple(accessories),
        adapter_rules=tuple(adapter_rules),
        compatibility_matrix=tuple(matrix),
    )
    return CatalogResult(catalog=snapshot, issues=issues)


def _duplicate_ids(table: str, ids: list[str]) -> list[LoadIssue]:
    counts: dict[str, int] = {}
    for i in ids:
        counts[i] = counts.get(i, 0) + 1
    return [
        LoadIssue(table, "id", f"Duplicate id '{i}' (appears {n} times)")
        for i, n in counts.items() if n > 1
    ]
