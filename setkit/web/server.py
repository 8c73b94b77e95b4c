"""
FastAPI web server — JSON API over the catalog, compatibility engine and packages.

The browser keeps the package in local storage and posts it with each
package request; the server holds only the loaded catalog snapshot.
"""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import Any

from fastapi import FastAPI, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse
from pydantic import BaseModel

from setkit.catalog import (
    CatalogResult, load_catalog,
    lens_to_dict, camera_to_dict, accessory_to_dict, catalog_summary,
)
from setkit.compat import (
    get_compatible_lenses, get_compatible_accessories,
    resolve_lens_compatibility, resolve_accessory_compatibility,
)
from setkit.config import load_settings
from setkit.errors import PackageError
from setkit.package import (
    parse_package, validate_package, export_package_text, EXPORT_FILENAME,
)
from setkit.search import (
    LensFilter, CameraFilter, search_lenses, search_cameras,
    filter_accessories, recommend_lenses, compare_lenses,
)

log = logging.getLogger("setkit.web")

# ── App ────────────────────────────────────────────────────────────

app = FastAPI(title="SetKit")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


# ── Catalog state (one snapshot per process, replaced wholesale) ───

@lru_cache(maxsize=1)
def get_catalog() -> CatalogResult:
    settings = load_settings()
    log.info("Loading catalog from %s", settings.data_source)
    return load_catalog(settings.data_source, timeout=settings.fetch_timeout_s)


# ── Request models ─────────────────────────────────────────────────

class LensCompatRequest(BaseModel):
    camera_id: str
    lens_id: str


class AccessoryCompatRequest(BaseModel):
    camera_id: str
    accessory_id: str


class PackageRequest(BaseModel):
    items: list[dict[str, Any]]


class RecommendationRequest(BaseModel):
    camera_format: str = ""
    aesthetic: str = ""
    focal_need: str = ""
    project_type: str = ""


def _camera_or_404(camera_id: str):
    camera = get_catalog().catalog.get_camera(camera_id)
    if camera is None:
        raise HTTPException(404, f"Unknown camera '{camera_id}'.")
    return camera


# ── Catalog routes ─────────────────────────────────────────────────

@app.get("/api/catalog")
def catalog_info():
    return catalog_summary(get_catalog())


@app.post("/api/reload")
def reload_catalog():
    """Drop the cached snapshot and load the catalog again."""
    get_catalog.cache_clear()
    return catalog_summary(get_catalog())


@app.get("/api/lenses")
def list_lenses(
    text: str = "",
    category: str = "",
    manufacturer: str = "",
    mount: str = "",
    lens_type: str = "",
    max_aperture: float | None = None,
):
    flt = LensFilter(text=text, category=category, manufacturer=manufacturer,
                     mount=mount, lens_type=lens_type, max_aperture=max_aperture)
    lenses = search_lenses(get_catalog().catalog.lenses, flt)
    return {"count": len(lenses), "lenses": [lens_to_dict(l) for l in lenses]}


@app.get("/api/lenses/compare")
def lens_comparison(ids: list[str] = Query(default=[])):
    """Spec rows for up to three lenses, in the order the ids were given."""
    if not ids:
        raise HTTPException(400, "Select lenses to compare")
    cat = get_catalog().catalog
    lenses = []
    for lens_id in ids:
        lens = cat.find_lens(lens_id)
        if lens is None:
            raise HTTPException(404, f"Unknown lens '{lens_id}'.")
        lenses.append(lens)
    try:
        rows = compare_lenses(lenses)
    except ValueError as exc:
        raise HTTPException(400, str(exc))
    return {
        "lenses": [lens_to_dict(l) for l in lenses],
        "rows": [{"label": r.label, "values": r.values} for r in rows],
    }


@app.get("/api/cameras")
def list_cameras(text: str = "", brand: str = "", mount: str = "", sensor: str = ""):
    flt = CameraFilter(text=text, brand=brand, mount=mount, sensor=sensor)
    cameras = search_cameras(get_catalog().catalog.cameras, flt)
    return {"count": len(cameras), "cameras": [camera_to_dict(c) for c in cameras]}


@app.get("/api/accessories")
def list_accessories(category: str = "all", text: str = ""):
    accessories = filter_accessories(get_catalog().catalog.accessories, category, text)
    return {"count": len(accessories), "accessories": [accessory_to_dict(a) for a in accessories]}


# ── Compatibility routes ───────────────────────────────────────────

@app.get("/api/cameras/{camera_id}/lenses")
def compatible_lenses(camera_id: str):
    camera = _camera_or_404(camera_id)
    matches = get_compatible_lenses(get_catalog().catalog, camera)
    return {
        "camera_id": camera_id,
        "count": len(matches),
        "lenses": [{**lens_to_dict(m.record), "compatibility": m.compatibility.to_dict()}
                   for m in matches],
    }


@app.get("/api/cameras/{camera_id}/accessories")
def compatible_accessories(camera_id: str):
    camera = _camera_or_404(camera_id)
    matches = get_compatible_accessories(get_catalog().catalog, camera)
    return {
        "camera_id": camera_id,
        "count": len(matches),
        "accessories": [{**accessory_to_dict(m.record), "compatibility": m.compatibility.to_dict()}
                        for m in matches],
    }


@app.post("/api/compat/lens")
def check_lens(req: LensCompatRequest):
    cat = get_catalog().catalog
    camera = _camera_or_404(req.camera_id)
    lens = cat.find_lens(req.lens_id)
    if lens is None:
        raise HTTPException(404, f"Unknown lens '{req.lens_id}'.")
    return resolve_lens_compatibility(lens, camera, cat.adapter_rules).to_dict()


@app.post("/api/compat/accessory")
def check_accessory(req: AccessoryCompatRequest):
    cat = get_catalog().catalog
    camera = _camera_or_404(req.camera_id)
    accessory = cat.get_accessory(req.accessory_id)
    if accessory is None:
        raise HTTPException(404, f"Unknown accessory '{req.accessory_id}'.")
    return resolve_accessory_compatibility(accessory, camera, cat.compatibility_matrix).to_dict()


# ── Package routes ─────────────────────────────────────────────────

@app.post("/api/package/validate")
def package_validate(req: PackageRequest):
    package = parse_package(req.items)
    return validate_package(package, get_catalog().catalog).to_dict()


@app.post("/api/package/export")
def package_export(req: PackageRequest):
    package = parse_package(req.items)
    try:
        text = export_package_text(package)
    except PackageError as exc:
        raise HTTPException(400, str(exc))
    return PlainTextResponse(
        text,
        headers={"Content-Disposition": f'attachment; filename="{EXPORT_FILENAME}"'},
    )


@app.post("/api/recommendations")
def recommendations(req: RecommendationRequest):
    if not req.project_type:
        raise HTTPException(400, "Please fill in all fields to get recommendations")
    try:
        rec = recommend_lenses(get_catalog().catalog.lenses,
                               req.camera_format, req.aesthetic, req.focal_need)
    except ValueError:
        raise HTTPException(400, "Please fill in all fields to get recommendations")
    return {
        "count": len(rec.lenses),
        "lenses": [lens_to_dict(l) for l in rec.lenses],
        "steps": rec.steps,
    }


# ── Entry point ────────────────────────────────────────────────────

def main(host: str = "127.0.0.1", port: int = 8000):
    import uvicorn
    uvicorn.run("setkit.web.server:app", host=host, port=port, reload=False)


if __name__ == "__main__":
    main()
