"""
SetKit — entry point.

Usage:
    python -m setkit serve                      # start web server on :8000
    python -m setkit serve --port 3000
    python -m setkit validate package.json      # check a saved package
    python -m setkit check ARRI_ALEXA_MINI_LF   # compatible gear for a camera
"""

from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from pathlib import Path

from setkit.config import load_settings


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="setkit", description="Camera package builder and compatibility checker")
    sub = p.add_subparsers(dest="cmd", required=True)

    sv = sub.add_parser("serve", help="Start the web API server")
    sv.add_argument("--host", default=None, help="Host to bind")
    sv.add_argument("--port", type=int, default=None, help="Port to bind")
    sv.add_argument("--data", default=None, help="Catalog directory or base URL")

    v = sub.add_parser("validate", help="Validate a package JSON file (item list or {\"items\": [...]})")
    v.add_argument("package", help="Path to package JSON")
    v.add_argument("--data", default=None, help="Catalog directory or base URL")

    c = sub.add_parser("check", help="Count lenses and accessories compatible with a camera")
    c.add_argument("camera_id", help="Camera id from the catalog")
    c.add_argument("--data", default=None, help="Catalog directory or base URL")

    return p


def _load(data: str | None, timeout: float):
    from setkit.catalog import load_catalog

    result = load_catalog(data, timeout=timeout)
    for issue in result.issues:
        logging.getLogger("setkit").warning("%s", issue)
    return result.catalog


def _package_items(raw) -> list[dict] | None:
    """Item list from a saved package: a bare list or the API body ``{"items": [...]}``."""
    if isinstance(raw, dict):
        raw = raw.get("items")
    if not isinstance(raw, list) or not all(isinstance(i, dict) for i in raw):
        return None
    return raw


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    settings = load_settings()
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    data = getattr(args, "data", None) or settings.data_source

    if args.cmd == "serve":
        os.environ["SETKIT_DATA"] = data
        from setkit.web.server import main as serve
        serve(host=args.host or settings.host, port=args.port or settings.port)
        return 0

    if args.cmd == "validate":
        from setkit.package import parse_package, validate_package

        try:
            raw = json.loads(Path(args.package).read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            print(f"Cannot read package {args.package}: {exc}")
            return 2
        items = _package_items(raw)
        if items is None:
            print(f"{args.package}: expected a list of items or an object with an 'items' list")
            return 2
        catalog = _load(data, settings.fetch_timeout_s)
        report = validate_package(parse_package(items), catalog)
        for err in report.errors:
            print(f"ERROR   {err}")
        for warn in report.warnings:
            print(f"WARNING {warn}")
        if report.ok and not report.warnings:
            print("✅ Package is compatible")
        return 0 if report.ok else 1

    if args.cmd == "check":
        from setkit.compat import get_compatible_lenses, get_compatible_accessories

        catalog = _load(data, settings.fetch_timeout_s)
        camera = catalog.get_camera(args.camera_id)
        if camera is None:
            print(f"Unknown camera: {args.camera_id}")
            return 2
        lenses = get_compatible_lenses(catalog, camera)
        accessories = get_compatible_accessories(catalog, camera)
        print(f"{camera.brand} {camera.model} ({camera.native_mount})")
        print(f"  {len(lenses)} compatible lenses")
        print(f"  {len(accessories)} compatible accessories")
        return 0

    return 2


if __name__ == "__main__":
    sys.exit(main())
