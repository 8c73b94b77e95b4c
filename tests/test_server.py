"""API tests — exercises the FastAPI app against the sample catalog in data/."""

from __future__ import annotations

import os
import unittest
from unittest import mock

from fastapi.testclient import TestClient

from setkit.config import DATA_DIR
from setkit.web import server


class TestApi(unittest.TestCase):

    @classmethod
    def setUpClass(cls):
        cls._env = mock.patch.dict(os.environ, {"SETKIT_DATA": str(DATA_DIR)})
        cls._env.start()
        server.get_catalog.cache_clear()
        cls.client = TestClient(server.app)

    @classmethod
    def tearDownClass(cls):
        server.get_catalog.cache_clear()
        cls._env.stop()

    # ── catalog ──

    def test_catalog_summary(self):
        body = self.client.get("/api/catalog").json()
        self.assertTrue(body["ok"])
        self.assertEqual(body["camera_count"], 4)
        self.assertEqual(body["lens_count"], 8)
        self.assertIn("Power", body["accessory_categories"])

    def test_reload(self):
        resp = self.client.post("/api/reload")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["accessory_count"], 9)

    def test_search_endpoints(self):
        self.assertEqual(self.client.get("/api/lenses", params={"manufacturer": "Zeiss"}).json()["count"], 2)
        self.assertEqual(self.client.get("/api/lenses", params={"lens_type": "zoom"}).json()["count"], 3)
        self.assertEqual(self.client.get("/api/cameras", params={"sensor": "Super 35"}).json()["count"], 3)
        self.assertEqual(self.client.get("/api/accessories", params={"category": "Power"}).json()["count"], 3)

    def test_accessory_text_search(self):
        body = self.client.get("/api/accessories", params={"text": "mount"}).json()
        self.assertEqual([a["id"] for a in body["accessories"]], ["ARRI_B_MOUNT_BATTERY_290"])
        body = self.client.get("/api/accessories",
                               params={"category": "monitor", "text": "smallhd"}).json()
        self.assertEqual([a["id"] for a in body["accessories"]], ["SMALLHD_CINE7"])

    def test_compare_lenses(self):
        resp = self.client.get("/api/lenses/compare", params={
            "ids": ["Zeiss-Ultra Prime-32mm", "Fujinon-Premista-28-100mm"]})
        self.assertEqual(resp.status_code, 200)
        rows = {r["label"]: r["values"] for r in resp.json()["rows"]}
        self.assertEqual(rows["Focal Length"], ["32mm", "28-100mm"])
        self.assertEqual(rows["Mount"], ["PL", "PL"])
        self.assertEqual(rows["Category"], ["35mm primes", "full frame zooms"])

    def test_compare_lenses_errors(self):
        self.assertEqual(self.client.get("/api/lenses/compare").status_code, 400)
        self.assertEqual(self.client.get("/api/lenses/compare",
                                         params={"ids": ["nope"]}).status_code, 404)
        four = ["Zeiss-Ultra Prime-32mm"] * 4
        self.assertEqual(self.client.get("/api/lenses/compare",
                                         params={"ids": four}).status_code, 400)

    # ── compatibility ──

    def test_compatible_lenses_for_camera(self):
        body = self.client.get("/api/cameras/ARRI_ALEXA_MINI_LF/lenses").json()
        self.assertEqual(body["count"], 6)
        statuses = {l["name"]: l["compatibility"]["status"] for l in body["lenses"]}
        self.assertEqual(statuses["Supreme Prime"], "native")
        self.assertEqual(statuses["Ultra Prime"], "adapter")

    def test_compatible_accessories_for_camera(self):
        body = self.client.get("/api/cameras/ARRI_ALEXA_MINI_LF/accessories").json()
        self.assertEqual(
            [a["id"] for a in body["accessories"]],
            ["SMALLHD_CINE7", "SDI_BNC_12G_3FT", "CORE_SWX_HYPERCORE_98",
             "ARRI_B_MOUNT_BATTERY_290", "CODEX_COMPACT_DRIVE_2TB"],
        )

    def test_unknown_camera(self):
        self.assertEqual(self.client.get("/api/cameras/NOPE/lenses").status_code, 404)

    def test_check_lens(self):
        resp = self.client.post("/api/compat/lens", json={
            "camera_id": "SONY_VENICE_2", "lens_id": "Zeiss-Supreme Prime-50mm"})
        self.assertEqual(resp.json(), {
            "compatible": False,
            "status": "incompatible",
            "message": "✗ Incompatible: No adapter available",
        })

    def test_check_lens_unknown_lens(self):
        resp = self.client.post("/api/compat/lens", json={"camera_id": "SONY_VENICE_2", "lens_id": "x"})
        self.assertEqual(resp.status_code, 404)

    def test_check_accessory(self):
        resp = self.client.post("/api/compat/accessory", json={
            "camera_id": "RED_KOMODO_6K", "accessory_id": "ARRI_B_MOUNT_BATTERY_290"})
        body = resp.json()
        self.assertIs(body["compatible"], False)
        self.assertEqual(body["message"], "✗ Power draw exceeds rating")

    # ── package ──

    def test_validate_without_camera(self):
        resp = self.client.post("/api/package/validate", json={"items": [
            {"itemType": "lens", "manufacturer": "Zeiss", "name": "Ultra Prime",
             "focal length": "32mm", "original mount": "PL"},
        ]})
        self.assertEqual(resp.json(), {
            "errors": [], "warnings": ["Add a camera to validate compatibility"]})

    def test_validate_package(self):
        resp = self.client.post("/api/package/validate", json={"items": [
            {"itemType": "camera", "id": "RED_KOMODO_6K", "brand": "RED", "model": "KOMODO 6K",
             "native_mount": "RF", "video_io": ["12G-SDI"],
             "power": {"mount": "Canon BP", "voltage": "7.2V"}},
            {"itemType": "lens", "manufacturer": "Zeiss", "name": "Ultra Prime",
             "focal length": "32mm", "original mount": "PL"},
            {"itemType": "accessory", "id": "ARRI_B_MOUNT_BATTERY_290", "brand": "ARRI",
             "model": "B-Mount Battery 290 Wh", "category": "Power", "specs": {"mount": "B-Mount"}},
        ]})
        self.assertEqual(resp.json(), {
            "errors": ["ARRI B-Mount Battery 290 Wh: ✗ Power draw exceeds rating"],
            "warnings": ["Zeiss Ultra Prime: ⚠ Wooden Camera RF-PL adapter"],
        })

    def test_export(self):
        resp = self.client.post("/api/package/export", json={"items": [
            {"itemType": "custom", "name": "Sandbags", "notes": "x12"},
        ]})
        self.assertEqual(resp.status_code, 200)
        self.assertTrue(resp.text.startswith("Camera Package List\n\n1. Sandbags\n"))
        self.assertIn("camera-package.txt", resp.headers["content-disposition"])

    def test_export_empty(self):
        self.assertEqual(self.client.post("/api/package/export", json={"items": []}).status_code, 400)

    def test_recommendations(self):
        resp = self.client.post("/api/recommendations", json={
            "project_type": "commercial", "camera_format": "FF",
            "aesthetic": "neutral", "focal_need": "zoom"})
        self.assertEqual(resp.json()["count"], 3)
        missing = self.client.post("/api/recommendations", json={"camera_format": "FF"})
        self.assertEqual(missing.status_code, 400)


if __name__ == "__main__":
    unittest.main()
