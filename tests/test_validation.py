"""Tests for package validation and catalog-wide compatibility filtering."""

from __future__ import annotations

import unittest

from setkit.compat import CompatStatus, get_compatible_accessories, get_compatible_lenses
from setkit.package import ItemType, PackageItem, validate_package, parse_package
from tests.catalog_fixture import (
    ACCESSORIES, CAMERA_C1, CAMERA_EF, CAMERA_RF, make_accessory, make_catalog, make_lens,
)


def cam(camera) -> PackageItem:
    return PackageItem(ItemType.CAMERA, camera)


def lens(mount: str, **kw) -> PackageItem:
    return PackageItem(ItemType.LENS, make_lens(mount, **kw))


def acc(id: str, category: str, **kw) -> PackageItem:
    return PackageItem(ItemType.ACCESSORY, make_accessory(id, category, **kw))


class TestValidatePackage(unittest.TestCase):

    def setUp(self):
        self.catalog = make_catalog()

    def test_no_camera(self):
        report = validate_package([lens("EF"), acc("TX", "wireless_video")], self.catalog)
        self.assertEqual(report.to_dict(), {
            "errors": [],
            "warnings": ["Add a camera to validate compatibility"],
        })

    def test_empty_package(self):
        report = validate_package([], self.catalog)
        self.assertEqual(report.errors, [])
        self.assertEqual(report.warnings, ["Add a camera to validate compatibility"])

    def test_native_lens_is_silent(self):
        report = validate_package([cam(CAMERA_C1), lens("PL")], self.catalog)
        self.assertEqual(report.to_dict(), {"errors": [], "warnings": []})
        self.assertTrue(report.ok)

    def test_errors_and_warnings_in_package_order(self):
        items = [
            lens("LPL", manufacturer="Zeiss", name="Supreme"),
            acc("TX", "wireless_video"),
            cam(CAMERA_C1),
            lens("EF", manufacturer="Canon", name="CN-E"),
            acc("A2", "Power", specs={"mount": "V-Mount"}),
            acc("A1", "rigging"),
        ]
        report = validate_package(items, self.catalog)
        self.assertEqual(report.errors, [
            "Canon CN-E: ✗ EF lens incompatible with PL camera",
            "Acme A2: ✗ Power draw exceeds rating",
        ])
        self.assertEqual(report.warnings, [
            "Zeiss Supreme: ⚠ Requires LPL→PL adapter",
            "Acme Tx: ? Compatibility unknown",
        ])
        self.assertFalse(report.ok)

    def test_only_first_camera_is_reference(self):
        """PL lens is native on C1; the RF and EF cameras after it are ignored."""
        items = [cam(CAMERA_C1), cam(CAMERA_RF), cam(CAMERA_EF), lens("PL")]
        report = validate_package(items, self.catalog)
        self.assertEqual(report.to_dict(), {"errors": [], "warnings": []})

    def test_reference_camera_by_order(self):
        items = [cam(CAMERA_EF), cam(CAMERA_C1), lens("PL")]
        report = validate_package(items, self.catalog)
        self.assertEqual(len(report.errors), 1)
        self.assertIn("Flange distance too short", report.errors[0])

    def test_adapter_rule_lens_is_warning(self):
        report = validate_package([cam(CAMERA_RF), lens("PL", name="Ultra Prime")], self.catalog)
        self.assertEqual(report.errors, [])
        self.assertEqual(report.warnings, ["Zeiss Ultra Prime: ⚠ Wooden Camera RF-PL adapter"])

    def test_custom_items_are_ignored(self):
        items = [cam(CAMERA_C1), PackageItem(ItemType.CUSTOM, None, name="Apple box")]
        report = validate_package(items, self.catalog)
        self.assertEqual(report.to_dict(), {"errors": [], "warnings": []})

    def test_malformed_items_are_skipped(self):
        items = [
            cam(CAMERA_C1),
            PackageItem(ItemType.LENS, None, name="mystery lens"),
            PackageItem(ItemType.ACCESSORY, None, name="mystery box"),
        ]
        report = validate_package(items, self.catalog)
        self.assertEqual(report.to_dict(), {"errors": [], "warnings": []})

    def test_malformed_reference_camera_skips_everything(self):
        items = [PackageItem(ItemType.CAMERA, None), cam(CAMERA_C1), lens("EF"),
                 acc("TX", "wireless_video")]
        report = validate_package(items, self.catalog)
        self.assertEqual(report.to_dict(), {"errors": [], "warnings": []})

    def test_validates_parsed_browser_payloads(self):
        package = parse_package([
            {"itemType": "camera", "id": "C1", "brand": "ARRI", "model": "ALEXA 35",
             "native_mount": "PL", "accepted_lens_mounts": ["LPL"], "video_io": ["12G-SDI"]},
            {"manufacturer": "Zeiss", "name": "Supreme", "focal length": "50mm",
             "original mount": "LPL", "category": "full frame primes"},
            {"itemType": "accessory", "id": "A2", "brand": "Acme", "model": "Brick",
             "category": "Power", "specs": {"mount": "V-Mount"}},
        ])
        report = validate_package(package, self.catalog)
        self.assertEqual(report.errors, ["Acme Brick: ✗ Power draw exceeds rating"])
        self.assertEqual(report.warnings, ["Zeiss Supreme: ⚠ Requires LPL→PL adapter"])

    def test_does_not_mutate_inputs(self):
        items = [cam(CAMERA_C1), lens("EF")]
        before = list(items)
        validate_package(items, self.catalog)
        self.assertEqual(items, before)
        self.assertEqual(self.catalog, make_catalog())


class TestBulkCompatibility(unittest.TestCase):

    def setUp(self):
        self.catalog = make_catalog()

    def test_compatible_lenses_native_and_adapter(self):
        matches = get_compatible_lenses(self.catalog, CAMERA_C1)
        self.assertEqual([m.record.mount for m in matches], ["PL", "LPL"])
        self.assertEqual([m.compatibility.status for m in matches],
                         [CompatStatus.NATIVE, CompatStatus.ADAPTER])

    def test_compatible_lenses_via_rules(self):
        matches = get_compatible_lenses(self.catalog, CAMERA_RF)
        self.assertEqual([m.record.mount for m in matches], ["PL", "EF"])

    def test_compatible_accessories_exclude_unknown_and_negative(self):
        matches = get_compatible_accessories(self.catalog, CAMERA_C1)
        self.assertEqual([m.record.id for m in matches], ["A1", "MON_SDI", "BATT_V", "MED", "CABLE"])
        for m in matches:
            self.assertIs(m.compatibility.compatible, True)

    def test_no_camera(self):
        self.assertEqual(get_compatible_lenses(self.catalog, None), [])
        self.assertEqual(get_compatible_accessories(self.catalog, None), [])

    def test_catalog_order_preserved(self):
        matches = get_compatible_accessories(self.catalog, CAMERA_RF)
        ids = [m.record.id for m in matches]
        order = [a.id for a in ACCESSORIES]
        self.assertEqual(ids, sorted(ids, key=order.index))


if __name__ == "__main__":
    unittest.main()
