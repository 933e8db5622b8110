"""Unit tests for branding settings and their persistence."""
import json
import os
import shutil
import tempfile
import unittest

from skatetrack.models import BrandingSettings, adjust_color
from skatetrack.services import (
    BrandingService, BrandingValidationError, InMemoryKeyValueStore, JsonFileKeyValueStore
)


class TestBrandingSettings(unittest.TestCase):

    def test_adjust_color_clamps_channels(self) -> None:
        self.assertEqual(adjust_color("#3b82f6", 40), "#63aaff")
        self.assertEqual(adjust_color("#3b82f6", -40), "#135ace")
        self.assertEqual(adjust_color("#101010", -40), "#000000")

    def test_css_variables(self) -> None:
        variables = BrandingSettings().css_variables()
        self.assertEqual(variables["--brand-color"], "#3b82f6")
        self.assertEqual(variables["--brand-color-light"], "#63aaff")
        self.assertEqual(variables["--primary-foreground"], "#ffffff")

    def test_style_for_elements(self) -> None:
        settings = BrandingSettings(brand_color="#ff0000")
        self.assertEqual(settings.style_for("button"), {"backgroundColor": "#ff0000", "color": "#ffffff"})
        self.assertEqual(settings.style_for("border"), {"borderColor": "#ff0000"})
        self.assertEqual(settings.style_for("unknown"), {})


class TestBrandingService(unittest.TestCase):

    def test_load_uses_defaults_for_missing_keys(self) -> None:
        store = InMemoryKeyValueStore({"brandName": "Ramp City", "brandColor": ""})
        settings = BrandingService(store).load()
        self.assertEqual(settings.brand_name, "Ramp City")
        self.assertEqual(settings.brand_color, "#3b82f6")
        self.assertEqual(settings.logo_url, "")

    def test_update_writes_all_keys(self) -> None:
        store = InMemoryKeyValueStore()
        service = BrandingService(store)
        service.load()
        service.update(brand_color="#22C55E")
        self.assertEqual(store.get_item("brandColor"), "#22c55e")
        self.assertEqual(store.get_item("brandName"), "SkateTrack")
        self.assertEqual(store.get_item("logoUrl"), "")

    def test_invalid_changes_are_rejected(self) -> None:
        store = InMemoryKeyValueStore()
        service = BrandingService(store)
        with self.assertRaises(BrandingValidationError):
            service.update(brand_color="blue")
        with self.assertRaises(BrandingValidationError):
            service.update(brand_name="   ")
        self.assertIsNone(store.get_item("brandName"))

    def test_non_text_values_are_rejected(self) -> None:
        store = InMemoryKeyValueStore()
        service = BrandingService(store)
        for changes in ({"brand_name": 5}, {"brand_color": ["#ffffff"]}, {"logo_url": {}}):
            with self.subTest(changes=changes):
                with self.assertRaises(BrandingValidationError):
                    service.update(**changes)
        self.assertIsNone(store.get_item("brandName"))

    def test_reset_restores_defaults(self) -> None:
        service = BrandingService(InMemoryKeyValueStore({"brandName": "Old"}))
        service.load()
        self.assertEqual(service.reset().brand_name, "SkateTrack")


class TestJsonFileStore(unittest.TestCase):

    def setUp(self) -> None:
        self.temp_dir = tempfile.mkdtemp()
        self.path = os.path.join(self.temp_dir, "prefs", "branding.json")

    def tearDown(self) -> None:
        shutil.rmtree(self.temp_dir)

    def test_preferences_survive_a_new_service(self) -> None:
        BrandingService(JsonFileKeyValueStore(self.path)).update(brand_name="Bowl Riders")

        with open(self.path, "r", encoding="utf-8") as f:
            self.assertEqual(json.load(f)["brandName"], "Bowl Riders")

        reloaded = BrandingService(JsonFileKeyValueStore(self.path)).load()
        self.assertEqual(reloaded.brand_name, "Bowl Riders")

    def test_missing_file_reads_as_empty(self) -> None:
        self.assertIsNone(JsonFileKeyValueStore(self.path).get_item("brandName"))

    def test_non_object_document_rejected(self) -> None:
        os.makedirs(os.path.dirname(self.path))
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump(["not", "an", "object"], f)
        with self.assertRaises(ValueError):
            JsonFileKeyValueStore(self.path).get_item("brandName")


if __name__ == "__main__":
    unittest.main()
