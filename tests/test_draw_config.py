from __future__ import annotations

import unittest

from luvatrix_draw.config import DEFAULT_EXPORT_CONFIG, ExportConfig, validate_export_config
from luvatrix_draw.style import WHITE, Color


class ExportConfigTests(unittest.TestCase):
    def test_defaults(self) -> None:
        self.assertEqual(DEFAULT_EXPORT_CONFIG, ExportConfig(1.0, "#FFFFFF", "sans-serif"))
        self.assertEqual(DEFAULT_EXPORT_CONFIG.background_color, WHITE)

    def test_from_env_reads_overrides(self) -> None:
        cfg = ExportConfig.from_env(
            {
                "LUVATRIX_DRAW_SCALE": "2.5",
                "LUVATRIX_DRAW_BACKGROUND": "black",
                "LUVATRIX_DRAW_FONT_FAMILY": "DejaVu Sans",
            }
        )
        self.assertEqual(cfg.scale, 2.5)
        self.assertEqual(cfg.background_color, Color(0.0, 0.0, 0.0))
        self.assertEqual(cfg.font_family_fallback, "DejaVu Sans")

    def test_from_env_ignores_empty_values(self) -> None:
        self.assertEqual(ExportConfig.from_env({"LUVATRIX_DRAW_SCALE": ""}), DEFAULT_EXPORT_CONFIG)
        self.assertEqual(ExportConfig.from_env({}), DEFAULT_EXPORT_CONFIG)

    def test_from_env_rejects_bad_scale(self) -> None:
        with self.assertRaises(ValueError):
            ExportConfig.from_env({"LUVATRIX_DRAW_SCALE": "big"})
        with self.assertRaises(ValueError):
            ExportConfig.from_env({"LUVATRIX_DRAW_SCALE": "-1"})

    def test_validate_rejects_bad_settings(self) -> None:
        for overrides in (
            {"scale": 0},
            {"scale": "2"},
            {"background": "#12"},
            {"font_family_fallback": "  "},
            {"dpi": 300},
        ):
            with self.subTest(overrides=overrides):
                with self.assertRaises(ValueError):
                    validate_export_config(overrides)

    def test_validate_normalizes_scale(self) -> None:
        cfg = validate_export_config({"scale": 3})
        self.assertIsInstance(cfg.scale, float)
        self.assertEqual(cfg.scale, 3.0)

    def test_background_color_rejects_unparseable_value(self) -> None:
        with self.assertRaises(ValueError):
            _ = ExportConfig(background="nope").background_color


if __name__ == "__main__":
    unittest.main()
