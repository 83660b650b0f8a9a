from __future__ import annotations

from dataclasses import asdict, dataclass
import os
from typing import Any, Mapping

from .style import Color

ENV_SCALE = "LUVATRIX_DRAW_SCALE"
ENV_BACKGROUND = "LUVATRIX_DRAW_BACKGROUND"
ENV_FONT_FAMILY = "LUVATRIX_DRAW_FONT_FAMILY"


@dataclass(frozen=True)
class ExportConfig:
    """Raster/document export settings shared by the cairo backends."""

    scale: float = 1.0
    background: str = "#FFFFFF"
    font_family_fallback: str = "sans-serif"

    @property
    def background_color(self) -> Color:
        color = Color.parse(self.background)
        if color is None:
            raise ValueError(f"`background` is not a color: {self.background!r}")
        return color

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> ExportConfig:
        env = os.environ if environ is None else environ
        overrides: dict[str, Any] = {}
        if env.get(ENV_SCALE):
            try:
                overrides["scale"] = float(env[ENV_SCALE])
            except ValueError as exc:
                raise ValueError(f"{ENV_SCALE} must be a number, got {env[ENV_SCALE]!r}") from exc
        if env.get(ENV_BACKGROUND):
            overrides["background"] = env[ENV_BACKGROUND]
        if env.get(ENV_FONT_FAMILY):
            overrides["font_family_fallback"] = env[ENV_FONT_FAMILY]
        return validate_export_config(overrides)


DEFAULT_EXPORT_CONFIG = ExportConfig()


def validate_export_config(overrides: Mapping[str, Any] | None = None) -> ExportConfig:
    """Merge overrides onto the defaults and validate the result."""

    raw: dict[str, Any] = asdict(DEFAULT_EXPORT_CONFIG)
    if overrides:
        for key, value in overrides.items():
            if key not in raw:
                raise ValueError(f"Unknown export setting: {key}")
            raw[key] = value

    if not isinstance(raw["scale"], (int, float)) or float(raw["scale"]) <= 0:
        raise ValueError("Setting `scale` must be a positive number")
    if not isinstance(raw["background"], str) or Color.parse(raw["background"]) is None:
        raise ValueError("Setting `background` must be a hex color or a color name")
    if not isinstance(raw["font_family_fallback"], str) or not raw["font_family_fallback"].strip():
        raise ValueError("Setting `font_family_fallback` must be a non-empty string")

    return ExportConfig(
        scale=float(raw["scale"]),
        background=str(raw["background"]),
        font_family_fallback=str(raw["font_family_fallback"]),
    )
