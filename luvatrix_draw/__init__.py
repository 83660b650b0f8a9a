from luvatrix_draw.commands import Command, command_name
from luvatrix_draw.config import ExportConfig, validate_export_config
from luvatrix_draw.context import DrawingContext, Rect
from luvatrix_draw.style import (
    Color,
    FontWeight,
    LineStyle,
    MarkerStyle,
    TextAnchor,
    TextStyle,
)
from luvatrix_draw.transform import AffineTransform

__all__ = [
    "AffineTransform",
    "Color",
    "Command",
    "DrawingContext",
    "ExportConfig",
    "FontWeight",
    "LineStyle",
    "MarkerStyle",
    "Rect",
    "TextAnchor",
    "TextStyle",
    "command_name",
    "validate_export_config",
]
