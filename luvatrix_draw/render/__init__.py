from .cairo_backend import render_commands
from .raster import PillowPNGEncoder, render_to_pdf, render_to_png, render_to_rgba
from .svg import render_to_svg

__all__ = [
    "PillowPNGEncoder",
    "render_commands",
    "render_to_pdf",
    "render_to_png",
    "render_to_rgba",
    "render_to_svg",
]
