from __future__ import annotations

import io
import logging
import sys
from typing import Sequence, Union

import cairo
import numpy as np
from PIL import Image

from ..commands import Command
from ..config import DEFAULT_EXPORT_CONFIG, ExportConfig
from ..context import DrawingContext
from .cairo_backend import render_commands
from .protocols import ImageEncoder

LOGGER = logging.getLogger(__name__)

RGBA = tuple[int, int, int, int]
CommandSource = Union[DrawingContext, Sequence[Command]]


class PillowPNGEncoder:
    """PNG encoding through Pillow."""

    def __init__(self, optimize: bool = False) -> None:
        self._optimize = optimize

    def encode(self, rgba: np.ndarray) -> bytes:
        image = Image.fromarray(np.ascontiguousarray(rgba, dtype=np.uint8))
        out = io.BytesIO()
        image.save(out, format="PNG", optimize=self._optimize)
        return out.getvalue()


def new_canvas(width: int, height: int, color: RGBA = (255, 255, 255, 255)) -> np.ndarray:
    canvas = np.zeros((height, width, 4), dtype=np.uint8)
    canvas[:, :, 0] = color[0]
    canvas[:, :, 1] = color[1]
    canvas[:, :, 2] = color[2]
    canvas[:, :, 3] = color[3]
    return canvas


def render_to_rgba(
    source: CommandSource,
    width: float,
    height: float,
    scale: float | None = None,
    *,
    config: ExportConfig | None = None,
) -> np.ndarray | None:
    """Rasterize to an ``(height*scale, width*scale, 4)`` uint8 RGBA array.

    Returns None when the pixel surface cannot be created or drawn.
    """

    cfg = config or DEFAULT_EXPORT_CONFIG
    factor = cfg.scale if scale is None else scale
    px_w = int(width * factor)
    px_h = int(height * factor)
    if factor <= 0 or px_w <= 0 or px_h <= 0:
        LOGGER.warning("cannot rasterize %sx%s at scale %s: empty pixel surface", width, height, factor)
        return None

    commands = _as_commands(source)
    canvas = new_canvas(px_w, px_h, _to_native_argb32(cfg.background_color.to_rgba8()))
    try:
        surface = cairo.ImageSurface.create_for_data(canvas, cairo.FORMAT_ARGB32, px_w, px_h, px_w * 4)
    except (cairo.Error, MemoryError, TypeError, ValueError) as exc:
        LOGGER.warning("cannot create %dx%d image surface: %s", px_w, px_h, exc)
        return None
    try:
        ctx = cairo.Context(surface)
        ctx.scale(factor, factor)
        render_commands(commands, ctx, width, height, font_family_fallback=cfg.font_family_fallback)
        surface.flush()
    except (cairo.Error, ValueError) as exc:
        # ValueError: pycairo rejects text it cannot encode as UTF-8.
        LOGGER.warning("raster replay failed: %s", exc)
        return None
    finally:
        surface.finish()
    return _argb32_to_rgba(canvas)


def render_to_png(
    source: CommandSource,
    width: float,
    height: float,
    scale: float | None = None,
    *,
    config: ExportConfig | None = None,
    encoder: ImageEncoder | None = None,
) -> bytes | None:
    rgba = render_to_rgba(source, width, height, scale, config=config)
    if rgba is None:
        return None
    codec = encoder if encoder is not None else PillowPNGEncoder()
    try:
        data = codec.encode(rgba)
    except Exception as exc:
        LOGGER.warning("image encoder %s failed: %s", type(codec).__name__, exc)
        return None
    LOGGER.debug("encoded %dx%d image into %d bytes", rgba.shape[1], rgba.shape[0], len(data))
    return data


def render_to_pdf(
    source: CommandSource,
    width: float,
    height: float,
    *,
    config: ExportConfig | None = None,
) -> bytes | None:
    """Replay once onto a single PDF page of ``width x height`` points."""

    cfg = config or DEFAULT_EXPORT_CONFIG
    if width <= 0 or height <= 0:
        LOGGER.warning("cannot open a %sx%s PDF page", width, height)
        return None

    commands = _as_commands(source)
    out = io.BytesIO()
    try:
        surface = cairo.PDFSurface(out, width, height)
    except (cairo.Error, MemoryError, TypeError, ValueError) as exc:
        LOGGER.warning("cannot create PDF surface: %s", exc)
        return None
    try:
        ctx = cairo.Context(surface)
        render_commands(commands, ctx, width, height, font_family_fallback=cfg.font_family_fallback)
        ctx.show_page()
    except (cairo.Error, ValueError) as exc:
        LOGGER.warning("PDF replay failed: %s", exc)
        return None
    finally:
        surface.finish()
    return out.getvalue()


def _as_commands(source: CommandSource) -> Sequence[Command]:
    if isinstance(source, DrawingContext):
        return source.commands
    return tuple(source)


def _to_native_argb32(color: RGBA) -> RGBA:
    r, g, b, a = (int(c) for c in color)
    # cairo stores premultiplied ARGB in native-endian 32-bit words.
    r, g, b = (r * a) // 255, (g * a) // 255, (b * a) // 255
    if sys.byteorder == "little":
        return (b, g, r, a)
    return (a, r, g, b)


def _argb32_to_rgba(canvas: np.ndarray) -> np.ndarray:
    order = [2, 1, 0, 3] if sys.byteorder == "little" else [1, 2, 3, 0]
    pixels = canvas[:, :, order].astype(np.uint16)
    alpha = pixels[:, :, 3:4]
    safe_alpha = np.where(alpha == 0, 1, alpha)
    rgb = np.where(alpha == 0, 0, (pixels[:, :, :3] * 255 + safe_alpha // 2) // safe_alpha)
    out = np.empty(canvas.shape, dtype=np.uint8)
    out[:, :, :3] = np.clip(rgb, 0, 255).astype(np.uint8)
    out[:, :, 3] = alpha[:, :, 0].astype(np.uint8)
    return out
