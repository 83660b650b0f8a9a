from __future__ import annotations

from typing import Any, Protocol, Sequence

import numpy as np


class PathPaintSink(Protocol):
    """The subset of a ``cairo.Context`` the replay loop drives.

    Any object offering these calls (a recording fake in tests, another cairo
    binding) can stand in for the real context.
    """

    def save(self) -> None:
        ...

    def restore(self) -> None:
        ...

    def translate(self, tx: float, ty: float) -> None:
        ...

    def scale(self, sx: float, sy: float) -> None:
        ...

    def transform(self, matrix: Any) -> None:
        ...

    def new_path(self) -> None:
        ...

    def new_sub_path(self) -> None:
        ...

    def move_to(self, x: float, y: float) -> None:
        ...

    def line_to(self, x: float, y: float) -> None:
        ...

    def curve_to(self, x1: float, y1: float, x2: float, y2: float, x3: float, y3: float) -> None:
        ...

    def close_path(self) -> None:
        ...

    def has_current_point(self) -> bool:
        ...

    def get_current_point(self) -> tuple[float, float]:
        ...

    def rectangle(self, x: float, y: float, width: float, height: float) -> None:
        ...

    def arc(self, xc: float, yc: float, radius: float, angle1: float, angle2: float) -> None:
        ...

    def arc_negative(self, xc: float, yc: float, radius: float, angle1: float, angle2: float) -> None:
        ...

    def copy_path(self) -> Any:
        ...

    def append_path(self, path: Any) -> None:
        ...

    def set_source_rgba(self, red: float, green: float, blue: float, alpha: float) -> None:
        ...

    def set_line_width(self, width: float) -> None:
        ...

    def set_dash(self, dashes: Sequence[float], offset: float = 0) -> None:
        ...

    def stroke(self) -> None:
        ...

    def fill(self) -> None:
        ...

    def fill_preserve(self) -> None:
        ...

    def clip(self) -> None:
        ...

    def reset_clip(self) -> None:
        ...


class TextProvider(Protocol):
    """Font resolution, measurement and glyph drawing at the current point."""

    def select_font_face(self, family: str, slant: Any, weight: Any) -> None:
        ...

    def set_font_size(self, size: float) -> None:
        ...

    def text_extents(self, text: str) -> Any:
        ...

    def show_text(self, text: str) -> None:
        ...


class ImageEncoder(Protocol):
    """Turns an ``(height, width, 4)`` uint8 RGBA array into encoded bytes."""

    def encode(self, rgba: np.ndarray) -> bytes:
        ...


class DrawingHost(PathPaintSink, TextProvider, Protocol):
    """A context that both paints paths and draws text (``cairo.Context``)."""
