from __future__ import annotations

from dataclasses import dataclass, replace
import logging
import math
from typing import Sequence

import cairo

from ..commands import (
    Arc,
    ClipRect,
    ClosePath,
    Command,
    CurveTo,
    EllipseShape,
    FillAndStrokePath,
    FillPath,
    LineTo,
    MoveTo,
    PopTransform,
    PushTransform,
    QuadCurveTo,
    RectShape,
    ResetClip,
    RestoreState,
    SaveState,
    SetAlpha,
    SetFillColor,
    SetStrokeColor,
    SetStrokeStyle,
    SetStrokeWidth,
    StrokePath,
    Text,
)
from ..style import BLACK, Color, FontWeight, TextAnchor, TextStyle
from ..transform import IDENTITY, AffineTransform
from .protocols import DrawingHost, PathPaintSink

LOGGER = logging.getLogger(__name__)

DEFAULT_FONT_FAMILY = "sans-serif"


@dataclass(frozen=True)
class _PaintState:
    stroke: Color = BLACK
    fill: Color = BLACK
    alpha: float = 1.0


class _Replay:
    """Per-call replay state: transform stack plus the paint-state stack.

    cairo has a single source pattern, so stroke color, fill color and global
    alpha live here and are pushed/popped in lock-step with host save/restore.
    """

    def __init__(self, ctx: DrawingHost, font_family_fallback: str) -> None:
        self.ctx = ctx
        self.font_family_fallback = font_family_fallback
        self.transforms: list[AffineTransform] = [IDENTITY]
        self.paint = _PaintState()
        self.saved: list[_PaintState] = []

    def save(self) -> None:
        self.ctx.save()
        self.saved.append(self.paint)

    def restore(self) -> bool:
        if not self.saved:
            return False
        self.ctx.restore()
        self.paint = self.saved.pop()
        return True

    def unwind(self) -> None:
        while self.restore():
            pass

    def source(self, color: Color) -> None:
        self.ctx.set_source_rgba(color.red, color.green, color.blue, color.alpha * self.paint.alpha)


def render_commands(
    commands: Sequence[Command],
    ctx: DrawingHost,
    width: float,
    height: float,
    *,
    font_family_fallback: str = DEFAULT_FONT_FAMILY,
) -> None:
    """Replay ``commands`` onto a cairo context covering ``width x height``.

    The context is flipped once (``y' = height - y``) so recorded coordinates
    have their origin at the bottom-left, matching the SVG backend.
    """

    ctx.save()
    ctx.translate(0, height)
    ctx.scale(1, -1)
    ctx.new_path()
    ctx.set_line_width(1.0)
    ctx.set_dash([])

    replay = _Replay(ctx, font_family_fallback)
    try:
        for command in commands:
            _apply(replay, command)
    finally:
        replay.unwind()
        ctx.restore()
    LOGGER.debug("replayed %d commands onto %sx%s surface", len(commands), width, height)


def _apply(replay: _Replay, command: Command) -> None:
    ctx = replay.ctx
    if isinstance(command, MoveTo):
        ctx.move_to(command.x, command.y)
    elif isinstance(command, LineTo):
        ctx.line_to(command.x, command.y)
    elif isinstance(command, CurveTo):
        ctx.curve_to(command.cp1x, command.cp1y, command.cp2x, command.cp2y, command.x, command.y)
    elif isinstance(command, QuadCurveTo):
        _quad_curve_to(ctx, command)
    elif isinstance(command, ClosePath):
        ctx.close_path()
    elif isinstance(command, RectShape):
        ctx.rectangle(command.x, command.y, command.width, command.height)
    elif isinstance(command, EllipseShape):
        _ellipse(ctx, command)
    elif isinstance(command, Arc):
        if command.clockwise:
            ctx.arc_negative(command.cx, command.cy, command.r, command.start_angle, command.end_angle)
        else:
            ctx.arc(command.cx, command.cy, command.r, command.start_angle, command.end_angle)
    elif isinstance(command, Text):
        _draw_text(replay, command)
    elif isinstance(command, PushTransform):
        replay.transforms.append(replay.transforms[-1].concatenating(command.transform))
        replay.save()
        if not _is_invertible(command.transform):
            LOGGER.warning("skipping non-invertible transform %s", command.transform.as_tuple())
        else:
            ctx.transform(_to_matrix(command.transform))
    elif isinstance(command, PopTransform):
        if len(replay.transforms) > 1:
            replay.transforms.pop()
            replay.restore()
    elif isinstance(command, SetStrokeColor):
        replay.paint = replace(replay.paint, stroke=command.color)
    elif isinstance(command, SetFillColor):
        replay.paint = replace(replay.paint, fill=command.color)
    elif isinstance(command, SetAlpha):
        replay.paint = replace(replay.paint, alpha=command.alpha)
    elif isinstance(command, SetStrokeWidth):
        ctx.set_line_width(command.width)
    elif isinstance(command, SetStrokeStyle):
        pattern = command.style.dash_pattern
        ctx.set_dash(list(pattern) if pattern else [])
    elif isinstance(command, StrokePath):
        replay.source(replay.paint.stroke)
        ctx.stroke()
    elif isinstance(command, FillPath):
        replay.source(replay.paint.fill)
        ctx.fill()
    elif isinstance(command, FillAndStrokePath):
        replay.source(replay.paint.fill)
        ctx.fill_preserve()
        replay.source(replay.paint.stroke)
        ctx.stroke()
    elif isinstance(command, ClipRect):
        pending = ctx.copy_path()
        ctx.new_path()
        ctx.rectangle(command.x, command.y, command.width, command.height)
        ctx.clip()
        ctx.append_path(pending)
    elif isinstance(command, ResetClip):
        ctx.reset_clip()
    elif isinstance(command, SaveState):
        replay.save()
    elif isinstance(command, RestoreState):
        if not replay.restore():
            LOGGER.debug("ignoring restore_state without a matching save_state")
    else:
        raise TypeError(f"unsupported drawing command: {command!r}")


def _is_invertible(transform: AffineTransform) -> bool:
    # Same acceptance rule as cairo_matrix_invert: finite entries, non-zero determinant.
    if not all(math.isfinite(value) for value in transform.as_tuple()):
        return False
    det = transform.determinant()
    return det != 0.0 and math.isfinite(det)


def _to_matrix(transform: AffineTransform) -> cairo.Matrix:
    return cairo.Matrix(transform.a, transform.b, transform.c, transform.d, transform.tx, transform.ty)


def _quad_curve_to(ctx: PathPaintSink, command: QuadCurveTo) -> None:
    if ctx.has_current_point():
        x0, y0 = ctx.get_current_point()
    else:
        x0, y0 = command.cpx, command.cpy
        ctx.move_to(x0, y0)
    # Degree elevation: cubic controls sit 2/3 of the way towards the quad control.
    c1x = x0 + (2.0 / 3.0) * (command.cpx - x0)
    c1y = y0 + (2.0 / 3.0) * (command.cpy - y0)
    c2x = command.x + (2.0 / 3.0) * (command.cpx - command.x)
    c2y = command.y + (2.0 / 3.0) * (command.cpy - command.y)
    ctx.curve_to(c1x, c1y, c2x, c2y, command.x, command.y)


def _ellipse(ctx: PathPaintSink, command: EllipseShape) -> None:
    if command.rx == 0 or command.ry == 0:
        return
    ctx.save()
    ctx.translate(command.cx, command.cy)
    ctx.scale(command.rx, command.ry)
    ctx.new_sub_path()
    ctx.arc(0.0, 0.0, 1.0, 0.0, 2.0 * math.pi)
    ctx.close_path()
    ctx.restore()


def _font_weight(style: TextStyle) -> int:
    # cairo's toy API has no light face; light draws with the normal weight.
    if style.font_weight is FontWeight.BOLD:
        return cairo.FONT_WEIGHT_BOLD
    return cairo.FONT_WEIGHT_NORMAL


def _anchor_offset(anchor: TextAnchor, text_width: float) -> float:
    if anchor is TextAnchor.MIDDLE:
        return -text_width / 2.0
    if anchor is TextAnchor.END:
        return -text_width
    return 0.0


def _draw_text(replay: _Replay, command: Text) -> None:
    ctx = replay.ctx
    style = command.style
    if not command.text or style.font_size <= 0:
        return
    pending = ctx.copy_path()
    ctx.new_path()
    ctx.save()
    try:
        ctx.translate(command.x, command.y)
        # Glyphs are authored y-down; undo the global flip locally.
        ctx.scale(1, -1)
        family = style.font_family.strip() or replay.font_family_fallback
        ctx.select_font_face(family, cairo.FONT_SLANT_NORMAL, _font_weight(style))
        ctx.set_font_size(style.font_size)
        extents = ctx.text_extents(command.text)
        ctx.move_to(_anchor_offset(style.anchor, extents.width), extents.height / 4.0)
        replay.source(style.color)
        ctx.show_text(command.text)
    finally:
        ctx.restore()
        ctx.new_path()
        ctx.append_path(pending)
