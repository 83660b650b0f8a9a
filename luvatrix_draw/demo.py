from __future__ import annotations

import math

from .context import DrawingContext
from .style import BLUE, DARK_GRAY, LIGHT_GRAY, ORANGE, RED, Color, FontWeight, LineStyle, TextAnchor, TextStyle


def build_demo_scene(width: float = 320.0, height: float = 200.0) -> DrawingContext:
    """Small scene touching every command family; used by the CLI and tests."""

    ctx = DrawingContext()
    ctx.set_stroke_color(LIGHT_GRAY)
    ctx.set_stroke_width(0.5)
    ctx.set_stroke_style(LineStyle.DOTTED)
    for gx in range(0, int(width) + 1, 40):
        ctx.move_to(gx, 0)
        ctx.line_to(gx, height)
    ctx.stroke_path()

    ctx.set_stroke_style(LineStyle.SOLID)
    ctx.set_stroke_color(BLUE)
    ctx.set_stroke_width(2)
    ctx.move_to(20, 20)
    for step in range(1, 13):
        x = 20 + step * (width - 40) / 12
        y = height / 2 + math.sin(step / 2.0) * height / 4
        ctx.line_to(x, y)
    ctx.stroke_path()

    ctx.save_state()
    ctx.set_fill_color(Color.from_hex("#FFA50080") or ORANGE)
    ctx.set_stroke_color(RED)
    ctx.rect(width * 0.6, height * 0.6, width * 0.25, height * 0.25)
    ctx.fill_and_stroke_path()
    ctx.restore_state()

    ctx.translate(width * 0.25, height * 0.75)
    ctx.rotate(math.pi / 8)
    ctx.set_fill_color(RED.with_alpha(0.6))
    ctx.circle(0, 0, min(width, height) * 0.08)
    ctx.fill_path()
    ctx.pop_transform()
    ctx.pop_transform()

    ctx.set_stroke_color(DARK_GRAY)
    ctx.set_stroke_style(LineStyle.DASH_DOT)
    ctx.move_to(20, 20)
    ctx.quad_curve_to(width / 2, height, width - 20, 20)
    ctx.stroke_path()
    ctx.arc(width / 2, height / 2, 12, 0, math.pi)
    ctx.stroke_path()

    ctx.text(
        "luvatrix draw",
        width / 2,
        height - 16,
        TextStyle(font_size=14, font_weight=FontWeight.BOLD, anchor=TextAnchor.MIDDLE),
    )
    return ctx
