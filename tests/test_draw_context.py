from __future__ import annotations

from dataclasses import FrozenInstanceError
import math
import unittest

from luvatrix_draw.commands import (
    Arc,
    ClipRect,
    ClosePath,
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
    command_name,
)
from luvatrix_draw.context import DrawingContext, Rect
from luvatrix_draw.style import BLACK, BLUE, RED, LineStyle, TextStyle
from luvatrix_draw.transform import IDENTITY, AffineTransform


class CommandModelTests(unittest.TestCase):
    def test_commands_are_structural_values(self) -> None:
        self.assertEqual(MoveTo(10, 20), MoveTo(10, 20))
        self.assertNotEqual(MoveTo(10, 20), LineTo(10, 20))
        self.assertEqual(ClosePath(), ClosePath())
        self.assertEqual(Text("a", 1, 2), Text("a", 1, 2, TextStyle()))

    def test_commands_are_immutable(self) -> None:
        cmd = CurveTo(10, 20, 30, 40, 50, 60)
        with self.assertRaises(FrozenInstanceError):
            cmd.x = 0  # type: ignore[misc]

    def test_command_names(self) -> None:
        self.assertEqual(command_name(QuadCurveTo(1, 2, 3, 4)), "quad_curve_to")
        self.assertEqual(command_name(RectShape(0, 0, 1, 1)), "rect")
        self.assertEqual(command_name(EllipseShape(0, 0, 1, 1)), "ellipse")
        self.assertEqual(command_name(FillAndStrokePath()), "fill_and_stroke_path")
        self.assertEqual(command_name(Text("x", 0, 0)), "text")
        with self.assertRaises(TypeError):
            command_name("move_to")  # type: ignore[arg-type]


class DrawingContextTests(unittest.TestCase):
    def test_starts_empty(self) -> None:
        ctx = DrawingContext()
        self.assertEqual(ctx.command_count, 0)
        self.assertEqual(ctx.commands, ())
        self.assertEqual(ctx.current_transform, IDENTITY)

    def test_each_call_appends_one_command_in_order(self) -> None:
        ctx = DrawingContext()
        style = TextStyle(font_size=14, color=BLACK)
        ctx.move_to(10, 10)
        ctx.line_to(100, 10)
        ctx.curve_to(25, 50, 75, 50, 100, 0)
        ctx.quad_curve_to(50, 100, 100, 0)
        ctx.close_path()
        ctx.rect(10, 20, 100, 50)
        ctx.ellipse(50, 50, 25, 15)
        ctx.circle(50, 50, 25)
        ctx.arc(50, 50, 25, 0, math.pi)
        ctx.text("Hello", 100, 200, style)
        ctx.set_stroke_color(RED)
        ctx.set_stroke_width(2.0)
        ctx.set_stroke_style(LineStyle.DASHED)
        ctx.set_fill_color(BLUE)
        ctx.set_alpha(0.5)
        ctx.stroke_path()
        ctx.fill_path()
        ctx.fill_and_stroke_path()
        ctx.clip_rect(0, 0, 100, 100)
        ctx.reset_clip()
        ctx.save_state()
        ctx.restore_state()
        self.assertEqual(
            ctx.commands,
            (
                MoveTo(10, 10),
                LineTo(100, 10),
                CurveTo(25, 50, 75, 50, 100, 0),
                QuadCurveTo(50, 100, 100, 0),
                ClosePath(),
                RectShape(10, 20, 100, 50),
                EllipseShape(50, 50, 25, 15),
                EllipseShape(50, 50, 25, 25),
                Arc(50, 50, 25, 0, math.pi, False),
                Text("Hello", 100, 200, style),
                SetStrokeColor(RED),
                SetStrokeWidth(2.0),
                SetStrokeStyle(LineStyle.DASHED),
                SetFillColor(BLUE),
                SetAlpha(0.5),
                StrokePath(),
                FillPath(),
                FillAndStrokePath(),
                ClipRect(0, 0, 100, 100),
                ResetClip(),
                SaveState(),
                RestoreState(),
            ),
        )
        self.assertEqual(ctx.command_count, 22)
        self.assertEqual(len(ctx), 22)

    def test_no_numeric_validation(self) -> None:
        ctx = DrawingContext()
        ctx.rect(0, 0, -10, -20)
        ctx.set_alpha(3.0)
        ctx.set_stroke_width(-1)
        self.assertEqual(ctx.command_count, 3)

    def test_text_uses_default_style(self) -> None:
        ctx = DrawingContext()
        ctx.text("Hi", 1, 2)
        self.assertEqual(ctx.commands[0], Text("Hi", 1, 2, TextStyle()))

    def test_clear_resets_commands_and_transform(self) -> None:
        ctx = DrawingContext()
        ctx.move_to(0, 0)
        ctx.translate(5, 5)
        ctx.scale(2, 2)
        ctx.clear()
        self.assertEqual(ctx.command_count, 0)
        self.assertEqual(ctx.current_transform, IDENTITY)
        self.assertEqual(ctx.transform_depth, 1)

    def test_push_records_uncomposed_transform(self) -> None:
        ctx = DrawingContext()
        ctx.translate(10, 20)
        ctx.scale(2.0, 3.0)
        self.assertEqual(ctx.commands[0], PushTransform(AffineTransform.translation(10, 20)))
        self.assertEqual(ctx.commands[1], PushTransform(AffineTransform.scaling(2.0, 3.0)))
        self.assertEqual(ctx.current_transform.apply(1.0, 1.0), (22.0, 63.0))

    def test_rotate_pushes_rotation(self) -> None:
        ctx = DrawingContext()
        ctx.rotate(math.pi / 2)
        cmd = ctx.commands[0]
        assert isinstance(cmd, PushTransform)
        self.assertAlmostEqual(cmd.transform.a, math.cos(math.pi / 2))
        self.assertAlmostEqual(cmd.transform.b, math.sin(math.pi / 2))

    def test_push_then_pop_restores_previous_transform(self) -> None:
        ctx = DrawingContext()
        ctx.translate(3, 4)
        ctx.rotate(0.3)
        before = ctx.current_transform
        ctx.push_transform(AffineTransform(2, 0.5, -1, 3, 7, 8))
        self.assertNotEqual(ctx.current_transform, before)
        ctx.pop_transform()
        self.assertEqual(ctx.current_transform, before)

    def test_pop_on_identity_is_noop_but_recorded(self) -> None:
        ctx = DrawingContext()
        ctx.pop_transform()
        ctx.pop_transform()
        self.assertEqual(ctx.current_transform, IDENTITY)
        self.assertEqual(ctx.transform_depth, 1)
        self.assertEqual(ctx.commands, (PopTransform(), PopTransform()))

    def test_commands_snapshot_is_not_live(self) -> None:
        ctx = DrawingContext()
        ctx.move_to(1, 1)
        snapshot = ctx.commands
        ctx.line_to(2, 2)
        self.assertEqual(len(snapshot), 1)
        self.assertEqual(list(ctx), [MoveTo(1, 1), LineTo(2, 2)])

    def test_extend_appends_recorded_commands(self) -> None:
        first = DrawingContext()
        first.move_to(0, 0)
        first.line_to(5, 5)
        second = DrawingContext()
        second.extend(first.commands)
        self.assertEqual(second.commands, first.commands)
        self.assertEqual(second.current_transform, IDENTITY)


    def test_extend_tracks_transform_stack(self) -> None:
        source = DrawingContext()
        source.translate(10, 0)
        source.scale(2, 2)
        source.pop_transform()
        target = DrawingContext()
        target.extend(source.commands)
        self.assertEqual(target.commands, source.commands)
        self.assertEqual(target.current_transform, source.current_transform)
        self.assertEqual(target.transform_depth, 2)

    def test_extend_rejects_non_commands_atomically(self) -> None:
        ctx = DrawingContext()
        with self.assertRaises(TypeError):
            ctx.extend([MoveTo(0, 0), "line_to"])  # type: ignore[list-item]
        self.assertEqual(ctx.command_count, 0)


class BoundsTests(unittest.TestCase):
    def test_empty_surface_has_zero_bounds(self) -> None:
        self.assertEqual(DrawingContext().bounds, Rect.zero())

    def test_line_bounds(self) -> None:
        ctx = DrawingContext()
        ctx.move_to(10, 20)
        ctx.line_to(100, 150)
        b = ctx.bounds
        self.assertEqual((b.min_x, b.min_y, b.max_x, b.max_y), (10, 20, 100, 150))

    def test_rect_bounds(self) -> None:
        ctx = DrawingContext()
        ctx.rect(10, 20, 100, 50)
        self.assertEqual(ctx.bounds, Rect(10, 20, 100, 50))

    def test_ellipse_bounds(self) -> None:
        ctx = DrawingContext()
        ctx.ellipse(50, 50, 25, 15)
        b = ctx.bounds
        self.assertEqual((b.min_x, b.min_y, b.max_x, b.max_y), (25, 35, 75, 65))

    def test_text_anchor_point_counts(self) -> None:
        ctx = DrawingContext()
        ctx.text("label", 5, 7)
        ctx.rect(10, 10, 5, 5)
        self.assertEqual(ctx.bounds, Rect(5, 7, 10, 8))

    def test_curves_and_arcs_are_ignored(self) -> None:
        ctx = DrawingContext()
        ctx.move_to(0, 0)
        ctx.curve_to(-500, 500, 500, 500, 10, 10)
        ctx.quad_curve_to(1000, 1000, 20, 0)
        ctx.arc(0, 0, 1000, 0, math.pi)
        ctx.set_stroke_width(40)
        ctx.translate(300, 300)
        self.assertEqual(ctx.bounds, Rect.zero())

    def test_only_unboundable_commands_give_zero(self) -> None:
        ctx = DrawingContext()
        ctx.set_fill_color(RED)
        ctx.fill_path()
        ctx.arc(10, 10, 5, 0, 1)
        self.assertEqual(ctx.bounds, Rect.zero())


if __name__ == "__main__":
    unittest.main()
