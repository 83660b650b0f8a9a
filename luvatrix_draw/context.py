from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator

from .commands import (
    ALL_COMMANDS,
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
from .style import Color, LineStyle, TextStyle
from .transform import IDENTITY, AffineTransform


@dataclass(frozen=True)
class Rect:
    x: float
    y: float
    width: float
    height: float

    @classmethod
    def zero(cls) -> Rect:
        return cls(0.0, 0.0, 0.0, 0.0)

    @property
    def min_x(self) -> float:
        return self.x

    @property
    def min_y(self) -> float:
        return self.y

    @property
    def max_x(self) -> float:
        return self.x + self.width

    @property
    def max_y(self) -> float:
        return self.y + self.height


class DrawingContext:
    """Retained vector command recorder.

    Every drawing call appends one immutable command; backends in
    ``luvatrix_draw.render`` replay the recorded sequence. The transform stack
    kept here only answers ``current_transform``; replay re-derives composition
    from the raw ``PushTransform`` commands.
    """

    def __init__(self) -> None:
        self._commands: list[Command] = []
        self._transform_stack: list[AffineTransform] = [IDENTITY]

    @property
    def commands(self) -> tuple[Command, ...]:
        return tuple(self._commands)

    @property
    def command_count(self) -> int:
        return len(self._commands)

    def __len__(self) -> int:
        return len(self._commands)

    def __iter__(self) -> Iterator[Command]:
        return iter(tuple(self._commands))

    @property
    def current_transform(self) -> AffineTransform:
        return self._transform_stack[-1]

    @property
    def transform_depth(self) -> int:
        return len(self._transform_stack)

    @property
    def bounds(self) -> Rect:
        """Axis-aligned box over points, rects, ellipses and text anchors.

        Curves and arcs are not considered, nor are their control points.
        """

        min_x = min_y = float("inf")
        max_x = max_y = float("-inf")
        for command in self._commands:
            if isinstance(command, (MoveTo, LineTo, Text)):
                lo_x, lo_y, hi_x, hi_y = command.x, command.y, command.x, command.y
            elif isinstance(command, RectShape):
                lo_x, lo_y = command.x, command.y
                hi_x, hi_y = command.x + command.width, command.y + command.height
            elif isinstance(command, EllipseShape):
                lo_x, lo_y = command.cx - command.rx, command.cy - command.ry
                hi_x, hi_y = command.cx + command.rx, command.cy + command.ry
            else:
                continue
            min_x = min(min_x, lo_x)
            min_y = min(min_y, lo_y)
            max_x = max(max_x, hi_x)
            max_y = max(max_y, hi_y)
        if min_x == float("inf"):
            return Rect.zero()
        return Rect(x=min_x, y=min_y, width=max_x - min_x, height=max_y - min_y)

    def clear(self) -> None:
        self._commands.clear()
        self._transform_stack = [IDENTITY]

    def extend(self, commands: Iterable[Command]) -> None:
        """Append recorded commands as if each had been drawn through this surface.

        Push and pop commands update the transform stack the same way
        ``push_transform`` and ``pop_transform`` do. Raises ``TypeError`` before
        appending anything if an item is not a drawing command.
        """

        incoming = list(commands)
        for command in incoming:
            if not isinstance(command, ALL_COMMANDS):
                raise TypeError(f"not a drawing command: {command!r}")
        for command in incoming:
            if isinstance(command, PushTransform):
                self.push_transform(command.transform)
            elif isinstance(command, PopTransform):
                self.pop_transform()
            else:
                self._commands.append(command)

    # Path construction

    def move_to(self, x: float, y: float) -> None:
        self._commands.append(MoveTo(x, y))

    def line_to(self, x: float, y: float) -> None:
        self._commands.append(LineTo(x, y))

    def curve_to(self, cp1x: float, cp1y: float, cp2x: float, cp2y: float, x: float, y: float) -> None:
        self._commands.append(CurveTo(cp1x, cp1y, cp2x, cp2y, x, y))

    def quad_curve_to(self, cpx: float, cpy: float, x: float, y: float) -> None:
        self._commands.append(QuadCurveTo(cpx, cpy, x, y))

    def close_path(self) -> None:
        self._commands.append(ClosePath())

    # Shapes

    def rect(self, x: float, y: float, width: float, height: float) -> None:
        self._commands.append(RectShape(x, y, width, height))

    def ellipse(self, cx: float, cy: float, rx: float, ry: float) -> None:
        self._commands.append(EllipseShape(cx, cy, rx, ry))

    def circle(self, cx: float, cy: float, r: float) -> None:
        self.ellipse(cx, cy, r, r)

    def arc(
        self,
        cx: float,
        cy: float,
        r: float,
        start_angle: float,
        end_angle: float,
        clockwise: bool = False,
    ) -> None:
        self._commands.append(Arc(cx, cy, r, start_angle, end_angle, clockwise))

    # Text

    def text(self, text: str, x: float, y: float, style: TextStyle | None = None) -> None:
        self._commands.append(Text(text, x, y, style if style is not None else TextStyle()))

    # Transform stack

    def push_transform(self, transform: AffineTransform) -> None:
        self._transform_stack.append(self.current_transform.concatenating(transform))
        self._commands.append(PushTransform(transform))

    def pop_transform(self) -> None:
        if len(self._transform_stack) > 1:
            self._transform_stack.pop()
        self._commands.append(PopTransform())

    def translate(self, tx: float, ty: float) -> None:
        self.push_transform(AffineTransform.translation(tx, ty))

    def scale(self, sx: float, sy: float) -> None:
        self.push_transform(AffineTransform.scaling(sx, sy))

    def rotate(self, angle: float) -> None:
        self.push_transform(AffineTransform.rotation(angle))

    # Style state

    def set_stroke_color(self, color: Color) -> None:
        self._commands.append(SetStrokeColor(color))

    def set_stroke_width(self, width: float) -> None:
        self._commands.append(SetStrokeWidth(width))

    def set_stroke_style(self, style: LineStyle) -> None:
        self._commands.append(SetStrokeStyle(style))

    def set_fill_color(self, color: Color) -> None:
        self._commands.append(SetFillColor(color))

    def set_alpha(self, alpha: float) -> None:
        self._commands.append(SetAlpha(alpha))

    # Paint operations

    def stroke_path(self) -> None:
        self._commands.append(StrokePath())

    def fill_path(self) -> None:
        self._commands.append(FillPath())

    def fill_and_stroke_path(self) -> None:
        self._commands.append(FillAndStrokePath())

    # Clipping and graphics state

    def clip_rect(self, x: float, y: float, width: float, height: float) -> None:
        self._commands.append(ClipRect(x, y, width, height))

    def reset_clip(self) -> None:
        self._commands.append(ResetClip())

    def save_state(self) -> None:
        self._commands.append(SaveState())

    def restore_state(self) -> None:
        self._commands.append(RestoreState())
