from __future__ import annotations

from dataclasses import dataclass, field
import re
from typing import Union

from .style import Color, LineStyle, TextStyle
from .transform import AffineTransform


# Path construction


@dataclass(frozen=True)
class MoveTo:
    x: float
    y: float


@dataclass(frozen=True)
class LineTo:
    x: float
    y: float


@dataclass(frozen=True)
class CurveTo:
    cp1x: float
    cp1y: float
    cp2x: float
    cp2y: float
    x: float
    y: float


@dataclass(frozen=True)
class QuadCurveTo:
    cpx: float
    cpy: float
    x: float
    y: float


@dataclass(frozen=True)
class ClosePath:
    pass


# Shapes


@dataclass(frozen=True)
class RectShape:
    x: float
    y: float
    width: float
    height: float


@dataclass(frozen=True)
class EllipseShape:
    cx: float
    cy: float
    rx: float
    ry: float


@dataclass(frozen=True)
class Arc:
    cx: float
    cy: float
    r: float
    start_angle: float
    end_angle: float
    clockwise: bool = False


# Text


@dataclass(frozen=True)
class Text:
    text: str
    x: float
    y: float
    style: TextStyle = field(default_factory=TextStyle)


# Transform stack


@dataclass(frozen=True)
class PushTransform:
    transform: AffineTransform


@dataclass(frozen=True)
class PopTransform:
    pass


# Style state


@dataclass(frozen=True)
class SetStrokeColor:
    color: Color


@dataclass(frozen=True)
class SetStrokeWidth:
    width: float


@dataclass(frozen=True)
class SetStrokeStyle:
    style: LineStyle


@dataclass(frozen=True)
class SetFillColor:
    color: Color


@dataclass(frozen=True)
class SetAlpha:
    alpha: float


# Paint operations


@dataclass(frozen=True)
class StrokePath:
    pass


@dataclass(frozen=True)
class FillPath:
    pass


@dataclass(frozen=True)
class FillAndStrokePath:
    pass


# Clipping


@dataclass(frozen=True)
class ClipRect:
    x: float
    y: float
    width: float
    height: float


@dataclass(frozen=True)
class ResetClip:
    pass


# Graphics state


@dataclass(frozen=True)
class SaveState:
    pass


@dataclass(frozen=True)
class RestoreState:
    pass


Command = Union[
    MoveTo,
    LineTo,
    CurveTo,
    QuadCurveTo,
    ClosePath,
    RectShape,
    EllipseShape,
    Arc,
    Text,
    PushTransform,
    PopTransform,
    SetStrokeColor,
    SetStrokeWidth,
    SetStrokeStyle,
    SetFillColor,
    SetAlpha,
    StrokePath,
    FillPath,
    FillAndStrokePath,
    ClipRect,
    ResetClip,
    SaveState,
    RestoreState,
]

PATH_COMMANDS = (MoveTo, LineTo, CurveTo, QuadCurveTo, ClosePath)
SHAPE_COMMANDS = (RectShape, EllipseShape, Arc)
STYLE_COMMANDS = (SetStrokeColor, SetStrokeWidth, SetStrokeStyle, SetFillColor, SetAlpha)
PAINT_COMMANDS = (StrokePath, FillPath, FillAndStrokePath)
TRANSFORM_COMMANDS = (PushTransform, PopTransform)
CLIP_COMMANDS = (ClipRect, ResetClip)
STATE_COMMANDS = (SaveState, RestoreState)

ALL_COMMANDS = (
    PATH_COMMANDS
    + SHAPE_COMMANDS
    + (Text,)
    + TRANSFORM_COMMANDS
    + STYLE_COMMANDS
    + PAINT_COMMANDS
    + CLIP_COMMANDS
    + STATE_COMMANDS
)

_CAMEL_BOUNDARY = re.compile(r"(?<!^)(?=[A-Z])")


def command_name(command: Command) -> str:
    """Stable snake_case tag for a command, e.g. ``"quad_curve_to"``."""

    if not isinstance(command, ALL_COMMANDS):
        raise TypeError(f"not a drawing command: {command!r}")
    name = type(command).__name__.removesuffix("Shape")
    return _CAMEL_BOUNDARY.sub("_", name).lower()
