from __future__ import annotations

import logging
from typing import Sequence, Union
from xml.sax.saxutils import escape

from ..commands import (
    Arc,
    ClosePath,
    Command,
    CurveTo,
    EllipseShape,
    FillAndStrokePath,
    FillPath,
    LineTo,
    MoveTo,
    QuadCurveTo,
    RectShape,
    SetFillColor,
    SetStrokeColor,
    SetStrokeStyle,
    SetStrokeWidth,
    StrokePath,
    Text,
)
from ..context import DrawingContext
from ..style import BLACK, CLEAR, Color, FontWeight, LineStyle

LOGGER = logging.getLogger(__name__)

CommandSource = Union[DrawingContext, Sequence[Command]]

SVG_NAMESPACE = "http://www.w3.org/2000/svg"

_XML_ENTITIES = {'"': "&quot;", "'": "&apos;"}


class _MarkupWriter:
    """Running style plus the path buffer for one ``render_to_svg`` call."""

    def __init__(self, height: float) -> None:
        self.height = height
        self.parts: list[str] = []
        self.path = ""
        self.stroke_color: Color = BLACK
        self.fill_color: Color = CLEAR
        self.stroke_width: float = 1.0
        self.stroke_style: LineStyle = LineStyle.SOLID

    def point(self, x: float, y: float) -> str:
        return f"{_num(x)},{_num(self.height - y)}"

    def fill_attr(self) -> str:
        if self.fill_color != CLEAR:
            return f'fill="{self.fill_color.to_hex()}"'
        return 'fill="none"'

    def stroke_attrs(self) -> str:
        return f'stroke="{self.stroke_color.to_hex()}" stroke-width="{_num(self.stroke_width)}"'

    def flush(self) -> None:
        if not self.path:
            return
        attrs = [f'd="{self.path}"']
        if self.fill_color != CLEAR:
            attrs.append(f'fill="{self.fill_color.to_hex()}"')
            if self.fill_color.alpha < 1:
                attrs.append(f'fill-opacity="{_num(self.fill_color.alpha)}"')
        else:
            attrs.append('fill="none"')
        attrs.append(f'stroke="{self.stroke_color.to_hex()}"')
        if self.stroke_color.alpha < 1:
            attrs.append(f'stroke-opacity="{_num(self.stroke_color.alpha)}"')
        attrs.append(f'stroke-width="{_num(self.stroke_width)}"')
        pattern = self.stroke_style.dash_pattern
        if pattern:
            attrs.append(f'stroke-dasharray="{",".join(_num(v) for v in pattern)}"')
        self.parts.append(f"<path {' '.join(attrs)}/>\n")
        self.path = ""


def render_to_svg(source: CommandSource, width: float, height: float) -> str:
    """Replay commands into a standalone SVG document string.

    Path commands accumulate into one ``<path>`` until a shape, text, paint or
    stroke/fill style command flushes it. Coordinates are flipped with
    ``y' = height - y``. Arcs, transforms, clipping, alpha and state
    save/restore produce no markup.
    """

    commands = source.commands if isinstance(source, DrawingContext) else tuple(source)
    writer = _MarkupWriter(height)
    writer.parts.append(
        '<?xml version="1.0" encoding="UTF-8"?>\n'
        f'<svg width="{int(width)}" height="{int(height)}" xmlns="{SVG_NAMESPACE}">\n'
        '<rect width="100%" height="100%" fill="white"/>\n'
    )
    skipped_arcs = 0
    for command in commands:
        if isinstance(command, MoveTo):
            writer.path += f"M{writer.point(command.x, command.y)} "
        elif isinstance(command, LineTo):
            writer.path += f"L{writer.point(command.x, command.y)} "
        elif isinstance(command, CurveTo):
            writer.path += (
                f"C{writer.point(command.cp1x, command.cp1y)} "
                f"{writer.point(command.cp2x, command.cp2y)} "
                f"{writer.point(command.x, command.y)} "
            )
        elif isinstance(command, QuadCurveTo):
            writer.path += f"Q{writer.point(command.cpx, command.cpy)} {writer.point(command.x, command.y)} "
        elif isinstance(command, ClosePath):
            writer.path += "Z "
        elif isinstance(command, RectShape):
            writer.flush()
            writer.parts.append(
                f'<rect x="{_num(command.x)}" y="{_num(height - command.y - command.height)}" '
                f'width="{_num(command.width)}" height="{_num(command.height)}" '
                f"{writer.fill_attr()} {writer.stroke_attrs()}/>\n"
            )
        elif isinstance(command, EllipseShape):
            writer.flush()
            writer.parts.append(
                f'<ellipse cx="{_num(command.cx)}" cy="{_num(height - command.cy)}" '
                f'rx="{_num(command.rx)}" ry="{_num(command.ry)}" '
                f"{writer.fill_attr()} {writer.stroke_attrs()}/>\n"
            )
        elif isinstance(command, Arc):
            skipped_arcs += 1
        elif isinstance(command, Text):
            writer.flush()
            writer.parts.append(_text_element(command, height))
        elif isinstance(command, SetStrokeColor):
            writer.flush()
            writer.stroke_color = command.color
        elif isinstance(command, SetStrokeWidth):
            writer.flush()
            writer.stroke_width = command.width
        elif isinstance(command, SetStrokeStyle):
            writer.flush()
            writer.stroke_style = command.style
        elif isinstance(command, SetFillColor):
            writer.flush()
            writer.fill_color = command.color
        elif isinstance(command, (StrokePath, FillPath, FillAndStrokePath)):
            writer.flush()
    writer.flush()
    writer.parts.append("</svg>")
    if skipped_arcs:
        LOGGER.debug("svg export skipped %d arc commands", skipped_arcs)
    return "".join(writer.parts)


def _text_element(command: Text, height: float) -> str:
    style = command.style
    attrs = [
        f'x="{_num(command.x)}"',
        f'y="{_num(height - command.y)}"',
        f'font-size="{_num(style.font_size)}"',
    ]
    if style.font_weight is FontWeight.BOLD:
        attrs.append('font-weight="bold"')
    attrs.append(f'text-anchor="{style.anchor.value}"')
    attrs.append(f'fill="{style.color.to_hex()}"')
    return f"<text {' '.join(attrs)}>{escape(command.text, _XML_ENTITIES)}</text>\n"


def _num(value: float) -> str:
    number = float(value)
    if number.is_integer():
        return str(int(number))
    return repr(number)
