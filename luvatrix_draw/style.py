from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
import re

_HEX_DIGITS = re.compile(r"^[0-9a-fA-F]{6}([0-9a-fA-F]{2})?$")


@dataclass(frozen=True)
class Color:
    """Linear RGBA color with float channels.

    Channels are conceptually in [0, 1] but are not clamped; out-of-range values
    are handed to the backends unchanged.
    """

    red: float
    green: float
    blue: float
    alpha: float = 1.0

    @classmethod
    def from_hex(cls, text: str) -> Color | None:
        """Parse ``#RRGGBB`` / ``#RRGGBBAA`` (leading ``#`` optional)."""

        if not isinstance(text, str):
            return None
        value = text.strip()
        if value.startswith("#"):
            value = value[1:]
        if not _HEX_DIGITS.match(value):
            return None
        raw = int(value, 16)
        if len(value) == 6:
            return cls(
                red=((raw >> 16) & 0xFF) / 255.0,
                green=((raw >> 8) & 0xFF) / 255.0,
                blue=(raw & 0xFF) / 255.0,
                alpha=1.0,
            )
        return cls(
            red=((raw >> 24) & 0xFF) / 255.0,
            green=((raw >> 16) & 0xFF) / 255.0,
            blue=((raw >> 8) & 0xFF) / 255.0,
            alpha=(raw & 0xFF) / 255.0,
        )

    @classmethod
    def from_name(cls, name: str) -> Color | None:
        if not isinstance(name, str):
            return None
        return _NAMED_COLORS.get(name.lower())

    @classmethod
    def parse(cls, value: Color | str) -> Color | None:
        """Accept a Color, a hex string or a color name."""

        if isinstance(value, Color):
            return value
        if not isinstance(value, str):
            return None
        named = cls.from_name(value.strip())
        if named is not None:
            return named
        return cls.from_hex(value)

    def with_alpha(self, alpha: float) -> Color:
        return replace(self, alpha=alpha)

    def to_hex(self, include_alpha: bool = False) -> str:
        r = _to_byte(self.red)
        g = _to_byte(self.green)
        b = _to_byte(self.blue)
        if include_alpha:
            return "#%02X%02X%02X%02X" % (r, g, b, _to_byte(self.alpha))
        return "#%02X%02X%02X" % (r, g, b)

    def to_rgba(self) -> tuple[float, float, float, float]:
        return (self.red, self.green, self.blue, self.alpha)

    def to_rgba8(self) -> tuple[int, int, int, int]:
        return tuple(max(0, min(255, _to_byte(c))) for c in self.to_rgba())  # type: ignore[return-value]


def _to_byte(channel: float) -> int:
    # Truncate toward zero, but absorb float noise so 127/255 maps back to 127.
    return int(round(channel * 255.0, 6))


BLACK = Color(0.0, 0.0, 0.0)
WHITE = Color(1.0, 1.0, 1.0)
RED = Color(1.0, 0.0, 0.0)
GREEN = Color(0.0, 0.5, 0.0)
BLUE = Color(0.0, 0.0, 1.0)
YELLOW = Color(1.0, 1.0, 0.0)
CYAN = Color(0.0, 1.0, 1.0)
MAGENTA = Color(1.0, 0.0, 1.0)
ORANGE = Color(1.0, 0.647, 0.0)
PURPLE = Color(0.5, 0.0, 0.5)
BROWN = Color(0.647, 0.165, 0.165)
PINK = Color(1.0, 0.753, 0.796)
GRAY = Color(0.5, 0.5, 0.5)
LIGHT_GRAY = Color(0.75, 0.75, 0.75)
DARK_GRAY = Color(0.25, 0.25, 0.25)
CLEAR = Color(0.0, 0.0, 0.0, 0.0)

_NAMED_COLORS: dict[str, Color] = {
    "black": BLACK,
    "white": WHITE,
    "red": RED,
    "green": GREEN,
    "blue": BLUE,
    "yellow": YELLOW,
    "cyan": CYAN,
    "magenta": MAGENTA,
    "orange": ORANGE,
    "purple": PURPLE,
    "brown": BROWN,
    "pink": PINK,
    "gray": GRAY,
    "grey": GRAY,
    "lightgray": LIGHT_GRAY,
    "lightgrey": LIGHT_GRAY,
    "darkgray": DARK_GRAY,
    "darkgrey": DARK_GRAY,
    "none": CLEAR,
    "transparent": CLEAR,
}


class FontWeight(str, Enum):
    NORMAL = "normal"
    BOLD = "bold"
    LIGHT = "light"


class TextAnchor(str, Enum):
    START = "start"
    MIDDLE = "middle"
    END = "end"


@dataclass(frozen=True)
class TextStyle:
    font_family: str = "sans-serif"
    font_size: float = 12.0
    font_weight: FontWeight = FontWeight.NORMAL
    color: Color = BLACK
    anchor: TextAnchor = TextAnchor.START


_DASH_PATTERNS: dict[str, tuple[float, ...]] = {
    "--": (6.0, 4.0),
    ":": (2.0, 2.0),
    "-.": (6.0, 2.0, 2.0, 2.0),
}


class LineStyle(str, Enum):
    SOLID = "-"
    DASHED = "--"
    DOTTED = ":"
    DASH_DOT = "-."
    NONE = ""

    @property
    def dash_pattern(self) -> tuple[float, ...] | None:
        return _DASH_PATTERNS.get(self.value)

    @classmethod
    def from_code(cls, code: str) -> LineStyle | None:
        try:
            return cls(code)
        except ValueError:
            return None


class MarkerStyle(str, Enum):
    """Point marker shapes, keyed by their matplotlib-style short codes."""

    CIRCLE = "o"
    SQUARE = "s"
    DIAMOND = "D"
    TRIANGLE_UP = "^"
    TRIANGLE_DOWN = "v"
    TRIANGLE_LEFT = "<"
    TRIANGLE_RIGHT = ">"
    PLUS = "+"
    CROSS = "x"
    STAR = "*"
    DOT = "."
    NONE = ""

    @classmethod
    def from_code(cls, code: str) -> MarkerStyle | None:
        try:
            return cls(code)
        except ValueError:
            return None
