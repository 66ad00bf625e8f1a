"""
Color and style mapping for rose chart wedges.

Maps a slot's count magnitude and interaction state to a fill, stroke and
opacity. Four sequential schemes are available; each has a fixed highlight
color used for the selected wedge.
"""

import math
from dataclasses import dataclass
from enum import Enum
from typing import NamedTuple, Union

from rose_chart.core.errors import UnknownVariant


# Fixed chart colors
COLOR_DEFAULT_STROKE = "#667eea"
COLOR_SELECTED_STROKE = "#ff6b6b"
COLOR_GRID = "#dddddd"
COLOR_GRID_LABEL = "#999999"
COLOR_MARKER_ACTIVE = "#555555"
COLOR_MARKER_INACTIVE = "#999999"
COLOR_MEAN_DIRECTION = "#ff4081"
COLOR_CENTER = "#667eea"
COLOR_COUNT_LABEL = "#ffffff"

# Intensity range produced by intensity()
INTENSITY_MIN = 30
INTENSITY_MAX = 220
HOVER_INTENSITY_BOOST = 40

OPACITY_NORMAL = 0.95
OPACITY_DIMMED = 0.6
OPACITY_HOVER = 1.0


def _clamp_channel(value: float) -> int:
    return int(max(0, min(255, round(value))))


class RGBColor(NamedTuple):
    """An sRGB color with channels clamped to 0-255."""
    red: int
    green: int
    blue: int

    @classmethod
    def of(cls, red: float, green: float, blue: float) -> "RGBColor":
        return cls(_clamp_channel(red), _clamp_channel(green), _clamp_channel(blue))

    @classmethod
    def from_hex(cls, value: str) -> "RGBColor":
        value = value.lstrip("#")
        if len(value) == 3:
            value = "".join(ch * 2 for ch in value)
        return cls(int(value[0:2], 16), int(value[2:4], 16), int(value[4:6], 16))

    def to_hex(self) -> str:
        return f"#{self.red:02x}{self.green:02x}{self.blue:02x}"

    def css(self) -> str:
        return f"rgb({self.red}, {self.green}, {self.blue})"


class ColorScheme(Enum):
    """Sequential color schemes (A-D)."""
    BLUES = "blues"
    PURPLES = "purples"
    GREENS = "greens"
    ORANGES = "oranges"

    @classmethod
    def parse(cls, value: Union[str, "ColorScheme"]) -> "ColorScheme":
        """
        Look up a scheme by name or letter alias.

        Raises:
            UnknownVariant: If the name is not a known scheme
        """
        if isinstance(value, ColorScheme):
            return value
        if isinstance(value, str):
            scheme = _SCHEME_ALIASES.get(value.strip().lower())
            if scheme is not None:
                return scheme
        raise UnknownVariant("color scheme", value, [s.value for s in cls])

    @property
    def letter(self) -> str:
        return "ABCD"[list(ColorScheme).index(self)]

    @property
    def highlight(self) -> RGBColor:
        return HIGHLIGHT_COLORS[self]


_SCHEME_ALIASES = {
    "a": ColorScheme.BLUES,
    "b": ColorScheme.PURPLES,
    "c": ColorScheme.GREENS,
    "d": ColorScheme.ORANGES,
    "blues": ColorScheme.BLUES,
    "purples": ColorScheme.PURPLES,
    "greens": ColorScheme.GREENS,
    "oranges": ColorScheme.ORANGES,
}

HIGHLIGHT_COLORS = {
    ColorScheme.BLUES: RGBColor.from_hex("#2196f3"),
    ColorScheme.PURPLES: RGBColor.from_hex("#9c27b0"),
    ColorScheme.GREENS: RGBColor.from_hex("#4caf50"),
    ColorScheme.ORANGES: RGBColor.from_hex("#ff5722"),
}


def intensity(count: int, max_count: int) -> int:
    """
    Map a count to a color intensity in [30, 220].

    Zero maps to 50 and the maximum count maps to 220. A non-positive
    ``max_count`` is treated as 1.
    """
    max_count = max_count if max_count > 0 else 1
    raw = math.floor(50 + count / max_count * 180)
    return max(INTENSITY_MIN, min(INTENSITY_MAX, raw))


def base_color(scheme: ColorScheme, value: float) -> RGBColor:
    """Scheme color for an intensity value; channels are clamped."""
    if scheme is ColorScheme.BLUES:
        return RGBColor.of(255 - value, 255 - value, 255)
    if scheme is ColorScheme.PURPLES:
        return RGBColor.of(255 - value, 255 - 0.6 * value, 255)
    if scheme is ColorScheme.GREENS:
        return RGBColor.of(255 - 0.7 * value, 255, 255 - 0.7 * value)
    if scheme is ColorScheme.ORANGES:
        return RGBColor.of(255, 255 - 0.6 * value, 255 - 0.8 * value)
    raise UnknownVariant("color scheme", scheme)


@dataclass(frozen=True)
class WedgeStyle:
    """
    Resolved paint style of a single wedge.

    Attributes:
        fill: Fill color
        stroke: Outline color
        stroke_width: Outline width in pixels
        opacity: Fill opacity in [0, 1]
    """
    fill: RGBColor
    stroke: RGBColor
    stroke_width: float
    opacity: float


_DEFAULT_STROKE = RGBColor.from_hex(COLOR_DEFAULT_STROKE)
_SELECTED_STROKE = RGBColor.from_hex(COLOR_SELECTED_STROKE)


def style_for(count: int, max_count: int, scheme: ColorScheme,
              selected: bool = False, hovered: bool = False,
              any_selected: bool = False) -> WedgeStyle:
    """
    Compute the style of one wedge.

    Args:
        count: Slot count
        max_count: Largest count in the view (1 for an all-zero view)
        scheme: Active color scheme
        selected: Whether this wedge is the selected one
        hovered: Whether the pointer is over this wedge
        any_selected: Whether some wedge in the view is selected

    Returns:
        WedgeStyle for the wedge
    """
    value = intensity(count, max_count)

    if selected:
        return WedgeStyle(scheme.highlight, _SELECTED_STROKE, 2, OPACITY_NORMAL)

    if hovered:
        fill = base_color(scheme, value + HOVER_INTENSITY_BOOST)
        return WedgeStyle(fill, _DEFAULT_STROKE, 1, OPACITY_HOVER)

    opacity = OPACITY_DIMMED if any_selected else OPACITY_NORMAL
    return WedgeStyle(base_color(scheme, value), _DEFAULT_STROKE, 1, opacity)


__all__ = [
    "ColorScheme",
    "RGBColor",
    "WedgeStyle",
    "HIGHLIGHT_COLORS",
    "intensity",
    "base_color",
    "style_for",
]
