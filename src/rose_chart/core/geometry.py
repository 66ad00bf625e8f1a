"""
Geometry engine for the rose chart.

Turns an ordered sequence of time-slot records into a Scene: an ordered
list of abstract drawing primitives (wedges, circles, lines, text) in chart
coordinates. Angles follow a clock face: 0 radians points up (midnight)
and angles grow clockwise, so a point at angle ``a`` and radius ``r`` sits
at ``(cx + sin(a) * r, cy - cos(a) * r)``.

The layout is a pure function of its inputs; identical inputs produce
equal scenes. Radius, not area, encodes magnitude.
"""

import logging
import math
from dataclasses import dataclass
from enum import Enum
from typing import Iterator, NamedTuple, Optional, Sequence, Tuple, Union

from rose_chart.core.colors import (
    COLOR_CENTER,
    COLOR_COUNT_LABEL,
    COLOR_GRID,
    COLOR_GRID_LABEL,
    COLOR_MARKER_ACTIVE,
    COLOR_MARKER_INACTIVE,
    COLOR_MEAN_DIRECTION,
    ColorScheme,
    WedgeStyle,
    style_for,
)
from rose_chart.core.dataset import TimeSlotRecord
from rose_chart.core.timefmt import HOURS_PER_DAY, format_hour

logger = logging.getLogger(__name__)

TWO_PI = 2 * math.pi

# Layout proportions
SEGMENT_RADIUS_FACTOR = 0.9     # Wedge radius at the maximum count
LABEL_RADIUS_FACTOR = 0.5       # Count label position along the wedge
LABEL_THRESHOLD = 0.2           # Share of max count above which labels show
GRID_RING_COUNT = 4
MARKER_OFFSET = 10              # Hour markers sit this far outside the dial
MEAN_LABEL_OFFSET = 15
PERCENT_LABEL_OFFSET = 14
CENTER_DOT_RADIUS = 4
MEAN_MARKER_RADIUS = 4

FONT_SIZE_GRID = 10
FONT_SIZE_MARKER = 11
FONT_SIZE_MEAN = 11
FONT_SIZE_COUNT = 10
FONT_SIZE_COUNT_SELECTED = 12
FONT_SIZE_PERCENT = 9


def angle_for_hour(hour: float) -> float:
    """Angle in radians of a decimal hour of day (0 = up, clockwise)."""
    return hour / HOURS_PER_DAY * TWO_PI


class Point(NamedTuple):
    x: float
    y: float


def polar_to_cartesian(center: Point, angle: float, radius: float) -> Point:
    """Convert a clock-face polar coordinate to chart coordinates."""
    return Point(center.x + math.sin(angle) * radius,
                 center.y - math.cos(angle) * radius)


def circular_hour_distance(a: float, b: float) -> float:
    """Shortest distance in hours between two times of day."""
    diff = abs(a - b) % HOURS_PER_DAY
    return min(diff, HOURS_PER_DAY - diff)


class Role(Enum):
    """What a primitive depicts; hosts use it to pick pens and z-order."""
    GRID_RING = "grid_ring"
    GRID_LABEL = "grid_label"
    HOUR_MARKER = "hour_marker"
    MEAN_LINE = "mean_line"
    MEAN_MARKER = "mean_marker"
    MEAN_LABEL = "mean_label"
    WEDGE = "wedge"
    COUNT_LABEL = "count_label"
    PERCENT_LABEL = "percent_label"
    CENTER_DOT = "center_dot"


# =============================================================================
# Primitives
# =============================================================================


@dataclass(frozen=True)
class WedgePrimitive:
    """
    A center-anchored sector whose outer radius encodes a count.

    Attributes:
        slot_index: Index of the slot in the resolved view
        center: Chart center
        radius: Outer radius (0 for an empty slot)
        start_angle: Start angle in radians
        end_angle: End angle in radians (start + wedge width)
        path: SVG path description of the outline
        style: Resolved fill/stroke style
        label: Slot label, e.g. '8pm-9pm'
        count: Slot count
    """
    slot_index: int
    center: Point
    radius: float
    start_angle: float
    end_angle: float
    path: str
    style: WedgeStyle
    label: str
    count: int
    role: Role = Role.WEDGE

    @property
    def span(self) -> float:
        return self.end_angle - self.start_angle

    @property
    def mid_angle(self) -> float:
        return self.start_angle + self.span / 2

    def contains(self, x: float, y: float) -> bool:
        """Whether the point lies inside this wedge."""
        if self.radius <= 0:
            return False
        dx = x - self.center.x
        dy = y - self.center.y
        if math.hypot(dx, dy) > self.radius:
            return False
        angle = math.atan2(dx, -dy)
        return (angle - self.start_angle) % TWO_PI < self.span


@dataclass(frozen=True)
class CirclePrimitive:
    role: Role
    center: Point
    radius: float
    fill: Optional[str] = None
    stroke: Optional[str] = None
    stroke_width: float = 1
    dashed: bool = False
    slot_index: Optional[int] = None


@dataclass(frozen=True)
class LinePrimitive:
    role: Role
    start: Point
    end: Point
    stroke: str
    stroke_width: float = 1
    dashed: bool = False
    slot_index: Optional[int] = None


@dataclass(frozen=True)
class TextPrimitive:
    """A run of text anchored at ``position`` (anchor: start or middle)."""
    role: Role
    position: Point
    text: str
    color: str
    font_size: int = 10
    bold: bool = False
    anchor: str = "middle"
    slot_index: Optional[int] = None


Primitive = Union[WedgePrimitive, CirclePrimitive, LinePrimitive, TextPrimitive]


@dataclass(frozen=True)
class Scene:
    """
    Ordered drawing primitives for one render pass.

    Primitives are listed in paint order: grid, hour markers, mean
    indicator, wedges with their count labels, center dot.
    """
    primitives: Tuple[Primitive, ...]
    center: Point
    max_radius: float
    wedge_angle: float
    max_count: int

    def __iter__(self) -> Iterator[Primitive]:
        return iter(self.primitives)

    def __len__(self) -> int:
        return len(self.primitives)

    def by_role(self, role: Role) -> Tuple[Primitive, ...]:
        return tuple(p for p in self.primitives if p.role is role)

    @property
    def wedges(self) -> Tuple[WedgePrimitive, ...]:
        return self.by_role(Role.WEDGE)

    def wedge(self, slot_index: int) -> Optional[WedgePrimitive]:
        for wedge in self.wedges:
            if wedge.slot_index == slot_index:
                return wedge
        return None

    def count_label(self, slot_index: int) -> Optional[TextPrimitive]:
        for text in self.by_role(Role.COUNT_LABEL):
            if text.slot_index == slot_index:
                return text
        return None


@dataclass(frozen=True)
class LayoutOptions:
    """
    Inputs to layout() beyond the slots themselves.

    Attributes:
        center: Chart center in scene coordinates
        labels_visible: Show grid values and hour markers
        selected_index: Selected slot, if any
        hovered_index: Hovered slot, if any
        color_scheme: Fill scheme for wedges
        annotate_all: Label every wedge regardless of size (block view)
        mean_hour: Mean direction hour; None suppresses the indicator
        mean_label: Text shown at the mean indicator
        hour_step: Spacing of hour markers (4 in the block view)
    """
    center: Point = Point(0.0, 0.0)
    labels_visible: bool = True
    selected_index: Optional[int] = None
    hovered_index: Optional[int] = None
    color_scheme: ColorScheme = ColorScheme.BLUES
    annotate_all: bool = False
    mean_hour: Optional[float] = None
    mean_label: str = ""
    hour_step: int = 1


# =============================================================================
# Layout
# =============================================================================


def _fmt(value: float) -> str:
    text = f"{value:.3f}".rstrip("0").rstrip(".")
    return "0" if text == "-0" else text


def wedge_path(center: Point, radius: float, start_angle: float, end_angle: float) -> str:
    """
    SVG path of a wedge: center, out to the start edge, clockwise arc, back.

    A zero-radius wedge degenerates to a closed move to the center.
    """
    if radius <= 0:
        return f"M {_fmt(center.x)},{_fmt(center.y)} Z"

    start = polar_to_cartesian(center, start_angle, radius)
    end = polar_to_cartesian(center, end_angle, radius)
    large_arc = 1 if end_angle - start_angle > math.pi else 0
    return (
        f"M {_fmt(center.x)},{_fmt(center.y)} "
        f"L {_fmt(start.x)},{_fmt(start.y)} "
        f"A {_fmt(radius)},{_fmt(radius)} 0 {large_arc} 1 {_fmt(end.x)},{_fmt(end.y)} "
        f"Z"
    )


def max_count_of(slots: Sequence[TimeSlotRecord]) -> int:
    """Largest count, or 1 when every count is zero."""
    return max((slot.count for slot in slots), default=0) or 1


def _format_percentage(value: float) -> str:
    return f"({value:g}%)"


def _grid(center: Point, max_radius: float, max_count: int,
          labels_visible: bool) -> Iterator[Primitive]:
    for ring in range(1, GRID_RING_COUNT + 1):
        radius = max_radius * ring / GRID_RING_COUNT
        yield CirclePrimitive(Role.GRID_RING, center, radius,
                              stroke=COLOR_GRID, dashed=True)
        if labels_visible:
            value = math.ceil(max_count * ring / GRID_RING_COUNT)
            yield TextPrimitive(
                Role.GRID_LABEL,
                Point(center.x + 5, center.y - radius - 5),
                str(value), COLOR_GRID_LABEL, FONT_SIZE_GRID, anchor="start",
            )


def _hour_markers(center: Point, max_radius: float, hour_step: int,
                  slots: Sequence[TimeSlotRecord]) -> Iterator[Primitive]:
    for hour in range(0, HOURS_PER_DAY, hour_step):
        position = polar_to_cartesian(center, angle_for_hour(hour), max_radius + MARKER_OFFSET)
        active = any(
            circular_hour_distance(slot.hour_of_day, hour) < hour_step / 2
            for slot in slots
        )
        yield TextPrimitive(
            Role.HOUR_MARKER, position, format_hour(hour),
            COLOR_MARKER_ACTIVE if active else COLOR_MARKER_INACTIVE,
            FONT_SIZE_MARKER, bold=active,
        )


def _mean_indicator(center: Point, max_radius: float, mean_hour: float,
                    mean_label: str) -> Iterator[Primitive]:
    end = polar_to_cartesian(center, angle_for_hour(mean_hour), max_radius)
    yield LinePrimitive(Role.MEAN_LINE, center, end, COLOR_MEAN_DIRECTION,
                        stroke_width=2, dashed=True)
    yield CirclePrimitive(Role.MEAN_MARKER, end, MEAN_MARKER_RADIUS,
                          fill=COLOR_MEAN_DIRECTION)
    yield TextPrimitive(Role.MEAN_LABEL, Point(end.x, end.y - MEAN_LABEL_OFFSET),
                        mean_label, COLOR_MEAN_DIRECTION, FONT_SIZE_MEAN, bold=True)


def _wedges(slots: Sequence[TimeSlotRecord], wedge_angle: float, max_radius: float,
            max_count: int, options: LayoutOptions) -> Iterator[Primitive]:
    center = options.center
    any_selected = options.selected_index is not None

    for index, slot in enumerate(slots):
        start = angle_for_hour(slot.hour_of_day) - wedge_angle / 2
        end = start + wedge_angle
        radius = slot.count / max_count * max_radius * SEGMENT_RADIUS_FACTOR
        selected = index == options.selected_index
        hovered = index == options.hovered_index

        style = style_for(slot.count, max_count, options.color_scheme,
                          selected=selected, hovered=hovered,
                          any_selected=any_selected)
        yield WedgePrimitive(
            slot_index=index,
            center=center,
            radius=radius,
            start_angle=start,
            end_angle=end,
            path=wedge_path(center, radius, start, end),
            style=style,
            label=slot.label,
            count=slot.count,
        )

        if slot.count > max_count * LABEL_THRESHOLD or selected or options.annotate_all:
            label_pos = polar_to_cartesian(
                center, start + wedge_angle / 2,
                slot.count / max_count * max_radius * LABEL_RADIUS_FACTOR,
            )
            yield TextPrimitive(
                Role.COUNT_LABEL, label_pos, str(slot.count), COLOR_COUNT_LABEL,
                FONT_SIZE_COUNT_SELECTED if selected else FONT_SIZE_COUNT,
                bold=True, slot_index=index,
            )
            if options.annotate_all and slot.percentage:
                yield TextPrimitive(
                    Role.PERCENT_LABEL,
                    Point(label_pos.x, label_pos.y + PERCENT_LABEL_OFFSET),
                    _format_percentage(slot.percentage), COLOR_COUNT_LABEL,
                    FONT_SIZE_PERCENT, slot_index=index,
                )


def layout(slots: Sequence[TimeSlotRecord], wedge_angle: float, max_radius: float,
           options: Optional[LayoutOptions] = None) -> Scene:
    """
    Lay out the rose chart for a sequence of slots.

    Args:
        slots: Slot records in view order
        wedge_angle: Angular width of each wedge in radians
        max_radius: Radius of the outermost grid ring
        options: Center, interaction and annotation options

    Returns:
        Scene with primitives in paint order
    """
    options = options or LayoutOptions()
    center = options.center
    max_count = max_count_of(slots)

    primitives = list(_grid(center, max_radius, max_count, options.labels_visible))
    if options.labels_visible:
        primitives.extend(_hour_markers(center, max_radius, options.hour_step, slots))
    if options.mean_hour is not None:
        primitives.extend(_mean_indicator(center, max_radius, options.mean_hour,
                                          options.mean_label))
    primitives.extend(_wedges(slots, wedge_angle, max_radius, max_count, options))
    primitives.append(CirclePrimitive(Role.CENTER_DOT, center, CENTER_DOT_RADIUS,
                                      fill=COLOR_CENTER))

    logger.debug(f"Laid out {len(slots)} slots into {len(primitives)} primitives "
                 f"(max_count={max_count})")
    return Scene(tuple(primitives), center, max_radius, wedge_angle, max_count)


def hit_test(scene: Scene, x: float, y: float) -> Optional[int]:
    """
    Find the slot whose wedge contains a point.

    Args:
        scene: Scene produced by layout()
        x: X coordinate in scene space
        y: Y coordinate in scene space

    Returns:
        Slot index, or None when the point is outside every wedge
    """
    for wedge in scene.wedges:
        if wedge.contains(x, y):
            return wedge.slot_index
    return None


__all__ = [
    "Point",
    "Role",
    "WedgePrimitive",
    "CirclePrimitive",
    "LinePrimitive",
    "TextPrimitive",
    "Scene",
    "LayoutOptions",
    "angle_for_hour",
    "polar_to_cartesian",
    "circular_hour_distance",
    "wedge_path",
    "max_count_of",
    "layout",
    "hit_test",
]
