"""Turn a rectangle set into a flat list of drawing primitives.

Hosts (the Qt canvas, the web SVG preview) replay the commands; tests assert
on them directly.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple, Union

from .geometry import Point, Rectangle, center

GRID_SIZE = 20
GRID_COLOR = "#f0f0f0"
CORNER_RADIUS = 4
STROKE_WIDTH = 2
CENTER_RADIUS = 3
CONNECTOR_COLOR = "#6366F1"
CONNECTOR_DASH: Tuple[int, int] = (5, 5)


@dataclass(frozen=True)
class RectStyle:
    stroke: str
    fill: str


PRIMARY_STYLE = RectStyle(stroke="#4F46E5", fill="rgba(79, 70, 229, 0.15)")
SECONDARY_STYLE = RectStyle(stroke="#9333EA", fill="rgba(147, 51, 234, 0.15)")


def style_for_index(index: int) -> RectStyle:
    return PRIMARY_STYLE if index == 0 else SECONDARY_STYLE


@dataclass(frozen=True)
class GridLine:
    start: Point
    end: Point
    color: str = GRID_COLOR
    width: int = 1


@dataclass(frozen=True)
class RoundedRect:
    rect: Rectangle
    radius: float
    style: RectStyle
    index: int
    preview: bool = False


@dataclass(frozen=True)
class CenterMarker:
    point: Point
    radius: float
    color: str
    index: int


@dataclass(frozen=True)
class DashedLine:
    start: Point
    end: Point
    color: str = CONNECTOR_COLOR
    dash: Tuple[int, int] = CONNECTOR_DASH
    width: int = 1


DrawCommand = Union[GridLine, RoundedRect, CenterMarker, DashedLine]


def grid_lines(width: float, height: float, step: int = GRID_SIZE) -> List[GridLine]:
    lines: List[GridLine] = []
    x = 0
    while x <= width:
        lines.append(GridLine(Point(x, 0), Point(x, height)))
        x += step
    y = 0
    while y <= height:
        lines.append(GridLine(Point(0, y), Point(width, y)))
        y += step
    return lines


def corner_radius(rect: Rectangle, radius: float = CORNER_RADIUS) -> float:
    """Clamp *radius* so degenerate rectangles still produce a valid outline."""

    return max(0.0, min(radius, rect.width / 2, rect.height / 2))


def render(
    rectangles: Sequence[Rectangle],
    width: float = 800,
    height: float = 600,
    preview: Optional[Rectangle] = None,
) -> List[DrawCommand]:
    """Return the drawing commands for *rectangles* on a *width* x *height* canvas.

    *preview* is the in-progress rectangle; it is appended after the committed
    ones and styled by its resulting index.
    """

    commands: List[DrawCommand] = list(grid_lines(width, height))
    shapes = list(rectangles)
    if preview is not None:
        shapes.append(preview)
    preview_index = len(shapes) - 1 if preview is not None else None

    for index, rect in enumerate(shapes):
        style = style_for_index(index)
        commands.append(
            RoundedRect(
                rect=rect,
                radius=corner_radius(rect),
                style=style,
                index=index,
                preview=index == preview_index,
            )
        )
        commands.append(CenterMarker(center(rect), CENTER_RADIUS, style.stroke, index))

    if len(shapes) == 2:
        commands.append(DashedLine(center(shapes[0]), center(shapes[1])))
    return commands


__all__ = [
    "CenterMarker",
    "DashedLine",
    "DrawCommand",
    "GridLine",
    "PRIMARY_STYLE",
    "RectStyle",
    "RoundedRect",
    "SECONDARY_STYLE",
    "grid_lines",
    "render",
    "style_for_index",
]
