"""Geometry utilities shared by the desktop tool, the API and the web UI."""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime
from typing import Dict, Mapping, Sequence, Tuple, Union

PointLike = Union[Sequence[float], Mapping[str, float], object]
SizeLike = Union[Sequence[float], object]


@dataclass(frozen=True)
class Point:
    """A coordinate in canvas pixel space."""

    x: float
    y: float

    def to_dict(self) -> Dict[str, float]:
        return {"x": self.x, "y": self.y}


@dataclass(frozen=True)
class Rectangle:
    """Axis-aligned box whose ``x``/``y`` is the top-left corner."""

    x: float
    y: float
    width: float
    height: float

    @classmethod
    def from_mapping(cls, data: Mapping[str, float]) -> "Rectangle":
        return cls(
            x=float(data["x"]),
            y=float(data["y"]),
            width=float(data["width"]),
            height=float(data["height"]),
        )

    def to_dict(self) -> Dict[str, float]:
        return {"x": self.x, "y": self.y, "width": self.width, "height": self.height}


def _extract_xy(point: PointLike) -> Tuple[float, float]:
    """Return a numeric (x, y) pair from supported *point* inputs."""

    if hasattr(point, "x") and hasattr(point, "y"):
        x_attr = getattr(point, "x")
        y_attr = getattr(point, "y")
        x_val = x_attr() if callable(x_attr) else x_attr
        y_val = y_attr() if callable(y_attr) else y_attr
        return float(x_val), float(y_val)
    if isinstance(point, Mapping):
        return float(point["x"]), float(point["y"])
    if isinstance(point, Sequence) and not isinstance(point, (str, bytes, bytearray)):
        if len(point) != 2:
            raise ValueError("Point sequences must contain exactly two values.")
        return float(point[0]), float(point[1])
    raise TypeError(f"Unsupported point representation: {type(point)!r}")


def _extract_size(size: SizeLike) -> Tuple[float, float]:
    """Return a (width, height) pair from a sequence or a Qt-style size."""

    if hasattr(size, "width") and hasattr(size, "height"):
        width_attr = getattr(size, "width")
        height_attr = getattr(size, "height")
        width = width_attr() if callable(width_attr) else width_attr
        height = height_attr() if callable(height_attr) else height_attr
        return float(width), float(height)
    if isinstance(size, Sequence) and not isinstance(size, (str, bytes, bytearray)):
        if len(size) != 2:
            raise ValueError("Size sequences must contain exactly two values.")
        return float(size[0]), float(size[1])
    raise TypeError(f"Unsupported size representation: {type(size)!r}")


def as_point(point: PointLike) -> Point:
    """Coerce any supported point representation into a :class:`Point`."""

    if isinstance(point, Point):
        return point
    x, y = _extract_xy(point)
    return Point(x, y)


def center(rect: Rectangle) -> Point:
    """Return the midpoint of *rect*."""

    return Point(rect.x + rect.width / 2, rect.y + rect.height / 2)


def distance(rect_a: Rectangle, rect_b: Rectangle) -> float:
    """Return the Euclidean distance between the centers of two rectangles."""

    center_a = center(rect_a)
    center_b = center(rect_b)
    return math.sqrt((center_b.x - center_a.x) ** 2 + (center_b.y - center_a.y) ** 2)


def normalize_rect(start: PointLike, end: PointLike) -> Rectangle:
    """Return the non-negative bounding box spanned by a drag from *start* to *end*."""

    sx, sy = _extract_xy(start)
    ex, ey = _extract_xy(end)
    return Rectangle(
        x=min(sx, ex),
        y=min(sy, ey),
        width=abs(ex - sx),
        height=abs(ey - sy),
    )


def canvas_scale(displayed_size: SizeLike, backing_size: SizeLike) -> Tuple[float, float]:
    """Return the per-axis ``backing / displayed`` ratio.

    A collapsed display axis maps to a ratio of ``1.0``.
    """

    displayed_w, displayed_h = _extract_size(displayed_size)
    backing_w, backing_h = _extract_size(backing_size)
    scale_x = backing_w / displayed_w if displayed_w else 1.0
    scale_y = backing_h / displayed_h if displayed_h else 1.0
    return scale_x, scale_y


def to_canvas_point(
    point: PointLike, displayed_size: SizeLike, backing_size: SizeLike
) -> Point:
    """Map a pointer position relative to the displayed canvas into backing space."""

    x, y = _extract_xy(point)
    scale_x, scale_y = canvas_scale(displayed_size, backing_size)
    return Point(x * scale_x, y * scale_y)


def format_distance(value: float) -> str:
    """Return *value* rounded to two decimals for display."""

    return f"{value:.2f}"


def format_dimensions(rect: Rectangle) -> str:
    return f"{rect.width:.2f}×{rect.height:.2f}"


def format_timestamp(timestamp: str) -> str:
    """Return a local, human-readable version of an ISO-8601 *timestamp*."""

    try:
        parsed = datetime.fromisoformat(timestamp.replace("Z", "+00:00"))
    except (AttributeError, ValueError):
        return timestamp
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone()
    return parsed.strftime("%Y-%m-%d %H:%M:%S")


__all__ = [
    "Point",
    "Rectangle",
    "as_point",
    "canvas_scale",
    "center",
    "distance",
    "format_dimensions",
    "format_distance",
    "format_timestamp",
    "normalize_rect",
    "to_canvas_point",
]
