"""Draw two rectangles, measure the distance between their centers, keep the results."""

from .controller import MeasurementController
from .geometry import Point, Rectangle, center, distance, normalize_rect, to_canvas_point
from .history import History
from .persistence import JsonFileStorage, MemoryStorage, RecordStore
from .records import MeasurementRecord
from .surface import DrawingSurface

__all__ = [
    "DrawingSurface",
    "History",
    "JsonFileStorage",
    "MeasurementController",
    "MeasurementRecord",
    "MemoryStorage",
    "Point",
    "RecordStore",
    "Rectangle",
    "center",
    "distance",
    "normalize_rect",
    "to_canvas_point",
]
