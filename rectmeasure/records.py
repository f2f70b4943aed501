"""Measurement record model plus the list helpers used by the record tables."""

from __future__ import annotations

import uuid
from datetime import datetime, timezone
from typing import Callable, Iterable, List, Optional, Sequence, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .geometry import Rectangle, distance, format_dimensions, format_distance, format_timestamp

SORT_FIELDS: Sequence[str] = ("timestamp", "distance")
SORT_ORDERS: Sequence[str] = ("asc", "desc")
DEFAULT_SORT: Tuple[str, str] = ("timestamp", "desc")


class RectangleModel(BaseModel):
    """Serializable rectangle with non-negative dimensions."""

    model_config = ConfigDict(frozen=True)

    x: float
    y: float
    width: float = Field(..., ge=0)
    height: float = Field(..., ge=0)

    @classmethod
    def from_rectangle(cls, rect: Rectangle) -> "RectangleModel":
        return cls(x=rect.x, y=rect.y, width=rect.width, height=rect.height)

    def to_rectangle(self) -> Rectangle:
        return Rectangle.from_mapping(self.model_dump())


class MeasurementRecord(BaseModel):
    """A persisted pair of rectangles and the distance between their centers."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str
    rectangles: Tuple[RectangleModel, RectangleModel]
    distance: float
    created_at: str = Field(..., alias="createdAt")

    @field_validator("rectangles", mode="before")
    @classmethod
    def _require_pair(cls, value):
        if isinstance(value, (list, tuple)) and len(value) != 2:
            raise ValueError("A measurement record needs exactly two rectangles.")
        return value

    @property
    def rectangle_pair(self) -> Tuple[Rectangle, Rectangle]:
        first, second = self.rectangles
        return first.to_rectangle(), second.to_rectangle()

    def to_dict(self) -> dict:
        """Return the storage/API representation (``createdAt`` key)."""

        return self.model_dump(by_alias=True)


def new_record_id() -> str:
    return uuid.uuid4().hex


def utc_timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()


def build_record(
    rectangles: Sequence[Rectangle],
    *,
    id_factory: Callable[[], str] = new_record_id,
    clock: Callable[[], str] = utc_timestamp,
) -> MeasurementRecord:
    """Create a record for exactly two rectangles, computing their distance."""

    if len(rectangles) != 2:
        raise ValueError("A measurement record needs exactly two rectangles.")
    first, second = rectangles
    return MeasurementRecord(
        id=id_factory(),
        rectangles=(
            RectangleModel.from_rectangle(first),
            RectangleModel.from_rectangle(second),
        ),
        distance=distance(first, second),
        created_at=clock(),
    )


def _raw_number(value: float) -> str:
    return str(int(value)) if float(value).is_integer() else repr(float(value))


def _raw_dimensions(rect: Rectangle) -> str:
    return f"{_raw_number(rect.width)}×{_raw_number(rect.height)}"


def _search_haystack(record: MeasurementRecord) -> List[str]:
    first, second = record.rectangle_pair
    return [
        format_distance(record.distance),
        format_timestamp(record.created_at),
        format_dimensions(first),
        format_dimensions(second),
        _raw_dimensions(first),
        _raw_dimensions(second),
    ]


def filter_records(records: Iterable[MeasurementRecord], query: Optional[str]) -> List[MeasurementRecord]:
    """Return records whose distance, timestamp or dimensions contain *query*."""

    records = list(records)
    needle = (query or "").strip().lower()
    if not needle:
        return records
    return [
        record
        for record in records
        if any(needle in text.lower() for text in _search_haystack(record))
    ]


def _timestamp_key(record: MeasurementRecord) -> float:
    try:
        parsed = datetime.fromisoformat(record.created_at.replace("Z", "+00:00"))
    except ValueError:
        return 0.0
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.timestamp()


def sort_records(
    records: Iterable[MeasurementRecord],
    field: str = DEFAULT_SORT[0],
    order: str = DEFAULT_SORT[1],
) -> List[MeasurementRecord]:
    """Return *records* sorted by ``timestamp`` or ``distance``."""

    if field not in SORT_FIELDS:
        raise ValueError(f"Unsupported sort field: {field!r}")
    if order not in SORT_ORDERS:
        raise ValueError(f"Unsupported sort order: {order!r}")
    key = _timestamp_key if field == "timestamp" else (lambda record: record.distance)
    return sorted(records, key=key, reverse=order == "desc")


def toggle_sort(current_field: str, current_order: str, clicked_field: str) -> Tuple[str, str]:
    """Return the sort state after a header click."""

    if clicked_field == current_field:
        return current_field, "desc" if current_order == "asc" else "asc"
    return clicked_field, "asc"


def query_records(
    records: Iterable[MeasurementRecord],
    query: Optional[str] = None,
    field: str = DEFAULT_SORT[0],
    order: str = DEFAULT_SORT[1],
) -> List[MeasurementRecord]:
    return sort_records(filter_records(records, query), field, order)


__all__ = [
    "DEFAULT_SORT",
    "MeasurementRecord",
    "RectangleModel",
    "SORT_FIELDS",
    "SORT_ORDERS",
    "build_record",
    "filter_records",
    "new_record_id",
    "query_records",
    "sort_records",
    "toggle_sort",
    "utc_timestamp",
]
