from __future__ import annotations

from typing import Any, List, Optional

import httpx
import reflex as rx
from pydantic import ValidationError

from rectmeasure.config import Settings
from rectmeasure.geometry import format_dimensions, format_distance, format_timestamp
from rectmeasure.records import DEFAULT_SORT, MeasurementRecord, query_records, toggle_sort
from rectmeasure.rendering import CenterMarker, DashedLine, RoundedRect, render

CANVAS_WIDTH = 800
CANVAS_HEIGHT = 600


def _normalise_base_url(value: Optional[str]) -> str:
    if not value:
        return ""
    return value.rstrip("/")


def _extract_error_message(response: Optional[httpx.Response], fallback: str) -> str:
    if response is None:
        return fallback
    try:
        payload = response.json()
    except ValueError:
        payload = None
    if isinstance(payload, dict):
        detail = payload.get("detail")
        if isinstance(detail, str):
            return detail
        if isinstance(detail, list) and detail:
            first = detail[0]
            if isinstance(first, dict):
                msg = first.get("msg")
                if isinstance(msg, str):
                    return msg
    return f"{response.status_code} {response.reason_phrase}"


def _parse_records(payload: Any) -> List[dict[str, Any]]:
    items = payload.get("records") if isinstance(payload, dict) else None
    if not isinstance(items, list):
        return []
    parsed: List[dict[str, Any]] = []
    for item in items:
        try:
            parsed.append(MeasurementRecord.model_validate(item).to_dict())
        except ValidationError:
            continue
    return parsed


class RecordsState(rx.State):
    """Saved measurements fetched from the backend API."""

    api_base_url: str = _normalise_base_url(Settings.from_env().api_url)
    records: List[dict[str, Any]] = []
    selected_id: str = ""
    search_query: str = ""
    sort_field: str = DEFAULT_SORT[0]
    sort_order: str = DEFAULT_SORT[1]
    loading: bool = False
    error: str = ""

    def _api_endpoint(self, path: str) -> str:
        if not self.api_base_url:
            raise ValueError("API base URL is not configured.")
        if not path.startswith("/"):
            path = f"/{path}"
        return f"{self.api_base_url}{path}"

    def _models(self) -> List[MeasurementRecord]:
        return [MeasurementRecord.model_validate(item) for item in self.records]

    def _selected(self) -> Optional[MeasurementRecord]:
        for record in self._models():
            if record.id == self.selected_id:
                return record
        return None

    async def load_records(self):
        """Fetch the record list from the API."""

        self.loading = True
        self.error = ""
        response: Optional[httpx.Response] = None
        try:
            async with httpx.AsyncClient(timeout=30.0) as client:
                response = await client.get(self._api_endpoint("/records"))
            response.raise_for_status()
            payload = response.json()
        except httpx.HTTPStatusError as exc:  # pragma: no cover - network errors
            self.error = _extract_error_message(exc.response, "Failed to load measurements.")
            payload = None
        except (httpx.RequestError, ValueError) as exc:  # pragma: no cover - network errors
            self.error = str(exc)
            payload = None
        finally:
            self.loading = False

        if payload is None:
            return
        self.records = _parse_records(payload)
        if self.selected_id and all(item["id"] != self.selected_id for item in self.records):
            self.selected_id = ""

    async def delete_record(self, record_id: str):
        try:
            async with httpx.AsyncClient(timeout=30.0) as client:
                response = await client.delete(self._api_endpoint(f"/records/{record_id}"))
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:  # pragma: no cover - network errors
            self.error = _extract_error_message(exc.response, "Failed to delete measurement.")
            return
        except httpx.RequestError as exc:  # pragma: no cover - network errors
            self.error = str(exc)
            return
        if record_id == self.selected_id:
            self.selected_id = ""
        return RecordsState.load_records

    async def clear_records(self):
        try:
            async with httpx.AsyncClient(timeout=30.0) as client:
                response = await client.delete(self._api_endpoint("/records"))
            response.raise_for_status()
        except httpx.HTTPError as exc:  # pragma: no cover - network errors
            self.error = str(exc)
            return
        self.selected_id = ""
        return RecordsState.load_records

    def select_record(self, record_id: str):
        self.selected_id = record_id

    def clear_selection(self):
        self.selected_id = ""

    def set_search_query(self, value: str):
        self.search_query = value

    def sort_by(self, field: str):
        self.sort_field, self.sort_order = toggle_sort(self.sort_field, self.sort_order, field)

    @rx.var
    def visible_rows(self) -> List[dict[str, str]]:
        rows: List[dict[str, str]] = []
        for record in query_records(self._models(), self.search_query, self.sort_field, self.sort_order):
            first, second = record.rectangle_pair
            rows.append(
                {
                    "id": record.id,
                    "first": f"R1: {format_dimensions(first)}",
                    "second": f"R2: {format_dimensions(second)}",
                    "distance": format_distance(record.distance),
                    "created_at": format_timestamp(record.created_at),
                }
            )
        return rows

    @rx.var
    def count_label(self) -> str:
        count = len(self.visible_rows)
        suffix = "" if count == 1 else "s"
        return f"{count} measurement{suffix} found"

    @rx.var
    def sort_indicator(self) -> dict[str, str]:
        arrow = "↑" if self.sort_order == "asc" else "↓"
        return {
            "distance": arrow if self.sort_field == "distance" else "↕",
            "timestamp": arrow if self.sort_field == "timestamp" else "↕",
        }

    @rx.var
    def selected_distance(self) -> str:
        record = self._selected()
        if record is None:
            return ""
        return f"Distance: {format_distance(record.distance)} px"

    @rx.var
    def preview_rects(self) -> List[dict[str, str]]:
        record = self._selected()
        if record is None:
            return []
        return [
            {
                "x": str(command.rect.x),
                "y": str(command.rect.y),
                "width": str(command.rect.width),
                "height": str(command.rect.height),
                "radius": str(command.radius),
                "stroke": command.style.stroke,
                "fill": command.style.fill,
            }
            for command in render(record.rectangle_pair, CANVAS_WIDTH, CANVAS_HEIGHT)
            if isinstance(command, RoundedRect)
        ]

    @rx.var
    def preview_centers(self) -> List[dict[str, str]]:
        record = self._selected()
        if record is None:
            return []
        return [
            {
                "cx": str(command.point.x),
                "cy": str(command.point.y),
                "r": str(command.radius),
                "fill": command.color,
            }
            for command in render(record.rectangle_pair, CANVAS_WIDTH, CANVAS_HEIGHT)
            if isinstance(command, CenterMarker)
        ]

    @rx.var
    def preview_connectors(self) -> List[dict[str, str]]:
        record = self._selected()
        if record is None:
            return []
        return [
            {
                "x1": str(command.start.x),
                "y1": str(command.start.y),
                "x2": str(command.end.x),
                "y2": str(command.end.y),
                "stroke": command.color,
                "dash": " ".join(str(step) for step in command.dash),
            }
            for command in render(record.rectangle_pair, CANVAS_WIDTH, CANVAS_HEIGHT)
            if isinstance(command, DashedLine)
        ]
