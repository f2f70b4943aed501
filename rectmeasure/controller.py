"""Application controller tying the drawing surface to the record store."""

from __future__ import annotations

import logging
from typing import Callable, List, Optional, Sequence, Union

from .geometry import Rectangle
from .persistence import RecordStore
from .records import MeasurementRecord, build_record, new_record_id, utc_timestamp
from .surface import MAX_RECTANGLES, DrawingSurface

logger = logging.getLogger(__name__)

Listener = Callable[[], None]


class MeasurementController:
    """Owns the working rectangle pair, the selection and the record list."""

    def __init__(
        self,
        store: RecordStore,
        *,
        clock: Callable[[], str] = utc_timestamp,
        id_factory: Callable[[], str] = new_record_id,
    ) -> None:
        self.store = store
        self._clock = clock
        self._id_factory = id_factory
        self.rectangles: List[Rectangle] = []
        self.selected_id: Optional[str] = None
        self.readonly = False
        self.records: List[MeasurementRecord] = store.list()
        self._surface: Optional[DrawingSurface] = None
        self._listeners: List[Listener] = []

    def attach_surface(self, surface: DrawingSurface) -> None:
        """Route the surface's events here and push the current set into it."""

        self._surface = surface
        surface.on_rectangle_committed = self.handle_rectangle_committed
        surface.on_history_changed = self.handle_history_changed
        surface.on_cleared = self.handle_cleared
        surface.set_rectangles(self.rectangles, readonly=self.readonly)

    def subscribe(self, listener: Listener) -> None:
        self._listeners.append(listener)

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener()

    def _sync_surface(self) -> None:
        if self._surface is not None:
            self._surface.set_rectangles(self.rectangles, readonly=self.readonly)

    @property
    def can_save(self) -> bool:
        return len(self.rectangles) == MAX_RECTANGLES

    @property
    def selected_record(self) -> Optional[MeasurementRecord]:
        if self.selected_id is None:
            return None
        for record in self.records:
            if record.id == self.selected_id:
                return record
        return None

    def handle_rectangle_committed(self, rect: Rectangle) -> None:
        self.selected_id = None
        if len(self.rectangles) >= MAX_RECTANGLES:
            return
        self.rectangles.append(rect)
        self._notify()

    def handle_history_changed(self, rectangles: Sequence[Rectangle]) -> None:
        """Adopt the surface's set after undo/redo; an empty set clears it."""

        self.rectangles = list(rectangles)[:MAX_RECTANGLES]
        self._notify()

    def handle_cleared(self) -> None:
        self.rectangles = []
        self.selected_id = None
        self.readonly = False
        self._notify()

    def refresh(self) -> List[MeasurementRecord]:
        self.records = self.store.list()
        self._notify()
        return self.records

    def save_measurement(self) -> Optional[MeasurementRecord]:
        """Persist the current pair; returns ``None`` unless exactly two exist."""

        if not self.can_save:
            logger.debug("Save refused with %d rectangle(s)", len(self.rectangles))
            return None
        record = build_record(self.rectangles, id_factory=self._id_factory, clock=self._clock)
        self.store.save(record)
        self.records = self.store.list()
        self.rectangles = []
        self.selected_id = None
        self.readonly = False
        self._sync_surface()
        self._notify()
        return record

    def select_record(self, record: Union[MeasurementRecord, str]) -> Optional[MeasurementRecord]:
        record_id = record if isinstance(record, str) else record.id
        selected = next((item for item in self.records if item.id == record_id), None)
        if selected is None:
            logger.debug("Select ignored, unknown record %s", record_id)
            return None
        self.selected_id = selected.id
        self.rectangles = list(selected.rectangle_pair)
        self.readonly = True
        self._sync_surface()
        self._notify()
        return selected

    def edit_selected(self) -> None:
        """Keep the loaded rectangles but make them editable again."""

        if self.selected_id is None:
            return
        self.selected_id = None
        self.readonly = False
        self._sync_surface()
        self._notify()

    def delete_record(self, record_id: str) -> bool:
        deleted = self.store.delete(record_id)
        self.records = self.store.list()
        if record_id == self.selected_id:
            self.selected_id = None
            self.rectangles = []
            self.readonly = False
            self._sync_surface()
        self._notify()
        return deleted


__all__ = ["MeasurementController"]
