"""Pointer-driven rectangle drawing with undo/redo.

The surface is toolkit-agnostic: hosts forward pointer and key events and
replay the draw commands passed to ``on_render``.
"""

from __future__ import annotations

import logging
from typing import Callable, List, Optional, Sequence

from .geometry import Point, PointLike, Rectangle, SizeLike, as_point, normalize_rect, to_canvas_point
from .history import DEFAULT_HISTORY_LIMIT, History, RectangleSet
from .rendering import DrawCommand, render

logger = logging.getLogger(__name__)

MAX_RECTANGLES = 2
UNDO_KEY = "z"

RectangleCallback = Callable[[Rectangle], None]
HistoryCallback = Callable[[RectangleSet], None]
RenderCallback = Callable[[List[DrawCommand]], None]


class DrawingSurface:
    """State machine with ``idle`` and ``drawing`` modes."""

    def __init__(
        self,
        rectangles: Sequence[Rectangle] = (),
        *,
        readonly: bool = False,
        width: float = 800,
        height: float = 600,
        history_limit: int = DEFAULT_HISTORY_LIMIT,
        on_rectangle_committed: Optional[RectangleCallback] = None,
        on_history_changed: Optional[HistoryCallback] = None,
        on_cleared: Optional[Callable[[], None]] = None,
        on_render: Optional[RenderCallback] = None,
    ) -> None:
        self.width = width
        self.height = height
        self.readonly = readonly
        self.history = History(tuple(rectangles)[:MAX_RECTANGLES], limit=history_limit)
        self.on_rectangle_committed = on_rectangle_committed
        self.on_history_changed = on_history_changed
        self.on_cleared = on_cleared
        self.on_render = on_render
        self._start: Optional[Point] = None
        self._preview: Optional[Rectangle] = None

    @property
    def rectangles(self) -> RectangleSet:
        return self.history.present

    @property
    def mode(self) -> str:
        return "drawing" if self._start is not None else "idle"

    @property
    def is_drawing(self) -> bool:
        return self._start is not None

    @property
    def preview(self) -> Optional[Rectangle]:
        return self._preview

    @property
    def can_undo(self) -> bool:
        return not self.readonly and self.history.can_undo

    @property
    def can_redo(self) -> bool:
        return not self.readonly and self.history.can_redo

    def _map(
        self,
        point: PointLike,
        displayed_size: Optional[SizeLike],
        backing_size: Optional[SizeLike],
    ) -> Point:
        if displayed_size is None:
            return as_point(point)
        if backing_size is None:
            backing_size = (self.width, self.height)
        return to_canvas_point(point, displayed_size, backing_size)

    def commands(self) -> List[DrawCommand]:
        return render(self.rectangles, self.width, self.height, preview=self._preview)

    def redraw(self) -> None:
        if self.on_render is not None:
            self.on_render(self.commands())

    def set_rectangles(self, rectangles: Sequence[Rectangle], readonly: Optional[bool] = None) -> None:
        """Load a new committed set and start a fresh history."""

        if readonly is not None:
            self.readonly = readonly
        self._start = None
        self._preview = None
        self.history.reset(tuple(rectangles)[:MAX_RECTANGLES])
        self.redraw()

    def pointer_down(
        self,
        point: PointLike,
        displayed_size: Optional[SizeLike] = None,
        backing_size: Optional[SizeLike] = None,
    ) -> bool:
        if self.readonly or len(self.rectangles) >= MAX_RECTANGLES:
            return False
        self._start = self._map(point, displayed_size, backing_size)
        self._preview = None
        return True

    def pointer_move(
        self,
        point: PointLike,
        displayed_size: Optional[SizeLike] = None,
        backing_size: Optional[SizeLike] = None,
    ) -> Optional[Rectangle]:
        if self._start is None:
            return None
        self._preview = normalize_rect(self._start, self._map(point, displayed_size, backing_size))
        self.redraw()
        return self._preview

    def pointer_up(
        self,
        point: PointLike,
        displayed_size: Optional[SizeLike] = None,
        backing_size: Optional[SizeLike] = None,
    ) -> Optional[Rectangle]:
        if self._start is None:
            return None
        rect = normalize_rect(self._start, self._map(point, displayed_size, backing_size))
        self._start = None
        self._preview = None
        self.history.push(rect)
        logger.debug("Committed rectangle %s (%d on canvas)", rect, len(self.rectangles))
        self.redraw()
        if self.on_rectangle_committed is not None:
            self.on_rectangle_committed(rect)
        return rect

    def pointer_leave(self) -> None:
        """Abandon the in-progress gesture without committing it."""

        if self._start is None:
            return
        self._start = None
        self._preview = None
        self.redraw()

    pointer_cancel = pointer_leave

    def _notify_history(self) -> None:
        self.redraw()
        if self.on_history_changed is not None:
            self.on_history_changed(self.rectangles)

    def undo(self) -> bool:
        if self.readonly or not self.history.undo():
            return False
        logger.debug("Undo -> %d rectangle(s)", len(self.rectangles))
        self._notify_history()
        return True

    def redo(self) -> bool:
        if self.readonly or not self.history.redo():
            return False
        logger.debug("Redo -> %d rectangle(s)", len(self.rectangles))
        self._notify_history()
        return True

    def clear(self) -> bool:
        if self.readonly:
            return False
        self._start = None
        self._preview = None
        self.history.commit(())
        self.redraw()
        if self.on_cleared is not None:
            self.on_cleared()
        return True

    def handle_shortcut(self, key: str, ctrl: bool = False, meta: bool = False, shift: bool = False) -> bool:
        """Ctrl/Cmd+Z undoes, Ctrl/Cmd+Shift+Z redoes.

        Returns ``True`` when the key combination was consumed.
        """

        if not (ctrl or meta) or key.lower() != UNDO_KEY:
            return False
        if self.readonly:
            return False
        if shift:
            self.redo()
        else:
            self.undo()
        return True


__all__ = ["DrawingSurface", "MAX_RECTANGLES"]
