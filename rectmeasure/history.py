"""Linear undo/redo history of rectangle sets."""

from __future__ import annotations

from collections import deque
from typing import Deque, Iterable, Tuple

from .geometry import Rectangle

RectangleSet = Tuple[Rectangle, ...]

DEFAULT_HISTORY_LIMIT = 50


class History:
    """``past``/``present``/``future`` snapshots of the rectangle set.

    ``past`` keeps at most *limit* snapshots; once full, the oldest entry is
    dropped as new ones arrive.
    """

    def __init__(self, present: Iterable[Rectangle] = (), limit: int = DEFAULT_HISTORY_LIMIT):
        if limit < 1:
            raise ValueError("History limit must be at least 1.")
        self.limit = limit
        self.past: Deque[RectangleSet] = deque(maxlen=limit)
        self.present: RectangleSet = tuple(present)
        self.future: Deque[RectangleSet] = deque(maxlen=limit)

    def commit(self, present: Iterable[Rectangle]) -> RectangleSet:
        """Record a new present; any redo branch is discarded."""

        self.past.append(self.present)
        self.present = tuple(present)
        self.future.clear()
        return self.present

    def push(self, rect: Rectangle) -> RectangleSet:
        return self.commit(self.present + (rect,))

    def undo(self) -> bool:
        if not self.past:
            return False
        self.future.appendleft(self.present)
        self.present = self.past.pop()
        return True

    def redo(self) -> bool:
        if not self.future:
            return False
        self.past.append(self.present)
        self.present = self.future.popleft()
        return True

    def reset(self, present: Iterable[Rectangle] = ()) -> None:
        self.past.clear()
        self.future.clear()
        self.present = tuple(present)

    @property
    def can_undo(self) -> bool:
        return len(self.past) > 0

    @property
    def can_redo(self) -> bool:
        return len(self.future) > 0

    def get_stats(self) -> dict:
        return {
            "undo_count": len(self.past),
            "redo_count": len(self.future),
            "limit": self.limit,
            "undo_full": len(self.past) >= self.limit,
        }
