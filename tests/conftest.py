from __future__ import annotations

import itertools

import pytest

from rectmeasure.geometry import Rectangle
from rectmeasure.persistence import MemoryStorage, RecordStore


@pytest.fixture
def rect1() -> Rectangle:
    return Rectangle(0, 0, 100, 100)


@pytest.fixture
def rect2() -> Rectangle:
    return Rectangle(100, 100, 100, 100)


@pytest.fixture
def storage() -> MemoryStorage:
    return MemoryStorage()


@pytest.fixture
def store(storage) -> RecordStore:
    return RecordStore(storage)


@pytest.fixture
def id_factory():
    counter = itertools.count(1)
    return lambda: f"rec-{next(counter)}"


@pytest.fixture
def clock():
    ticks = itertools.count(0)
    return lambda: f"2025-01-16T09:00:{next(ticks):02d}+00:00"
