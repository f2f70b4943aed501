"""FastAPI application exposing the measurement record store."""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import List

from fastapi import Depends, FastAPI, HTTPException, Response, status
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from .config import Settings
from .geometry import center, distance
from .persistence import JsonFileStorage, RecordStore
from .records import MeasurementRecord, RectangleModel, build_record

logger = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings.from_env()


@lru_cache(maxsize=1)
def _default_store() -> RecordStore:
    settings = get_settings()
    return RecordStore(JsonFileStorage(settings.data_path))


def get_store() -> RecordStore:
    return _default_store()


class RectanglePairPayload(BaseModel):
    rectangles: List[RectangleModel] = Field(
        ..., min_length=2, max_length=2, description="Exactly two rectangles, primary first."
    )


class PointResponse(BaseModel):
    x: float
    y: float


class DistanceResponse(BaseModel):
    distance: float
    centers: List[PointResponse]


class RecordListResponse(BaseModel):
    records: List[dict]


app = FastAPI(title="Rectangle Distance Backend", version="0.1.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/health")
def health() -> dict:
    return {"status": "ok"}


@app.post("/distance", response_model=DistanceResponse)
def measure_distance(payload: RectanglePairPayload) -> DistanceResponse:
    """Return the center-to-center distance without storing anything."""

    first, second = (item.to_rectangle() for item in payload.rectangles)
    return DistanceResponse(
        distance=distance(first, second),
        centers=[PointResponse(**center(rect).to_dict()) for rect in (first, second)],
    )


@app.get("/records", response_model=RecordListResponse)
def list_records(store: RecordStore = Depends(get_store)) -> RecordListResponse:
    return RecordListResponse(records=[record.to_dict() for record in store.list()])


@app.get("/records/{record_id}")
def get_record(record_id: str, store: RecordStore = Depends(get_store)) -> dict:
    record = store.get(record_id)
    if record is None:
        raise HTTPException(status_code=404, detail="Record not found")
    return record.to_dict()


@app.post("/records", status_code=status.HTTP_201_CREATED)
def create_record(payload: RectanglePairPayload, store: RecordStore = Depends(get_store)) -> dict:
    """Compute the distance for the posted pair and persist it as a new record."""

    record: MeasurementRecord = build_record([item.to_rectangle() for item in payload.rectangles])
    store.save(record)
    return record.to_dict()


@app.delete("/records/{record_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_record(record_id: str, store: RecordStore = Depends(get_store)) -> Response:
    store.delete(record_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@app.delete("/records", status_code=status.HTTP_204_NO_CONTENT)
def clear_records(store: RecordStore = Depends(get_store)) -> Response:
    store.clear_all()
    return Response(status_code=status.HTTP_204_NO_CONTENT)
