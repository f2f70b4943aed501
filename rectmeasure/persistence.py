"""Key-value storage backends and the JSON-array record store built on them."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from threading import Lock
from typing import Dict, List, Optional, Protocol

from pydantic import ValidationError

from .records import MeasurementRecord

logger = logging.getLogger(__name__)

STORAGE_KEY = "measurement-records"


class KeyValueStorage(Protocol):
    """Opaque string storage in the shape of the browser's ``localStorage``."""

    def get(self, key: str) -> Optional[str]: ...

    def set(self, key: str, value: str) -> None: ...

    def delete(self, key: str) -> None: ...


class MemoryStorage:
    """Dictionary-backed storage, mainly for tests and throwaway sessions."""

    def __init__(self, initial: Optional[Dict[str, str]] = None) -> None:
        self._data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def delete(self, key: str) -> None:
        self._data.pop(key, None)


class JsonFileStorage:
    """Persist string values to a single JSON object on disk.

    The whole file is read and rewritten on every change. That is plenty for a
    local tool and keeps the desktop app and the API sharing one plain file.
    """

    def __init__(self, storage_path: Path) -> None:
        self._path = Path(storage_path)
        self._lock = Lock()
        self._path.parent.mkdir(parents=True, exist_ok=True)
        if not self._path.exists():
            self._write({})

    def _read(self) -> Dict[str, str]:
        try:
            with self._path.open("r", encoding="utf-8") as handle:
                payload = json.load(handle)
        except FileNotFoundError:
            return {}
        except (OSError, ValueError) as exc:
            logger.warning("Ignoring unreadable storage file %s: %s", self._path, exc)
            return {}
        if not isinstance(payload, dict):
            logger.warning("Ignoring storage file %s: expected a JSON object", self._path)
            return {}
        return {key: value for key, value in payload.items() if isinstance(value, str)}

    def _write(self, payload: Dict[str, str]) -> None:
        with self._path.open("w", encoding="utf-8") as handle:
            json.dump(payload, handle, indent=2, sort_keys=True)

    def get(self, key: str) -> Optional[str]:
        with self._lock:
            return self._read().get(key)

    def set(self, key: str, value: str) -> None:
        with self._lock:
            payload = self._read()
            payload[key] = value
            self._write(payload)

    def delete(self, key: str) -> None:
        with self._lock:
            payload = self._read()
            if key in payload:
                del payload[key]
                self._write(payload)


class RecordStore:
    """Measurement records stored as one JSON array under :data:`STORAGE_KEY`."""

    def __init__(self, storage: KeyValueStorage, key: str = STORAGE_KEY) -> None:
        self._storage = storage
        self._key = key

    def _load_raw(self) -> List[dict]:
        raw = self._storage.get(self._key)
        if not raw:
            return []
        try:
            payload = json.loads(raw)
        except ValueError as exc:
            logger.warning("Stored records under %r are not valid JSON: %s", self._key, exc)
            return []
        if not isinstance(payload, list):
            logger.warning("Stored records under %r are not a JSON array", self._key)
            return []
        return [item for item in payload if isinstance(item, dict)]

    def _dump(self, records: List[MeasurementRecord]) -> None:
        self._storage.set(self._key, json.dumps([record.to_dict() for record in records]))

    def list(self) -> List[MeasurementRecord]:
        """Return all valid records in insertion order."""

        records: List[MeasurementRecord] = []
        for item in self._load_raw():
            try:
                records.append(MeasurementRecord.model_validate(item))
            except ValidationError as exc:
                logger.warning("Skipping malformed record %r: %s", item.get("id"), exc)
        return records

    def get(self, record_id: str) -> Optional[MeasurementRecord]:
        for record in self.list():
            if record.id == record_id:
                return record
        return None

    def save(self, record: MeasurementRecord) -> None:
        records = self.list()
        records.append(record)
        self._dump(records)
        logger.info("Saved measurement %s (distance %.2f)", record.id, record.distance)

    def delete(self, record_id: str) -> bool:
        """Remove *record_id*; returns ``False`` when nothing matched."""

        records = self.list()
        remaining = [record for record in records if record.id != record_id]
        if len(remaining) == len(records):
            logger.debug("Delete ignored, no record with id %s", record_id)
            return False
        self._dump(remaining)
        logger.info("Deleted measurement %s", record_id)
        return True

    def clear_all(self) -> None:
        self._storage.delete(self._key)
        logger.info("Cleared all measurement records")


__all__ = [
    "JsonFileStorage",
    "KeyValueStorage",
    "MemoryStorage",
    "RecordStore",
    "STORAGE_KEY",
]
