import json

from rectmeasure.geometry import Rectangle
from rectmeasure.persistence import STORAGE_KEY, JsonFileStorage, MemoryStorage, RecordStore
from rectmeasure.records import MeasurementRecord, build_record


def _record(record_id: str) -> MeasurementRecord:
    return build_record(
        [Rectangle(0, 0, 100, 100), Rectangle(200, 200, 100, 100)],
        id_factory=lambda: record_id,
        clock=lambda: "2025-01-16T09:00:00Z",
    )


def test_missing_key_reads_as_empty(store):
    assert store.list() == []


def test_save_then_list_round_trips_all_fields(store):
    record = _record("test-id")
    store.save(record)
    (loaded,) = store.list()
    assert loaded == record
    assert loaded.to_dict() == {
        "id": "test-id",
        "rectangles": (
            {"x": 0.0, "y": 0.0, "width": 100.0, "height": 100.0},
            {"x": 200.0, "y": 200.0, "width": 100.0, "height": 100.0},
        ),
        "distance": record.distance,
        "createdAt": "2025-01-16T09:00:00Z",
    }


def test_records_stored_as_json_array_under_one_key(storage, store):
    store.save(_record("a"))
    store.save(_record("b"))
    payload = json.loads(storage.get(STORAGE_KEY))
    assert [item["id"] for item in payload] == ["a", "b"]
    assert "createdAt" in payload[0]


def test_delete_keeps_other_records(store):
    store.save(_record("a"))
    store.save(_record("b"))
    assert store.delete("a")
    assert [record.id for record in store.list()] == ["b"]


def test_delete_unknown_id_is_noop(store):
    store.save(_record("a"))
    assert not store.delete("missing")
    assert [record.id for record in store.list()] == ["a"]


def test_clear_all(storage, store):
    store.save(_record("a"))
    store.clear_all()
    assert storage.get(STORAGE_KEY) is None
    assert store.list() == []


def test_get_by_id(store):
    store.save(_record("a"))
    assert store.get("a").id == "a"
    assert store.get("nope") is None


def test_malformed_json_reads_as_empty():
    store = RecordStore(MemoryStorage({STORAGE_KEY: "{not json"}))
    assert store.list() == []


def test_non_array_reads_as_empty():
    store = RecordStore(MemoryStorage({STORAGE_KEY: json.dumps({"id": "x"})}))
    assert store.list() == []


def test_invalid_entries_are_skipped():
    good = _record("good").to_dict()
    bad = {"id": "bad", "rectangles": [good["rectangles"][0]], "distance": 1, "createdAt": "x"}
    store = RecordStore(MemoryStorage({STORAGE_KEY: json.dumps([bad, good, "junk"])}))
    assert [record.id for record in store.list()] == ["good"]


def test_json_file_storage_persists_between_instances(tmp_path):
    path = tmp_path / "nested" / "records.json"
    RecordStore(JsonFileStorage(path)).save(_record("a"))
    assert path.exists()
    assert [record.id for record in RecordStore(JsonFileStorage(path)).list()] == ["a"]


def test_json_file_storage_tolerates_corrupt_file(tmp_path):
    path = tmp_path / "records.json"
    path.write_text("garbage", encoding="utf-8")
    storage = JsonFileStorage(path)
    assert storage.get(STORAGE_KEY) is None
    storage.set("k", "v")
    assert storage.get("k") == "v"
    storage.delete("k")
    assert storage.get("k") is None
