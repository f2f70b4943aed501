import pytest
from pydantic import ValidationError

from rectmeasure.geometry import Rectangle
from rectmeasure.records import (
    MeasurementRecord,
    build_record,
    filter_records,
    query_records,
    sort_records,
    toggle_sort,
)


def _record(record_id, second, created_at):
    return build_record(
        [Rectangle(0, 0, 100, 100), second],
        id_factory=lambda: record_id,
        clock=lambda: created_at,
    )


@pytest.fixture
def records():
    return [
        _record("near", Rectangle(50, 50, 100, 100), "2025-01-16T09:00:00+00:00"),
        _record("far", Rectangle(100, 100, 100, 100), "2025-01-15T09:00:00+00:00"),
        _record("mid", Rectangle(80, 0, 40, 25.5), "2025-01-17T09:00:00+00:00"),
    ]


def test_build_record_computes_distance():
    record = _record("x", Rectangle(100, 100, 100, 100), "2025-01-16T09:00:00Z")
    assert record.distance == pytest.approx(141.42, abs=0.01)
    assert record.rectangle_pair[1] == Rectangle(100, 100, 100, 100)


def test_build_record_requires_two_rectangles():
    with pytest.raises(ValueError):
        build_record([Rectangle(0, 0, 1, 1)])


def test_default_ids_are_unique():
    rects = [Rectangle(0, 0, 1, 1), Rectangle(2, 2, 1, 1)]
    assert build_record(rects).id != build_record(rects).id


def test_record_validation_rejects_wrong_count_and_negative_size():
    base = {"id": "a", "distance": 1.0, "createdAt": "2025-01-16T09:00:00Z"}
    rect = {"x": 0, "y": 0, "width": 1, "height": 1}
    with pytest.raises(ValidationError):
        MeasurementRecord.model_validate({**base, "rectangles": [rect]})
    with pytest.raises(ValidationError):
        MeasurementRecord.model_validate({**base, "rectangles": [rect, {**rect, "width": -1}]})


def test_record_accepts_snake_case_timestamp():
    rect = {"x": 0, "y": 0, "width": 1, "height": 1}
    record = MeasurementRecord.model_validate(
        {"id": "a", "rectangles": [rect, rect], "distance": 0, "created_at": "t"}
    )
    assert record.created_at == "t"


def test_filter_by_distance_and_dimensions(records):
    assert [r.id for r in filter_records(records, "141.42")] == ["far"]
    assert [r.id for r in filter_records(records, "40.00×25.50")] == ["mid"]
    assert filter_records(records, "") == records
    assert filter_records(records, "   ") == records
    assert filter_records(records, "no match") == []


def test_filter_matches_unformatted_dimensions(records):
    assert [r.id for r in filter_records(records, "100×100")] == ["near", "far", "mid"]
    assert [r.id for r in filter_records(records, "40×25.5")] == ["mid"]
    record = build_record([Rectangle(0, 0, 100, 100), Rectangle(50, 50, 150, 150)], id_factory=lambda: "a")
    assert [r.id for r in filter_records([record], "150×150")] == ["a"]


def test_sort_by_distance_and_timestamp(records):
    assert [r.id for r in sort_records(records, "distance", "asc")] == ["mid", "near", "far"]
    assert [r.id for r in sort_records(records, "distance", "desc")] == ["far", "near", "mid"]
    assert [r.id for r in sort_records(records)] == ["mid", "near", "far"]
    assert [r.id for r in sort_records(records, "timestamp", "asc")] == ["far", "near", "mid"]


def test_sort_rejects_unknown_field(records):
    with pytest.raises(ValueError):
        sort_records(records, "size")


def test_toggle_sort():
    assert toggle_sort("timestamp", "desc", "timestamp") == ("timestamp", "asc")
    assert toggle_sort("timestamp", "asc", "timestamp") == ("timestamp", "desc")
    assert toggle_sort("timestamp", "desc", "distance") == ("distance", "asc")


def test_query_combines_filter_and_sort(records):
    result = query_records(records, "100.00×100.00", "distance", "desc")
    assert [r.id for r in result] == ["far", "near", "mid"]
    assert [r.id for r in query_records(records, "70.71")] == ["near"]
