import math

import pytest

from rectmeasure.geometry import (
    Point,
    Rectangle,
    canvas_scale,
    center,
    distance,
    format_dimensions,
    format_distance,
    format_timestamp,
    normalize_rect,
    to_canvas_point,
)


def test_center_is_midpoint():
    assert center(Rectangle(0, 0, 100, 100)) == Point(50, 50)
    assert center(Rectangle(50, 50, 100, 100)) == Point(100, 100)
    assert center(Rectangle(10, 20, 0, 0)) == Point(10, 20)


def test_distance_examples(rect1, rect2):
    assert distance(rect1, rect2) == pytest.approx(141.42, abs=0.01)
    assert distance(rect1, Rectangle(50, 50, 100, 100)) == pytest.approx(70.71, abs=0.01)


def test_distance_is_symmetric_and_zero_on_self():
    a = Rectangle(3, 7, 40, 10)
    b = Rectangle(-20, 55, 5, 90)
    assert distance(a, b) == distance(b, a)
    assert distance(a, a) == 0


def test_distance_zero_for_concentric_rectangles():
    assert distance(Rectangle(0, 0, 100, 100), Rectangle(25, 25, 50, 50)) == 0


def test_normalize_rect_handles_reverse_drags():
    assert normalize_rect((50, 80), (10, 20)) == Rectangle(10, 20, 40, 60)
    assert normalize_rect({"x": 10, "y": 80}, Point(50, 20)) == Rectangle(10, 20, 40, 60)


def test_normalize_rect_same_point_is_zero_sized():
    rect = normalize_rect((30, 30), (30, 30))
    assert rect.width == 0 and rect.height == 0


def test_canvas_mapping_scales_by_backing_over_displayed():
    assert canvas_scale((400, 300), (800, 600)) == (2.0, 2.0)
    assert to_canvas_point((100, 50), (400, 300), (800, 600)) == Point(200, 100)
    assert to_canvas_point((100, 50), (1600, 600), (800, 600)) == Point(50, 50)


def test_canvas_mapping_tolerates_collapsed_display():
    assert to_canvas_point((10, 10), (0, 0), (800, 600)) == Point(10, 10)


def test_point_sequences_must_be_pairs():
    with pytest.raises(ValueError):
        normalize_rect((1, 2, 3), (0, 0))


def test_formatting_helpers():
    assert format_distance(123.4567) == "123.46"
    assert format_distance(123) == "123.00"
    assert format_dimensions(Rectangle(0, 0, 12.5, 3)) == "12.50×3.00"
    assert format_timestamp("not a date") == "not a date"
    formatted = format_timestamp("2025-01-16T09:00:00Z")
    assert formatted and formatted != "2025-01-16T09:00:00Z"


def test_rectangle_mapping_round_trip():
    rect = Rectangle.from_mapping({"x": "1", "y": 2, "width": 3.5, "height": 4})
    assert rect.to_dict() == {"x": 1.0, "y": 2.0, "width": 3.5, "height": 4.0}
    assert math.isclose(center(rect).x, 2.75)
