from rectmeasure.geometry import Point, Rectangle
from rectmeasure.rendering import (
    PRIMARY_STYLE,
    SECONDARY_STYLE,
    CenterMarker,
    DashedLine,
    GridLine,
    RoundedRect,
    render,
)


def _of(commands, kind):
    return [command for command in commands if isinstance(command, kind)]


def test_empty_set_draws_only_grid():
    commands = render([], 100, 40)
    assert all(isinstance(command, GridLine) for command in commands)
    # x = 0..100 step 20 and y = 0..40 step 20
    assert len(commands) == 6 + 3


def test_grid_comes_first():
    commands = render([Rectangle(0, 0, 10, 10)], 40, 40)
    kinds = [type(command) for command in commands]
    first_shape = kinds.index(RoundedRect)
    assert set(kinds[:first_shape]) == {GridLine}


def test_single_rectangle_has_no_connector():
    commands = render([Rectangle(0, 0, 100, 100)])
    rects = _of(commands, RoundedRect)
    assert len(rects) == 1 and rects[0].style == PRIMARY_STYLE
    assert _of(commands, CenterMarker)[0].point == Point(50, 50)
    assert _of(commands, DashedLine) == []


def test_two_rectangles_are_styled_and_connected():
    first = Rectangle(0, 0, 100, 100)
    second = Rectangle(100, 100, 100, 100)
    commands = render([first, second])
    rects = _of(commands, RoundedRect)
    assert [rect.style for rect in rects] == [PRIMARY_STYLE, SECONDARY_STYLE]
    markers = _of(commands, CenterMarker)
    assert [marker.color for marker in markers] == [PRIMARY_STYLE.stroke, SECONDARY_STYLE.stroke]
    (line,) = _of(commands, DashedLine)
    assert (line.start, line.end) == (Point(50, 50), Point(150, 150))
    assert line.dash == (5, 5)


def test_preview_is_appended_and_flagged():
    committed = Rectangle(0, 0, 10, 10)
    preview = Rectangle(20, 20, 30, 30)
    rects = _of(render([committed], preview=preview), RoundedRect)
    assert [rect.rect for rect in rects] == [committed, preview]
    assert [rect.preview for rect in rects] == [False, True]
    assert rects[1].style == SECONDARY_STYLE


def test_corner_radius_clamped_for_degenerate_rectangles():
    (rect,) = _of(render([Rectangle(5, 5, 0, 0)]), RoundedRect)
    assert rect.radius == 0
