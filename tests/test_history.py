import pytest

from rectmeasure.geometry import Rectangle
from rectmeasure.history import History

A = Rectangle(0, 0, 10, 10)
B = Rectangle(20, 20, 10, 10)


def test_push_and_undo_redo():
    history = History()
    history.push(A)
    history.push(B)
    assert history.present == (A, B)

    assert history.undo()
    assert history.present == (A,)
    assert list(history.future) == [(A, B)]

    assert history.undo()
    assert history.present == ()
    assert not history.undo()

    assert history.redo()
    assert history.present == (A,)
    assert history.redo()
    assert history.present == (A, B)
    assert not history.redo()


def test_commit_truncates_future():
    history = History()
    history.push(A)
    history.undo()
    assert history.can_redo
    history.push(B)
    assert not history.can_redo
    assert history.present == (B,)


def test_past_is_capped():
    history = History(limit=3)
    for index in range(6):
        history.commit((Rectangle(index, 0, 1, 1),))
    assert len(history.past) == 3
    stats = history.get_stats()
    assert stats["undo_full"] and stats["undo_count"] == 3
    while history.undo():
        pass
    assert history.present == (Rectangle(2, 0, 1, 1),)


def test_reset_drops_both_stacks():
    history = History()
    history.push(A)
    history.undo()
    history.reset((B,))
    assert history.present == (B,)
    assert not history.can_undo and not history.can_redo


def test_limit_must_be_positive():
    with pytest.raises(ValueError):
        History(limit=0)
