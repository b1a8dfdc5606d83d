import pytest

from input_router import (
    BACKSPACE,
    DOWN,
    DRAG,
    MOVE,
    UP,
    Command,
    CommandKind,
    InputRouter,
    KeyEvent,
    PointerEvent,
)


@pytest.fixture
def router():
    return InputRouter()


def test_keys(router):
    assert router.route(KeyEvent(char="q")) == Command(CommandKind.QUIT)
    assert router.route(KeyEvent(special=BACKSPACE)) == Command(CommandKind.RESET)
    assert router.route(KeyEvent(char="Q")) is None
    assert router.route(KeyEvent(char="x")) is None
    assert router.route(KeyEvent(special="escape")) is None


def test_press_and_drag_set_attractor_in_sub_rows(router):
    down = router.route(PointerEvent(DOWN, 4, 3))
    drag = router.route(PointerEvent(DRAG, 6, 1))

    assert down == Command(CommandKind.SET_ATTRACTOR, 4.0, 6.0)
    assert drag == Command(CommandKind.SET_ATTRACTOR, 6.0, 2.0)


def test_release_clears_attractor(router):
    router.route(PointerEvent(DOWN, 1, 1))

    assert router.route(PointerEvent(UP, 1, 1)) == Command(CommandKind.CLEAR_ATTRACTOR)
    assert not router.held


def test_move_only_tracks_while_held(router):
    assert router.route(PointerEvent(MOVE, 2, 2)) is None

    router.route(PointerEvent(DOWN, 0, 0))
    command = router.route(PointerEvent(MOVE, 2, 2))
    assert command == Command(CommandKind.UPDATE_ATTRACTOR, 2.0, 4.0)
    assert command.point == (2.0, 4.0)

    router.route(PointerEvent(UP, 2, 2))
    assert router.route(PointerEvent(MOVE, 3, 3)) is None


def test_unknown_events_are_ignored(router):
    assert router.route(object()) is None
    assert router.route(PointerEvent("scroll", 1, 1)) is None
