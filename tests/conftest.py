import numpy as np
import pytest

from input_router import KeyEvent


class FakeDisplay:
    """Display with a fixed size that replays scripted poll results."""

    def __init__(self, size=(10, 5), script=()):
        self._size = size
        self.script = list(script)
        self.frames = []
        self.timeouts = []

    def size(self):
        return self._size

    def poll(self, timeout):
        self.timeouts.append(timeout)
        if not self.script:
            return [KeyEvent(char="q")]
        return self.script.pop(0)

    def draw(self, buffer):
        self.frames.append(buffer.to_image())


class FakeClock:
    def __init__(self, step=0.034):
        self.now = 0.0
        self.step = step

    def __call__(self):
        self.now += self.step
        return self.now


@pytest.fixture
def rng():
    return np.random.default_rng(1234)


@pytest.fixture
def fake_display():
    return FakeDisplay


@pytest.fixture
def fake_clock():
    return FakeClock()
