import os
import random

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

import pytest


class FakeClock:
    """Records frame requests instead of waiting for a display refresh."""

    def __init__(self):
        self.requests = []

    def request_frame(self, callback):
        self.requests.append(callback)


class FakeViewport:
    def __init__(self, width, height):
        self.width = width
        self.height = height


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def viewport_factory():
    return FakeViewport
