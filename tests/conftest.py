import os
import random

import pytest

# 창 없이 pygame을 쓰기 위해 import 전에 설정
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")


class FakeClock:
    """Millisecond clock that only moves when told to."""

    def __init__(self, now: int = 0) -> None:
        self.now = now

    def __call__(self) -> int:
        return self.now

    def advance(self, ms: int) -> None:
        self.now += ms


@pytest.fixture
def fake_clock():
    return FakeClock()


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture(autouse=True)
def _clear_snake_env(monkeypatch):
    monkeypatch.delenv("SNAKE_SPEED", raising=False)
    monkeypatch.delenv("SNAKE_MAX_MISTAKES", raising=False)
