from __future__ import annotations

import random

import pytest

from arcade_text import Language


class FakeClock:
    """Monotonic clock the test moves by hand."""

    def __init__(self, start: float = 100.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def rng() -> random.Random:
    return random.Random(1234)


@pytest.fixture(autouse=True)
def english(monkeypatch: pytest.MonkeyPatch) -> Language:
    # Keep every Translations built during a test on English
    monkeypatch.setenv("LANG", "en_US.UTF-8")
    return Language.ENGLISH
