from __future__ import annotations

from typing import List

import pytest

from kvlock.core.identity import StaticIdentity
from kvlock.core.manager import LockManager
from kvlock.core.store_memory import MemoryStore


class FakeClock:
    def __init__(self, now: int = 1_000) -> None:
        self.value = now

    def now(self) -> int:
        return self.value

    def advance(self, seconds: int) -> None:
        self.value += seconds


class RecordingSleep:
    def __init__(self) -> None:
        self.calls: List[float] = []

    def __call__(self, seconds: float) -> None:
        self.calls.append(seconds)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def store() -> MemoryStore:
    return MemoryStore()


@pytest.fixture
def sleeper() -> RecordingSleep:
    return RecordingSleep()


@pytest.fixture
def make_manager(store, clock, sleeper):
    def factory(holder: str = "worker-a", **kwargs) -> LockManager:
        kwargs.setdefault("clock", clock)
        kwargs.setdefault("sleep", sleeper)
        return LockManager(store, identity=StaticIdentity(holder), **kwargs)

    return factory
