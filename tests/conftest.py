"""Shared fixtures for recorder tests."""

import pytest

from allure_recorder.context import ExecutionContext
from allure_recorder.writer import MemorySink


class FakeClock:
    """Deterministic clock advancing 5ms on every reading."""

    def __init__(self, start: int = 1_700_000_000_000):
        self.now = start

    def __call__(self) -> int:
        self.now += 5
        return self.now


@pytest.fixture
def sink() -> MemorySink:
    """Create an in-memory sink."""
    return MemorySink()


@pytest.fixture
def clock() -> FakeClock:
    """Create a deterministic clock."""
    return FakeClock()


@pytest.fixture
def context(sink: MemorySink, clock: FakeClock) -> ExecutionContext:
    """Create an execution context on the memory sink."""
    return ExecutionContext(sink, clock=clock)
