"""Core test fixtures — deterministic clock and small seeded stores."""

from datetime import datetime, timedelta, timezone

import pytest

from taskboard.core.record_store import TaskRecordStore
from taskboard.core.task_record import TaskInput


class FakeClock:
    """Callable clock that only moves when told to."""

    def __init__(self, start: datetime | None = None):
        self.current = start or datetime(2024, 3, 1, 12, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        return self.current

    def advance(self, seconds: float = 1.0) -> datetime:
        self.current += timedelta(seconds=seconds)
        return self.current


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def store(clock):
    return TaskRecordStore(now=clock)


@pytest.fixture
def three_task_store(store, clock):
    """Store with ids 1, 2, 3 in orders 1, 2, 3."""
    for title in ("First", "Second", "Third"):
        store.create(TaskInput(title=title))
        clock.advance()
    return store
