"""Service test fixtures — fake notification sender, recording sleep, seeded TaskService.

Invariants:
    - No test talks to a real endpoint: FakeSender records payloads in memory
    - The default service fixture records requested delays instead of sleeping
"""

import pytest

from taskboard.core.domain_types import Priority
from taskboard.core.task_record import TaskRecord
from taskboard.services.notification_dispatcher import CompletionNotifier
from taskboard.services.task_service import TaskService


class FakeSender:
    """NotificationSender stand-in. Configure .success / .error before use."""

    function_name = "send-task-completion-email"

    def __init__(self):
        self.payloads: list[dict] = []
        self.success = True
        self.error: Exception | None = None
        self.closed = False

    async def send(self, payload: dict) -> tuple[bool, dict]:
        self.payloads.append(payload)
        if self.error is not None:
            raise self.error
        return self.success, {"success": self.success}

    async def aclose(self) -> None:
        self.closed = True


class RecordingSleep:
    def __init__(self):
        self.calls: list[float] = []

    async def __call__(self, seconds: float) -> None:
        self.calls.append(seconds)


@pytest.fixture
def sender():
    return FakeSender()


@pytest.fixture
def notifier(sender):
    return CompletionNotifier(sender)


@pytest.fixture
def sleep():
    return RecordingSleep()


@pytest.fixture
def seed_records():
    return [
        TaskRecord(id=1, title="Design mockups", assignee="Sarah Chen", order=1),
        TaskRecord(id=2, title="Set up CI", completed=True, assignee="Marcus Johnson", order=2),
        TaskRecord(id=3, title="Review PRs", priority=Priority.LOW, order=3),
    ]


@pytest.fixture
def service(seed_records, notifier, sleep):
    return TaskService.from_seed(seed_records, notifier, sleep=sleep)
