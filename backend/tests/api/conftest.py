"""API test fixtures — FastAPI app with an in-test TaskService on app.state.

Invariants:
    - The lifespan is not run; each test installs a fresh service with zero latency
    - app.state.task_service is reset after every test
"""

import pytest
from httpx import ASGITransport, AsyncClient

from taskboard.core.domain_types import Priority
from taskboard.core.task_record import TaskRecord
from taskboard.main import app
from taskboard.services.notification_dispatcher import CompletionNotifier
from taskboard.services.task_service import TaskService


class RecordingSender:
    function_name = "send-task-completion-email"

    def __init__(self):
        self.payloads: list[dict] = []

    async def send(self, payload: dict) -> tuple[bool, dict]:
        self.payloads.append(payload)
        return True, {"success": True}

    async def aclose(self) -> None:
        pass


@pytest.fixture
def api_sender():
    return RecordingSender()


@pytest.fixture
def task_service(api_sender):
    records = [
        TaskRecord(id=1, title="Design mockups", assignee="Sarah Chen", priority=Priority.HIGH, order=1),
        TaskRecord(id=2, title="Set up CI", completed=True, order=2),
        TaskRecord(id=3, title="Review PRs", order=3),
    ]
    return TaskService.from_seed(records, CompletionNotifier(api_sender), latency_scale=0)


@pytest.fixture
async def client(task_service):
    app.state.task_service = task_service
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c
    app.state.task_service = None
