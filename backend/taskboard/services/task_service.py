"""Task Service — async facade over the record store with simulated latency and completion notifications.

Invariants:
    - The only owner of its TaskRecordStore; callers get copies, never the store
    - Every operation awaits its simulated latency BEFORE touching the store, and
      the store call itself never suspends (mutations run to completion)
    - Not-found is returned as None, never raised
    - update(): the notification is scheduled only after the mutation committed,
      and the returned record never depends on delivery outcome

Design Decisions:
    - Latency table from core/domain_types.OPERATION_LATENCY_MS, scaled by
      latency_scale (0 disables) so tests and local runs skip the delay
    - sleep injectable: tests can record requested delays without waiting
"""

import asyncio
import logging
from typing import Iterable

from taskboard.core.boundary_protocols import Sleeper
from taskboard.core.completion_notice import is_completion_transition
from taskboard.core.domain_types import OPERATION_LATENCY_MS, Operation
from taskboard.core.record_store import TaskRecordStore
from taskboard.core.task_record import TaskInput, TaskPatch, TaskRecord
from taskboard.core.task_stats import TaskStats
from taskboard.services.notification_dispatcher import CompletionNotifier

logger = logging.getLogger(__name__)


class TaskService:
    """Public API for task records: get_all, get_by_id, create, update, delete, update_order, get_stats."""

    def __init__(
        self,
        store: TaskRecordStore,
        notifier: CompletionNotifier,
        latency_scale: float = 1.0,
        sleep: Sleeper = asyncio.sleep,
    ):
        self._store = store
        self.notifier = notifier
        self.latency_scale = latency_scale
        self._sleep = sleep

    @classmethod
    def from_seed(
        cls,
        records: Iterable[TaskRecord],
        notifier: CompletionNotifier,
        **kwargs,
    ) -> "TaskService":
        """Build a service owning a fresh store seeded with copies of records."""
        return cls(TaskRecordStore(records), notifier, **kwargs)

    @property
    def task_count(self) -> int:
        return len(self._store)

    async def get_all(self) -> list[TaskRecord]:
        await self._simulate_latency(Operation.GET_ALL)
        return self._store.get_all()

    async def get_by_id(self, task_id: object) -> TaskRecord | None:
        await self._simulate_latency(Operation.GET_BY_ID)
        return self._store.get_by_id(task_id)

    async def create(self, task_input: TaskInput) -> TaskRecord:
        await self._simulate_latency(Operation.CREATE)
        record = self._store.create(task_input)
        logger.info(
            "Task created",
            extra={"task_id": record.id, "operation": Operation.CREATE.value},
        )
        return record

    async def update(self, task_id: object, patch: TaskPatch) -> TaskRecord | None:
        """Merge patch over the task; notify on a false → true completion."""
        await self._simulate_latency(Operation.UPDATE)
        outcome = self._store.update(task_id, patch)
        if outcome is None:
            return None
        if is_completion_transition(outcome.previous.completed, patch):
            self.notifier.notify_completed(outcome.current)
        return outcome.current

    async def toggle_complete(self, task_id: object) -> TaskRecord | None:
        """Flip completed — the server side of a view's onToggleComplete(id)."""
        await self._simulate_latency(Operation.UPDATE)
        current = self._store.get_by_id(task_id)
        if current is None:
            return None
        patch = TaskPatch.of(completed=not current.completed)
        outcome = self._store.update(task_id, patch)
        if is_completion_transition(outcome.previous.completed, patch):
            self.notifier.notify_completed(outcome.current)
        return outcome.current

    async def delete(self, task_id: object) -> TaskRecord | None:
        await self._simulate_latency(Operation.DELETE)
        removed = self._store.delete(task_id)
        if removed is not None:
            logger.info(
                "Task deleted",
                extra={"task_id": removed.id, "operation": Operation.DELETE.value},
            )
        return removed

    async def update_order(self, task_ids: Iterable[object]) -> bool:
        await self._simulate_latency(Operation.UPDATE_ORDER)
        return self._store.update_order(list(task_ids))

    async def get_stats(self) -> TaskStats:
        await self._simulate_latency(Operation.GET_STATS)
        return self._store.get_stats()

    async def close(self) -> None:
        """Teardown: wait for pending notifications, release the endpoint, discard records."""
        await self.notifier.aclose()
        self._store.clear()

    async def _simulate_latency(self, operation: Operation) -> None:
        delay_ms = OPERATION_LATENCY_MS[operation] * self.latency_scale
        logger.debug(
            "Simulating round-trip latency",
            extra={"operation": operation.value, "latency_ms": delay_ms},
        )
        if delay_ms > 0:
            await self._sleep(delay_ms / 1000)
