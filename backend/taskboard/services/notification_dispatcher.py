"""Completion Notifier — fire-and-forget delivery of task-completion notifications.

Invariants:
    - notify_completed() never awaits the endpoint: it schedules a detached task and returns
    - Delivery failures (exceptions, success=False) are logged and counted, never raised
    - No endpoint configured (sender is None) → dispatch is a no-op, not an error
    - In-flight delivery tasks are referenced until done (no GC mid-flight)

Design Decisions:
    - asyncio.Task per notification, emitted after the store mutation has committed
    - drain() lets shutdown and tests wait for outstanding deliveries deterministically
"""

import asyncio
import json
import logging

from taskboard.core.boundary_protocols import NotificationSender
from taskboard.core.completion_notice import build_completion_payload
from taskboard.core.domain_types import DEFAULT_EMAIL_DOMAIN, DEFAULT_FALLBACK_EMAIL, TaskId
from taskboard.core.errors import NotificationDeliveryError
from taskboard.core.task_record import TaskRecord

logger = logging.getLogger(__name__)


class CompletionNotifier:
    """Dispatches completion payloads to a NotificationSender in the background."""

    def __init__(
        self,
        sender: NotificationSender | None,
        email_domain: str = DEFAULT_EMAIL_DOMAIN,
        fallback_email: str = DEFAULT_FALLBACK_EMAIL,
    ):
        self._sender = sender
        self._email_domain = email_domain
        self._fallback_email = fallback_email
        self._pending: set[asyncio.Task] = set()
        self.sent = 0
        self.failed = 0
        self.skipped = 0

    @property
    def enabled(self) -> bool:
        return self._sender is not None

    @property
    def pending(self) -> int:
        return len(self._pending)

    def notify_completed(self, record: TaskRecord) -> asyncio.Task | None:
        """Schedule delivery for a just-completed record. Must run inside an event loop."""
        if self._sender is None:
            self.skipped += 1
            logger.debug(
                "Notification endpoint not configured, skipping",
                extra={"task_id": record.id},
            )
            return None
        payload = build_completion_payload(
            record, self._email_domain, self._fallback_email,
        )
        task = asyncio.get_running_loop().create_task(
            self._deliver(record.id, payload),
            name=f"notify-completed-{record.id}",
        )
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
        return task

    async def _deliver(self, task_id: TaskId, payload: dict) -> None:
        function_name = self._sender.function_name
        extra = {"task_id": task_id, "function_name": function_name}
        try:
            success, body = await self._sender.send(payload)
        except NotificationDeliveryError as e:
            self.failed += 1
            logger.info(
                f"An error was received in this function: {function_name}. "
                f"The error is: {e.message}",
                extra={**extra, "error_code": e.code, "status_code": e.status_code},
            )
            return
        except Exception as e:
            # Isolated task: nothing upstream is waiting on it
            self.failed += 1
            logger.warning(
                f"Unexpected notification failure for {function_name}: {e}",
                extra=extra, exc_info=True,
            )
            return

        if not success:
            self.failed += 1
            logger.info(
                f"An error was received in this function: {function_name}. "
                f"The response body is: {json.dumps(body, default=str)}.",
                extra=extra,
            )
            return
        self.sent += 1
        logger.info("Completion notification sent", extra=extra)

    async def drain(self) -> None:
        """Wait until every scheduled delivery has finished."""
        while self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)

    async def aclose(self) -> None:
        await self.drain()
        if self._sender is not None:
            await self._sender.aclose()
