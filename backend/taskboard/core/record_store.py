"""Record Store — ordered, in-memory task records with copy-on-read/write.

Invariants:
    - ids are unique and never reused: next id = max(high-water mark, max live id) + 1
    - get_all() is sorted ascending by order (stable: ties keep insertion order)
    - updated_at >= created_at for every record (refresh is clamped)
    - No caller ever holds a reference to a stored TaskRecord — every read and
      write goes through TaskRecord.copy()
    - Missing ids are a None result, never an exception; ids that cannot be
      coerced to int are treated as missing (leading-integer parse, so "3abc" is 3)

Design Decisions:
    - Synchronous on purpose: each mutation runs to completion with no await
      inside, so the asyncio facade never observes a torn record
    - Clock injected (now=...) so tests can pin timestamps
    - A multi-threaded host must serialize calls (one lock or a single writer);
      the store itself holds no lock
"""

import logging
import re
from dataclasses import dataclass, replace
from datetime import datetime
from typing import Callable, Iterable

from taskboard.core.domain_types import Priority, TaskId
from taskboard.core.task_record import TaskInput, TaskPatch, TaskRecord, utc_now
from taskboard.core.task_stats import TaskStats, compute_task_stats

logger = logging.getLogger(__name__)

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


@dataclass(frozen=True)
class UpdateOutcome:
    """Copies of a record before and after an update."""
    previous: TaskRecord
    current: TaskRecord


def coerce_task_id(task_id: object) -> TaskId | None:
    """Leading-integer parse: 3, "3", " 3 ", "3.7", "3abc" and 3.7 all → 3.

    No leading digits ("abc", "", None), bools and other types → None.
    """
    if isinstance(task_id, bool):
        return None
    if isinstance(task_id, int):
        return TaskId(task_id)
    if isinstance(task_id, (str, float)):
        match = _LEADING_INT.match(str(task_id))
        return TaskId(int(match.group(1))) if match else None
    return None


class TaskRecordStore:
    """Owns the task list. One instance per TaskService."""

    def __init__(
        self,
        records: Iterable[TaskRecord] = (),
        now: Callable[[], datetime] = utc_now,
    ):
        self._now = now
        self._records: list[TaskRecord] = [r.copy() for r in records]
        self._max_issued_id = max((r.id for r in self._records), default=0)

    def __len__(self) -> int:
        return len(self._records)

    # ─── Reads ──────────────────────────────────────────────────

    def get_all(self) -> list[TaskRecord]:
        return [r.copy() for r in sorted(self._records, key=lambda r: r.order)]

    def get_by_id(self, task_id: object) -> TaskRecord | None:
        record = self._find(task_id)
        return record.copy() if record else None

    def get_stats(self) -> TaskStats:
        return compute_task_stats(self._records)

    # ─── Mutations ──────────────────────────────────────────────

    def create(self, task_input: TaskInput) -> TaskRecord:
        """Append a new record with the next id/order and documented defaults."""
        new_id = TaskId(max(self._max_issued_id, self._max_live_id()) + 1)
        max_order = max((r.order for r in self._records), default=0)
        stamp = self._now()
        record = TaskRecord(
            id=new_id,
            title=task_input.title,
            description=task_input.description or "",
            priority=Priority.normalize(task_input.priority),
            completed=False,
            assignee=task_input.assignee or "",
            project_id=task_input.project_id,
            created_at=stamp,
            updated_at=stamp,
            order=max_order + 1,
        )
        self._records.append(record)
        self._max_issued_id = new_id
        logger.debug("Task created", extra={"task_id": new_id})
        return record.copy()

    def update(self, task_id: object, patch: TaskPatch) -> UpdateOutcome | None:
        """Shallow-merge patch over the record. None if the id is unknown."""
        index = self._index_of(task_id)
        if index is None:
            return None
        previous = self._records[index]
        merged = replace(
            previous,
            **patch.changes(),
            updated_at=self._refreshed(previous),
        )
        self._records[index] = merged
        return UpdateOutcome(previous=previous.copy(), current=merged.copy())

    def delete(self, task_id: object) -> TaskRecord | None:
        index = self._index_of(task_id)
        if index is None:
            return None
        removed = self._records.pop(index)
        logger.debug("Task deleted", extra={"task_id": removed.id})
        return removed.copy()

    def update_order(self, task_ids: Iterable[object]) -> bool:
        """order = position + 1 for each known id; unknown ids are skipped."""
        for position, task_id in enumerate(task_ids):
            index = self._index_of(task_id)
            if index is None:
                continue
            record = self._records[index]
            self._records[index] = replace(
                record, order=position + 1, updated_at=self._refreshed(record),
            )
        return True

    def clear(self) -> None:
        """Discard every record. The id high-water mark survives."""
        self._records.clear()

    # ─── Internals ──────────────────────────────────────────────

    def _max_live_id(self) -> int:
        return max((r.id for r in self._records), default=0)

    def _refreshed(self, record: TaskRecord) -> datetime:
        return max(self._now(), record.created_at)

    def _index_of(self, task_id: object) -> int | None:
        wanted = coerce_task_id(task_id)
        if wanted is None:
            return None
        for i, record in enumerate(self._records):
            if record.id == wanted:
                return i
        return None

    def _find(self, task_id: object) -> TaskRecord | None:
        index = self._index_of(task_id)
        return self._records[index] if index is not None else None
