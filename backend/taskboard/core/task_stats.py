"""Task Stats — pure computation of aggregate statistics over task records.

Invariants:
    - active = total - completed
    - completion_rate is an integer percentage, 0 when there are no tasks
    - Never raises — an empty input yields all zeros

Design Decisions:
    - Pure function over a sequence, not a store method body: the store delegates here
    - Half-up rounding (floor(x + 0.5)) instead of round(): Python's banker's
      rounding would report 12 for 1/8 instead of 13
"""

import math
from dataclasses import asdict, dataclass
from typing import Iterable

from taskboard.core.task_record import TaskRecord


@dataclass(frozen=True)
class TaskStats:
    total: int
    completed: int
    active: int
    completion_rate: int

    def to_dict(self) -> dict:
        out = asdict(self)
        out["completionRate"] = out.pop("completion_rate")
        return out


def compute_task_stats(records: Iterable[TaskRecord]) -> TaskStats:
    """Compute total/completed/active/completion rate. Pure, no IO."""
    total = 0
    completed = 0
    for record in records:
        total += 1
        if record.completed:
            completed += 1
    rate = math.floor(100 * completed / total + 0.5) if total > 0 else 0
    return TaskStats(
        total=total,
        completed=completed,
        active=total - completed,
        completion_rate=rate,
    )
