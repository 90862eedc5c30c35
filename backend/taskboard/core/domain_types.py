"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - TaskId wraps int — ids are positive and assigned by the record store only
    - Priority has exactly three valid values; anything else normalizes to MEDIUM
    - OPERATION_LATENCY_MS has an entry for every Operation

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders
"""

from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

TaskId = NewType("TaskId", int)
ProjectId = NewType("ProjectId", int)


# ─── Enums ───────────────────────────────────────────────────────

class Priority(str, Enum):
    """Task priority — wire values are lowercase."""
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"

    @classmethod
    def normalize(cls, value: object) -> "Priority":
        """Map any input to a Priority. Missing or unrecognized → MEDIUM."""
        if isinstance(value, Priority):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().lower())
            except ValueError:
                return cls.MEDIUM
        return cls.MEDIUM


class Operation(str, Enum):
    """Facade operation categories — used for latency and log context."""
    GET_ALL = "get_all"
    GET_BY_ID = "get_by_id"
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"
    UPDATE_ORDER = "update_order"
    GET_STATS = "get_stats"


# ─── Constants ───────────────────────────────────────────────────

# Simulated network round-trip per operation (milliseconds)
OPERATION_LATENCY_MS: dict[Operation, int] = {
    Operation.GET_ALL: 300,
    Operation.GET_BY_ID: 200,
    Operation.CREATE: 400,
    Operation.UPDATE: 250,
    Operation.DELETE: 200,
    Operation.UPDATE_ORDER: 150,
    Operation.GET_STATS: 100,
}

DEFAULT_EMAIL_DOMAIN = "company.com"
DEFAULT_FALLBACK_EMAIL = "admin@company.com"
