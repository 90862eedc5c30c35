"""Task Record — the single entity of the service, plus its explicit input structs.

Invariants:
    - TaskRecord fields hold immutable values only, so dataclasses.replace() is a full copy
    - TaskInput: None means "not supplied" — the documented default applies
    - TaskPatch never carries id, created_at or updated_at (not patchable)
    - Wire form (to_dict/from_dict) uses camelCase keys: projectId, createdAt, updatedAt

Design Decisions:
    - Dataclasses, not ORM models: the store is volatile and in-memory
    - TaskPatch tracks fields_set so an explicit None (e.g. clearing projectId)
      is distinguishable from an omitted field
"""

from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from typing import Any, Mapping

from taskboard.core.domain_types import Priority, ProjectId, TaskId


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class TaskRecord:
    """One task — owned by TaskRecordStore, handed out as copies only."""

    id: TaskId
    title: str
    description: str = ""
    priority: Priority = Priority.MEDIUM
    completed: bool = False
    assignee: str = ""
    project_id: ProjectId | None = None
    created_at: datetime = field(default_factory=utc_now)
    updated_at: datetime = field(default_factory=utc_now)
    order: int = 0

    def copy(self) -> "TaskRecord":
        return replace(self)

    def to_dict(self) -> dict:
        """Serialize to the camelCase wire form."""
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "priority": self.priority.value,
            "completed": self.completed,
            "assignee": self.assignee,
            "projectId": self.project_id,
            "createdAt": self.created_at.isoformat(),
            "updatedAt": self.updated_at.isoformat(),
            "order": self.order,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "TaskRecord":
        """Build a record from its wire form (seed dataset, fixtures).

        Accepts "Id" as an alias of "id". Raises KeyError/ValueError/TypeError
        on missing id or unparseable values; callers map those to SeedDataError.
        """
        raw_id = data["id"] if "id" in data else data["Id"]
        created_at = _parse_timestamp(data.get("createdAt"))
        updated_at = _parse_timestamp(data.get("updatedAt"), created_at)
        return cls(
            id=TaskId(int(raw_id)),
            title=str(data.get("title", "")),
            description=data.get("description") or "",
            priority=Priority.normalize(data.get("priority")),
            completed=bool(data.get("completed", False)),
            assignee=data.get("assignee") or "",
            project_id=_optional_int(data.get("projectId")),
            created_at=created_at,
            updated_at=max(updated_at, created_at),
            order=int(data.get("order", raw_id)),
        )


def _parse_timestamp(value: Any, default: datetime | None = None) -> datetime:
    if value is None:
        return default or utc_now()
    if isinstance(value, datetime):
        parsed = value
    else:
        parsed = datetime.fromisoformat(str(value).replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _optional_int(value: Any) -> ProjectId | None:
    if value is None or value == "":
        return None
    return ProjectId(int(value))


# ─── Input Structs ───────────────────────────────────────────────

@dataclass(frozen=True)
class TaskInput:
    """Fields accepted by create. Defaults are applied by the store.

    title        required, stored as given (no non-empty check in core)
    description  None → ""
    priority     None or unrecognized → "medium"
    assignee     None → ""
    project_id   None → no project
    """

    title: str
    description: str | None = None
    priority: str | Priority | None = None
    assignee: str | None = None
    project_id: ProjectId | None = None


PATCHABLE_FIELDS = frozenset({
    "title", "description", "priority", "completed",
    "assignee", "project_id", "order",
})

# A null for these means "leave unchanged"; they always hold a value
NON_NULLABLE_FIELDS = frozenset({"title", "completed", "order"})


@dataclass(frozen=True)
class TaskPatch:
    """Partial update — only names in fields_set are applied."""

    title: str | None = None
    description: str | None = None
    priority: str | Priority | None = None
    completed: bool | None = None
    assignee: str | None = None
    project_id: ProjectId | None = None
    order: int | None = None
    fields_set: frozenset[str] = frozenset()

    @classmethod
    def of(cls, **changes: Any) -> "TaskPatch":
        """Build a patch from keyword changes, e.g. TaskPatch.of(completed=True).

        Unknown or non-patchable names (id, created_at, updated_at) are dropped,
        and so is None for title, completed and order.
        """
        accepted = {
            k: v for k, v in changes.items()
            if k in PATCHABLE_FIELDS
            and not (v is None and k in NON_NULLABLE_FIELDS)
        }
        return cls(**accepted, fields_set=frozenset(accepted))

    def sets(self, name: str) -> bool:
        return name in self.fields_set

    def changes(self) -> dict[str, Any]:
        """Normalized field → value mapping for the fields that were set."""
        out: dict[str, Any] = {}
        for name in self.fields_set:
            value = getattr(self, name)
            if value is None and name in NON_NULLABLE_FIELDS:
                continue
            if name == "priority":
                value = Priority.normalize(value)
            elif name == "completed":
                value = bool(value)
            elif name in ("description", "assignee"):
                value = value or ""
            out[name] = value
        return out
