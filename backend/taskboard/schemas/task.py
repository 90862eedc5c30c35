"""Task Schemas — Pydantic models with field-level validation for API boundaries.

Invariants:
    - TaskCreate.title: stripped, non-empty, <= 500 chars
    - TaskUpdate only forwards fields the client actually sent (exclude_unset)
    - TaskUpdate rejects an explicit null for title, completed and order
    - Unrecognized priority strings are accepted and normalized to "medium" by core
    - Responses use camelCase keys matching TaskRecord.to_dict()

Design Decisions:
    - populate_by_name: clients may send either projectId or project_id
    - Title validation lives here, not in core — the record store stays permissive
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from taskboard.core.task_record import TaskInput, TaskPatch, TaskRecord
from taskboard.core.task_stats import TaskStats


class TaskCreate(BaseModel):
    """Task creation — title required, everything else optional."""
    model_config = ConfigDict(populate_by_name=True)

    title: str = Field(min_length=1, max_length=500)
    description: str | None = Field(None, max_length=10_000)
    priority: str | None = None
    assignee: str | None = Field(None, max_length=200)
    project_id: int | None = Field(None, alias="projectId")

    @field_validator("title")
    @classmethod
    def strip_title(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("title cannot be empty or whitespace")
        return v

    def to_input(self) -> TaskInput:
        return TaskInput(
            title=self.title,
            description=self.description,
            priority=self.priority,
            assignee=self.assignee,
            project_id=self.project_id,
        )


class TaskUpdate(BaseModel):
    """Partial update — any subset of mutable fields."""
    model_config = ConfigDict(populate_by_name=True)

    title: str | None = Field(None, max_length=500)
    description: str | None = Field(None, max_length=10_000)
    priority: str | None = None
    completed: bool | None = None
    assignee: str | None = Field(None, max_length=200)
    project_id: int | None = Field(None, alias="projectId")
    order: int | None = None

    @field_validator("title", "completed", "order")
    @classmethod
    def reject_explicit_null(cls, v):
        """Omitting these is fine; sending null is not."""
        if v is None:
            raise ValueError("field cannot be null")
        return v

    def to_patch(self) -> TaskPatch:
        return TaskPatch.of(**self.model_dump(exclude_unset=True))


class TaskOrderUpdate(BaseModel):
    """Ids in the desired display order (position 0 → order 1)."""
    task_ids: list[int] = Field(alias="taskIds")

    model_config = ConfigDict(populate_by_name=True)


class TaskResponse(BaseModel):
    """Task response — public-facing record data."""
    model_config = ConfigDict(populate_by_name=True)

    id: int
    title: str
    description: str
    priority: str
    completed: bool
    assignee: str
    project_id: int | None = Field(alias="projectId")
    created_at: datetime = Field(alias="createdAt")
    updated_at: datetime = Field(alias="updatedAt")
    order: int

    @classmethod
    def from_record(cls, record: TaskRecord) -> "TaskResponse":
        return cls.model_validate(record.to_dict())


class TaskStatsResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    total: int
    completed: int
    active: int
    completion_rate: int = Field(alias="completionRate")

    @classmethod
    def from_stats(cls, stats: TaskStats) -> "TaskStatsResponse":
        return cls.model_validate(stats.to_dict())
