"""Task Routes — REST surface over TaskService.

Invariants:
    - Every route awaits exactly one TaskService operation
    - A None result from the service becomes 404 RESOURCE_NOT_FOUND here, nowhere else
    - Request bodies validated by Pydantic before reaching the handler
    - Static paths (/stats, /order) declared before /{task_id}

Design Decisions:
    - task_id path parameter is a string; TaskService coerces it, so "abc" is a 404
      like any other unknown id rather than a 422
"""

import logging

from fastapi import APIRouter, Depends, status

from taskboard.api.dependencies import get_task_service
from taskboard.core.errors import ErrorContext, ResourceNotFoundError
from taskboard.core.task_record import TaskRecord
from taskboard.schemas.task import (
    TaskCreate,
    TaskOrderUpdate,
    TaskResponse,
    TaskStatsResponse,
    TaskUpdate,
)
from taskboard.services.task_service import TaskService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/tasks", tags=["tasks"])


def _found_or_404(record: TaskRecord | None, task_id: str, operation: str) -> TaskResponse:
    if record is None:
        raise ResourceNotFoundError(
            "Task", task_id, ErrorContext(operation=operation),
        )
    return TaskResponse.from_record(record)


@router.get("", response_model=list[TaskResponse])
async def list_tasks(service: TaskService = Depends(get_task_service)):
    """All tasks, ascending by order."""
    return [TaskResponse.from_record(r) for r in await service.get_all()]


@router.get("/stats", response_model=TaskStatsResponse)
async def task_stats(service: TaskService = Depends(get_task_service)):
    return TaskStatsResponse.from_stats(await service.get_stats())


@router.put("/order")
async def reorder_tasks(
    body: TaskOrderUpdate, service: TaskService = Depends(get_task_service),
):
    """Assign order = position + 1; unknown ids are ignored."""
    success = await service.update_order(body.task_ids)
    return {"success": success}


@router.get("/{task_id}", response_model=TaskResponse)
async def get_task(task_id: str, service: TaskService = Depends(get_task_service)):
    return _found_or_404(await service.get_by_id(task_id), task_id, "get_by_id")


@router.post(
    "", response_model=TaskResponse, status_code=status.HTTP_201_CREATED,
)
async def create_task(
    body: TaskCreate, service: TaskService = Depends(get_task_service),
):
    record = await service.create(body.to_input())
    return TaskResponse.from_record(record)


@router.patch("/{task_id}", response_model=TaskResponse)
async def update_task(
    task_id: str,
    body: TaskUpdate,
    service: TaskService = Depends(get_task_service),
):
    """Partial update. Completing a task triggers a background notification."""
    record = await service.update(task_id, body.to_patch())
    return _found_or_404(record, task_id, "update")


@router.post("/{task_id}/toggle", response_model=TaskResponse)
async def toggle_task(task_id: str, service: TaskService = Depends(get_task_service)):
    record = await service.toggle_complete(task_id)
    return _found_or_404(record, task_id, "toggle_complete")


@router.delete("/{task_id}", response_model=TaskResponse)
async def delete_task(task_id: str, service: TaskService = Depends(get_task_service)):
    """Remove a task and return it."""
    record = await service.delete(task_id)
    return _found_or_404(record, task_id, "delete")
