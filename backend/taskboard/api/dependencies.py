"""Route Dependencies — access to the TaskService owned by the app lifespan.

Invariants:
    - The service lives on app.state.task_service, set by main.lifespan
    - Requests arriving before startup completes get 503, not AttributeError
"""

from fastapi import HTTPException, Request, status

from taskboard.services.task_service import TaskService


def get_task_service(request: Request) -> TaskService:
    """FastAPI dependency for the task service."""
    service = getattr(request.app.state, "task_service", None)
    if service is None:
        raise HTTPException(
            status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Task service not initialized",
        )
    return service
