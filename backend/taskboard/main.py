"""Taskboard API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map TaskboardError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - The TaskService (and the store it owns) is created in lifespan startup
      and torn down on shutdown; nothing else holds the store

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - build_task_service() is separate from lifespan so tests and scripts can
      wire a service from Settings without starting the app
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from taskboard.api.error_handlers import register_error_handlers
from taskboard.api.routes import health, tasks
from taskboard.config import Settings, get_settings
from taskboard.infrastructure.notification_client import NotificationEndpointClient
from taskboard.infrastructure.observability import log_request, setup_logging
from taskboard.infrastructure.seed_data import load_seed_records
from taskboard.services.notification_dispatcher import CompletionNotifier
from taskboard.services.task_service import TaskService

logger = logging.getLogger(__name__)


def build_task_service(settings: Settings) -> TaskService:
    """Seed a fresh store and wire the notifier from settings."""
    sender = None
    if settings.notifications_enabled:
        sender = NotificationEndpointClient(
            base_url=settings.notification_base_url,
            function_name=settings.notification_function,
            api_key=settings.notification_api_key,
            project_id=settings.notification_project_id,
            timeout_seconds=settings.notification_timeout_seconds,
        )
    else:
        logger.info("Notification endpoint not configured; completion emails disabled")
    notifier = CompletionNotifier(
        sender,
        email_domain=settings.notification_email_domain,
        fallback_email=settings.notification_fallback_email,
    )
    return TaskService.from_seed(
        load_seed_records(settings.seed_path),
        notifier,
        latency_scale=settings.latency_scale,
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    app.state.task_service = build_task_service(settings)
    logger.info(
        f"Taskboard API started with {app.state.task_service.task_count} tasks",
    )
    yield
    logger.info("Taskboard API shutting down")
    await app.state.task_service.close()
    app.state.task_service = None


app = FastAPI(
    title="Taskboard API", version="1.0.0", lifespan=lifespan,
)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.middleware("http")(log_request)

app.include_router(health.router)
app.include_router(tasks.router)

register_error_handlers(app)
