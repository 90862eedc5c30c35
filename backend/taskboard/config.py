"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - All values come from TASKBOARD_* environment variables or .env (never hardcoded secrets)
    - get_settings() is cached (lru_cache) — single instance per process
    - Notifications are enabled only when notification_base_url is set

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - Defaults provided for everything: the service runs out-of-the-box with no env
"""

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from taskboard.core.domain_types import DEFAULT_EMAIL_DOMAIN, DEFAULT_FALLBACK_EMAIL


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env", env_prefix="TASKBOARD_", case_sensitive=False,
    )

    # Store
    seed_path: str | None = None
    latency_scale: float = Field(1.0, ge=0.0)

    # Notification endpoint
    notification_base_url: str | None = None
    notification_function: str = "send-task-completion-email"
    notification_api_key: str | None = None
    notification_project_id: str | None = None
    notification_timeout_seconds: float = 10.0
    notification_email_domain: str = DEFAULT_EMAIL_DOMAIN
    notification_fallback_email: str = DEFAULT_FALLBACK_EMAIL

    @field_validator("notification_base_url", mode="before")
    @classmethod
    def blank_url_is_unset(cls, v):
        """An empty TASKBOARD_NOTIFICATION_BASE_URL disables notifications."""
        if isinstance(v, str) and not v.strip():
            return None
        return v.rstrip("/") if isinstance(v, str) else v

    @property
    def notifications_enabled(self) -> bool:
        return self.notification_base_url is not None

    # API
    cors_origins: list[str] = ["http://localhost:5173"]

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"


@lru_cache
def get_settings() -> Settings:
    return Settings()
