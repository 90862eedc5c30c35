"""Root conftest — shared test configuration."""

import os

# Tests never hit a real notification endpoint or wait on simulated latency
os.environ.pop("TASKBOARD_NOTIFICATION_BASE_URL", None)
os.environ.setdefault("TASKBOARD_LATENCY_SCALE", "0")
os.environ.setdefault("TASKBOARD_LOG_FORMAT", "text")
