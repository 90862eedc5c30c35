"""Completion Notice — pure rules for when and what to notify on task completion.

Invariants:
    - A notification is due only for false/absent → True within a single update
      where the patch explicitly set completed=True
    - recipientEmail: assignee lowercased, FIRST space → ".", plus "@<domain>";
      empty assignee → fallback address
    - Payload keys are exactly taskTitle, taskDescription, assignee, priority, recipientEmail
"""

from taskboard.core.domain_types import DEFAULT_EMAIL_DOMAIN, DEFAULT_FALLBACK_EMAIL
from taskboard.core.task_record import TaskPatch, TaskRecord


def is_completion_transition(previous_completed: bool | None, patch: TaskPatch) -> bool:
    """True only when the patch completes a task that was not completed."""
    if not patch.sets("completed") or patch.completed is not True:
        return False
    return not previous_completed


def derive_recipient_email(
    assignee: str | None,
    domain: str = DEFAULT_EMAIL_DOMAIN,
    fallback: str = DEFAULT_FALLBACK_EMAIL,
) -> str:
    if not assignee:
        return fallback
    local_part = assignee.lower().replace(" ", ".", 1)
    return f"{local_part}@{domain}"


def build_completion_payload(
    record: TaskRecord,
    domain: str = DEFAULT_EMAIL_DOMAIN,
    fallback: str = DEFAULT_FALLBACK_EMAIL,
) -> dict:
    return {
        "taskTitle": record.title,
        "taskDescription": record.description,
        "assignee": record.assignee,
        "priority": record.priority.value,
        "recipientEmail": derive_recipient_email(record.assignee, domain, fallback),
    }
