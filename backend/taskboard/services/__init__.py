"""Services Layer — async orchestration around the pure core.

Invariants:
    - TaskService is the only entry point external callers use
    - Side effects (notifications) are dispatched here, never from core/

Design Decisions:
    - One file per component: task_service (facade), notification_dispatcher
"""
