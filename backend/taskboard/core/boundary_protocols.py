"""Boundary Protocols — contracts between the service shell and its collaborators.

Invariants:
    - Services depend on these Protocols, never on a concrete transport
    - Implementations provided by infrastructure via dependency injection

Design Decisions:
    - Protocol over ABC: structural subtyping, test fakes need no inheritance
"""

from typing import Awaitable, Protocol


class NotificationSender(Protocol):
    """Contract for the completion notification endpoint — implemented by infrastructure."""
    function_name: str

    async def send(self, payload: dict) -> tuple[bool, dict]: ...
    async def aclose(self) -> None: ...


class Sleeper(Protocol):
    """Awaitable delay, asyncio.sleep-compatible."""
    def __call__(self, seconds: float) -> Awaitable[None]: ...
