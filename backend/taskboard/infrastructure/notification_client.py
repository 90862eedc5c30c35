"""Notification Endpoint Client — posts completion payloads to the external messaging function.

Invariants:
    - One POST per send(); no retries (delivery is best-effort)
    - Transport errors, timeouts, non-2xx and non-JSON bodies → NotificationDeliveryError
    - A 2xx JSON body is returned as-is; send() reports its "success" flag

Design Decisions:
    - httpx.AsyncClient owned by the client and closed via aclose() at shutdown
    - transport injectable so tests use httpx.MockTransport instead of a live endpoint
"""

import json
import logging

import httpx

from taskboard.core.errors import ErrorContext, NotificationDeliveryError

logger = logging.getLogger(__name__)


class NotificationEndpointClient:
    """Invokes the completion-email function over HTTP."""

    def __init__(
        self,
        base_url: str,
        function_name: str,
        api_key: str | None = None,
        project_id: str | None = None,
        timeout_seconds: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.function_name = function_name
        headers = {"Content-Type": "application/json"}
        if api_key:
            headers["Authorization"] = f"Bearer {api_key}"
        if project_id:
            headers["X-Project-Id"] = project_id
        self.client = httpx.AsyncClient(
            base_url=base_url,
            headers=headers,
            timeout=timeout_seconds,
            transport=transport,
        )

    @property
    def invoke_path(self) -> str:
        return f"/functions/{self.function_name}/invoke"

    async def invoke(self, payload: dict) -> dict:
        """POST payload, return the decoded JSON response body."""
        context = ErrorContext(function_name=self.function_name)
        try:
            response = await self.client.post(self.invoke_path, json=payload)
        except httpx.TimeoutException as e:
            raise NotificationDeliveryError(
                str(e) or "request timed out", "timeout", context=context,
            )
        except httpx.HTTPError as e:
            raise NotificationDeliveryError(
                str(e), "connection_error", context=context,
            )

        if response.is_error:
            raise NotificationDeliveryError(
                f"endpoint answered HTTP {response.status_code}: {response.text[:200]}",
                "http_status",
                status_code=response.status_code,
                context=context,
            )
        try:
            body = response.json()
        except (json.JSONDecodeError, UnicodeDecodeError):
            raise NotificationDeliveryError(
                f"response is not JSON: {response.text[:200]}",
                "malformed_response",
                status_code=response.status_code,
                context=context,
            )
        if not isinstance(body, dict):
            raise NotificationDeliveryError(
                f"response is not a JSON object: {body!r}",
                "malformed_response",
                status_code=response.status_code,
                context=context,
            )
        return body

    async def send(self, payload: dict) -> tuple[bool, dict]:
        """Invoke and return (success flag, response body)."""
        body = await self.invoke(payload)
        return bool(body.get("success")), body

    async def aclose(self) -> None:
        await self.client.aclose()
