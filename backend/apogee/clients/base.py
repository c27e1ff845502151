"""
Base HTTP client for service-to-service calls.

Every request carries the shared ``X-Service-Key`` header.  Transport
failures and unexpected non-2xx answers become UpstreamError; callers
translate the statuses they expect (404, 409) into domain errors first.
No retries.
"""

from __future__ import annotations

from typing import Any

import httpx

from apogee.core.config import settings
from apogee.core.errors import UpstreamError
from apogee.core.logging import get_logger

logger = get_logger(__name__)

SERVICE_KEY_HEADER = "X-Service-Key"


class ServiceClient:
    """Thin async wrapper around httpx for one collaborator service."""

    service_name = "service"

    def __init__(
        self,
        base_url: str,
        *,
        service_key: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self._service_key = service_key if service_key is not None else settings.INTERNAL_SERVICE_KEY
        self._timeout = timeout if timeout is not None else settings.UPSTREAM_TIMEOUT_SECONDS
        self._transport = transport

    def _headers(self) -> dict[str, str]:
        return {
            "Content-Type": "application/json",
            SERVICE_KEY_HEADER: self._service_key,
        }

    async def _request(
        self,
        method: str,
        path: str,
        *,
        json: Any = None,
        params: dict[str, Any] | None = None,
    ) -> httpx.Response:
        url = f"{self.base_url}{path}"
        if params:
            params = {k: v for k, v in params.items() if v is not None}

        try:
            async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
                response = await client.request(
                    method,
                    url,
                    headers=self._headers(),
                    json=json,
                    params=params,
                )
        except httpx.HTTPError as exc:
            logger.error(
                "Upstream request failed",
                service=self.service_name,
                method=method,
                url=url,
                error=str(exc),
            )
            raise UpstreamError(
                f"{self.service_name} is unreachable",
                details={"url": url},
            ) from exc

        logger.debug(
            "Upstream response",
            service=self.service_name,
            method=method,
            url=url,
            status=response.status_code,
        )
        return response

    def _raise_for_status(self, response: httpx.Response, action: str) -> None:
        if response.is_success:
            return
        logger.error(
            "Upstream returned error",
            service=self.service_name,
            action=action,
            status=response.status_code,
            body=response.text[:500],
        )
        raise UpstreamError(
            f"{self.service_name} failed to {action}",
            upstream_status=response.status_code,
            response_body=response.text,
        )

    @staticmethod
    def _error_message(response: httpx.Response, default: str) -> str:
        """Pull ``message`` (or ``error``) out of a JSON error body."""
        try:
            body = response.json()
        except ValueError:
            return default
        if isinstance(body, dict):
            return str(body.get("message") or body.get("error") or default)
        return default
