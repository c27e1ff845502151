"""Client for the Quoting service, used by the Customer / Policy service."""

from __future__ import annotations

from typing import Any

from apogee.clients.base import ServiceClient
from apogee.core.errors import InvalidStateError, NotFoundError


class QuotingClient(ServiceClient):
    service_name = "Quoting service"

    async def get_quote_detail(self, quote_id: int) -> dict[str, Any]:
        """
        Full quote aggregate: ``{quote, applicant, group, groupApplicants,
        employeeClasses, coverages}``.
        """
        response = await self._request("GET", f"/api/v1/quotes/{quote_id}")
        if response.status_code == 404:
            raise NotFoundError("Quote not found", entity="Quote", entity_id=quote_id)
        self._raise_for_status(response, "fetch quote")
        return response.json()

    async def list_quotes(
        self,
        *,
        status: str | None = None,
        quote_type: str | None = None,
    ) -> list[dict[str, Any]]:
        response = await self._request(
            "GET",
            "/api/v1/quotes",
            params={"status": status, "type": quote_type},
        )
        self._raise_for_status(response, "list quotes")
        return response.json()

    async def update_quote_status(
        self,
        quote_id: int,
        status: str,
        *,
        expected_status: str | None = None,
    ) -> dict[str, Any]:
        """
        Set a quote's status.  With ``expected_status`` the change only
        happens if the quote is currently in that status; otherwise
        InvalidStateError is raised.
        """
        body: dict[str, Any] = {"status": status}
        if expected_status is not None:
            body["expectedStatus"] = expected_status

        response = await self._request("PATCH", f"/api/v1/quotes/{quote_id}", json=body)
        if response.status_code == 404:
            raise NotFoundError("Quote not found", entity="Quote", entity_id=quote_id)
        if response.status_code == 409:
            raise InvalidStateError(
                self._error_message(response, "Quote status changed concurrently"),
                entity="Quote",
                entity_id=quote_id,
            )
        self._raise_for_status(response, "update quote status")
        return response.json()
