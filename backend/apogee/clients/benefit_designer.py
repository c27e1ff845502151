"""Client for the Benefit Designer service, used by the Quoting service."""

from __future__ import annotations

from typing import Any

from apogee.clients.base import ServiceClient
from apogee.core.constants import TemplateStatus
from apogee.core.errors import NotFoundError


class BenefitDesignerClient(ServiceClient):
    service_name = "Benefit Designer service"

    async def list_templates(
        self,
        *,
        benefit_type: str | None = None,
        status: str | None = None,
        latest: bool = False,
    ) -> list[dict[str, Any]]:
        response = await self._request(
            "GET",
            "/api/v1/templates",
            params={
                "type": benefit_type,
                "status": status,
                "latest": "true" if latest else None,
            },
        )
        self._raise_for_status(response, "list templates")
        return response.json()

    async def fetch_templates_by_type(self, benefit_type: str) -> list[dict[str, Any]]:
        """Active templates of one type, latest version of each."""
        return await self.list_templates(
            benefit_type=benefit_type,
            status=TemplateStatus.ACTIVE.value,
            latest=True,
        )

    async def get_template(self, template_db_id: int) -> dict[str, Any]:
        response = await self._request("GET", f"/api/v1/templates/{template_db_id}")
        if response.status_code == 404:
            raise NotFoundError("Template not found", entity="BenefitTemplate", entity_id=template_db_id)
        self._raise_for_status(response, "fetch template")
        return response.json()
