"""Read-only pass-through to the Benefit Designer's templates."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, Query

from apogee.api.deps import get_benefit_designer_client, get_current_principal
from apogee.clients.benefit_designer import BenefitDesignerClient
from apogee.core.constants import BenefitType

router = APIRouter(
    prefix="/templates",
    tags=["Templates"],
    dependencies=[Depends(get_current_principal)],
)


@router.get("")
async def list_available_templates(
    benefit_type: BenefitType = Query(default=BenefitType.INDIVIDUAL, alias="type"),
    designer: BenefitDesignerClient = Depends(get_benefit_designer_client),
) -> list[dict[str, Any]]:
    """Active templates of one type, latest version of each."""
    return await designer.fetch_templates_by_type(benefit_type.value)


@router.get("/{template_db_id}")
async def get_template(
    template_db_id: int,
    designer: BenefitDesignerClient = Depends(get_benefit_designer_client),
) -> dict[str, Any]:
    return await designer.get_template(template_db_id)
