"""Endpoints for one attached quote benefit."""

from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from apogee.api.deps import get_current_principal, get_db
from apogee.api.schemas.common import MessageResponse
from apogee.api.schemas.quoting import QuoteBenefitResponse, QuoteBenefitUpdate
from apogee.services import quote_benefits as benefit_service

router = APIRouter(
    prefix="/quote-benefits",
    tags=["Quote Benefits"],
    dependencies=[Depends(get_current_principal)],
)


@router.get("/{benefit_id}", response_model=QuoteBenefitResponse)
async def get_benefit(benefit_id: int, db: AsyncSession = Depends(get_db)) -> QuoteBenefitResponse:
    benefit = await benefit_service.get_benefit_or_404(db, benefit_id)
    return QuoteBenefitResponse.model_validate(benefit)


@router.patch("/{benefit_id}", response_model=QuoteBenefitResponse)
async def update_benefit(
    benefit_id: int,
    payload: QuoteBenefitUpdate,
    db: AsyncSession = Depends(get_db),
) -> QuoteBenefitResponse:
    """Replace configured values; validated against the schema captured at attach time."""
    benefit = await benefit_service.update_benefit_values(db, benefit_id, payload.configured_values)
    return QuoteBenefitResponse.model_validate(benefit)


@router.delete("/{benefit_id}", response_model=MessageResponse)
async def delete_benefit(benefit_id: int, db: AsyncSession = Depends(get_db)) -> MessageResponse:
    await benefit_service.remove_benefit(db, benefit_id)
    return MessageResponse(message="Quote benefit deleted successfully")
