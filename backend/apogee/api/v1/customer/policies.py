"""Combined policy endpoints spanning individual and group policies."""

from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from apogee.api.deps import get_current_principal, get_db
from apogee.api.schemas.policies import (
    GroupPolicyResponse,
    IndividualPolicyResponse,
    PolicyDetailResponse,
    PolicyListResponse,
    PolicySummaryResponse,
    PolicyUpdate,
)
from apogee.api.v1.customer.serializers import unified_detail_response
from apogee.core.constants import PolicyKind
from apogee.services import policies as policy_service

router = APIRouter(
    prefix="/policies",
    tags=["Policies"],
    dependencies=[Depends(get_current_principal)],
)


@router.get("", response_model=PolicyListResponse)
async def list_policies(db: AsyncSession = Depends(get_db)) -> PolicyListResponse:
    """Individual and group policies together, newest first."""
    summaries, counts = await policy_service.list_all_policies(db)
    return PolicyListResponse(
        policies=[PolicySummaryResponse.model_validate(s) for s in summaries],
        counts=counts,
    )


@router.get("/{policy_id}", response_model=PolicyDetailResponse)
async def get_policy(policy_id: int, db: AsyncSession = Depends(get_db)) -> PolicyDetailResponse:
    detail = await policy_service.get_policy_detail(db, policy_id)
    return unified_detail_response(detail)


@router.patch("/{policy_id}", response_model=IndividualPolicyResponse | GroupPolicyResponse)
async def update_policy(
    policy_id: int,
    payload: PolicyUpdate,
    db: AsyncSession = Depends(get_db),
) -> IndividualPolicyResponse | GroupPolicyResponse:
    kind, policy = await policy_service.update_any_policy(
        db, policy_id, **payload.model_dump(exclude_unset=True)
    )
    if kind == PolicyKind.INDIVIDUAL:
        return IndividualPolicyResponse.model_validate(policy)
    return GroupPolicyResponse.model_validate(policy)
