"""Individual policy endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from apogee.api.deps import get_current_principal, get_db
from apogee.api.schemas.common import MessageResponse
from apogee.api.schemas.policies import (
    IndividualPolicyCreate,
    IndividualPolicyDetailResponse,
    IndividualPolicyResponse,
    PolicyUpdate,
)
from apogee.api.v1.customer.serializers import individual_detail_response
from apogee.core.constants import PolicyStatus
from apogee.core.errors import NotFoundError
from apogee.repositories import individual_policies as individual_policy_repository
from apogee.services import policies as policy_service

router = APIRouter(
    prefix="/individual-policies",
    tags=["Individual Policies"],
    dependencies=[Depends(get_current_principal)],
)


@router.get("", response_model=list[IndividualPolicyResponse])
async def list_individual_policies(
    policy_status: PolicyStatus | None = Query(default=None, alias="status"),
    db: AsyncSession = Depends(get_db),
) -> list[IndividualPolicyResponse]:
    policies = await individual_policy_repository.list_policies(db, status=policy_status)
    return [IndividualPolicyResponse.model_validate(p) for p in policies]


@router.post("", response_model=IndividualPolicyResponse, status_code=status.HTTP_201_CREATED)
async def create_individual_policy(
    payload: IndividualPolicyCreate,
    db: AsyncSession = Depends(get_db),
) -> IndividualPolicyResponse:
    policy = await policy_service.create_individual_policy(
        db,
        policy_number=payload.policy_number,
        source_quote_id=payload.source_quote_id,
        effective_date=payload.effective_date,
        expiration_date=payload.expiration_date,
        status=payload.status.value if payload.status else None,
        holder=payload.holder.model_dump() if payload.holder else None,
        coverages=[c.model_dump() for c in payload.coverages],
    )
    return IndividualPolicyResponse.model_validate(policy)


@router.get("/{policy_id}", response_model=IndividualPolicyDetailResponse)
async def get_individual_policy(
    policy_id: int,
    db: AsyncSession = Depends(get_db),
) -> IndividualPolicyDetailResponse:
    """Policy with holder, dependents (and their coverages), beneficiaries and coverages."""
    detail = await policy_service.get_individual_detail(db, policy_id)
    if detail is None:
        raise NotFoundError("Individual policy not found", entity="IndividualPolicy", entity_id=policy_id)
    return individual_detail_response(detail)


@router.patch("/{policy_id}", response_model=IndividualPolicyResponse)
async def update_individual_policy(
    policy_id: int,
    payload: PolicyUpdate,
    db: AsyncSession = Depends(get_db),
) -> IndividualPolicyResponse:
    policy = await individual_policy_repository.update_policy(
        db, policy_id, **payload.model_dump(exclude_unset=True)
    )
    if policy is None:
        raise NotFoundError("Individual policy not found", entity="IndividualPolicy", entity_id=policy_id)
    return IndividualPolicyResponse.model_validate(policy)


@router.delete("/{policy_id}", response_model=MessageResponse)
async def delete_individual_policy(policy_id: int, db: AsyncSession = Depends(get_db)) -> MessageResponse:
    """Delete the policy with its holder, dependents, beneficiaries and coverages."""
    await policy_service.delete_individual_policy(db, policy_id)
    return MessageResponse(message="Individual policy deleted successfully")
