"""Group policy endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from apogee.api.deps import get_current_principal, get_db
from apogee.api.schemas.common import MessageResponse
from apogee.api.schemas.policies import (
    GroupPolicyCreate,
    GroupPolicyDetailResponse,
    GroupPolicyResponse,
    GroupPolicyUpdate,
)
from apogee.api.v1.customer.serializers import group_detail_response
from apogee.core.constants import PolicyStatus
from apogee.core.errors import NotFoundError
from apogee.repositories import group_policies as group_policy_repository
from apogee.services import policies as policy_service

router = APIRouter(
    prefix="/group-policies",
    tags=["Group Policies"],
    dependencies=[Depends(get_current_principal)],
)


@router.get("", response_model=list[GroupPolicyResponse])
async def list_group_policies(
    policy_status: PolicyStatus | None = Query(default=None, alias="status"),
    db: AsyncSession = Depends(get_db),
) -> list[GroupPolicyResponse]:
    policies = await group_policy_repository.list_policies(db, status=policy_status)
    return [GroupPolicyResponse.model_validate(p) for p in policies]


@router.post("", response_model=GroupPolicyResponse, status_code=status.HTTP_201_CREATED)
async def create_group_policy(
    payload: GroupPolicyCreate,
    db: AsyncSession = Depends(get_db),
) -> GroupPolicyResponse:
    policy = await policy_service.create_group_policy(
        db,
        policy_number=payload.policy_number,
        source_quote_id=payload.source_quote_id,
        source_group_id=payload.source_group_id,
        group_name=payload.group_name,
        effective_date=payload.effective_date,
        expiration_date=payload.expiration_date,
        status=payload.status.value if payload.status else None,
    )
    return GroupPolicyResponse.model_validate(policy)


@router.get("/{policy_id}", response_model=GroupPolicyDetailResponse)
async def get_group_policy(policy_id: int, db: AsyncSession = Depends(get_db)) -> GroupPolicyDetailResponse:
    detail = await policy_service.get_group_detail(db, policy_id)
    if detail is None:
        raise NotFoundError("Group policy not found", entity="GroupPolicy", entity_id=policy_id)
    return group_detail_response(detail)


@router.patch("/{policy_id}", response_model=GroupPolicyResponse)
async def update_group_policy(
    policy_id: int,
    payload: GroupPolicyUpdate,
    db: AsyncSession = Depends(get_db),
) -> GroupPolicyResponse:
    policy = await group_policy_repository.update_policy(
        db, policy_id, **payload.model_dump(exclude_unset=True)
    )
    if policy is None:
        raise NotFoundError("Group policy not found", entity="GroupPolicy", entity_id=policy_id)
    return GroupPolicyResponse.model_validate(policy)


@router.delete("/{policy_id}", response_model=MessageResponse)
async def delete_group_policy(policy_id: int, db: AsyncSession = Depends(get_db)) -> MessageResponse:
    """Delete the policy with its classes, members and class coverages."""
    await policy_service.delete_group_policy(db, policy_id)
    return MessageResponse(message="Group policy deleted successfully")
