"""Policy holder, dependent and beneficiary endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from apogee.api.deps import get_current_principal, get_db
from apogee.api.schemas.common import MessageResponse
from apogee.api.schemas.policies import (
    BeneficiaryCreate,
    BeneficiaryResponse,
    DependentCoverageResponse,
    DependentCoveragesCreate,
    DependentCreate,
    DependentResponse,
    PolicyHolderResponse,
    PolicyHolderUpdate,
)
from apogee.api.v1.customer.serializers import dependent_response
from apogee.services import policies as policy_service

router = APIRouter(
    tags=["Policy Holders"],
    dependencies=[Depends(get_current_principal)],
)


@router.get("/policy-holders/{holder_id}", response_model=PolicyHolderResponse)
async def get_holder(holder_id: int, db: AsyncSession = Depends(get_db)) -> PolicyHolderResponse:
    holder = await policy_service.get_holder_or_404(db, holder_id)
    return PolicyHolderResponse.model_validate(holder)


@router.patch("/policy-holders/{holder_id}", response_model=PolicyHolderResponse)
async def update_holder(
    holder_id: int,
    payload: PolicyHolderUpdate,
    db: AsyncSession = Depends(get_db),
) -> PolicyHolderResponse:
    holder = await policy_service.update_holder(db, holder_id, **payload.model_dump(exclude_unset=True))
    return PolicyHolderResponse.model_validate(holder)


# ── Dependents ────────────────────────────────

@router.post(
    "/policy-holders/{holder_id}/dependents",
    response_model=DependentResponse,
    status_code=status.HTTP_201_CREATED,
)
async def add_dependent(
    holder_id: int,
    payload: DependentCreate,
    db: AsyncSession = Depends(get_db),
) -> DependentResponse:
    fields = payload.model_dump(exclude={"coverages"})
    fields["dependent_type"] = payload.dependent_type.value
    detail = await policy_service.add_dependent(
        db,
        holder_id,
        coverages=[c.model_dump() for c in payload.coverages],
        **fields,
    )
    return dependent_response(detail)


@router.post(
    "/dependents/{dependent_id}/coverages",
    response_model=list[DependentCoverageResponse],
    status_code=status.HTTP_201_CREATED,
)
async def add_dependent_coverages(
    dependent_id: int,
    payload: DependentCoveragesCreate,
    db: AsyncSession = Depends(get_db),
) -> list[DependentCoverageResponse]:
    coverages = await policy_service.add_dependent_coverages(
        db, dependent_id, [c.model_dump() for c in payload.coverages]
    )
    return [DependentCoverageResponse.model_validate(c) for c in coverages]


@router.delete("/dependents/{dependent_id}", response_model=MessageResponse)
async def remove_dependent(dependent_id: int, db: AsyncSession = Depends(get_db)) -> MessageResponse:
    await policy_service.remove_dependent(db, dependent_id)
    return MessageResponse(message="Dependent removed successfully")


# ── Beneficiaries ─────────────────────────────

@router.post(
    "/policy-holders/{holder_id}/beneficiaries",
    response_model=BeneficiaryResponse,
    status_code=status.HTTP_201_CREATED,
)
async def add_beneficiary(
    holder_id: int,
    payload: BeneficiaryCreate,
    db: AsyncSession = Depends(get_db),
) -> BeneficiaryResponse:
    beneficiary = await policy_service.add_beneficiary(db, holder_id, **payload.model_dump())
    return BeneficiaryResponse.model_validate(beneficiary)


@router.delete("/beneficiaries/{beneficiary_id}", response_model=MessageResponse)
async def remove_beneficiary(beneficiary_id: int, db: AsyncSession = Depends(get_db)) -> MessageResponse:
    await policy_service.remove_beneficiary(db, beneficiary_id)
    return MessageResponse(message="Beneficiary removed successfully")
