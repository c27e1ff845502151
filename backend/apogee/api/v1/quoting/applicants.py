"""Applicant endpoints (individual applicants and group employees)."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from apogee.api.deps import get_current_principal, get_db
from apogee.api.schemas.quoting import (
    ApplicantCreate,
    ApplicantCreateResponse,
    ApplicantResponse,
    ApplicantUpdate,
    QuoteResponse,
)
from apogee.core.errors import NotFoundError
from apogee.repositories import applicants as applicant_repository
from apogee.services import quotes as quote_service

router = APIRouter(
    prefix="/applicants",
    tags=["Applicants"],
    dependencies=[Depends(get_current_principal)],
)


@router.post("", response_model=ApplicantCreateResponse, status_code=status.HTTP_201_CREATED)
async def create_applicant(
    payload: ApplicantCreate,
    db: AsyncSession = Depends(get_db),
) -> ApplicantCreateResponse:
    """Create an applicant; Individual applicants also start a new quote."""
    applicant, quote = await quote_service.create_applicant(db, payload.model_dump())
    return ApplicantCreateResponse(
        applicant=ApplicantResponse.model_validate(applicant),
        quote=QuoteResponse.model_validate(quote) if quote is not None else None,
    )


@router.get("", response_model=list[ApplicantResponse])
async def list_applicants(
    group_id: int | None = Query(default=None, alias="groupId"),
    class_id: int | None = Query(default=None, alias="classId"),
    db: AsyncSession = Depends(get_db),
) -> list[ApplicantResponse]:
    applicants = await applicant_repository.list_applicants(db, group_id=group_id, class_id=class_id)
    return [ApplicantResponse.model_validate(a) for a in applicants]


@router.get("/{applicant_id}", response_model=ApplicantResponse)
async def get_applicant(applicant_id: int, db: AsyncSession = Depends(get_db)) -> ApplicantResponse:
    applicant = await applicant_repository.get_applicant(db, applicant_id)
    if applicant is None:
        raise NotFoundError("Applicant not found", entity="Applicant", entity_id=applicant_id)
    return ApplicantResponse.model_validate(applicant)


@router.patch("/{applicant_id}", response_model=ApplicantResponse)
async def update_applicant(
    applicant_id: int,
    payload: ApplicantUpdate,
    db: AsyncSession = Depends(get_db),
) -> ApplicantResponse:
    """Partial update; reassigning a class checks it belongs to the applicant's group."""
    applicant = await quote_service.update_applicant(db, applicant_id, payload.model_dump(exclude_unset=True))
    return ApplicantResponse.model_validate(applicant)
