"""Quote endpoints: list, aggregate detail, status changes, cascade delete, coverages."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from apogee.api.deps import get_benefit_designer_client, get_current_principal, get_db
from apogee.api.schemas.common import MessageResponse
from apogee.api.schemas.quoting import (
    CoverageCreate,
    CoverageResponse,
    QuoteBenefitCreate,
    QuoteBenefitResponse,
    QuoteDetailResponse,
    QuoteResponse,
    QuoteUpdate,
)
from apogee.clients.benefit_designer import BenefitDesignerClient
from apogee.core.constants import QuoteStatus, QuoteType
from apogee.core.errors import NotFoundError
from apogee.repositories import quote_benefits as benefit_repository
from apogee.repositories import quotes as quote_repository
from apogee.services import quote_benefits as benefit_service
from apogee.services import quotes as quote_service

router = APIRouter(
    prefix="/quotes",
    tags=["Quotes"],
    dependencies=[Depends(get_current_principal)],
)


@router.get("", response_model=list[QuoteResponse])
async def list_quotes(
    quote_status: QuoteStatus | None = Query(default=None, alias="status"),
    quote_type: QuoteType | None = Query(default=None, alias="type"),
    db: AsyncSession = Depends(get_db),
) -> list[QuoteResponse]:
    """List quotes, newest first."""
    quotes = await quote_repository.list_quotes(db, status=quote_status, quote_type=quote_type)
    return [QuoteResponse.model_validate(q) for q in quotes]


@router.get("/{quote_id}", response_model=QuoteDetailResponse)
async def get_quote(quote_id: int, db: AsyncSession = Depends(get_db)) -> QuoteDetailResponse:
    """Quote with its applicant or group, group applicants, employee classes and coverages."""
    detail = await quote_service.get_quote_detail(db, quote_id)
    return QuoteDetailResponse.model_validate(detail)


@router.patch("/{quote_id}", response_model=QuoteResponse)
async def update_quote(
    quote_id: int,
    payload: QuoteUpdate,
    db: AsyncSession = Depends(get_db),
) -> QuoteResponse:
    quote = await quote_service.update_quote(
        db,
        quote_id,
        status=payload.status,
        quote_type=payload.type,
        expected_status=payload.expected_status,
    )
    return QuoteResponse.model_validate(quote)


@router.delete("/{quote_id}", response_model=MessageResponse)
async def delete_quote(quote_id: int, db: AsyncSession = Depends(get_db)) -> MessageResponse:
    """Delete a quote with its coverages, benefits and applicant/group rows."""
    await quote_service.delete_quote(db, quote_id)
    return MessageResponse(message="Quote deleted successfully")


# ── Coverages ─────────────────────────────────

@router.get("/{quote_id}/coverages", response_model=list[CoverageResponse])
async def list_coverages(quote_id: int, db: AsyncSession = Depends(get_db)) -> list[CoverageResponse]:
    await quote_service.get_quote_or_404(db, quote_id)
    coverages = await quote_repository.list_coverages(db, quote_id)
    return [CoverageResponse.model_validate(c) for c in coverages]


@router.post(
    "/{quote_id}/coverages",
    response_model=CoverageResponse,
    status_code=status.HTTP_201_CREATED,
)
async def add_coverage(
    quote_id: int,
    payload: CoverageCreate,
    db: AsyncSession = Depends(get_db),
) -> CoverageResponse:
    await quote_service.get_quote_or_404(db, quote_id)
    coverage = await quote_repository.add_coverage(
        db,
        quote_id,
        product_type=payload.product_type,
        details=payload.details,
    )
    return CoverageResponse.model_validate(coverage)


@router.delete("/{quote_id}/coverages/{coverage_id}", response_model=MessageResponse)
async def delete_coverage(
    quote_id: int,
    coverage_id: int,
    db: AsyncSession = Depends(get_db),
) -> MessageResponse:
    deleted = await quote_repository.delete_coverage(db, quote_id, coverage_id)
    if not deleted:
        raise NotFoundError("Coverage not found", entity="Coverage", entity_id=coverage_id)
    return MessageResponse(message="Coverage deleted successfully")


# ── Benefits ──────────────────────────────────

@router.get("/{quote_id}/benefits", response_model=list[QuoteBenefitResponse])
async def list_benefits(quote_id: int, db: AsyncSession = Depends(get_db)) -> list[QuoteBenefitResponse]:
    benefits = await benefit_repository.list_quote_benefits(db, quote_id)
    return [QuoteBenefitResponse.model_validate(b) for b in benefits]


@router.post(
    "/{quote_id}/benefits",
    response_model=QuoteBenefitResponse,
    status_code=status.HTTP_201_CREATED,
)
async def attach_benefit(
    quote_id: int,
    payload: QuoteBenefitCreate,
    db: AsyncSession = Depends(get_db),
    designer: BenefitDesignerClient = Depends(get_benefit_designer_client),
) -> QuoteBenefitResponse:
    """Snapshot a Benefit Designer template onto the quote with configured values."""
    benefit = await benefit_service.attach_benefit(
        db,
        designer,
        quote_id=quote_id,
        template_db_id=payload.template_db_id,
        configured_values=payload.configured_values,
    )
    return QuoteBenefitResponse.model_validate(benefit)
