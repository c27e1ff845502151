"""Quote → policy conversion endpoint."""

from __future__ import annotations

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from apogee.api.deps import get_current_principal, get_db, get_quoting_client
from apogee.api.schemas.policies import (
    ConvertQuoteRequest,
    ConvertQuoteResponse,
    GroupPolicyResponse,
    IndividualPolicyResponse,
)
from apogee.clients.quoting import QuotingClient
from apogee.core.constants import PolicyKind
from apogee.services.conversion import convert_quote

router = APIRouter(
    tags=["Conversion"],
    dependencies=[Depends(get_current_principal)],
)


@router.post(
    "/convert-quote",
    response_model=ConvertQuoteResponse,
    status_code=status.HTTP_201_CREATED,
)
async def convert_quote_to_policy(
    payload: ConvertQuoteRequest,
    db: AsyncSession = Depends(get_db),
    quoting: QuotingClient = Depends(get_quoting_client),
) -> ConvertQuoteResponse:
    """
    Convert a "Ready for Sale" quote into an individual or group policy.

    The quote is archived on the Quoting service before any policy row is
    written, so a quote converts at most once.
    """
    result = await convert_quote(
        db,
        quoting,
        quote_id=payload.quote_id,
        effective_date=payload.effective_date,
        expiration_date=payload.expiration_date,
        class_definitions=payload.class_definitions,
    )
    policy_model = IndividualPolicyResponse if result.kind == PolicyKind.INDIVIDUAL else GroupPolicyResponse
    return ConvertQuoteResponse(
        message=f"{result.kind.value} policy created successfully",
        policy_type=result.kind,
        policy_number=result.policy_number,
        policy_id=result.policy.id,
        policy=policy_model.model_validate(result.policy).model_dump(by_alias=True, mode="json"),
    )
