"""Read-only view of Quoting service quotes, for agents choosing what to convert."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, Query

from apogee.api.deps import get_current_principal, get_quoting_client
from apogee.clients.quoting import QuotingClient
from apogee.core.constants import QuoteStatus, QuoteType

router = APIRouter(
    prefix="/quotes",
    tags=["Quotes"],
    dependencies=[Depends(get_current_principal)],
)


@router.get("")
async def list_quotes(
    quote_status: QuoteStatus | None = Query(default=None, alias="status"),
    quote_type: QuoteType | None = Query(default=None, alias="type"),
    quoting: QuotingClient = Depends(get_quoting_client),
) -> list[dict[str, Any]]:
    return await quoting.list_quotes(
        status=quote_status.value if quote_status else None,
        quote_type=quote_type.value if quote_type else None,
    )


@router.get("/{quote_id}")
async def get_quote(
    quote_id: int,
    quoting: QuotingClient = Depends(get_quoting_client),
) -> dict[str, Any]:
    return await quoting.get_quote_detail(quote_id)
