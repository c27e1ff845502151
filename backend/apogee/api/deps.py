"""Shared dependencies for API routes."""

from __future__ import annotations

from typing import AsyncGenerator

from fastapi import HTTPException, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from apogee.clients.benefit_designer import BenefitDesignerClient
from apogee.clients.quoting import QuotingClient
from apogee.core.config import settings
from apogee.core.security import Principal
from apogee.db.session import get_db as _get_db


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Yield an async DB session (one transaction per request)."""
    async for session in _get_db():
        yield session


async def get_current_principal(request: Request) -> Principal:
    """Caller identity set by PortalAuthMiddleware."""
    principal = getattr(request.state, "principal", None)
    if principal is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication credentials were not provided",
        )
    return principal


def get_quoting_client() -> QuotingClient:
    return QuotingClient(settings.QUOTING_SERVICE_URL)


def get_benefit_designer_client() -> BenefitDesignerClient:
    return BenefitDesignerClient(settings.BENEFIT_DESIGNER_URL)
