"""Group endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from apogee.api.deps import get_current_principal, get_db
from apogee.api.schemas.quoting import GroupCreate, GroupCreateResponse, GroupResponse, GroupUpdate, QuoteResponse
from apogee.core.errors import NotFoundError
from apogee.repositories import groups as group_repository
from apogee.services import quotes as quote_service

router = APIRouter(
    prefix="/groups",
    tags=["Groups"],
    dependencies=[Depends(get_current_principal)],
)


@router.post("", response_model=GroupCreateResponse, status_code=status.HTTP_201_CREATED)
async def create_group(payload: GroupCreate, db: AsyncSession = Depends(get_db)) -> GroupCreateResponse:
    """Create a group and its Group quote."""
    group, quote = await quote_service.create_group(db, group_name=payload.group_name)
    return GroupCreateResponse(
        group=GroupResponse.model_validate(group),
        quote=QuoteResponse.model_validate(quote),
    )


@router.get("/{group_id}", response_model=GroupResponse)
async def get_group(group_id: int, db: AsyncSession = Depends(get_db)) -> GroupResponse:
    group = await group_repository.get_group(db, group_id)
    if group is None:
        raise NotFoundError("Group not found", entity="Group", entity_id=group_id)
    return GroupResponse.model_validate(group)


@router.patch("/{group_id}", response_model=GroupResponse)
async def rename_group(
    group_id: int,
    payload: GroupUpdate,
    db: AsyncSession = Depends(get_db),
) -> GroupResponse:
    group = await group_repository.rename_group(db, group_id, payload.group_name)
    if group is None:
        raise NotFoundError("Group not found", entity="Group", entity_id=group_id)
    return GroupResponse.model_validate(group)
