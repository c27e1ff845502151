"""Benefit category endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from apogee.api.deps import get_current_principal, get_db
from apogee.api.schemas.designer import (
    CategoryCreate,
    CategoryResponse,
    CategoryUpdate,
    SeedResponse,
    SeedResult,
)
from apogee.core.config import settings
from apogee.core.constants import BenefitType
from apogee.core.errors import NotFoundError
from apogee.repositories import categories as category_repository
from apogee.services import categories as category_service

router = APIRouter(
    prefix="/categories",
    tags=["Benefit Categories"],
    dependencies=[Depends(get_current_principal)],
)


@router.get("", response_model=list[CategoryResponse])
async def list_categories(
    active: bool = Query(default=True),
    benefit_type: BenefitType | None = Query(default=None, alias="type"),
    db: AsyncSession = Depends(get_db),
) -> list[CategoryResponse]:
    """Categories ordered by display order; ``type`` keeps those that apply to it."""
    categories = await category_repository.list_categories(
        db,
        active_only=active,
        benefit_type=benefit_type.value if benefit_type else None,
    )
    return [CategoryResponse.model_validate(c) for c in categories]


@router.post("/seed", response_model=SeedResponse)
async def seed_categories(
    force: bool = Query(default=False),
    db: AsyncSession = Depends(get_db),
) -> SeedResponse:
    """Insert the standard categories that do not exist yet."""
    if settings.APP_ENV == "production" and not force:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Seeding is disabled in production. Use ?force=true to override.",
        )
    results = await category_service.seed_standard_categories(db)
    return SeedResponse(
        message="Categories seeded",
        results=[SeedResult(**r) for r in results],
    )


@router.get("/{category_id}", response_model=CategoryResponse)
async def get_category(category_id: int, db: AsyncSession = Depends(get_db)) -> CategoryResponse:
    category = await category_repository.get_category(db, category_id)
    if category is None:
        raise NotFoundError("Category not found", entity="BenefitCategory", entity_id=category_id)
    return CategoryResponse.model_validate(category)


@router.post("", response_model=CategoryResponse, status_code=status.HTTP_201_CREATED)
async def create_category(payload: CategoryCreate, db: AsyncSession = Depends(get_db)) -> CategoryResponse:
    category = await category_service.create_category(
        db,
        name=payload.name,
        description=payload.description,
        icon=payload.icon,
        applies_to=[t.value for t in payload.applies_to] if payload.applies_to else None,
        display_order=payload.display_order,
    )
    return CategoryResponse.model_validate(category)


@router.patch("/{category_id}", response_model=CategoryResponse)
async def update_category(
    category_id: int,
    payload: CategoryUpdate,
    db: AsyncSession = Depends(get_db),
) -> CategoryResponse:
    fields = payload.model_dump(exclude_unset=True)
    if fields.get("applies_to") is not None:
        fields["applies_to"] = [t.value for t in payload.applies_to]
    category = await category_service.update_category(db, category_id, **fields)
    return CategoryResponse.model_validate(category)


@router.delete("/{category_id}", response_model=CategoryResponse)
async def deactivate_category(category_id: int, db: AsyncSession = Depends(get_db)) -> CategoryResponse:
    """Soft delete: the category is flagged inactive, its templates are untouched."""
    category = await category_repository.soft_delete_category(db, category_id)
    if category is None:
        raise NotFoundError("Category not found", entity="BenefitCategory", entity_id=category_id)
    return CategoryResponse.model_validate(category)
