"""
Benefit template endpoints.

PUT on a draft edits it in place (200); on an active or archived row it
creates a new version row (201).
"""

from __future__ import annotations

from datetime import date

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from apogee.api.deps import get_current_principal, get_db
from apogee.api.schemas.designer import (
    TemplateCreate,
    TemplateRenderResponse,
    TemplateResponse,
    TemplateRevise,
    TemplateStatusUpdate,
    TemplateVersionsResponse,
)
from apogee.core.constants import BenefitType, TemplateStatus
from apogee.core.errors import NotFoundError
from apogee.repositories import templates as template_repository
from apogee.services import versioning
from apogee.services.field_schema import parse_field_schema, render_schema

router = APIRouter(
    prefix="/templates",
    tags=["Benefit Templates"],
    dependencies=[Depends(get_current_principal)],
)


async def _response_for(db: AsyncSession, template_db_id: int) -> TemplateResponse:
    row = await template_repository.get_template_with_category(db, template_db_id)
    if row is None:
        raise NotFoundError("Template not found", entity="BenefitTemplate", entity_id=template_db_id)
    return TemplateResponse.from_row(*row)


@router.get("", response_model=list[TemplateResponse])
async def list_templates(
    benefit_type: BenefitType | None = Query(default=None, alias="type"),
    category_id: int | None = Query(default=None, alias="categoryId"),
    template_status: TemplateStatus | None = Query(default=None, alias="status"),
    latest: bool = Query(default=False),
    db: AsyncSession = Depends(get_db),
) -> list[TemplateResponse]:
    """Template rows joined with their category; ``latest`` keeps one row per template."""
    rows = await versioning.list_templates(
        db,
        benefit_type=benefit_type.value if benefit_type else None,
        category_id=category_id,
        status=template_status.value if template_status else None,
        latest_only=latest,
    )
    return [TemplateResponse.from_row(t, c) for t, c in rows]


@router.get("/{template_db_id}", response_model=TemplateResponse)
async def get_template(template_db_id: int, db: AsyncSession = Depends(get_db)) -> TemplateResponse:
    return await _response_for(db, template_db_id)


@router.post("", response_model=TemplateResponse, status_code=status.HTTP_201_CREATED)
async def create_template(payload: TemplateCreate, db: AsyncSession = Depends(get_db)) -> TemplateResponse:
    template = await versioning.create_template(
        db,
        category_id=payload.category_id,
        benefit_type=payload.type.value,
        name=payload.name,
        description=payload.description,
        field_schema=payload.field_schema,
        default_values=payload.default_values,
        status=payload.status.value,
    )
    return await _response_for(db, template.id)


@router.put("/{template_db_id}", response_model=TemplateResponse)
async def revise_template(
    template_db_id: int,
    payload: TemplateRevise,
    response: Response,
    db: AsyncSession = Depends(get_db),
) -> TemplateResponse:
    patch = payload.model_dump(exclude_unset=True, exclude={"version_bump"})
    if "status" in patch and patch["status"] is not None:
        patch["status"] = patch["status"].value
    template, created = await versioning.revise_template(
        db,
        template_db_id,
        patch,
        payload.version_bump.value,
    )
    if created:
        response.status_code = status.HTTP_201_CREATED
    return await _response_for(db, template.id)


@router.patch("/{template_db_id}/status", response_model=TemplateResponse)
async def update_template_status(
    template_db_id: int,
    payload: TemplateStatusUpdate,
    db: AsyncSession = Depends(get_db),
) -> TemplateResponse:
    """Activating a version archives whichever other version was active."""
    template = await versioning.set_template_status(db, template_db_id, payload.status.value)
    return await _response_for(db, template.id)


@router.get("/{template_db_id}/versions", response_model=TemplateVersionsResponse)
async def list_template_versions(
    template_db_id: int,
    db: AsyncSession = Depends(get_db),
) -> TemplateVersionsResponse:
    template, versions = await versioning.list_template_versions(db, template_db_id)
    return TemplateVersionsResponse(
        template_id=template.template_id,
        name=template.name,
        versions=[TemplateResponse.from_row(v) for v in versions],
    )


@router.get("/{template_db_id}/render", response_model=TemplateRenderResponse)
async def render_template(
    template_db_id: int,
    today: date | None = Query(default=None),
    db: AsyncSession = Depends(get_db),
) -> TemplateRenderResponse:
    """Form descriptors for each field, with "today" date bounds resolved."""
    template = await template_repository.get_template(db, template_db_id)
    if template is None:
        raise NotFoundError("Template not found", entity="BenefitTemplate", entity_id=template_db_id)
    fields = render_schema(parse_field_schema(template.field_schema), today=today)
    return TemplateRenderResponse(
        id=template.id,
        template_id=template.template_id,
        name=template.name,
        version=template.version,
        fields=fields,
    )
