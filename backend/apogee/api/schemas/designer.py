"""Benefit Designer request/response schemas."""

from __future__ import annotations

import uuid
from datetime import datetime
from typing import Any

from pydantic import Field

from apogee.api.schemas.common import APIModel
from apogee.core.constants import BenefitType, TemplateStatus, VersionBump
from apogee.db.models.benefit_category import BenefitCategory
from apogee.db.models.benefit_template import BenefitTemplate


# ── Categories ────────────────────────────────

class CategoryCreate(APIModel):
    name: str = Field(..., min_length=1, max_length=100)
    description: str | None = None
    icon: str | None = Field(default=None, max_length=50)
    applies_to: list[BenefitType] | None = None
    display_order: int = 0


class CategoryUpdate(APIModel):
    name: str | None = Field(default=None, min_length=1, max_length=100)
    description: str | None = None
    icon: str | None = Field(default=None, max_length=50)
    applies_to: list[BenefitType] | None = None
    display_order: int | None = None
    is_active: bool | None = None


class CategoryResponse(APIModel):
    id: int
    name: str
    description: str | None = None
    icon: str | None = None
    applies_to: list[str]
    display_order: int
    is_active: bool
    created_at: datetime | None = None
    updated_at: datetime | None = None


class SeedResult(APIModel):
    name: str
    status: str


class SeedResponse(APIModel):
    message: str
    results: list[SeedResult]


# ── Templates ─────────────────────────────────

class TemplateCreate(APIModel):
    category_id: int
    type: BenefitType
    name: str = Field(..., min_length=1, max_length=256)
    description: str | None = None
    field_schema: dict[str, Any] | None = None
    default_values: dict[str, Any] | None = None
    status: TemplateStatus = TemplateStatus.DRAFT


class TemplateRevise(APIModel):
    name: str | None = Field(default=None, min_length=1, max_length=256)
    description: str | None = None
    field_schema: dict[str, Any] | None = None
    default_values: dict[str, Any] | None = None
    status: TemplateStatus | None = None
    version_bump: VersionBump = VersionBump.MINOR


class TemplateStatusUpdate(APIModel):
    status: TemplateStatus


class TemplateResponse(APIModel):
    id: int
    template_id: uuid.UUID
    category_id: int
    category_name: str | None = None
    category_icon: str | None = None
    type: str
    name: str
    description: str | None = None
    version: str
    major_version: int
    minor_version: int
    field_schema: dict[str, Any]
    default_values: dict[str, Any]
    status: str
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_row(
        cls,
        template: BenefitTemplate,
        category: BenefitCategory | None = None,
    ) -> "TemplateResponse":
        response = cls.model_validate(template)
        if category is not None:
            response.category_name = category.name
            response.category_icon = category.icon
        return response


class TemplateVersionsResponse(APIModel):
    template_id: uuid.UUID
    name: str
    versions: list[TemplateResponse]


class TemplateRenderResponse(APIModel):
    id: int
    template_id: uuid.UUID
    name: str
    version: str
    fields: list[dict[str, Any]]
