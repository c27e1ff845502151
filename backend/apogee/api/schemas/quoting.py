"""Quoting service request/response schemas."""

from __future__ import annotations

from datetime import date, datetime
from typing import Any

from pydantic import Field

from apogee.api.schemas.common import APIModel
from apogee.core.constants import ApplicantStatus, QuoteStatus, QuoteType


# ── Quotes ────────────────────────────────────

class QuoteResponse(APIModel):
    id: int
    status: str
    type: str
    applicant_id: int | None = None
    group_id: int | None = None
    created_at: datetime | None = None


class QuoteUpdate(APIModel):
    """Status/type change; ``expectedStatus`` turns the status change into a compare-and-set."""

    status: QuoteStatus | None = None
    type: QuoteType | None = None
    expected_status: QuoteStatus | None = None


# ── Applicants ────────────────────────────────

class ApplicantBase(APIModel):
    first_name: str | None = None
    middle_name: str | None = None
    last_name: str | None = None
    birthdate: date | None = None
    phone_number: str | None = Field(default=None, max_length=20)
    email: str | None = None
    address_line_1: str | None = Field(default=None, alias="addressLine1")
    address_line_2: str | None = Field(default=None, alias="addressLine2")
    city: str | None = None
    state_province: str | None = None
    postal_code: str | None = None
    country: str | None = Field(default=None, max_length=2)
    class_id: int | None = None


class ApplicantCreate(ApplicantBase):
    group_id: int | None = None
    quote_type: str | None = None


class ApplicantUpdate(ApplicantBase):
    status: ApplicantStatus | None = None


class ApplicantResponse(ApplicantBase):
    id: int
    group_id: int | None = None
    quote_type: str | None = None
    status: str
    created_at: datetime | None = None


class ApplicantCreateResponse(APIModel):
    applicant: ApplicantResponse
    quote: QuoteResponse | None = None


# ── Groups & employee classes ─────────────────

class GroupCreate(APIModel):
    group_name: str = Field(..., min_length=1, max_length=256)


class GroupUpdate(GroupCreate):
    pass


class GroupResponse(APIModel):
    id: int
    group_name: str
    created_at: datetime | None = None


class GroupCreateResponse(APIModel):
    group: GroupResponse
    quote: QuoteResponse


class EmployeeClassCreate(APIModel):
    group_id: int
    class_name: str = Field(..., min_length=1, max_length=100)
    description: str | None = None


class EmployeeClassUpdate(APIModel):
    class_name: str | None = Field(default=None, min_length=1, max_length=100)
    description: str | None = None


class EmployeeClassResponse(APIModel):
    id: int
    group_id: int
    class_name: str
    description: str | None = None
    created_at: datetime | None = None


class EmployeeClassDetailResponse(EmployeeClassResponse):
    members: list[ApplicantResponse] = Field(default_factory=list)


# ── Coverages ─────────────────────────────────

class CoverageCreate(APIModel):
    product_type: str = Field(..., min_length=1, max_length=100)
    details: str | None = None


class CoverageResponse(APIModel):
    id: int
    quote_id: int
    product_type: str
    details: str | None = None


# ── Quote detail ──────────────────────────────

class QuoteDetailResponse(APIModel):
    quote: QuoteResponse
    applicant: ApplicantResponse | None = None
    group: GroupResponse | None = None
    group_applicants: list[ApplicantResponse] = Field(default_factory=list)
    employee_classes: list[EmployeeClassResponse] = Field(default_factory=list)
    coverages: list[CoverageResponse] = Field(default_factory=list)


# ── Quote benefits ────────────────────────────

class QuoteBenefitCreate(APIModel):
    template_db_id: int
    configured_values: dict[str, Any] | None = None


class QuoteBenefitUpdate(APIModel):
    configured_values: dict[str, Any]


class QuoteBenefitResponse(APIModel):
    id: int
    quote_id: int
    template_db_id: int
    template_uuid: str
    template_name: str
    template_version: str
    category_name: str
    category_icon: str | None = None
    field_schema: dict[str, Any]
    configured_values: dict[str, Any]
    instance_number: int
    created_at: datetime | None = None
    updated_at: datetime | None = None
