"""Customer / Policy service request/response schemas."""

from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from typing import Any

from pydantic import AliasChoices, Field

from apogee.api.schemas.common import APIModel
from apogee.core.constants import DependentType, PolicyKind, PolicyStatus
from apogee.services.conversion import ClassDefinition


# ── Conversion ────────────────────────────────

class ConvertQuoteRequest(APIModel):
    quote_id: int | None = None
    effective_date: date | None = None
    expiration_date: date | None = None
    class_definitions: list[ClassDefinition] | None = Field(
        default=None,
        validation_alias=AliasChoices("classDefinitions", "classes"),
    )


class ConvertQuoteResponse(APIModel):
    message: str
    policy_type: PolicyKind
    policy_number: str
    policy_id: int
    policy: dict[str, Any]


# ── Shared pieces ─────────────────────────────

class PolicyCoverageInput(APIModel):
    product_type: str = Field(..., min_length=1, max_length=100)
    details: str | None = None
    premium: Decimal | None = Field(default=None, ge=0)


class PolicyCoverageResponse(APIModel):
    id: int
    product_type: str
    details: str | None = None
    premium: float | None = None


class PolicyUpdate(APIModel):
    status: PolicyStatus | None = None
    expiration_date: date | None = None


# ── Holders, dependents, beneficiaries ────────

class PolicyHolderBase(APIModel):
    first_name: str | None = Field(default=None, min_length=1)
    middle_name: str | None = None
    last_name: str | None = Field(default=None, min_length=1)
    email: str | None = None
    birthdate: date | None = None
    phone_number: str | None = Field(default=None, max_length=20)
    address_line_1: str | None = Field(default=None, alias="addressLine1")
    address_line_2: str | None = Field(default=None, alias="addressLine2")
    city: str | None = None
    state_province: str | None = None
    postal_code: str | None = None
    country: str | None = Field(default=None, max_length=2)


class PolicyHolderCreate(PolicyHolderBase):
    first_name: str = Field(..., min_length=1)
    last_name: str = Field(..., min_length=1)
    email: str = Field(..., min_length=3)
    birthdate: date
    source_applicant_id: int | None = None


class PolicyHolderUpdate(PolicyHolderBase):
    pass


class PolicyHolderResponse(PolicyHolderBase):
    id: int
    policy_id: int
    source_applicant_id: int | None = None


class DependentCoverageResponse(PolicyCoverageResponse):
    dependent_id: int


class DependentCreate(APIModel):
    dependent_type: DependentType
    first_name: str = Field(..., min_length=1)
    middle_name: str | None = None
    last_name: str = Field(..., min_length=1)
    birthdate: date
    coverages: list[PolicyCoverageInput] = Field(default_factory=list)


class DependentCoveragesCreate(APIModel):
    coverages: list[PolicyCoverageInput] = Field(..., min_length=1)


class DependentResponse(APIModel):
    id: int
    policy_holder_id: int
    dependent_type: str
    first_name: str
    middle_name: str | None = None
    last_name: str
    birthdate: date
    coverages: list[DependentCoverageResponse] = Field(default_factory=list)


class BeneficiaryCreate(APIModel):
    first_name: str = Field(..., min_length=1)
    last_name: str = Field(..., min_length=1)
    relationship: str | None = None
    percentage: Decimal | None = Field(default=None, ge=0, le=100)


class BeneficiaryResponse(APIModel):
    id: int
    policy_holder_id: int
    first_name: str
    last_name: str
    relationship: str | None = None
    percentage: float | None = None


# ── Individual policies ───────────────────────

class IndividualPolicyCreate(APIModel):
    policy_number: str = Field(..., min_length=1, max_length=50)
    source_quote_id: int
    effective_date: date
    expiration_date: date | None = None
    status: PolicyStatus | None = None
    holder: PolicyHolderCreate | None = None
    coverages: list[PolicyCoverageInput] = Field(default_factory=list)


class IndividualPolicyResponse(APIModel):
    id: int
    policy_number: str
    source_quote_id: int
    effective_date: date
    expiration_date: date | None = None
    status: str
    created_at: datetime | None = None
    updated_at: datetime | None = None


class IndividualPolicyDetailResponse(APIModel):
    policy: IndividualPolicyResponse
    holder: PolicyHolderResponse | None = None
    dependents: list[DependentResponse] = Field(default_factory=list)
    beneficiaries: list[BeneficiaryResponse] = Field(default_factory=list)
    coverages: list[PolicyCoverageResponse] = Field(default_factory=list)


# ── Group policies ────────────────────────────

class GroupPolicyCreate(APIModel):
    policy_number: str = Field(..., min_length=1, max_length=50)
    source_quote_id: int
    source_group_id: int | None = None
    group_name: str = Field(..., min_length=1, max_length=256)
    effective_date: date
    expiration_date: date | None = None
    status: PolicyStatus | None = None


class GroupPolicyUpdate(PolicyUpdate):
    group_name: str | None = Field(default=None, min_length=1, max_length=256)


class GroupPolicyResponse(APIModel):
    id: int
    policy_number: str
    source_quote_id: int
    source_group_id: int | None = None
    group_name: str
    effective_date: date
    expiration_date: date | None = None
    status: str
    created_at: datetime | None = None
    updated_at: datetime | None = None


class GroupMemberResponse(APIModel):
    id: int
    policy_class_id: int
    first_name: str
    middle_name: str | None = None
    last_name: str
    email: str
    birthdate: date
    phone_number: str | None = None
    source_applicant_id: int | None = None


class PolicyClassResponse(APIModel):
    id: int
    group_policy_id: int
    class_name: str
    description: str | None = None
    members: list[GroupMemberResponse] = Field(default_factory=list)
    coverages: list[PolicyCoverageResponse] = Field(default_factory=list)


class GroupPolicyDetailResponse(APIModel):
    policy: GroupPolicyResponse
    classes: list[PolicyClassResponse] = Field(default_factory=list)


# ── Combined views ────────────────────────────

class PolicySummaryResponse(APIModel):
    id: int
    type: PolicyKind
    policy_number: str
    display_name: str
    status: str
    source_quote_id: int
    effective_date: date
    expiration_date: date | None = None
    created_at: datetime


class PolicyListResponse(APIModel):
    policies: list[PolicySummaryResponse]
    counts: dict[str, int]


class PolicyDetailResponse(APIModel):
    """Unified detail; ``policyHolders`` holds group members for group policies."""

    type: PolicyKind
    policy: dict[str, Any]
    policy_holders: list[dict[str, Any]] = Field(default_factory=list)
    policy_coverages: list[dict[str, Any]] = Field(default_factory=list)
    dependents: list[DependentResponse] | None = None
    beneficiaries: list[BeneficiaryResponse] | None = None
    classes: list[PolicyClassResponse] | None = None
