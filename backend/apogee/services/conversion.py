"""
Quote → policy conversion (Customer / Policy service).

Steps:
    1. Fetch the quote aggregate from the Quoting service.
    2. Check it is "Ready for Sale" and that the inputs the chosen path
       needs are present (applicant email / class definitions).
    3. Claim the quote: conditional "Ready for Sale" → "Archived" on the
       Quoting side.  Exactly one concurrent converter can win this.
    4. Write the policy aggregate in the request transaction.
    5. If step 4 fails, put the quote back to "Ready for Sale" and
       re-raise so the transaction rolls back.
"""

from __future__ import annotations

import secrets
import string
from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from decimal import Decimal
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from sqlalchemy.ext.asyncio import AsyncSession

from apogee.clients.quoting import QuotingClient
from apogee.core.constants import PolicyKind, QuoteStatus, QuoteType
from apogee.core.errors import InvalidStateError, ValidationError
from apogee.core.logging import get_logger
from apogee.db.models.group_policy import GroupPolicy
from apogee.db.models.individual_policy import IndividualPolicy
from apogee.repositories import group_policies as group_policy_repository
from apogee.repositories import individual_policies as individual_policy_repository
from apogee.repositories import policy_holders as holder_repository

logger = get_logger(__name__)

POLICY_NUMBER_ALPHABET = string.digits + string.ascii_uppercase
UNKNOWN_GROUP_NAME = "Unknown Group"


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ClassCoverageInput(_CamelModel):
    product_type: str = Field(min_length=1)
    details: str | None = None
    premium: Decimal | None = None


class ClassDefinition(_CamelModel):
    """One policy class to build on a group policy, with its members and coverages."""

    class_name: str = Field(min_length=1)
    description: str | None = None
    member_ids: list[int] = Field(default_factory=list)
    coverages: list[ClassCoverageInput] = Field(default_factory=list)


@dataclass
class ConversionResult:
    kind: PolicyKind
    policy: IndividualPolicy | GroupPolicy
    policy_number: str
    holder_id: int | None = None
    coverage_count: int = 0
    class_ids: list[int] = field(default_factory=list)
    member_count: int = 0


def generate_policy_number(today: date | None = None) -> str:
    """``POL-YYYYMMDD-XXXXX`` with five random upper-case base-36 characters."""
    today = today or datetime.now(timezone.utc).date()
    suffix = "".join(secrets.choice(POLICY_NUMBER_ALPHABET) for _ in range(5))
    return f"POL-{today:%Y%m%d}-{suffix}"


def _as_date(value: Any) -> date | None:
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    text = str(value)
    if "T" in text:
        return datetime.fromisoformat(text.replace("Z", "+00:00")).date()
    return date.fromisoformat(text)


def _person_fields(applicant: dict[str, Any]) -> dict[str, Any]:
    return {
        "first_name": applicant.get("firstName"),
        "middle_name": applicant.get("middleName"),
        "last_name": applicant.get("lastName"),
        "birthdate": _as_date(applicant.get("birthdate")),
        "phone_number": applicant.get("phoneNumber"),
        "source_applicant_id": applicant.get("id"),
    }


async def convert_quote(
    db: AsyncSession,
    quoting: QuotingClient,
    *,
    quote_id: int | None,
    effective_date: date | None,
    expiration_date: date | None = None,
    class_definitions: list[ClassDefinition] | None = None,
) -> ConversionResult:
    if not quote_id or not effective_date:
        raise ValidationError("Quote ID and effective date are required")

    detail = await quoting.get_quote_detail(quote_id)
    quote = detail.get("quote") or {}

    if quote.get("status") != QuoteStatus.READY_FOR_SALE:
        raise InvalidStateError(
            f'Quote must be in "{QuoteStatus.READY_FOR_SALE}" status to convert',
            entity="Quote",
            entity_id=quote_id,
            details={"status": quote.get("status")},
        )

    is_group = quote.get("type") == QuoteType.GROUP
    applicant = detail.get("applicant")

    if is_group and not class_definitions:
        raise ValidationError(
            "Class definitions are required for group policy conversion",
            entity="Quote",
            entity_id=quote_id,
        )
    if not is_group and applicant and not applicant.get("email"):
        raise ValidationError(
            "Applicant email is required to create a policy holder",
            entity="Applicant",
            entity_id=applicant.get("id"),
        )

    # Serialization point: only one converter gets past this.
    await quoting.update_quote_status(
        quote_id,
        QuoteStatus.ARCHIVED.value,
        expected_status=QuoteStatus.READY_FOR_SALE.value,
    )

    try:
        if is_group:
            result = await _write_group_policy(
                db,
                quote_id=quote_id,
                detail=detail,
                effective_date=effective_date,
                expiration_date=expiration_date,
                class_definitions=class_definitions or [],
            )
        else:
            result = await _write_individual_policy(
                db,
                quote_id=quote_id,
                detail=detail,
                effective_date=effective_date,
                expiration_date=expiration_date,
            )
    except Exception:
        logger.exception("Policy write failed, releasing quote", quote_id=quote_id)
        await _release_quote(quoting, quote_id)
        raise

    logger.info(
        "Quote converted",
        quote_id=quote_id,
        policy_id=result.policy.id,
        policy_number=result.policy_number,
        type=result.kind.value,
        coverages=result.coverage_count,
        classes=len(result.class_ids),
        members=result.member_count,
    )
    return result


async def _release_quote(quoting: QuotingClient, quote_id: int) -> None:
    """Compensate a claimed quote: Archived → Ready for Sale."""
    try:
        await quoting.update_quote_status(
            quote_id,
            QuoteStatus.READY_FOR_SALE.value,
            expected_status=QuoteStatus.ARCHIVED.value,
        )
    except Exception:
        logger.exception("Could not restore quote after failed conversion", quote_id=quote_id)


async def _write_individual_policy(
    db: AsyncSession,
    *,
    quote_id: int,
    detail: dict[str, Any],
    effective_date: date,
    expiration_date: date | None,
) -> ConversionResult:
    policy_number = generate_policy_number()
    policy = await individual_policy_repository.create_policy(
        db,
        policy_number=policy_number,
        source_quote_id=quote_id,
        effective_date=effective_date,
        expiration_date=expiration_date,
    )

    holder_id = None
    applicant = detail.get("applicant")
    if applicant:
        holder = await holder_repository.create_holder(
            db,
            policy.id,
            email=applicant["email"],
            address_line_1=applicant.get("addressLine1"),
            address_line_2=applicant.get("addressLine2"),
            city=applicant.get("city"),
            state_province=applicant.get("stateProvince"),
            postal_code=applicant.get("postalCode"),
            country=applicant.get("country"),
            **_person_fields(applicant),
        )
        holder_id = holder.id

    # Premiums are priced elsewhere; coverages carry none at conversion.
    coverages = await individual_policy_repository.add_coverages(
        db,
        policy.id,
        [
            {"product_type": c["productType"], "details": c.get("details"), "premium": None}
            for c in detail.get("coverages") or []
        ],
    )

    return ConversionResult(
        kind=PolicyKind.INDIVIDUAL,
        policy=policy,
        policy_number=policy_number,
        holder_id=holder_id,
        coverage_count=len(coverages),
    )


async def _write_group_policy(
    db: AsyncSession,
    *,
    quote_id: int,
    detail: dict[str, Any],
    effective_date: date,
    expiration_date: date | None,
    class_definitions: list[ClassDefinition],
) -> ConversionResult:
    quote = detail.get("quote") or {}
    group = detail.get("group") or {}
    policy_number = generate_policy_number()

    policy = await group_policy_repository.create_policy(
        db,
        policy_number=policy_number,
        source_quote_id=quote_id,
        source_group_id=quote.get("groupId") or group.get("id"),
        group_name=group.get("groupName") or UNKNOWN_GROUP_NAME,
        effective_date=effective_date,
        expiration_date=expiration_date,
    )

    group_applicants = detail.get("groupApplicants") or []
    class_ids: list[int] = []
    member_count = 0
    coverage_count = 0

    for definition in class_definitions:
        policy_class = await group_policy_repository.create_class(
            db,
            policy.id,
            class_name=definition.class_name,
            description=definition.description,
        )
        class_ids.append(policy_class.id)

        wanted = set(definition.member_ids)
        members = await group_policy_repository.add_members(
            db,
            policy_class.id,
            [
                {**_person_fields(a), "email": a.get("email") or ""}
                for a in group_applicants
                if a.get("id") in wanted
            ],
        )
        member_count += len(members)

        coverages = await group_policy_repository.add_class_coverages(
            db,
            policy_class.id,
            [c.model_dump() for c in definition.coverages],
        )
        coverage_count += len(coverages)

    return ConversionResult(
        kind=PolicyKind.GROUP,
        policy=policy,
        policy_number=policy_number,
        coverage_count=coverage_count,
        class_ids=class_ids,
        member_count=member_count,
    )
