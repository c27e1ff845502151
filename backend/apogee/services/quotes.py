"""
Quoting service operations that span more than one repository:
applicant/group intake (with their quotes), the quote aggregate view,
conditional status changes, and the cascade deletes.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from apogee.core.constants import ApplicantStatus, QuoteType
from apogee.core.errors import ConflictError, InvalidStateError, NotFoundError, ValidationError
from apogee.core.logging import get_logger
from apogee.db.models.applicant import Applicant
from apogee.db.models.coverage import Coverage
from apogee.db.models.employee_class import EmployeeClass
from apogee.db.models.group import Group
from apogee.db.models.quote import Quote
from apogee.repositories import applicants as applicant_repository
from apogee.repositories import groups as group_repository
from apogee.repositories import quotes as quote_repository

logger = get_logger(__name__)

INDIVIDUAL_IDENTITY_FIELDS = ("first_name", "last_name", "birthdate", "email")
INDIVIDUAL_ADDRESS_FIELDS = ("address_line_1", "city", "country", "postal_code")
GROUP_EMPLOYEE_FIELDS = ("first_name", "last_name", "birthdate", "class_id")
APPLICANT_REQUIRED_FIELDS = ("first_name", "last_name", "birthdate")


@dataclass
class QuoteDetail:
    quote: Quote
    applicant: Applicant | None = None
    group: Group | None = None
    group_applicants: list[Applicant] = field(default_factory=list)
    employee_classes: list[EmployeeClass] = field(default_factory=list)
    coverages: list[Coverage] = field(default_factory=list)


def _missing(fields: dict[str, Any], names: tuple[str, ...]) -> bool:
    return any(not fields.get(name) for name in names)


async def _class_for_group(db: AsyncSession, class_id: int, group_id: int | None) -> EmployeeClass:
    """Load an employee class; it must belong to ``group_id`` when one is given."""
    employee_class = await group_repository.get_employee_class(db, class_id)
    if employee_class is None:
        raise NotFoundError("Employee class not found", entity="EmployeeClass", entity_id=class_id)
    if group_id is not None and employee_class.group_id != group_id:
        raise ValidationError(
            "Employee class does not belong to this group",
            entity="EmployeeClass",
            entity_id=class_id,
            details={"group_id": group_id, "class_group_id": employee_class.group_id},
        )
    return employee_class


async def create_applicant(
    db: AsyncSession,
    fields: dict[str, Any],
) -> tuple[Applicant, Quote | None]:
    """
    Register an applicant.  Individual applicants get a new "In Progress"
    Individual quote; group employees join an existing group.
    """
    quote_type = fields.get("quote_type")

    if quote_type == QuoteType.INDIVIDUAL:
        if _missing(fields, INDIVIDUAL_IDENTITY_FIELDS):
            raise ValidationError(
                "First name, last name, birthdate, and email are required for individual applicants"
            )
        if _missing(fields, INDIVIDUAL_ADDRESS_FIELDS):
            raise ValidationError(
                "Address line 1, city, country, and postal code are required for individual applicants"
            )
    elif quote_type == QuoteType.GROUP:
        if _missing(fields, GROUP_EMPLOYEE_FIELDS):
            raise ValidationError(
                "First name, last name, birthdate, and class are required for group employees"
            )
        employee_class = await _class_for_group(db, fields["class_id"], fields.get("group_id"))
        fields = {**fields, "group_id": employee_class.group_id}
    else:
        raise ValidationError("Quote type must be Individual or Group")

    applicant = await applicant_repository.create_applicant(
        db,
        **{k: (v if v != "" else None) for k, v in fields.items()},
        status=ApplicantStatus.INCOMPLETE.value,
    )

    quote = None
    if quote_type == QuoteType.INDIVIDUAL:
        quote = await quote_repository.create_quote(
            db,
            quote_type=QuoteType.INDIVIDUAL.value,
            applicant_id=applicant.id,
        )
        logger.info("Individual quote started", applicant_id=applicant.id, quote_id=quote.id)
    else:
        logger.info("Group employee added", applicant_id=applicant.id, group_id=applicant.group_id)
    return applicant, quote


async def update_applicant(db: AsyncSession, applicant_id: int, fields: dict[str, Any]) -> Applicant:
    """
    Partial applicant update.  Name and birthdate cannot be cleared; a new
    class must exist and belong to the applicant's group.
    """
    applicant = await applicant_repository.get_applicant(db, applicant_id)
    if applicant is None:
        raise NotFoundError("Applicant not found", entity="Applicant", entity_id=applicant_id)

    cleared = [name for name in APPLICANT_REQUIRED_FIELDS if name in fields and not fields[name]]
    if cleared:
        raise ValidationError(
            "First name, last name, and birthdate cannot be empty",
            entity="Applicant",
            entity_id=applicant_id,
            details={"fields": cleared},
        )

    class_id = fields.get("class_id")
    if class_id is not None and class_id != applicant.class_id:
        if applicant.group_id is None:
            raise ValidationError(
                "Only group employees can be assigned to an employee class",
                entity="Applicant",
                entity_id=applicant_id,
            )
        await _class_for_group(db, class_id, applicant.group_id)

    if fields.get("status") is not None:
        fields = {**fields, "status": ApplicantStatus(fields["status"]).value}

    applicant = await applicant_repository.update_applicant(db, applicant_id, **fields)
    logger.info("Applicant updated", applicant_id=applicant_id, fields=sorted(fields))
    return applicant


async def create_group(db: AsyncSession, *, group_name: str) -> tuple[Group, Quote]:
    """Create a group together with its "In Progress" Group quote."""
    if not group_name or not group_name.strip():
        raise ValidationError("Group name is required")
    group = await group_repository.create_group(db, group_name=group_name)
    quote = await quote_repository.create_quote(db, quote_type=QuoteType.GROUP.value, group_id=group.id)
    logger.info("Group quote started", group_id=group.id, quote_id=quote.id)
    return group, quote


async def get_quote_or_404(db: AsyncSession, quote_id: int) -> Quote:
    quote = await quote_repository.get_quote(db, quote_id)
    if quote is None:
        raise NotFoundError("Quote not found", entity="Quote", entity_id=quote_id)
    return quote


async def get_quote_detail(db: AsyncSession, quote_id: int) -> QuoteDetail:
    """Assemble the quote aggregate the policy service converts from."""
    quote = await get_quote_or_404(db, quote_id)
    detail = QuoteDetail(quote=quote)

    if quote.applicant_id is not None:
        detail.applicant = await applicant_repository.get_applicant(db, quote.applicant_id)

    if quote.group_id is not None:
        detail.group = await group_repository.get_group(db, quote.group_id)
        detail.group_applicants = await applicant_repository.list_applicants(db, group_id=quote.group_id)
        detail.employee_classes = await group_repository.list_employee_classes(db, group_id=quote.group_id)

    detail.coverages = await quote_repository.list_coverages(db, quote.id)
    return detail


async def update_quote(
    db: AsyncSession,
    quote_id: int,
    *,
    status: str | None = None,
    quote_type: str | None = None,
    expected_status: str | None = None,
) -> Quote:
    """
    Update status/type.  With ``expected_status`` the status change is a
    compare-and-set: it only applies while the quote is still in
    ``expected_status``.
    """
    quote = await get_quote_or_404(db, quote_id)

    if expected_status is not None:
        if status is None:
            raise ValidationError("status is required when expectedStatus is given")
        changed = await quote_repository.transition_status(
            db,
            quote_id,
            expected_status=expected_status,
            new_status=status,
        )
        if not changed:
            logger.warning(
                "Quote status transition refused",
                quote_id=quote_id,
                expected_status=expected_status,
                new_status=status,
                current_status=quote.status,
            )
            raise InvalidStateError(
                f'Quote is not in "{expected_status}" status',
                entity="Quote",
                entity_id=quote_id,
                details={"expected_status": expected_status},
            )
        status = None

    quote = await quote_repository.update_quote(db, quote_id, status=status, type=quote_type)
    logger.info("Quote updated", quote_id=quote_id, status=quote.status, type=quote.type)
    return quote


async def delete_quote(db: AsyncSession, quote_id: int) -> None:
    quote = await get_quote_or_404(db, quote_id)
    await quote_repository.delete_quote_cascade(db, quote)
    logger.info("Quote deleted", quote_id=quote_id, type=quote.type)


async def delete_employee_class(db: AsyncSession, class_id: int) -> None:
    """Delete a class; refused while any applicant is still assigned to it."""
    employee_class = await group_repository.get_employee_class(db, class_id)
    if employee_class is None:
        raise NotFoundError("Employee class not found", entity="EmployeeClass", entity_id=class_id)

    members = await applicant_repository.count_applicants_in_class(db, class_id)
    if members:
        raise ConflictError(
            "Cannot delete class with assigned employees. Remove employees first.",
            entity="EmployeeClass",
            entity_id=class_id,
            details={"applicants": members},
        )

    await group_repository.delete_employee_class(db, employee_class)
    logger.info("Employee class deleted", class_id=class_id, group_id=employee_class.group_id)
