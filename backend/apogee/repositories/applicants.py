"""
Applicant repository — individual applicants and group employees.

Repository rules:
- Pure data-access logic only
- Every function receives AsyncSession explicitly
- Functions flush, but never commit
"""

from __future__ import annotations

from typing import Any

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from apogee.db.models.applicant import Applicant

UPDATABLE_FIELDS = frozenset({
    "first_name",
    "middle_name",
    "last_name",
    "birthdate",
    "phone_number",
    "email",
    "address_line_1",
    "address_line_2",
    "city",
    "state_province",
    "postal_code",
    "country",
    "class_id",
    "status",
})


async def create_applicant(db: AsyncSession, **fields: Any) -> Applicant:
    applicant = Applicant(**fields)
    db.add(applicant)
    await db.flush()
    return applicant


async def get_applicant(db: AsyncSession, applicant_id: int) -> Applicant | None:
    return await db.get(Applicant, applicant_id)


async def list_applicants(
    db: AsyncSession,
    *,
    group_id: int | None = None,
    class_id: int | None = None,
) -> list[Applicant]:
    """List applicants, optionally scoped to a group or an employee class."""
    stmt = select(Applicant).order_by(Applicant.id)
    if group_id is not None:
        stmt = stmt.where(Applicant.group_id == group_id)
    if class_id is not None:
        stmt = stmt.where(Applicant.class_id == class_id)
    result = await db.execute(stmt)
    return list(result.scalars().all())


async def update_applicant(db: AsyncSession, applicant_id: int, **fields: Any) -> Applicant | None:
    """Apply a partial update; keys outside UPDATABLE_FIELDS are ignored."""
    applicant = await get_applicant(db, applicant_id)
    if applicant is None:
        return None
    for key, value in fields.items():
        if key in UPDATABLE_FIELDS:
            setattr(applicant, key, value)
    await db.flush()
    return applicant


async def count_applicants_in_class(db: AsyncSession, class_id: int) -> int:
    stmt = select(func.count()).select_from(Applicant).where(Applicant.class_id == class_id)
    return int(await db.scalar(stmt) or 0)
