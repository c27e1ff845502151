"""
Policy holder repository — holders, their dependents (with dependent
coverages) and beneficiaries.

Repository rules:
- Pure data-access logic only
- Every function receives AsyncSession explicitly
- Functions flush, but never commit
"""

from __future__ import annotations

from typing import Any, Iterable

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from apogee.db.models.beneficiary import Beneficiary
from apogee.db.models.dependent import Dependent
from apogee.db.models.dependent_coverage import DependentCoverage
from apogee.db.models.policy_holder import PolicyHolder

HOLDER_UPDATABLE_FIELDS = frozenset({
    "first_name",
    "middle_name",
    "last_name",
    "email",
    "birthdate",
    "phone_number",
    "address_line_1",
    "address_line_2",
    "city",
    "state_province",
    "postal_code",
    "country",
})


async def create_holder(db: AsyncSession, policy_id: int, **fields: Any) -> PolicyHolder:
    holder = PolicyHolder(policy_id=policy_id, **fields)
    db.add(holder)
    await db.flush()
    return holder


async def get_holder(db: AsyncSession, holder_id: int) -> PolicyHolder | None:
    return await db.get(PolicyHolder, holder_id)


async def get_holder_for_policy(db: AsyncSession, policy_id: int) -> PolicyHolder | None:
    stmt = select(PolicyHolder).where(PolicyHolder.policy_id == policy_id).order_by(PolicyHolder.id)
    result = await db.execute(stmt)
    return result.scalars().first()


async def update_holder(db: AsyncSession, holder_id: int, **fields: Any) -> PolicyHolder | None:
    holder = await get_holder(db, holder_id)
    if holder is None:
        return None
    for key, value in fields.items():
        if key in HOLDER_UPDATABLE_FIELDS:
            setattr(holder, key, value)
    await db.flush()
    return holder


# ── Dependents ────────────────────────────────

async def add_dependent(db: AsyncSession, holder_id: int, **fields: Any) -> Dependent:
    dependent = Dependent(policy_holder_id=holder_id, **fields)
    db.add(dependent)
    await db.flush()
    return dependent


async def get_dependent(db: AsyncSession, dependent_id: int) -> Dependent | None:
    return await db.get(Dependent, dependent_id)


async def list_dependents(db: AsyncSession, holder_id: int) -> list[Dependent]:
    stmt = select(Dependent).where(Dependent.policy_holder_id == holder_id).order_by(Dependent.id)
    result = await db.execute(stmt)
    return list(result.scalars().all())


async def add_dependent_coverages(
    db: AsyncSession,
    dependent_id: int,
    coverages: Iterable[dict[str, Any]],
) -> list[DependentCoverage]:
    rows = [
        DependentCoverage(
            dependent_id=dependent_id,
            product_type=c["product_type"],
            details=c.get("details"),
            premium=c.get("premium"),
        )
        for c in coverages
    ]
    if rows:
        db.add_all(rows)
        await db.flush()
    return rows


async def list_dependent_coverages(
    db: AsyncSession,
    dependent_ids: list[int],
) -> list[DependentCoverage]:
    if not dependent_ids:
        return []
    stmt = (
        select(DependentCoverage)
        .where(DependentCoverage.dependent_id.in_(dependent_ids))
        .order_by(DependentCoverage.id)
    )
    result = await db.execute(stmt)
    return list(result.scalars().all())


async def delete_dependent(db: AsyncSession, dependent_id: int) -> None:
    """Remove a dependent and its coverages (coverages first)."""
    await db.execute(delete(DependentCoverage).where(DependentCoverage.dependent_id == dependent_id))
    await db.execute(delete(Dependent).where(Dependent.id == dependent_id))
    await db.flush()


# ── Beneficiaries ─────────────────────────────

async def add_beneficiary(db: AsyncSession, holder_id: int, **fields: Any) -> Beneficiary:
    beneficiary = Beneficiary(policy_holder_id=holder_id, **fields)
    db.add(beneficiary)
    await db.flush()
    return beneficiary


async def get_beneficiary(db: AsyncSession, beneficiary_id: int) -> Beneficiary | None:
    return await db.get(Beneficiary, beneficiary_id)


async def list_beneficiaries(db: AsyncSession, holder_id: int) -> list[Beneficiary]:
    stmt = (
        select(Beneficiary)
        .where(Beneficiary.policy_holder_id == holder_id)
        .order_by(Beneficiary.id)
    )
    result = await db.execute(stmt)
    return list(result.scalars().all())


async def delete_beneficiary(db: AsyncSession, beneficiary: Beneficiary) -> None:
    await db.delete(beneficiary)
    await db.flush()
