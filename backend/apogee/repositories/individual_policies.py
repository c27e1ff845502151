"""
Individual policy repository — the policy row, its coverages and the
full-aggregate cascade delete.

Repository rules:
- Pure data-access logic only
- Every function receives AsyncSession explicitly
- Functions flush, but never commit
"""

from __future__ import annotations

from datetime import date
from typing import Any, Iterable

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from apogee.core.constants import PolicyStatus
from apogee.db.models.beneficiary import Beneficiary
from apogee.db.models.dependent import Dependent
from apogee.db.models.dependent_coverage import DependentCoverage
from apogee.db.models.individual_policy import IndividualPolicy
from apogee.db.models.individual_policy_coverage import IndividualPolicyCoverage
from apogee.db.models.policy_holder import PolicyHolder


async def create_policy(
    db: AsyncSession,
    *,
    policy_number: str,
    source_quote_id: int,
    effective_date: date,
    expiration_date: date | None = None,
    status: str = PolicyStatus.ACTIVE.value,
) -> IndividualPolicy:
    policy = IndividualPolicy(
        policy_number=policy_number,
        source_quote_id=source_quote_id,
        effective_date=effective_date,
        expiration_date=expiration_date,
        status=status,
    )
    db.add(policy)
    await db.flush()
    return policy


async def get_policy(db: AsyncSession, policy_id: int) -> IndividualPolicy | None:
    return await db.get(IndividualPolicy, policy_id)


async def list_policies(db: AsyncSession, *, status: str | None = None) -> list[IndividualPolicy]:
    stmt = select(IndividualPolicy).order_by(IndividualPolicy.created_at.desc())
    if status is not None:
        stmt = stmt.where(IndividualPolicy.status == status)
    result = await db.execute(stmt)
    return list(result.scalars().all())


async def update_policy(db: AsyncSession, policy_id: int, **fields: Any) -> IndividualPolicy | None:
    policy = await get_policy(db, policy_id)
    if policy is None:
        return None
    for key in ("status", "expiration_date"):
        if key in fields:
            setattr(policy, key, fields[key])
    await db.flush()
    return policy


# ── Coverages ─────────────────────────────────

async def add_coverages(
    db: AsyncSession,
    policy_id: int,
    coverages: Iterable[dict[str, Any]],
) -> list[IndividualPolicyCoverage]:
    """Bulk-insert coverage rows (product_type, details, premium) for a policy."""
    rows = [
        IndividualPolicyCoverage(
            policy_id=policy_id,
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


async def list_coverages(db: AsyncSession, policy_id: int) -> list[IndividualPolicyCoverage]:
    stmt = (
        select(IndividualPolicyCoverage)
        .where(IndividualPolicyCoverage.policy_id == policy_id)
        .order_by(IndividualPolicyCoverage.id)
    )
    result = await db.execute(stmt)
    return list(result.scalars().all())


# ── Cascade delete ────────────────────────────

async def delete_policy_cascade(db: AsyncSession, policy: IndividualPolicy) -> None:
    """
    Delete an individual policy aggregate, leaves first:
    dependent coverages, dependents, beneficiaries, holder, policy
    coverages, policy.
    """
    holder_ids = list(
        (await db.scalars(select(PolicyHolder.id).where(PolicyHolder.policy_id == policy.id))).all()
    )

    if holder_ids:
        dependent_ids = list(
            (
                await db.scalars(
                    select(Dependent.id).where(Dependent.policy_holder_id.in_(holder_ids))
                )
            ).all()
        )
        if dependent_ids:
            await db.execute(
                delete(DependentCoverage).where(DependentCoverage.dependent_id.in_(dependent_ids))
            )
            await db.execute(delete(Dependent).where(Dependent.id.in_(dependent_ids)))
        await db.execute(delete(Beneficiary).where(Beneficiary.policy_holder_id.in_(holder_ids)))
        await db.execute(delete(PolicyHolder).where(PolicyHolder.id.in_(holder_ids)))

    await db.execute(
        delete(IndividualPolicyCoverage).where(IndividualPolicyCoverage.policy_id == policy.id)
    )
    await db.execute(delete(IndividualPolicy).where(IndividualPolicy.id == policy.id))
    await db.flush()
