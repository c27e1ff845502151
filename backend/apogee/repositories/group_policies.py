"""
Group policy repository — the policy row, its classes, members and class
coverages, and the aggregate cascade delete.

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
from apogee.db.models.class_coverage import ClassCoverage
from apogee.db.models.group_member import GroupMember
from apogee.db.models.group_policy import GroupPolicy
from apogee.db.models.policy_class import PolicyClass


async def create_policy(
    db: AsyncSession,
    *,
    policy_number: str,
    source_quote_id: int,
    source_group_id: int | None,
    group_name: str,
    effective_date: date,
    expiration_date: date | None = None,
    status: str = PolicyStatus.ACTIVE.value,
) -> GroupPolicy:
    policy = GroupPolicy(
        policy_number=policy_number,
        source_quote_id=source_quote_id,
        source_group_id=source_group_id,
        group_name=group_name,
        effective_date=effective_date,
        expiration_date=expiration_date,
        status=status,
    )
    db.add(policy)
    await db.flush()
    return policy


async def get_policy(db: AsyncSession, policy_id: int) -> GroupPolicy | None:
    return await db.get(GroupPolicy, policy_id)


async def list_policies(db: AsyncSession, *, status: str | None = None) -> list[GroupPolicy]:
    stmt = select(GroupPolicy).order_by(GroupPolicy.created_at.desc())
    if status is not None:
        stmt = stmt.where(GroupPolicy.status == status)
    result = await db.execute(stmt)
    return list(result.scalars().all())


async def update_policy(db: AsyncSession, policy_id: int, **fields: Any) -> GroupPolicy | None:
    policy = await get_policy(db, policy_id)
    if policy is None:
        return None
    for key in ("status", "expiration_date", "group_name"):
        if key in fields:
            setattr(policy, key, fields[key])
    await db.flush()
    return policy


# ── Classes, members, coverages ───────────────

async def create_class(
    db: AsyncSession,
    policy_id: int,
    *,
    class_name: str,
    description: str | None = None,
) -> PolicyClass:
    policy_class = PolicyClass(
        group_policy_id=policy_id,
        class_name=class_name,
        description=description,
    )
    db.add(policy_class)
    await db.flush()
    return policy_class


async def add_members(
    db: AsyncSession,
    class_id: int,
    members: Iterable[dict[str, Any]],
) -> list[GroupMember]:
    rows = [GroupMember(policy_class_id=class_id, **m) for m in members]
    if rows:
        db.add_all(rows)
        await db.flush()
    return rows


async def add_class_coverages(
    db: AsyncSession,
    class_id: int,
    coverages: Iterable[dict[str, Any]],
) -> list[ClassCoverage]:
    rows = [
        ClassCoverage(
            policy_class_id=class_id,
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


async def list_classes(db: AsyncSession, policy_id: int) -> list[PolicyClass]:
    stmt = select(PolicyClass).where(PolicyClass.group_policy_id == policy_id).order_by(PolicyClass.id)
    result = await db.execute(stmt)
    return list(result.scalars().all())


async def list_members(db: AsyncSession, class_ids: list[int]) -> list[GroupMember]:
    if not class_ids:
        return []
    stmt = (
        select(GroupMember)
        .where(GroupMember.policy_class_id.in_(class_ids))
        .order_by(GroupMember.id)
    )
    result = await db.execute(stmt)
    return list(result.scalars().all())


async def list_class_coverages(db: AsyncSession, class_ids: list[int]) -> list[ClassCoverage]:
    if not class_ids:
        return []
    stmt = (
        select(ClassCoverage)
        .where(ClassCoverage.policy_class_id.in_(class_ids))
        .order_by(ClassCoverage.id)
    )
    result = await db.execute(stmt)
    return list(result.scalars().all())


# ── Cascade delete ────────────────────────────

async def delete_policy_cascade(db: AsyncSession, policy: GroupPolicy) -> None:
    """
    Delete a group policy aggregate: per class its coverages then its
    members, then the classes, then the policy.
    """
    class_ids = list(
        (await db.scalars(select(PolicyClass.id).where(PolicyClass.group_policy_id == policy.id))).all()
    )
    for class_id in class_ids:
        await db.execute(delete(ClassCoverage).where(ClassCoverage.policy_class_id == class_id))
        await db.execute(delete(GroupMember).where(GroupMember.policy_class_id == class_id))

    await db.execute(delete(PolicyClass).where(PolicyClass.group_policy_id == policy.id))
    await db.execute(delete(GroupPolicy).where(GroupPolicy.id == policy.id))
    await db.flush()
