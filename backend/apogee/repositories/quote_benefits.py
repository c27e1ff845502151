"""
QuoteBenefit repository — template snapshots attached to quotes.

Repository rules:
- Pure data-access logic only
- Every function receives AsyncSession explicitly
- Functions flush, but never commit
"""

from __future__ import annotations

from typing import Any

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from apogee.db.models.quote_benefit import QuoteBenefit


async def create_quote_benefit(db: AsyncSession, **fields: Any) -> QuoteBenefit:
    benefit = QuoteBenefit(**fields)
    db.add(benefit)
    await db.flush()
    return benefit


async def get_quote_benefit(db: AsyncSession, benefit_id: int) -> QuoteBenefit | None:
    return await db.get(QuoteBenefit, benefit_id)


async def list_quote_benefits(db: AsyncSession, quote_id: int) -> list[QuoteBenefit]:
    stmt = (
        select(QuoteBenefit)
        .where(QuoteBenefit.quote_id == quote_id)
        .order_by(QuoteBenefit.template_name, QuoteBenefit.instance_number)
    )
    result = await db.execute(stmt)
    return list(result.scalars().all())


async def count_template_instances(db: AsyncSession, quote_id: int, template_uuid: str) -> int:
    """How many benefits on this quote already come from ``template_uuid``."""
    stmt = (
        select(func.count())
        .select_from(QuoteBenefit)
        .where(QuoteBenefit.quote_id == quote_id, QuoteBenefit.template_uuid == template_uuid)
    )
    return int(await db.scalar(stmt) or 0)


async def update_configured_values(
    db: AsyncSession,
    benefit: QuoteBenefit,
    configured_values: dict[str, Any],
) -> QuoteBenefit:
    benefit.configured_values = configured_values
    await db.flush()
    return benefit


async def delete_quote_benefit(db: AsyncSession, benefit: QuoteBenefit) -> None:
    await db.delete(benefit)
    await db.flush()
