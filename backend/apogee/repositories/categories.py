"""
Benefit category repository.

Repository rules:
- Pure data-access logic only
- Every function receives AsyncSession explicitly
- Functions flush, but never commit
"""

from __future__ import annotations

from typing import Any, Iterable

from sqlalchemy import select
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.ext.asyncio import AsyncSession

from apogee.db.models.benefit_category import BenefitCategory

UPDATABLE_FIELDS = frozenset({"name", "description", "icon", "applies_to", "display_order", "is_active"})


async def list_categories(
    db: AsyncSession,
    *,
    active_only: bool = True,
    benefit_type: str | None = None,
) -> list[BenefitCategory]:
    """List categories ordered by display_order, then name."""
    stmt = select(BenefitCategory).order_by(BenefitCategory.display_order, BenefitCategory.name)
    if active_only:
        stmt = stmt.where(BenefitCategory.is_active.is_(True))
    result = await db.execute(stmt)
    categories = list(result.scalars().all())
    if benefit_type is not None:
        # applies_to is a small JSON array; filter after load to stay dialect-neutral.
        categories = [c for c in categories if benefit_type in (c.applies_to or [])]
    return categories


async def get_category(db: AsyncSession, category_id: int) -> BenefitCategory | None:
    return await db.get(BenefitCategory, category_id)


async def create_category(db: AsyncSession, **fields: Any) -> BenefitCategory:
    """Insert a category. A duplicate name raises IntegrityError on flush."""
    category = BenefitCategory(**fields)
    db.add(category)
    await db.flush()
    return category


async def update_category(db: AsyncSession, category_id: int, **fields: Any) -> BenefitCategory | None:
    category = await get_category(db, category_id)
    if category is None:
        return None
    for key, value in fields.items():
        if key in UPDATABLE_FIELDS:
            setattr(category, key, value)
    await db.flush()
    return category


async def soft_delete_category(db: AsyncSession, category_id: int) -> BenefitCategory | None:
    """Flag a category inactive instead of removing the row."""
    category = await get_category(db, category_id)
    if category is None:
        return None
    category.is_active = False
    await db.flush()
    return category


async def insert_categories_if_missing(
    db: AsyncSession,
    rows: Iterable[dict[str, Any]],
) -> list[str]:
    """
    Insert each category unless one with the same name exists.

    Returns the names that were actually inserted.
    """
    inserted: list[str] = []
    for row in rows:
        stmt = (
            pg_insert(BenefitCategory)
            .values(**row)
            .on_conflict_do_nothing(index_elements=[BenefitCategory.name])
            .returning(BenefitCategory.name)
        )
        name = await db.scalar(stmt)
        if name is not None:
            inserted.append(name)
    await db.flush()
    return inserted
