"""
Benefit template repository — every row is one template version.

Repository rules:
- Pure data-access logic only
- Every function receives AsyncSession explicitly
- Functions flush, but never commit
"""

from __future__ import annotations

import uuid
from typing import Any

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from apogee.core.constants import TemplateStatus
from apogee.db.models.benefit_category import BenefitCategory
from apogee.db.models.benefit_template import BenefitTemplate


async def insert_template(db: AsyncSession, **fields: Any) -> BenefitTemplate:
    template = BenefitTemplate(**fields)
    db.add(template)
    await db.flush()
    return template


async def get_template(db: AsyncSession, template_db_id: int) -> BenefitTemplate | None:
    return await db.get(BenefitTemplate, template_db_id)


async def get_template_with_category(
    db: AsyncSession,
    template_db_id: int,
) -> tuple[BenefitTemplate, BenefitCategory | None] | None:
    """Fetch a template row together with its category (if still present)."""
    stmt = (
        select(BenefitTemplate, BenefitCategory)
        .outerjoin(BenefitCategory, BenefitCategory.id == BenefitTemplate.category_id)
        .where(BenefitTemplate.id == template_db_id)
    )
    row = (await db.execute(stmt)).first()
    if row is None:
        return None
    return row[0], row[1]


async def list_templates(
    db: AsyncSession,
    *,
    benefit_type: str | None = None,
    category_id: int | None = None,
    status: str | None = None,
) -> list[tuple[BenefitTemplate, BenefitCategory | None]]:
    """List template rows with their category, newest first."""
    stmt = (
        select(BenefitTemplate, BenefitCategory)
        .outerjoin(BenefitCategory, BenefitCategory.id == BenefitTemplate.category_id)
        .order_by(BenefitTemplate.created_at.desc())
    )
    if benefit_type is not None:
        stmt = stmt.where(BenefitTemplate.type == benefit_type)
    if category_id is not None:
        stmt = stmt.where(BenefitTemplate.category_id == category_id)
    if status is not None:
        stmt = stmt.where(BenefitTemplate.status == status)
    result = await db.execute(stmt)
    return [(row[0], row[1]) for row in result.all()]


async def list_versions(db: AsyncSession, template_id: uuid.UUID) -> list[BenefitTemplate]:
    """All rows sharing ``template_id``, highest version first."""
    stmt = (
        select(BenefitTemplate)
        .where(BenefitTemplate.template_id == template_id)
        .order_by(BenefitTemplate.major_version.desc(), BenefitTemplate.minor_version.desc())
    )
    result = await db.execute(stmt)
    return list(result.scalars().all())


async def update_template_fields(
    db: AsyncSession,
    template: BenefitTemplate,
    **fields: Any,
) -> BenefitTemplate:
    for key, value in fields.items():
        setattr(template, key, value)
    await db.flush()
    return template


async def archive_active_versions(
    db: AsyncSession,
    template_id: uuid.UUID,
    *,
    exclude_id: int | None = None,
) -> int:
    """Flip every active row of ``template_id`` (except ``exclude_id``) to archived."""
    stmt = update(BenefitTemplate).where(
        BenefitTemplate.template_id == template_id,
        BenefitTemplate.status == TemplateStatus.ACTIVE.value,
    )
    if exclude_id is not None:
        stmt = stmt.where(BenefitTemplate.id != exclude_id)
    stmt = stmt.values(status=TemplateStatus.ARCHIVED.value).execution_options(
        synchronize_session="fetch"
    )
    result = await db.execute(stmt)
    await db.flush()
    return result.rowcount or 0
