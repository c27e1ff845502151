"""Benefit category operations: create/update with duplicate-name mapping, seeding."""

from __future__ import annotations

from typing import Any

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from apogee.core.constants import BenefitType
from apogee.core.errors import ConflictError, NotFoundError
from apogee.core.logging import get_logger
from apogee.db.models.benefit_category import BenefitCategory
from apogee.repositories import categories as category_repository

logger = get_logger(__name__)

DUPLICATE_NAME_MESSAGE = "A category with this name already exists"
DEFAULT_APPLIES_TO = [BenefitType.GROUP.value, BenefitType.INDIVIDUAL.value]

STANDARD_CATEGORIES: list[dict[str, Any]] = [
    {
        "name": "Extended Health",
        "description": "Extended health care coverage including prescription drugs, paramedical services, and more",
        "icon": "🏥",
        "applies_to": ["group"],
        "display_order": 1,
    },
    {
        "name": "Dental",
        "description": "Dental care coverage including preventive, basic, and major services",
        "icon": "🦷",
        "applies_to": ["group"],
        "display_order": 2,
    },
    {
        "name": "Vision",
        "description": "Vision care coverage including eye exams, glasses, and contact lenses",
        "icon": "👓",
        "applies_to": ["group"],
        "display_order": 3,
    },
    {
        "name": "Life Insurance",
        "description": "Life insurance and accidental death coverage",
        "icon": "🛡️",
        "applies_to": ["group", "individual"],
        "display_order": 4,
    },
    {
        "name": "Disability",
        "description": "Short-term and long-term disability coverage",
        "icon": "🩼",
        "applies_to": ["group"],
        "display_order": 5,
    },
    {
        "name": "Auto Insurance",
        "description": "Vehicle insurance coverage including liability, collision, and comprehensive",
        "icon": "🚗",
        "applies_to": ["individual"],
        "display_order": 6,
    },
    {
        "name": "Home Insurance",
        "description": "Property insurance for homes including dwelling, contents, and liability",
        "icon": "🏠",
        "applies_to": ["individual"],
        "display_order": 7,
    },
    {
        "name": "Boat Insurance",
        "description": "Marine insurance for boats and watercraft",
        "icon": "🚤",
        "applies_to": ["individual"],
        "display_order": 8,
    },
    {
        "name": "Travel Insurance",
        "description": "Travel medical and trip cancellation coverage",
        "icon": "✈️",
        "applies_to": ["group", "individual"],
        "display_order": 9,
    },
    {
        "name": "Critical Illness",
        "description": "Lump sum payment upon diagnosis of covered critical illness",
        "icon": "❤️‍🩹",
        "applies_to": ["group", "individual"],
        "display_order": 10,
    },
]


async def create_category(
    db: AsyncSession,
    *,
    name: str,
    description: str | None = None,
    icon: str | None = None,
    applies_to: list[str] | None = None,
    display_order: int = 0,
) -> BenefitCategory:
    try:
        category = await category_repository.create_category(
            db,
            name=name.strip(),
            description=description,
            icon=icon,
            applies_to=applies_to or list(DEFAULT_APPLIES_TO),
            display_order=display_order,
            is_active=True,
        )
    except IntegrityError as exc:
        raise ConflictError(DUPLICATE_NAME_MESSAGE, entity="BenefitCategory") from exc
    logger.info("Category created", category_id=category.id, name=category.name)
    return category


async def update_category(db: AsyncSession, category_id: int, **fields: Any) -> BenefitCategory:
    try:
        category = await category_repository.update_category(db, category_id, **fields)
    except IntegrityError as exc:
        raise ConflictError(DUPLICATE_NAME_MESSAGE, entity="BenefitCategory", entity_id=category_id) from exc
    if category is None:
        raise NotFoundError("Category not found", entity="BenefitCategory", entity_id=category_id)
    return category


async def seed_standard_categories(db: AsyncSession) -> list[dict[str, str]]:
    """Insert the standard categories that are missing; existing names are left alone."""
    inserted = set(
        await category_repository.insert_categories_if_missing(
            db,
            ({**row, "is_active": True} for row in STANDARD_CATEGORIES),
        )
    )
    results = [
        {"name": row["name"], "status": "created" if row["name"] in inserted else "already exists"}
        for row in STANDARD_CATEGORIES
    ]
    logger.info("Categories seeded", created=len(inserted), total=len(STANDARD_CATEGORIES))
    return results
