"""
Attach configured benefit templates to Individual quotes.

The template is fetched from the Benefit Designer once, at attach time,
and its name/version/category/field schema are copied onto the
QuoteBenefit row.  Later edits re-validate against that stored copy,
never against the live template.
"""

from __future__ import annotations

from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from apogee.clients.benefit_designer import BenefitDesignerClient
from apogee.core.constants import QuoteType
from apogee.core.errors import NotFoundError, ValidationError
from apogee.core.logging import get_logger
from apogee.db.models.quote_benefit import QuoteBenefit
from apogee.repositories import quote_benefits as benefit_repository
from apogee.services.field_schema import ensure_valid_values, parse_field_schema
from apogee.services.quotes import get_quote_or_404

logger = get_logger(__name__)


async def attach_benefit(
    db: AsyncSession,
    designer: BenefitDesignerClient,
    *,
    quote_id: int,
    template_db_id: int,
    configured_values: dict[str, Any] | None = None,
) -> QuoteBenefit:
    quote = await get_quote_or_404(db, quote_id)
    if quote.type != QuoteType.INDIVIDUAL:
        raise ValidationError(
            "Benefits can only be attached to Individual quotes",
            entity="Quote",
            entity_id=quote_id,
        )

    template = await designer.get_template(template_db_id)
    schema = parse_field_schema(template.get("fieldSchema"))
    values = configured_values if configured_values is not None else dict(template.get("defaultValues") or {})
    ensure_valid_values(schema, values)

    template_uuid = str(template["templateId"])
    existing = await benefit_repository.count_template_instances(db, quote_id, template_uuid)

    benefit = await benefit_repository.create_quote_benefit(
        db,
        quote_id=quote_id,
        template_db_id=template["id"],
        template_uuid=template_uuid,
        template_name=template["name"],
        template_version=template["version"],
        category_name=template.get("categoryName") or "",
        category_icon=template.get("categoryIcon"),
        field_schema=template.get("fieldSchema") or {"fields": []},
        configured_values=values,
        instance_number=existing + 1,
    )
    logger.info(
        "Benefit attached",
        quote_id=quote_id,
        benefit_id=benefit.id,
        template_uuid=template_uuid,
        template_version=benefit.template_version,
        instance_number=benefit.instance_number,
    )
    return benefit


async def get_benefit_or_404(db: AsyncSession, benefit_id: int) -> QuoteBenefit:
    benefit = await benefit_repository.get_quote_benefit(db, benefit_id)
    if benefit is None:
        raise NotFoundError("Quote benefit not found", entity="QuoteBenefit", entity_id=benefit_id)
    return benefit


async def update_benefit_values(
    db: AsyncSession,
    benefit_id: int,
    configured_values: dict[str, Any],
) -> QuoteBenefit:
    """Replace configured values after validating them against the stored snapshot."""
    benefit = await get_benefit_or_404(db, benefit_id)
    ensure_valid_values(parse_field_schema(benefit.field_schema), configured_values)
    benefit = await benefit_repository.update_configured_values(db, benefit, configured_values)
    logger.info("Benefit values updated", benefit_id=benefit_id, quote_id=benefit.quote_id)
    return benefit


async def remove_benefit(db: AsyncSession, benefit_id: int) -> None:
    benefit = await get_benefit_or_404(db, benefit_id)
    await benefit_repository.delete_quote_benefit(db, benefit)
    logger.info("Benefit removed", benefit_id=benefit_id, quote_id=benefit.quote_id)
