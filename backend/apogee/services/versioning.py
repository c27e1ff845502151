"""
Benefit template versioning.

Each version of a template is its own row; rows of one logical template
share ``template_id``.  Lifecycle is draft → active → archived:

- a draft is edited in place (version unchanged)
- editing an active or archived row forks a new row with a bumped
  version ("minor" → +0.1, "major" → +1.0 with minor reset) and archives
  the row it came from when that row was active
- at most one row per template_id is active; every path that activates a
  row archives the other active rows first

The version arithmetic is pure (``bump_version``, ``plan_revision``,
``latest_versions``); the async functions apply it through the
repositories.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from typing import Any, Callable, Iterable, TypeVar

from sqlalchemy.ext.asyncio import AsyncSession

from apogee.core.constants import TemplateStatus, VersionBump
from apogee.core.errors import NotFoundError, ValidationError
from apogee.core.logging import get_logger
from apogee.db.models.benefit_category import BenefitCategory
from apogee.db.models.benefit_template import BenefitTemplate
from apogee.repositories import categories as category_repository
from apogee.repositories import templates as template_repository
from apogee.services.field_schema import check_field_schema

logger = get_logger(__name__)

T = TypeVar("T")

INITIAL_MAJOR = 1
INITIAL_MINOR = 0

# Fields a revision may change; category and type are fixed per template.
REVISABLE_FIELDS = ("name", "description", "field_schema", "default_values", "status")


def format_version(major: int, minor: int) -> str:
    return f"{major}.{minor}"


def bump_version(major: int, minor: int, bump: str = VersionBump.MINOR) -> tuple[int, int]:
    """Next (major, minor) for a fork. Anything other than "major" is a minor bump."""
    if bump == VersionBump.MAJOR:
        return major + 1, 0
    return major, minor + 1


def version_key(template: Any) -> tuple[int, int]:
    return (template.major_version, template.minor_version)


def latest_versions(
    rows: Iterable[T],
    *,
    key: Callable[[T], Any] = lambda row: row,
) -> list[T]:
    """
    Keep one row per template_id: the one with the greatest
    (major_version, minor_version).  Output follows the order in which
    each template_id was first seen.
    """
    best: dict[Any, T] = {}
    for row in rows:
        template = key(row)
        current = best.get(template.template_id)
        if current is None or version_key(template) > version_key(key(current)):
            best[template.template_id] = row
    return list(best.values())


@dataclass
class RevisionPlan:
    """What ``revise_template`` will write for a given existing row and patch."""

    in_place: bool
    archive_existing: bool
    major: int
    minor: int
    values: dict[str, Any] = field(default_factory=dict)

    @property
    def version(self) -> str:
        return format_version(self.major, self.minor)

    @property
    def activates(self) -> bool:
        return self.values.get("status") == TemplateStatus.ACTIVE


def plan_revision(
    existing: BenefitTemplate,
    patch: dict[str, Any],
    bump: str = VersionBump.MINOR,
) -> RevisionPlan:
    """
    Decide between an in-place edit (draft) and a new version (otherwise).

    For a draft, ``values`` holds only the patched fields.  For a fork it
    holds the full column set of the new row: patched values merged over
    the existing row, status defaulting to draft.
    """
    provided = {k: v for k, v in patch.items() if k in REVISABLE_FIELDS}

    if existing.status == TemplateStatus.DRAFT:
        values = {
            k: v for k, v in provided.items()
            if v is not None or k == "description"
        }
        return RevisionPlan(
            in_place=True,
            archive_existing=False,
            major=existing.major_version,
            minor=existing.minor_version,
            values=values,
        )

    major, minor = bump_version(existing.major_version, existing.minor_version, bump)

    def pick(name: str) -> Any:
        value = provided.get(name)
        return value if value is not None else getattr(existing, name)

    values = {
        "template_id": existing.template_id,
        "category_id": existing.category_id,
        "type": existing.type,
        "name": pick("name"),
        "description": pick("description"),
        "version": format_version(major, minor),
        "major_version": major,
        "minor_version": minor,
        "field_schema": pick("field_schema"),
        "default_values": pick("default_values"),
        "status": provided.get("status") or TemplateStatus.DRAFT.value,
    }
    return RevisionPlan(
        in_place=False,
        archive_existing=existing.status == TemplateStatus.ACTIVE,
        major=major,
        minor=minor,
        values=values,
    )


# ── Operations ────────────────────────────────

async def create_template(
    db: AsyncSession,
    *,
    category_id: int,
    benefit_type: str,
    name: str,
    description: str | None = None,
    field_schema: dict[str, Any] | None = None,
    default_values: dict[str, Any] | None = None,
    status: str = TemplateStatus.DRAFT.value,
) -> BenefitTemplate:
    """Create version 1.0 of a new logical template."""
    category = await category_repository.get_category(db, category_id)
    if category is None:
        raise NotFoundError("Category not found", entity="BenefitCategory", entity_id=category_id)

    if benefit_type not in (category.applies_to or []):
        raise ValidationError(
            f'Category "{category.name}" does not support {benefit_type} benefits',
            entity="BenefitCategory",
            entity_id=category_id,
        )

    template = await template_repository.insert_template(
        db,
        template_id=uuid.uuid4(),
        category_id=category_id,
        type=benefit_type,
        name=name,
        description=description,
        version=format_version(INITIAL_MAJOR, INITIAL_MINOR),
        major_version=INITIAL_MAJOR,
        minor_version=INITIAL_MINOR,
        field_schema=check_field_schema(field_schema),
        default_values=default_values or {},
        status=status,
    )
    logger.info(
        "Template created",
        template_db_id=template.id,
        template_id=str(template.template_id),
        category=category.name,
        type=benefit_type,
        status=status,
    )
    return template


async def set_template_status(
    db: AsyncSession,
    template_db_id: int,
    status: str,
) -> BenefitTemplate:
    """Change one row's status; activating archives the template's other active rows."""
    template = await template_repository.get_template(db, template_db_id)
    if template is None:
        raise NotFoundError("Template not found", entity="BenefitTemplate", entity_id=template_db_id)

    archived = 0
    if status == TemplateStatus.ACTIVE:
        archived = await template_repository.archive_active_versions(
            db, template.template_id, exclude_id=template.id
        )

    template = await template_repository.update_template_fields(db, template, status=status)
    logger.info(
        "Template status changed",
        template_db_id=template.id,
        template_id=str(template.template_id),
        status=status,
        archived_versions=archived,
    )
    return template


async def revise_template(
    db: AsyncSession,
    template_db_id: int,
    patch: dict[str, Any],
    version_bump: str = VersionBump.MINOR,
) -> tuple[BenefitTemplate, bool]:
    """
    Edit a template.  Returns ``(row, created)`` where ``created`` is True
    when a new version row was inserted.
    """
    existing = await template_repository.get_template(db, template_db_id)
    if existing is None:
        raise NotFoundError("Template not found", entity="BenefitTemplate", entity_id=template_db_id)

    if patch.get("field_schema") is not None:
        patch = {**patch, "field_schema": check_field_schema(patch["field_schema"])}

    plan = plan_revision(existing, patch, version_bump)

    if plan.in_place:
        in_place = {k: v for k, v in plan.values.items() if k != "status"}
        template = await template_repository.update_template_fields(db, existing, **in_place)
        new_status = plan.values.get("status")
        if new_status is not None and new_status != template.status:
            template = await set_template_status(db, template.id, new_status)
        logger.info(
            "Draft template updated",
            template_db_id=template.id,
            fields=sorted(plan.values),
        )
        return template, False

    if plan.archive_existing:
        await template_repository.update_template_fields(
            db, existing, status=TemplateStatus.ARCHIVED.value
        )
    if plan.activates:
        await template_repository.archive_active_versions(db, existing.template_id)

    template = await template_repository.insert_template(db, **plan.values)
    logger.info(
        "Template version created",
        template_db_id=template.id,
        template_id=str(template.template_id),
        from_version=existing.version,
        version=plan.version,
        bump=str(version_bump),
        status=template.status,
    )
    return template, True


async def list_templates(
    db: AsyncSession,
    *,
    benefit_type: str | None = None,
    category_id: int | None = None,
    status: str | None = None,
    latest_only: bool = False,
) -> list[tuple[BenefitTemplate, BenefitCategory | None]]:
    rows = await template_repository.list_templates(
        db,
        benefit_type=benefit_type,
        category_id=category_id,
        status=status,
    )
    if latest_only:
        rows = latest_versions(rows, key=lambda row: row[0])
    return rows


async def list_template_versions(
    db: AsyncSession,
    template_db_id: int,
) -> tuple[BenefitTemplate, list[BenefitTemplate]]:
    """Return the requested row and every version sharing its template_id, newest first."""
    template = await template_repository.get_template(db, template_db_id)
    if template is None:
        raise NotFoundError("Template not found", entity="BenefitTemplate", entity_id=template_db_id)
    versions = await template_repository.list_versions(db, template.template_id)
    return template, versions
