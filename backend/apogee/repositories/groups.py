"""
Group and employee-class repository.

Repository rules:
- Pure data-access logic only
- Every function receives AsyncSession explicitly
- Functions flush, but never commit
"""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from apogee.db.models.employee_class import EmployeeClass
from apogee.db.models.group import Group


async def create_group(db: AsyncSession, *, group_name: str) -> Group:
    group = Group(group_name=group_name.strip())
    db.add(group)
    await db.flush()
    return group


async def get_group(db: AsyncSession, group_id: int) -> Group | None:
    return await db.get(Group, group_id)


async def rename_group(db: AsyncSession, group_id: int, group_name: str) -> Group | None:
    group = await get_group(db, group_id)
    if group is None:
        return None
    group.group_name = group_name.strip()
    await db.flush()
    return group


# ── Employee classes ──────────────────────────

async def create_employee_class(
    db: AsyncSession,
    *,
    group_id: int,
    class_name: str,
    description: str | None = None,
) -> EmployeeClass:
    employee_class = EmployeeClass(
        group_id=group_id,
        class_name=class_name.strip(),
        description=description,
    )
    db.add(employee_class)
    await db.flush()
    return employee_class


async def get_employee_class(db: AsyncSession, class_id: int) -> EmployeeClass | None:
    return await db.get(EmployeeClass, class_id)


async def list_employee_classes(
    db: AsyncSession,
    *,
    group_id: int | None = None,
) -> list[EmployeeClass]:
    stmt = select(EmployeeClass).order_by(EmployeeClass.id)
    if group_id is not None:
        stmt = stmt.where(EmployeeClass.group_id == group_id)
    result = await db.execute(stmt)
    return list(result.scalars().all())


async def update_employee_class(
    db: AsyncSession,
    class_id: int,
    **fields: object,
) -> EmployeeClass | None:
    employee_class = await get_employee_class(db, class_id)
    if employee_class is None:
        return None
    for key in ("class_name", "description"):
        if key in fields:
            setattr(employee_class, key, fields[key])
    await db.flush()
    return employee_class


async def delete_employee_class(db: AsyncSession, employee_class: EmployeeClass) -> None:
    """Hard-delete a class. Callers check for referencing applicants first."""
    await db.delete(employee_class)
    await db.flush()
