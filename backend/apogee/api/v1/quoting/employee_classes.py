"""Employee class endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from apogee.api.deps import get_current_principal, get_db
from apogee.api.schemas.common import MessageResponse
from apogee.api.schemas.quoting import (
    ApplicantResponse,
    EmployeeClassCreate,
    EmployeeClassDetailResponse,
    EmployeeClassResponse,
    EmployeeClassUpdate,
)
from apogee.core.errors import NotFoundError
from apogee.repositories import applicants as applicant_repository
from apogee.repositories import groups as group_repository
from apogee.services import quotes as quote_service

router = APIRouter(
    prefix="/employee-classes",
    tags=["Employee Classes"],
    dependencies=[Depends(get_current_principal)],
)


@router.post("", response_model=EmployeeClassResponse, status_code=status.HTTP_201_CREATED)
async def create_employee_class(
    payload: EmployeeClassCreate,
    db: AsyncSession = Depends(get_db),
) -> EmployeeClassResponse:
    if await group_repository.get_group(db, payload.group_id) is None:
        raise NotFoundError("Group not found", entity="Group", entity_id=payload.group_id)
    employee_class = await group_repository.create_employee_class(
        db,
        group_id=payload.group_id,
        class_name=payload.class_name,
        description=payload.description,
    )
    return EmployeeClassResponse.model_validate(employee_class)


@router.get("", response_model=list[EmployeeClassResponse])
async def list_employee_classes(
    group_id: int | None = Query(default=None, alias="groupId"),
    db: AsyncSession = Depends(get_db),
) -> list[EmployeeClassResponse]:
    classes = await group_repository.list_employee_classes(db, group_id=group_id)
    return [EmployeeClassResponse.model_validate(c) for c in classes]


@router.get("/{class_id}", response_model=EmployeeClassDetailResponse)
async def get_employee_class(class_id: int, db: AsyncSession = Depends(get_db)) -> EmployeeClassDetailResponse:
    """Class with the applicants currently assigned to it."""
    employee_class = await group_repository.get_employee_class(db, class_id)
    if employee_class is None:
        raise NotFoundError("Employee class not found", entity="EmployeeClass", entity_id=class_id)
    members = await applicant_repository.list_applicants(db, class_id=class_id)
    response = EmployeeClassDetailResponse.model_validate(employee_class)
    response.members = [ApplicantResponse.model_validate(m) for m in members]
    return response


@router.patch("/{class_id}", response_model=EmployeeClassResponse)
async def update_employee_class(
    class_id: int,
    payload: EmployeeClassUpdate,
    db: AsyncSession = Depends(get_db),
) -> EmployeeClassResponse:
    employee_class = await group_repository.update_employee_class(
        db, class_id, **payload.model_dump(exclude_unset=True)
    )
    if employee_class is None:
        raise NotFoundError("Employee class not found", entity="EmployeeClass", entity_id=class_id)
    return EmployeeClassResponse.model_validate(employee_class)


@router.delete("/{class_id}", response_model=MessageResponse)
async def delete_employee_class(class_id: int, db: AsyncSession = Depends(get_db)) -> MessageResponse:
    """Refused with 409 while applicants are still assigned to the class."""
    await quote_service.delete_employee_class(db, class_id)
    return MessageResponse(message="Employee class deleted successfully")
