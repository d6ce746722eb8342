"""관리자 직원 라우터 — 직원 CRUD 및 PIN 설정.

Admin Employee Router — Employee CRUD and PIN assignment.
DELETE deactivates the employee rather than removing the row.
"""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from shiftara.api.deps import get_current_account
from shiftara.database import get_db
from shiftara.models.account import Account
from shiftara.schemas.employee import (
    EmployeeCreate,
    EmployeePinUpdate,
    EmployeeResponse,
    EmployeeUpdate,
)
from shiftara.services.employee_service import employee_service

router: APIRouter = APIRouter()


@router.get("", response_model=list[EmployeeResponse])
async def list_employees(
    db: Annotated[AsyncSession, Depends(get_db)],
    account: Annotated[Account, Depends(get_current_account)],
    include_inactive: Annotated[bool, Query()] = False,
) -> list[EmployeeResponse]:
    return await employee_service.list_employees(db, account.id, include_inactive=include_inactive)


@router.post("", response_model=EmployeeResponse, status_code=201)
async def create_employee(
    data: EmployeeCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
    account: Annotated[Account, Depends(get_current_account)],
) -> EmployeeResponse:
    result = await employee_service.create_employee(db, account.id, data)
    await db.commit()
    return result


@router.get("/{employee_id}", response_model=EmployeeResponse)
async def get_employee(
    employee_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    account: Annotated[Account, Depends(get_current_account)],
) -> EmployeeResponse:
    return await employee_service.get_detail(db, account.id, employee_id)


@router.patch("/{employee_id}", response_model=EmployeeResponse)
async def update_employee(
    employee_id: UUID,
    data: EmployeeUpdate,
    db: Annotated[AsyncSession, Depends(get_db)],
    account: Annotated[Account, Depends(get_current_account)],
) -> EmployeeResponse:
    result = await employee_service.update_employee(db, account.id, employee_id, data)
    await db.commit()
    return result


@router.put("/{employee_id}/pin", response_model=EmployeeResponse)
async def set_employee_pin(
    employee_id: UUID,
    data: EmployeePinUpdate,
    db: Annotated[AsyncSession, Depends(get_db)],
    account: Annotated[Account, Depends(get_current_account)],
) -> EmployeeResponse:
    result = await employee_service.set_pin(db, account.id, employee_id, data.pin)
    await db.commit()
    return result


@router.delete("/{employee_id}", status_code=204)
async def deactivate_employee(
    employee_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    account: Annotated[Account, Depends(get_current_account)],
) -> None:
    await employee_service.deactivate_employee(db, account.id, employee_id)
    await db.commit()
