"""직원 서비스 — 직원 CRUD 및 PIN 관리 비즈니스 로직.

Employee Service — Business logic for employee CRUD and PIN management.
Employees are never hard-deleted: deleting one clears ``is_active`` so
historical schedule entries keep their owner.
"""

from typing import Sequence
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from shiftara.models.employee import Employee
from shiftara.repositories.employee_repository import employee_repository
from shiftara.schemas.employee import EmployeeCreate, EmployeeResponse, EmployeeUpdate
from shiftara.utils.exceptions import NotFoundError
from shiftara.utils.pin import hash_pin


class EmployeeService:
    """직원 서비스.

    Employee service handling creation, updates, deactivation and PIN
    assignment. All lookups are scoped by account.
    """

    def _to_response(self, employee: Employee) -> EmployeeResponse:
        return EmployeeResponse(
            id=str(employee.id),
            name=employee.name,
            role=employee.role,
            division=employee.division,
            phone=employee.phone,
            is_active=employee.is_active,
            has_pin=employee.pin_hash is not None,
            created_at=employee.created_at,
        )

    async def get_employee(
        self,
        db: AsyncSession,
        account_id: UUID,
        employee_id: UUID,
        active_only: bool = False,
    ) -> Employee:
        """계정 내 직원을 조회합니다.

        Retrieve an employee of the account.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            account_id: 계정 UUID (Account UUID)
            employee_id: 직원 UUID (Employee UUID)
            active_only: True이면 비활성 직원은 없는 것으로 취급
                         (Treat inactive employees as missing)

        Raises:
            NotFoundError: 직원이 없을 때 (When the employee does not exist)
        """
        employee: Employee | None = await employee_repository.get_by_id(db, employee_id, account_id)
        if employee is None or (active_only and not employee.is_active):
            raise NotFoundError("직원을 찾을 수 없습니다 (Employee not found)")
        return employee

    async def list_employees(
        self,
        db: AsyncSession,
        account_id: UUID,
        include_inactive: bool = False,
    ) -> list[EmployeeResponse]:
        employees: Sequence[Employee] = await employee_repository.list_by_account(
            db, account_id, include_inactive=include_inactive
        )
        return [self._to_response(e) for e in employees]

    async def get_detail(self, db: AsyncSession, account_id: UUID, employee_id: UUID) -> EmployeeResponse:
        return self._to_response(await self.get_employee(db, account_id, employee_id))

    async def create_employee(
        self,
        db: AsyncSession,
        account_id: UUID,
        data: EmployeeCreate,
    ) -> EmployeeResponse:
        employee: Employee = await employee_repository.create(db, {
            "account_id": account_id,
            "name": data.name,
            "role": data.role,
            "division": data.division or None,
            "phone": data.phone,
            "pin_hash": hash_pin(data.pin) if data.pin else None,
        })
        return self._to_response(employee)

    async def update_employee(
        self,
        db: AsyncSession,
        account_id: UUID,
        employee_id: UUID,
        data: EmployeeUpdate,
    ) -> EmployeeResponse:
        update_data: dict = data.model_dump(exclude_unset=True)
        if "division" in update_data:
            # 빈 문자열은 기본 그룹 — blank division means the default group
            update_data["division"] = update_data["division"] or None
        employee: Employee | None = await employee_repository.update(db, employee_id, update_data, account_id)
        if employee is None:
            raise NotFoundError("직원을 찾을 수 없습니다 (Employee not found)")
        return self._to_response(employee)

    async def set_pin(
        self,
        db: AsyncSession,
        account_id: UUID,
        employee_id: UUID,
        pin: str,
    ) -> EmployeeResponse:
        employee: Employee = await self.get_employee(db, account_id, employee_id)
        employee.pin_hash = hash_pin(pin)
        await db.flush()
        await db.refresh(employee)
        return self._to_response(employee)

    async def deactivate_employee(self, db: AsyncSession, account_id: UUID, employee_id: UUID) -> None:
        """직원을 비활성화합니다 (논리 삭제). 기존 스케줄 엔트리는 유지됩니다.

        Deactivate an employee (logical delete). Existing entries are kept;
        the employee simply stops appearing in grids and auto-fill.
        """
        employee: Employee = await self.get_employee(db, account_id, employee_id)
        employee.is_active = False
        await db.flush()


employee_service: EmployeeService = EmployeeService()
