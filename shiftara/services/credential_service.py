"""자격 증명 서비스 — 직원 셀프서비스 PIN 검증.

Credential Service — Verifies employee self-service PINs.
Every failure raises the same ``PinMismatchError`` so callers cannot tell
an unknown employee from a wrong PIN.
"""

from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from shiftara.models.employee import Employee
from shiftara.repositories.employee_repository import employee_repository
from shiftara.utils.exceptions import PinMismatchError
from shiftara.utils.pin import verify_pin


class CredentialService:

    async def verify_pin(
        self,
        db: AsyncSession,
        account_id: UUID,
        employee_id: UUID,
        pin: str,
    ) -> Employee:
        """직원 PIN을 검증하고 직원을 반환합니다.

        Verify an employee's PIN and return the employee.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            account_id: 계정 UUID (Account UUID)
            employee_id: 직원 UUID (Employee UUID)
            pin: 입력된 PIN (Submitted PIN)

        Returns:
            Employee: 검증된 활성 직원 (Verified active employee)

        Raises:
            PinMismatchError: 직원이 없거나, 비활성이거나, PIN이 틀릴 때
                              (Unknown/inactive employee or wrong PIN)
        """
        employee: Employee | None = await employee_repository.get_by_id(db, employee_id, account_id)
        if employee is None or not employee.is_active:
            verify_pin(pin, None)
            raise PinMismatchError()
        if not verify_pin(pin, employee.pin_hash):
            raise PinMismatchError()
        return employee


credential_service: CredentialService = CredentialService()
