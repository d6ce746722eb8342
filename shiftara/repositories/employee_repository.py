"""직원/시프트 패턴 레포지토리 — 직원 및 패턴 조회 쿼리 담당.

Employee and shift pattern repositories.
"""

from typing import Sequence
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from shiftara.models.employee import Employee, ShiftPattern
from shiftara.repositories.base import BaseRepository


class EmployeeRepository(BaseRepository[Employee]):
    """직원 레포지토리."""

    def __init__(self) -> None:
        super().__init__(Employee)

    async def get_active(
        self,
        db: AsyncSession,
        account_id: UUID,
    ) -> Sequence[Employee]:
        """계정의 활성 직원을 부서, 이름 순으로 조회합니다.

        Retrieve active employees of an account ordered by division and name.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            account_id: 계정 UUID (Account UUID)

        Returns:
            Sequence[Employee]: 활성 직원 목록 (Active employees)
        """
        result = await db.execute(
            select(Employee)
            .where(Employee.account_id == account_id, Employee.is_active.is_(True))
            .order_by(Employee.division, Employee.name, Employee.id)
        )
        return result.scalars().all()

    async def list_by_account(
        self,
        db: AsyncSession,
        account_id: UUID,
        include_inactive: bool = False,
    ) -> Sequence[Employee]:
        query = select(Employee).where(Employee.account_id == account_id)
        if not include_inactive:
            query = query.where(Employee.is_active.is_(True))
        result = await db.execute(query.order_by(Employee.name, Employee.id))
        return result.scalars().all()


class ShiftPatternRepository(BaseRepository[ShiftPattern]):
    """시프트 패턴 레포지토리 — 항상 시작 시각 순으로 정렬."""

    def __init__(self) -> None:
        super().__init__(ShiftPattern)

    async def get_ordered(
        self,
        db: AsyncSession,
        account_id: UUID,
    ) -> Sequence[ShiftPattern]:
        result = await db.execute(
            select(ShiftPattern)
            .where(ShiftPattern.account_id == account_id)
            .order_by(ShiftPattern.start_time, ShiftPattern.name)
        )
        return result.scalars().all()

    async def get_by_name(
        self,
        db: AsyncSession,
        account_id: UUID,
        name: str,
    ) -> ShiftPattern | None:
        result = await db.execute(
            select(ShiftPattern).where(
                ShiftPattern.account_id == account_id,
                ShiftPattern.name == name,
            )
        )
        return result.scalar_one_or_none()


# 싱글턴 인스턴스 — Singleton instances
employee_repository: EmployeeRepository = EmployeeRepository()
shift_pattern_repository: ShiftPatternRepository = ShiftPatternRepository()
