"""스케줄 레포지토리 — 스케줄 엔트리 및 교대/휴가 요청 DB 쿼리 담당.

Schedule Repository — Handles schedule entry and shift request queries.
Entries are addressed by (employee_id, work_date); the database enforces
that at most one row exists per pair.
"""

from datetime import date, datetime
from typing import Any, Sequence
from uuid import UUID

from sqlalchemy import Select, delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from shiftara.models.schedule import ENTRY_FILLED, REQUEST_LEAVE, ScheduleEntry, ShiftRequest
from shiftara.repositories.base import BaseRepository


class ScheduleEntryRepository(BaseRepository[ScheduleEntry]):
    """스케줄 엔트리 레포지토리.

    Schedule entry repository with date-range reads and per-cell
    delete/insert used by the slot mutation operations.

    Extends:
        BaseRepository[ScheduleEntry]
    """

    def __init__(self) -> None:
        super().__init__(ScheduleEntry)

    async def get_range(
        self,
        db: AsyncSession,
        account_id: UUID,
        date_from: date,
        date_to: date,
        employee_id: UUID | None = None,
    ) -> Sequence[ScheduleEntry]:
        """날짜 범위 내 엔트리를 조회합니다.

        Retrieve entries of an account between two dates (inclusive).

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            account_id: 계정 UUID (Account UUID)
            date_from: 시작일 (Range start, inclusive)
            date_to: 종료일 (Range end, inclusive)
            employee_id: 직원 UUID 필터, 선택 (Optional employee filter)

        Returns:
            Sequence[ScheduleEntry]: 엔트리 목록 (Entries ordered by date)
        """
        query: Select = select(ScheduleEntry).where(
            ScheduleEntry.account_id == account_id,
            ScheduleEntry.work_date >= date_from,
            ScheduleEntry.work_date <= date_to,
        )
        if employee_id is not None:
            query = query.where(ScheduleEntry.employee_id == employee_id)
        result = await db.execute(query.order_by(ScheduleEntry.work_date))
        return result.scalars().all()

    async def get_cell(
        self,
        db: AsyncSession,
        account_id: UUID,
        employee_id: UUID,
        work_date: date,
    ) -> ScheduleEntry | None:
        result = await db.execute(
            select(ScheduleEntry).where(
                ScheduleEntry.account_id == account_id,
                ScheduleEntry.employee_id == employee_id,
                ScheduleEntry.work_date == work_date,
            )
        )
        return result.scalar_one_or_none()

    async def get_filled_on(
        self,
        db: AsyncSession,
        account_id: UUID,
        work_date: date,
        exclude_employee_id: UUID | None = None,
    ) -> Sequence[ScheduleEntry]:
        """특정 날짜의 근무(filled) 엔트리를 조회합니다 — 교대 후보 목록용."""
        query: Select = select(ScheduleEntry).where(
            ScheduleEntry.account_id == account_id,
            ScheduleEntry.work_date == work_date,
            ScheduleEntry.kind == ENTRY_FILLED,
        )
        if exclude_employee_id is not None:
            query = query.where(ScheduleEntry.employee_id != exclude_employee_id)
        result = await db.execute(query.order_by(ScheduleEntry.start_time))
        return result.scalars().all()

    async def delete_cell(
        self,
        db: AsyncSession,
        account_id: UUID,
        employee_id: UUID,
        work_date: date,
    ) -> int:
        """(직원, 날짜) 셀의 엔트리를 삭제합니다.

        Delete whatever entry occupies one cell.

        Returns:
            int: 삭제된 행 수 (Number of deleted rows, 0 or 1)
        """
        result = await db.execute(
            delete(ScheduleEntry).where(
                ScheduleEntry.account_id == account_id,
                ScheduleEntry.employee_id == employee_id,
                ScheduleEntry.work_date == work_date,
            )
        )
        return result.rowcount or 0

    async def insert(
        self,
        db: AsyncSession,
        data: dict[str, Any],
    ) -> ScheduleEntry:
        """새 엔트리를 삽입합니다. 유니크 제약 위반 시 IntegrityError 발생.

        Insert a new entry; raises IntegrityError on a (employee, date) collision.
        """
        entry: ScheduleEntry = ScheduleEntry(**data)
        db.add(entry)
        await db.flush()
        return entry


class ShiftRequestRepository(BaseRepository[ShiftRequest]):
    """교대/휴가 요청 레포지토리."""

    def __init__(self) -> None:
        super().__init__(ShiftRequest)

    async def get_by_filters(
        self,
        db: AsyncSession,
        account_id: UUID,
        status: str | None = None,
        target_employee_id: UUID | None = None,
    ) -> Sequence[ShiftRequest]:
        """필터 조건에 맞는 요청을 최신순으로 조회합니다.

        Retrieve requests matching the given filters, newest first.
        """
        query: Select = select(ShiftRequest).where(ShiftRequest.account_id == account_id)
        if status is not None:
            query = query.where(ShiftRequest.status == status)
        if target_employee_id is not None:
            query = query.where(ShiftRequest.target_employee_id == target_employee_id)
        result = await db.execute(query.order_by(ShiftRequest.created_at.desc()))
        return result.scalars().all()

    async def count_leave_requests(
        self,
        db: AsyncSession,
        requester_id: UUID,
        created_from: datetime,
        created_before: datetime,
    ) -> int:
        """기간 내 생성된 직원의 휴가 요청 수 — 월간 한도 검사용.

        Count leave requests an employee created in [created_from, created_before).
        """
        result = await db.execute(
            select(func.count())
            .select_from(ShiftRequest)
            .where(
                ShiftRequest.requester_id == requester_id,
                ShiftRequest.type == REQUEST_LEAVE,
                ShiftRequest.created_at >= created_from,
                ShiftRequest.created_at < created_before,
            )
        )
        return result.scalar() or 0


# 싱글턴 인스턴스 — Singleton instances
schedule_entry_repository: ScheduleEntryRepository = ScheduleEntryRepository()
shift_request_repository: ShiftRequestRepository = ShiftRequestRepository()
