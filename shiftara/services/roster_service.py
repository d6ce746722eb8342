"""로스터 서비스 — 주간 그리드 조회, 슬롯 변경, 자동 배치, 미리보기.

Roster Service — Weekly grid reads, slot mutations, auto-fill and preview.

All writes to a cell go through delete-then-insert on the
(employee_id, work_date) key, so a cell never holds more than one entry.
Pure roster logic lives in ``shiftara.scheduling``; this service loads
snapshots, calls it, and persists the results. Callers (routers) commit.
"""

import random
from datetime import date
from typing import Any, Sequence
from uuid import UUID

from pydantic import BaseModel
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from shiftara.config import settings
from shiftara.models.employee import Employee, ShiftPattern
from shiftara.models.schedule import ENTRY_FILLED, ENTRY_LEAVE, ScheduleEntry
from shiftara.repositories.employee_repository import employee_repository, shift_pattern_repository
from shiftara.repositories.schedule_repository import schedule_entry_repository
from shiftara.scheduling.autofill import GeneratedAssignment, auto_fill
from shiftara.scheduling.grid import RosterGrid, build_grid, week_dates, week_start_of
from shiftara.scheduling.grouping import GroupingIndex, build_groups
from shiftara.scheduling.projection import CalendarView, ViewMode, project_calendar, view_range
from shiftara.schemas.roster import RosterGridResponse, RosterGroup, RosterRow, SlotCell
from shiftara.services.account_service import account_service
from shiftara.services.employee_service import employee_service
from shiftara.utils.exceptions import (
    BadRequestError,
    ConfirmationRequiredError,
    InvalidPatternError,
    PartialBatchFailureError,
    UniquenessViolationError,
    cell_ref,
)

# 셀 쓰기 시도 횟수 — delete-then-insert is retried once on a unique collision
_WRITE_ATTEMPTS: int = 2

SOURCE_MANUAL: str = "manual"
SOURCE_AUTO_FILL: str = "auto_fill"
SOURCE_SWAP: str = "swap"


class AutoFillOutcome(BaseModel):
    """자동 배치 실행 결과.

    Attributes:
        assignments: 생성기가 계산한 배정 (Assignments computed by the generator)
        succeeded: 저장된 셀 (Committed cells)
        failed: 저장 실패한 셀 (Cells whose write failed)
    """

    assignments: list[GeneratedAssignment] = []
    succeeded: list[dict[str, str]] = []
    failed: list[dict[str, str]] = []


def _shift_snapshot(entry: ScheduleEntry) -> dict[str, Any]:
    return {
        "shift_name": entry.shift_name,
        "start_time": entry.start_time,
        "end_time": entry.end_time,
    }


def _holds_shift(entry: ScheduleEntry | None, snapshot: dict[str, Any]) -> bool:
    if entry is None or entry.kind != ENTRY_FILLED:
        return False
    return _shift_snapshot(entry) == snapshot


class RosterService:
    """로스터 서비스.

    Roster service exposing the slot mutation API (assign, mark_leave,
    clear, move_or_swap), the auto-fill batch and the calendar preview.
    """

    # === 조회 (Reads) ===

    async def _load_employees(self, db: AsyncSession, account_id: UUID) -> Sequence[Employee]:
        return await employee_repository.get_active(db, account_id)

    async def load_grid(
        self,
        db: AsyncSession,
        account_id: UUID,
        week: date,
        employees: Sequence[Employee] | None = None,
    ) -> RosterGrid:
        """저장소에서 주간 그리드를 새로 구성합니다.

        Rebuild the weekly grid from storage.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            account_id: 계정 UUID (Account UUID)
            week: 주 안의 임의 날짜 (Any date within the week)
            employees: 이미 조회한 활성 직원, 없으면 조회 (Preloaded active employees)

        Returns:
            RosterGrid: 주간 그리드 (Weekly grid)
        """
        if employees is None:
            employees = await self._load_employees(db, account_id)
        dates: list[date] = week_dates(week)
        entries: Sequence[ScheduleEntry] = await schedule_entry_repository.get_range(
            db, account_id, dates[0], dates[-1]
        )
        return build_grid(dates[0], employees, entries)

    async def get_groups(self, db: AsyncSession, account_id: UUID) -> GroupingIndex:
        employees = await self._load_employees(db, account_id)
        return build_groups(employees, settings.DEFAULT_GROUP_NAME)

    def _to_grid_response(self, grid: RosterGrid, groups: GroupingIndex) -> RosterGridResponse:
        return RosterGridResponse(
            week_start=grid.week_start,
            dates=grid.dates,
            groups=[
                RosterGroup(
                    name=group_name,
                    rows=[
                        RosterRow(employee=member, slots=grid.rows[member.id])
                        for member in groups.members(group_name)
                        if member.id in grid.rows
                    ],
                )
                for group_name in groups.group_order
            ],
        )

    async def get_grid(self, db: AsyncSession, account_id: UUID, week: date) -> RosterGridResponse:
        """그룹 순서대로 정렬된 주간 그리드를 반환합니다.

        Return the weekly grid with rows in grouping index order.
        """
        employees = await self._load_employees(db, account_id)
        grid: RosterGrid = await self.load_grid(db, account_id, week, employees)
        groups: GroupingIndex = build_groups(employees, settings.DEFAULT_GROUP_NAME)
        return self._to_grid_response(grid, groups)

    async def preview(
        self,
        db: AsyncSession,
        account_id: UUID,
        day: date,
        view: ViewMode = "weekly",
    ) -> CalendarView:
        """발행용 캘린더 뷰 (주간/월간).

        Read-only calendar projection for the week or month containing ``day``.
        """
        start, end = view_range(day, view)
        groups: GroupingIndex = await self.get_groups(db, account_id)
        entries = await schedule_entry_repository.get_range(db, account_id, start, end)
        return project_calendar(entries, start, end, groups, settings.LEAVE_LABEL)

    # === 셀 쓰기 (Cell writes) ===

    async def _write_cell(
        self,
        db: AsyncSession,
        account_id: UUID,
        employee_id: UUID,
        work_date: date,
        values: dict[str, Any],
    ) -> ScheduleEntry:
        """셀의 기존 엔트리를 삭제하고 새 엔트리를 삽입합니다.

        Delete-then-insert one cell inside a savepoint. A unique collision
        (a concurrent writer got there first) is retried once.

        Raises:
            UniquenessViolationError: 재시도 후에도 충돌할 때 (Collision persists after retry)
        """
        for _ in range(_WRITE_ATTEMPTS):
            try:
                async with db.begin_nested():
                    await schedule_entry_repository.delete_cell(db, account_id, employee_id, work_date)
                    return await schedule_entry_repository.insert(db, {
                        "account_id": account_id,
                        "employee_id": employee_id,
                        "work_date": work_date,
                        **values,
                    })
            except IntegrityError:
                continue
        raise UniquenessViolationError(employee_id, work_date)

    async def assign(
        self,
        db: AsyncSession,
        account_id: UUID,
        employee_id: UUID,
        work_date: date,
        pattern_id: UUID,
        source: str = SOURCE_MANUAL,
    ) -> ScheduleEntry:
        """셀에 시프트 패턴을 배정합니다 (패턴 이름/시간은 값으로 복사).

        Assign a shift pattern to a cell; the pattern's name and times are
        copied onto the entry.

        Raises:
            NotFoundError: 직원이 없거나 비활성일 때 (Unknown or inactive employee)
            InvalidPatternError: 패턴이 삭제되었을 때 (Pattern no longer exists)
        """
        await employee_service.get_employee(db, account_id, employee_id, active_only=True)
        pattern: ShiftPattern | None = await shift_pattern_repository.get_by_id(db, pattern_id, account_id)
        if pattern is None:
            raise InvalidPatternError(pattern_id)
        return await self._write_cell(db, account_id, employee_id, work_date, {
            "kind": ENTRY_FILLED,
            "shift_name": pattern.name,
            "start_time": pattern.start_time,
            "end_time": pattern.end_time,
            "source": source,
        })

    async def mark_leave(
        self,
        db: AsyncSession,
        account_id: UUID,
        employee_id: UUID,
        work_date: date,
        source: str = SOURCE_MANUAL,
    ) -> ScheduleEntry:
        await employee_service.get_employee(db, account_id, employee_id, active_only=True)
        return await self._write_cell(db, account_id, employee_id, work_date, {
            "kind": ENTRY_LEAVE,
            "shift_name": None,
            "start_time": None,
            "end_time": None,
            "source": source,
        })

    async def clear(self, db: AsyncSession, account_id: UUID, employee_id: UUID, work_date: date) -> int:
        return await schedule_entry_repository.delete_cell(db, account_id, employee_id, work_date)

    async def move_or_swap(
        self,
        db: AsyncSession,
        account_id: UUID,
        source: SlotCell,
        target: SlotCell,
        confirm_leave_overwrite: bool = False,
        entry_source: str = SOURCE_MANUAL,
    ) -> str:
        """원본 셀의 시프트를 대상 셀로 이동하거나 두 셀을 교환합니다.

        Move the shift at ``source`` onto ``target``. When the target holds a
        shift the two are swapped; when it is empty (or on leave and the
        overwrite is confirmed) the source is cleared.

        Both cells are written inside one savepoint and read back afterwards;
        a cell that does not hold the expected shift is reported as a
        partial failure.

        Returns:
            str: "swap" 또는 "move" (Which branch was applied)

        Raises:
            BadRequestError: 원본에 시프트가 없거나 두 셀이 같을 때
            ConfirmationRequiredError: 대상이 휴가이고 확인이 없을 때
            PartialBatchFailureError: 쓰기 후 검증 실패 (Read-back mismatch)
        """
        if source.employee_id == target.employee_id and source.work_date == target.work_date:
            raise BadRequestError("원본과 대상이 같습니다 (Source and target are the same cell)")
        await employee_service.get_employee(db, account_id, source.employee_id, active_only=True)
        await employee_service.get_employee(db, account_id, target.employee_id, active_only=True)

        source_entry = await schedule_entry_repository.get_cell(db, account_id, source.employee_id, source.work_date)
        target_entry = await schedule_entry_repository.get_cell(db, account_id, target.employee_id, target.work_date)

        if source_entry is None or source_entry.kind != ENTRY_FILLED:
            raise BadRequestError("원본 셀에 시프트가 없습니다 (Source cell holds no shift)")
        if target_entry is not None and target_entry.kind == ENTRY_LEAVE and not confirm_leave_overwrite:
            raise ConfirmationRequiredError(target.employee_id, target.work_date)

        moving: dict[str, Any] = _shift_snapshot(source_entry)
        returning: dict[str, Any] | None = None
        if target_entry is not None and target_entry.kind == ENTRY_FILLED:
            returning = _shift_snapshot(target_entry)

        async with db.begin_nested():
            await self._write_cell(db, account_id, target.employee_id, target.work_date, {
                "kind": ENTRY_FILLED, "source": entry_source, **moving,
            })
            if returning is not None:
                await self._write_cell(db, account_id, source.employee_id, source.work_date, {
                    "kind": ENTRY_FILLED, "source": entry_source, **returning,
                })
            else:
                await schedule_entry_repository.delete_cell(db, account_id, source.employee_id, source.work_date)

        # 쓰기 후 검증 — read both cells back
        written_target = await schedule_entry_repository.get_cell(db, account_id, target.employee_id, target.work_date)
        written_source = await schedule_entry_repository.get_cell(db, account_id, source.employee_id, source.work_date)
        target_ok: bool = _holds_shift(written_target, moving)
        source_ok: bool = written_source is None if returning is None else _holds_shift(written_source, returning)

        if not (target_ok and source_ok):
            cells = [
                (cell_ref(target.employee_id, target.work_date), target_ok),
                (cell_ref(source.employee_id, source.work_date), source_ok),
            ]
            raise PartialBatchFailureError(
                succeeded=[ref for ref, ok in cells if ok],
                failed=[ref for ref, ok in cells if not ok],
            )
        return "swap" if returning is not None else "move"

    # === 자동 배치 (Auto-fill) ===

    async def auto_fill(
        self,
        db: AsyncSession,
        account_id: UUID,
        week: date,
        rotation_block_days: int | None = None,
        seed: int | None = None,
    ) -> AutoFillOutcome:
        """주간 그리드의 빈 셀을 자동으로 채웁니다.

        Fill every empty cell of the week. The week is re-read right before
        generating; each generated cell is written with delete-then-insert in
        its own savepoint so one failing cell does not discard the others.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            account_id: 계정 UUID (Account UUID)
            week: 주 안의 임의 날짜 (Any date within the week)
            rotation_block_days: 블록 크기, 없으면 계정 설정 (Block size; account setting when None)
            seed: 셔플 시드 (Shuffle seed for reproducible runs)

        Returns:
            AutoFillOutcome: 생성/성공/실패 셀 목록 (Generated, committed and failed cells)

        Raises:
            ConfigurationError: 패턴이 없거나 블록 크기가 잘못됨 (No patterns or bad block)
        """
        if rotation_block_days is None:
            rotation_block_days = await account_service.resolve_rotation_block_days(db, account_id)
        patterns: Sequence[ShiftPattern] = await shift_pattern_repository.get_ordered(db, account_id)
        employees = await self._load_employees(db, account_id)
        grid: RosterGrid = await self.load_grid(db, account_id, week_start_of(week), employees)
        groups: GroupingIndex = build_groups(employees, settings.DEFAULT_GROUP_NAME)
        rng: random.Random = random.Random(seed) if seed is not None else random.Random()

        batch: list[GeneratedAssignment] = auto_fill(grid, groups, patterns, rotation_block_days, rng)

        outcome: AutoFillOutcome = AutoFillOutcome(assignments=batch)
        for assignment in batch:
            ref = cell_ref(assignment.employee_id, assignment.work_date)
            try:
                await self._write_cell(db, account_id, assignment.employee_id, assignment.work_date, {
                    "kind": ENTRY_FILLED,
                    "shift_name": assignment.shift_name,
                    "start_time": assignment.start_time,
                    "end_time": assignment.end_time,
                    "source": SOURCE_AUTO_FILL,
                })
            except UniquenessViolationError:
                outcome.failed.append(ref)
            else:
                outcome.succeeded.append(ref)
        return outcome


roster_service: RosterService = RosterService()
