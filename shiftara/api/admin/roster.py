"""관리자 로스터 라우터 — 주간 그리드, 슬롯 변경, 자동 배치, 미리보기 API.

Admin Roster Router — Weekly grid, slot mutation, auto-fill and preview endpoints.
Every mutating endpoint commits and then returns the grid rebuilt from
storage for the affected week.
"""

from datetime import date
from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from shiftara.api.deps import get_current_account
from shiftara.database import get_db
from shiftara.models.account import Account
from shiftara.scheduling.projection import CalendarView, ViewMode
from shiftara.schemas.roster import (
    AutoFillRequest,
    AutoFillResponse,
    RosterGridResponse,
    SlotAssignRequest,
    SlotCell,
    SlotMoveRequest,
)
from shiftara.services.roster_service import roster_service
from shiftara.utils.exceptions import PartialBatchFailureError

router: APIRouter = APIRouter()


@router.get("", response_model=RosterGridResponse)
async def get_roster(
    db: Annotated[AsyncSession, Depends(get_db)],
    account: Annotated[Account, Depends(get_current_account)],
    week: Annotated[date | None, Query()] = None,
) -> RosterGridResponse:
    """주간 로스터 그리드를 조회합니다.

    Get the weekly roster grid. ``week`` may be any date of the week and
    defaults to today.
    """
    return await roster_service.get_grid(db, account.id, week or date.today())


@router.put("/slots", response_model=RosterGridResponse)
async def assign_slot(
    data: SlotAssignRequest,
    db: Annotated[AsyncSession, Depends(get_db)],
    account: Annotated[Account, Depends(get_current_account)],
) -> RosterGridResponse:
    await roster_service.assign(db, account.id, data.employee_id, data.work_date, data.shift_pattern_id)
    await db.commit()
    return await roster_service.get_grid(db, account.id, data.work_date)


@router.post("/slots/leave", response_model=RosterGridResponse)
async def mark_slot_leave(
    data: SlotCell,
    db: Annotated[AsyncSession, Depends(get_db)],
    account: Annotated[Account, Depends(get_current_account)],
) -> RosterGridResponse:
    await roster_service.mark_leave(db, account.id, data.employee_id, data.work_date)
    await db.commit()
    return await roster_service.get_grid(db, account.id, data.work_date)


@router.delete("/slots", response_model=RosterGridResponse)
async def clear_slot(
    employee_id: Annotated[UUID, Query()],
    work_date: Annotated[date, Query()],
    db: Annotated[AsyncSession, Depends(get_db)],
    account: Annotated[Account, Depends(get_current_account)],
) -> RosterGridResponse:
    await roster_service.clear(db, account.id, employee_id, work_date)
    await db.commit()
    return await roster_service.get_grid(db, account.id, work_date)


@router.post("/move", response_model=RosterGridResponse)
async def move_slot(
    data: SlotMoveRequest,
    db: Annotated[AsyncSession, Depends(get_db)],
    account: Annotated[Account, Depends(get_current_account)],
) -> RosterGridResponse:
    """시프트를 다른 셀로 이동하거나 두 셀을 교환합니다.

    Move a shift to another cell, or swap two filled cells. Moving onto a
    leave cell requires ``confirm_leave_overwrite``.
    """
    await roster_service.move_or_swap(
        db, account.id, data.source, data.target, confirm_leave_overwrite=data.confirm_leave_overwrite
    )
    await db.commit()
    return await roster_service.get_grid(db, account.id, data.source.work_date)


@router.post("/auto-fill", response_model=AutoFillResponse)
async def auto_fill_week(
    data: AutoFillRequest,
    db: Annotated[AsyncSession, Depends(get_db)],
    account: Annotated[Account, Depends(get_current_account)],
) -> AutoFillResponse:
    """주간 빈 셀을 자동으로 채웁니다.

    Auto-fill every empty cell of the week. Successfully written cells are
    committed even when some cells fail; the failure is then reported as
    ``partial_batch_failure`` listing both sets of cells.
    """
    outcome = await roster_service.auto_fill(
        db, account.id, data.week, rotation_block_days=data.rotation_block_days, seed=data.seed
    )
    await db.commit()
    if outcome.failed:
        raise PartialBatchFailureError(outcome.succeeded, outcome.failed)

    grid = await roster_service.get_grid(db, account.id, data.week)
    return AutoFillResponse(
        status="filled" if outcome.assignments else "nothing_to_fill",
        created=len(outcome.succeeded),
        assignments=outcome.assignments,
        grid=grid,
    )


@router.get("/preview", response_model=CalendarView)
async def preview_roster(
    db: Annotated[AsyncSession, Depends(get_db)],
    account: Annotated[Account, Depends(get_current_account)],
    view: Annotated[ViewMode, Query()] = "weekly",
    day: Annotated[date | None, Query(alias="date")] = None,
) -> CalendarView:
    return await roster_service.preview(db, account.id, day or date.today(), view)
