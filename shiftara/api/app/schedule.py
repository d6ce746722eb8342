"""앱 스케줄 라우터 — 직원용 공개 캘린더.

App Schedule Router — Public calendar of the account's published roster.
"""

from datetime import date
from typing import Annotated

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from shiftara.api.deps import get_path_account
from shiftara.database import get_db
from shiftara.models.account import Account
from shiftara.scheduling.projection import CalendarView, ViewMode
from shiftara.services.roster_service import roster_service

router: APIRouter = APIRouter()


@router.get("/schedule", response_model=CalendarView)
async def get_schedule(
    db: Annotated[AsyncSession, Depends(get_db)],
    account: Annotated[Account, Depends(get_path_account)],
    view: Annotated[ViewMode, Query()] = "weekly",
    day: Annotated[date | None, Query(alias="date")] = None,
) -> CalendarView:
    """주간 또는 월간 근무표를 조회합니다.

    Weekly or monthly calendar for the period containing ``date``
    (defaults to today).
    """
    return await roster_service.preview(db, account.id, day or date.today(), view)
