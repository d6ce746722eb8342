"""관리자 요청 라우터 — 교대/휴가 요청 조회 및 승인/거절.

Admin Request Router — List, approve and reject swap/leave requests.
"""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Body, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from shiftara.api.deps import get_current_account
from shiftara.database import get_db
from shiftara.models.account import Account
from shiftara.schemas.request import AdminDecision, RequestStatus, ShiftRequestResponse
from shiftara.services.request_service import shift_request_service

router: APIRouter = APIRouter()


@router.get("", response_model=list[ShiftRequestResponse])
async def list_requests(
    db: Annotated[AsyncSession, Depends(get_db)],
    account: Annotated[Account, Depends(get_current_account)],
    status: Annotated[RequestStatus | None, Query()] = None,
) -> list[ShiftRequestResponse]:
    """요청 목록을 최신순으로 조회합니다 (상태 필터 선택).

    List requests newest first, optionally filtered by status.
    """
    return await shift_request_service.list_for_admin(db, account.id, status=status)


@router.post("/{request_id}/approve", response_model=ShiftRequestResponse)
async def approve_request(
    request_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    account: Annotated[Account, Depends(get_current_account)],
    data: Annotated[AdminDecision | None, Body()] = None,
) -> ShiftRequestResponse:
    """요청을 승인하고 로스터에 반영합니다.

    Approve a request at ``pending_admin`` and apply it to the roster.
    """
    confirm: bool = data.confirm_leave_overwrite if data is not None else False
    result = await shift_request_service.admin_approve(
        db, account.id, request_id, confirm_leave_overwrite=confirm
    )
    await db.commit()
    return result


@router.post("/{request_id}/reject", response_model=ShiftRequestResponse)
async def reject_request(
    request_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    account: Annotated[Account, Depends(get_current_account)],
) -> ShiftRequestResponse:
    result = await shift_request_service.admin_reject(db, account.id, request_id)
    await db.commit()
    return result
