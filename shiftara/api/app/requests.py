"""앱 요청 라우터 — 직원의 교대/휴가 요청 및 파트너 응답.

App Request Router — Employee swap/leave requests and partner responses.
Every write and the inbox are PIN-gated.
"""

from datetime import date
from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from shiftara.api.deps import get_path_account
from shiftara.database import get_db
from shiftara.models.account import Account
from shiftara.schemas.request import (
    PartnerDecision,
    PinCredential,
    ShiftRequestCreate,
    ShiftRequestResponse,
    SwapCandidate,
)
from shiftara.services.request_service import shift_request_service

router: APIRouter = APIRouter()


@router.post("/requests", response_model=ShiftRequestResponse, status_code=201)
async def create_request(
    data: ShiftRequestCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
    account: Annotated[Account, Depends(get_path_account)],
) -> ShiftRequestResponse:
    """교대 또는 휴가 요청을 생성합니다.

    Create a swap or leave request.

    Args:
        data: 요청 데이터 + 직원 PIN (Request payload with employee id and PIN)
        db: 비동기 데이터베이스 세션 (Async database session)
        account: 경로의 계정 (Account from the path)

    Returns:
        ShiftRequestResponse: 생성된 요청 (Created request)
    """
    result = await shift_request_service.create_request(db, account.id, data)
    await db.commit()
    return result


@router.get("/swap-candidates", response_model=list[SwapCandidate])
async def list_swap_candidates(
    work_date: Annotated[date, Query(alias="date")],
    db: Annotated[AsyncSession, Depends(get_db)],
    account: Annotated[Account, Depends(get_path_account)],
    exclude_employee_id: Annotated[UUID | None, Query()] = None,
) -> list[SwapCandidate]:
    return await shift_request_service.list_swap_candidates(db, account.id, work_date, exclude_employee_id)


@router.post("/inbox", response_model=list[ShiftRequestResponse])
async def partner_inbox(
    data: PinCredential,
    db: Annotated[AsyncSession, Depends(get_db)],
    account: Annotated[Account, Depends(get_path_account)],
) -> list[ShiftRequestResponse]:
    return await shift_request_service.inbox(db, account.id, data)


@router.post("/requests/{request_id}/respond", response_model=ShiftRequestResponse)
async def respond_to_request(
    request_id: UUID,
    data: PartnerDecision,
    db: Annotated[AsyncSession, Depends(get_db)],
    account: Annotated[Account, Depends(get_path_account)],
) -> ShiftRequestResponse:
    result = await shift_request_service.partner_respond(db, account.id, request_id, data)
    await db.commit()
    return result
