"""관리자 시프트 패턴 라우터 — Shift Pattern CRUD 및 일괄 저장 엔드포인트.

Admin Shift Pattern Router — CRUD and bulk save endpoints for shift patterns.
"""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from shiftara.api.deps import get_current_account
from shiftara.database import get_db
from shiftara.models.account import Account
from shiftara.schemas.employee import (
    ShiftPatternBulkSave,
    ShiftPatternCreate,
    ShiftPatternResponse,
    ShiftPatternUpdate,
)
from shiftara.services.shift_pattern_service import shift_pattern_service

router: APIRouter = APIRouter()


@router.get("", response_model=list[ShiftPatternResponse])
async def list_shift_patterns(
    db: Annotated[AsyncSession, Depends(get_db)],
    account: Annotated[Account, Depends(get_current_account)],
) -> list[ShiftPatternResponse]:
    return await shift_pattern_service.list_patterns(db, account.id)


@router.post("", response_model=ShiftPatternResponse, status_code=201)
async def create_shift_pattern(
    data: ShiftPatternCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
    account: Annotated[Account, Depends(get_current_account)],
) -> ShiftPatternResponse:
    result = await shift_pattern_service.create_pattern(db, account.id, data)
    await db.commit()
    return result


@router.put("", response_model=list[ShiftPatternResponse])
async def bulk_save_shift_patterns(
    data: ShiftPatternBulkSave,
    db: Annotated[AsyncSession, Depends(get_db)],
    account: Annotated[Account, Depends(get_current_account)],
) -> list[ShiftPatternResponse]:
    result = await shift_pattern_service.bulk_save(db, account.id, data)
    await db.commit()
    return result


@router.put("/{pattern_id}", response_model=ShiftPatternResponse)
async def update_shift_pattern(
    pattern_id: UUID,
    data: ShiftPatternUpdate,
    db: Annotated[AsyncSession, Depends(get_db)],
    account: Annotated[Account, Depends(get_current_account)],
) -> ShiftPatternResponse:
    result = await shift_pattern_service.update_pattern(db, account.id, pattern_id, data)
    await db.commit()
    return result


@router.delete("/{pattern_id}", status_code=204)
async def delete_shift_pattern(
    pattern_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    account: Annotated[Account, Depends(get_current_account)],
) -> None:
    await shift_pattern_service.delete_pattern(db, account.id, pattern_id)
    await db.commit()
