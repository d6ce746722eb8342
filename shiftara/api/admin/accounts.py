"""관리자 계정 라우터 — 계정 생성/조회 및 계정 설정.

Admin Account Router — Account creation/lookup and roster settings.
"""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from shiftara.api.deps import get_current_account
from shiftara.database import get_db
from shiftara.models.account import Account
from shiftara.schemas.account import (
    AccountCreate,
    AccountResponse,
    AccountSettingResponse,
    AccountSettingUpdate,
)
from shiftara.services.account_service import account_service

router: APIRouter = APIRouter()


@router.post("/accounts", response_model=AccountResponse, status_code=201)
async def create_account(
    data: AccountCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> AccountResponse:
    """새 계정(테넌트)을 생성합니다.

    Create a new account. The returned id is what admin clients send in
    the ``X-Account-Id`` header afterwards.
    """
    result = await account_service.create_account(db, data)
    await db.commit()
    return result


@router.get("/accounts/current", response_model=AccountResponse)
async def get_current(
    db: Annotated[AsyncSession, Depends(get_db)],
    account: Annotated[Account, Depends(get_current_account)],
) -> AccountResponse:
    return await account_service.get_account(db, account.id)


@router.get("/settings", response_model=AccountSettingResponse)
async def get_settings(
    db: Annotated[AsyncSession, Depends(get_db)],
    account: Annotated[Account, Depends(get_current_account)],
) -> AccountSettingResponse:
    return await account_service.get_settings(db, account.id)


@router.put("/settings", response_model=AccountSettingResponse)
async def update_settings(
    data: AccountSettingUpdate,
    db: Annotated[AsyncSession, Depends(get_db)],
    account: Annotated[Account, Depends(get_current_account)],
) -> AccountSettingResponse:
    result = await account_service.update_settings(db, account.id, data)
    await db.commit()
    return result
