"""FastAPI 의존성 주입 모듈 — 계정(테넌트) 범위 결정.

FastAPI dependency injection module — Account (tenant) scoping.

Admin endpoints resolve the owning account from the ``X-Account-Id`` header;
employee endpoints take the account id from the path. Either way the
account must exist and be active. Login and sessions are handled outside
this service.
"""

from typing import Annotated
from uuid import UUID

from fastapi import Depends, Header, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from shiftara.database import get_db
from shiftara.models.account import Account
from shiftara.services.account_service import account_service


async def get_current_account(
    db: Annotated[AsyncSession, Depends(get_db)],
    x_account_id: Annotated[str | None, Header()] = None,
) -> Account:
    """X-Account-Id 헤더에서 관리 대상 계정을 조회합니다.

    Resolve the admin's account from the ``X-Account-Id`` header.

    Raises:
        HTTPException(401): 헤더가 없거나 UUID가 아님 (Missing or malformed header)
        NotFoundError: 계정이 없거나 비활성 (Unknown or inactive account)
    """
    if not x_account_id:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="X-Account-Id header required")
    try:
        account_id: UUID = UUID(x_account_id)
    except ValueError:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid X-Account-Id header")
    return await account_service.get_active_account(db, account_id)


async def get_path_account(
    account_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> Account:
    """경로의 account_id로 직원용 엔드포인트의 계정을 조회합니다."""
    return await account_service.get_active_account(db, account_id)
