"""계정 레포지토리 — 계정 및 계정 설정 쿼리 담당.

Account Repository — Account and account setting queries.
"""

from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from shiftara.models.account import Account, AccountSetting
from shiftara.repositories.base import BaseRepository


class AccountRepository(BaseRepository[Account]):
    """계정 레포지토리."""

    def __init__(self) -> None:
        super().__init__(Account)

    async def get_settings(self, db: AsyncSession, account_id: UUID) -> AccountSetting | None:
        result = await db.execute(
            select(AccountSetting).where(AccountSetting.account_id == account_id)
        )
        return result.scalar_one_or_none()

    async def get_or_create_settings(self, db: AsyncSession, account_id: UUID) -> AccountSetting:
        """계정 설정을 조회하고, 없으면 빈 설정 행을 생성합니다."""
        setting: AccountSetting | None = await self.get_settings(db, account_id)
        if setting is None:
            setting = AccountSetting(account_id=account_id)
            db.add(setting)
            await db.flush()
            await db.refresh(setting)
        return setting


account_repository: AccountRepository = AccountRepository()
