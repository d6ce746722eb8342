"""계정 서비스 — 계정 생성 및 계정별 로스터 설정 관리.

Account Service — Account creation and per-account roster settings.
Settings columns left NULL fall back to the global defaults in
``shiftara.config.settings``.
"""

from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from shiftara.config import settings
from shiftara.models.account import Account, AccountSetting
from shiftara.repositories.account_repository import account_repository
from shiftara.schemas.account import (
    AccountCreate,
    AccountResponse,
    AccountSettingResponse,
    AccountSettingUpdate,
)
from shiftara.utils.exceptions import NotFoundError


class AccountService:
    """계정 서비스."""

    def _to_response(self, account: Account) -> AccountResponse:
        return AccountResponse(
            id=str(account.id),
            name=account.name,
            is_active=account.is_active,
            created_at=account.created_at,
        )

    def _to_settings_response(self, setting: AccountSetting | None) -> AccountSettingResponse:
        return AccountSettingResponse(
            rotation_block_days=self._effective_rotation_block_days(setting),
            max_leaves_per_month=self._effective_max_leaves(setting),
            group_link=setting.group_link if setting is not None else None,
        )

    @staticmethod
    def _effective_rotation_block_days(setting: AccountSetting | None) -> int:
        if setting is None or setting.rotation_block_days is None:
            return settings.ROTATION_BLOCK_DAYS
        return setting.rotation_block_days

    @staticmethod
    def _effective_max_leaves(setting: AccountSetting | None) -> int:
        if setting is None or setting.max_leaves_per_month is None:
            return settings.MAX_LEAVES_PER_MONTH
        return setting.max_leaves_per_month

    async def create_account(self, db: AsyncSession, data: AccountCreate) -> AccountResponse:
        account: Account = await account_repository.create(db, {"name": data.name})
        return self._to_response(account)

    async def get_active_account(self, db: AsyncSession, account_id: UUID) -> Account:
        """활성 계정을 조회합니다.

        Retrieve an active account.

        Raises:
            NotFoundError: 계정이 없거나 비활성일 때 (Account missing or inactive)
        """
        account: Account | None = await account_repository.get_by_id(db, account_id)
        if account is None or not account.is_active:
            raise NotFoundError("계정을 찾을 수 없습니다 (Account not found)")
        return account

    async def get_account(self, db: AsyncSession, account_id: UUID) -> AccountResponse:
        return self._to_response(await self.get_active_account(db, account_id))

    async def get_settings(self, db: AsyncSession, account_id: UUID) -> AccountSettingResponse:
        setting: AccountSetting | None = await account_repository.get_settings(db, account_id)
        return self._to_settings_response(setting)

    async def update_settings(
        self,
        db: AsyncSession,
        account_id: UUID,
        data: AccountSettingUpdate,
    ) -> AccountSettingResponse:
        """계정 설정을 수정합니다. 전송된 필드만 반영되며 null은 기본값 복원.

        Update account settings. Only fields present in the payload change;
        an explicit null reverts that field to the global default.
        """
        setting: AccountSetting = await account_repository.get_or_create_settings(db, account_id)
        for field, value in data.model_dump(exclude_unset=True).items():
            setattr(setting, field, value)
        await db.flush()
        await db.refresh(setting)
        return self._to_settings_response(setting)

    async def resolve_rotation_block_days(self, db: AsyncSession, account_id: UUID) -> int:
        setting: AccountSetting | None = await account_repository.get_settings(db, account_id)
        return self._effective_rotation_block_days(setting)

    async def resolve_max_leaves(self, db: AsyncSession, account_id: UUID) -> int:
        setting: AccountSetting | None = await account_repository.get_settings(db, account_id)
        return self._effective_max_leaves(setting)


account_service: AccountService = AccountService()
