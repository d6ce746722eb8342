"""계정/설정 Pydantic 스키마.

Account and account setting request/response schemas.
"""

from datetime import datetime
from pydantic import BaseModel, Field


class AccountCreate(BaseModel):
    name: str = Field(min_length=1, max_length=255)


class AccountResponse(BaseModel):
    id: str
    name: str
    is_active: bool
    created_at: datetime


class AccountSettingUpdate(BaseModel):
    """계정 설정 수정 요청 — null을 보내면 전역 기본값으로 되돌림.

    Account setting update. Sending null for a field reverts it to the
    global default from configuration.
    """

    rotation_block_days: int | None = Field(default=None, ge=1, le=7)
    max_leaves_per_month: int | None = Field(default=None, ge=0)
    group_link: str | None = None


class AccountSettingResponse(BaseModel):
    """실제 적용되는(effective) 설정 값 응답."""

    rotation_block_days: int
    max_leaves_per_month: int
    group_link: str | None = None
