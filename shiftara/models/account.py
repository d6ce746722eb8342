"""계정(테넌트) 관련 SQLAlchemy ORM 모델 정의.

Account-related SQLAlchemy ORM model definitions.
An account is the multi-tenant partition key: every employee, shift
pattern, schedule entry and request belongs to exactly one account.

Tables:
    - accounts: 최상위 테넌트 (Top-level tenant, one per business)
    - account_settings: 계정별 로스터 설정 (Per-account roster settings)
"""

import uuid
from datetime import datetime, timezone
from sqlalchemy import String, Boolean, DateTime, Integer, Text, ForeignKey, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from shiftara.database import Base


class Account(Base):
    """계정(테넌트) 모델 — 시스템의 최상위 엔티티.

    Account (tenant) model — Top-level entity in the system.
    All data is scoped under an account for multi-tenant isolation.

    Attributes:
        id: 고유 식별자 UUID (Unique identifier)
        name: 사업장 이름 (Business name)
        is_active: 활성 상태 (Active status flag)
        created_at: 생성 일시 UTC (Creation timestamp in UTC)
        updated_at: 수정 일시 UTC (Last update timestamp in UTC)

    Relationships:
        employees: 소속 직원 목록 (Employees, cascade delete)
        settings: 로스터 설정 (Roster settings, one-to-one)
    """

    __tablename__ = "accounts"

    # 계정 고유 식별자 — Account unique identifier (UUID v4, auto-generated)
    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    # 사업장 이름 — Business display name
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    # 활성 상태 — Whether the account is active (soft-delete pattern)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), onupdate=lambda: datetime.now(timezone.utc))

    employees = relationship("Employee", back_populates="account", cascade="all, delete-orphan")
    settings = relationship("AccountSetting", back_populates="account", uselist=False, cascade="all, delete-orphan")


class AccountSetting(Base):
    """계정 설정 모델 — 자동 배치/휴가 한도 등 로스터 정책 값.

    Account setting model — Per-account roster policy values.
    NULL columns fall back to the global defaults in ``shiftara.config``.

    Attributes:
        id: 고유 식별자 UUID
        account_id: 소속 계정 FK (one row per account)
        rotation_block_days: 동일 패턴 유지 근무일 수 (Worked days per rotation block)
        max_leaves_per_month: 월간 휴가 요청 한도 (Monthly leave request cap)
        group_link: 공지용 그룹 링크 (Group chat link shown after publishing)
    """

    __tablename__ = "account_settings"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    account_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("accounts.id", ondelete="CASCADE"), nullable=False, unique=True)
    rotation_block_days: Mapped[int | None] = mapped_column(Integer, nullable=True)
    max_leaves_per_month: Mapped[int | None] = mapped_column(Integer, nullable=True)
    group_link: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), onupdate=lambda: datetime.now(timezone.utc))

    account = relationship("Account", back_populates="settings")
