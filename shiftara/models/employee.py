"""직원 및 시프트 패턴 SQLAlchemy ORM 모델 정의.

Employee and shift pattern SQLAlchemy ORM model definitions.

Tables:
    - employees: 직원 (Employees grouped by division, logically deleted via is_active)
    - shift_patterns: 근무 시간 패턴 (Shift time patterns, e.g. Pagi 08:00-16:00)
"""

import uuid
from datetime import datetime, time, timezone
from sqlalchemy import String, Boolean, DateTime, Time, ForeignKey, UniqueConstraint, Index, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from shiftara.database import Base


class Employee(Base):
    """직원 모델 — 로스터의 한 행(row)에 해당.

    Employee model — One row of the weekly roster.
    Employees are never hard-deleted because historical schedule entries
    reference them; deactivation sets ``is_active`` to False.

    Attributes:
        id: 고유 식별자 UUID (Unique identifier)
        account_id: 소속 계정 FK (Owning account, tenant partition key)
        name: 이름 (Display name)
        role: 직무 라벨 (Role label, e.g. "Barista")
        division: 부서/그룹 라벨 (Division label used for grouping, optional)
        phone: 연락처 (Phone number, optional)
        pin_hash: bcrypt 해시된 셀프서비스 PIN (Hashed self-service PIN, optional)
        is_active: 활성 상태 (Active flag, logical delete)
    """

    __tablename__ = "employees"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    account_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("accounts.id", ondelete="CASCADE"), nullable=False)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    role: Mapped[str] = mapped_column(String(100), nullable=False, default="")
    # 부서 — NULL 또는 빈 문자열이면 기본 그룹으로 분류 (Falls into the default group when blank)
    division: Mapped[str | None] = mapped_column(String(100), nullable=True)
    phone: Mapped[str | None] = mapped_column(String(30), nullable=True)
    # PIN 해시 — 평문 PIN은 저장하지 않음 (Plain PINs are never stored)
    pin_hash: Mapped[str | None] = mapped_column(String(255), nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), onupdate=lambda: datetime.now(timezone.utc))

    __table_args__ = (
        Index("ix_employees_account_active", "account_id", "is_active"),
    )

    account = relationship("Account", back_populates="employees")


class ShiftPattern(Base):
    """시프트 패턴 모델 — 계정 전역 근무 시간대 정의.

    Shift pattern model — Account-wide shift time window.
    Patterns are ordered by start time everywhere they are listed; the
    auto-fill rotation relies on that order.

    Attributes:
        id: 고유 식별자 UUID
        account_id: 소속 계정 FK
        name: 패턴 이름 (e.g. "Pagi", "Siang", "Malam")
        start_time: 시작 시각
        end_time: 종료 시각 (may be earlier than start_time for overnight shifts)

    Constraints:
        uq_shift_pattern_account_name: 계정 내 패턴 이름 고유 (Unique name per account)
    """

    __tablename__ = "shift_patterns"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    account_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("accounts.id", ondelete="CASCADE"), nullable=False)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    start_time: Mapped[time] = mapped_column(Time(), nullable=False)
    end_time: Mapped[time] = mapped_column(Time(), nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), onupdate=lambda: datetime.now(timezone.utc))

    __table_args__ = (
        UniqueConstraint("account_id", "name", name="uq_shift_pattern_account_name"),
    )
