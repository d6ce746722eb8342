"""스케줄 관련 SQLAlchemy ORM 모델 정의.

Schedule-related SQLAlchemy ORM model definitions.
Represents committed roster cells and the employee swap/leave requests
that may change them.

Tables:
    - schedule_entries: 확정된 로스터 셀 (Committed roster cells, one per employee+date)
    - shift_requests: 교대/휴가 요청 (Swap and leave requests)
"""

import uuid
from datetime import date, datetime, time, timezone
from sqlalchemy import String, DateTime, Date, Time, Text, ForeignKey, UniqueConstraint, Index, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from shiftara.database import Base

# 셀 종류 — Entry kinds (an empty cell has no row at all)
ENTRY_FILLED: str = "filled"
ENTRY_LEAVE: str = "leave"

# 요청 종류/상태 — Request types and statuses
REQUEST_SWAP: str = "swap"
REQUEST_LEAVE: str = "leave"
STATUS_PENDING_PARTNER: str = "pending_partner"
STATUS_PENDING_ADMIN: str = "pending_admin"
STATUS_APPROVED: str = "approved"
STATUS_REJECTED: str = "rejected"


class ScheduleEntry(Base):
    """스케줄 엔트리 모델 — 한 직원의 하루 근무 또는 휴가.

    Schedule entry model — One committed cell of the roster.
    The shift name and times are copied from the pattern at write time, so
    later edits to a ShiftPattern never change entries already assigned.

    Attributes:
        id: 고유 식별자 UUID (Unique identifier)
        account_id: 소속 계정 FK (Owning account)
        employee_id: 직원 FK (Employee who owns the cell)
        work_date: 근무 날짜 (Calendar date)
        kind: "filled" 또는 "leave" (Entry kind)
        shift_name: 패턴 이름 스냅샷 (Pattern name snapshot, NULL for leave)
        start_time: 시작 시각 스냅샷 (Start time snapshot, NULL for leave)
        end_time: 종료 시각 스냅샷 (End time snapshot, NULL for leave)
        source: 작성 경로 — manual / auto_fill / swap (How the entry was written)

    Constraints:
        uq_schedule_entry_employee_date: 직원+날짜당 하나의 엔트리
            (At most one entry per employee and date)
    """

    __tablename__ = "schedule_entries"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    account_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("accounts.id", ondelete="CASCADE"), nullable=False)
    employee_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("employees.id", ondelete="CASCADE"), nullable=False)
    work_date: Mapped[date] = mapped_column(Date, nullable=False)
    kind: Mapped[str] = mapped_column(String(20), nullable=False, default=ENTRY_FILLED)
    # 시간 스냅샷 — Value copy of the pattern, not a foreign key
    shift_name: Mapped[str | None] = mapped_column(String(100), nullable=True)
    start_time: Mapped[time | None] = mapped_column(Time, nullable=True)
    end_time: Mapped[time | None] = mapped_column(Time, nullable=True)
    source: Mapped[str] = mapped_column(String(20), nullable=False, default="manual")
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))

    __table_args__ = (
        UniqueConstraint("employee_id", "work_date", name="uq_schedule_entry_employee_date"),
        Index("ix_schedule_entries_account_date", "account_id", "work_date"),
    )

    employee = relationship("Employee")


class ShiftRequest(Base):
    """교대/휴가 요청 모델 — 직원 셀프서비스 요청.

    Shift request model — Employee self-service swap or leave request.

    Status Flow:
        swap:  pending_partner → pending_admin → approved | rejected
               (partner may also reject straight from pending_partner)
        leave: pending_admin → approved | rejected

    Attributes:
        id: 고유 식별자 UUID
        account_id: 소속 계정 FK
        requester_id: 요청 직원 FK
        type: "swap" 또는 "leave"
        status: 현재 상태
        original_date: 요청자의 원래 근무일 (또는 휴가일)
        target_date: 교대 대상 날짜 (swap only)
        target_employee_id: 교대 대상 직원 FK (swap only)
        reason: 사유
        partner_responded_at: 파트너 응답 일시
        decided_at: 관리자 결정 일시
    """

    __tablename__ = "shift_requests"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    account_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("accounts.id", ondelete="CASCADE"), nullable=False)
    requester_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("employees.id", ondelete="CASCADE"), nullable=False)
    type: Mapped[str] = mapped_column(String(10), nullable=False)
    status: Mapped[str] = mapped_column(String(20), nullable=False)
    original_date: Mapped[date] = mapped_column(Date, nullable=False)
    target_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    target_employee_id: Mapped[uuid.UUID | None] = mapped_column(Uuid, ForeignKey("employees.id", ondelete="CASCADE"), nullable=True)
    reason: Mapped[str] = mapped_column(Text, nullable=False, default="")
    partner_responded_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    decided_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), onupdate=lambda: datetime.now(timezone.utc))

    __table_args__ = (
        Index("ix_shift_requests_account_status", "account_id", "status"),
        Index("ix_shift_requests_requester_created", "requester_id", "created_at"),
    )

    requester = relationship("Employee", foreign_keys=[requester_id])
    target_employee = relationship("Employee", foreign_keys=[target_employee_id])
