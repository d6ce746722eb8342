"""교대/휴가 요청 Pydantic 스키마.

Swap and leave request schemas. Every employee-side action carries the
employee id and PIN; the admin side is scoped by account.
"""

from datetime import date, datetime
from typing import Literal
from uuid import UUID

from pydantic import BaseModel, model_validator

from shiftara.schemas.common import Pin

RequestStatus = Literal["pending_partner", "pending_admin", "approved", "rejected"]


class PinCredential(BaseModel):
    """직원 PIN 자격 증명 (Employee id + PIN)."""

    employee_id: UUID
    pin: Pin


class ShiftRequestCreate(PinCredential):
    """교대/휴가 요청 생성 스키마.

    Attributes:
        type: "swap" 또는 "leave"
        original_date: 요청자의 근무일(교대) 또는 휴가일(휴가)
        target_date: 교대 대상 날짜 (swap only)
        target_employee_id: 교대 대상 직원 (swap only)
        reason: 사유
    """

    type: Literal["swap", "leave"]
    original_date: date
    target_date: date | None = None
    target_employee_id: UUID | None = None
    reason: str = ""

    @model_validator(mode="after")
    def _swap_needs_target(self) -> "ShiftRequestCreate":
        if self.type == "swap" and (self.target_date is None or self.target_employee_id is None):
            raise ValueError("swap requests need target_date and target_employee_id")
        return self


class PartnerDecision(PinCredential):
    approve: bool


class AdminDecision(BaseModel):
    confirm_leave_overwrite: bool = False


class ShiftRequestResponse(BaseModel):
    id: str
    type: str
    status: str
    requester_id: str
    requester_name: str | None = None
    original_date: date
    target_date: date | None = None
    target_employee_id: str | None = None
    target_employee_name: str | None = None
    reason: str
    created_at: datetime
    partner_responded_at: datetime | None = None
    decided_at: datetime | None = None


class SwapCandidate(BaseModel):
    """교대 후보 — 특정 날짜에 근무가 있는 다른 직원."""

    entry_id: str
    employee_id: str
    employee_name: str
    work_date: date
    shift_name: str | None = None
    shift_time: str | None = None
