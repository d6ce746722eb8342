"""직원/시프트 패턴 Pydantic 스키마.

Employee and shift pattern request/response schemas.
PINs are accepted on input only; responses expose ``has_pin`` instead.
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field

from shiftara.schemas.common import Pin, TimeOfDay


# === 직원 (Employee) 스키마 ===

class EmployeeCreate(BaseModel):
    """직원 생성 요청 스키마.

    Attributes:
        name: 이름 (Display name)
        role: 직무 라벨 (Role label)
        division: 부서 라벨, 비우면 기본 그룹 (Division label; blank = default group)
        phone: 연락처 (Phone number)
        pin: 4~6자리 셀프서비스 PIN (Optional self-service PIN)
    """

    name: str = Field(min_length=1, max_length=255)
    role: str = ""
    division: str | None = None
    phone: str | None = None
    pin: Pin | None = None


class EmployeeUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=255)
    role: str | None = None
    division: str | None = None
    phone: str | None = None
    is_active: bool | None = None


class EmployeePinUpdate(BaseModel):
    pin: Pin


class EmployeeResponse(BaseModel):
    id: str
    name: str
    role: str
    division: str | None = None
    phone: str | None = None
    is_active: bool
    has_pin: bool
    created_at: datetime


# === 시프트 패턴 (Shift Pattern) 스키마 ===

class ShiftPatternCreate(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    start_time: TimeOfDay
    end_time: TimeOfDay


class ShiftPatternUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=100)
    start_time: TimeOfDay | None = None
    end_time: TimeOfDay | None = None


class ShiftPatternBulkItem(BaseModel):
    """일괄 저장 항목 — id가 있으면 수정, 없으면 생성.

    Bulk save item: an id updates that pattern, no id creates one.
    """

    id: UUID | None = None
    name: str = Field(min_length=1, max_length=100)
    start_time: TimeOfDay
    end_time: TimeOfDay


class ShiftPatternBulkSave(BaseModel):
    """일괄 저장 요청 — 목록에 없는 기존 패턴은 삭제됨.

    Bulk save request. Existing patterns missing from the list are removed.
    """

    patterns: list[ShiftPatternBulkItem]


class ShiftPatternResponse(BaseModel):
    id: str
    name: str
    start_time: str
    end_time: str
