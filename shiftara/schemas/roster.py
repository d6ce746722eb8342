"""로스터 Pydantic 스키마 — 그리드 조회, 슬롯 변경, 자동 배치.

Roster request/response schemas — grid reads, slot mutations, auto-fill.
Grid and slot shapes reuse the pure core models from ``shiftara.scheduling``.
"""

from datetime import date
from typing import Literal
from uuid import UUID

from pydantic import BaseModel, Field

from shiftara.scheduling.autofill import GeneratedAssignment
from shiftara.scheduling.grid import RosterEmployee, SlotView


class SlotCell(BaseModel):
    """로스터의 한 셀 주소 (Address of one roster cell)."""

    employee_id: UUID
    work_date: date


class SlotAssignRequest(SlotCell):
    shift_pattern_id: UUID


class SlotMoveRequest(BaseModel):
    """슬롯 이동/교환 요청.

    Move or swap request. ``confirm_leave_overwrite`` must be true when the
    target cell is on leave.
    """

    source: SlotCell
    target: SlotCell
    confirm_leave_overwrite: bool = False


class AutoFillRequest(BaseModel):
    """자동 배치 요청.

    Attributes:
        week: 대상 주 안의 임의 날짜 (Any date within the target week)
        rotation_block_days: 계정 설정 대신 사용할 블록 크기 (Override for the account setting)
        seed: 셔플 시드 — 재현 가능한 배치가 필요할 때 (Shuffle seed for reproducible runs)
    """

    week: date
    rotation_block_days: int | None = Field(default=None, ge=1, le=7)
    seed: int | None = None


class RosterRow(BaseModel):
    employee: RosterEmployee
    slots: list[SlotView]


class RosterGroup(BaseModel):
    name: str
    rows: list[RosterRow]


class RosterGridResponse(BaseModel):
    """주간 그리드 응답 — 그룹 순서대로 정렬된 행.

    Weekly grid response with rows in grouping index order.
    """

    week_start: date
    dates: list[date]
    groups: list[RosterGroup]


class AutoFillResponse(BaseModel):
    """자동 배치 결과.

    ``status`` is ``nothing_to_fill`` when the week had no empty cell,
    which is a normal outcome rather than an error.
    """

    status: Literal["filled", "nothing_to_fill"]
    created: int
    assignments: list[GeneratedAssignment]
    grid: RosterGridResponse
