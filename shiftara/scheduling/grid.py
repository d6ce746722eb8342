"""로스터 그리드 모델 — 주간 스케줄의 인메모리 표현.

Roster grid model — In-memory representation of one week's schedule.
A grid maps each active employee to exactly seven day-slots (Monday to
Sunday), each slot being empty, filled or leave. Grids are derived from
storage on every read and never persisted as such.
"""

from collections.abc import Iterable
from datetime import date, time, timedelta
from typing import Any, Literal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, computed_field

SlotKind = Literal["empty", "filled", "leave"]

DAYS_PER_WEEK: int = 7


def week_start_of(day: date) -> date:
    """주어진 날짜가 속한 ISO 주의 월요일을 반환합니다.

    Normalize a date to the Monday of its ISO week.
    """
    return day - timedelta(days=day.weekday())


def week_dates(week_start: date) -> list[date]:
    """월요일부터 일요일까지 7개 날짜 목록 (Monday..Sunday of the week)."""
    monday: date = week_start_of(week_start)
    return [monday + timedelta(days=i) for i in range(DAYS_PER_WEEK)]


def format_shift_time(start: time | None, end: time | None) -> str | None:
    """시작/종료 시각을 "HH:MM - HH:MM" 문자열로 변환합니다."""
    if start is None or end is None:
        return None
    return f"{start.strftime('%H:%M')} - {end.strftime('%H:%M')}"


def is_active(employee: Any) -> bool:
    # 영속화 전 객체는 is_active가 None일 수 있음 — transient objects may carry None
    return getattr(employee, "is_active", True) is not False


class RosterEmployee(BaseModel):
    """그리드/그룹에서 사용하는 직원 스냅샷.

    Employee snapshot used by the grid and grouping index. Built from ORM
    rows via ``from_attributes`` so the core never touches a session.
    """

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    role: str | None = None
    division: str | None = None


class SlotView(BaseModel):
    """그리드의 한 셀 (One cell of the grid)."""

    employee_id: UUID
    work_date: date
    kind: SlotKind = "empty"
    entry_id: UUID | None = None
    shift_name: str | None = None
    start_time: time | None = None
    end_time: time | None = None

    @computed_field  # type: ignore[prop-decorator]
    @property
    def shift_time(self) -> str | None:
        return format_shift_time(self.start_time, self.end_time)


class RosterGrid(BaseModel):
    """주간 로스터 그리드.

    Weekly roster grid.

    Attributes:
        week_start: 해당 주의 월요일 (Monday of the viewed week)
        employees: 행 키별 직원 스냅샷 (Employee snapshot per row key)
        rows: 행 키(직원 ID) → 7개 슬롯 (Row key → seven ordered slots)
    """

    week_start: date
    employees: dict[UUID, RosterEmployee] = {}
    rows: dict[UUID, list[SlotView]] = {}

    @property
    def dates(self) -> list[date]:
        return week_dates(self.week_start)

    def slot(self, employee_id: UUID, work_date: date) -> SlotView | None:
        """(직원, 날짜) 셀을 조회합니다. 주 범위 밖이면 None."""
        row: list[SlotView] | None = self.rows.get(employee_id)
        if row is None:
            return None
        index: int = (work_date - self.week_start).days
        if index < 0 or index >= DAYS_PER_WEEK:
            return None
        return row[index]

    def empty_cell_count(self) -> int:
        return sum(1 for row in self.rows.values() for s in row if s.kind == "empty")


def slot_from_entry(entry: Any) -> SlotView:
    """스케줄 엔트리를 슬롯 뷰로 투영합니다 (Project a committed entry to a slot)."""
    if entry.kind == "leave":
        return SlotView(
            employee_id=entry.employee_id,
            work_date=entry.work_date,
            kind="leave",
            entry_id=entry.id,
        )
    return SlotView(
        employee_id=entry.employee_id,
        work_date=entry.work_date,
        kind="filled",
        entry_id=entry.id,
        shift_name=entry.shift_name,
        start_time=entry.start_time,
        end_time=entry.end_time,
    )


def build_grid(week_start: date, employees: Iterable[Any], entries: Iterable[Any]) -> RosterGrid:
    """직원 목록과 확정 엔트리로 주간 그리드를 생성합니다.

    Build the weekly grid from the active employee list and the committed
    entries. Every active employee gets a row of seven slots, even with no
    entries; entries outside the week or for unknown employees are ignored.
    Pure and idempotent: the same snapshot always yields the same grid.

    Args:
        week_start: 주 안의 임의 날짜 — 월요일로 정규화됨 (Any date in the week)
        employees: 직원 목록 (ORM rows or RosterEmployee)
        entries: 스케줄 엔트리 목록 (ScheduleEntry rows)

    Returns:
        RosterGrid: 주간 그리드 (Weekly grid)
    """
    monday: date = week_start_of(week_start)
    dates: list[date] = week_dates(monday)

    by_cell: dict[tuple[UUID, date], Any] = {}
    for entry in entries:
        by_cell.setdefault((entry.employee_id, entry.work_date), entry)

    grid_employees: dict[UUID, RosterEmployee] = {}
    rows: dict[UUID, list[SlotView]] = {}
    for employee in employees:
        if not is_active(employee):
            continue
        snapshot: RosterEmployee = RosterEmployee.model_validate(employee)
        grid_employees[snapshot.id] = snapshot
        row: list[SlotView] = []
        for day in dates:
            entry = by_cell.get((snapshot.id, day))
            if entry is None:
                row.append(SlotView(employee_id=snapshot.id, work_date=day))
            else:
                row.append(slot_from_entry(entry))
        rows[snapshot.id] = row

    return RosterGrid(week_start=monday, employees=grid_employees, rows=rows)
