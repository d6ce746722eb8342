"""발행/미리보기 프로젝션 — 그리드 또는 엔트리로부터 읽기 전용 캘린더 뷰 생성.

Publish/preview projection — Read-only calendar view derived from a roster
grid or a flat list of schedule entries. Weekly and monthly views use the
same function; only the date range differs.
"""

import calendar
from collections.abc import Iterable
from datetime import date, timedelta
from typing import Any, Literal
from uuid import UUID

from pydantic import BaseModel

from shiftara.scheduling.grid import (
    RosterGrid,
    SlotKind,
    SlotView,
    format_shift_time,
    slot_from_entry,
    week_start_of,
)
from shiftara.scheduling.grouping import GroupingIndex

ViewMode = Literal["weekly", "monthly"]


class CalendarCell(BaseModel):
    work_date: date
    kind: SlotKind
    label: str
    shift_name: str | None = None
    shift_time: str | None = None


class CalendarRow(BaseModel):
    employee_id: UUID
    employee_name: str
    role: str | None = None
    cells: list[CalendarCell]


class CalendarGroup(BaseModel):
    name: str
    rows: list[CalendarRow]


class CalendarView(BaseModel):
    """캘린더 뷰 (Calendar view for one date range).

    Attributes:
        start: 시작일 (First date, inclusive)
        end: 종료일 (Last date, inclusive)
        dates: 열 날짜 목록 (Column dates; 7 for weekly, 28-31 for monthly)
        groups: 그룹별 행 목록 (Rows per group, in grouping index order)
    """

    start: date
    end: date
    dates: list[date]
    groups: list[CalendarGroup]


def date_span(start: date, end: date) -> list[date]:
    return [start + timedelta(days=i) for i in range((end - start).days + 1)]


def week_range(day: date) -> tuple[date, date]:
    monday: date = week_start_of(day)
    return monday, monday + timedelta(days=6)


def month_range(day: date) -> tuple[date, date]:
    last_day: int = calendar.monthrange(day.year, day.month)[1]
    return day.replace(day=1), day.replace(day=last_day)


def view_range(day: date, view: ViewMode) -> tuple[date, date]:
    """보기 모드에 따른 날짜 범위 (Date range for a view mode)."""
    if view == "monthly":
        return month_range(day)
    return week_range(day)


def _render_cell(slot: SlotView | None, work_date: date, leave_label: str) -> CalendarCell:
    if slot is None or slot.kind == "empty":
        return CalendarCell(work_date=work_date, kind="empty", label="")
    if slot.kind == "leave":
        return CalendarCell(work_date=work_date, kind="leave", label=leave_label)
    return CalendarCell(
        work_date=work_date,
        kind="filled",
        label=slot.shift_name or "Shift",
        shift_name=slot.shift_name,
        shift_time=format_shift_time(slot.start_time, slot.end_time),
    )


def project_calendar(
    source: RosterGrid | Iterable[Any],
    start: date,
    end: date,
    groups: GroupingIndex,
    leave_label: str = "CUTI / LIBUR",
) -> CalendarView:
    """그리드 또는 엔트리 목록을 캘린더 뷰로 투영합니다.

    Project a roster grid or a list of schedule entries onto a calendar.
    Rows follow the grouping index order; dates without a committed cell
    render as empty. The column count is whatever the range spans.

    Args:
        source: 주간 그리드 또는 엔트리 목록 (RosterGrid or ScheduleEntry rows)
        start: 시작일 (First date, inclusive)
        end: 종료일 (Last date, inclusive)
        groups: 그룹 인덱스 (Grouping index for row order)
        leave_label: 휴가 셀 라벨 (Label for leave cells)

    Returns:
        CalendarView: 캘린더 뷰 (Calendar view)

    Raises:
        ValueError: 종료일이 시작일보다 앞일 때 (When end precedes start)
    """
    if end < start:
        raise ValueError("end must not precede start")

    cells: dict[tuple[UUID, date], SlotView] = {}
    if isinstance(source, RosterGrid):
        for row in source.rows.values():
            for slot in row:
                cells[(slot.employee_id, slot.work_date)] = slot
    else:
        for entry in source:
            cells.setdefault((entry.employee_id, entry.work_date), slot_from_entry(entry))

    dates: list[date] = date_span(start, end)
    calendar_groups: list[CalendarGroup] = []
    for group_name in groups.group_order:
        rows: list[CalendarRow] = []
        for employee in groups.members(group_name):
            rows.append(
                CalendarRow(
                    employee_id=employee.id,
                    employee_name=employee.name,
                    role=employee.role,
                    cells=[_render_cell(cells.get((employee.id, d)), d, leave_label) for d in dates],
                )
            )
        calendar_groups.append(CalendarGroup(name=group_name, rows=rows))

    return CalendarView(start=start, end=end, dates=dates, groups=calendar_groups)
