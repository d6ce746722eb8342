"""스케줄링 코어 패키지 — 세션에 의존하지 않는 순수 로스터 로직.

Scheduling core package — Pure roster logic with no database access.
Services fetch data, call these functions, and persist the results.

Modules:
    grid: 주간 로스터 그리드 (Weekly roster grid model)
    grouping: 부서별 그룹 인덱스 (Division grouping index)
    autofill: 자동 배치 생성기 (Auto-fill generator)
    projection: 캘린더 뷰 프로젝션 (Calendar view projection)
"""

from shiftara.scheduling.autofill import GeneratedAssignment, auto_fill, order_patterns
from shiftara.scheduling.grid import RosterEmployee, RosterGrid, SlotView, build_grid, week_dates, week_start_of
from shiftara.scheduling.grouping import GroupingIndex, build_groups
from shiftara.scheduling.projection import CalendarView, project_calendar, view_range

__all__ = [
    "GeneratedAssignment", "auto_fill", "order_patterns",
    "RosterEmployee", "RosterGrid", "SlotView", "build_grid", "week_dates", "week_start_of",
    "GroupingIndex", "build_groups",
    "CalendarView", "project_calendar", "view_range",
]
