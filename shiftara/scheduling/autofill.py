"""자동 배치 생성기 — 빈 셀을 공정한 로테이션으로 채움.

Auto-fill generator — Fills every empty cell of a weekly grid.

Rotation rules:
    - Patterns are ordered by start time; ``P`` is the pattern count.
    - Groups are processed independently in the grouping index order.
    - Within a group the staff list is shuffled each run, then employee
      ``i`` starts on pattern ``i mod P`` so a group of P or more people
      covers every pattern on day one.
    - Each employee stays on one pattern for ``rotation_block_days``
      worked days before advancing to the next pattern (mod P).
    - Existing filled cells are kept and count as worked days; leave cells
      are kept and do not advance the rotation.

The generator is strictly additive: it never emits an assignment for a
cell that was already filled or on leave, and it does not mutate its input.
"""

import random
from collections.abc import Sequence
from datetime import date, time
from typing import Any
from uuid import UUID

from pydantic import BaseModel

from shiftara.scheduling.grid import RosterEmployee, RosterGrid
from shiftara.scheduling.grouping import GroupingIndex
from shiftara.utils.exceptions import ConfigurationError


class GeneratedAssignment(BaseModel):
    """자동 배치로 생성된 한 셀의 배정 (One generated cell assignment)."""

    employee_id: UUID
    work_date: date
    group_name: str
    pattern_id: UUID
    pattern_index: int
    shift_name: str
    start_time: time
    end_time: time


def order_patterns(patterns: Sequence[Any]) -> list[Any]:
    """시작 시각 기준으로 패턴을 정렬합니다 (동일 시각은 입력 순서 유지)."""
    return sorted(patterns, key=lambda p: p.start_time)


def rotation_index(start_offset: int, working_day_counter: int, rotation_block_days: int, pattern_count: int) -> int:
    shift_block: int = working_day_counter // rotation_block_days
    return (start_offset + shift_block) % pattern_count


def auto_fill(
    grid: RosterGrid,
    groups: GroupingIndex,
    patterns: Sequence[Any],
    rotation_block_days: int = 2,
    rng: random.Random | None = None,
) -> list[GeneratedAssignment]:
    """그리드의 빈 셀에 대한 배정 배치를 계산합니다.

    Compute the batch of assignments for every still-empty cell.

    Args:
        grid: 현재 주간 그리드 (Current weekly grid, not modified)
        groups: 그룹 인덱스 (Grouping index)
        patterns: 시프트 패턴 목록 (Shift patterns, any order)
        rotation_block_days: 패턴 유지 근무일 수 (Worked days per pattern block)
        rng: 셔플용 난수 생성기 — 테스트에서 시드 주입 (Random source for the shuffle)

    Returns:
        list[GeneratedAssignment]: 생성된 배정 목록, 채울 셀이 없으면 빈 목록
                                   (Generated assignments; empty when nothing to fill)

    Raises:
        ConfigurationError: 패턴이 없거나 로테이션 블록이 1 미만일 때
                            (No patterns configured or block size below 1)
    """
    if not patterns:
        raise ConfigurationError(
            "시프트 패턴이 설정되지 않았습니다 (No shift patterns configured; add one before auto-fill)"
        )
    if rotation_block_days < 1:
        raise ConfigurationError(
            f"로테이션 블록은 1일 이상이어야 합니다 (rotation_block_days must be >= 1, got {rotation_block_days})"
        )

    ordered: list[Any] = order_patterns(patterns)
    pattern_count: int = len(ordered)
    rng = rng or random.Random()
    batch: list[GeneratedAssignment] = []

    for group_name in groups.group_order:
        staff_list: list[RosterEmployee] = [e for e in groups.members(group_name) if e.id in grid.rows]
        rng.shuffle(staff_list)

        for staff_index, employee in enumerate(staff_list):
            start_offset: int = staff_index % pattern_count
            working_day_counter: int = 0

            for slot in grid.rows[employee.id]:
                if slot.kind == "leave":
                    continue
                if slot.kind == "filled":
                    working_day_counter += 1
                    continue

                index: int = rotation_index(start_offset, working_day_counter, rotation_block_days, pattern_count)
                pattern = ordered[index]
                batch.append(
                    GeneratedAssignment(
                        employee_id=employee.id,
                        work_date=slot.work_date,
                        group_name=group_name,
                        pattern_id=pattern.id,
                        pattern_index=index,
                        shift_name=pattern.name,
                        start_time=pattern.start_time,
                        end_time=pattern.end_time,
                    )
                )
                working_day_counter += 1

    return batch
