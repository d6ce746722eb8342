"""그룹 인덱스 — 직원을 부서별로 분할하고 결정적 정렬 순서를 부여.

Grouping index — Partitions active employees into divisions with a
deterministic order, shared by the grid renderer and the auto-fill generator.
"""

from collections.abc import Iterable
from typing import Any

from pydantic import BaseModel

from shiftara.scheduling.grid import RosterEmployee, is_active

DEFAULT_GROUP_NAME: str = "General"


class GroupingIndex(BaseModel):
    """부서별 그룹 인덱스.

    Attributes:
        group_order: 사전순 그룹 이름 목록 (Lexicographically sorted group names)
        groups_by_name: 그룹 이름 → 이름순 직원 목록 (Group → employees sorted by name, id)
    """

    group_order: list[str] = []
    groups_by_name: dict[str, list[RosterEmployee]] = {}

    def members(self, group_name: str) -> list[RosterEmployee]:
        return self.groups_by_name.get(group_name, [])


def group_name_for(division: str | None, default_group: str = DEFAULT_GROUP_NAME) -> str:
    if division is None or not division.strip():
        return default_group
    return division.strip()


def build_groups(employees: Iterable[Any], default_group: str = DEFAULT_GROUP_NAME) -> GroupingIndex:
    """활성 직원을 부서별로 묶어 그룹 인덱스를 생성합니다.

    Build the grouping index. Employees without a division label fall into
    ``default_group``; groups are ordered by name and members by
    (name, id) so rendering and generation iterate identically every time.

    Args:
        employees: 직원 목록 (ORM rows or RosterEmployee)
        default_group: 부서 미지정 그룹 이름 (Group name for blank divisions)

    Returns:
        GroupingIndex: 그룹 인덱스 (Grouping index)
    """
    groups: dict[str, list[RosterEmployee]] = {}
    for employee in employees:
        if not is_active(employee):
            continue
        snapshot: RosterEmployee = RosterEmployee.model_validate(employee)
        groups.setdefault(group_name_for(snapshot.division, default_group), []).append(snapshot)

    for members in groups.values():
        members.sort(key=lambda e: (e.name, str(e.id)))

    return GroupingIndex(group_order=sorted(groups), groups_by_name=groups)
