"""SQLAlchemy ORM 모델 패키지 — 모든 도메인 모델의 중앙 임포트 지점.

SQLAlchemy ORM models package — Central import point for all domain models.
Importing from this package ensures all models are registered with the
SQLAlchemy metadata, which is required for Alembic migrations and
relationship resolution.

Modules:
    account: 계정 및 계정 설정 (Account tenant and roster settings)
    employee: 직원 및 시프트 패턴 (Employees and shift patterns)
    schedule: 스케줄 엔트리 및 교대/휴가 요청 (Schedule entries and requests)
"""

from shiftara.models.account import Account, AccountSetting
from shiftara.models.employee import Employee, ShiftPattern
from shiftara.models.schedule import ScheduleEntry, ShiftRequest

__all__ = [
    "Account", "AccountSetting",
    "Employee", "ShiftPattern",
    "ScheduleEntry", "ShiftRequest",
]
