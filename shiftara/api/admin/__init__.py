"""관리자 API 라우터 패키지 — 모든 관리자 엔드포인트 통합.

Admin API Router package — Aggregates all admin-facing endpoints
into a single router for inclusion in the FastAPI application.
Every router except account creation is scoped by the ``X-Account-Id`` header.

Included routers:
    - accounts: 계정 및 설정 (Accounts and roster settings)
    - employees: 직원 관리 (Employee management)
    - shift_patterns: 시프트 패턴 관리 (Shift pattern management)
    - roster: 주간 로스터 (Weekly grid, slot edits, auto-fill, preview)
    - requests: 교대/휴가 요청 결재 (Swap/leave request decisions)
"""

from fastapi import APIRouter

from shiftara.api.admin.accounts import router as accounts_router
from shiftara.api.admin.employees import router as employees_router
from shiftara.api.admin.shift_patterns import router as shift_patterns_router
from shiftara.api.admin.roster import router as roster_router
from shiftara.api.admin.requests import router as requests_router

admin_router: APIRouter = APIRouter()

# 계정/설정: /accounts, /settings
admin_router.include_router(accounts_router, tags=["Admin Accounts"])
admin_router.include_router(employees_router, prefix="/employees", tags=["Admin Employees"])
admin_router.include_router(shift_patterns_router, prefix="/shift-patterns", tags=["Admin Shift Patterns"])

# ---------------------------------------------------------------------------
# 로스터 및 요청 라우터 등록 — Roster and request routers
# ---------------------------------------------------------------------------
admin_router.include_router(roster_router, prefix="/roster", tags=["Admin Roster"])
admin_router.include_router(requests_router, prefix="/requests", tags=["Admin Requests"])
