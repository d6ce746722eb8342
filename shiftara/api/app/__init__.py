"""앱 API 라우터 패키지 — 모든 앱(직원용) 엔드포인트 통합.

App API Router package — Aggregates all app-facing (employee) endpoints
into a single router for inclusion in the FastAPI application.
All routes live under ``/accounts/{account_id}``.

Included routers:
    - schedule: 공개 근무표 (Public weekly/monthly calendar)
    - requests: 교대/휴가 요청, 파트너 수신함 (Swap/leave requests, partner inbox)
"""

from fastapi import APIRouter

from shiftara.api.app.schedule import router as schedule_router
from shiftara.api.app.requests import router as requests_router

app_router: APIRouter = APIRouter()

app_router.include_router(schedule_router, prefix="/accounts/{account_id}", tags=["App Schedule"])
app_router.include_router(requests_router, prefix="/accounts/{account_id}", tags=["App Requests"])
