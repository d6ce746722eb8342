"""교대/휴가 요청 서비스 — 요청 상태 머신 비즈니스 로직.

Shift Request Service — Business logic for the swap/leave request lifecycle.

Status Flow:
    swap:  pending_partner → (partner approves) → pending_admin → approved | rejected
           pending_partner → (partner rejects)  → rejected
    leave: pending_admin → approved | rejected

Employee actions are PIN-gated through ``credential_service``. Admin
approval is the only step that changes the roster.
"""

from datetime import date, datetime, timedelta, timezone
from typing import Sequence
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from shiftara.models.employee import Employee
from shiftara.models.schedule import (
    ENTRY_FILLED,
    REQUEST_LEAVE,
    REQUEST_SWAP,
    STATUS_APPROVED,
    STATUS_PENDING_ADMIN,
    STATUS_PENDING_PARTNER,
    STATUS_REJECTED,
    ScheduleEntry,
    ShiftRequest,
)
from shiftara.repositories.employee_repository import employee_repository
from shiftara.repositories.schedule_repository import schedule_entry_repository, shift_request_repository
from shiftara.scheduling.grid import format_shift_time
from shiftara.schemas.request import (
    PartnerDecision,
    PinCredential,
    ShiftRequestCreate,
    ShiftRequestResponse,
    SwapCandidate,
)
from shiftara.schemas.roster import SlotCell
from shiftara.services.account_service import account_service
from shiftara.services.credential_service import credential_service
from shiftara.services.roster_service import SOURCE_SWAP, roster_service
from shiftara.utils.exceptions import (
    BadRequestError,
    ForbiddenError,
    InvalidTargetError,
    InvalidTransitionError,
    NotFoundError,
    QuotaExceededError,
)


def month_bounds(moment: datetime) -> tuple[datetime, datetime]:
    """해당 시각이 속한 달의 [시작, 다음 달 시작) 범위.

    Calendar month containing ``moment`` as a half-open range.
    """
    start: datetime = moment.replace(day=1, hour=0, minute=0, second=0, microsecond=0)
    next_start: datetime = (start + timedelta(days=32)).replace(day=1)
    return start, next_start


class ShiftRequestService:
    """교대/휴가 요청 서비스."""

    async def _employee_names(self, db: AsyncSession, account_id: UUID) -> dict[UUID, str]:
        employees: Sequence[Employee] = await employee_repository.list_by_account(
            db, account_id, include_inactive=True
        )
        return {e.id: e.name for e in employees}

    def _to_response(self, req: ShiftRequest, names: dict[UUID, str]) -> ShiftRequestResponse:
        return ShiftRequestResponse(
            id=str(req.id),
            type=req.type,
            status=req.status,
            requester_id=str(req.requester_id),
            requester_name=names.get(req.requester_id),
            original_date=req.original_date,
            target_date=req.target_date,
            target_employee_id=str(req.target_employee_id) if req.target_employee_id else None,
            target_employee_name=names.get(req.target_employee_id) if req.target_employee_id else None,
            reason=req.reason,
            created_at=req.created_at,
            partner_responded_at=req.partner_responded_at,
            decided_at=req.decided_at,
        )

    async def _get_request(self, db: AsyncSession, account_id: UUID, request_id: UUID) -> ShiftRequest:
        req: ShiftRequest | None = await shift_request_repository.get_by_id(db, request_id, account_id)
        if req is None:
            raise NotFoundError("요청을 찾을 수 없습니다 (Request not found)")
        return req

    async def _check_leave_quota(self, db: AsyncSession, account_id: UUID, employee_id: UUID) -> None:
        """월간 휴가 요청 한도를 검사합니다 (생성일 기준 달력 월).

        Raises:
            QuotaExceededError: 이번 달 한도에 도달했을 때 (Monthly cap reached)
        """
        limit: int = await account_service.resolve_max_leaves(db, account_id)
        month_start, next_month = month_bounds(datetime.now(timezone.utc))
        used: int = await shift_request_repository.count_leave_requests(db, employee_id, month_start, next_month)
        if used >= limit:
            raise QuotaExceededError(limit)

    async def _require_filled(
        self, db: AsyncSession, account_id: UUID, employee_id: UUID, work_date: date
    ) -> ScheduleEntry | None:
        entry = await schedule_entry_repository.get_cell(db, account_id, employee_id, work_date)
        if entry is None or entry.kind != ENTRY_FILLED:
            return None
        return entry

    async def create_request(
        self,
        db: AsyncSession,
        account_id: UUID,
        data: ShiftRequestCreate,
    ) -> ShiftRequestResponse:
        """교대/휴가 요청을 생성합니다.

        Create a swap or leave request after verifying the requester's PIN.
        A swap starts at ``pending_partner``; a leave request goes straight
        to ``pending_admin``.

        Raises:
            PinMismatchError: PIN 검증 실패 (PIN verification failed)
            QuotaExceededError: 월간 휴가 한도 초과 (Monthly leave cap reached)
            BadRequestError: 자기 자신과 교대하거나 원래 근무가 없을 때
            InvalidTargetError: 대상 직원이 대상 날짜에 근무가 없을 때
        """
        requester: Employee = await credential_service.verify_pin(db, account_id, data.employee_id, data.pin)

        if data.type == REQUEST_LEAVE:
            await self._check_leave_quota(db, account_id, requester.id)
            req: ShiftRequest = await shift_request_repository.create(db, {
                "account_id": account_id,
                "requester_id": requester.id,
                "type": REQUEST_LEAVE,
                "status": STATUS_PENDING_ADMIN,
                "original_date": data.original_date,
                "reason": data.reason,
            })
            return self._to_response(req, {requester.id: requester.name})

        if data.target_employee_id == requester.id:
            raise BadRequestError("자기 자신과 교대할 수 없습니다 (Cannot swap with yourself)")
        if await self._require_filled(db, account_id, requester.id, data.original_date) is None:
            raise BadRequestError("원래 날짜에 근무가 없습니다 (No shift on the original date)")

        partner: Employee | None = await employee_repository.get_by_id(db, data.target_employee_id, account_id)
        if partner is None or not partner.is_active:
            raise InvalidTargetError("교대 대상 직원을 찾을 수 없습니다 (Swap partner not found)")
        if await self._require_filled(db, account_id, partner.id, data.target_date) is None:
            raise InvalidTargetError()

        req = await shift_request_repository.create(db, {
            "account_id": account_id,
            "requester_id": requester.id,
            "type": REQUEST_SWAP,
            "status": STATUS_PENDING_PARTNER,
            "original_date": data.original_date,
            "target_date": data.target_date,
            "target_employee_id": partner.id,
            "reason": data.reason,
        })
        return self._to_response(req, {requester.id: requester.name, partner.id: partner.name})

    async def list_for_admin(
        self,
        db: AsyncSession,
        account_id: UUID,
        status: str | None = None,
    ) -> list[ShiftRequestResponse]:
        requests = await shift_request_repository.get_by_filters(db, account_id, status=status)
        names = await self._employee_names(db, account_id)
        return [self._to_response(r, names) for r in requests]

    async def inbox(
        self,
        db: AsyncSession,
        account_id: UUID,
        credential: PinCredential,
    ) -> list[ShiftRequestResponse]:
        """파트너 수신함 — 나를 대상으로 한 대기 중 교대 요청.

        Partner inbox: pending swap requests that target the employee.
        """
        employee: Employee = await credential_service.verify_pin(
            db, account_id, credential.employee_id, credential.pin
        )
        requests = await shift_request_repository.get_by_filters(
            db, account_id, status=STATUS_PENDING_PARTNER, target_employee_id=employee.id
        )
        names = await self._employee_names(db, account_id)
        return [self._to_response(r, names) for r in requests]

    async def list_swap_candidates(
        self,
        db: AsyncSession,
        account_id: UUID,
        work_date: date,
        exclude_employee_id: UUID | None = None,
    ) -> list[SwapCandidate]:
        entries = await schedule_entry_repository.get_filled_on(db, account_id, work_date, exclude_employee_id)
        names = await self._employee_names(db, account_id)
        return [
            SwapCandidate(
                entry_id=str(entry.id),
                employee_id=str(entry.employee_id),
                employee_name=names.get(entry.employee_id, ""),
                work_date=entry.work_date,
                shift_name=entry.shift_name,
                shift_time=format_shift_time(entry.start_time, entry.end_time),
            )
            for entry in entries
        ]

    async def partner_respond(
        self,
        db: AsyncSession,
        account_id: UUID,
        request_id: UUID,
        data: PartnerDecision,
    ) -> ShiftRequestResponse:
        """파트너가 교대 요청에 응답합니다. 로스터는 변경되지 않습니다.

        Partner response to a swap request. Approval forwards the request to
        the admin; rejection closes it. The roster is not touched.

        Raises:
            PinMismatchError: PIN 검증 실패
            ForbiddenError: 요청 대상이 아닐 때 (Request is not addressed to this employee)
            InvalidTransitionError: pending_partner 상태가 아닐 때
        """
        partner: Employee = await credential_service.verify_pin(db, account_id, data.employee_id, data.pin)
        req: ShiftRequest = await self._get_request(db, account_id, request_id)
        if req.type != REQUEST_SWAP or req.target_employee_id != partner.id:
            raise ForbiddenError("이 요청에 응답할 수 없습니다 (This request is not addressed to you)")
        if req.status != STATUS_PENDING_PARTNER:
            raise InvalidTransitionError(req.status, "respond to")

        req.status = STATUS_PENDING_ADMIN if data.approve else STATUS_REJECTED
        req.partner_responded_at = datetime.now(timezone.utc)
        await db.flush()
        await db.refresh(req)
        return self._to_response(req, await self._employee_names(db, account_id))

    async def admin_approve(
        self,
        db: AsyncSession,
        account_id: UUID,
        request_id: UUID,
        confirm_leave_overwrite: bool = False,
    ) -> ShiftRequestResponse:
        """관리자 승인 — 로스터에 요청을 반영합니다.

        Admin approval. A swap runs ``move_or_swap`` from the requester's
        original cell to the partner's target cell; a leave request marks
        the requester's original date as leave.

        Raises:
            InvalidTransitionError: pending_admin 상태가 아닐 때
            ConfirmationRequiredError: 대상 셀이 휴가이고 확인이 없을 때
        """
        req: ShiftRequest = await self._get_request(db, account_id, request_id)
        if req.status != STATUS_PENDING_ADMIN:
            raise InvalidTransitionError(req.status, "approve")

        if req.type == REQUEST_SWAP:
            await roster_service.move_or_swap(
                db,
                account_id,
                SlotCell(employee_id=req.requester_id, work_date=req.original_date),
                SlotCell(employee_id=req.target_employee_id, work_date=req.target_date),
                confirm_leave_overwrite=confirm_leave_overwrite,
                entry_source=SOURCE_SWAP,
            )
        else:
            await roster_service.mark_leave(db, account_id, req.requester_id, req.original_date)

        req.status = STATUS_APPROVED
        req.decided_at = datetime.now(timezone.utc)
        await db.flush()
        await db.refresh(req)
        return self._to_response(req, await self._employee_names(db, account_id))

    async def admin_reject(
        self,
        db: AsyncSession,
        account_id: UUID,
        request_id: UUID,
    ) -> ShiftRequestResponse:
        req: ShiftRequest = await self._get_request(db, account_id, request_id)
        if req.status not in (STATUS_PENDING_PARTNER, STATUS_PENDING_ADMIN):
            raise InvalidTransitionError(req.status, "reject")

        req.status = STATUS_REJECTED
        req.decided_at = datetime.now(timezone.utc)
        await db.flush()
        await db.refresh(req)
        return self._to_response(req, await self._employee_names(db, account_id))


shift_request_service: ShiftRequestService = ShiftRequestService()
