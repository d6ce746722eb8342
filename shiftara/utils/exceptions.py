"""커스텀 HTTP 예외 클래스 모듈.

Custom HTTP exception classes module.
Provides pre-configured HTTPException subclasses for common error patterns,
plus the structured roster error kinds raised by the scheduling core.

Roster errors carry a machine-readable ``code`` and return a detail dict
``{"code": ..., "message": ..., **context}`` so callers can branch on the
error kind rather than parsing text.

Usage:
    from shiftara.utils.exceptions import NotFoundError, QuotaExceededError
    raise NotFoundError("Employee not found")
    raise QuotaExceededError(limit=2)
"""

from datetime import date
from typing import Any
from uuid import UUID

from fastapi import HTTPException, status


class NotFoundError(HTTPException):
    """404 Not Found 예외 — 요청한 리소스를 찾을 수 없을 때 사용.

    404 Not Found exception.
    Raised when a requested resource (employee, pattern, request, etc.) does not exist.

    Args:
        detail: 오류 메시지 (Error message, default: "Resource not found")
    """

    def __init__(self, detail: str = "Resource not found") -> None:
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, detail=detail)


class DuplicateError(HTTPException):
    """409 Conflict 예외 — 중복 리소스 생성 시도 시 사용.

    409 Conflict exception.
    Raised when attempting to create a resource that violates a uniqueness constraint
    (e.g. duplicate shift pattern name within an account).

    Args:
        detail: 오류 메시지 (Error message, default: "Resource already exists")
    """

    def __init__(self, detail: str = "Resource already exists") -> None:
        super().__init__(status_code=status.HTTP_409_CONFLICT, detail=detail)


class ForbiddenError(HTTPException):
    """403 Forbidden 예외 — 권한 부족 시 사용.

    403 Forbidden exception.
    Raised when an employee acts on a request that is not addressed to them.

    Args:
        detail: 오류 메시지 (Error message, default: "Insufficient permissions")
    """

    def __init__(self, detail: str = "Insufficient permissions") -> None:
        super().__init__(status_code=status.HTTP_403_FORBIDDEN, detail=detail)


class BadRequestError(HTTPException):
    """400 Bad Request 예외 — 잘못된 요청 데이터 시 사용.

    400 Bad Request exception.
    Raised when the request data is invalid beyond what Pydantic validation catches.

    Args:
        detail: 오류 메시지 (Error message, default: "Bad request")
    """

    def __init__(self, detail: str = "Bad request") -> None:
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


# ---------------------------------------------------------------------------
# 로스터 도메인 예외 — Structured roster error kinds
# ---------------------------------------------------------------------------


def cell_ref(employee_id: UUID, work_date: date) -> dict[str, str]:
    """셀 식별자를 JSON 직렬화 가능한 dict로 변환합니다.

    Build a JSON-safe reference to one (employee, date) cell.
    """
    return {"employee_id": str(employee_id), "work_date": work_date.isoformat()}


class RosterError(HTTPException):
    """로스터 도메인 예외의 베이스 클래스.

    Base class for structured roster errors. Subclasses set ``code`` and
    ``http_status``; extra keyword arguments are merged into the detail dict.

    Attributes:
        code: 오류 종류 식별자 (Machine-readable error kind)
        message: 사람이 읽을 수 있는 메시지 (Human-readable message)
        context: 추가 컨텍스트 (Extra context, e.g. affected cells)
    """

    code: str = "roster_error"
    http_status: int = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str, **context: Any) -> None:
        self.message: str = message
        self.context: dict[str, Any] = context
        super().__init__(
            status_code=self.http_status,
            detail={"code": self.code, "message": message, **context},
        )


class InvalidPatternError(RosterError):
    """삭제되었거나 존재하지 않는 시프트 패턴을 참조할 때."""

    code = "invalid_pattern"
    http_status = status.HTTP_404_NOT_FOUND

    def __init__(self, pattern_id: UUID | None = None) -> None:
        super().__init__(
            "시프트 패턴을 찾을 수 없습니다 (Shift pattern no longer exists)",
            pattern_id=str(pattern_id) if pattern_id else None,
        )


class UniquenessViolationError(RosterError):
    """(직원, 날짜) 셀에 대한 재시도된 쓰기가 여전히 실패할 때.

    Raised when a delete-then-insert on one (employee, date) cell still
    collides with an existing row after the retry.
    """

    code = "uniqueness_violation"
    http_status = status.HTTP_409_CONFLICT

    def __init__(self, employee_id: UUID, work_date: date) -> None:
        super().__init__(
            "해당 날짜에 이미 스케줄이 존재합니다 (A schedule entry already exists for this cell)",
            cell=cell_ref(employee_id, work_date),
        )


class ConfigurationError(RosterError):
    """자동 배치 설정 오류 — 시프트 패턴이 없거나 로테이션 블록이 잘못됨."""

    code = "configuration_error"
    http_status = 422

    def __init__(self, message: str) -> None:
        super().__init__(message)


class InvalidTargetError(RosterError):
    """교대 요청 대상 직원이 대상 날짜에 근무가 없을 때."""

    code = "invalid_target"
    http_status = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str = "교대 대상 근무를 찾을 수 없습니다 (No filled shift for the swap target)") -> None:
        super().__init__(message)


class QuotaExceededError(RosterError):
    """월간 휴가 요청 한도 초과."""

    code = "quota_exceeded"
    http_status = status.HTTP_409_CONFLICT

    def __init__(self, limit: int) -> None:
        super().__init__(
            "이번 달 휴가 요청 한도를 초과했습니다 (Monthly leave request quota reached)",
            limit=limit,
        )


class PinMismatchError(RosterError):
    """PIN 검증 실패.

    PIN verification failure. The message is identical whether the employee
    was not found or the PIN did not match.
    """

    code = "pin_mismatch"
    http_status = status.HTTP_401_UNAUTHORIZED

    def __init__(self) -> None:
        super().__init__("PIN이 올바르지 않습니다 (Invalid PIN)")


class PartialBatchFailureError(RosterError):
    """배치 쓰기 중 일부 셀만 성공했을 때.

    Raised when only part of a batch (auto-fill or a two-row swap) was
    applied. Both lists contain cell references so the caller can reconcile
    or retry the remainder.
    """

    code = "partial_batch_failure"
    http_status = status.HTTP_409_CONFLICT

    def __init__(self, succeeded: list[dict[str, str]], failed: list[dict[str, str]]) -> None:
        super().__init__(
            f"{len(failed)}개 셀 저장 실패 ({len(failed)} cell(s) failed, {len(succeeded)} committed)",
            succeeded=succeeded,
            failed=failed,
        )


class ConfirmationRequiredError(RosterError):
    """휴가 셀 덮어쓰기 전 명시적 확인이 필요할 때."""

    code = "confirmation_required"
    http_status = status.HTTP_409_CONFLICT

    def __init__(self, employee_id: UUID, work_date: date) -> None:
        super().__init__(
            "대상 직원이 휴가 중입니다. 덮어쓰려면 확인이 필요합니다 "
            "(Target cell is on leave; confirm to overwrite)",
            cell=cell_ref(employee_id, work_date),
        )


class InvalidTransitionError(RosterError):
    """요청 상태 머신에서 허용되지 않는 전이."""

    code = "invalid_transition"
    http_status = status.HTTP_400_BAD_REQUEST

    def __init__(self, current_status: str, action: str) -> None:
        super().__init__(
            f"'{current_status}' 상태에서는 '{action}'을(를) 할 수 없습니다 "
            f"(Cannot {action} a request in status '{current_status}')",
            status=current_status,
        )
