"""시프트 패턴 서비스 — Shift Pattern CRUD 및 일괄 저장 비즈니스 로직.

Shift Pattern Service — Business logic for shift pattern CRUD and bulk save.
"""

from datetime import time
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from shiftara.models.employee import ShiftPattern
from shiftara.repositories.employee_repository import shift_pattern_repository
from shiftara.schemas.employee import (
    ShiftPatternBulkSave,
    ShiftPatternCreate,
    ShiftPatternResponse,
    ShiftPatternUpdate,
)
from shiftara.utils.exceptions import BadRequestError, DuplicateError, NotFoundError


class ShiftPatternService:

    def _to_response(self, pattern: ShiftPattern) -> ShiftPatternResponse:
        return ShiftPatternResponse(
            id=str(pattern.id),
            name=pattern.name,
            start_time=pattern.start_time.strftime("%H:%M"),
            end_time=pattern.end_time.strftime("%H:%M"),
        )

    @staticmethod
    def _parse_time(value: str) -> time:
        h, m = map(int, value.split(":"))
        return time(h, m)

    async def _ensure_unique_name(
        self, db: AsyncSession, account_id: UUID, name: str, exclude_id: UUID | None = None
    ) -> None:
        existing: ShiftPattern | None = await shift_pattern_repository.get_by_name(db, account_id, name)
        if existing is not None and existing.id != exclude_id:
            raise DuplicateError(f"'{name}' 패턴이 이미 존재합니다 (Shift pattern '{name}' already exists)")

    async def list_patterns(self, db: AsyncSession, account_id: UUID) -> list[ShiftPatternResponse]:
        patterns = await shift_pattern_repository.get_ordered(db, account_id)
        return [self._to_response(p) for p in patterns]

    async def create_pattern(
        self, db: AsyncSession, account_id: UUID, data: ShiftPatternCreate
    ) -> ShiftPatternResponse:
        await self._ensure_unique_name(db, account_id, data.name)
        pattern = await shift_pattern_repository.create(db, {
            "account_id": account_id,
            "name": data.name,
            "start_time": self._parse_time(data.start_time),
            "end_time": self._parse_time(data.end_time),
        })
        return self._to_response(pattern)

    async def update_pattern(
        self, db: AsyncSession, account_id: UUID, pattern_id: UUID, data: ShiftPatternUpdate
    ) -> ShiftPatternResponse:
        update_data = data.model_dump(exclude_unset=True, exclude_none=True)
        if "name" in update_data:
            await self._ensure_unique_name(db, account_id, update_data["name"], exclude_id=pattern_id)
        for key in ("start_time", "end_time"):
            if key in update_data:
                update_data[key] = self._parse_time(update_data[key])
        pattern = await shift_pattern_repository.update(db, pattern_id, update_data, account_id)
        if pattern is None:
            raise NotFoundError("Shift pattern not found")
        return self._to_response(pattern)

    async def delete_pattern(self, db: AsyncSession, account_id: UUID, pattern_id: UUID) -> None:
        # 기존 엔트리는 스냅샷을 보유하므로 영향 없음 — entries keep their own snapshot
        deleted = await shift_pattern_repository.delete(db, pattern_id, account_id)
        if not deleted:
            raise NotFoundError("Shift pattern not found")

    async def bulk_save(
        self, db: AsyncSession, account_id: UUID, data: ShiftPatternBulkSave
    ) -> list[ShiftPatternResponse]:
        """패턴 목록 전체를 한 번에 저장합니다.

        Save the whole pattern list at once: items with an id are updated,
        items without one are created, and stored patterns missing from the
        payload are deleted.

        Raises:
            BadRequestError: 목록 내 이름 중복 또는 다른 계정의 id (Duplicate names or unknown ids)
        """
        names = [item.name for item in data.patterns]
        if len(set(names)) != len(names):
            raise BadRequestError("패턴 이름이 중복되었습니다 (Duplicate pattern names in payload)")

        existing = {p.id: p for p in await shift_pattern_repository.get_ordered(db, account_id)}
        keep_ids = {item.id for item in data.patterns if item.id is not None}
        unknown = keep_ids - existing.keys()
        if unknown:
            raise BadRequestError("존재하지 않는 패턴이 포함되어 있습니다 (Unknown shift pattern id)")

        for pattern_id, pattern in existing.items():
            if pattern_id not in keep_ids:
                await db.delete(pattern)
        await db.flush()

        # 이름 교환 시 유니크 제약 충돌 방지 — park renamed rows on a unique temporary name first
        renamed = [
            existing[item.id] for item in data.patterns
            if item.id is not None and existing[item.id].name != item.name
        ]
        for pattern in renamed:
            pattern.name = f"~{pattern.id}"
        if renamed:
            await db.flush()

        for item in data.patterns:
            if item.id is not None:
                pattern = existing[item.id]
                pattern.name = item.name
                pattern.start_time = self._parse_time(item.start_time)
                pattern.end_time = self._parse_time(item.end_time)
        await db.flush()

        for item in data.patterns:
            if item.id is None:
                db.add(ShiftPattern(
                    account_id=account_id,
                    name=item.name,
                    start_time=self._parse_time(item.start_time),
                    end_time=self._parse_time(item.end_time),
                ))
        await db.flush()

        return await self.list_patterns(db, account_id)


shift_pattern_service: ShiftPatternService = ShiftPatternService()
