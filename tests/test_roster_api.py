"""로스터 API 테스트 — 슬롯 변경, 이동/교환, 자동 배치, 미리보기.

Roster API tests — slot mutations, move/swap, auto-fill and preview.
"""

import uuid
from datetime import timedelta

from httpx import AsyncClient
from sqlalchemy.exc import IntegrityError

from shiftara.repositories.schedule_repository import schedule_entry_repository
from tests.conftest import WEEK_START, account_header, entries_for

ROSTER = "/api/v1/admin/roster"


def find_slot(grid: dict, employee_id, work_date) -> dict:
    for group in grid["groups"]:
        for row in group["rows"]:
            if row["employee"]["id"] == str(employee_id):
                for slot in row["slots"]:
                    if slot["work_date"] == work_date.isoformat():
                        return slot
    raise AssertionError("slot not found")


async def assign(client: AsyncClient, account, employee, work_date, pattern):
    return await client.put(f"{ROSTER}/slots", json={
        "employee_id": str(employee.id),
        "work_date": work_date.isoformat(),
        "shift_pattern_id": str(pattern.id),
    }, headers=account_header(account))


def collide_on(monkeypatch, employee_id, work_date, times: int = 2) -> list:
    """지정한 셀의 insert가 유니크 충돌을 일으키도록 패치합니다.

    Make inserts into one cell raise IntegrityError ``times`` times; returns
    the list of attempts made against that cell.
    """
    original = schedule_entry_repository.insert
    attempts: list = []

    async def _insert(db, data):
        if data["employee_id"] == employee_id and data["work_date"] == work_date and len(attempts) < times:
            attempts.append(data)
            raise IntegrityError("INSERT INTO schedule_entries", {}, Exception("UNIQUE constraint failed"))
        return await original(db, data)

    monkeypatch.setattr(schedule_entry_repository, "insert", _insert)
    return attempts


class TestRosterGrid:
    """주간 그리드 조회."""

    async def test_grid_has_row_per_active_employee(self, client: AsyncClient, account, employees):
        """활성 직원마다 7칸 행."""
        res = await client.get(ROSTER, params={"week": "2026-10-22"}, headers=account_header(account))
        assert res.status_code == 200
        data = res.json()
        assert data["week_start"] == WEEK_START.isoformat()
        assert len(data["dates"]) == 7
        assert [g["name"] for g in data["groups"]] == ["Bar"]
        rows = data["groups"][0]["rows"]
        assert [r["employee"]["name"] for r in rows] == ["Andi", "Budi", "Citra", "Dewi"]
        assert all(len(r["slots"]) == 7 for r in rows)

    async def test_missing_account_header(self, client: AsyncClient):
        """X-Account-Id 헤더 없으면 401."""
        res = await client.get(ROSTER)
        assert res.status_code == 401

    async def test_unknown_account(self, client: AsyncClient):
        res = await client.get(ROSTER, headers={"X-Account-Id": str(uuid.uuid4())})
        assert res.status_code == 404


class TestSlotMutations:
    """assign / leave / clear."""

    async def test_assign_copies_pattern_snapshot(self, client: AsyncClient, account, employees, patterns):
        """배정 시 패턴 이름/시간 복사."""
        andi = employees[0]
        res = await assign(client, account, andi, WEEK_START, patterns["Pagi"])
        assert res.status_code == 200
        slot = find_slot(res.json(), andi.id, WEEK_START)
        assert slot["kind"] == "filled"
        assert slot["shift_name"] == "Pagi"
        assert slot["shift_time"] == "08:00 - 16:00"

    async def test_reassign_keeps_single_entry(self, client: AsyncClient, db, account, employees, patterns):
        """같은 셀에 두 번 배정해도 엔트리는 하나."""
        andi = employees[0]
        await assign(client, account, andi, WEEK_START, patterns["Pagi"])
        res = await assign(client, account, andi, WEEK_START, patterns["Sore"])
        assert res.status_code == 200

        stored = await entries_for(db, andi.id, WEEK_START)
        assert len(stored) == 1
        assert stored[0].shift_name == "Sore"

    async def test_leave_then_assign_replaces(self, client: AsyncClient, db, account, employees, patterns):
        andi = employees[0]
        await client.post(f"{ROSTER}/slots/leave", json={
            "employee_id": str(andi.id), "work_date": WEEK_START.isoformat(),
        }, headers=account_header(account))
        await assign(client, account, andi, WEEK_START, patterns["Pagi"])

        stored = await entries_for(db, andi.id, WEEK_START)
        assert [e.kind for e in stored] == ["filled"]

    async def test_assign_unknown_pattern(self, client: AsyncClient, account, employees):
        """없는 패턴 → invalid_pattern."""
        res = await client.put(f"{ROSTER}/slots", json={
            "employee_id": str(employees[0].id),
            "work_date": WEEK_START.isoformat(),
            "shift_pattern_id": str(uuid.uuid4()),
        }, headers=account_header(account))
        assert res.status_code == 404
        assert res.json()["detail"]["code"] == "invalid_pattern"

    async def test_single_collision_is_retried(
        self, client: AsyncClient, db, account, employees, patterns, monkeypatch
    ):
        """첫 번째 충돌은 재시도로 해결."""
        andi = employees[0]
        attempts = collide_on(monkeypatch, andi.id, WEEK_START, times=1)

        res = await assign(client, account, andi, WEEK_START, patterns["Pagi"])
        assert res.status_code == 200
        assert len(attempts) == 1
        assert [e.shift_name for e in await entries_for(db, andi.id, WEEK_START)] == ["Pagi"]

    async def test_persistent_collision_raises_uniqueness_violation(
        self, client: AsyncClient, db, account, employees, patterns, monkeypatch
    ):
        """재시도 후에도 충돌 → uniqueness_violation, 기존 엔트리 유지."""
        andi = employees[0]
        await assign(client, account, andi, WEEK_START, patterns["Sore"])
        attempts = collide_on(monkeypatch, andi.id, WEEK_START)

        res = await assign(client, account, andi, WEEK_START, patterns["Pagi"])
        assert res.status_code == 409
        detail = res.json()["detail"]
        assert detail["code"] == "uniqueness_violation"
        assert detail["cell"] == {"employee_id": str(andi.id), "work_date": WEEK_START.isoformat()}
        assert len(attempts) == 2
        assert [e.shift_name for e in await entries_for(db, andi.id, WEEK_START)] == ["Sore"]

    async def test_assign_pattern_of_other_account(
        self, client: AsyncClient, account, other_account, employees, patterns
    ):
        """다른 계정 헤더로는 패턴/직원이 보이지 않음."""
        res = await assign(client, other_account, employees[0], WEEK_START, patterns["Pagi"])
        assert res.status_code == 404

    async def test_mark_leave_and_clear(self, client: AsyncClient, account, employees):
        """휴가 표시 후 비우기."""
        andi = employees[0]
        cell = {"employee_id": str(andi.id), "work_date": WEEK_START.isoformat()}
        res = await client.post(f"{ROSTER}/slots/leave", json=cell, headers=account_header(account))
        assert res.status_code == 200
        assert find_slot(res.json(), andi.id, WEEK_START)["kind"] == "leave"

        res = await client.delete(f"{ROSTER}/slots", params=cell, headers=account_header(account))
        assert res.status_code == 200
        assert find_slot(res.json(), andi.id, WEEK_START)["kind"] == "empty"


class TestMoveOrSwap:
    """이동/교환."""

    async def test_move_to_empty_cell(self, client: AsyncClient, account, employees, patterns):
        """빈 셀로 이동 → 원본은 비워짐."""
        andi, budi = employees[0], employees[1]
        tuesday = WEEK_START + timedelta(days=1)
        await assign(client, account, andi, WEEK_START, patterns["Pagi"])

        res = await client.post(f"{ROSTER}/move", json={
            "source": {"employee_id": str(andi.id), "work_date": WEEK_START.isoformat()},
            "target": {"employee_id": str(budi.id), "work_date": tuesday.isoformat()},
        }, headers=account_header(account))
        assert res.status_code == 200
        grid = res.json()
        assert find_slot(grid, andi.id, WEEK_START)["kind"] == "empty"
        assert find_slot(grid, budi.id, tuesday)["shift_name"] == "Pagi"

    async def test_swap_twice_restores(self, client: AsyncClient, account, employees, patterns):
        """교환을 두 번 하면 원상 복구."""
        andi, budi = employees[0], employees[1]
        await assign(client, account, andi, WEEK_START, patterns["Pagi"])
        await assign(client, account, budi, WEEK_START, patterns["Sore"])
        body = {
            "source": {"employee_id": str(andi.id), "work_date": WEEK_START.isoformat()},
            "target": {"employee_id": str(budi.id), "work_date": WEEK_START.isoformat()},
        }

        res = await client.post(f"{ROSTER}/move", json=body, headers=account_header(account))
        assert res.status_code == 200
        assert find_slot(res.json(), andi.id, WEEK_START)["shift_name"] == "Sore"
        assert find_slot(res.json(), budi.id, WEEK_START)["shift_name"] == "Pagi"

        res = await client.post(f"{ROSTER}/move", json=body, headers=account_header(account))
        assert find_slot(res.json(), andi.id, WEEK_START)["shift_name"] == "Pagi"
        assert find_slot(res.json(), budi.id, WEEK_START)["shift_name"] == "Sore"

    async def test_move_onto_leave_requires_confirmation(
        self, client: AsyncClient, db, account, employees, patterns
    ):
        """휴가 셀 덮어쓰기는 확인 필요."""
        andi, budi = employees[0], employees[1]
        await assign(client, account, andi, WEEK_START, patterns["Pagi"])
        await client.post(f"{ROSTER}/slots/leave", json={
            "employee_id": str(budi.id), "work_date": WEEK_START.isoformat(),
        }, headers=account_header(account))
        body = {
            "source": {"employee_id": str(andi.id), "work_date": WEEK_START.isoformat()},
            "target": {"employee_id": str(budi.id), "work_date": WEEK_START.isoformat()},
        }

        res = await client.post(f"{ROSTER}/move", json=body, headers=account_header(account))
        assert res.status_code == 409
        detail = res.json()["detail"]
        assert detail["code"] == "confirmation_required"
        assert detail["cell"]["employee_id"] == str(budi.id)
        assert (await entries_for(db, budi.id, WEEK_START))[0].kind == "leave"

        res = await client.post(
            f"{ROSTER}/move", json={**body, "confirm_leave_overwrite": True}, headers=account_header(account)
        )
        assert res.status_code == 200
        assert find_slot(res.json(), budi.id, WEEK_START)["shift_name"] == "Pagi"
        assert find_slot(res.json(), andi.id, WEEK_START)["kind"] == "empty"

    async def test_move_from_empty_source(self, client: AsyncClient, account, employees):
        res = await client.post(f"{ROSTER}/move", json={
            "source": {"employee_id": str(employees[0].id), "work_date": WEEK_START.isoformat()},
            "target": {"employee_id": str(employees[1].id), "work_date": WEEK_START.isoformat()},
        }, headers=account_header(account))
        assert res.status_code == 400


class TestAutoFill:
    """자동 배치 API."""

    async def test_without_patterns(self, client: AsyncClient, account, employees):
        """패턴 없음 → configuration_error."""
        res = await client.post(f"{ROSTER}/auto-fill", json={"week": WEEK_START.isoformat()},
                                headers=account_header(account))
        assert res.status_code == 422
        assert res.json()["detail"]["code"] == "configuration_error"

    async def test_fills_every_empty_cell_then_nothing_to_fill(
        self, client: AsyncClient, account, employees, patterns
    ):
        """모든 빈 셀 채움 → 재실행은 nothing_to_fill."""
        res = await client.post(f"{ROSTER}/auto-fill", json={"week": WEEK_START.isoformat(), "seed": 42},
                                headers=account_header(account))
        assert res.status_code == 200
        data = res.json()
        assert data["status"] == "filled"
        assert data["created"] == 28
        slots = [s for g in data["grid"]["groups"] for r in g["rows"] for s in r["slots"]]
        assert all(s["kind"] == "filled" for s in slots)

        res = await client.post(f"{ROSTER}/auto-fill", json={"week": WEEK_START.isoformat()},
                                headers=account_header(account))
        assert res.status_code == 200
        assert res.json()["status"] == "nothing_to_fill"
        assert res.json()["created"] == 0

    async def test_failed_cell_reported_and_rest_committed(
        self, client: AsyncClient, db, account, employees, patterns, monkeypatch
    ):
        """한 셀 저장 실패 → partial_batch_failure, 나머지 셀은 커밋됨."""
        andi = employees[0]
        collide_on(monkeypatch, andi.id, WEEK_START)

        res = await client.post(f"{ROSTER}/auto-fill", json={"week": WEEK_START.isoformat(), "seed": 5},
                                headers=account_header(account))
        assert res.status_code == 409
        detail = res.json()["detail"]
        assert detail["code"] == "partial_batch_failure"
        assert detail["failed"] == [{"employee_id": str(andi.id), "work_date": WEEK_START.isoformat()}]
        assert len(detail["succeeded"]) == 27
        assert {"employee_id": str(andi.id), "work_date": WEEK_START.isoformat()} not in detail["succeeded"]

        monkeypatch.undo()
        res = await client.get(ROSTER, params={"week": WEEK_START.isoformat()}, headers=account_header(account))
        slots = [s for g in res.json()["groups"] for r in g["rows"] for s in r["slots"]]
        assert sum(1 for s in slots if s["kind"] == "filled") == 27
        assert find_slot(res.json(), andi.id, WEEK_START)["kind"] == "empty"
        assert await entries_for(db, andi.id, WEEK_START) == []

    async def test_keeps_existing_leave_and_shift(self, client: AsyncClient, db, account, employees, patterns):
        """기존 휴가/근무 셀은 유지."""
        andi, budi = employees[0], employees[1]
        await client.post(f"{ROSTER}/slots/leave", json={
            "employee_id": str(andi.id), "work_date": WEEK_START.isoformat(),
        }, headers=account_header(account))
        await assign(client, account, budi, WEEK_START, patterns["Sore"])

        res = await client.post(f"{ROSTER}/auto-fill", json={"week": WEEK_START.isoformat(), "seed": 1},
                                headers=account_header(account))
        assert res.status_code == 200
        assert res.json()["created"] == 26
        assert (await entries_for(db, andi.id, WEEK_START))[0].kind == "leave"
        budi_entry = (await entries_for(db, budi.id, WEEK_START))[0]
        assert budi_entry.shift_name == "Sore"
        assert budi_entry.source == "manual"

    async def test_both_patterns_every_day(self, client: AsyncClient, account, employees, patterns):
        """직원 4명, 패턴 2개 → 매일 두 패턴 모두 배정."""
        res = await client.post(f"{ROSTER}/auto-fill", json={"week": WEEK_START.isoformat(), "seed": 9},
                                headers=account_header(account))
        grid = res.json()["grid"]
        for day in grid["dates"]:
            names = {
                s["shift_name"]
                for g in grid["groups"] for r in g["rows"] for s in r["slots"]
                if s["work_date"] == day
            }
            assert names == {"Pagi", "Sore"}


class TestPreview:
    """미리보기 API."""

    async def test_weekly_and_monthly(self, client: AsyncClient, account, employees, patterns):
        await assign(client, account, employees[0], WEEK_START, patterns["Pagi"])

        res = await client.get(f"{ROSTER}/preview", params={"view": "weekly", "date": "2026-10-21"},
                               headers=account_header(account))
        assert res.status_code == 200
        assert len(res.json()["dates"]) == 7
        assert res.json()["groups"][0]["rows"][0]["cells"][0]["label"] == "Pagi"

        res = await client.get(f"{ROSTER}/preview", params={"view": "monthly", "date": "2026-10-21"},
                               headers=account_header(account))
        assert res.status_code == 200
        assert len(res.json()["dates"]) == 31

    async def test_public_schedule(self, client: AsyncClient, account, employees, patterns):
        """직원용 공개 근무표."""
        await assign(client, account, employees[0], WEEK_START, patterns["Pagi"])
        res = await client.get(
            f"/api/v1/app/accounts/{account.id}/schedule", params={"date": WEEK_START.isoformat()}
        )
        assert res.status_code == 200
        assert res.json()["groups"][0]["rows"][0]["employee_name"] == "Andi"
