"""교대/휴가 요청 상태 머신 테스트.

Swap/leave request lifecycle tests — PIN gate, leave quota, partner
response, admin approval applying to the roster.
"""

from datetime import timedelta

from httpx import AsyncClient

from tests.conftest import TEST_PIN, WEEK_START, account_header, entries_for

ADMIN = "/api/v1/admin"


def app_url(account) -> str:
    return f"/api/v1/app/accounts/{account.id}"


async def assign(client: AsyncClient, account, employee, work_date, pattern):
    res = await client.put(f"{ADMIN}/roster/slots", json={
        "employee_id": str(employee.id),
        "work_date": work_date.isoformat(),
        "shift_pattern_id": str(pattern.id),
    }, headers=account_header(account))
    assert res.status_code == 200


async def request_leave(client: AsyncClient, account, employee, work_date, pin: str = TEST_PIN):
    return await client.post(f"{app_url(account)}/requests", json={
        "employee_id": str(employee.id),
        "pin": pin,
        "type": "leave",
        "original_date": work_date.isoformat(),
        "reason": "Keluarga",
    })


async def request_swap(client: AsyncClient, account, requester, partner, original_date, target_date):
    return await client.post(f"{app_url(account)}/requests", json={
        "employee_id": str(requester.id),
        "pin": TEST_PIN,
        "type": "swap",
        "original_date": original_date.isoformat(),
        "target_date": target_date.isoformat(),
        "target_employee_id": str(partner.id),
    })


class TestLeaveRequests:
    """휴가 요청 생성 및 승인."""

    async def test_leave_starts_pending_admin(self, client: AsyncClient, account, employees):
        res = await request_leave(client, account, employees[0], WEEK_START)
        assert res.status_code == 201
        data = res.json()
        assert data["type"] == "leave"
        assert data["status"] == "pending_admin"
        assert data["requester_name"] == "Andi"

    async def test_monthly_quota(self, client: AsyncClient, account, employees):
        """월 2회 한도 → 세 번째는 quota_exceeded, 다른 직원은 영향 없음."""
        andi, budi = employees[0], employees[1]
        for offset in range(2):
            res = await request_leave(client, account, andi, WEEK_START + timedelta(days=offset))
            assert res.status_code == 201

        res = await request_leave(client, account, andi, WEEK_START + timedelta(days=2))
        assert res.status_code == 409
        assert res.json()["detail"]["code"] == "quota_exceeded"
        assert res.json()["detail"]["limit"] == 2

        res = await request_leave(client, account, budi, WEEK_START)
        assert res.status_code == 201

    async def test_quota_follows_account_setting(self, client: AsyncClient, account, employees):
        await client.put(f"{ADMIN}/settings", json={"max_leaves_per_month": 0},
                         headers=account_header(account))
        res = await request_leave(client, account, employees[0], WEEK_START)
        assert res.status_code == 409

    async def test_wrong_pin(self, client: AsyncClient, account, employees):
        """잘못된 PIN → pin_mismatch."""
        res = await request_leave(client, account, employees[0], WEEK_START, pin="000000")
        assert res.status_code == 401
        assert res.json()["detail"]["code"] == "pin_mismatch"

    async def test_malformed_pin_rejected_by_validation(self, client: AsyncClient, account, employees):
        res = await request_leave(client, account, employees[0], WEEK_START, pin="12ab")
        assert res.status_code == 422

    async def test_approve_marks_leave(self, client: AsyncClient, db, account, employees, patterns):
        """휴가 승인 → 원래 근무가 휴가로 대체."""
        andi = employees[0]
        await assign(client, account, andi, WEEK_START, patterns["Pagi"])
        created = (await request_leave(client, account, andi, WEEK_START)).json()

        res = await client.post(f"{ADMIN}/requests/{created['id']}/approve", headers=account_header(account))
        assert res.status_code == 200
        assert res.json()["status"] == "approved"
        assert res.json()["decided_at"] is not None

        stored = await entries_for(db, andi.id, WEEK_START)
        assert [e.kind for e in stored] == ["leave"]

    async def test_reject_leaves_roster_untouched(self, client: AsyncClient, db, account, employees, patterns):
        andi = employees[0]
        await assign(client, account, andi, WEEK_START, patterns["Pagi"])
        created = (await request_leave(client, account, andi, WEEK_START)).json()

        res = await client.post(f"{ADMIN}/requests/{created['id']}/reject", headers=account_header(account))
        assert res.json()["status"] == "rejected"
        assert (await entries_for(db, andi.id, WEEK_START))[0].kind == "filled"

        res = await client.post(f"{ADMIN}/requests/{created['id']}/approve", headers=account_header(account))
        assert res.status_code == 400
        assert res.json()["detail"]["code"] == "invalid_transition"


class TestAdminRequestList:
    """관리자 요청 목록."""

    async def test_filter_by_status(self, client: AsyncClient, account, employees):
        await request_leave(client, account, employees[0], WEEK_START)

        res = await client.get(f"{ADMIN}/requests", params={"status": "pending_admin"},
                               headers=account_header(account))
        assert res.status_code == 200
        assert len(res.json()) == 1

        res = await client.get(f"{ADMIN}/requests", params={"status": "approved"},
                               headers=account_header(account))
        assert res.json() == []

    async def test_unknown_status_rejected(self, client: AsyncClient, account, employees):
        """오타가 있는 상태값 → 422."""
        res = await client.get(f"{ADMIN}/requests", params={"status": "pending"},
                               headers=account_header(account))
        assert res.status_code == 422


class TestSwapRequests:
    """교대 요청 흐름."""

    async def test_partner_without_shift(self, client: AsyncClient, account, employees, patterns):
        """대상 직원이 대상 날짜에 근무 없음 → invalid_target."""
        andi, budi = employees[0], employees[1]
        await assign(client, account, andi, WEEK_START, patterns["Pagi"])

        res = await request_swap(client, account, andi, budi, WEEK_START, WEEK_START)
        assert res.status_code == 400
        assert res.json()["detail"]["code"] == "invalid_target"

    async def test_requester_without_shift(self, client: AsyncClient, account, employees, patterns):
        andi, budi = employees[0], employees[1]
        await assign(client, account, budi, WEEK_START, patterns["Sore"])
        res = await request_swap(client, account, andi, budi, WEEK_START, WEEK_START)
        assert res.status_code == 400

    async def test_swap_with_self(self, client: AsyncClient, account, employees, patterns):
        andi = employees[0]
        await assign(client, account, andi, WEEK_START, patterns["Pagi"])
        res = await request_swap(client, account, andi, andi, WEEK_START, WEEK_START)
        assert res.status_code == 400

    async def test_swap_needs_target_fields(self, client: AsyncClient, account, employees):
        res = await client.post(f"{app_url(account)}/requests", json={
            "employee_id": str(employees[0].id),
            "pin": TEST_PIN,
            "type": "swap",
            "original_date": WEEK_START.isoformat(),
        })
        assert res.status_code == 422

    async def test_full_swap_flow(self, client: AsyncClient, db, account, employees, patterns):
        """요청 → 파트너 승인 → 관리자 승인 → 로스터 교환."""
        andi, budi = employees[0], employees[1]
        tuesday = WEEK_START + timedelta(days=1)
        await assign(client, account, andi, WEEK_START, patterns["Pagi"])
        await assign(client, account, budi, tuesday, patterns["Sore"])

        res = await request_swap(client, account, andi, budi, WEEK_START, tuesday)
        assert res.status_code == 201
        created = res.json()
        assert created["status"] == "pending_partner"
        assert created["target_employee_name"] == "Budi"

        # 파트너 수신함
        res = await client.post(f"{app_url(account)}/inbox", json={
            "employee_id": str(budi.id), "pin": TEST_PIN,
        })
        assert res.status_code == 200
        assert [r["id"] for r in res.json()] == [created["id"]]

        res = await client.post(f"{app_url(account)}/requests/{created['id']}/respond", json={
            "employee_id": str(budi.id), "pin": TEST_PIN, "approve": True,
        })
        assert res.status_code == 200
        assert res.json()["status"] == "pending_admin"
        assert res.json()["partner_responded_at"] is not None

        # 파트너 승인만으로는 로스터가 바뀌지 않음
        assert (await entries_for(db, andi.id, WEEK_START))[0].shift_name == "Pagi"

        res = await client.get(f"{ADMIN}/requests", params={"status": "pending_admin"},
                               headers=account_header(account))
        assert [r["id"] for r in res.json()] == [created["id"]]

        res = await client.post(f"{ADMIN}/requests/{created['id']}/approve", headers=account_header(account))
        assert res.status_code == 200
        assert res.json()["status"] == "approved"

        andi_entry = (await entries_for(db, andi.id, WEEK_START))[0]
        budi_entry = (await entries_for(db, budi.id, tuesday))[0]
        assert andi_entry.shift_name == "Sore"
        assert budi_entry.shift_name == "Pagi"
        assert andi_entry.source == "swap"

    async def test_partner_reject_closes_request(self, client: AsyncClient, account, employees, patterns):
        """파트너 거절 → rejected, 이후 승인 불가."""
        andi, budi = employees[0], employees[1]
        await assign(client, account, andi, WEEK_START, patterns["Pagi"])
        await assign(client, account, budi, WEEK_START, patterns["Sore"])
        created = (await request_swap(client, account, andi, budi, WEEK_START, WEEK_START)).json()

        res = await client.post(f"{app_url(account)}/requests/{created['id']}/respond", json={
            "employee_id": str(budi.id), "pin": TEST_PIN, "approve": False,
        })
        assert res.json()["status"] == "rejected"

        res = await client.post(f"{app_url(account)}/requests/{created['id']}/respond", json={
            "employee_id": str(budi.id), "pin": TEST_PIN, "approve": True,
        })
        assert res.status_code == 400
        assert res.json()["detail"]["code"] == "invalid_transition"

    async def test_admin_cannot_approve_before_partner(self, client: AsyncClient, account, employees, patterns):
        andi, budi = employees[0], employees[1]
        await assign(client, account, andi, WEEK_START, patterns["Pagi"])
        await assign(client, account, budi, WEEK_START, patterns["Sore"])
        created = (await request_swap(client, account, andi, budi, WEEK_START, WEEK_START)).json()

        res = await client.post(f"{ADMIN}/requests/{created['id']}/approve", headers=account_header(account))
        assert res.status_code == 400
        assert res.json()["detail"]["code"] == "invalid_transition"

        res = await client.post(f"{ADMIN}/requests/{created['id']}/reject", headers=account_header(account))
        assert res.json()["status"] == "rejected"

    async def test_only_target_can_respond(self, client: AsyncClient, account, employees, patterns):
        """요청 대상이 아닌 직원의 응답 → 403."""
        andi, budi, citra = employees[0], employees[1], employees[2]
        await assign(client, account, andi, WEEK_START, patterns["Pagi"])
        await assign(client, account, budi, WEEK_START, patterns["Sore"])
        created = (await request_swap(client, account, andi, budi, WEEK_START, WEEK_START)).json()

        res = await client.post(f"{app_url(account)}/requests/{created['id']}/respond", json={
            "employee_id": str(citra.id), "pin": TEST_PIN, "approve": True,
        })
        assert res.status_code == 403

    async def test_inbox_requires_pin(self, client: AsyncClient, account, employees):
        res = await client.post(f"{app_url(account)}/inbox", json={
            "employee_id": str(employees[1].id), "pin": "999999",
        })
        assert res.status_code == 401


class TestSwapCandidates:
    """교대 후보 조회."""

    async def test_lists_filled_cells_excluding_requester(self, client: AsyncClient, account, employees, patterns):
        andi, budi, citra = employees[0], employees[1], employees[2]
        await assign(client, account, andi, WEEK_START, patterns["Pagi"])
        await assign(client, account, budi, WEEK_START, patterns["Sore"])
        await client.post(f"{ADMIN}/roster/slots/leave", json={
            "employee_id": str(citra.id), "work_date": WEEK_START.isoformat(),
        }, headers=account_header(account))

        res = await client.get(f"{app_url(account)}/swap-candidates", params={
            "date": WEEK_START.isoformat(), "exclude_employee_id": str(andi.id),
        })
        assert res.status_code == 200
        data = res.json()
        assert [c["employee_name"] for c in data] == ["Budi"]
        assert data[0]["shift_time"] == "16:00 - 23:00"
