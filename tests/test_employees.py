"""직원 관리 API 테스트.

Employee management API tests — create, PIN, deactivate, tenant isolation.
"""

import uuid

from httpx import AsyncClient

from tests.conftest import TEST_PIN, WEEK_START, account_header

EMPLOYEES = "/api/v1/admin/employees"


class TestEmployeeCrud:
    """직원 CRUD."""

    async def test_create_with_pin(self, client: AsyncClient, account):
        """PIN과 함께 생성 → has_pin, 해시는 응답에 노출되지 않음."""
        res = await client.post(EMPLOYEES, json={
            "name": "Eko", "role": "Cook", "division": "Kitchen", "pin": "4321",
        }, headers=account_header(account))
        assert res.status_code == 201
        data = res.json()
        assert data["name"] == "Eko"
        assert data["division"] == "Kitchen"
        assert data["has_pin"] is True
        assert "pin" not in data
        assert "pin_hash" not in data

    async def test_create_without_pin(self, client: AsyncClient, account):
        res = await client.post(EMPLOYEES, json={"name": "Fajar"}, headers=account_header(account))
        assert res.status_code == 201
        assert res.json()["has_pin"] is False
        assert res.json()["division"] is None

    async def test_invalid_pin_format(self, client: AsyncClient, account):
        """PIN은 4~6자리 숫자."""
        for pin in ("123", "1234567", "12a4"):
            res = await client.post(EMPLOYEES, json={"name": "Eko", "pin": pin},
                                    headers=account_header(account))
            assert res.status_code == 422

    async def test_list_and_update(self, client: AsyncClient, account, employees):
        res = await client.get(EMPLOYEES, headers=account_header(account))
        assert [e["name"] for e in res.json()] == ["Andi", "Budi", "Citra", "Dewi"]

        res = await client.patch(f"{EMPLOYEES}/{employees[0].id}", json={"division": "Kitchen"},
                                 headers=account_header(account))
        assert res.status_code == 200
        assert res.json()["division"] == "Kitchen"
        assert res.json()["name"] == "Andi"

    async def test_set_pin_then_use_it(self, client: AsyncClient, account):
        """PIN 재설정 후 직원 앱에서 사용."""
        created = (await client.post(EMPLOYEES, json={"name": "Gita"}, headers=account_header(account))).json()
        res = await client.put(f"{EMPLOYEES}/{created['id']}/pin", json={"pin": "2468"},
                               headers=account_header(account))
        assert res.status_code == 200
        assert res.json()["has_pin"] is True

        res = await client.post(f"/api/v1/app/accounts/{account.id}/inbox", json={
            "employee_id": created["id"], "pin": "2468",
        })
        assert res.status_code == 200
        assert res.json() == []

    async def test_employee_without_pin_cannot_authenticate(self, client: AsyncClient, account):
        created = (await client.post(EMPLOYEES, json={"name": "Hadi"}, headers=account_header(account))).json()
        res = await client.post(f"/api/v1/app/accounts/{account.id}/inbox", json={
            "employee_id": created["id"], "pin": TEST_PIN,
        })
        assert res.status_code == 401


class TestDeactivation:
    """직원 비활성화."""

    async def test_deactivated_employee_leaves_grid(self, client: AsyncClient, account, employees):
        """비활성 직원은 그리드에서 제외, include_inactive 목록에는 남음."""
        dewi = employees[3]
        res = await client.delete(f"{EMPLOYEES}/{dewi.id}", headers=account_header(account))
        assert res.status_code == 204

        res = await client.get("/api/v1/admin/roster", params={"week": WEEK_START.isoformat()},
                               headers=account_header(account))
        names = [r["employee"]["name"] for g in res.json()["groups"] for r in g["rows"]]
        assert "Dewi" not in names

        res = await client.get(EMPLOYEES, params={"include_inactive": True}, headers=account_header(account))
        inactive = [e for e in res.json() if e["name"] == "Dewi"]
        assert inactive[0]["is_active"] is False

    async def test_deactivated_employee_cannot_be_assigned(self, client: AsyncClient, account, employees, patterns):
        dewi = employees[3]
        await client.delete(f"{EMPLOYEES}/{dewi.id}", headers=account_header(account))
        res = await client.put("/api/v1/admin/roster/slots", json={
            "employee_id": str(dewi.id),
            "work_date": WEEK_START.isoformat(),
            "shift_pattern_id": str(patterns["Pagi"].id),
        }, headers=account_header(account))
        assert res.status_code == 404


class TestTenantIsolation:
    """계정 간 격리."""

    async def test_other_account_cannot_see_employee(self, client: AsyncClient, other_account, employees):
        res = await client.get(f"{EMPLOYEES}/{employees[0].id}", headers=account_header(other_account))
        assert res.status_code == 404

        res = await client.get(EMPLOYEES, headers=account_header(other_account))
        assert res.json() == []

    async def test_unknown_employee(self, client: AsyncClient, account):
        res = await client.get(f"{EMPLOYEES}/{uuid.uuid4()}", headers=account_header(account))
        assert res.status_code == 404
