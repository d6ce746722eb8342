"""초기 데이터 시드 스크립트 — 데모 계정, 시프트 패턴, 직원 생성.

Seed script — Creates a demo account with shift patterns and employees.
Run this script once to bootstrap a development database.

Usage:
    python -m shiftara.seed

Creates:
    - 1개 계정: "Kopi Senja" (1 account, default settings)
    - 3개 시프트 패턴: Pagi, Siang, Malam (3 shift patterns)
    - 6명 직원: Bar 3명, Kitchen 2명, 부서 미지정 1명, PIN 123456
      (6 employees across two divisions plus one in the default group)
"""

import asyncio
from datetime import time

from sqlalchemy import select

from shiftara.database import Base, async_session, engine
from shiftara.models import Account, AccountSetting, Employee, ShiftPattern
from shiftara.utils.pin import hash_pin

_DEMO_PIN: str = "123456"

_PATTERNS: list[tuple[str, time, time]] = [
    ("Pagi", time(8, 0), time(16, 0)),
    ("Siang", time(12, 0), time(20, 0)),
    ("Malam", time(16, 0), time(0, 0)),
]

# (이름, 직무, 부서) — (name, role, division)
_EMPLOYEES: list[tuple[str, str, str | None]] = [
    ("Andi", "Barista", "Bar"),
    ("Budi", "Barista", "Bar"),
    ("Citra", "Cashier", "Bar"),
    ("Dewi", "Cook", "Kitchen"),
    ("Eko", "Cook", "Kitchen"),
    ("Fajar", "Cleaner", None),
]


async def seed() -> None:
    """데이터베이스를 데모 데이터로 시드합니다.

    Seed the database with demo data. Creates tables if they don't exist.

    Idempotent: 이미 시드된 경우 건너뜁니다 (Skips if already seeded).
    """
    # 테이블 생성 — DDL 실행 (Create all tables from ORM metadata)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with async_session() as db:
        result = await db.execute(select(Account).limit(1))
        if result.scalar_one_or_none():
            print("Already seeded. Skipping.")
            return

        account: Account = Account(name="Kopi Senja")
        db.add(account)
        await db.flush()  # flush로 account.id 생성 (Flush to generate account.id)

        db.add(AccountSetting(account_id=account.id))
        for name, start, end in _PATTERNS:
            db.add(ShiftPattern(account_id=account.id, name=name, start_time=start, end_time=end))

        pin_hash: str = hash_pin(_DEMO_PIN)
        for name, role, division in _EMPLOYEES:
            db.add(Employee(account_id=account.id, name=name, role=role, division=division, pin_hash=pin_hash))

        await db.commit()
        print(f"Seeded: account={account.id} (send as X-Account-Id), employee PIN={_DEMO_PIN}")


if __name__ == "__main__":
    asyncio.run(seed())
