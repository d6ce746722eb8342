"""테스트 인프라 — 인메모리 SQLite DB, 세션, httpx 클라이언트 픽스처.

Test infrastructure — In-memory SQLite DB, session, and httpx client fixtures.
Each test gets a fresh in-memory database (aiosqlite + StaticPool) with the
schema created from ORM metadata. SAVEPOINT support needs the driver's own
BEGIN handling switched off, so BEGIN is emitted from an engine event.
"""

from collections.abc import AsyncGenerator
from datetime import date, time

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy import event, select
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from shiftara.database import Base, get_db
from shiftara.main import app
from shiftara.models import *  # noqa: F401,F403 — register all models with metadata
from shiftara.utils.pin import hash_pin

TEST_DATABASE_URL = "sqlite+aiosqlite://"

# 2026-10-19 은 월요일 — Monday of the week used throughout the tests
WEEK_START: date = date(2026, 10, 19)
TEST_PIN: str = "123456"


# ---------------------------------------------------------------------------
# Function-scoped: 엔진, 세션, 클라이언트
# ---------------------------------------------------------------------------
@pytest_asyncio.fixture
async def engine() -> AsyncGenerator[AsyncEngine, None]:
    """테스트용 async 엔진. 매 테스트마다 스키마를 새로 생성합니다."""
    eng = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )

    @event.listens_for(eng.sync_engine, "connect")
    def _disable_driver_begin(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None

    @event.listens_for(eng.sync_engine, "begin")
    def _emit_begin(conn):
        conn.exec_driver_sql("BEGIN")

    async with eng.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield eng
    await eng.dispose()


@pytest_asyncio.fixture
async def db(engine: AsyncEngine) -> AsyncGenerator[AsyncSession, None]:
    """각 테스트에 격리된 DB 세션을 제공합니다."""
    factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    async with factory() as session:
        yield session
        await session.rollback()


@pytest_asyncio.fixture
async def client(db: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """FastAPI 테스트 클라이언트 — DB 세션을 오버라이드합니다."""
    async def _override_get_db() -> AsyncGenerator[AsyncSession, None]:
        yield db

    app.dependency_overrides[get_db] = _override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


# ---------------------------------------------------------------------------
# 헬퍼 픽스처: 테스트용 데이터 생성
# ---------------------------------------------------------------------------
@pytest_asyncio.fixture
async def account(db: AsyncSession):
    """테스트 계정을 생성합니다."""
    from shiftara.models.account import Account
    a = Account(name="Kopi Test")
    db.add(a)
    await db.flush()
    await db.refresh(a)
    return a


@pytest_asyncio.fixture
async def other_account(db: AsyncSession):
    """다른 테넌트 계정을 생성합니다."""
    from shiftara.models.account import Account
    a = Account(name="Other Corp")
    db.add(a)
    await db.flush()
    await db.refresh(a)
    return a


@pytest_asyncio.fixture
async def patterns(db: AsyncSession, account):
    """시작 시각이 다른 시프트 패턴 2개 (Pagi, Sore)를 생성합니다."""
    from shiftara.models.employee import ShiftPattern
    result = {}
    for name, start, end in [("Pagi", time(8, 0), time(16, 0)), ("Sore", time(16, 0), time(23, 0))]:
        p = ShiftPattern(account_id=account.id, name=name, start_time=start, end_time=end)
        db.add(p)
        await db.flush()
        await db.refresh(p)
        result[name] = p
    return result


@pytest_asyncio.fixture
async def employees(db: AsyncSession, account):
    """같은 부서(Bar)의 직원 4명을 생성합니다. PIN은 모두 TEST_PIN."""
    from shiftara.models.employee import Employee
    pin_hash = hash_pin(TEST_PIN)
    result = []
    for name in ["Andi", "Budi", "Citra", "Dewi"]:
        e = Employee(account_id=account.id, name=name, role="Barista", division="Bar", pin_hash=pin_hash)
        db.add(e)
        await db.flush()
        await db.refresh(e)
        result.append(e)
    return result


def account_header(account) -> dict[str, str]:
    return {"X-Account-Id": str(account.id)}


async def entries_for(db: AsyncSession, employee_id, work_date: date) -> list:
    """(직원, 날짜) 셀의 저장된 엔트리를 모두 조회합니다."""
    from shiftara.models.schedule import ScheduleEntry
    result = await db.execute(
        select(ScheduleEntry).where(
            ScheduleEntry.employee_id == employee_id,
            ScheduleEntry.work_date == work_date,
        )
    )
    return list(result.scalars().all())


@pytest.fixture
def week_start() -> date:
    return WEEK_START
