"""테스트 인프라 — 임시 SQLite DB, 세션, httpx 클라이언트 픽스처.

Test infrastructure — Temporary SQLite database (aiosqlite), session, and
httpx client fixtures. Every test gets a fresh database file under tmp_path,
so no PostgreSQL server is required. Each API request gets its own session,
as in production.
"""

from collections.abc import AsyncGenerator
from datetime import datetime, timezone
from pathlib import Path

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from app.database import Base, get_db
from app.main import app
from app.models import *  # noqa: F401,F403 — register all models with metadata
from app.models.swift_code import SwiftCode, is_headquarter_code

URL = "/api/v1/swift-codes"


# ---------------------------------------------------------------------------
# Function-scoped: 엔진, 세션 팩토리, 세션, 클라이언트
# ---------------------------------------------------------------------------
@pytest_asyncio.fixture
async def engine(tmp_path: Path) -> AsyncGenerator[AsyncEngine, None]:
    """테스트용 async 엔진. 스키마를 생성합니다."""
    eng = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}", echo=False)
    async with eng.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield eng
    await eng.dispose()


@pytest_asyncio.fixture
async def session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def db(session_factory: async_sessionmaker[AsyncSession]) -> AsyncGenerator[AsyncSession, None]:
    """각 테스트에 격리된 DB 세션을 제공합니다."""
    async with session_factory() as session:
        yield session
        await session.rollback()


@pytest_asyncio.fixture
async def client(session_factory: async_sessionmaker[AsyncSession]) -> AsyncGenerator[AsyncClient, None]:
    """FastAPI 테스트 클라이언트 — 요청마다 새 세션을 사용하도록 get_db를 오버라이드합니다."""
    async def _override_get_db() -> AsyncGenerator[AsyncSession, None]:
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = _override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


# ---------------------------------------------------------------------------
# 헬퍼: 테스트용 데이터 생성
# ---------------------------------------------------------------------------
def make_payload(swift_code: str, **overrides) -> dict:
    """POST 요청용 SWIFT 코드 페이로드를 만듭니다 (camelCase)."""
    payload: dict = {
        "swiftCode": swift_code,
        "bankName": f"Bank {swift_code}",
        "address": f"{swift_code} Street 1",
        "townName": "TEST TOWN",
        "countryName": "GERMANY",
        "countryISO2": "DE",
        "isHeadquarter": is_headquarter_code(swift_code),
        "timeZone": "Europe/Berlin",
        "codeType": "BIC11",
    }
    payload.update(overrides)
    return payload


async def insert_code(
    session: AsyncSession,
    swift_code: str,
    country_iso2: str = "DE",
    country_name: str = "GERMANY",
    **overrides,
) -> SwiftCode:
    """저장소에 SWIFT 코드를 직접 삽입하고 커밋합니다."""
    now = datetime.now(timezone.utc)
    values: dict = {
        "swift_code": swift_code,
        "country_iso2": country_iso2,
        "country_name": country_name,
        "bank_name": f"Bank {swift_code}",
        "address": f"{swift_code} Street 1",
        "town_name": "TEST TOWN",
        "code_type": "BIC11",
        "is_headquarter": is_headquarter_code(swift_code),
        "time_zone": "Europe/Berlin",
        "created_at": now,
        "updated_at": now,
    }
    values.update(overrides)
    record = SwiftCode(**values)
    session.add(record)
    await session.commit()
    return record


@pytest_asyncio.fixture
async def deutsche_bank(db: AsyncSession) -> dict[str, SwiftCode]:
    """본점 DEUTDEFFXXX와 지점 2개, 관련 없는 폴란드 코드 1개를 만듭니다."""
    return {
        "hq": await insert_code(db, "DEUTDEFFXXX"),
        "b1": await insert_code(db, "DEUTDEFF500"),
        "b2": await insert_code(db, "DEUTDEFF1AB", address=None),
        "other": await insert_code(db, "BPKOPLPWXXX", country_iso2="PL", country_name="POLAND"),
    }
