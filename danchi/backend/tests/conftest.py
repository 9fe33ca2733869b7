# tests/conftest.py
from datetime import date, datetime

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker
from sqlalchemy.pool import StaticPool

from app.db import get_session
from app.entrypoints.fastapi_app import create_app
from app.models import Base, ContractKind, EstateEntry, HousingComplex


@pytest.fixture
async def engine():
    """
    Fresh in-memory DB per test. StaticPool makes all connections share the same
    in-memory database for the lifetime of this engine fixture.
    """
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    try:
        yield engine
    finally:
        await engine.dispose()


@pytest.fixture
def async_session_maker(engine):
    return async_sessionmaker(engine, expire_on_commit=False, autoflush=True)


@pytest.fixture
async def seeded_complex(async_session_maker):
    """
    Identity floor pattern, two live entries and one soft-deleted entry.

    entry 1: 50sqm, max 10,000,000 -> buy target 490,500; past min 700,000; 20 days
    entry 2: 68.32sqm, max 19,800,000, coef 1.05 -> buy target 6,155,729; past min 6,000,000; 151 days
    """
    async with async_session_maker() as session:
        cx = HousingComplex(name="テスト団地", pref="東京", city="足立区", floor_coef_pattern=None)
        session.add(cx)
        await session.flush()

        session.add_all(
            [
                EstateEntry(
                    complex_id=cx.id,
                    contract_kind=ContractKind.MAX,
                    floor=2,
                    area_sqm=50.0,
                    layout="2DK ",
                    reins_registered_date=date(2024, 3, 1),
                    contract_date=date(2024, 3, 21),
                    max_price=10_000_000,
                    past_min=700_000,
                    coef_total=1.0,
                ),
                EstateEntry(
                    complex_id=cx.id,
                    contract_kind=ContractKind.MINI,
                    floor=4,
                    area_sqm=68.32,
                    layout="3LDK",
                    reins_registered_date=date(2023, 1, 1),
                    contract_date=date(2023, 6, 1),
                    max_price=19_800_000,
                    past_min=6_000_000,
                    coef_total=None,
                    interior_level_coef=0.95,
                    contract_year_coef=0.10,
                ),
                EstateEntry(
                    complex_id=cx.id,
                    contract_kind=ContractKind.MAX,
                    area_sqm=40.0,
                    max_price=1,
                    past_min=1,
                    deleted_at=datetime(2024, 1, 1),
                ),
            ]
        )
        await session.commit()
        return cx


@pytest.fixture
async def client(async_session_maker):
    app = create_app()

    async def _session_override():
        async with async_session_maker() as session:
            yield session

    app.dependency_overrides[get_session] = _session_override
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as c:
        yield c
