# app/service_layer/demo_seed.py
from __future__ import annotations

from datetime import date
from typing import Any

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ..adapters.repos.complexes import ComplexRepository
from ..models import ContractKind, EstateEntry, HousingComplex, StockListing

DEMO_COMPLEX = "デモ団地"


async def seed_demo(session: AsyncSession, *, floor_pattern: str = "②中間") -> dict[str, Any]:
    """
    Idempotent demo seed:
    - one housing complex with a MAX and a MINI entry and one stock listing
    - safe to run multiple times (keyed on the complex name)
    """
    cx = await ComplexRepository(session).get_by_name(DEMO_COMPLEX)
    if cx is None:
        cx = HousingComplex(name=DEMO_COMPLEX, pref="東京", city="足立区", built_ym="1975-04")
        session.add(cx)
    cx.floor_coef_pattern = floor_pattern
    await session.flush()

    existing = (
        await session.execute(select(EstateEntry).where(EstateEntry.complex_id == cx.id))
    ).scalars().first()
    if existing is None:
        max_entry = EstateEntry(
            complex_id=cx.id,
            contract_kind=ContractKind.MAX,
            floor=3,
            area_sqm=68.32,
            layout="3LDK",
            reins_registered_date=date(2024, 3, 1),
            contract_date=date(2024, 3, 21),
            max_price=19_800_000,
            past_min=6_000_000,
            interior_level_coef=0.95,
            contract_year_coef=0.10,
            coef_total=1.05,
        )
        session.add(max_entry)
        session.add(
            EstateEntry(
                complex_id=cx.id,
                contract_kind=ContractKind.MINI,
                floor=5,
                area_sqm=55.0,
                layout="2DK",
                reins_registered_date=date(2023, 9, 10),
                contract_date=date(2023, 12, 1),
                max_price=14_500_000,
                past_min=8_900_000,
                coef_total=1.0,
            )
        )
        await session.flush()
        session.add(
            StockListing(
                complex_id=cx.id,
                entry_id=max_entry.id,
                floor=2,
                area_sqm=68.32,
                layout="3LDK",
                registered_date=date(2024, 6, 1),
                max_unit_price=289_813,
                coef_total=1.05,
            )
        )
        await session.flush()

    return {"complex_id": cx.id, "floor_pattern": floor_pattern}
