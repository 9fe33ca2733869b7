# app/adapters/repos/complexes.py
from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ...models import HousingComplex


class ComplexRepository:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def get(self, complex_id: int) -> HousingComplex | None:
        q = select(HousingComplex).where(
            HousingComplex.id == complex_id,
            HousingComplex.deleted_at.is_(None),
        )
        return (await self.session.execute(q)).scalars().first()

    async def list_active(self) -> list[HousingComplex]:
        q = (
            select(HousingComplex)
            .where(HousingComplex.deleted_at.is_(None))
            .order_by(HousingComplex.created_at.desc(), HousingComplex.id.desc())
        )
        return list((await self.session.execute(q)).scalars().all())

    async def get_by_name(self, name: str) -> HousingComplex | None:
        q = select(HousingComplex).where(HousingComplex.name == name)
        return (await self.session.execute(q)).scalars().first()
