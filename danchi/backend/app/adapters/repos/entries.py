# app/adapters/repos/entries.py
from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ...models import ContractKind, EstateEntry, StockListing

ENTRY_LIMIT = 500


class EntryRepository:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def list_for_complex(
        self,
        complex_id: int,
        *,
        kind: ContractKind | None = None,
        limit: int = ENTRY_LIMIT,
    ) -> list[EstateEntry]:
        """Newest contract first; rows without a contract date go last."""
        q = select(EstateEntry).where(
            EstateEntry.complex_id == complex_id,
            EstateEntry.deleted_at.is_(None),
        )
        if kind is not None:
            q = q.where(EstateEntry.contract_kind == kind)
        q = q.order_by(
            EstateEntry.contract_date.is_(None),
            EstateEntry.contract_date.desc(),
            EstateEntry.id.desc(),
        ).limit(limit)
        return list((await self.session.execute(q)).scalars().all())

    async def latest_by_kind(self, complex_id: int, kind: ContractKind) -> EstateEntry | None:
        rows = await self.list_for_complex(complex_id, kind=kind, limit=1)
        return rows[0] if rows else None


    async def get(self, entry_id: int) -> EstateEntry | None:
        q = select(EstateEntry).where(
            EstateEntry.id == entry_id,
            EstateEntry.deleted_at.is_(None),
        )
        return (await self.session.execute(q)).scalars().first()


class StockRepository:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def get(self, stock_id: int) -> StockListing | None:
        q = select(StockListing).where(
            StockListing.id == stock_id,
            StockListing.deleted_at.is_(None),
        )
        return (await self.session.execute(q)).scalars().first()
