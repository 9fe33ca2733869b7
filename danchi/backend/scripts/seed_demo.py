from __future__ import annotations

import argparse
import asyncio

from app.db import AsyncSessionLocal, engine
from app.models import Base
from app.service_layer.demo_seed import seed_demo


async def _ensure_schema() -> None:
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def main() -> None:
    parser = argparse.ArgumentParser()
    parser.add_argument("--pattern", default="②中間", help="Floor coefficient pattern for the demo complex")
    args = parser.parse_args()

    await _ensure_schema()

    async with AsyncSessionLocal() as session:
        res = await seed_demo(session, floor_pattern=args.pattern)
        await session.commit()

    print(f"Seeded demo complex. complex_id={res['complex_id']} pattern={res['floor_pattern']}")


if __name__ == "__main__":
    asyncio.run(main())
