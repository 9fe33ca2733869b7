# scripts/init_db.py
import argparse
import asyncio

from app.config import settings
from app.db import engine
from app.models import Base


async def main() -> None:
    parser = argparse.ArgumentParser()
    parser.add_argument("--reset", action="store_true", help="Drop complexes/entries/stocks before creating")
    args = parser.parse_args()

    async with engine.begin() as conn:
        if args.reset:
            await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)
    print(f"OK: schema ready at {settings.DANCHI_DB_URL} (reset={args.reset}).")


if __name__ == "__main__":
    asyncio.run(main())
