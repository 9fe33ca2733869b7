# scripts/smoke_opportunities.py
from __future__ import annotations

import argparse
import asyncio
import logging

from app.db import async_session
from app.service_layer.valuation import opportunity_board


def _quiet_logging() -> None:
    logging.basicConfig(
        level=logging.INFO,
        format="%(levelname)s:%(name)s:%(message)s",
    )
    logging.getLogger("sqlalchemy").setLevel(logging.WARNING)
    logging.getLogger("aiosqlite").setLevel(logging.WARNING)


async def main() -> None:
    parser = argparse.ArgumentParser()
    parser.add_argument("complex_id", type=int)
    parser.add_argument("--focus-only", action="store_true")
    args = parser.parse_args()

    _quiet_logging()

    async with async_session() as session:
        rows = await opportunity_board(session, args.complex_id, focus_only=args.focus_only)

    for r in rows:
        badges = [k for k in ("gap_narrow", "turnover_fast", "coefficient_high", "focus") if getattr(r.flags, k)]
        print(
            r.entry_id,
            r.contract_kind,
            r.valuation.target_total_price,
            r.valuation.buy_target_price,
            r.flags.diff,
            ",".join(badges) or "-",
        )


if __name__ == "__main__":
    asyncio.run(main())
