# app/entrypoints/fastapi_app.py
from __future__ import annotations

from fastapi import FastAPI

from ..db import engine
from ..models import Base
from .api.routers import complexes, health, valuations


def create_app() -> FastAPI:
    app = FastAPI(title="Danchi - Valuation Engine")

    @app.on_event("startup")
    async def _startup() -> None:
        # Single place where DB tables are created in dev.
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    # Routers
    app.include_router(health.router)
    app.include_router(valuations.router)
    app.include_router(complexes.router)

    return app
