# app/entrypoints/api/routers/health.py
from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends

from ..deps import require_api_key
from ....config import settings

router = APIRouter(tags=["health"])


@router.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


@router.get("/debug/config", dependencies=[Depends(require_api_key)])
def debug_config() -> dict[str, Any]:
    return {
        "ENV": settings.ENV,
        "DANCHI_DB_URL": settings.DANCHI_DB_URL,
        "API_KEY_SET": bool(settings.API_KEY),
        "DEFAULT_FLOOR_PATTERN": settings.DEFAULT_FLOOR_PATTERN,
        "FLOOR_FALLBACK": settings.FLOOR_FALLBACK,
        "CLAMP_BUY_TARGET": settings.CLAMP_BUY_TARGET,
        "GAP_POLICY": settings.GAP_POLICY,
        "GAP_THRESHOLD": settings.GAP_THRESHOLD,
        "FAST_DAYS_THRESHOLD": settings.FAST_DAYS_THRESHOLD,
        "HIGH_COEF_THRESHOLD": settings.HIGH_COEF_THRESHOLD,
    }
