# app/entrypoints/api/routers/complexes.py
from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession

from ..deps import require_api_key
from ....db import get_session
from ....domain.types import GapPolicy
from ....schemas import ComparableCardOut, OpportunityRowOut, StockValuationOut
from ....service_layer.valuation import (
    ComplexNotFound,
    StockNotFound,
    complex_cards,
    opportunity_board,
    scoring_config,
    stock_valuation,
)

router = APIRouter(tags=["complexes"], dependencies=[Depends(require_api_key)])


@router.get("/complexes/{complex_id}/cards", response_model=list[ComparableCardOut])
async def get_complex_cards(
    complex_id: int,
    session: AsyncSession = Depends(get_session),
) -> list[ComparableCardOut]:
    try:
        return await complex_cards(session, complex_id)
    except ComplexNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.get("/complexes/{complex_id}/opportunities", response_model=list[OpportunityRowOut])
async def get_complex_opportunities(
    complex_id: int,
    focus_only: bool = Query(False),
    gap_policy: str | None = Query(None),
    session: AsyncSession = Depends(get_session),
) -> list[OpportunityRowOut]:
    if gap_policy is not None:
        try:
            GapPolicy(gap_policy)
        except ValueError:
            raise HTTPException(status_code=400, detail=f"Invalid gap_policy: {gap_policy}")

    try:
        return await opportunity_board(
            session,
            complex_id,
            focus_only=focus_only,
            scoring=scoring_config(gap_policy=gap_policy),
        )
    except ComplexNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.get("/stocks/{stock_id}/valuation", response_model=StockValuationOut)
async def get_stock_valuation(
    stock_id: int,
    session: AsyncSession = Depends(get_session),
) -> StockValuationOut:
    try:
        return await stock_valuation(session, stock_id)
    except StockNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
