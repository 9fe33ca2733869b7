# app/entrypoints/api/routers/valuations.py
from __future__ import annotations

from fastapi import APIRouter, Depends

from ..deps import require_api_key
from ....domain.complex_evaluation import built_age_years, evaluate_complex
from ....domain.opportunity import score_opportunity
from ....domain.parsing import elapsed_days
from ....domain.types import ValuationInput
from ....domain.valuation import compute_valuation, floor_schedule
from ....schemas import (
    ComplexEvaluationOut,
    ComplexEvaluationRequest,
    OpportunityOut,
    OpportunityRequest,
    ValuationOut,
    ValuationRequest,
)
from ....service_layer.valuation import flags_out, scoring_config, valuation_config, valuation_out

router = APIRouter(tags=["valuations"], dependencies=[Depends(require_api_key)])


@router.post("/valuations", response_model=ValuationOut)
def create_valuation(body: ValuationRequest) -> ValuationOut:
    """Pure compute: nothing is read from or written to the database."""
    inp = ValuationInput(
        area=body.area,
        reference_price=body.reference_price,
        quality_coefficient=body.quality_coefficient,
        interior_level_coef=body.interior_level_coef,
        contract_year_coef=body.contract_year_coef,
        floor_number=body.floor_number,
        floor_coefficient=body.floor_coefficient,
        stored_target_unit_price=body.stored_target_unit_price,
        stored_target_total_price=body.stored_target_total_price,
        stored_raise_amount=body.stored_raise_amount,
        stored_buy_target_price=body.stored_buy_target_price,
    )
    cfg = valuation_config(
        body.floor_pattern,
        floor_fallback=body.floor_fallback,
        clamp_to_zero=body.clamp_to_zero,
    )
    schedule = floor_schedule(inp, cfg) if body.include_schedule else None
    return valuation_out(compute_valuation(inp, cfg), schedule)


@router.post("/valuations/opportunity", response_model=OpportunityOut)
def create_opportunity(body: OpportunityRequest) -> OpportunityOut:
    days = body.elapsed_days
    if days is None:
        days = elapsed_days(body.registered_date, body.contract_date)

    flags = score_opportunity(
        historical_min_price=body.historical_min_price,
        buy_target_price=body.buy_target_price,
        target_total_price=body.target_total_price,
        historical_max_price=body.historical_max_price,
        quality_coefficient=body.quality_coefficient,
        elapsed_days=days,
        config=scoring_config(
            gap_policy=body.gap_policy,
            gap_threshold=body.gap_threshold,
            fast_days_threshold=body.fast_days_threshold,
            high_coefficient_threshold=body.high_coefficient_threshold,
        ),
    )
    return flags_out(flags)


@router.post("/complexes/evaluate", response_model=ComplexEvaluationOut)
def create_complex_evaluation(body: ComplexEvaluationRequest) -> ComplexEvaluationOut:
    ev = evaluate_complex(body.selections)
    return ComplexEvaluationOut(
        market=ev.market,
        location=ev.location,
        building=ev.building,
        plus=ev.plus,
        total=ev.total,
        factors=ev.factors,
        built_age_years=built_age_years(body.built_ym),
    )
