from datetime import date
from typing import Literal

from pydantic import BaseModel, Field

FloorFallbackName = Literal["first", "clamp"]
GapPolicyName = Literal["symmetric", "one_sided"]


class ValuationRequest(BaseModel):
    area: float | None = None
    reference_price: float | None = None
    quality_coefficient: float | None = None
    interior_level_coef: float | None = None
    contract_year_coef: float | None = None
    floor_number: int | None = None
    floor_coefficient: float | None = None

    stored_target_unit_price: float | None = None
    stored_target_total_price: float | None = None
    stored_raise_amount: float | None = None
    stored_buy_target_price: float | None = None

    floor_pattern: str | None = None
    floor_fallback: FloorFallbackName | None = None
    clamp_to_zero: bool | None = None
    include_schedule: bool = False


class FloorRowOut(BaseModel):
    floor: int
    floor_coefficient: float
    predicted_unit_price: int
    target_unit_price: int
    target_total_price: int
    raise_amount: int
    move_cost: int
    brokerage_fee: int
    other_cost: int
    buy_target_price: int
    buy_target_unit_price: int


class ValuationOut(BaseModel):
    comparable_unit_price: int
    target_unit_price: int
    target_total_price: int
    raise_amount: int
    move_cost: int
    brokerage_fee: int
    other_cost: int
    buy_target_price: int
    quality_coefficient: float
    floor_coefficient: float

    negotiation_low: int
    negotiation_high: int
    schedule: list[FloorRowOut] | None = None


class OpportunityRequest(BaseModel):
    historical_min_price: float | None = None
    buy_target_price: float | None = None
    target_total_price: float | None = None
    historical_max_price: float | None = None
    quality_coefficient: float | None = None

    elapsed_days: int | None = None
    registered_date: date | None = None
    contract_date: date | None = None

    gap_policy: GapPolicyName | None = None
    gap_threshold: int | None = Field(default=None, ge=0)
    fast_days_threshold: int | None = Field(default=None, ge=0)
    high_coefficient_threshold: float | None = None


class OpportunityOut(BaseModel):
    diff: int
    gap_narrow: bool
    turnover_fast: bool
    coefficient_high: bool
    focus: bool


class ComplexEvaluationRequest(BaseModel):
    selections: dict[str, str] = Field(default_factory=dict)
    built_ym: str | None = None


class ComplexEvaluationOut(BaseModel):
    market: int
    location: int
    building: int
    plus: int
    total: int
    factors: dict[str, int]
    built_age_years: int | None = None


class ComparableCardOut(BaseModel):
    kind: Literal["MAX", "MINI"]
    entry_id: int
    unit_price: int
    floor: int | None = None
    price: int
    area: float
    layout: str
    registered_date: date | None = None
    contract_date: date | None = None
    days: int
    coef_total: float
    floors: list[FloorRowOut]


class OpportunityRowOut(BaseModel):
    entry_id: int
    complex_id: int
    contract_kind: str | None = None
    floor: int | None = None
    area: float
    layout: str

    past_max: int
    past_min: int
    coef_total: float
    days: int

    valuation: ValuationOut
    flags: OpportunityOut


class StockValuationOut(BaseModel):
    stock_id: int
    complex_id: int
    floor_pattern: str | None = None

    list_price: int | None = None
    list_unit_price: int
    past_min: int | None = None
    diff_from_past_min: int | None = None
    registered_date: date | None = None
    contract_date: date | None = None
    days_listed: int
    note: str | None = None

    valuation: ValuationOut
