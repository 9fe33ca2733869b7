# app/domain/types.py
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class FloorFallback(str, Enum):
    """What to use when the pattern has no entry for the requested floor."""

    first = "first"  # floor 1's multiplier (observed behavior)
    clamp = "clamp"  # nearest in-range floor


class GapPolicy(str, Enum):
    symmetric = "symmetric"  # abs(diff) <= threshold
    one_sided = "one_sided"  # 0 <= diff <= threshold


@dataclass(frozen=True)
class ValuationInput:
    area: float | None
    reference_price: float | None
    quality_coefficient: float | None = None
    interior_level_coef: float | None = None
    contract_year_coef: float | None = None
    floor_number: int | None = None
    floor_coefficient: float | None = None

    # stored-value-first: a non-zero override wins over recomputation
    stored_comparable_unit_price: float | None = None
    stored_target_unit_price: float | None = None
    stored_target_total_price: float | None = None
    stored_raise_amount: float | None = None
    stored_buy_target_price: float | None = None


@dataclass(frozen=True)
class ValuationConfig:
    floor_pattern: str | None = None
    floor_fallback: FloorFallback = FloorFallback.first
    clamp_to_zero: bool = False


@dataclass(frozen=True)
class ValuationResult:
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


@dataclass(frozen=True)
class FloorValuation:
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


@dataclass(frozen=True)
class OpportunityScoringConfig:
    gap_threshold: int = 300_000
    fast_days_threshold: int = 30
    high_coefficient_threshold: float = 1.05
    gap_policy: GapPolicy = GapPolicy.symmetric


@dataclass(frozen=True)
class OpportunityFlags:
    diff: int
    gap_narrow: bool
    turnover_fast: bool
    coefficient_high: bool
    focus: bool
