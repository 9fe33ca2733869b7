# app/domain/valuation.py
"""
Deterministic valuation kernel.

raw record -> comparable unit price -> target price -> raise amount
-> cost deductions -> buy-target price

Every function is pure and never raises: bad numeric input degrades to 0
(or 1 for multiplicative coefficients) via safe_num / coef_or_one.
All rounding is half-up (js_round).
"""
from __future__ import annotations

import math
from typing import Any

from .floor_coefficients import lookup, pattern_coefficients
from .parsing import coef_or_one, js_round, safe_num
from .types import FloorValuation, ValuationConfig, ValuationInput, ValuationResult

# gross listing target is assumed to carry ~21% over the raise amount
MARKUP_RATIO = 1.21
RAISE_UNIT = 10_000

MOVE_COST_LOW_RATE = 132_000  # per sqm, area < 60
MOVE_COST_HIGH_RATE = 123_000  # per sqm, area >= 80
MOVE_COST_TAPER_PER_SQM = 400  # rate drop per sqm between 60 and 80

BROKERAGE_THRESHOLD = 10_000_000
BROKERAGE_MIN_FEE = 550_000
BROKERAGE_RATE = 0.055

OTHER_COST_RATE = 0.075

NEGOTIATION_LOW = 0.9
NEGOTIATION_HIGH = 1.25


def _stored_first(stored: Any, computed: int) -> int:
    v = safe_num(stored)
    return js_round(v) if v else computed


def unit_price(total_price: Any, area: Any) -> int:
    total = safe_num(total_price)
    a = safe_num(area)
    if a <= 0:
        return 0
    return js_round(total / a)


def quality_coefficient(
    coef_total: Any = None,
    interior_level_coef: Any = None,
    contract_year_coef: Any = None,
) -> float:
    """
    Stored total wins when present; otherwise interior + recency.
    A zero / missing / non-finite result means "unset" -> 1.
    """
    if coef_total is not None:
        return coef_or_one(coef_total)
    return coef_or_one(safe_num(interior_level_coef) + safe_num(contract_year_coef))


def target_unit_price(comparable_unit_price: Any, quality_coef: Any, floor_coef: Any) -> int:
    return js_round(safe_num(comparable_unit_price) * coef_or_one(quality_coef) * coef_or_one(floor_coef))


def target_total_price(target_unit: Any, area: Any) -> int:
    return js_round(safe_num(target_unit) * safe_num(area))


def floor_to_ten_thousand(x: Any) -> int:
    return int(math.floor(safe_num(x) / RAISE_UNIT)) * RAISE_UNIT


def raise_amount(target_total: Any) -> int:
    return floor_to_ten_thousand(safe_num(target_total) / MARKUP_RATIO)


def move_cost(area: Any) -> int:
    """Renovation / relocation budget, tiered by floor area."""
    a = safe_num(area)
    if a < 60:
        return js_round(a * MOVE_COST_LOW_RATE)
    if a >= 80:
        return js_round(a * MOVE_COST_HIGH_RATE)
    return js_round(a * (MOVE_COST_LOW_RATE - (a - 60) * MOVE_COST_TAPER_PER_SQM))


def brokerage_fee(raise_amt: Any) -> int:
    r = safe_num(raise_amt)
    if r < BROKERAGE_THRESHOLD:
        return BROKERAGE_MIN_FEE
    return js_round(r * BROKERAGE_RATE)


def other_cost(raise_amt: Any) -> int:
    return js_round(safe_num(raise_amt) * OTHER_COST_RATE)


def buy_target_price(
    raise_amt: Any,
    move: Any,
    brokerage: Any,
    other: Any,
    *,
    clamp_to_zero: bool = False,
) -> int:
    v = js_round(safe_num(raise_amt) - safe_num(move) - safe_num(brokerage) - safe_num(other))
    return max(0, v) if clamp_to_zero else v


def comparable_unit_price(inp: ValuationInput, area: float) -> int:
    """A stored comparable unit price is the base as given; otherwise total / area."""
    return _stored_first(inp.stored_comparable_unit_price, unit_price(inp.reference_price, area))


def resolve_floor_coefficient(inp: ValuationInput, config: ValuationConfig) -> float:
    direct = safe_num(inp.floor_coefficient)
    if direct:
        return direct
    return lookup(config.floor_pattern, inp.floor_number, fallback=config.floor_fallback)


def compute_valuation(inp: ValuationInput, config: ValuationConfig | None = None) -> ValuationResult:
    config = config or ValuationConfig()

    area = safe_num(inp.area)
    unit = comparable_unit_price(inp, area)
    q = quality_coefficient(inp.quality_coefficient, inp.interior_level_coef, inp.contract_year_coef)
    fc = resolve_floor_coefficient(inp, config)

    t_unit = _stored_first(inp.stored_target_unit_price, target_unit_price(unit, q, fc))
    t_total = _stored_first(inp.stored_target_total_price, target_total_price(t_unit, area))
    raise_amt = _stored_first(inp.stored_raise_amount, raise_amount(t_total))

    move = move_cost(area)
    brokerage = brokerage_fee(raise_amt)
    other = other_cost(raise_amt)
    buy = _stored_first(
        inp.stored_buy_target_price,
        buy_target_price(raise_amt, move, brokerage, other, clamp_to_zero=config.clamp_to_zero),
    )

    return ValuationResult(
        comparable_unit_price=unit,
        target_unit_price=t_unit,
        target_total_price=t_total,
        raise_amount=raise_amt,
        move_cost=move,
        brokerage_fee=brokerage,
        other_cost=other,
        buy_target_price=buy,
        quality_coefficient=q,
        floor_coefficient=fc,
    )


def floor_schedule(inp: ValuationInput, config: ValuationConfig | None = None) -> list[FloorValuation]:
    """
    One row per floor of the active pattern (identity pattern when unknown).
    Stored overrides belong to a single record and are ignored here, except
    a stored comparable unit price, which is the base every floor scales from.
    """
    config = config or ValuationConfig()

    area = safe_num(inp.area)
    unit = comparable_unit_price(inp, area)
    q = quality_coefficient(inp.quality_coefficient, inp.interior_level_coef, inp.contract_year_coef)

    rows: list[FloorValuation] = []
    for idx, c in enumerate(pattern_coefficients(config.floor_pattern)):
        t_unit = target_unit_price(unit, q, c)
        t_total = target_total_price(t_unit, area)
        raise_amt = raise_amount(t_total)
        move = move_cost(area)
        brokerage = brokerage_fee(raise_amt)
        other = other_cost(raise_amt)
        buy = buy_target_price(raise_amt, move, brokerage, other, clamp_to_zero=config.clamp_to_zero)
        rows.append(
            FloorValuation(
                floor=idx + 1,
                floor_coefficient=c,
                predicted_unit_price=js_round(unit * c),
                target_unit_price=t_unit,
                target_total_price=t_total,
                raise_amount=raise_amt,
                move_cost=move,
                brokerage_fee=brokerage,
                other_cost=other,
                buy_target_price=buy,
                buy_target_unit_price=js_round(buy / area) if area > 0 else 0,
            )
        )
    return rows


def negotiation_range(buy_target: Any) -> tuple[int, int]:
    """Reference bid band shown next to the buy-target price."""
    b = safe_num(buy_target)
    return js_round(b * NEGOTIATION_LOW), js_round(b * NEGOTIATION_HIGH)
