# app/domain/opportunity.py
from __future__ import annotations

from typing import Any

from .parsing import coef_or_one, js_round, safe_num
from .types import GapPolicy, OpportunityFlags, OpportunityScoringConfig


def is_gap_narrow(diff: int, *, threshold: int, policy: GapPolicy = GapPolicy.symmetric) -> bool:
    if policy == GapPolicy.one_sided:
        return 0 <= diff <= threshold
    return abs(diff) <= threshold


def score_opportunity(
    *,
    historical_min_price: Any,
    buy_target_price: Any,
    target_total_price: Any,
    historical_max_price: Any,
    quality_coefficient: Any,
    elapsed_days: Any,
    config: OpportunityScoringConfig | None = None,
) -> OpportunityFlags:
    """
    Single stateless classification pass.

    focus = gap_narrow and turnover_fast
    """
    config = config or OpportunityScoringConfig()

    diff = js_round(safe_num(historical_min_price) - safe_num(buy_target_price))
    days = safe_num(elapsed_days)

    gap_narrow = is_gap_narrow(diff, threshold=config.gap_threshold, policy=config.gap_policy)
    turnover_fast = 0 < days <= config.fast_days_threshold
    coefficient_high = (
        safe_num(target_total_price) > safe_num(historical_max_price)
        and coef_or_one(quality_coefficient) >= config.high_coefficient_threshold
    )

    return OpportunityFlags(
        diff=diff,
        gap_narrow=gap_narrow,
        turnover_fast=turnover_fast,
        coefficient_high=coefficient_high,
        focus=gap_narrow and turnover_fast,
    )
