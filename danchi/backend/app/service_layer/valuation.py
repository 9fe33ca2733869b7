# app/service_layer/valuation.py
from __future__ import annotations

import logging
from dataclasses import asdict
from datetime import date

from sqlalchemy.ext.asyncio import AsyncSession

from ..adapters.repos.complexes import ComplexRepository
from ..adapters.repos.entries import EntryRepository, StockRepository
from ..config import settings
from ..domain.opportunity import score_opportunity
from ..domain.parsing import days_since, elapsed_days, safe_num
from ..domain.types import (
    FloorFallback,
    FloorValuation,
    GapPolicy,
    OpportunityFlags,
    OpportunityScoringConfig,
    ValuationConfig,
    ValuationInput,
    ValuationResult,
)
from ..domain.valuation import compute_valuation, floor_schedule, negotiation_range, unit_price
from ..models import ContractKind, EstateEntry, HousingComplex, StockListing
from ..schemas import (
    ComparableCardOut,
    FloorRowOut,
    OpportunityOut,
    OpportunityRowOut,
    StockValuationOut,
    ValuationOut,
)

log = logging.getLogger(__name__)


class ComplexNotFound(LookupError):
    pass


class StockNotFound(LookupError):
    pass


def valuation_config(
    floor_pattern: str | None = None,
    *,
    floor_fallback: str | None = None,
    clamp_to_zero: bool | None = None,
) -> ValuationConfig:
    """Per-call values win; anything left as None comes from settings."""
    return ValuationConfig(
        floor_pattern=floor_pattern or settings.DEFAULT_FLOOR_PATTERN,
        floor_fallback=FloorFallback(floor_fallback or settings.FLOOR_FALLBACK),
        clamp_to_zero=settings.CLAMP_BUY_TARGET if clamp_to_zero is None else clamp_to_zero,
    )


def scoring_config(
    *,
    gap_policy: str | None = None,
    gap_threshold: int | None = None,
    fast_days_threshold: int | None = None,
    high_coefficient_threshold: float | None = None,
) -> OpportunityScoringConfig:
    return OpportunityScoringConfig(
        gap_threshold=settings.GAP_THRESHOLD if gap_threshold is None else gap_threshold,
        fast_days_threshold=settings.FAST_DAYS_THRESHOLD if fast_days_threshold is None else fast_days_threshold,
        high_coefficient_threshold=(
            settings.HIGH_COEF_THRESHOLD if high_coefficient_threshold is None else high_coefficient_threshold
        ),
        gap_policy=GapPolicy(gap_policy or settings.GAP_POLICY),
    )


# -----------------------------
# Row -> engine input
# -----------------------------
def entry_input(entry: EstateEntry, *, kind: ContractKind = ContractKind.MAX) -> ValuationInput:
    """MAX cards value from the historical max price, MINI cards from the past min."""
    price = entry.max_price if kind == ContractKind.MAX else entry.past_min
    return ValuationInput(
        area=entry.area_sqm,
        reference_price=price,
        quality_coefficient=entry.coef_total,
        interior_level_coef=entry.interior_level_coef,
        contract_year_coef=entry.contract_year_coef,
        floor_number=entry.floor,
    )


def stock_input(stock: StockListing) -> ValuationInput:
    # stocks carry a comparable unit price, not a total
    return ValuationInput(
        area=stock.area_sqm,
        reference_price=None,
        stored_comparable_unit_price=stock.max_unit_price,
        quality_coefficient=stock.coef_total,
        floor_number=stock.floor,
        floor_coefficient=stock.floor_coef,
        stored_target_unit_price=stock.target_unit_price,
        stored_target_total_price=stock.target_close_price,
        stored_raise_amount=stock.raise_price,
        stored_buy_target_price=stock.buy_target_price,
    )


# -----------------------------
# Engine output -> API shapes
# -----------------------------
def floor_row_out(row: FloorValuation) -> FloorRowOut:
    return FloorRowOut(**asdict(row))


def valuation_out(result: ValuationResult, schedule: list[FloorValuation] | None = None) -> ValuationOut:
    low, high = negotiation_range(result.buy_target_price)
    return ValuationOut(
        **asdict(result),
        negotiation_low=low,
        negotiation_high=high,
        schedule=[floor_row_out(r) for r in schedule] if schedule is not None else None,
    )


def flags_out(flags: OpportunityFlags) -> OpportunityOut:
    return OpportunityOut(**asdict(flags))


# -----------------------------
# Use cases
# -----------------------------
async def _require_complex(session: AsyncSession, complex_id: int) -> HousingComplex:
    cx = await ComplexRepository(session).get(complex_id)
    if cx is None:
        raise ComplexNotFound(f"housing complex {complex_id} not found")
    return cx


async def complex_cards(
    session: AsyncSession,
    complex_id: int,
    *,
    today: date | None = None,
) -> list[ComparableCardOut]:
    """
    MAX / MINI comparable cards: latest entry of each kind, valued on every
    floor of the complex's pattern.
    """
    cx = await _require_complex(session, complex_id)
    cfg = valuation_config(cx.floor_coef_pattern)
    entries = EntryRepository(session)

    cards: list[ComparableCardOut] = []
    for kind in (ContractKind.MAX, ContractKind.MINI):
        base = await entries.latest_by_kind(complex_id, kind)
        if base is None:
            continue
        inp = entry_input(base, kind=kind)
        result = compute_valuation(inp, cfg)
        cards.append(
            ComparableCardOut(
                kind=kind.value,
                entry_id=base.id,
                unit_price=result.comparable_unit_price,
                floor=base.floor,
                price=int(safe_num(inp.reference_price)),
                area=safe_num(base.area_sqm),
                layout=(base.layout or "").strip(),
                registered_date=base.reins_registered_date,
                contract_date=base.contract_date,
                days=elapsed_days(base.reins_registered_date, base.contract_date, today=today),
                coef_total=result.quality_coefficient,
                floors=[floor_row_out(r) for r in floor_schedule(inp, cfg)],
            )
        )

    log.debug("complex %s: built %d comparable cards", complex_id, len(cards))
    return cards


async def opportunity_board(
    session: AsyncSession,
    complex_id: int,
    *,
    focus_only: bool = False,
    scoring: OpportunityScoringConfig | None = None,
    today: date | None = None,
) -> list[OpportunityRowOut]:
    """Every entry of a complex valued from its max price and flagged against its past min."""
    cx = await _require_complex(session, complex_id)
    cfg = valuation_config(cx.floor_coef_pattern)
    scoring = scoring or scoring_config()

    rows: list[OpportunityRowOut] = []
    for entry in await EntryRepository(session).list_for_complex(complex_id):
        result = compute_valuation(entry_input(entry), cfg)
        days = elapsed_days(entry.reins_registered_date, entry.contract_date, today=today)
        flags = score_opportunity(
            historical_min_price=entry.past_min,
            buy_target_price=result.buy_target_price,
            target_total_price=result.target_total_price,
            historical_max_price=entry.max_price,
            quality_coefficient=result.quality_coefficient,
            elapsed_days=days,
            config=scoring,
        )
        if focus_only and not flags.focus:
            continue
        rows.append(
            OpportunityRowOut(
                entry_id=entry.id,
                complex_id=entry.complex_id,
                contract_kind=entry.contract_kind.value if entry.contract_kind else None,
                floor=entry.floor,
                area=safe_num(entry.area_sqm),
                layout=(entry.layout or "").strip(),
                past_max=int(safe_num(entry.max_price)),
                past_min=int(safe_num(entry.past_min)),
                coef_total=result.quality_coefficient,
                days=days,
                valuation=valuation_out(result),
                flags=flags_out(flags),
            )
        )

    log.info(
        "complex %s: scored %d entries (focus=%d)",
        complex_id,
        len(rows),
        sum(1 for r in rows if r.flags.focus),
    )
    return rows


async def stock_valuation(
    session: AsyncSession,
    stock_id: int,
    *,
    today: date | None = None,
) -> StockValuationOut:
    """
    Valuation of a current listing plus its list-price readouts: unit price,
    gap to the linked entry's past minimum and days on the market (counted to
    the contract date once the listing has one).
    """
    stock = await StockRepository(session).get(stock_id)
    if stock is None:
        raise StockNotFound(f"stock listing {stock_id} not found")

    cx = await ComplexRepository(session).get(stock.complex_id)
    pattern = cx.floor_coef_pattern if cx is not None else None
    cfg = valuation_config(pattern)
    result = compute_valuation(stock_input(stock), cfg)

    past_min: int | None = None
    if stock.entry_id is not None:
        linked = await EntryRepository(session).get(stock.entry_id)
        if linked is not None and linked.past_min is not None:
            past_min = int(linked.past_min)

    diff = None
    if stock.list_price is not None and past_min is not None:
        diff = int(stock.list_price) - past_min

    return StockValuationOut(
        stock_id=stock.id,
        complex_id=stock.complex_id,
        floor_pattern=cfg.floor_pattern,
        list_price=stock.list_price,
        list_unit_price=unit_price(stock.list_price, stock.area_sqm),
        past_min=past_min,
        diff_from_past_min=diff,
        registered_date=stock.registered_date,
        contract_date=stock.contract_date,
        days_listed=days_since(stock.registered_date, today=stock.contract_date or today),
        note=stock.note,
        valuation=valuation_out(result),
    )
