from datetime import date

import pytest

from app.domain.types import GapPolicy, OpportunityScoringConfig
from app.models import ContractKind, EstateEntry, HousingComplex, StockListing
from app.service_layer.valuation import (
    ComplexNotFound,
    StockNotFound,
    complex_cards,
    entry_input,
    opportunity_board,
    stock_input,
    stock_valuation,
)


async def test_opportunity_board_values_and_flags(async_session_maker, seeded_complex):
    async with async_session_maker() as session:
        rows = await opportunity_board(session, seeded_complex.id)

    assert len(rows) == 2
    fast, slow = rows

    assert fast.layout == "2DK"
    assert fast.valuation.buy_target_price == 490_500
    assert fast.flags.diff == 209_500
    assert fast.days == 20
    assert fast.flags.focus is True
    assert fast.flags.coefficient_high is False

    assert slow.coef_total == pytest.approx(1.05)
    assert slow.valuation.target_total_price == 20_790_049
    assert slow.valuation.buy_target_price == 6_155_729
    assert slow.flags.diff == -155_729
    assert slow.flags.gap_narrow is True
    assert slow.flags.turnover_fast is False
    assert slow.flags.coefficient_high is True
    assert slow.flags.focus is False


async def test_opportunity_board_one_sided_policy(async_session_maker, seeded_complex):
    cfg = OpportunityScoringConfig(gap_policy=GapPolicy.one_sided)
    async with async_session_maker() as session:
        rows = await opportunity_board(session, seeded_complex.id, scoring=cfg)

    assert [r.flags.gap_narrow for r in rows] == [True, False]


async def test_opportunity_board_focus_only(async_session_maker, seeded_complex):
    async with async_session_maker() as session:
        rows = await opportunity_board(session, seeded_complex.id, focus_only=True)

    assert len(rows) == 1
    assert rows[0].flags.focus is True


async def test_unknown_complex_raises(async_session_maker):
    async with async_session_maker() as session:
        with pytest.raises(ComplexNotFound):
            await opportunity_board(session, 999)
        with pytest.raises(ComplexNotFound):
            await complex_cards(session, 999)


async def test_cards_use_kind_specific_reference_price(async_session_maker, seeded_complex):
    async with async_session_maker() as session:
        cards = await complex_cards(session, seeded_complex.id, today=date(2024, 4, 1))

    by_kind = {c.kind: c for c in cards}
    assert set(by_kind) == {"MAX", "MINI"}

    mx = by_kind["MAX"]
    assert mx.price == 10_000_000
    assert mx.unit_price == 200_000
    assert mx.days == 20
    assert len(mx.floors) == 5
    assert all(f.buy_target_price == 490_500 for f in mx.floors)

    mini = by_kind["MINI"]
    assert mini.price == 6_000_000
    assert mini.unit_price == 87_822


async def test_cards_pick_latest_entry_and_complex_pattern(async_session_maker):
    async with async_session_maker() as session:
        cx = HousingComplex(name="中間団地", floor_coef_pattern="②中間")
        session.add(cx)
        await session.flush()
        session.add_all(
            [
                EstateEntry(
                    complex_id=cx.id,
                    contract_kind=ContractKind.MAX,
                    area_sqm=40.0,
                    max_price=8_000_000,
                    contract_date=date(2020, 1, 1),
                ),
                EstateEntry(
                    complex_id=cx.id,
                    contract_kind=ContractKind.MAX,
                    floor=3,
                    area_sqm=68.32,
                    max_price=19_800_000,
                    coef_total=1.05,
                    reins_registered_date=date(2024, 3, 1),
                    contract_date=date(2024, 3, 21),
                ),
            ]
        )
        await session.commit()

        cards = await complex_cards(session, cx.id)

    assert len(cards) == 1
    card = cards[0]
    assert card.kind == "MAX"
    assert card.price == 19_800_000
    assert [f.floor_coefficient for f in card.floors] == [1.00, 0.99, 0.96, 0.92, 0.88]
    assert card.floors[1].buy_target_price == 6_007_829
    assert card.floors[2].buy_target_price == 5_555_429


async def test_stock_valuation_honors_stored_overrides(async_session_maker, seeded_complex):
    async with async_session_maker() as session:
        fresh = StockListing(
            complex_id=seeded_complex.id,
            floor=1,
            area_sqm=68.32,
            max_unit_price=289_813,
            coef_total=1.05,
        )
        stored = StockListing(
            complex_id=seeded_complex.id,
            floor=1,
            area_sqm=68.32,
            max_unit_price=289_813,
            coef_total=1.05,
            raise_price=17_000_000,
            buy_target_price=5_000_000,
        )
        session.add_all([fresh, stored])
        await session.commit()

        computed = await stock_valuation(session, fresh.id)
        overridden = await stock_valuation(session, stored.id)

    assert computed.valuation.comparable_unit_price == 289_813
    assert computed.valuation.buy_target_price == 6_155_729

    assert overridden.valuation.raise_amount == 17_000_000
    assert overridden.valuation.brokerage_fee == 935_000
    assert overridden.valuation.buy_target_price == 5_000_000


async def test_missing_stock_raises(async_session_maker):
    async with async_session_maker() as session:
        with pytest.raises(StockNotFound):
            await stock_valuation(session, 42)


def test_entry_input_maps_kind_to_reference_price():
    e = EstateEntry(area_sqm=50.0, max_price=10_000_000, past_min=7_000_000, floor=2)
    assert entry_input(e).reference_price == 10_000_000
    assert entry_input(e, kind=ContractKind.MINI).reference_price == 7_000_000
    assert entry_input(e).floor_number == 2


async def test_stock_valuation_list_price_readouts(async_session_maker, seeded_complex):
    async with async_session_maker() as session:
        linked = EstateEntry(
            complex_id=seeded_complex.id,
            contract_kind=ContractKind.MINI,
            area_sqm=68.32,
            past_min=6_000_000,
        )
        session.add(linked)
        await session.flush()

        listed = StockListing(
            complex_id=seeded_complex.id,
            entry_id=linked.id,
            floor=1,
            area_sqm=68.32,
            list_price=19_000_000,
            registered_date=date(2024, 6, 1),
            max_unit_price=289_813,
            coef_total=1.05,
            note="南向き",
        )
        sold = StockListing(
            complex_id=seeded_complex.id,
            area_sqm=68.32,
            registered_date=date(2024, 6, 1),
            contract_date=date(2024, 6, 11),
        )
        future = StockListing(complex_id=seeded_complex.id, registered_date=date(2024, 8, 1))
        session.add_all([listed, sold, future])
        await session.commit()

        today = date(2024, 7, 1)
        out = await stock_valuation(session, listed.id, today=today)
        sold_out = await stock_valuation(session, sold.id, today=today)
        future_out = await stock_valuation(session, future.id, today=today)

    assert out.list_unit_price == 278_103
    assert out.past_min == 6_000_000
    assert out.diff_from_past_min == 13_000_000
    assert out.days_listed == 30
    assert out.note == "南向き"
    assert out.valuation.buy_target_price == 6_155_729

    assert sold_out.days_listed == 10
    assert sold_out.list_unit_price == 0
    assert sold_out.past_min is None
    assert sold_out.diff_from_past_min is None

    assert future_out.days_listed == 0


async def test_stock_valuation_keeps_unit_price_without_area(async_session_maker, seeded_complex):
    async with async_session_maker() as session:
        stock = StockListing(
            complex_id=seeded_complex.id,
            floor=1,
            area_sqm=0,
            max_unit_price=289_813,
            coef_total=1.05,
        )
        session.add(stock)
        await session.commit()

        out = await stock_valuation(session, stock.id)

    assert out.valuation.comparable_unit_price == 289_813
    assert out.valuation.target_unit_price == 304_304
    assert out.valuation.target_total_price == 0
    assert out.valuation.buy_target_price == -550_000


def test_stock_input_passes_unit_price_through():
    s = StockListing(area_sqm=None, max_unit_price=289_813, coef_total=1.05)
    inp = stock_input(s)
    assert inp.stored_comparable_unit_price == 289_813
    assert inp.reference_price is None
