# app/domain/complex_evaluation.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Any, Mapping

# factor -> {option value: score}
EVAL_OPTIONS: dict[str, dict[str, int]] = {
    # market
    "market_deals": {"rich": 10, "normal": 5, "low": 0},
    "rent_demand": {"high": 5, "mid": 3, "low": 0},
    "inventory": {"down": 5, "flat": 3, "up": 0},
    # location
    "walk": {"5": 10, "10": 8, "15": 5, "over15": 0},
    "access": {"direct30": 5, "one40": 3, "two": 2, "oneHour": 1, "over90": 0},
    "convenience": {"all": 10, "half": 6, "few": 3, "none": 0},
    # building
    "scale": {"large": 5, "mid": 3, "small": 0},
    "elevator": {"yes": 5, "no": 0},
    "mgmt": {"good": 10, "mid": 6, "min": 3, "bad": 0},
    "appearance": {"good": 5, "normal": 3, "bad": 0},
    "parking": {"enough": 5, "lack": 2, "none": 0},
    "view": {"great": 10, "south": 6, "north": 0},
    # plus
    "future": {"big": 5, "mid": 3, "small": 0},
    "focus": {"high": 5, "mid": 3, "low": 0},
    "support": {"yes": 5, "no": 0},
}

CATEGORIES: dict[str, tuple[str, ...]] = {
    "market": ("market_deals", "rent_demand", "inventory"),
    "location": ("walk", "access", "convenience"),
    "building": ("scale", "elevator", "mgmt", "appearance", "parking", "view"),
    "plus": ("future", "focus", "support"),
}


@dataclass(frozen=True)
class ComplexEvaluation:
    market: int
    location: int
    building: int
    plus: int
    total: int
    factors: dict[str, int]


def option_score(factor: str, value: Any) -> int:
    """Unknown factor or option -> 0."""
    table = EVAL_OPTIONS.get(factor)
    if not table or value is None:
        return 0
    return table.get(str(value), 0)


def evaluate_complex(selections: Mapping[str, Any]) -> ComplexEvaluation:
    factors = {f: option_score(f, selections.get(f)) for f in EVAL_OPTIONS}
    totals = {cat: sum(factors[f] for f in keys) for cat, keys in CATEGORIES.items()}
    return ComplexEvaluation(
        market=totals["market"],
        location=totals["location"],
        building=totals["building"],
        plus=totals["plus"],
        total=sum(totals.values()),
        factors=factors,
    )


def built_age_years(built_ym: str | None, *, today: date | None = None) -> int | None:
    """'YYYY-MM' -> full years since construction (None if unparseable)."""
    if not built_ym:
        return None
    try:
        built = date.fromisoformat(f"{built_ym.strip()}-01")
    except ValueError:
        return None
    now = today or date.today()
    years = now.year - built.year
    if now.month < built.month:
        years -= 1
    return years if years >= 0 else None
