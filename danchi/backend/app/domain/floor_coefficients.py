# app/domain/floor_coefficients.py
from __future__ import annotations

from typing import Any

from .parsing import to_int
from .types import FloorFallback

# Persisted per-complex setting uses the Japanese labels; index 0 = 1F.
FLOOR_COEF_PATTERNS: dict[str, tuple[float, ...]] = {
    "①保守的": (1.00, 0.98, 0.95, 0.90, 0.85),
    "②中間": (1.00, 0.99, 0.96, 0.92, 0.88),
    "③攻め": (1.00, 1.00, 0.99, 0.98, 0.97),
    "④超攻め": (0.98, 0.99, 1.00, 1.03, 1.07),
}

PATTERN_ALIASES: dict[str, str] = {
    "conservative": "①保守的",
    "balanced": "②中間",
    "aggressive": "③攻め",
    "max-aggressive": "④超攻め",
}

IDENTITY_COEFS: tuple[float, ...] = (1.0, 1.0, 1.0, 1.0, 1.0)


def normalize_pattern_name(name: str | None) -> str | None:
    """Return the canonical pattern label, or None when unknown/empty."""
    if not name:
        return None
    s = name.strip()
    if s in FLOOR_COEF_PATTERNS:
        return s
    return PATTERN_ALIASES.get(s.lower().replace("_", "-"))


def pattern_coefficients(name: str | None) -> tuple[float, ...]:
    canonical = normalize_pattern_name(name)
    if canonical is None:
        return IDENTITY_COEFS
    return FLOOR_COEF_PATTERNS[canonical]


def lookup(
    pattern_name: str | None,
    floor_number: Any,
    *,
    fallback: FloorFallback = FloorFallback.first,
) -> float:
    """
    Multiplier for a 1-based floor.

    A floor outside the pattern (or no usable floor at all) falls back to the
    first entry unless fallback=clamp, which uses the nearest defined floor.
    """
    coefs = pattern_coefficients(pattern_name)
    floor = to_int(floor_number)
    if floor is not None and 1 <= floor <= len(coefs):
        return coefs[floor - 1]

    if fallback == FloorFallback.clamp and floor is not None:
        return coefs[-1] if floor > len(coefs) else coefs[0]
    return coefs[0]
