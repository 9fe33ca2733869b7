# app/domain/parsing.py
from __future__ import annotations

import math
from datetime import date, datetime
from typing import Any


def safe_num(x: Any, default: float = 0.0) -> float:
    """
    Coerce a raw field into a finite float.
    None / bool / blank / unparseable / NaN / inf -> default.
    """
    if x is None or isinstance(x, bool):
        return default
    if isinstance(x, (int, float)):
        v = float(x)
    elif isinstance(x, str):
        if not x.strip():
            return default
        try:
            v = float(x)
        except ValueError:
            return default
    else:
        return default
    return v if math.isfinite(v) else default


def coef_or_one(x: Any) -> float:
    # 0 counts as "unset" for multiplicative coefficients
    return safe_num(x) or 1.0


def js_round(x: float) -> int:
    """Half-up rounding (2.5 -> 3, -2.5 -> -2), not Python's banker's rounding."""
    return int(math.floor(x + 0.5))


def to_int(x: Any) -> int | None:
    if x is None or x == "":
        return None
    try:
        v = float(x)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(v):
        return None
    return int(v)


def to_float(x: Any) -> float | None:
    if x is None or x == "":
        return None
    try:
        v = float(x)
    except (TypeError, ValueError):
        return None
    return v if math.isfinite(v) else None


def parse_date(x: Any) -> date | None:
    """date / datetime / 'YYYY-MM-DD' / ISO datetime string -> date."""
    if x is None:
        return None
    if isinstance(x, datetime):
        return x.date()
    if isinstance(x, date):
        return x
    if not isinstance(x, str):
        return None
    s = x.strip()
    if not s:
        return None
    # drop any time part: "2024-03-01T10:00" or "2024-03-01 10:00:00"
    s = s.split("T", 1)[0].split(" ", 1)[0]
    try:
        return date.fromisoformat(s)
    except ValueError:
        return None


def elapsed_days(registered: Any, contracted: Any, *, today: date | None = None) -> int:
    """
    Whole days between registration and contract.
    No contract date -> count up to today. No usable registration date -> 0.
    """
    start = parse_date(registered)
    if start is None:
        return 0
    end = parse_date(contracted)
    if end is None:
        if contracted not in (None, ""):
            # present but unparseable
            return 0
        end = today or date.today()
    return abs((end - start).days)


def days_since(registered: Any, *, today: date | None = None) -> int:
    """Days a listing has been on the market; never negative, 0 without a usable date."""
    start = parse_date(registered)
    if start is None:
        return 0
    return max(0, ((today or date.today()) - start).days)
