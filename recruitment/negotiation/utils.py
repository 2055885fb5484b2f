from __future__ import annotations

import json
import math
from typing import Any


def safe_int(x: Any, default: int = 0) -> int:
    try:
        if x is None:
            return int(default)
        return int(x)
    except Exception:
        return int(default)


def safe_float(x: Any, default: float = 0.0) -> float:
    try:
        if x is None:
            return float(default)
        v = float(x)
        if math.isnan(v) or math.isinf(v):
            return float(default)
        return float(v)
    except Exception:
        return float(default)


def clamp(x: Any, lo: float, hi: float) -> float:
    v = safe_float(x, lo)
    if v < lo:
        return float(lo)
    if v > hi:
        return float(hi)
    return float(v)


def clamp_int(x: Any, lo: int, hi: int) -> int:
    v = safe_int(x, lo)
    if v < lo:
        return int(lo)
    if v > hi:
        return int(hi)
    return int(v)


def floor_int(x: float) -> int:
    """Floor toward negative infinity, returning a plain int.

    The value is rounded to 6 decimals first so float noise such as
    34.99999999999999 (50 * 0.7) floors to 35, not 34.
    """
    return int(math.floor(round(float(x), 6)))


def is_finite_number(x: Any) -> bool:
    if isinstance(x, bool):
        return False
    try:
        v = float(x)
    except (TypeError, ValueError, OverflowError):
        return False
    return not (math.isnan(v) or math.isinf(v))


def json_dumps(obj: Any) -> str:
    """Stable JSON dump for logs/payload validation."""
    return json.dumps(obj, ensure_ascii=False, separators=(",", ":"), sort_keys=True)
