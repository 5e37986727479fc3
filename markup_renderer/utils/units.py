"""Lenient numeric helpers for markup attribute values."""
from __future__ import annotations

import math
import re
from typing import Optional

_NUMERIC_PREFIX = re.compile(r"^\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")


def parse_number(value: object) -> Optional[float]:
    """Read the leading number of a value, ``None`` when there is none.

    Strings are read up to the first non-numeric character, so ``"12px"``
    gives 12 and ``"25%"`` gives 25. Booleans are not numbers.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = float(value)
        return None if math.isnan(number) else number
    if isinstance(value, str):
        match = _NUMERIC_PREFIX.match(value)
        if match is None:
            return None
        return float(match.group(1))
    return None


def is_numeric(value: object) -> bool:
    """Return True when ``value`` has a readable numeric prefix."""
    return parse_number(value) is not None


def num(value: object, default: float = 0.0) -> float:
    """Return the numeric value of ``value`` or ``default``."""
    number = parse_number(value)
    if number is None:
        return default or 0.0
    return number


def percentage_value(value: object, total: object = None) -> float:
    """Resolve ``"p%"`` against ``total`` (1 when not numeric); plain values pass through."""
    if isinstance(value, str) and value.endswith("%"):
        base = num(total, 1)
        if not math.isfinite(base):
            base = 1.0
        return num(value) / 100 * base
    return num(value)
