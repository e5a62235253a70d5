from __future__ import annotations

import math
import re
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Any

_DECIMAL_PATTERN = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?", re.ASCII)
_PREFIXED_INTEGER_PATTERN = re.compile(r"0(?P<prefix>[xXbBoO])(?P<digits>[0-9a-fA-F]+)")
_PREFIX_BASES = {"x": 16, "b": 2, "o": 8}


def _parse_numeric_string(candidate: str) -> float | None:
    if _DECIMAL_PATTERN.fullmatch(candidate):
        return float(candidate)
    # Unsigned 0x/0b/0o literals are accepted, signed ones are not.
    prefixed = _PREFIXED_INTEGER_PATTERN.fullmatch(candidate)
    if prefixed is None:
        return None
    try:
        return float(int(prefixed.group("digits"), _PREFIX_BASES[prefixed.group("prefix").lower()]))
    except (ValueError, OverflowError):
        return None


def as_number(value: Any) -> int | float | None:
    """Return value when it is a finite int/float, otherwise None.

    Strings are treated as unknown: backend fields arrive already typed.
    """
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    if isinstance(value, float) and not math.isfinite(value):
        return None
    return value


def parse_number(value: Any) -> float | None:
    """Parse raw user input (number or numeric string) into a finite float."""
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        try:
            parsed = float(value)
        except OverflowError:
            return None
    elif isinstance(value, str):
        candidate = value.strip()
        if not candidate:
            # Blank form fields read as zero, matching browser number coercion.
            return 0.0
        parsed = _parse_numeric_string(candidate)
        if parsed is None:
            return None
    else:
        return None
    return parsed if math.isfinite(parsed) else None


def round_half_up(value: int | float) -> int:
    """Round to the nearest integer with halves going away from zero."""
    if isinstance(value, int):
        return value
    try:
        # Route through Decimal so ties never fall back to banker's rounding.
        decimal_value = Decimal(str(value))
    except (InvalidOperation, ValueError):
        return 0
    if not decimal_value.is_finite():
        return 0
    return int(decimal_value.to_integral_value(rounding=ROUND_HALF_UP))


def clamp(value: float, lower: float, upper: float) -> float:
    return max(lower, min(upper, value))


def non_negative(value: int | float | None) -> int | float | None:
    if value is None:
        return None
    return max(0, value)
