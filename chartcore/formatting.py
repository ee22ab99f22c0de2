from __future__ import annotations

import math
from decimal import ROUND_HALF_UP, Decimal, localcontext


MAX_PRECISION = 20


def format_fixed(value: float, precision: int = 0) -> str:
    """Format `value` with exactly `precision` decimals.

    Rounding works on the exact binary value and resolves ties away from zero,
    so `format_fixed(2.5)` is "3" while `format_fixed(1.005, 2)` is "1.00".
    """

    precision = _check_precision(precision)
    value = float(value)
    if not math.isfinite(value):
        return str(value)
    q = _quantize(value, precision)
    if q.is_zero():
        q = q.copy_abs()
    return format(q, "f")


def round_half_up(value: float, places: int) -> float:
    value = float(value)
    if not math.isfinite(value):
        return value
    return float(_quantize(value, _check_precision(places)))


def _quantize(value: float, precision: int) -> Decimal:
    d = Decimal(value)
    with localcontext() as ctx:
        ctx.prec = max(28, d.adjusted() + precision + 2)
        return d.quantize(Decimal("1").scaleb(-precision), rounding=ROUND_HALF_UP)


def _check_precision(precision: int) -> int:
    precision = int(precision)
    if precision < 0 or precision > MAX_PRECISION:
        raise ValueError(f"precision must be in [0, {MAX_PRECISION}]")
    return precision
