from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from chartcore.formatting import format_fixed
from chartcore.items import IntervalValues, PlottedItem, PointValues


@dataclass(frozen=True)
class AggregateValues:
    min: float
    max: float
    sum: float
    avg: float
    diff: float | None = None


def aggregate(values: Sequence[float]) -> AggregateValues:
    vals = [float(v) for v in values]
    if not vals:
        raise ValueError("aggregate requires at least one value")
    lo = min(vals)
    hi = max(vals)
    total = sum(vals)
    diff = hi - lo if len(vals) == 2 else None
    return AggregateValues(min=lo, max=hi, sum=total, avg=total / len(vals), diff=diff)


def format_aggregate(prefix: str, agg: AggregateValues, precision: int) -> str:
    parts = [
        f"Min: {format_fixed(agg.min, precision)}",
        f"Max: {format_fixed(agg.max, precision)}",
        f"Avg: {format_fixed(agg.avg, precision)}",
        f"Sum: {format_fixed(agg.sum, precision)}",
    ]
    if agg.diff is not None:
        parts.append(f"diff: {format_fixed(agg.diff, precision)}")
    return f"{prefix}: " + ", ".join(parts)


def point_info_lines(items: Sequence[PlottedItem], x_precision: int = 0, y_precision: int = 0) -> tuple[str, ...]:
    if not items:
        return ()
    if len(items) == 1:
        values = items[0].values
        assert isinstance(values, PointValues)
        return (f"x: {format_fixed(values.x, x_precision)}", f"y: {format_fixed(values.y, y_precision)}")
    agg = aggregate([item.values.y for item in items])
    return (format_aggregate("y", agg, y_precision),)


def interval_info_lines(items: Sequence[PlottedItem], x_precision: int = 0, y_precision: int = 0) -> tuple[str, ...]:
    if not items:
        return ()
    if len(items) == 1:
        values = items[0].values
        assert isinstance(values, IntervalValues)
        return (
            f"x: span: {format_fixed(values.x1, x_precision)} - {format_fixed(values.x2, x_precision)}, "
            f"length: {format_fixed(values.length, x_precision)}",
            f"y: {format_fixed(values.y, y_precision)}",
        )
    lengths = aggregate([item.values.length for item in items])  # type: ignore[union-attr]
    ys = aggregate([item.values.y for item in items])
    return (format_aggregate("x", lengths, x_precision), format_aggregate("y", ys, y_precision))


def info_lines(items: Sequence[PlottedItem], x_precision: int = 0, y_precision: int = 0) -> tuple[str, ...]:
    """Info text for the active items, dispatched on the payload variant."""

    if not items:
        return ()
    if items[0].values.kind == "interval":
        return interval_info_lines(items, x_precision, y_precision)
    return point_info_lines(items, x_precision, y_precision)
