from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Literal, Union

import numpy as np

from chartcore.divides import Axis, DivideSet
from chartcore.errors import ChartConfigError
from chartcore.formatting import round_half_up
from chartcore.primitives import LinePrimitive
from chartcore.scales import to_pixel, to_value


MILESTONE_PRECISION = 3

MilestoneSource = Union[Literal["values", "divides"], tuple[float, ...], None]


@dataclass(frozen=True)
class MilestoneLine:
    axis: Axis
    value: float
    pixel_coord: float
    line: LinePrimitive


def parse_milestone_source(raw: object) -> MilestoneSource:
    if raw is None:
        return None
    if isinstance(raw, str):
        if raw in ("values", "divides"):
            return raw  # type: ignore[return-value]
        raise ChartConfigError(f"unsupported milestone source: {raw!r}")
    if isinstance(raw, np.ndarray):
        raw = raw.tolist()
    if isinstance(raw, Sequence):
        out: list[float] = []
        for item in raw:
            if isinstance(item, bool) or not isinstance(item, (int, float)):
                raise ChartConfigError(f"milestone values must be numbers, got {item!r}")
            out.append(float(item))
        return tuple(out)
    raise ChartConfigError(f"unsupported milestone source type: {type(raw)!r}")


def milestone_in_range(value: float, min_value: float, max_value: float) -> bool:
    """Open lower bound, closed upper bound, compared at 3 decimals."""

    rounded = round_half_up(value, MILESTONE_PRECISION)
    if rounded <= round_half_up(min_value, MILESTONE_PRECISION):
        return False
    if rounded > round_half_up(max_value, MILESTONE_PRECISION):
        return False
    return True


def create_milestone_line(
    axis: Axis,
    *,
    origin: float,
    length: float,
    cross_start: float,
    cross_end: float,
    min_value: float,
    max_value: float,
    value: float | None = None,
    coord: float | None = None,
) -> MilestoneLine | None:
    if value is None and coord is None:
        raise ValueError("either value or coord is required")
    if value is None:
        value = to_value(origin, length, float(coord), max_value)  # type: ignore[arg-type]
    if not milestone_in_range(value, min_value, max_value):
        return None
    if coord is None:
        coord = to_pixel(origin, length, value, max_value)
    if axis == "x":
        line = LinePrimitive(x1=coord, y1=cross_start, x2=coord, y2=cross_end, role="milestone-x")
    else:
        line = LinePrimitive(x1=cross_start, y1=coord, x2=cross_end, y2=coord, role="milestone-y")
    return MilestoneLine(axis=axis, value=float(value), pixel_coord=float(coord), line=line)


def generate_milestones(
    source: MilestoneSource,
    axis: Axis,
    *,
    visible_values: np.ndarray,
    divides: DivideSet | None,
    origin: float,
    length: float,
    cross_start: float,
    cross_end: float,
    min_value: float,
    max_value: float,
) -> tuple[MilestoneLine, ...]:
    """Build the milestone lines of one axis from its configured source.

    `visible_values` holds the axis values of the visible dataset (used by the
    "values" source); `divides` is the axis divide set (used by "divides", whose
    coordinates are reused as-is).
    """

    if source is None:
        return ()

    def _line(value: float | None, coord: float | None = None) -> MilestoneLine | None:
        return create_milestone_line(
            axis,
            origin=origin,
            length=length,
            cross_start=cross_start,
            cross_end=cross_end,
            min_value=min_value,
            max_value=max_value,
            value=value,
            coord=coord,
        )

    if source == "values":
        candidates = [_line(v) for v in np.asarray(visible_values, dtype=np.float64).tolist()]
    elif source == "divides":
        if divides is None:
            return ()
        candidates = [_line(d.value, d.pixel_coord) for d in divides.divides]
    else:
        candidates = [_line(v) for v in source]
    return tuple(line for line in candidates if line is not None)
