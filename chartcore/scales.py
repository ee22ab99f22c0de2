from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

import numpy as np

from chartcore.errors import ChartDataError


DatasetKind = Literal["point", "interval"]


@dataclass(frozen=True)
class AxisBounds:
    x_max: float
    y_max: float


def clamp(value: float, low: float, high: float) -> float:
    return min(max(value, low), high)


def to_pixel(origin: float, length: float, value: float, max_value: float) -> float:
    # max_value == 0 is a caller error; the non-finite result is passed through.
    with np.errstate(divide="ignore", invalid="ignore"):
        return float(origin + length * (np.float64(value) / np.float64(max_value)))


def to_value(origin: float, length: float, coord: float, max_value: float) -> float:
    with np.errstate(divide="ignore", invalid="ignore"):
        return float((np.float64(coord) - origin) / np.float64(length) * max_value)


def map_values(origin: float, length: float, values: np.ndarray, max_value: float) -> np.ndarray:
    arr = np.asarray(values, dtype=np.float64)
    with np.errstate(divide="ignore", invalid="ignore"):
        return origin + length * (arr / np.float64(max_value))


def x_column(dataset: np.ndarray, kind: DatasetKind) -> np.ndarray:
    """Values that drive the x bound: x for points, x2 for intervals."""

    return dataset[:, 0] if kind == "point" else dataset[:, 1]


def y_column(dataset: np.ndarray) -> np.ndarray:
    return dataset[:, -1]


def natural_bounds(
    dataset: np.ndarray,
    kind: DatasetKind,
    *,
    x_max_value: float | None = None,
    y_max_value: float | None = None,
) -> AxisBounds:
    if dataset.shape[0] == 0 and (x_max_value is None or y_max_value is None):
        raise ChartDataError("cannot derive axis bounds from an empty dataset without x/y max overrides")
    x_max = float(x_max_value) if x_max_value is not None else float(np.max(x_column(dataset, kind)))
    y_max = float(y_max_value) if y_max_value is not None else float(np.max(y_column(dataset)))
    return AxisBounds(x_max=x_max, y_max=y_max)
