from __future__ import annotations

import numpy as np


def density(
    values: np.ndarray,
    *,
    max_x: float,
    max_y: float,
    width: float,
    height: float,
    x_interval: tuple[float, float] | None = None,
    y_interval: tuple[float, float] | None = None,
) -> float:
    """Points per square pixel inside the optional value intervals."""

    pts = np.asarray(values, dtype=np.float64).reshape(-1, 2)
    mask = np.ones(pts.shape[0], dtype=bool)
    if x_interval is not None:
        mask &= (pts[:, 0] >= x_interval[0]) & (pts[:, 0] <= x_interval[1])
    if y_interval is not None:
        mask &= (pts[:, 1] >= y_interval[0]) & (pts[:, 1] <= y_interval[1])

    x_lo, x_hi = x_interval if x_interval is not None else (0.0, max_x)
    y_lo, y_hi = y_interval if y_interval is not None else (0.0, max_y)
    with np.errstate(divide="ignore", invalid="ignore"):
        area = (width * (x_hi / max_x) - width * (x_lo / max_x)) * (height * (y_hi / max_y) - height * (y_lo / max_y))
        return float(np.float64(np.count_nonzero(mask)) / area)


def density_populated(values: np.ndarray, *, width: float, height: float) -> float:
    """Points per square pixel over the populated part of the chart (data min to the far edge)."""

    pts = np.asarray(values, dtype=np.float64).reshape(-1, 2)
    if pts.shape[0] == 0:
        raise ValueError("density_populated requires at least one point")
    min_x, min_y = pts.min(axis=0)
    max_x, max_y = pts.max(axis=0)
    with np.errstate(divide="ignore", invalid="ignore"):
        area = (width - width * (min_x / max_x)) * (height - height * (min_y / max_y))
        return float(np.float64(pts.shape[0]) / area)


def percentage_offset(a: float, b: float) -> float:
    with np.errstate(divide="ignore", invalid="ignore"):
        return float(np.float64(a) / np.float64(b) * 100 - 100)
