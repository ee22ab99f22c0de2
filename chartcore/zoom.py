from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Literal

import numpy as np

from chartcore.divides import Axis
from chartcore.scales import DatasetKind, clamp, natural_bounds


LOGGER = logging.getLogger(__name__)

ZoomDirection = Literal["in", "out"]


@dataclass(frozen=True)
class ZoomDomain:
    """Visible upper bound per axis; the lower bound is always 0."""

    x_max: float
    y_max: float


@dataclass(frozen=True)
class AxisZoomGeometry:
    """Pixel offset of the plotting surface and the borderline the cursor is clamped to."""

    offset: float
    borderline: float


def zoom_vector(direction: ZoomDirection) -> int:
    if direction == "in":
        return 1
    if direction == "out":
        return -1
    raise ValueError(f"unknown zoom direction: {direction!r}")


def direction_from_delta(delta_y: float) -> ZoomDirection:
    return "in" if delta_y < 0 else "out"


def compute_axis_zoom(
    axis: Axis,
    step: float,
    cursor: float,
    offset: float,
    borderline: float,
    prev_max: float,
    initial_max: float,
    zoom_vec: int,
) -> float:
    axis_pos = clamp(cursor - offset, 0.0, borderline)
    with np.errstate(divide="ignore", invalid="ignore"):
        axis_perc_pos = float(np.float64(axis_pos) / np.float64(borderline))
    # x uses the far fraction and y the near one; this asymmetry anchors zoom at the cursor.
    scale = (1.0 - axis_perc_pos) if axis == "x" else axis_perc_pos
    step_length = step * scale
    new_max = prev_max - step_length * zoom_vec
    return clamp(new_max, 0.0, initial_max)


def filter_visible(dataset: np.ndarray, kind: DatasetKind, x_max: float, y_max: float) -> np.ndarray:
    if dataset.shape[0] == 0:
        return dataset.copy()
    y = dataset[:, -1]
    if kind == "point":
        x = dataset[:, 0]
        mask = (x >= 0) & (x <= x_max) & (y >= 0) & (y <= y_max)
    else:
        mask = (dataset[:, 0] >= 0) & (dataset[:, 1] <= x_max) & (y >= 0) & (y <= y_max)
    return dataset[mask]


class ZoomController:
    """Owns the zoomed value domain of one chart and the dataset visible in it."""

    def __init__(
        self,
        dataset: np.ndarray,
        kind: DatasetKind,
        *,
        x_step: float,
        y_step: float,
        x_max_value: float | None = None,
        y_max_value: float | None = None,
    ) -> None:
        if x_step < 0 or y_step < 0:
            raise ValueError("zoom steps must be >= 0")
        self._kind: DatasetKind = kind
        self._x_step = float(x_step)
        self._y_step = float(y_step)
        self._generation = 0
        self.reset(dataset, x_max_value=x_max_value, y_max_value=y_max_value)

    @property
    def kind(self) -> DatasetKind:
        return self._kind

    @property
    def domain(self) -> ZoomDomain:
        return self._domain

    @property
    def initial_domain(self) -> ZoomDomain:
        return self._initial

    @property
    def dataset(self) -> np.ndarray:
        return self._dataset

    @property
    def visible(self) -> np.ndarray:
        return self._visible

    @property
    def generation(self) -> int:
        return self._generation

    def reset(
        self,
        dataset: np.ndarray,
        *,
        x_max_value: float | None = None,
        y_max_value: float | None = None,
    ) -> ZoomDomain:
        bounds = natural_bounds(dataset, self._kind, x_max_value=x_max_value, y_max_value=y_max_value)
        self._dataset = dataset
        self._initial = ZoomDomain(x_max=bounds.x_max, y_max=bounds.y_max)
        self._commit(self._initial)
        LOGGER.debug("zoom reset: x_max=%s y_max=%s points=%d", bounds.x_max, bounds.y_max, dataset.shape[0])
        return self._domain

    def zoom(
        self,
        cursor_x: float,
        cursor_y: float,
        direction: ZoomDirection,
        *,
        x_geometry: AxisZoomGeometry,
        y_geometry: AxisZoomGeometry,
    ) -> ZoomDomain:
        vec = zoom_vector(direction)
        before = self._domain
        new_x = compute_axis_zoom(
            "x", self._x_step, cursor_x, x_geometry.offset, x_geometry.borderline, before.x_max, self._initial.x_max, vec
        )
        new_y = compute_axis_zoom(
            "y", self._y_step, cursor_y, y_geometry.offset, y_geometry.borderline, before.y_max, self._initial.y_max, vec
        )
        self._commit(ZoomDomain(x_max=new_x, y_max=new_y))
        LOGGER.debug(
            "zoom %s at (%s, %s): x_max %s -> %s, y_max %s -> %s",
            direction,
            cursor_x,
            cursor_y,
            before.x_max,
            new_x,
            before.y_max,
            new_y,
        )
        return self._domain

    def _commit(self, domain: ZoomDomain) -> None:
        self._domain = domain
        self._visible = filter_visible(self._dataset, self._kind, domain.x_max, domain.y_max)
        self._generation += 1
