from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Sequence

import numpy as np

from chartcore.formatting import format_fixed
from chartcore.primitives import LinePrimitive, TextPrimitive


Axis = Literal["x", "y"]


@dataclass(frozen=True)
class AxisDivide:
    pixel_coord: float
    value: float
    label: str


@dataclass(frozen=True)
class DivideSet:
    axis: Axis
    divides: tuple[AxisDivide, ...]
    coords: np.ndarray
    values: np.ndarray
    tick_lines: tuple[LinePrimitive, ...]
    labels: tuple[TextPrimitive, ...]

    @property
    def label_texts(self) -> tuple[str, ...]:
        return tuple(d.label for d in self.divides)

    def __len__(self) -> int:
        return len(self.divides)


def generate_x_divides(
    value_range: tuple[float, float],
    steps: int,
    length: float,
    *,
    x_origin: float,
    y_origin: float,
    divide_offset: float,
    spacing: float,
    font_size: float,
    text_widths: Sequence[float] = (),
    precision: int = 0,
) -> DivideSet:
    coords, values, labels = _divide_series(value_range, steps, x_origin, length, precision)
    y1 = y_origin + divide_offset
    y2 = y_origin - divide_offset
    tick_lines = tuple(LinePrimitive(x1=c, y1=y1, x2=c, y2=y2, role="divide-x") for c in coords.tolist())
    texts = tuple(
        TextPrimitive(
            x=c - _width_at(text_widths, i) / 2,
            y=y1 + spacing,
            lines=(label,),
            font_size=font_size,
            role="divide-label-x",
            baseline="hanging",
        )
        for i, (c, label) in enumerate(zip(coords.tolist(), labels))
    )
    return _build_set("x", coords, values, labels, tick_lines, texts)


def generate_y_divides(
    value_range: tuple[float, float],
    steps: int,
    length: float,
    *,
    x_origin: float,
    y_origin: float,
    divide_offset: float,
    spacing: float,
    font_size: float,
    text_widths: Sequence[float] = (),
    precision: int = 0,
) -> DivideSet:
    # Pixel y grows downward, so the y axis runs against it.
    coords, values, labels = _divide_series(value_range, steps, y_origin, -length, precision)
    x1 = x_origin - divide_offset
    x2 = x_origin + divide_offset
    tick_lines = tuple(LinePrimitive(x1=x1, y1=c, x2=x2, y2=c, role="divide-y") for c in coords.tolist())
    texts = tuple(
        TextPrimitive(
            x=x1 - spacing - _width_at(text_widths, i),
            y=c,
            lines=(label,),
            font_size=font_size,
            role="divide-label-y",
            baseline="middle",
        )
        for i, (c, label) in enumerate(zip(coords.tolist(), labels))
    )
    return _build_set("y", coords, values, labels, tick_lines, texts)


def _divide_series(
    value_range: tuple[float, float],
    steps: int,
    origin: float,
    length: float,
    precision: int,
) -> tuple[np.ndarray, np.ndarray, list[str]]:
    if isinstance(steps, bool) or int(steps) != steps or steps <= 0:
        raise ValueError("steps must be a positive integer")
    steps = int(steps)
    vmin, vmax = float(value_range[0]), float(value_range[1])
    i = np.arange(1, steps + 1, dtype=np.float64)
    values = vmin + i * ((vmax - vmin) / steps)
    coords = origin + i * (length / steps)
    labels = [format_fixed(v, precision) for v in values.tolist()]
    return coords, values, labels


def _build_set(
    axis: Axis,
    coords: np.ndarray,
    values: np.ndarray,
    labels: list[str],
    tick_lines: tuple[LinePrimitive, ...],
    texts: tuple[TextPrimitive, ...],
) -> DivideSet:
    divides = tuple(
        AxisDivide(pixel_coord=c, value=v, label=label)
        for c, v, label in zip(coords.tolist(), values.tolist(), labels)
    )
    return DivideSet(axis=axis, divides=divides, coords=coords, values=values, tick_lines=tick_lines, labels=texts)


def _width_at(text_widths: Sequence[float], index: int) -> float:
    if index < len(text_widths):
        return float(text_widths[index])
    return 0.0
