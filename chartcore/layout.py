from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from chartcore.config import ChartConfig
from chartcore.zoom import AxisZoomGeometry


@dataclass(frozen=True)
class ChartLayout:
    width: float
    height: float
    divide_offset: float
    x_offset: float
    y_top_offset: float
    y_bottom_offset: float
    grid_width: float
    grid_height: float

    @property
    def x_origin(self) -> float:
        return self.x_offset

    @property
    def y_origin(self) -> float:
        return self.height - self.y_bottom_offset

    @property
    def x_axis_px_range(self) -> tuple[float, float]:
        return (self.x_origin, self.x_origin + self.grid_width)

    @property
    def y_axis_px_range(self) -> tuple[float, float]:
        return (self.y_origin, self.y_origin - self.grid_height)

    def x_zoom_geometry(self) -> AxisZoomGeometry:
        return AxisZoomGeometry(offset=self.x_offset, borderline=self.x_axis_px_range[1])

    def y_zoom_geometry(self) -> AxisZoomGeometry:
        return AxisZoomGeometry(offset=self.y_top_offset, borderline=self.y_origin)


def compute_layout(
    config: ChartConfig,
    *,
    x_text_widths: Sequence[float] = (),
    y_text_widths: Sequence[float] = (),
) -> ChartLayout:
    divide_offset = config.divide_offset
    x_offset = (max(y_text_widths) if y_text_widths else 0.0) + config.spacing + divide_offset
    y_top_offset = config.font_size / 2 + config.info_font_size * 2
    y_bottom_offset = config.font_size + config.spacing + divide_offset
    # The last x label is centred on the far edge, so half of it must fit.
    last_x_width = float(x_text_widths[-1]) if x_text_widths else 0.0
    return ChartLayout(
        width=float(config.width),
        height=float(config.height),
        divide_offset=divide_offset,
        x_offset=float(x_offset),
        y_top_offset=y_top_offset,
        y_bottom_offset=y_bottom_offset,
        grid_width=config.width - x_offset - last_x_width / 2,
        grid_height=config.height - y_bottom_offset - y_top_offset,
    )
