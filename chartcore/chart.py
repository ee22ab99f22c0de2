from __future__ import annotations

import logging
from typing import Any

import numpy as np

from chartcore.active_set import ActiveItemSetController
from chartcore.adapters.normalize import normalize_intervals, normalize_points
from chartcore.aggregate import AggregateValues, aggregate, info_lines
from chartcore.config import ChartConfig
from chartcore.divides import Axis, DivideSet, generate_x_divides, generate_y_divides
from chartcore.errors import ChartDataError
from chartcore.interaction import KeyEvent, WheelEvent
from chartcore.items import BoundingBox, IntervalValues, ItemSet, PlottedItem, PointValues
from chartcore.layout import ChartLayout, compute_layout
from chartcore.measurement import TextMeasurer
from chartcore.milestones import MilestoneLine, generate_milestones
from chartcore.primitives import CirclePrimitive, LinePrimitive, RectPrimitive, RenderFrame, TextPrimitive
from chartcore.scales import DatasetKind, map_values, to_pixel
from chartcore.selection import PRIMARY_BUTTON, SelectionDrag, SelectionIndex
from chartcore.zoom import ZoomController, ZoomDomain


LOGGER = logging.getLogger(__name__)


class _Chart:
    kind: DatasetKind = "point"

    def __init__(self, config: ChartConfig, values: Any = None) -> None:
        self.config = config
        self._x_text_widths: list[int] = []
        self._y_text_widths: list[int] = []
        self._zoom: ZoomController | None = None
        self._item_set = ItemSet(generation=0)
        self._index = SelectionIndex(self._item_set)
        self._active = ActiveItemSetController(self._item_set)
        self._drag = SelectionDrag()
        self._suppress_click = False
        self._hover_index: int | None = None
        if values is not None:
            self.set_data(values)

    # -- data ---------------------------------------------------------------

    def set_data(self, values: Any) -> None:
        dataset = self._normalize(values)
        if self._zoom is None:
            self._zoom = ZoomController(
                dataset,
                self.kind,
                x_step=self.config.zoom_x_step,
                y_step=self.config.zoom_y_step,
                x_max_value=self.config.x_max_value,
                y_max_value=self.config.y_max_value,
            )
        else:
            self._zoom.reset(dataset, x_max_value=self.config.x_max_value, y_max_value=self.config.y_max_value)
        LOGGER.debug("%s data set: %d rows", type(self).__name__, dataset.shape[0])
        self._regenerate()

    def _normalize(self, values: Any) -> np.ndarray:
        raise NotImplementedError

    @property
    def zoom_domain(self) -> ZoomDomain:
        return self._require_zoom().domain

    @property
    def initial_domain(self) -> ZoomDomain:
        return self._require_zoom().initial_domain

    @property
    def visible(self) -> np.ndarray:
        return self._require_zoom().visible

    @property
    def item_set(self) -> ItemSet:
        return self._item_set

    @property
    def active(self) -> ActiveItemSetController:
        return self._active

    @property
    def text_widths(self) -> tuple[tuple[int, ...], tuple[int, ...]]:
        return (tuple(self._x_text_widths), tuple(self._y_text_widths))

    def layout(self) -> ChartLayout:
        return compute_layout(self.config, x_text_widths=self._x_text_widths, y_text_widths=self._y_text_widths)

    def _require_zoom(self) -> ZoomController:
        if self._zoom is None:
            raise ChartDataError("chart has no data; call set_data first")
        return self._zoom

    def _regenerate(self) -> None:
        zoom = self._require_zoom()
        layout = self.layout()
        items = self._plot_items(layout, zoom.visible, zoom.domain, zoom.generation)
        self._item_set = ItemSet(generation=zoom.generation, items=items)
        self._index = SelectionIndex(self._item_set)
        self._active.bind(self._item_set)
        if self._hover_index is not None and self._item_set.get(self._hover_index) is None:
            self._hover_index = None

    def _plot_items(
        self, layout: ChartLayout, visible: np.ndarray, domain: ZoomDomain, generation: int
    ) -> tuple[PlottedItem, ...]:
        raise NotImplementedError

    # -- rendering ----------------------------------------------------------

    def render(self, measurer: TextMeasurer | None = None) -> RenderFrame:
        """Compose the frame, re-laying it out once if measured label widths changed."""

        frame, x_divides, y_divides = self._compose()
        if measurer is None:
            return frame
        x_widths = list(measurer.measure(x_divides.label_texts, self.config.font_size))
        y_widths = list(measurer.measure(y_divides.label_texts, self.config.font_size))
        if x_widths == self._x_text_widths and y_widths == self._y_text_widths:
            return frame
        LOGGER.debug("label widths changed, re-running layout: x=%s y=%s", x_widths, y_widths)
        self._x_text_widths = x_widths
        self._y_text_widths = y_widths
        self._regenerate()
        frame, _, _ = self._compose()
        return frame

    def _compose(self) -> tuple[RenderFrame, DivideSet, DivideSet]:
        zoom = self._require_zoom()
        cfg = self.config
        layout = self.layout()
        domain = zoom.domain
        x_divides = generate_x_divides(
            (0.0, domain.x_max),
            cfg.x_steps,
            layout.grid_width,
            x_origin=layout.x_origin,
            y_origin=layout.y_origin,
            divide_offset=layout.divide_offset,
            spacing=cfg.spacing,
            font_size=cfg.font_size,
            text_widths=self._x_text_widths,
            precision=cfg.x_precision,
        )
        y_divides = generate_y_divides(
            (0.0, domain.y_max),
            cfg.y_steps,
            layout.grid_height,
            x_origin=layout.x_origin,
            y_origin=layout.y_origin,
            divide_offset=layout.divide_offset,
            spacing=cfg.spacing,
            font_size=cfg.font_size,
            text_widths=self._y_text_widths,
            precision=cfg.y_precision,
        )
        milestones = self._milestones("x", layout, x_divides) + self._milestones("y", layout, y_divides)

        x0, x1 = layout.x_axis_px_range
        y0, y1 = layout.y_axis_px_range
        axes = (
            LinePrimitive(x1=x0, y1=layout.y_origin, x2=x1, y2=layout.y_origin, role="axis-x"),
            LinePrimitive(x1=layout.x_origin, y1=y0, x2=layout.x_origin, y2=y1, role="axis-y"),
        )
        frame = RenderFrame(
            width=layout.width,
            height=layout.height,
            generation=self._item_set.generation,
            axes=axes,
            divide_lines=x_divides.tick_lines + y_divides.tick_lines,
            divide_labels=x_divides.labels + y_divides.labels,
            milestones=tuple(m.line for m in milestones),
            connections=self._connections(layout),
            items=tuple(self._item_primitive(item) for item in self._item_set),
            reference_line=self._reference_line(layout),
            selection_rect=self._selection_primitive(),
            value_info=self._value_info(layout),
            metadata={
                "x_max": domain.x_max,
                "y_max": domain.y_max,
                "active_indices": list(self._active.indices),
            },
        )
        return frame, x_divides, y_divides

    def _milestone_values(self, axis: Axis, visible: np.ndarray) -> np.ndarray:
        return visible[:, 0] if axis == "x" else visible[:, -1]

    def _milestones(self, axis: Axis, layout: ChartLayout, divides: DivideSet) -> tuple[MilestoneLine, ...]:
        zoom = self._require_zoom()
        source = self.config.x_milestones if axis == "x" else self.config.y_milestones
        if axis == "x":
            origin, length = layout.x_origin, layout.grid_width
            cross_start, cross_end = layout.y_axis_px_range
            max_value = zoom.domain.x_max
        else:
            origin, length = layout.y_origin, -layout.grid_height
            cross_start, cross_end = layout.x_axis_px_range
            max_value = zoom.domain.y_max
        return generate_milestones(
            source,
            axis,
            visible_values=self._milestone_values(axis, zoom.visible),
            divides=divides,
            origin=origin,
            length=length,
            cross_start=cross_start,
            cross_end=cross_end,
            min_value=0.0,
            max_value=max_value,
        )

    def _connections(self, layout: ChartLayout) -> tuple[LinePrimitive, ...]:
        return ()

    def _item_primitive(self, item: PlottedItem) -> CirclePrimitive | RectPrimitive:
        raise NotImplementedError

    def _item_y_coord(self, item: PlottedItem) -> float:
        raise NotImplementedError

    def _reference_line(self, layout: ChartLayout) -> LinePrimitive | None:
        if self._hover_index is None:
            return None
        item = self._item_set.get(self._hover_index)
        if item is None:
            return None
        y = self._item_y_coord(item)
        return LinePrimitive(x1=layout.x_origin, y1=y, x2=layout.x_origin + layout.grid_width, y2=y, role="reference")

    def _selection_primitive(self) -> RectPrimitive | None:
        rect = self._drag.rect if self._drag.active else None
        if rect is None:
            return None
        return RectPrimitive(x=rect.x1, y=rect.y1, width=rect.width, height=rect.height, role="selection")

    def _value_info(self, layout: ChartLayout) -> TextPrimitive | None:
        lines = info_lines(
            self._active.items,
            self.config.value_info_x_precision,
            self.config.value_info_y_precision,
        )
        if not lines:
            return None
        return TextPrimitive(
            x=layout.x_origin + layout.divide_offset + self.config.spacing,
            y=0.0,
            lines=lines,
            font_size=self.config.info_font_size,
            role="value-info",
            baseline="hanging",
            line_height=self.config.font_size,
        )

    # -- interaction --------------------------------------------------------

    def on_wheel(self, event: WheelEvent) -> ZoomDomain:
        zoom = self._require_zoom()
        layout = self.layout()
        domain = zoom.zoom(
            event.x,
            event.y,
            event.direction,
            x_geometry=layout.x_zoom_geometry(),
            y_geometry=layout.y_zoom_geometry(),
        )
        self._regenerate()
        return domain

    def on_pointer_down(self, x: float, y: float, button: int = PRIMARY_BUTTON) -> bool:
        return self._drag.begin(x, y, button)

    def on_pointer_move(self, x: float, y: float) -> list[PlottedItem] | None:
        rect = self._drag.update(x, y)
        if rect is None:
            return None
        hits = self._index.query(rect)
        self._active.replace(hits)
        return hits

    def on_pointer_up(self, x: float, y: float, button: int = PRIMARY_BUTTON) -> None:
        if button != PRIMARY_BUTTON:
            return
        self._suppress_click = self._drag.moved
        self._drag.end(button)

    def on_click(self, x: float, y: float, *, ctrl: bool = False) -> PlottedItem | None:
        """Route a click to the topmost item under the cursor, or to the background."""

        if self._suppress_click:
            self._suppress_click = False
            return None
        hits = self._index.query(BoundingBox(x1=x, x2=x, y1=y, y2=y))
        if not hits:
            self.on_background_click()
            return None
        item = hits[-1]
        self._active.click(item, ctrl=ctrl)
        return item

    def on_item_click(self, index: int, *, ctrl: bool = False) -> None:
        item = self._item_set.get(index)
        if item is None:
            LOGGER.debug("click on unknown item index %d", index)
            return
        self._active.click(item, ctrl=ctrl)

    def on_background_click(self) -> None:
        self._active.clear()

    def on_key(self, event: KeyEvent) -> bool:
        if event.is_select_all:
            self._active.select_all()
            return True
        return False

    def hover(self, index: int | None) -> None:
        self._hover_index = index if index is None or self._item_set.get(index) is not None else None

    def aggregate(self) -> AggregateValues | None:
        values = self._active.values
        if not values:
            return None
        return aggregate(values)


class PointChart(_Chart):
    kind: DatasetKind = "point"

    def _normalize(self, values: Any) -> np.ndarray:
        return normalize_points(values)

    def point_radius(self) -> float:
        zoom = self._require_zoom()
        domain, initial = zoom.domain, zoom.initial_domain
        # Zooming in shrinks the domain, so points grow to stay visible.
        with np.errstate(divide="ignore", invalid="ignore"):
            scale = (np.float64(domain.x_max) / initial.x_max + np.float64(domain.y_max) / initial.y_max) / 2
            return float(np.float64(self.config.point_radius) / scale)

    def _plot_items(
        self, layout: ChartLayout, visible: np.ndarray, domain: ZoomDomain, generation: int
    ) -> tuple[PlottedItem, ...]:
        r = self.point_radius()
        xs = map_values(layout.x_origin, layout.grid_width, visible[:, 0], domain.x_max)
        ys = map_values(layout.y_origin, -layout.grid_height, visible[:, 1], domain.y_max)
        return tuple(
            PlottedItem(
                index=i,
                box=BoundingBox(x1=xc - r, x2=xc + r, y1=yc - r, y2=yc + r),
                values=PointValues(x=xv, y=yv),
                generation=generation,
            )
            for i, (xc, yc, xv, yv) in enumerate(
                zip(xs.tolist(), ys.tolist(), visible[:, 0].tolist(), visible[:, 1].tolist())
            )
        )

    def _item_primitive(self, item: PlottedItem) -> CirclePrimitive:
        box = item.box
        return CirclePrimitive(
            cx=(box.x1 + box.x2) / 2,
            cy=(box.y1 + box.y2) / 2,
            r=box.width / 2,
            index=item.index,
            active=self._active.is_active(item.index),
        )

    def _item_y_coord(self, item: PlottedItem) -> float:
        return (item.box.y1 + item.box.y2) / 2

    def _connections(self, layout: ChartLayout) -> tuple[LinePrimitive, ...]:
        if not self.config.connect_points:
            return ()
        lines: list[LinePrimitive] = []
        prev = (layout.x_origin, layout.y_origin)
        for item in self._item_set:
            cur = ((item.box.x1 + item.box.x2) / 2, (item.box.y1 + item.box.y2) / 2)
            lines.append(LinePrimitive(x1=prev[0], y1=prev[1], x2=cur[0], y2=cur[1], role="connection"))
            prev = cur
        return tuple(lines)


class PillarChart(_Chart):
    kind: DatasetKind = "interval"

    def _normalize(self, values: Any) -> np.ndarray:
        return normalize_intervals(values)

    def _milestone_values(self, axis: Axis, visible: np.ndarray) -> np.ndarray:
        if axis == "x":
            return np.concatenate([visible[:, 0], visible[:, 1]])
        return visible[:, -1]

    def _plot_items(
        self, layout: ChartLayout, visible: np.ndarray, domain: ZoomDomain, generation: int
    ) -> tuple[PlottedItem, ...]:
        items: list[PlottedItem] = []
        for i, (x1v, x2v, yv) in enumerate(visible.tolist()):
            x1c = to_pixel(layout.x_origin, layout.grid_width, x1v, domain.x_max)
            x2c = to_pixel(layout.x_origin, layout.grid_width, x2v, domain.x_max)
            yc = to_pixel(layout.y_origin, -layout.grid_height, yv, domain.y_max)
            items.append(
                PlottedItem(
                    index=i,
                    box=BoundingBox(
                        x1=min(x1c, x2c),
                        x2=max(x1c, x2c),
                        y1=min(yc, layout.y_origin),
                        y2=max(yc, layout.y_origin),
                    ),
                    values=IntervalValues(x1=x1v, x2=x2v, y=yv),
                    generation=generation,
                )
            )
        return tuple(items)

    def _item_primitive(self, item: PlottedItem) -> RectPrimitive:
        box = item.box
        return RectPrimitive(
            x=box.x1,
            y=box.y1,
            width=box.width,
            height=box.height,
            role="pillar",
            index=item.index,
            active=self._active.is_active(item.index),
        )

    def _item_y_coord(self, item: PlottedItem) -> float:
        return item.box.y1
