from chartcore.active_set import ActiveItemSetController, ActiveState
from chartcore.aggregate import AggregateValues, aggregate
from chartcore.chart import PillarChart, PointChart
from chartcore.config import ChartConfig, config_from_dict, load_config
from chartcore.divides import AxisDivide, DivideSet, generate_x_divides, generate_y_divides
from chartcore.errors import ChartConfigError, ChartDataError
from chartcore.formatting import format_fixed
from chartcore.items import BoundingBox, IntervalValues, ItemSet, PlottedItem, PointValues
from chartcore.milestones import MilestoneLine, create_milestone_line
from chartcore.primitives import RenderFrame
from chartcore.scales import to_pixel, to_value
from chartcore.selection import SelectionIndex, normalize_rect
from chartcore.zoom import ZoomController, ZoomDomain

__all__ = [
    "ActiveItemSetController",
    "ActiveState",
    "AggregateValues",
    "AxisDivide",
    "BoundingBox",
    "ChartConfig",
    "ChartConfigError",
    "ChartDataError",
    "DivideSet",
    "IntervalValues",
    "ItemSet",
    "MilestoneLine",
    "PillarChart",
    "PlottedItem",
    "PointChart",
    "PointValues",
    "RenderFrame",
    "SelectionIndex",
    "ZoomController",
    "ZoomDomain",
    "aggregate",
    "config_from_dict",
    "create_milestone_line",
    "format_fixed",
    "generate_x_divides",
    "generate_y_divides",
    "load_config",
    "normalize_rect",
    "to_pixel",
    "to_value",
]
