from __future__ import annotations

import dataclasses
import json
import math
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping

from chartcore.errors import ChartConfigError
from chartcore.formatting import MAX_PRECISION
from chartcore.milestones import MilestoneSource, parse_milestone_source


_KEY_ALIASES: dict[str, str] = {
    "xSteps": "x_steps",
    "ySteps": "y_steps",
    "divideLength": "divide_length",
    "fontSize": "font_size",
    "valueInfoFontSize": "info_font_size",
    "infoFontSize": "info_font_size",
    "zoomXStep": "zoom_x_step",
    "zoomYStep": "zoom_y_step",
    "xPrecision": "x_precision",
    "yPrecision": "y_precision",
    "valueInfoXPrecision": "info_x_precision",
    "valueInfoYPrecision": "info_y_precision",
    "xMaxValue": "x_max_value",
    "yMaxValue": "y_max_value",
    "xLimit": "x_max_value",
    "yLimit": "y_max_value",
    "xMilestones": "x_milestones",
    "yMilestones": "y_milestones",
    "pointR": "point_radius",
    "connectPoints": "connect_points",
}


@dataclass(frozen=True)
class ChartConfig:
    width: float
    height: float
    x_steps: int = 5
    y_steps: int = 5
    divide_length: float = 10.0
    spacing: float = 5.0
    font_size: float = 12.0
    info_font_size: float = 12.0
    zoom_x_step: float = 0.0
    zoom_y_step: float = 0.0
    x_precision: int = 0
    y_precision: int = 0
    info_x_precision: int | None = None
    info_y_precision: int | None = None
    x_max_value: float | None = None
    y_max_value: float | None = None
    x_milestones: MilestoneSource = None
    y_milestones: MilestoneSource = None
    point_radius: float = 3.0
    connect_points: bool = False

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ChartConfigError("width and height must be > 0")
        for name in ("x_steps", "y_steps"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
                raise ChartConfigError(f"{name} must be a positive integer")
        for name in ("divide_length", "spacing", "font_size", "info_font_size", "zoom_x_step", "zoom_y_step", "point_radius"):
            value = getattr(self, name)
            if not math.isfinite(value) or value < 0:
                raise ChartConfigError(f"{name} must be a finite number >= 0")
        for name in ("x_precision", "y_precision", "info_x_precision", "info_y_precision"):
            value = getattr(self, name)
            if value is None and name.startswith("info_"):
                continue
            if not isinstance(value, int) or value < 0 or value > MAX_PRECISION:
                raise ChartConfigError(f"{name} must be an integer in [0, {MAX_PRECISION}]")
        for name in ("x_max_value", "y_max_value"):
            value = getattr(self, name)
            if value is not None and (not math.isfinite(value) or value <= 0):
                raise ChartConfigError(f"{name} must be a finite number > 0")
        object.__setattr__(self, "x_milestones", parse_milestone_source(self.x_milestones))
        object.__setattr__(self, "y_milestones", parse_milestone_source(self.y_milestones))

    @property
    def divide_offset(self) -> float:
        return self.divide_length / 2

    @property
    def value_info_x_precision(self) -> int:
        return self.x_precision if self.info_x_precision is None else self.info_x_precision

    @property
    def value_info_y_precision(self) -> int:
        return self.y_precision if self.info_y_precision is None else self.info_y_precision

    def with_overrides(self, **changes: Any) -> "ChartConfig":
        return dataclasses.replace(self, **changes)


def config_from_dict(payload: Mapping[str, object], **overrides: Any) -> ChartConfig:
    """Build a config from camelCase or snake_case keys."""

    known = {f.name for f in dataclasses.fields(ChartConfig)}
    kwargs: dict[str, Any] = {}
    for raw_key, value in payload.items():
        key = _KEY_ALIASES.get(str(raw_key), str(raw_key))
        if key not in known:
            raise ChartConfigError(f"unknown chart option: {raw_key}")
        kwargs[key] = value
    kwargs.update(overrides)
    if "width" not in kwargs or "height" not in kwargs:
        raise ChartConfigError("width and height are required")
    for name in ("x_milestones", "y_milestones"):
        if isinstance(kwargs.get(name), list):
            kwargs[name] = tuple(kwargs[name])
    try:
        return ChartConfig(**kwargs)
    except TypeError as exc:
        raise ChartConfigError(str(exc)) from exc


def load_config(path: str | Path, **overrides: Any) -> ChartConfig:
    payload = json.loads(Path(path).read_text(encoding="utf-8"))
    if not isinstance(payload, Mapping):
        raise ChartConfigError("chart config must be a JSON object")
    return config_from_dict(payload, **overrides)
