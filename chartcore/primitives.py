from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from typing import Any, Literal


Baseline = Literal["hanging", "middle"]


@dataclass(frozen=True)
class LinePrimitive:
    x1: float
    y1: float
    x2: float
    y2: float
    role: str


@dataclass(frozen=True)
class TextPrimitive:
    x: float
    y: float
    lines: tuple[str, ...]
    font_size: float
    role: str
    baseline: Baseline = "hanging"
    line_height: float = 0.0


@dataclass(frozen=True)
class CirclePrimitive:
    cx: float
    cy: float
    r: float
    index: int
    active: bool
    role: str = "point"


@dataclass(frozen=True)
class RectPrimitive:
    x: float
    y: float
    width: float
    height: float
    role: str
    index: int | None = None
    active: bool = False


@dataclass(frozen=True)
class RenderFrame:
    """Pixel-space output of one render pass; drawing is left to the host."""

    width: float
    height: float
    generation: int
    axes: tuple[LinePrimitive, ...] = ()
    divide_lines: tuple[LinePrimitive, ...] = ()
    divide_labels: tuple[TextPrimitive, ...] = ()
    milestones: tuple[LinePrimitive, ...] = ()
    connections: tuple[LinePrimitive, ...] = ()
    items: tuple[CirclePrimitive | RectPrimitive, ...] = ()
    reference_line: LinePrimitive | None = None
    selection_rect: RectPrimitive | None = None
    value_info: TextPrimitive | None = None
    metadata: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return dataclasses.asdict(self)
