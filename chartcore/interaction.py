from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Mapping

from chartcore.zoom import ZoomDirection, direction_from_delta


PointerPhase = Literal["down", "move", "up"]


@dataclass(frozen=True)
class WheelEvent:
    x: float
    y: float
    delta_y: float

    @property
    def direction(self) -> ZoomDirection:
        return direction_from_delta(self.delta_y)


@dataclass(frozen=True)
class PointerEvent:
    phase: PointerPhase
    x: float
    y: float
    button: int = 0
    ctrl: bool = False


@dataclass(frozen=True)
class KeyEvent:
    key: str
    ctrl: bool = False

    @property
    def is_select_all(self) -> bool:
        return self.ctrl and self.key.lower() == "a"


def parse_wheel_event(payload: object) -> WheelEvent | None:
    """Parse a host wheel payload (`x`, `y` cursor offsets and `delta_y`)."""

    if not isinstance(payload, Mapping):
        return None
    try:
        return WheelEvent(
            x=float(payload["x"]),
            y=float(payload["y"]),
            delta_y=float(payload.get("delta_y", payload.get("deltaY", 0.0))),
        )
    except (KeyError, TypeError, ValueError):
        return None


def parse_pointer_event(payload: object) -> PointerEvent | None:
    if not isinstance(payload, Mapping):
        return None
    phase = payload.get("phase")
    if phase not in {"down", "move", "up"}:
        return None
    try:
        return PointerEvent(
            phase=phase,  # type: ignore[arg-type]
            x=float(payload["x"]),
            y=float(payload["y"]),
            button=int(payload.get("button", 0)),
            ctrl=bool(payload.get("ctrl", False)),
        )
    except (KeyError, TypeError, ValueError):
        return None


def parse_key_event(payload: object) -> KeyEvent | None:
    if not isinstance(payload, Mapping):
        return None
    key = payload.get("key")
    if not isinstance(key, str) or not key:
        return None
    return KeyEvent(key=key, ctrl=bool(payload.get("ctrl", False)))
