from __future__ import annotations

from collections.abc import Sequence
from functools import lru_cache
from pathlib import Path
from typing import Protocol

from PIL import ImageFont


DEFAULT_FONT_FAMILY = "DejaVu Sans"
FONT_FALLBACK_PATTERNS = (
    "dejavusans",
    "dejavu sans",
    "liberationsans",
    "helvetica",
    "arial",
    "menlo",
)


class TextMeasurer(Protocol):
    def measure(self, texts: Sequence[str], font_size: float) -> list[int]:
        ...


class CharCountMeasurer:
    """Estimates label widths as half the font size per character."""

    def measure(self, texts: Sequence[str], font_size: float) -> list[int]:
        return [int(round(len(text) * font_size / 2)) for text in texts]


class FixedWidthMeasurer:
    def __init__(self, widths: Sequence[int] | int) -> None:
        self._widths = widths

    def measure(self, texts: Sequence[str], font_size: float) -> list[int]:
        if isinstance(self._widths, int):
            return [self._widths] * len(texts)
        return [int(self._widths[i]) if i < len(self._widths) else 0 for i in range(len(texts))]


class PillowTextMeasurer:
    def __init__(self, font_family: str = DEFAULT_FONT_FAMILY) -> None:
        self.font_family = font_family

    def measure(self, texts: Sequence[str], font_size: float) -> list[int]:
        return [text_width(text, font_family=self.font_family, font_size_px=font_size) for text in texts]


def text_width(text: str, *, font_family: str = DEFAULT_FONT_FAMILY, font_size_px: float = 10.0) -> int:
    if not text:
        return 0
    font = _load_font(font_family=font_family, font_size_px=font_size_px)
    left, _, right, _ = font.getbbox(text)
    return max(0, int(round(right - left)))


@lru_cache(maxsize=64)
def _load_font(font_family: str, font_size_px: float) -> ImageFont.FreeTypeFont | ImageFont.ImageFont:
    size = max(1, int(round(font_size_px)))
    font_path = _resolve_font_path(font_family)
    if font_path is None:
        return ImageFont.load_default()
    try:
        return ImageFont.truetype(str(font_path), size=size)
    except OSError:
        return ImageFont.load_default()


@lru_cache(maxsize=16)
def _resolve_font_path(font_family: str) -> Path | None:
    wanted = font_family.strip().lower() if font_family.strip() else DEFAULT_FONT_FAMILY.lower()
    patterns = (wanted,) + FONT_FALLBACK_PATTERNS

    font_dirs = [
        Path.home() / "Library" / "Fonts",
        Path("/Library/Fonts"),
        Path("/System/Library/Fonts"),
        Path("/usr/share/fonts"),
        Path("/usr/local/share/fonts"),
    ]

    candidates: list[Path] = []
    for base in font_dirs:
        if not base.exists():
            continue
        for ext in ("*.ttf", "*.otf", "*.ttc"):
            candidates.extend(base.rglob(ext))

    for pattern in patterns:
        p = pattern.replace(" ", "")
        for path in candidates:
            if p in path.stem.lower().replace(" ", ""):
                return path
    return None
