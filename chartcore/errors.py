from __future__ import annotations


class ChartDataError(ValueError):
    """Raised when an input dataset cannot be normalized into chart values."""


class ChartConfigError(ValueError):
    """Raised when chart configuration options are invalid."""
