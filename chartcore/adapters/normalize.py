from __future__ import annotations

import logging
from collections.abc import Sequence
from decimal import Decimal
from typing import Any

import numpy as np

from chartcore.errors import ChartDataError


LOGGER = logging.getLogger(__name__)

try:
    import pandas as pd
except ImportError:  # pragma: no cover - optional dependency
    pd = None  # type: ignore[assignment]

try:
    import torch
except ImportError:  # pragma: no cover - optional dependency
    torch = None  # type: ignore[assignment]


POINT_COLUMNS = ("x", "y")
INTERVAL_COLUMNS = ("x1", "x2", "y")


def normalize_points(values: Any) -> np.ndarray:
    """Coerce `[[x, y], ...]` style input into a finite `(n, 2)` float64 array."""

    arr = _coerce_table(values, columns=POINT_COLUMNS, label="points")
    if arr.ndim != 2 or arr.shape[1] != 2:
        raise ChartDataError(f"points must have shape (n, 2), got {arr.shape}")
    return _drop_non_finite(arr, label="points")


def normalize_intervals(values: Any) -> np.ndarray:
    """Coerce `[[[x1, x2], y], ...]` or `[[x1, x2, y], ...]` into a finite `(n, 3)` array."""

    if isinstance(values, Sequence) and not isinstance(values, (str, bytes, bytearray)):
        values = [_flatten_interval(row, i) for i, row in enumerate(values)]
    arr = _coerce_table(values, columns=INTERVAL_COLUMNS, label="intervals")
    if arr.ndim != 2 or arr.shape[1] != 3:
        raise ChartDataError(f"intervals must have shape (n, 3), got {arr.shape}")
    arr = _drop_non_finite(arr, label="intervals")
    inverted = np.flatnonzero(arr[:, 0] > arr[:, 1])
    if inverted.size:
        raise ChartDataError(f"interval at index {int(inverted[0])} has x1 > x2")
    return arr


def _flatten_interval(row: Any, index: int) -> list[Any]:
    if isinstance(row, np.ndarray):
        row = row.tolist()
    if not isinstance(row, Sequence) or isinstance(row, (str, bytes, bytearray)):
        raise ChartDataError(f"interval at index {index} must be a sequence")
    if len(row) == 2 and isinstance(row[0], (Sequence, np.ndarray)) and not isinstance(row[0], str):
        span = list(row[0])
        if len(span) != 2:
            raise ChartDataError(f"interval at index {index} must have an [x1, x2] span")
        return [span[0], span[1], row[1]]
    return list(row)


def _coerce_table(values: Any, *, columns: tuple[str, ...], label: str) -> np.ndarray:
    if values is None:
        raise ChartDataError(f"{label} input is required")

    if torch is not None and isinstance(values, torch.Tensor):
        tensor = values.detach()
        if tensor.is_cuda:
            tensor = tensor.cpu()
        return tensor.to(torch.float64).numpy()

    if pd is not None and isinstance(values, pd.DataFrame):
        missing = [c for c in columns if c not in values.columns]
        if missing:
            raise ChartDataError(f"{label} DataFrame is missing columns: {', '.join(missing)}")
        return _coerce_ndarray(values[list(columns)].to_numpy(), label=label)

    if isinstance(values, np.ndarray):
        if values.size == 0:
            return np.empty((0, len(columns)), dtype=np.float64)
        return _coerce_ndarray(values, label=label)

    if isinstance(values, Sequence) and not isinstance(values, (str, bytes, bytearray)):
        if len(values) == 0:
            return np.empty((0, len(columns)), dtype=np.float64)
        rows = [list(row) if isinstance(row, (Sequence, np.ndarray)) else row for row in values]
        widths = {len(row) if isinstance(row, list) else -1 for row in rows}
        if widths != {len(columns)}:
            raise ChartDataError(f"every {label} row must have {len(columns)} values")
        return _coerce_ndarray(np.asarray(rows, dtype=object), label=label)

    raise ChartDataError(f"unsupported {label} input type: {type(values)!r}")


def _coerce_ndarray(arr: np.ndarray, *, label: str) -> np.ndarray:
    if arr.dtype.kind in {"i", "u", "f", "b"}:
        return arr.astype(np.float64, copy=False)

    out = np.empty(arr.shape, dtype=np.float64)
    for idx, raw in np.ndenumerate(arr):
        if raw is None:
            out[idx] = np.nan
            continue
        if isinstance(raw, Decimal):
            out[idx] = float(raw)
            continue
        try:
            out[idx] = float(raw)
        except (TypeError, ValueError) as exc:
            raise ChartDataError(f"{label} contains non-numeric value at {idx}: {raw!r}") from exc
    return out


def _drop_non_finite(arr: np.ndarray, *, label: str) -> np.ndarray:
    mask = np.all(np.isfinite(arr), axis=1)
    dropped = int(arr.shape[0] - np.count_nonzero(mask))
    if dropped:
        LOGGER.warning("dropped %d non-finite %s rows", dropped, label)
        return arr[mask]
    return arr
