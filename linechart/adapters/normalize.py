from __future__ import annotations

from collections.abc import Sequence
from decimal import Decimal
from typing import Any

import numpy as np
import torch

from linechart.errors import ChartDataError, NoValidDataError, SeriesShapeError
from linechart.series import Sample, ScalarShape, SeriesData, SeriesShape, VectorShape


def normalize_samples(samples: Sequence[Sample]) -> SeriesData:
    """Convert ``(x, y)`` samples into a :class:`SeriesData`.

    The shape is taken from the first sample whose ``y`` is not ``None``. Every
    later non-null ``y`` must agree with it; a mismatch raises
    :class:`SeriesShapeError`. A ``None`` in a vector series marks every
    sub-series as missing at that sample.
    """
    if len(samples) == 0:
        raise NoValidDataError("empty series")

    pairs = [_unpack_sample(sample, index=i) for i, sample in enumerate(samples)]
    shape = detect_shape(raw_y for _, raw_y in pairs)
    if shape is None:
        raise NoValidDataError("series contains no non-null values")

    n = len(pairs)
    x_arr = np.empty(n, dtype=np.float64)
    y_arr = np.full((n, shape.length), np.nan, dtype=np.float64)
    for i, (raw_x, raw_y) in enumerate(pairs):
        x_arr[i] = _coerce_number(raw_x, label="x", index=i, allow_none=False)
        if raw_y is None:
            continue
        if isinstance(shape, VectorShape):
            if not _is_vector(raw_y):
                raise SeriesShapeError(f"sample {i} is scalar in a vector series")
            row = _coerce_vector(raw_y, index=i)
            if row.size != shape.length:
                raise SeriesShapeError(
                    f"sample {i} has {row.size} values, expected {shape.length} from the first valid sample"
                )
            y_arr[i, :] = row
        else:
            if _is_vector(raw_y):
                raise SeriesShapeError(f"sample {i} is vector-valued in a scalar series")
            y_arr[i, 0] = _coerce_number(raw_y, label="y", index=i, allow_none=True)

    # Samples with a non-finite x cannot be placed on the axis.
    y_arr[~np.isfinite(x_arr), :] = np.nan
    return SeriesData(x=x_arr, y=y_arr, shape=shape)


def normalize_xy(x: Any, y: Any) -> SeriesData:
    """Column form: ``y`` is 1-D (scalar series) or 2-D ``(n, k)`` (vector series).

    Accepts sequences, numpy arrays and torch tensors. NaN or ``None`` mark
    missing values.
    """
    x_arr = _coerce_column(x, label="x")
    y_arr = _coerce_column(y, label="y")
    if x_arr.ndim != 1:
        raise ChartDataError("x must be 1-D")
    if y_arr.ndim == 1:
        shape: SeriesShape = ScalarShape()
        y_arr = y_arr.reshape(-1, 1)
    elif y_arr.ndim == 2:
        shape = VectorShape(length=int(y_arr.shape[1]))
    else:
        raise ChartDataError("y must be 1-D or 2-D")
    if x_arr.shape[0] != y_arr.shape[0]:
        raise ChartDataError(f"x and y length mismatch: {x_arr.shape[0]} != {y_arr.shape[0]}")
    if x_arr.size == 0:
        raise NoValidDataError("empty series")
    y_arr = y_arr.copy()
    y_arr[~np.isfinite(x_arr), :] = np.nan
    if not np.any(np.isfinite(y_arr)):
        raise NoValidDataError("series contains no finite values")
    return SeriesData(x=x_arr, y=y_arr, shape=shape)


def detect_shape(values: Any) -> SeriesShape | None:
    for raw in values:
        if raw is None:
            continue
        if _is_vector(raw):
            if len(raw) == 0:
                raise SeriesShapeError("vector values must hold at least one entry")
            return VectorShape(length=len(raw))
        return ScalarShape()
    return None


def _unpack_sample(sample: Any, *, index: int) -> tuple[Any, Any]:
    if isinstance(sample, (str, bytes)) or not isinstance(sample, Sequence) or len(sample) != 2:
        raise ChartDataError(f"sample {index} must be an (x, y) pair: {sample!r}")
    return sample[0], sample[1]


def _is_vector(value: Any) -> bool:
    if isinstance(value, torch.Tensor):
        return value.ndim == 1
    if isinstance(value, np.ndarray):
        return value.ndim == 1
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray))


def _coerce_vector(value: Any, *, index: int) -> np.ndarray:
    if isinstance(value, torch.Tensor):
        return value.detach().cpu().to(torch.float64).numpy()
    if isinstance(value, np.ndarray) and value.dtype.kind in {"i", "u", "f", "b"}:
        return value.astype(np.float64, copy=False)
    out = np.empty(len(value), dtype=np.float64)
    for j, raw in enumerate(value):
        out[j] = _coerce_number(raw, label=f"y[{j}]", index=index, allow_none=True)
    return out


def _coerce_number(raw: Any, *, label: str, index: int, allow_none: bool) -> float:
    if raw is None:
        if allow_none:
            return np.nan
        raise ChartDataError(f"{label} is missing at sample {index}")
    if isinstance(raw, (str, bytes)):
        raise ChartDataError(f"{label} contains non-numeric value at sample {index}: {raw!r}")
    if isinstance(raw, Decimal):
        return float(raw)
    try:
        return float(raw)
    except (TypeError, ValueError, OverflowError) as exc:
        raise ChartDataError(f"{label} contains non-numeric value at sample {index}: {raw!r}") from exc


def _coerce_column(value: Any, *, label: str) -> np.ndarray:
    if isinstance(value, torch.Tensor):
        return value.detach().cpu().to(torch.float64).numpy()
    if isinstance(value, np.ndarray):
        arr = value
    elif isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray)):
        arr = np.asarray(value, dtype=object)
    else:
        raise ChartDataError(f"unsupported {label} input type: {type(value)!r}")

    if arr.dtype.kind in {"i", "u", "f", "b"}:
        return arr.astype(np.float64, copy=False)

    out = np.empty(arr.shape, dtype=np.float64)
    for pos, raw in np.ndenumerate(arr):
        out[pos] = _coerce_number(raw, label=label, index=pos[0], allow_none=True)
    return out
