from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
import math

import numpy as np

from linechart.errors import ChartDataError
from linechart.series import SeriesData


_E10 = math.sqrt(50.0)
_E5 = math.sqrt(10.0)
_E2 = math.sqrt(2.0)
_NICE_MAX_ITERATIONS = 10


@dataclass(frozen=True)
class Domain:
    min: float
    max: float

    @property
    def span(self) -> float:
        return self.max - self.min

    @property
    def is_degenerate(self) -> bool:
        return self.min == self.max


@dataclass(frozen=True)
class LinearScale:
    """Monotonic linear map from a data domain onto a pixel range.

    ``range_start`` may exceed ``range_stop``; the y axis uses that to put
    larger values closer to the top of the surface.
    """

    domain: Domain
    range_start: float
    range_stop: float

    def __call__(self, values: np.ndarray | float) -> np.ndarray:
        arr = np.asarray(values, dtype=np.float64)
        if self.domain.is_degenerate:
            return np.full(arr.shape, (self.range_start + self.range_stop) * 0.5, dtype=np.float64)
        t = (arr - self.domain.min) / self.domain.span
        return self.range_start + t * (self.range_stop - self.range_start)

    def map_value(self, value: float) -> float:
        return float(self(value))

    def nice(self, count: int = 10) -> "LinearScale":
        return LinearScale(domain=nice_domain(self.domain, count), range_start=self.range_start, range_stop=self.range_stop)

    def ticks(self, count: int = 10) -> np.ndarray:
        return linear_ticks(self.domain.min, self.domain.max, count)


def compute_x_domain(x: np.ndarray) -> Domain:
    finite = x[np.isfinite(x)]
    if finite.size == 0:
        raise ChartDataError("x contains no finite values")
    return Domain(min=float(np.min(finite)), max=float(np.max(finite)))


def compute_y_domain(data: SeriesData) -> Domain:
    """Extent of every valid y value, sub-series pooled into one domain.

    Scalar series fall back to ``[0, 1]`` as a pair. Vector series fall back
    per bound, so a missing minimum becomes ``0`` and a missing maximum
    becomes ``1`` independently of each other.
    """
    if data.shape.is_vector:
        pool = data.y[np.isfinite(data.y)]
        ymin = float(np.min(pool)) if pool.size > 0 else None
        ymax = float(np.max(pool)) if pool.size > 0 else None
        return Domain(min=ymin if ymin is not None else 0.0, max=ymax if ymax is not None else 1.0)

    column = data.column(0)
    valid = column[np.isfinite(column)]
    if valid.size == 0:
        return Domain(min=0.0, max=1.0)
    return Domain(min=float(np.min(valid)), max=float(np.max(valid)))


def tick_increment(start: float, stop: float, count: int) -> float:
    """Round step for ``count`` ticks over ``[start, stop]``.

    Positive results are the step itself; negative results are the
    reciprocal, negated, which keeps sub-unit steps exact (``-10`` means 0.1).
    """
    step = (stop - start) / max(0, count)
    if not math.isfinite(step) or step <= 0:
        return 0.0
    power = math.floor(math.log10(step))
    error = step / math.pow(10, power)
    factor = _step_factor(error)
    if power >= 0:
        return factor * math.pow(10, power)
    return -math.pow(10, -power) / factor


def nice_domain(domain: Domain, count: int = 10) -> Domain:
    """Extend the bounds outward to multiples of the round tick step."""
    if domain.is_degenerate or not (math.isfinite(domain.min) and math.isfinite(domain.max)):
        return domain
    start, stop = domain.min, domain.max
    reversed_domain = stop < start
    if reversed_domain:
        start, stop = stop, start
    previous_step: float | None = None
    for _ in range(_NICE_MAX_ITERATIONS):
        step = tick_increment(start, stop, count)
        if step == 0:
            return domain
        if step == previous_step:
            if reversed_domain:
                start, stop = stop, start
            return Domain(min=start, max=stop)
        if step > 0:
            start = math.floor(start / step) * step
            stop = math.ceil(stop / step) * step
        elif step < 0:
            start = math.ceil(start * step) / step
            stop = math.floor(stop * step) / step
        previous_step = step
    # The step never settled; keep the input bounds.
    return domain


def linear_ticks(start: float, stop: float, count: int = 10) -> np.ndarray:
    if count <= 0:
        raise ValueError("count must be > 0")
    if start == stop:
        return np.asarray([start], dtype=np.float64)
    reverse = stop < start
    if reverse:
        start, stop = stop, start
    bounds = _tick_range(start, stop, count)
    if bounds is None:
        return np.asarray([], dtype=np.float64)
    i1, i2, inc = bounds
    steps = np.arange(i1, i2 + 1, dtype=np.float64)
    ticks = steps / -inc if inc < 0 else steps * inc
    if reverse:
        ticks = ticks[::-1]
    return ticks


def format_tick(value: float, *, step: float | None = None) -> str:
    if not np.isfinite(value):
        return str(value)
    if step is not None and np.isfinite(step) and step > 0 and abs(value) <= step * 1e-9:
        value = 0.0
    abs_v = abs(value)
    decimals = _decimals_from_step(step) if step is not None else 6
    if abs_v != 0 and (abs_v >= 1e15 or abs_v < 1e-6):
        return f"{value:.4e}"

    d = Decimal(str(value))
    quant = Decimal("1").scaleb(-decimals)
    try:
        q = d.quantize(quant)
    except InvalidOperation:
        q = d
    out = format(q, "f")
    # Only fractional parts lose trailing zeros; 30 stays 30.
    if "." in out:
        out = out.rstrip("0").rstrip(".")
    if out == "-0":
        out = "0"
    return out


def format_ticks_for_axis(ticks: np.ndarray) -> list[str]:
    if ticks.size == 0:
        return []
    if ticks.size == 1:
        return [format_tick(float(ticks[0]))]
    step = float(abs(ticks[1] - ticks[0]))
    return [format_tick(float(v), step=step) for v in ticks]


def _tick_range(start: float, stop: float, count: float) -> tuple[int, int, float] | None:
    step = (stop - start) / max(0.0, count)
    if not math.isfinite(step) or step <= 0:
        return None
    power = math.floor(math.log10(step))
    error = step / math.pow(10, power)
    factor = _step_factor(error)
    if power < 0:
        inc = math.pow(10, -power) / factor
        i1 = _round_half_up(start * inc)
        i2 = _round_half_up(stop * inc)
        if i1 / inc < start:
            i1 += 1
        if i2 / inc > stop:
            i2 -= 1
        inc = -inc
    else:
        inc = math.pow(10, power) * factor
        i1 = _round_half_up(start / inc)
        i2 = _round_half_up(stop / inc)
        if i1 * inc < start:
            i1 += 1
        if i2 * inc > stop:
            i2 -= 1
    if i2 < i1 and 0.5 <= count < 2:
        return _tick_range(start, stop, count * 2)
    if i2 < i1:
        return None
    return int(i1), int(i2), inc


def _step_factor(error: float) -> float:
    if error >= _E10:
        return 10.0
    if error >= _E5:
        return 5.0
    if error >= _E2:
        return 2.0
    return 1.0


def _decimals_from_step(step: float) -> int:
    if step <= 0 or not np.isfinite(step):
        return 6
    d = Decimal(str(step)).normalize()
    exp = d.as_tuple().exponent
    decimals = max(0, -int(exp))
    return min(12, decimals)


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))
