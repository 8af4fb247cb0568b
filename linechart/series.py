from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence, Union

import numpy as np


YValue = Union[None, float, Sequence[Union[float, None]]]
Sample = tuple[float, YValue]


@dataclass(frozen=True)
class ScalarShape:
    @property
    def length(self) -> int:
        return 1

    @property
    def is_vector(self) -> bool:
        return False


@dataclass(frozen=True)
class VectorShape:
    length: int

    @property
    def is_vector(self) -> bool:
        return True


SeriesShape = Union[ScalarShape, VectorShape]


@dataclass(frozen=True)
class Series:
    title: str
    samples: tuple[Sample, ...]


@dataclass(frozen=True)
class SeriesData:
    """Normalized series: ``y`` is always ``(n, k)`` with NaN marking missing cells."""

    x: np.ndarray
    y: np.ndarray
    shape: SeriesShape

    @property
    def mask(self) -> np.ndarray:
        return np.isfinite(self.y)

    @property
    def sub_series_count(self) -> int:
        return int(self.y.shape[1])

    def column(self, index: int) -> np.ndarray:
        return self.y[:, index]
