from __future__ import annotations


class ChartDataError(ValueError):
    """Raised when series data cannot be turned into chart geometry."""


class NoValidDataError(ChartDataError):
    """Raised when a series is empty or every sample value is missing."""


class SeriesShapeError(ChartDataError):
    """Raised when samples disagree with the shape fixed by the first valid value."""
