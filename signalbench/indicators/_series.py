"""Alignment helpers shared by the indicator functions."""

from __future__ import annotations

from typing import List, Optional, Sequence, Tuple

from signalbench.core.errors import IndicatorInputError
from signalbench.core.models import IndicatorSeries, PriceBar


def require_period(name: str, period: int) -> None:
    if period < 1:
        raise IndicatorInputError(f"{name} must be >= 1, got {period}")


def require_parallel(high: Sequence[float], low: Sequence[float], close: Sequence[float]) -> None:
    if not len(high) == len(low) == len(close):
        raise IndicatorInputError(
            f"high/low/close must have equal lengths, got "
            f"{len(high)}/{len(low)}/{len(close)}"
        )


def empty_series(length: int) -> IndicatorSeries:
    return [None] * length


def pad_left(values: Sequence[Optional[float]], length: int) -> IndicatorSeries:
    """Prefix with None until the series is `length` long."""
    return [None] * (length - len(values)) + list(values)


def defined(values: Sequence[Optional[float]]) -> List[float]:
    """Drop the None entries of a series."""
    return [v for v in values if v is not None]


def price_columns(bars: Sequence[PriceBar]) -> Tuple[List[float], List[float], List[float]]:
    """Return (high, low, close) lists for a bar sequence."""
    return (
        [bar.high for bar in bars],
        [bar.low for bar in bars],
        [bar.close for bar in bars],
    )
