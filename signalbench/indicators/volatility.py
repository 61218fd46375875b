"""Volatility indicators: Bollinger Bands, true range and ATR."""

from __future__ import annotations

import math
from typing import List, NamedTuple, Sequence

from signalbench.core.models import IndicatorSeries
from signalbench.indicators._series import pad_left, require_parallel, require_period
from signalbench.indicators.moving_average import sma


class BollingerBands(NamedTuple):
    upper: IndicatorSeries
    middle: IndicatorSeries
    lower: IndicatorSeries


def bollinger_bands(
    values: Sequence[float],
    period: int = 20,
    multiplier: float = 2.0,
) -> BollingerBands:
    """Bollinger Bands: SMA middle band +/- multiplier population std devs."""
    middle = sma(values, period)
    upper: IndicatorSeries = []
    lower: IndicatorSeries = []

    for i, mid in enumerate(middle):
        if mid is None:
            upper.append(None)
            lower.append(None)
            continue
        window = values[i - period + 1:i + 1]
        std_dev = math.sqrt(sum((x - mid) ** 2 for x in window) / period)
        upper.append(mid + multiplier * std_dev)
        lower.append(mid - multiplier * std_dev)

    return BollingerBands(upper, middle, lower)


def true_range(
    high: Sequence[float],
    low: Sequence[float],
    close: Sequence[float],
) -> List[float]:
    """True range of every bar after the first (length n-1)."""
    require_parallel(high, low, close)
    return [
        max(
            high[i] - low[i],
            abs(high[i] - close[i - 1]),
            abs(low[i] - close[i - 1]),
        )
        for i in range(1, len(close))
    ]


def atr(
    high: Sequence[float],
    low: Sequence[float],
    close: Sequence[float],
    period: int = 14,
) -> IndicatorSeries:
    """
    Average True Range with Wilder smoothing.

    Seeded with the mean of the first `period` true ranges; the first
    value sits at index `period`.
    """
    require_period("period", period)
    ranges = true_range(high, low, close)

    result: List[float] = []
    if len(ranges) >= period:
        prev = sum(ranges[:period]) / period
        result.append(prev)
        for tr in ranges[period:]:
            prev = (prev * (period - 1) + tr) / period
            result.append(prev)

    return pad_left(result, len(close))
