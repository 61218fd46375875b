"""Simple and exponential moving averages."""

from __future__ import annotations

from typing import Sequence

from signalbench.core.models import IndicatorSeries
from signalbench.indicators._series import empty_series, require_period


def sma(values: Sequence[float], period: int) -> IndicatorSeries:
    """
    Simple Moving Average.

    Uses a running window sum, so the cost is O(n) regardless of period.
    The first value sits at index period-1; shorter input is all None.
    """
    require_period("period", period)
    if len(values) < period:
        return empty_series(len(values))

    window_sum = sum(values[:period])
    result: IndicatorSeries = empty_series(period - 1)
    result.append(window_sum / period)

    for i in range(period, len(values)):
        window_sum = window_sum - values[i - period] + values[i]
        result.append(window_sum / period)

    return result


def ema(values: Sequence[float], period: int) -> IndicatorSeries:
    """
    Exponential Moving Average.

    Seeded with the SMA of the first `period` values, then
    ema[i] = (x[i] - ema[i-1]) * 2/(period+1) + ema[i-1].
    """
    require_period("period", period)
    if len(values) < period:
        return empty_series(len(values))

    multiplier = 2 / (period + 1)
    prev = sum(values[:period]) / period
    result: IndicatorSeries = empty_series(period - 1)
    result.append(prev)

    for i in range(period, len(values)):
        prev = (values[i] - prev) * multiplier + prev
        result.append(prev)

    return result
