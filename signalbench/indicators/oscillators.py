"""Momentum oscillators: RSI, MACD and the stochastic oscillator."""

from __future__ import annotations

from typing import NamedTuple, Sequence

from signalbench.core.models import IndicatorSeries
from signalbench.indicators._series import (
    defined,
    empty_series,
    pad_left,
    require_parallel,
    require_period,
)
from signalbench.indicators.moving_average import ema, sma

# Stand-in divisor when the average loss is zero. This keeps RSI finite
# (just under 100) rather than clamping it to exactly 100.
RSI_ZERO_LOSS_EPSILON = 0.001


class MACD(NamedTuple):
    macd_line: IndicatorSeries
    signal_line: IndicatorSeries
    histogram: IndicatorSeries


class Stochastic(NamedTuple):
    k: IndicatorSeries
    d: IndicatorSeries


def _rsi_value(avg_gain: float, avg_loss: float) -> float:
    divisor = RSI_ZERO_LOSS_EPSILON if avg_loss == 0 else avg_loss
    return 100 - (100 / (1 + avg_gain / divisor))


def rsi(values: Sequence[float], period: int = 14) -> IndicatorSeries:
    """
    Relative Strength Index with Wilder smoothing.

    The first value sits at index `period` (it needs `period` price
    changes). Input shorter than period+1 is all None.
    """
    require_period("period", period)
    if len(values) < period + 1:
        return empty_series(len(values))

    gains = []
    losses = []
    for i in range(1, len(values)):
        change = values[i] - values[i - 1]
        gains.append(change if change > 0 else 0.0)
        losses.append(-change if change < 0 else 0.0)

    avg_gain = sum(gains[:period]) / period
    avg_loss = sum(losses[:period]) / period

    result: IndicatorSeries = empty_series(period)
    result.append(_rsi_value(avg_gain, avg_loss))

    for i in range(period, len(gains)):
        avg_gain = (avg_gain * (period - 1) + gains[i]) / period
        avg_loss = (avg_loss * (period - 1) + losses[i]) / period
        result.append(_rsi_value(avg_gain, avg_loss))

    return result


def macd(
    values: Sequence[float],
    fast_period: int = 12,
    slow_period: int = 26,
    signal_period: int = 9,
) -> MACD:
    """
    Moving Average Convergence Divergence.

    The signal line is an EMA over the defined part of the MACD line,
    re-padded with leading None so every output stays aligned with `values`.
    """
    require_period("signal_period", signal_period)
    fast = ema(values, fast_period)
    slow = ema(values, slow_period)

    macd_line: IndicatorSeries = [
        None if f is None or s is None else f - s
        for f, s in zip(fast, slow)
    ]
    signal_line = pad_left(ema(defined(macd_line), signal_period), len(values))
    histogram: IndicatorSeries = [
        None if m is None or s is None else m - s
        for m, s in zip(macd_line, signal_line)
    ]
    return MACD(macd_line, signal_line, histogram)


def stochastic(
    high: Sequence[float],
    low: Sequence[float],
    close: Sequence[float],
    period: int = 14,
    smooth_k: int = 3,
    smooth_d: int = 3,
) -> Stochastic:
    """
    Stochastic oscillator (%K, %D).

    Raw %K is 100 when the window's high-low range is zero. %K smooths
    raw %K with an SMA and %D smooths the defined %K values.
    """
    require_parallel(high, low, close)
    require_period("period", period)
    require_period("smooth_k", smooth_k)
    require_period("smooth_d", smooth_d)

    raw_k = []
    for i in range(period - 1, len(close)):
        highest = max(high[i - period + 1:i + 1])
        lowest = min(low[i - period + 1:i + 1])
        if highest == lowest:
            raw_k.append(100.0)
        else:
            raw_k.append(100 * (close[i] - lowest) / (highest - lowest))

    k = sma(raw_k, smooth_k)
    d = sma(defined(k), smooth_d)
    return Stochastic(pad_left(k, len(close)), pad_left(d, len(close)))
