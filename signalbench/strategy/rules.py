"""Signal rules over aligned indicator series."""

from __future__ import annotations

from typing import List, Optional, Sequence

from signalbench.core.errors import StrategyConfigError
from signalbench.core.models import SignalValue


def crossover_signals(
    fast: Sequence[Optional[float]],
    slow: Sequence[Optional[float]],
) -> List[SignalValue]:
    """
    Buy where `fast` crosses above `slow`, sell where it crosses below.

    A cross needs both series defined on the current and previous bar.
    """
    if len(fast) != len(slow):
        raise StrategyConfigError(
            f"crossover series must be aligned, got {len(fast)} and {len(slow)}"
        )

    signals = [SignalValue.HOLD] * len(fast)
    for i in range(1, len(fast)):
        prev_fast, prev_slow = fast[i - 1], slow[i - 1]
        cur_fast, cur_slow = fast[i], slow[i]
        if None in (prev_fast, prev_slow, cur_fast, cur_slow):
            continue
        if cur_fast > cur_slow and prev_fast <= prev_slow:
            signals[i] = SignalValue.BUY
        elif cur_fast < cur_slow and prev_fast >= prev_slow:
            signals[i] = SignalValue.SELL
    return signals


def threshold_signals(
    series: Sequence[Optional[float]],
    lower: float,
    upper: float,
) -> List[SignalValue]:
    """
    Buy when the series drops below `lower`, sell when it rises above `upper`.

    Only the bar where the level is crossed fires.
    """
    if lower >= upper:
        raise StrategyConfigError(f"lower ({lower}) must be below upper ({upper})")

    signals = [SignalValue.HOLD] * len(series)
    for i in range(1, len(series)):
        prev, cur = series[i - 1], series[i]
        if prev is None or cur is None:
            continue
        if cur < lower and prev >= lower:
            signals[i] = SignalValue.BUY
        elif cur > upper and prev <= upper:
            signals[i] = SignalValue.SELL
    return signals
