"""Performance metrics derived from a trade log and an equity curve."""

from __future__ import annotations

import math
from typing import List, Sequence

from signalbench.core.models import EquityPoint, Trade


def winning_trades(trades: Sequence[Trade]) -> int:
    """Trades with strictly positive pnl, open ones included."""
    return sum(1 for trade in trades if trade.pnl > 0)


def win_rate(trades: Sequence[Trade]) -> float:
    """Percentage of winning trades; 0 with no trades."""
    if not trades:
        return 0.0
    return winning_trades(trades) / len(trades) * 100


def percent_return(initial_capital: float, final_capital: float) -> float:
    if initial_capital == 0:
        return 0.0
    return (final_capital - initial_capital) / initial_capital * 100


def max_drawdown(equity: Sequence[EquityPoint], initial_capital: float) -> float:
    """
    Largest peak-to-trough decline of the equity curve, in percent.

    The running peak starts at the initial capital. A non-positive peak
    contributes no drawdown.
    """
    peak = initial_capital
    worst = 0.0
    for point in equity:
        if point.value > peak:
            peak = point.value
        if peak <= 0:
            continue
        drawdown = (peak - point.value) / peak * 100
        if drawdown > worst:
            worst = drawdown
    return worst


def equity_returns(equity: Sequence[EquityPoint]) -> List[float]:
    """Bar-to-bar simple returns; steps from a zero value are skipped."""
    returns = []
    for prev, curr in zip(equity, equity[1:]):
        if prev.value == 0:
            continue
        returns.append(curr.value / prev.value - 1)
    return returns


def sharpe_ratio(equity: Sequence[EquityPoint], periods_per_year: int = 252) -> float:
    """
    Annualized Sharpe ratio of the bar-to-bar equity returns.

    Uses the population standard deviation and no risk-free rate.
    Returns 0 when there are no returns or they do not vary.
    """
    returns = equity_returns(equity)
    if not returns:
        return 0.0

    mean = sum(returns) / len(returns)
    std_dev = math.sqrt(sum((r - mean) ** 2 for r in returns) / len(returns))
    if std_dev == 0:
        return 0.0
    return mean / std_dev * math.sqrt(periods_per_year)
