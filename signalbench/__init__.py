"""signalbench: technical indicators, signal strategies and a single-position backtester."""

from signalbench.analysis import analyze_market, classify_market
from signalbench.backtest import BacktestEngine, run_backtest
from signalbench.core.models import (
    BacktestResult,
    EquityPoint,
    MarketCondition,
    PositionSide,
    PriceBar,
    SignalValue,
    Trade,
)
from signalbench.policies import BacktestOptions, BacktestOverrides

__version__ = "0.1.0"

__all__ = [
    "BacktestEngine",
    "run_backtest",
    "BacktestOptions",
    "BacktestOverrides",
    "BacktestResult",
    "EquityPoint",
    "Trade",
    "PriceBar",
    "SignalValue",
    "PositionSide",
    "MarketCondition",
    "analyze_market",
    "classify_market",
]
