"""Backtesting package: single-position engine and performance metrics."""

from signalbench.backtest.engine import BacktestEngine, run_backtest

__all__ = ["BacktestEngine", "run_backtest"]
