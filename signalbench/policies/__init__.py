"""Default backtest options and override merge utilities."""

from signalbench.policies.options import (
    BacktestOptions,
    BacktestOverrides,
    default_backtest_options,
    merge_backtest_overrides,
)

__all__ = [
    "BacktestOptions",
    "BacktestOverrides",
    "default_backtest_options",
    "merge_backtest_overrides",
]
