"""Pure core contracts for signalbench."""

from signalbench.core.errors import (
    BacktestConfigError,
    BacktestError,
    DataSourceError,
    EmptyPriceHistoryError,
    IndicatorInputError,
    InvalidSignalError,
    SignalBenchError,
    SignalLengthMismatchError,
    StrategyConfigError,
    StrategyError,
    UnknownStrategyError,
)
from signalbench.core.models import (
    BacktestResult,
    EquityPoint,
    IndicatorSeries,
    MarketCondition,
    MarketConditionReport,
    Position,
    PositionSide,
    PriceBar,
    SignalValue,
    Trade,
)

__all__ = [
    "SignalBenchError",
    "BacktestError",
    "EmptyPriceHistoryError",
    "SignalLengthMismatchError",
    "InvalidSignalError",
    "BacktestConfigError",
    "IndicatorInputError",
    "StrategyError",
    "StrategyConfigError",
    "UnknownStrategyError",
    "DataSourceError",
    "PriceBar",
    "SignalValue",
    "PositionSide",
    "Position",
    "Trade",
    "EquityPoint",
    "BacktestResult",
    "IndicatorSeries",
    "MarketCondition",
    "MarketConditionReport",
]
