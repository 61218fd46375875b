"""Typed errors for signalbench."""

from __future__ import annotations


class SignalBenchError(Exception):
    """Base class for signalbench errors."""


class BacktestError(SignalBenchError):
    """Base class for backtest engine failures."""


class EmptyPriceHistoryError(BacktestError):
    """Raised when a backtest is started without any price bars."""

    def __init__(self, message: str = "Cannot run a backtest on an empty price history") -> None:
        super().__init__(message)


class SignalLengthMismatchError(BacktestError):
    """Raised when the signal array does not line up with the price bars."""

    def __init__(self, expected: int, actual: int) -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Signals array length must match data array length "
            f"(bars={expected}, signals={actual})"
        )


class InvalidSignalError(BacktestError):
    """Raised when a signal value is not one of buy/sell/hold."""

    def __init__(self, index: int, value: object) -> None:
        self.index = index
        self.value = value
        super().__init__(f"Invalid signal {value!r} at bar {index}; expected 1, -1 or 0")


class BacktestConfigError(BacktestError):
    """Raised when backtest options are out of range."""


class IndicatorInputError(SignalBenchError, ValueError):
    """Raised when indicator inputs violate a hard precondition."""


class StrategyError(SignalBenchError):
    """Base class for strategy construction failures."""


class StrategyConfigError(StrategyError):
    """Raised when a declarative strategy spec fails validation."""


class UnknownStrategyError(StrategyError, KeyError):
    """Raised when a strategy name is not registered."""

    def __str__(self) -> str:
        return str(self.args[0]) if self.args else ""


class DataSourceError(SignalBenchError):
    """Raised when a price data file cannot be turned into bars."""
