"""
Signal-Driven Backtesting Engine
Deterministic single-position replay of OHLCV bars.

Key guarantees:
- Signal i is evaluated against bar i's close
- At most one open position at any bar
- Inputs are never mutated; every run builds fresh result objects
- No randomness or wall-clock dependence, so identical inputs give
  identical results
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple, Union

from signalbench.backtest import metrics
from signalbench.core.config import get_settings
from signalbench.core.errors import (
    EmptyPriceHistoryError,
    InvalidSignalError,
    SignalLengthMismatchError,
)
from signalbench.core.models import (
    BacktestResult,
    EquityPoint,
    Position,
    PositionSide,
    PriceBar,
    SignalValue,
    Trade,
)
from signalbench.core.ports import SignalFunction
from signalbench.policies.options import (
    BacktestOptions,
    BacktestOverrides,
    default_backtest_options,
    merge_backtest_overrides,
)

logger = logging.getLogger(__name__)


@dataclass
class _Ledger:
    """Mutable per-run state. Never shared between runs."""
    cash: float
    position: Optional[Position] = None
    trades: List[Trade] = field(default_factory=list)
    equity: List[EquityPoint] = field(default_factory=list)


class BacktestEngine:
    """
    Single-position backtesting engine.

    Replays bars in order, opening a long on a buy signal and a short on
    a sell signal when flat, and closing on the opposing signal. Any
    position still open after the last bar is valued at the last close.
    """

    def __init__(
        self,
        initial_capital: Optional[float] = None,
        options: Union[BacktestOptions, BacktestOverrides, None] = None,
    ) -> None:
        """
        Initialize backtest engine.

        Args:
            initial_capital: Starting cash (settings default when None)
            options: Full options, or overrides merged onto the defaults
        """
        if initial_capital is None:
            initial_capital = get_settings().backtest.initial_capital
        if not isinstance(options, BacktestOptions):
            options = merge_backtest_overrides(default_backtest_options(), options)

        self._initial_capital = float(initial_capital)
        self._options = options

    @property
    def initial_capital(self) -> float:
        return self._initial_capital

    @property
    def options(self) -> BacktestOptions:
        return self._options

    def run(self, bars: Sequence[PriceBar], signal_fn: SignalFunction) -> BacktestResult:
        """
        Run backtest over price bars.

        CRITICAL: Bars must be sorted by timestamp ascending. The engine
        does not sort or deduplicate them.

        Args:
            bars: Price history
            signal_fn: Maps the full history to one signal per bar

        Returns:
            BacktestResult with trades, equity curve and metrics

        Raises:
            EmptyPriceHistoryError: No bars were supplied
            SignalLengthMismatchError: signal count differs from bar count
            InvalidSignalError: a signal is not 1, -1 or 0
        """
        history: Tuple[PriceBar, ...] = tuple(bars)
        if not history:
            raise EmptyPriceHistoryError()

        signals = self._validate_signals(signal_fn(history), len(history))

        logger.info(
            f"Starting backtest: bars={len(history)} capital={self._initial_capital}"
        )

        ledger = _Ledger(cash=self._initial_capital)
        ledger.equity.append(
            EquityPoint(timestamp=history[0].timestamp, value=self._initial_capital)
        )

        for bar, signal in zip(history[1:], signals[1:]):
            self._process_bar(ledger, bar, signal)

        if ledger.position is not None:
            self._liquidate(ledger, history[-1])

        result = self._calculate_results(ledger)

        logger.info(
            f"Backtest complete: {result.total_trades} trades, "
            f"return={result.percent_return:.2f}%, "
            f"sharpe={result.sharpe_ratio:.2f}"
        )
        return result

    @staticmethod
    def _validate_signals(raw: Sequence[object], expected: int) -> List[SignalValue]:
        signals = list(raw)
        if len(signals) != expected:
            raise SignalLengthMismatchError(expected, len(signals))

        validated = []
        for index, value in enumerate(signals):
            try:
                validated.append(SignalValue(value))
            except (ValueError, TypeError):
                raise InvalidSignalError(index, value) from None
        return validated

    def _process_bar(self, ledger: _Ledger, bar: PriceBar, signal: SignalValue) -> None:
        """
        Process a single bar.

        Order of operations:
        1. Record pre-trade mark-to-market equity
        2. Open on an entry signal when flat
        3. Close on a signal opposing the open position
        """
        price = bar.close
        value = ledger.cash
        if ledger.position is not None:
            value += ledger.position.quantity * price
        ledger.equity.append(EquityPoint(timestamp=bar.timestamp, value=value))

        position = ledger.position
        if position is None:
            if signal == SignalValue.BUY:
                self._open_position(ledger, bar, PositionSide.LONG)
            elif signal == SignalValue.SELL:
                self._open_position(ledger, bar, PositionSide.SHORT)
        elif (signal == SignalValue.SELL and position.side == PositionSide.LONG) or (
            signal == SignalValue.BUY and position.side == PositionSide.SHORT
        ):
            self._close_position(ledger, bar)

    def _entry_price(self, side: PositionSide, price: float) -> float:
        slippage = self._options.slippage_percent / 100
        if side == PositionSide.LONG:
            return price * (1 + slippage)
        return price * (1 - slippage)

    def _exit_price(self, side: PositionSide, price: float) -> float:
        slippage = self._options.slippage_percent / 100
        if side == PositionSide.LONG:
            return price * (1 - slippage)
        return price * (1 + slippage)

    def _open_position(self, ledger: _Ledger, bar: PriceBar, side: PositionSide) -> None:
        """Open a new position sized from the available cash."""
        effective_price = self._entry_price(side, bar.close)
        trade_cash = ledger.cash * self._options.position_sizing
        commission = trade_cash * (self._options.commission_percent / 100)
        quantity = (trade_cash - commission) / effective_price

        ledger.position = Position(
            side=side,
            entry_price=effective_price,
            entry_timestamp=bar.timestamp,
            quantity=quantity,
            entry_commission=commission,
        )

        if side == PositionSide.LONG:
            ledger.cash -= quantity * effective_price + commission
        else:
            # Short entries only pay commission; notional is not reserved.
            ledger.cash -= commission

        logger.debug(f"OPEN {side.value} qty={quantity:.6f} @ {effective_price:.4f}")

    def _settle(self, position: Position, price: float) -> Tuple[float, float, float, float]:
        """Return (exit_price, net_pnl, exit_commission, exit_value) for a close at `price`."""
        exit_price = self._exit_price(position.side, price)
        if position.side == PositionSide.LONG:
            gross = (exit_price - position.entry_price) * position.quantity
        else:
            gross = (position.entry_price - exit_price) * position.quantity

        exit_value = position.quantity * exit_price
        commission = exit_value * (self._options.commission_percent / 100)
        return exit_price, gross - commission, commission, exit_value

    @staticmethod
    def _percent_pnl(position: Position, pnl: float) -> float:
        notional = position.quantity * position.entry_price
        if notional == 0:
            return 0.0
        return pnl / notional * 100

    def _close_position(self, ledger: _Ledger, bar: PriceBar) -> None:
        """Close the open position at this bar's close."""
        position = ledger.position
        exit_price, pnl, commission, exit_value = self._settle(position, bar.close)

        ledger.trades.append(
            Trade(
                entry_timestamp=position.entry_timestamp,
                exit_timestamp=bar.timestamp,
                entry_price=position.entry_price,
                exit_price=exit_price,
                side=position.side,
                quantity=position.quantity,
                pnl=pnl,
                percent_pnl=self._percent_pnl(position, pnl),
                is_open=False,
                entry_commission=position.entry_commission,
                exit_commission=commission,
            )
        )
        ledger.cash += exit_value - commission
        ledger.position = None

        logger.debug(f"CLOSE {position.side.value} @ {exit_price:.4f} pnl={pnl:.2f}")

    def _liquidate(self, ledger: _Ledger, last_bar: PriceBar) -> None:
        """
        Value the position left open at the end of the run.

        The trade stays flagged open with null exit fields, but its pnl
        and the cash balance reflect a close at the last bar's price.
        """
        position = ledger.position
        _, pnl, commission, exit_value = self._settle(position, last_bar.close)

        ledger.trades.append(
            Trade(
                entry_timestamp=position.entry_timestamp,
                exit_timestamp=None,
                entry_price=position.entry_price,
                exit_price=None,
                side=position.side,
                quantity=position.quantity,
                pnl=pnl,
                percent_pnl=self._percent_pnl(position, pnl),
                is_open=True,
                entry_commission=position.entry_commission,
                exit_commission=commission,
            )
        )
        ledger.cash += exit_value - commission
        ledger.position = None

    def _calculate_results(self, ledger: _Ledger) -> BacktestResult:
        """Calculate backtest performance metrics."""
        final_capital = ledger.cash
        wins = metrics.winning_trades(ledger.trades)

        return BacktestResult(
            initial_capital=self._initial_capital,
            final_capital=final_capital,
            total_pnl=final_capital - self._initial_capital,
            percent_return=metrics.percent_return(self._initial_capital, final_capital),
            trades=tuple(ledger.trades),
            equity=tuple(ledger.equity),
            winning_trades=wins,
            losing_trades=len(ledger.trades) - wins,
            win_rate=metrics.win_rate(ledger.trades),
            max_drawdown=metrics.max_drawdown(ledger.equity, self._initial_capital),
            sharpe_ratio=metrics.sharpe_ratio(ledger.equity, self._options.periods_per_year),
        )


def run_backtest(
    bars: Sequence[PriceBar],
    signal_fn: SignalFunction,
    initial_capital: Optional[float] = None,
    options: Union[BacktestOptions, BacktestOverrides, None] = None,
) -> BacktestResult:
    """Run a single backtest with a fresh engine."""
    return BacktestEngine(initial_capital, options).run(bars, signal_fn)
