"""
Shared Models for signalbench
Pydantic schemas for price data, trades and backtest results.

This module is the SINGLE SOURCE OF TRUTH for all data models.
"""

from datetime import datetime
from enum import Enum, IntEnum
from typing import List, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict


# ISO-8601 string, epoch number or datetime; kept exactly as supplied.
Timestamp = Union[datetime, str, int, float]

# Indicator output aligned 1:1 with its input. None = not yet computable.
IndicatorSeries = List[Optional[float]]


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# Enums
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

class SignalValue(IntEnum):
    """Per-bar trade signal."""
    SELL = -1
    HOLD = 0
    BUY = 1


class PositionSide(str, Enum):
    """Position side enum."""
    LONG = "long"
    SHORT = "short"


class MarketCondition(str, Enum):
    """Market condition label."""
    BULLISH = "bullish"
    BEARISH = "bearish"
    NEUTRAL = "neutral"
    VOLATILE = "volatile"


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# Market Data Models
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

class PriceBar(BaseModel):
    """OHLCV bar. low <= open, close <= high is expected but not checked."""
    model_config = ConfigDict(frozen=True, extra="forbid")

    timestamp: Timestamp
    open: float
    high: float
    low: float
    close: float
    volume: Optional[float] = None


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# Position / Trade Models
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

class Position(BaseModel):
    """Open position held by the backtest engine."""
    model_config = ConfigDict(frozen=True, extra="forbid")

    side: PositionSide
    entry_price: float  # slippage adjusted
    entry_timestamp: Timestamp
    quantity: float
    entry_commission: float = 0.0


class Trade(BaseModel):
    """
    Completed (or force-valued) position.

    A trade still open when the run ends has is_open=True and null exit
    fields, while pnl reflects a close at the last bar.
    """
    model_config = ConfigDict(frozen=True, extra="forbid")

    entry_timestamp: Timestamp
    exit_timestamp: Optional[Timestamp] = None
    entry_price: float
    exit_price: Optional[float] = None
    side: PositionSide
    quantity: float
    pnl: float
    percent_pnl: float
    is_open: bool = False
    entry_commission: float = 0.0
    exit_commission: float = 0.0


class EquityPoint(BaseModel):
    """Mark-to-market portfolio value at one bar."""
    model_config = ConfigDict(frozen=True, extra="forbid")

    timestamp: Timestamp
    value: float


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# Result Models
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

class BacktestResult(BaseModel):
    """Results of a backtest run."""
    model_config = ConfigDict(frozen=True, extra="forbid")

    initial_capital: float
    final_capital: float
    total_pnl: float
    percent_return: float
    trades: Tuple[Trade, ...] = ()
    equity: Tuple[EquityPoint, ...] = ()
    winning_trades: int = 0
    losing_trades: int = 0
    win_rate: float = 0.0
    max_drawdown: float = 0.0
    sharpe_ratio: float = 0.0

    @property
    def total_trades(self) -> int:
        """Number of recorded trades, open ones included."""
        return len(self.trades)


class MarketConditionReport(BaseModel):
    """Figures behind a market condition label."""
    model_config = ConfigDict(frozen=True, extra="forbid")

    condition: MarketCondition
    percent_change: float = 0.0
    atr: float = 0.0
    atr_percent: float = 0.0
    bars_analyzed: int = 0
