"""
Market Condition Classifier
Labels a price window as bullish, bearish, neutral or volatile.
"""

import logging
from typing import Optional, Sequence

from signalbench.core.config import ClassifierSettings, get_settings
from signalbench.core.models import MarketCondition, MarketConditionReport, PriceBar
from signalbench.indicators import price_columns, true_range

logger = logging.getLogger(__name__)


def _percent_of(numerator: float, denominator: float) -> float:
    if denominator == 0:
        return 0.0
    return numerator / denominator * 100


def _window(bars: Sequence[PriceBar], lookback: int) -> Sequence[PriceBar]:
    if 0 < lookback < len(bars):
        return bars[-lookback:]
    return bars


def estimate_atr(bars: Sequence[PriceBar], period: int = 14) -> float:
    """
    Average true range of the most recent `period` bars.

    With fewer than period+1 bars this degrades to the mean of every
    available true range (high - low for a single bar, 0 for none).
    """
    if not bars:
        return 0.0
    if len(bars) == 1:
        return bars[0].high - bars[0].low

    ranges = true_range(*price_columns(bars))
    if len(bars) >= period + 1:
        ranges = ranges[-period:]
    return sum(ranges) / len(ranges)


def analyze_market(
    bars: Sequence[PriceBar],
    lookback: int = 0,
    settings: Optional[ClassifierSettings] = None,
) -> MarketConditionReport:
    """
    Classify recent price action and return the figures behind the label.

    Args:
        bars: Price history, oldest first
        lookback: Number of trailing bars to analyze (<= 0 means all)
        settings: Thresholds (settings defaults when None)

    Returns:
        MarketConditionReport. Volatility is checked first, so a wide
        ATR wins over any trend.
    """
    settings = settings or get_settings().classifier
    if not bars:
        return MarketConditionReport(condition=MarketCondition.NEUTRAL)

    window = _window(bars, lookback)
    first_close = window[0].close
    last_close = window[-1].close

    percent_change = _percent_of(last_close - first_close, first_close)
    atr = estimate_atr(window, settings.atr_period)
    atr_percent = _percent_of(atr, last_close)

    if atr_percent > settings.volatile_atr_percent:
        condition = MarketCondition.VOLATILE
    elif percent_change > settings.trend_percent:
        condition = MarketCondition.BULLISH
    elif percent_change < -settings.trend_percent:
        condition = MarketCondition.BEARISH
    else:
        condition = MarketCondition.NEUTRAL

    logger.debug(
        f"Market condition {condition.value}: change={percent_change:.2f}% "
        f"atr={atr_percent:.2f}% bars={len(window)}"
    )
    return MarketConditionReport(
        condition=condition,
        percent_change=percent_change,
        atr=atr,
        atr_percent=atr_percent,
        bars_analyzed=len(window),
    )


def classify_market(
    bars: Sequence[PriceBar],
    lookback: int = 0,
    settings: Optional[ClassifierSettings] = None,
) -> MarketCondition:
    """Return only the market condition label."""
    return analyze_market(bars, lookback, settings).condition
