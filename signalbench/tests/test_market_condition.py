from __future__ import annotations

import pytest

from signalbench.analysis import analyze_market, classify_market, estimate_atr
from signalbench.core.config import ClassifierSettings
from signalbench.core.models import MarketCondition, PriceBar


def _bars(closes, spread):
    return [
        PriceBar(timestamp=i, open=close, high=close + spread, low=close - spread, close=close)
        for i, close in enumerate(closes)
    ]


def _ramp(start: float, end: float, count: int = 20):
    step = (end - start) / (count - 1)
    return [start + step * i for i in range(count)]


def test_steady_rise_with_tight_ranges_is_bullish() -> None:
    report = analyze_market(_bars(_ramp(100, 105), spread=0.1))

    assert report.condition == MarketCondition.BULLISH
    assert report.percent_change == pytest.approx(5.0)
    assert report.atr_percent < 2.5
    assert report.bars_analyzed == 20


def test_wide_ranges_override_the_trend() -> None:
    report = analyze_market(_bars(_ramp(100, 105), spread=5))

    assert report.condition == MarketCondition.VOLATILE
    assert report.atr == pytest.approx(10.0)
    assert report.atr_percent == pytest.approx(10 / 105 * 100)


def test_steady_fall_is_bearish() -> None:
    assert classify_market(_bars(_ramp(100, 95), spread=0.1)) == MarketCondition.BEARISH


def test_small_move_is_neutral() -> None:
    assert classify_market(_bars(_ramp(100, 101), spread=0.1)) == MarketCondition.NEUTRAL


def test_empty_history_is_neutral() -> None:
    report = analyze_market([])

    assert report.condition == MarketCondition.NEUTRAL
    assert report.bars_analyzed == 0
    assert report.atr == 0


def test_lookback_limits_the_window() -> None:
    # drop from 120 to 100, then a gentle climb back above 105
    closes = [120.0] + _ramp(100, 105, 19)
    bars = _bars(closes, spread=0.1)

    assert classify_market(bars) == MarketCondition.BEARISH
    report = analyze_market(bars, lookback=19)
    assert report.condition == MarketCondition.BULLISH
    assert report.bars_analyzed == 19
    assert analyze_market(bars, lookback=500).bars_analyzed == 20


def test_zero_first_close_reports_no_change() -> None:
    report = analyze_market(_bars([0.0, 0.0], spread=0.0))

    assert report.percent_change == 0
    assert report.atr_percent == 0
    assert report.condition == MarketCondition.NEUTRAL


def test_custom_thresholds() -> None:
    bars = _bars(_ramp(100, 101), spread=0.1)
    settings = ClassifierSettings(trend_percent=0.5)

    assert classify_market(bars, settings=settings) == MarketCondition.BULLISH


def test_estimate_atr_uses_last_period_true_ranges() -> None:
    bars = _bars([10.0] * 10 + [10.0] * 5, spread=0.5)
    wide = [
        PriceBar(timestamp=100 + i, open=10.0, high=12.0, low=8.0, close=10.0)
        for i in range(3)
    ]

    assert estimate_atr(bars + wide, period=3) == pytest.approx(4.0)
    assert estimate_atr(bars + wide, period=6) == pytest.approx(2.5)


def test_estimate_atr_with_short_history() -> None:
    single = _bars([10.0], spread=1.0)
    pair = _bars([10.0, 11.0], spread=1.0)

    assert estimate_atr([]) == 0.0
    assert estimate_atr(single) == pytest.approx(2.0)
    assert estimate_atr(pair, period=14) == pytest.approx(2.0)
