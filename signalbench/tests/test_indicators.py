from __future__ import annotations

import math

import pytest

from signalbench.core.errors import IndicatorInputError
from signalbench.indicators import (
    atr,
    bollinger_bands,
    ema,
    macd,
    rsi,
    sma,
    stochastic,
    true_range,
)


def test_sma_uses_trailing_window_and_pads_leading_values() -> None:
    assert sma([1, 2, 3, 4, 5], 3) == [None, None, 2.0, 3.0, 4.0]


def test_sma_period_one_is_identity() -> None:
    values = [1.5, 2.0, 3.25, 0.1, 0.2, 7.7]
    assert sma(values, 1) == values


def test_sma_shorter_than_period_is_all_none() -> None:
    assert sma([1.0, 2.0], 3) == [None, None]
    assert sma([], 3) == []


def test_sma_rejects_non_positive_period() -> None:
    with pytest.raises(IndicatorInputError, match="period"):
        sma([1.0, 2.0], 0)


def test_ema_seeds_with_sma_then_smooths() -> None:
    assert ema([1, 2, 3, 4, 5], 3) == [None, None, 2.0, 3.0, 4.0]


def test_ema_and_sma_agree_on_constant_series() -> None:
    values = [5, 5, 5, 5, 5]
    assert ema(values, 3) == [None, None, 5, 5, 5]
    assert sma(values, 3) == [None, None, 5, 5, 5]


def test_rsi_wilder_smoothing() -> None:
    result = rsi([1, 2, 1, 2, 1], period=2)

    assert result[:2] == [None, None]
    assert result[2:] == pytest.approx([50.0, 75.0, 37.5])


def test_rsi_rising_series_approaches_but_never_exceeds_100() -> None:
    closes = [100 + i for i in range(30)]
    result = rsi(closes, period=14)

    assert len(result) == 30
    assert result[:14] == [None] * 14
    for value in result[14:]:
        assert 0 <= value <= 100
        assert value > 99
    # avg loss is zero, so the 0.001 divisor stands in
    assert result[14] == pytest.approx(100 - 100 / (1 + 1 / 0.001))


def test_rsi_falling_series_is_zero() -> None:
    result = rsi([50 - i for i in range(20)], period=14)
    assert result[14:] == [0.0] * 6


def test_rsi_needs_period_plus_one_values() -> None:
    assert rsi([1, 2, 3], period=3) == [None, None, None]


def test_bollinger_bands_use_population_std_dev() -> None:
    bands = bollinger_bands([1, 2, 3, 4, 5], period=3, multiplier=2)

    assert bands.middle == [None, None, 2.0, 3.0, 4.0]
    width = 2 * math.sqrt(2 / 3)
    assert bands.upper[:2] == [None, None]
    assert bands.lower[:2] == [None, None]
    assert bands.upper[2:] == pytest.approx([2 + width, 3 + width, 4 + width])
    assert bands.lower[2:] == pytest.approx([2 - width, 3 - width, 4 - width])


def test_bollinger_bands_collapse_on_constant_series() -> None:
    bands = bollinger_bands([7.0] * 25)
    assert bands.upper[19:] == bands.middle[19:] == bands.lower[19:] == [7.0] * 6


def test_macd_aligns_signal_line_after_macd_line() -> None:
    result = macd([10.0] * 40)

    assert len(result.macd_line) == len(result.signal_line) == len(result.histogram) == 40
    assert result.macd_line[:25] == [None] * 25
    assert result.macd_line[25:] == [0.0] * 15
    assert result.signal_line[:33] == [None] * 33
    assert result.signal_line[33:] == [0.0] * 7
    assert result.histogram[:33] == [None] * 33
    assert result.histogram[33:] == [0.0] * 7


def test_macd_on_short_input_is_all_none() -> None:
    result = macd([float(i) for i in range(10)])
    assert result.macd_line == result.signal_line == result.histogram == [None] * 10


def test_stochastic_raw_k() -> None:
    high = [10, 12, 11]
    low = [8, 9, 9]
    close = [9, 11, 10]

    result = stochastic(high, low, close, period=2, smooth_k=1, smooth_d=1)

    assert result.k[0] is None
    assert result.k[1:] == pytest.approx([75.0, 100 / 3])
    assert result.d[0] is None
    assert result.d[1:] == pytest.approx([75.0, 100 / 3])


def test_stochastic_zero_range_is_100_and_padding_matches_length() -> None:
    flat = [5.0] * 10
    result = stochastic(flat, flat, flat, period=3, smooth_k=2, smooth_d=2)

    assert len(result.k) == len(result.d) == 10
    assert result.k[:3] == [None] * 3
    assert result.k[3:] == [100.0] * 7
    assert result.d[:4] == [None] * 4
    assert result.d[4:] == [100.0] * 6


def test_stochastic_rejects_mismatched_series() -> None:
    with pytest.raises(IndicatorInputError, match="equal lengths"):
        stochastic([1.0, 2.0], [1.0], [1.0, 2.0])


def test_true_range_uses_previous_close() -> None:
    high = [10, 11, 12, 11]
    low = [9, 10, 10, 9]
    close = [9.5, 10.5, 11, 10]
    assert true_range(high, low, close) == [1.5, 2.0, 2.0]


def test_atr_seeds_with_mean_then_wilder_smooths() -> None:
    high = [10, 11, 12, 11]
    low = [9, 10, 10, 9]
    close = [9.5, 10.5, 11, 10]

    assert atr(high, low, close, period=2) == [None, None, 1.75, 1.875]


def test_atr_short_input_is_all_none() -> None:
    assert atr([2.0, 3.0], [1.0, 2.0], [1.5, 2.5]) == [None, None]
    assert atr([], [], []) == []


def test_atr_rejects_mismatched_series() -> None:
    with pytest.raises(IndicatorInputError):
        atr([1.0, 2.0, 3.0], [1.0, 2.0], [1.0, 2.0, 3.0], period=1)
