from __future__ import annotations

import json

import pytest

from signalbench.backtest import run_backtest
from signalbench.core.errors import StrategyConfigError, UnknownStrategyError
from signalbench.core.models import PriceBar, SignalValue
from signalbench.indicators import sma
from signalbench.strategy import (
    IndicatorRef,
    PipelineStrategy,
    SignalStrategy,
    available_strategies,
    crossover_signals,
    get_strategy,
    load_strategy,
    parse_pipeline_spec,
    threshold_signals,
)

BUY, SELL, HOLD = SignalValue.BUY, SignalValue.SELL, SignalValue.HOLD


def _bars(closes):
    return [
        PriceBar(timestamp=i, open=close, high=close + 1, low=close - 1, close=close)
        for i, close in enumerate(closes)
    ]


def _v_shape():
    return [100.0 - i for i in range(30)] + [71.0 + i for i in range(1, 31)]


def _rsi_spec(**overrides):
    spec = {
        "name": "rsi_fast",
        "rule": {
            "type": "threshold",
            "source": {"indicator": "rsi", "period": 5},
            "lower": 25,
            "upper": 75,
        },
    }
    spec.update(overrides)
    return spec


def test_crossover_fires_only_on_the_crossing_bar() -> None:
    fast = [None, 1.0, 3.0, 2.0]
    slow = [None, 2.0, 2.0, 2.5]

    assert crossover_signals(fast, slow) == [HOLD, HOLD, BUY, SELL]


def test_crossover_requires_aligned_series() -> None:
    with pytest.raises(StrategyConfigError, match="aligned"):
        crossover_signals([1.0, 2.0], [1.0])


def test_threshold_fires_when_level_is_crossed() -> None:
    series = [None, 50.0, 25.0, 28.0, 75.0, 60.0]

    assert threshold_signals(series, 30, 70) == [HOLD, HOLD, BUY, HOLD, SELL, HOLD]


def test_threshold_rejects_inverted_levels() -> None:
    with pytest.raises(StrategyConfigError):
        threshold_signals([1.0, 2.0], 70, 30)


def test_registry_lists_builtin_strategies() -> None:
    assert available_strategies() == [
        "fast_slow_ma",
        "macd_crossover",
        "rsi_reversal",
        "sma_crossover",
    ]
    for name in available_strategies():
        strategy = get_strategy(name)
        assert isinstance(strategy, SignalStrategy)
        assert strategy.name == name


def test_unknown_strategy_names_the_alternatives() -> None:
    with pytest.raises(UnknownStrategyError, match="Available: fast_slow_ma") as exc_info:
        get_strategy("buy_and_pray")

    assert isinstance(exc_info.value, KeyError)


def test_sma_crossover_buys_once_on_v_shaped_prices() -> None:
    signals = get_strategy("sma_crossover")(_bars(_v_shape()))

    assert len(signals) == 60
    assert signals.count(BUY) == 1
    assert signals.count(SELL) == 0
    assert signals.index(BUY) > 30


def test_builtin_strategies_produce_one_signal_per_bar() -> None:
    bars = _bars(_v_shape())
    for name in available_strategies():
        signals = get_strategy(name)(bars)
        assert len(signals) == len(bars)
        assert set(signals) <= {BUY, SELL, HOLD}


def test_parse_pipeline_spec_from_mapping_json_and_file(tmp_path) -> None:
    from_mapping = parse_pipeline_spec(_rsi_spec())
    from_json = parse_pipeline_spec(json.dumps(_rsi_spec()))
    path = tmp_path / "rsi_fast.json"
    path.write_text(json.dumps(_rsi_spec()), encoding="utf-8")
    from_file = parse_pipeline_spec(path)

    assert from_mapping == from_json == from_file
    assert parse_pipeline_spec(str(path)) == from_mapping
    assert from_mapping.rule.type == "threshold"
    assert from_mapping.rule.source.effective_period == 5


@pytest.mark.parametrize(
    "overrides",
    [
        {"name": ""},
        {"rule": {"type": "crossover", "fast": {"indicator": "vwap"}, "slow": {"indicator": "sma"}}},
        {"rule": {"type": "threshold", "source": {"indicator": "rsi"}, "lower": 70, "upper": 30}},
        {"rule": {"type": "breakout", "source": {"indicator": "close"}}},
        {"extra_field": True},
    ],
)
def test_invalid_pipeline_specs_are_rejected(overrides) -> None:
    with pytest.raises(StrategyConfigError, match="Invalid strategy spec"):
        parse_pipeline_spec(_rsi_spec(**overrides))


def test_malformed_json_and_missing_files_are_rejected(tmp_path) -> None:
    with pytest.raises(StrategyConfigError):
        parse_pipeline_spec("{not json")
    with pytest.raises(StrategyConfigError, match="Cannot read"):
        parse_pipeline_spec(tmp_path / "missing.json")


def test_indicator_ref_defaults_and_compute() -> None:
    bars = _bars([1.0, 2.0, 3.0, 4.0, 5.0])

    assert IndicatorRef(indicator="rsi").effective_period == 14
    assert IndicatorRef(indicator="close").compute(bars) == [1.0, 2.0, 3.0, 4.0, 5.0]
    assert IndicatorRef(indicator="sma", period=2).compute(bars) == sma([1, 2, 3, 4, 5], 2)
    assert IndicatorRef(indicator="bollinger_middle", period=3).compute(bars) == sma(
        [1, 2, 3, 4, 5], 3
    )
    assert len(IndicatorRef(indicator="stochastic_d", period=2).compute(bars)) == 5
    assert len(IndicatorRef(indicator="atr", period=2).compute(bars)) == 5


def test_loaded_strategy_drives_a_backtest() -> None:
    strategy = load_strategy(
        {
            "name": "ema_cross",
            "rule": {
                "type": "crossover",
                "fast": {"indicator": "ema", "period": 5},
                "slow": {"indicator": "sma", "period": 15},
            },
        }
    )

    assert isinstance(strategy, PipelineStrategy)
    result = run_backtest(_bars(_v_shape()), strategy, initial_capital=10000)

    assert len(result.trades) == 1
    assert result.trades[0].is_open
    assert result.trades[0].pnl > 0
    assert result.final_capital > 10000
