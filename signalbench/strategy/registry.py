"""Builtin strategy registry."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Callable, Dict, List, Mapping, Union

from signalbench.core.errors import UnknownStrategyError
from signalbench.strategy.pipeline import PipelineSpec, PipelineStrategy, parse_pipeline_spec

logger = logging.getLogger(__name__)


def sma_crossover_spec(fast_period: int = 10, slow_period: int = 20) -> PipelineSpec:
    return parse_pipeline_spec(
        {
            "name": "sma_crossover",
            "description": f"SMA({fast_period}) / SMA({slow_period}) crossover",
            "rule": {
                "type": "crossover",
                "fast": {"indicator": "sma", "period": fast_period},
                "slow": {"indicator": "sma", "period": slow_period},
            },
        }
    )


def fast_slow_ma_spec() -> PipelineSpec:
    spec = sma_crossover_spec(12, 26)
    return spec.model_copy(update={"name": "fast_slow_ma"})


def rsi_reversal_spec(period: int = 14, oversold: float = 30, overbought: float = 70) -> PipelineSpec:
    return parse_pipeline_spec(
        {
            "name": "rsi_reversal",
            "description": f"RSI({period}) crossing {oversold}/{overbought}",
            "rule": {
                "type": "threshold",
                "source": {"indicator": "rsi", "period": period},
                "lower": oversold,
                "upper": overbought,
            },
        }
    )


def macd_crossover_spec(fast_period: int = 12, slow_period: int = 26, signal_period: int = 9) -> PipelineSpec:
    periods = {
        "fast_period": fast_period,
        "slow_period": slow_period,
        "signal_period": signal_period,
    }
    return parse_pipeline_spec(
        {
            "name": "macd_crossover",
            "description": "MACD line crossing its signal line",
            "rule": {
                "type": "crossover",
                "fast": {"indicator": "macd", **periods},
                "slow": {"indicator": "macd_signal", **periods},
            },
        }
    )


BUILTIN_STRATEGIES: Dict[str, Callable[[], PipelineSpec]] = {
    "sma_crossover": sma_crossover_spec,
    "fast_slow_ma": fast_slow_ma_spec,
    "rsi_reversal": rsi_reversal_spec,
    "macd_crossover": macd_crossover_spec,
}

DEFAULT_STRATEGY = "sma_crossover"


def available_strategies() -> List[str]:
    return sorted(BUILTIN_STRATEGIES)


def get_strategy(name: str = DEFAULT_STRATEGY) -> PipelineStrategy:
    """
    Build a registered strategy by name.

    Raises:
        UnknownStrategyError: No builtin strategy has that name
    """
    try:
        factory = BUILTIN_STRATEGIES[name]
    except KeyError:
        raise UnknownStrategyError(
            f"Unknown strategy '{name}'. Available: {', '.join(available_strategies())}"
        ) from None
    return PipelineStrategy(factory())


def load_strategy(source: Union[PipelineSpec, Mapping[str, Any], str, Path]) -> PipelineStrategy:
    """Build a strategy from a declarative pipeline spec."""
    spec = parse_pipeline_spec(source)
    logger.info(f"Loaded strategy spec '{spec.name}' ({spec.rule.type})")
    return PipelineStrategy(spec)
