"""Signal strategies: base contract, rules, pipelines and registry."""

from signalbench.strategy.base import SignalStrategy
from signalbench.strategy.pipeline import (
    CrossoverRule,
    IndicatorRef,
    PipelineSpec,
    PipelineStrategy,
    ThresholdRule,
    parse_pipeline_spec,
)
from signalbench.strategy.registry import available_strategies, get_strategy, load_strategy
from signalbench.strategy.rules import crossover_signals, threshold_signals

__all__ = [
    "SignalStrategy",
    "IndicatorRef",
    "CrossoverRule",
    "ThresholdRule",
    "PipelineSpec",
    "PipelineStrategy",
    "parse_pipeline_spec",
    "crossover_signals",
    "threshold_signals",
    "available_strategies",
    "get_strategy",
    "load_strategy",
]
