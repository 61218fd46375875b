"""Declarative indicator-pipeline strategies."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated, Any, Callable, Dict, List, Literal, Mapping, Optional, Sequence, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from signalbench.core.errors import StrategyConfigError
from signalbench.core.models import IndicatorSeries, PriceBar, SignalValue
from signalbench.indicators import atr, bollinger_bands, ema, macd, price_columns, rsi, sma, stochastic
from signalbench.strategy.base import SignalStrategy
from signalbench.strategy.rules import crossover_signals, threshold_signals

IndicatorName = Literal[
    "close",
    "sma",
    "ema",
    "rsi",
    "macd",
    "macd_signal",
    "macd_histogram",
    "bollinger_upper",
    "bollinger_middle",
    "bollinger_lower",
    "stochastic_k",
    "stochastic_d",
    "atr",
]

DEFAULT_PERIODS: Dict[str, int] = {
    "sma": 20,
    "ema": 20,
    "rsi": 14,
    "bollinger_upper": 20,
    "bollinger_middle": 20,
    "bollinger_lower": 20,
    "stochastic_k": 14,
    "stochastic_d": 14,
    "atr": 14,
}


class IndicatorRef(BaseModel):
    """One indicator series computed from the bars."""
    model_config = ConfigDict(frozen=True, extra="forbid")

    indicator: IndicatorName
    period: Optional[int] = Field(default=None, ge=1)
    fast_period: int = Field(default=12, ge=1)
    slow_period: int = Field(default=26, ge=1)
    signal_period: int = Field(default=9, ge=1)
    multiplier: float = Field(default=2.0, gt=0)
    smooth_k: int = Field(default=3, ge=1)
    smooth_d: int = Field(default=3, ge=1)

    @property
    def effective_period(self) -> int:
        if self.period is not None:
            return self.period
        return DEFAULT_PERIODS.get(self.indicator, 1)

    def compute(self, bars: Sequence[PriceBar]) -> IndicatorSeries:
        return _EVALUATORS[self.indicator](self, bars)


def _closes(bars: Sequence[PriceBar]) -> List[float]:
    return [bar.close for bar in bars]


def _macd(ref: IndicatorRef, bars: Sequence[PriceBar]):
    return macd(_closes(bars), ref.fast_period, ref.slow_period, ref.signal_period)


def _bollinger(ref: IndicatorRef, bars: Sequence[PriceBar]):
    return bollinger_bands(_closes(bars), ref.effective_period, ref.multiplier)


def _stochastic(ref: IndicatorRef, bars: Sequence[PriceBar]):
    return stochastic(*price_columns(bars), ref.effective_period, ref.smooth_k, ref.smooth_d)


_EVALUATORS: Dict[str, Callable[[IndicatorRef, Sequence[PriceBar]], IndicatorSeries]] = {
    "close": lambda ref, bars: _closes(bars),
    "sma": lambda ref, bars: sma(_closes(bars), ref.effective_period),
    "ema": lambda ref, bars: ema(_closes(bars), ref.effective_period),
    "rsi": lambda ref, bars: rsi(_closes(bars), ref.effective_period),
    "macd": lambda ref, bars: _macd(ref, bars).macd_line,
    "macd_signal": lambda ref, bars: _macd(ref, bars).signal_line,
    "macd_histogram": lambda ref, bars: _macd(ref, bars).histogram,
    "bollinger_upper": lambda ref, bars: _bollinger(ref, bars).upper,
    "bollinger_middle": lambda ref, bars: _bollinger(ref, bars).middle,
    "bollinger_lower": lambda ref, bars: _bollinger(ref, bars).lower,
    "stochastic_k": lambda ref, bars: _stochastic(ref, bars).k,
    "stochastic_d": lambda ref, bars: _stochastic(ref, bars).d,
    "atr": lambda ref, bars: atr(*price_columns(bars), ref.effective_period),
}


class CrossoverRule(BaseModel):
    """Buy when `fast` crosses above `slow`, sell when it crosses below."""
    model_config = ConfigDict(frozen=True, extra="forbid")

    type: Literal["crossover"] = "crossover"
    fast: IndicatorRef
    slow: IndicatorRef

    def evaluate(self, bars: Sequence[PriceBar]) -> List[SignalValue]:
        return crossover_signals(self.fast.compute(bars), self.slow.compute(bars))


class ThresholdRule(BaseModel):
    """Buy on a drop below `lower`, sell on a rise above `upper`."""
    model_config = ConfigDict(frozen=True, extra="forbid")

    type: Literal["threshold"] = "threshold"
    source: IndicatorRef
    lower: float
    upper: float

    @model_validator(mode="after")
    def check_levels(self) -> "ThresholdRule":
        if self.lower >= self.upper:
            raise ValueError(f"lower ({self.lower}) must be below upper ({self.upper})")
        return self

    def evaluate(self, bars: Sequence[PriceBar]) -> List[SignalValue]:
        return threshold_signals(self.source.compute(bars), self.lower, self.upper)


Rule = Annotated[Union[CrossoverRule, ThresholdRule], Field(discriminator="type")]


class PipelineSpec(BaseModel):
    """Named strategy built from one indicator rule."""
    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str = Field(min_length=1)
    description: str = ""
    rule: Rule


class PipelineStrategy(SignalStrategy):
    """Signal function that evaluates a PipelineSpec."""

    def __init__(self, spec: PipelineSpec) -> None:
        self.spec = spec
        self.name = spec.name

    def generate_signals(self, bars: Sequence[PriceBar]) -> List[SignalValue]:
        return self.spec.rule.evaluate(bars)


def parse_pipeline_spec(source: Union[PipelineSpec, Mapping[str, Any], str, Path]) -> PipelineSpec:
    """
    Build a PipelineSpec from a mapping, a JSON document or a JSON file.

    Raises:
        StrategyConfigError: The source cannot be read or fails validation
    """
    if isinstance(source, PipelineSpec):
        return source

    try:
        if isinstance(source, Mapping):
            return PipelineSpec.model_validate(dict(source))
        if isinstance(source, str) and source.lstrip().startswith("{"):
            return PipelineSpec.model_validate_json(source)
        return PipelineSpec.model_validate_json(Path(source).read_text(encoding="utf-8"))
    except ValidationError as exc:
        raise StrategyConfigError(f"Invalid strategy spec: {exc}") from exc
    except OSError as exc:
        raise StrategyConfigError(f"Cannot read strategy spec {source!s}: {exc}") from exc
