"""Base signal strategy contract."""

from __future__ import annotations

from typing import List, Sequence

from signalbench.core.models import PriceBar, SignalValue


class SignalStrategy:
    """
    Minimal deterministic strategy interface.

    Instances are callable, so they can be handed straight to the
    backtest engine as its signal function.
    """

    name: str = "strategy"

    def generate_signals(self, bars: Sequence[PriceBar]) -> List[SignalValue]:
        raise NotImplementedError

    def __call__(self, bars: Sequence[PriceBar]) -> List[SignalValue]:
        return self.generate_signals(bars)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r})"
