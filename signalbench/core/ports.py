"""Pure port definitions for signalbench adapters."""

from __future__ import annotations

from typing import Protocol, Sequence

from .models import PriceBar


class SignalFunction(Protocol):
    def __call__(self, bars: Sequence[PriceBar]) -> Sequence[int]:
        """Return one signal (1 buy, -1 sell, 0 hold) per bar."""


class DataSource(Protocol):
    def get_bars(self) -> Sequence[PriceBar]:
        """Return read-only bars sorted by timestamp."""
