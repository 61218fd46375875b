"""Backtest cost/sizing options, defaults and override merge rules."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Optional

from signalbench.core.config import BacktestSettings, get_settings
from signalbench.core.errors import BacktestConfigError


@dataclass(frozen=True)
class BacktestOptions:
    commission_percent: float = 0.1
    slippage_percent: float = 0.05
    position_sizing: float = 1.0
    periods_per_year: int = 252

    def __post_init__(self) -> None:
        if self.commission_percent < 0:
            raise BacktestConfigError(
                f"commission_percent must be >= 0, got {self.commission_percent}"
            )
        if self.slippage_percent < 0:
            raise BacktestConfigError(
                f"slippage_percent must be >= 0, got {self.slippage_percent}"
            )
        if not 0 < self.position_sizing <= 1:
            raise BacktestConfigError(
                f"position_sizing must be in (0, 1], got {self.position_sizing}"
            )
        if self.periods_per_year <= 0:
            raise BacktestConfigError(
                f"periods_per_year must be > 0, got {self.periods_per_year}"
            )


@dataclass(frozen=True)
class BacktestOverrides:
    commission_percent: Optional[float] = None
    slippage_percent: Optional[float] = None
    position_sizing: Optional[float] = None
    periods_per_year: Optional[int] = None


def default_backtest_options(settings: BacktestSettings | None = None) -> BacktestOptions:
    settings = settings or get_settings().backtest
    return BacktestOptions(
        commission_percent=settings.commission_percent,
        slippage_percent=settings.slippage_percent,
        position_sizing=settings.position_sizing,
        periods_per_year=settings.periods_per_year,
    )


def merge_backtest_overrides(
    defaults: BacktestOptions, overrides: BacktestOverrides | None
) -> BacktestOptions:
    """Replace only the fields the override sets; an explicit 0 is kept."""
    if overrides is None:
        return defaults
    return replace(
        defaults,
        commission_percent=(
            defaults.commission_percent
            if overrides.commission_percent is None
            else overrides.commission_percent
        ),
        slippage_percent=(
            defaults.slippage_percent
            if overrides.slippage_percent is None
            else overrides.slippage_percent
        ),
        position_sizing=(
            defaults.position_sizing
            if overrides.position_sizing is None
            else overrides.position_sizing
        ),
        periods_per_year=(
            defaults.periods_per_year
            if overrides.periods_per_year is None
            else overrides.periods_per_year
        ),
    )
