"""
Technical indicator library.

Every function returns a series aligned 1:1 with its input. Leading
entries that cannot be computed yet are None; callers must treat None
as "not yet computable", never as zero.
"""

from signalbench.indicators._series import price_columns
from signalbench.indicators.moving_average import ema, sma
from signalbench.indicators.oscillators import MACD, Stochastic, macd, rsi, stochastic
from signalbench.indicators.volatility import BollingerBands, atr, bollinger_bands, true_range

__all__ = [
    "sma",
    "ema",
    "rsi",
    "macd",
    "stochastic",
    "bollinger_bands",
    "atr",
    "true_range",
    "price_columns",
    "MACD",
    "Stochastic",
    "BollingerBands",
]
