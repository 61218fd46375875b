"""Market context analysis."""

from signalbench.analysis.market_condition import analyze_market, classify_market, estimate_atr

__all__ = ["analyze_market", "classify_market", "estimate_atr"]
