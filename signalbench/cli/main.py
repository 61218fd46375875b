"""
signalbench CLI
Command-line interface for running backtests and classifying markets.
"""

import argparse
import logging
import sys
from typing import List, Optional

from signalbench.analysis import analyze_market
from signalbench.backtest import BacktestEngine
from signalbench.core.config import get_settings
from signalbench.core.errors import (
    EmptyPriceHistoryError,
    SignalBenchError,
    SignalLengthMismatchError,
)
from signalbench.core.models import BacktestResult, MarketConditionReport
from signalbench.data import FileDataSource
from signalbench.policies import BacktestOverrides
from signalbench.strategy import available_strategies, get_strategy, load_strategy
from signalbench.strategy.registry import BUILTIN_STRATEGIES, DEFAULT_STRATEGY

logger = logging.getLogger(__name__)


def configure_logging() -> None:
    settings = get_settings().logging
    logging.basicConfig(level=settings.log_level, format=settings.log_format)


def print_result(result: BacktestResult, strategy_name: str) -> None:
    """Print backtest results to console."""
    print("\n" + "=" * 60)
    print("BACKTEST RESULTS")
    print("=" * 60)
    print(f"Strategy: {strategy_name}")
    print(f"Bars: {len(result.equity)}")
    print("-" * 60)
    print(f"Initial Capital: {result.initial_capital:,.2f}")
    print(f"Final Capital: {result.final_capital:,.2f}")
    print(f"Total P&L: {result.total_pnl:+,.2f}")
    print(f"Total Return: {result.percent_return:+.2f}%")
    print(f"Max Drawdown: {result.max_drawdown:.2f}%")
    print(f"Sharpe Ratio: {result.sharpe_ratio:.2f}")
    print("-" * 60)
    print(f"Total Trades: {result.total_trades}")
    print(f"Winning / Losing: {result.winning_trades} / {result.losing_trades}")
    print(f"Win Rate: {result.win_rate:.1f}%")
    print("=" * 60 + "\n")


def print_report(report: MarketConditionReport) -> None:
    """Print a market condition report to console."""
    print(f"Condition: {report.condition.value}")
    print(f"Bars analyzed: {report.bars_analyzed}")
    print(f"Change: {report.percent_change:+.2f}%")
    print(f"ATR: {report.atr:.4f} ({report.atr_percent:.2f}% of last close)")


def run_backtest_command(args) -> int:
    """Run a single backtest."""
    if args.spec:
        strategy = load_strategy(args.spec)
    else:
        strategy = get_strategy(args.strategy)

    bars = FileDataSource(args.data).get_bars()
    overrides = BacktestOverrides(
        commission_percent=args.commission,
        slippage_percent=args.slippage,
        position_sizing=args.sizing,
    )
    engine = BacktestEngine(args.capital, overrides)
    result = engine.run(bars, strategy)

    if args.json:
        print(result.model_dump_json(indent=2))
    else:
        print_result(result, strategy.name)
    return 0


def classify_command(args) -> int:
    """Classify the market condition of a data file."""
    bars = FileDataSource(args.data).get_bars()
    report = analyze_market(bars, args.lookback)

    if args.json:
        print(report.model_dump_json(indent=2))
    else:
        print_report(report)
    return 0


def list_strategies_command(args) -> int:
    """List builtin strategies."""
    for name in available_strategies():
        print(f"{name:<16} {BUILTIN_STRATEGIES[name]().description}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="signalbench",
        description="Signal strategy backtester",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # Backtest command
    bt_parser = subparsers.add_parser("backtest", help="Run single backtest")
    bt_parser.add_argument("--data", required=True, help="CSV or parquet OHLCV file")
    source = bt_parser.add_mutually_exclusive_group()
    source.add_argument("--strategy", default=DEFAULT_STRATEGY, help="Builtin strategy name")
    source.add_argument("--spec", help="JSON pipeline spec file")
    bt_parser.add_argument("--capital", type=float, default=None, help="Initial capital")
    bt_parser.add_argument("--commission", type=float, default=None, help="Commission percent")
    bt_parser.add_argument("--slippage", type=float, default=None, help="Slippage percent")
    bt_parser.add_argument("--sizing", type=float, default=None, help="Fraction of cash per trade")
    bt_parser.add_argument("--json", action="store_true", help="Print the result as JSON")
    bt_parser.set_defaults(func=run_backtest_command)

    # Classify command
    mc_parser = subparsers.add_parser("classify", help="Classify market condition")
    mc_parser.add_argument("--data", required=True, help="CSV or parquet OHLCV file")
    mc_parser.add_argument("--lookback", type=int, default=0, help="Trailing bars (0 = all)")
    mc_parser.add_argument("--json", action="store_true", help="Print the report as JSON")
    mc_parser.set_defaults(func=classify_command)

    # Strategies command
    ls_parser = subparsers.add_parser("strategies", help="List builtin strategies")
    ls_parser.set_defaults(func=list_strategies_command)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    configure_logging()
    try:
        return args.func(args)
    except EmptyPriceHistoryError as exc:
        print(f"No data: {exc}", file=sys.stderr)
    except SignalLengthMismatchError as exc:
        print(f"Bad input shape: {exc}", file=sys.stderr)
    except SignalBenchError as exc:
        print(f"Error: {exc}", file=sys.stderr)
    return 1


if __name__ == "__main__":
    sys.exit(main())
