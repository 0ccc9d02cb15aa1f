from __future__ import annotations

import argparse
from pathlib import Path

from swing_backtester.config import load_config
from swing_backtester.data import DAILY_SUFFIX, HOURLY_SUFFIX, load_market_data
from swing_backtester.monitoring import AuditLog, LogNotifier, Monitor
from swing_backtester.reporting import format_summary, write_blotter, write_summary
from swing_backtester.runtime import create_run_context
from swing_backtester.simulator import Backtester

PER_TRADE_EVENTS = frozenset({"OPEN", "CLOSE", "DEPOSIT", "SETTLE", "ENTRY_REJECTED"})


def main() -> None:
    parser = argparse.ArgumentParser(description="Run the swing strategy backtest")
    parser.add_argument("--config", required=True)
    parser.add_argument("--data-dir", help="Overrides paths.data_dir from the config")
    parser.add_argument("--output-dir", help="Overrides paths.output_dir from the config")
    parser.add_argument("--quiet", action="store_true", help="Suppress per-trade console lines")
    args = parser.parse_args()

    config = load_config(args.config)
    context = create_run_context(
        args.config,
        config.run_id_prefix,
        data_dir=args.data_dir or config.paths.data_dir,
        output_dir=args.output_dir or config.paths.output_dir,
    )
    notifier = LogNotifier(muted=PER_TRADE_EVENTS if args.quiet else frozenset())

    market_data = load_market_data(
        config.backtest.tickers,
        context.data_dir,
        timezone=config.backtest.timezone,
        notifier=notifier,
    )
    if not market_data.daily or not market_data.hourly:
        expected = "\n".join(
            f"  - {context.data_dir / f'{ticker}{suffix}'}"
            for ticker in config.backtest.tickers
            for suffix in (DAILY_SUFFIX, HOURLY_SUFFIX)
        )
        raise SystemExit(
            "No market data loaded. Expected files:\n"
            f"{expected}\n"
            "CSV format: timestamp,open,high,low,close,volume"
        )

    context.write()
    audit = AuditLog(context.audit_path, run_id=context.run_id, config_hash=context.config_hash)
    result = Backtester(config.backtest, market_data, audit_log=audit, monitor=Monitor(notifier)).run()

    blotter_path = write_blotter(result, context.output_dir / "blotter.csv")
    summary_path = write_summary(result, context.output_dir / "summary.json")

    print(format_summary(result))
    print(f"Run {context.run_id}: wrote {blotter_path}, {summary_path} and {audit.records_written} audit records")


if __name__ == "__main__":
    main()
