"""Trade blotter, summary document and console report."""

from __future__ import annotations

import csv
import json
from dataclasses import asdict
from pathlib import Path
from typing import Any

from swing_backtester.simulator.models import AccountState, BacktestResult, Trade


BLOTTER_HEADER = [
    "Entry Date",
    "Exit Date",
    "Ticker",
    "Direction",
    "Entry Price",
    "Exit Price",
    "Shares",
    "PnL",
    "PnL %",
    "Days Held",
    "Exit Reason",
]


def _blotter_row(trade: Trade) -> list[str]:
    return [
        trade.entry_date.isoformat(),
        trade.exit_date.isoformat(),
        trade.ticker,
        trade.direction.value,
        f"{trade.entry_price:.2f}",
        f"{trade.exit_price:.2f}",
        f"{trade.shares:.4f}",
        f"{trade.pnl:.2f}",
        f"{trade.pnl_percent:.2f}",
        str(trade.days_held),
        trade.exit_reason.value,
    ]


def write_blotter(result: BacktestResult, path: str | Path) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8", newline="") as handle:
        writer = csv.writer(handle)
        writer.writerow(BLOTTER_HEADER)
        for trade in result.trades:
            writer.writerow(_blotter_row(trade))
    return path


def _serialize_trade(trade: Trade) -> dict[str, Any]:
    return {
        "entryDate": trade.entry_date.isoformat(),
        "exitDate": trade.exit_date.isoformat(),
        "ticker": trade.ticker,
        "direction": trade.direction.value,
        "entryPrice": trade.entry_price,
        "exitPrice": trade.exit_price,
        "shares": trade.shares,
        "pnl": trade.pnl,
        "pnlPercent": trade.pnl_percent,
        "daysHeld": trade.days_held,
        "exitReason": trade.exit_reason.value,
    }


def _serialize_state(state: AccountState) -> dict[str, Any]:
    position = state.position
    return {
        "date": state.date.isoformat(),
        "cash": state.cash,
        "equity": state.equity,
        "unsettledCash": state.unsettled_cash,
        "position": None
        if position is None
        else {
            "ticker": position.ticker,
            "direction": position.direction.value,
            "shares": position.shares,
            "entryPrice": position.entry_price,
            "stopLoss": position.stop_loss,
            "daysHeld": position.days_held,
        },
    }


def _camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.capitalize() for part in rest)


def serialize_result(result: BacktestResult) -> dict[str, Any]:
    return {
        "summary": {_camel(key): value for key, value in asdict(result.summary).items()},
        "trades": [_serialize_trade(trade) for trade in result.trades],
        "equityCurve": [_serialize_state(state) for state in result.equity_curve],
    }


def write_summary(result: BacktestResult, path: str | Path) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(serialize_result(result), indent=2), encoding="utf-8")
    return path


def format_summary(result: BacktestResult) -> str:
    s = result.summary
    rule = "=" * 60
    lines = [
        rule,
        "BACKTEST SUMMARY",
        rule,
        f"Total Trades:        {s.total_trades}",
        f"Winning Trades:      {s.winning_trades} ({s.win_rate:.2f}%)",
        f"Losing Trades:       {s.losing_trades}",
        f"Average Win:         ${s.average_win:.2f}",
        f"Average Loss:        ${s.average_loss:.2f}",
        f"Profit Factor:       {s.profit_factor:.2f}",
        f"Average Days Held:   {s.average_days_held:.1f}",
        f"Total Return:        ${s.total_return:.2f} ({s.total_return_percent:.2f}%)",
        f"Max Drawdown:        ${s.max_drawdown:.2f} ({s.max_drawdown_percent:.2f}%)",
        f"Sharpe Ratio:        {s.sharpe_ratio:.2f}",
        rule,
    ]
    return "\n".join(lines)
