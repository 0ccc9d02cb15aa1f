"""Routes simulation events to a notifier."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from swing_backtester.monitoring.notifier import Notifier
from swing_backtester.simulator.models import Position, Summary, Trade


@dataclass
class Monitor:
    notifier: Notifier

    def run_started(self, start: datetime, end: datetime, capital: float) -> None:
        self.notifier.notify(
            "RUN_START",
            f"{start.isoformat()} -> {end.isoformat()}, initial capital ${capital:.2f}",
        )

    def deposit(self, when: datetime, amount: float, cash: float) -> None:
        self.notifier.notify("DEPOSIT", f"{when.isoformat()}: +${amount:.2f}, cash ${cash:.2f}")

    def settlement(self, when: datetime, amount: float) -> None:
        self.notifier.notify("SETTLE", f"{when.isoformat()}: ${amount:.2f} settled")

    def position_opened(self, position: Position) -> None:
        self.notifier.notify(
            "OPEN",
            f"{position.entry_date.isoformat()}: {position.direction.value} {position.shares:.4f} "
            f"{position.ticker} @ ${position.entry_price:.2f}, SL: ${position.stop_loss:.2f}",
        )

    def position_closed(self, trade: Trade) -> None:
        self.notifier.notify(
            "CLOSE",
            f"{trade.exit_date.isoformat()}: {trade.direction.value} {trade.shares:.4f} {trade.ticker} "
            f"@ ${trade.exit_price:.2f}, PnL: ${trade.pnl:.2f} ({trade.pnl_percent:.2f}%), "
            f"Reason: {trade.exit_reason.value}",
        )

    def entry_rejected(self, when: datetime, ticker: str, reason: str) -> None:
        self.notifier.notify("ENTRY_REJECTED", f"{when.isoformat()}: {ticker} {reason}")

    def run_finished(self, summary: Summary) -> None:
        self.notifier.notify(
            "RUN_END",
            f"{summary.total_trades} trades, return ${summary.total_return:.2f} "
            f"({summary.total_return_percent:.2f}%)",
        )
