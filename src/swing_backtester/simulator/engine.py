"""Swing strategy backtester."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from swing_backtester.config.models import BacktestConfig, SettlementMode
from swing_backtester.data.models import MarketData
from swing_backtester.simulator.metrics import calculate_summary
from swing_backtester.simulator.models import (
    AccountState,
    BacktestResult,
    ExitReason,
    Flat,
    Open,
    Position,
    PositionSlot,
    Summary,
    Trade,
)
from swing_backtester.simulator.time import days_elapsed, whole_days_between
from swing_backtester.strategy.models import Direction, EntrySignal
from swing_backtester.strategy.signals import calculate_stop_loss, check_daily_trend, check_hourly_entry
from swing_backtester.strategy.sizer import Sizer


DEPOSIT_INTERVAL_DAYS = 14
SETTLEMENT_DAYS = 1


@dataclass
class SimulationContext:
    """Mutable account state for a single run."""

    cash: float
    unsettled_cash: float = 0.0
    slot: PositionSlot = field(default_factory=Flat)
    last_deposit: Optional[datetime] = None
    last_exit: Optional[datetime] = None
    trades: list[Trade] = field(default_factory=list)
    equity_curve: list[AccountState] = field(default_factory=list)


def close_trade(position: Position, exit_date: datetime, exit_price: float, reason: ExitReason) -> Trade:
    if position.direction == Direction.LONG:
        move = exit_price - position.entry_price
    else:
        move = position.entry_price - exit_price
    pnl_percent = move / position.entry_price * 100.0 if position.entry_price else 0.0
    return Trade(
        entry_date=position.entry_date,
        exit_date=exit_date,
        ticker=position.ticker,
        direction=position.direction,
        entry_price=position.entry_price,
        exit_price=exit_price,
        shares=position.shares,
        pnl=move * position.shares,
        pnl_percent=pnl_percent,
        exit_reason=reason,
        days_held=position.days_held,
    )


class Backtester:
    def __init__(
        self,
        config: BacktestConfig,
        market_data: MarketData,
        audit_log: Optional[object] = None,
        monitor: Optional[object] = None,
    ) -> None:
        self.config = config
        self.market_data = market_data
        self.sizer = Sizer(config.sizer_config())
        self._audit_log = audit_log
        self._monitor = monitor

    def _log(self, event: str, payload: dict) -> None:
        if self._audit_log is None:
            return
        self._audit_log.log(event, payload)

    def _notify_run_started(self, start: datetime, end: datetime, capital: float) -> None:
        if self._monitor is None:
            return
        self._monitor.run_started(start, end, capital)

    def _notify_run_finished(self, summary: Summary) -> None:
        if self._monitor is None:
            return
        self._monitor.run_finished(summary)

    def _notify_deposit(self, now: datetime, amount: float, cash: float) -> None:
        if self._monitor is None:
            return
        self._monitor.deposit(now, amount, cash)

    def _notify_settlement(self, now: datetime, amount: float) -> None:
        if self._monitor is None:
            return
        self._monitor.settlement(now, amount)

    def _notify_opened(self, position: Position) -> None:
        if self._monitor is None:
            return
        self._monitor.position_opened(position)

    def _notify_closed(self, trade: Trade) -> None:
        if self._monitor is None:
            return
        self._monitor.position_closed(trade)

    def _notify_rejected(self, now: datetime, ticker: str, reason: str) -> None:
        if self._monitor is None:
            return
        self._monitor.entry_rejected(now, ticker, reason)

    def run(self) -> BacktestResult:
        ctx = SimulationContext(cash=self.config.initial_capital)
        timestamps = self.market_data.hourly_timestamps()

        if timestamps:
            self._notify_run_started(timestamps[0], timestamps[-1], ctx.cash)
            self._log(
                "run_start",
                {"start": timestamps[0], "end": timestamps[-1], "initial_capital": ctx.cash},
            )

        for now in timestamps:
            self.step(ctx, now)

        if isinstance(ctx.slot, Open):
            final = timestamps[-1]
            position = ctx.slot.position
            self._exit(ctx, position, final, self.market_data.price_at(position.ticker, final), ExitReason.SIGNAL_EXIT)

        summary = calculate_summary(ctx.trades, ctx.equity_curve)
        self._notify_run_finished(summary)
        self._log("run_complete", {"trades": summary.total_trades, "total_return": summary.total_return})
        return BacktestResult(trades=list(ctx.trades), equity_curve=list(ctx.equity_curve), summary=summary)

    def step(self, ctx: SimulationContext, now: datetime) -> None:
        self._apply_deposit(ctx, now)
        self._settle_cash(ctx, now)
        if isinstance(ctx.slot, Open):
            self._check_exit(ctx, ctx.slot.position, now)
        if isinstance(ctx.slot, Flat) and self._pdt_allows_entry(ctx, now):
            self._check_entry(ctx, now)
        self._record(ctx, now)

    def _apply_deposit(self, ctx: SimulationContext, now: datetime) -> None:
        if not days_elapsed(ctx.last_deposit, now, DEPOSIT_INTERVAL_DAYS):
            return
        ctx.cash += self.config.biweekly_deposit
        ctx.last_deposit = now
        if self.config.biweekly_deposit:
            self._notify_deposit(now, self.config.biweekly_deposit, ctx.cash)
            self._log("deposit", {"time": now, "amount": self.config.biweekly_deposit, "cash": ctx.cash})

    def _settle_cash(self, ctx: SimulationContext, now: datetime) -> None:
        if self.config.cash_settlement != SettlementMode.T1 or ctx.unsettled_cash <= 0:
            return
        if ctx.last_exit is None or whole_days_between(ctx.last_exit, now) < SETTLEMENT_DAYS:
            return
        amount = ctx.unsettled_cash
        ctx.cash += amount
        ctx.unsettled_cash = 0.0
        self._notify_settlement(now, amount)
        self._log("settlement", {"time": now, "amount": amount})

    def _check_exit(self, ctx: SimulationContext, position: Position, now: datetime) -> None:
        price = self.market_data.price_at(position.ticker, now)
        # refreshed before deciding, so a closing trade reports the exit step's count
        days_held = whole_days_between(position.entry_date, now)
        position.days_held = days_held

        reason: Optional[ExitReason] = None
        if position.direction == Direction.LONG and price <= position.stop_loss:
            reason = ExitReason.STOP_LOSS
        elif position.direction == Direction.SHORT and price >= position.stop_loss:
            reason = ExitReason.STOP_LOSS
        elif days_held >= self.config.time_stop_days:
            reason = ExitReason.TIME_STOP

        if reason is not None:
            self._exit(ctx, position, now, price, reason)

    def _exit(
        self,
        ctx: SimulationContext,
        position: Position,
        now: datetime,
        price: float,
        reason: ExitReason,
    ) -> Trade:
        trade = close_trade(position, now, price, reason)
        ctx.trades.append(trade)
        proceeds = trade.shares * price
        if self.config.cash_settlement == SettlementMode.T1:
            ctx.unsettled_cash += proceeds
        else:
            ctx.cash += proceeds
        ctx.last_exit = now
        ctx.slot = Flat()
        self._notify_closed(trade)
        self._log(
            "position_close",
            {
                "time": now,
                "ticker": trade.ticker,
                "direction": trade.direction.value,
                "price": price,
                "shares": trade.shares,
                "pnl": trade.pnl,
                "reason": reason.value,
            },
        )
        return trade

    def _pdt_allows_entry(self, ctx: SimulationContext, now: datetime) -> bool:
        if not self.config.enable_pdt_guard:
            return True
        return days_elapsed(ctx.last_exit, now, 1)

    def entry_signal(self, now: datetime) -> Optional[EntrySignal]:
        """Bull ETF long first, then bear ETF short; the first qualifying signal wins."""
        candidates = (
            (self.config.bull_etf, Direction.LONG),
            (self.config.bear_etf, Direction.SHORT),
        )
        for ticker, direction in candidates:
            trend = check_daily_trend(self.market_data.daily_until(ticker, now))
            wanted = trend.is_bullish if direction == Direction.LONG else trend.is_bearish
            if not wanted:
                continue
            hourly = self.market_data.hourly_until(ticker, now)
            if check_hourly_entry(hourly):
                return EntrySignal(ticker=ticker, direction=direction, entry_price=hourly[-1].close)
        return None

    def _check_entry(self, ctx: SimulationContext, now: datetime) -> None:
        signal = self.entry_signal(now)
        if signal is None:
            return

        daily = self.market_data.daily_until(signal.ticker, now)
        if not daily:
            self._reject(now, signal.ticker, "No daily history")
            return

        stop_loss = calculate_stop_loss(
            daily,
            signal.entry_price,
            signal.direction,
            self.config.stop_loss_multiplier,
        )
        sized = self.sizer.size_for_risk(ctx.cash, signal.entry_price, stop_loss)
        if not sized.allow:
            self._reject(now, signal.ticker, sized.reason)
            return

        position = Position(
            entry_date=now,
            entry_price=signal.entry_price,
            shares=sized.shares,
            direction=signal.direction,
            ticker=signal.ticker,
            stop_loss=stop_loss,
        )
        ctx.cash -= sized.cost
        ctx.slot = Open(position)
        self._notify_opened(position)
        self._log(
            "position_open",
            {
                "time": now,
                "ticker": position.ticker,
                "direction": position.direction.value,
                "price": position.entry_price,
                "shares": position.shares,
                "stop_loss": stop_loss,
            },
        )

    def _reject(self, now: datetime, ticker: str, reason: str) -> None:
        self._notify_rejected(now, ticker, reason)
        self._log("entry_rejected", {"time": now, "ticker": ticker, "reason": reason})

    def _record(self, ctx: SimulationContext, now: datetime) -> None:
        if isinstance(ctx.slot, Open):
            position = ctx.slot.position
            market_value = position.shares * self.market_data.price_at(position.ticker, now)
            snapshot: Optional[Position] = position.snapshot()
        else:
            market_value = 0.0
            snapshot = None
        ctx.equity_curve.append(
            AccountState(
                date=now,
                cash=ctx.cash,
                equity=ctx.cash + ctx.unsettled_cash + market_value,
                unsettled_cash=ctx.unsettled_cash,
                position=snapshot,
            )
        )
