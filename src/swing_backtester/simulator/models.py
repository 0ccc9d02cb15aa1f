"""Simulation data structures."""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime
from enum import Enum
from typing import Optional, Union

from swing_backtester.strategy.models import Direction


class ExitReason(str, Enum):
    STOP_LOSS = "STOP_LOSS"
    TIME_STOP = "TIME_STOP"
    SIGNAL_EXIT = "SIGNAL_EXIT"


@dataclass
class Position:
    entry_date: datetime
    entry_price: float
    shares: float
    direction: Direction
    ticker: str
    stop_loss: float
    days_held: int = 0

    def snapshot(self) -> "Position":
        return replace(self)


@dataclass(frozen=True)
class Flat:
    pass


@dataclass(frozen=True)
class Open:
    position: Position


PositionSlot = Union[Flat, Open]


@dataclass(frozen=True)
class Trade:
    entry_date: datetime
    exit_date: datetime
    ticker: str
    direction: Direction
    entry_price: float
    exit_price: float
    shares: float
    pnl: float
    pnl_percent: float
    exit_reason: ExitReason
    days_held: int


@dataclass(frozen=True)
class AccountState:
    date: datetime
    cash: float
    equity: float
    unsettled_cash: float
    position: Optional[Position] = None


@dataclass(frozen=True)
class Summary:
    total_trades: int
    winning_trades: int
    losing_trades: int
    win_rate: float
    total_return: float
    total_return_percent: float
    max_drawdown: float
    max_drawdown_percent: float
    sharpe_ratio: float
    average_win: float
    average_loss: float
    profit_factor: float
    average_days_held: float


@dataclass(frozen=True)
class BacktestResult:
    trades: list[Trade]
    equity_curve: list[AccountState]
    summary: Summary
