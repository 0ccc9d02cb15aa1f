"""Simulation engine and performance summary."""

from swing_backtester.simulator.engine import Backtester, SimulationContext, close_trade
from swing_backtester.simulator.metrics import calculate_summary, max_drawdown, sharpe_ratio
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
from swing_backtester.simulator.time import whole_days_between

__all__ = [
    "AccountState",
    "BacktestResult",
    "Backtester",
    "ExitReason",
    "Flat",
    "Open",
    "Position",
    "PositionSlot",
    "SimulationContext",
    "Summary",
    "Trade",
    "calculate_summary",
    "close_trade",
    "max_drawdown",
    "sharpe_ratio",
    "whole_days_between",
]
