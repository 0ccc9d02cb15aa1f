"""Performance summary derived from the trade log and equity curve."""

from __future__ import annotations

import math
from typing import Sequence

from swing_backtester.simulator.models import AccountState, Summary, Trade


TRADING_DAYS_PER_YEAR = 252


def _mean(values: Sequence[float]) -> float:
    if not values:
        return 0.0
    return sum(values) / len(values)


def max_drawdown(equities: Sequence[float]) -> tuple[float, float]:
    """Largest peak-to-trough decline, absolute and as a percent of that peak."""
    if not equities:
        return 0.0, 0.0
    peak = equities[0]
    worst = 0.0
    worst_pct = 0.0
    for equity in equities:
        if equity > peak:
            peak = equity
        drawdown = peak - equity
        if drawdown > worst:
            worst = drawdown
            worst_pct = drawdown / peak * 100.0 if peak != 0 else 0.0
    return worst, worst_pct


def step_returns(equities: Sequence[float]) -> list[float]:
    returns: list[float] = []
    for prev, current in zip(equities, equities[1:]):
        returns.append((current - prev) / prev if prev != 0 else 0.0)
    return returns


def sharpe_ratio(equities: Sequence[float]) -> float:
    if len(equities) < 2:
        return 0.0
    returns = step_returns(equities)
    mean = _mean(returns)
    variance = _mean([(value - mean) ** 2 for value in returns])
    stddev = math.sqrt(variance)
    if stddev == 0:
        return 0.0
    return mean / stddev * math.sqrt(TRADING_DAYS_PER_YEAR)


def calculate_summary(trades: Sequence[Trade], equity_curve: Sequence[AccountState]) -> Summary:
    winners = [trade.pnl for trade in trades if trade.pnl > 0]
    losers = [trade.pnl for trade in trades if trade.pnl < 0]
    equities = [state.equity for state in equity_curve]

    total_return = equities[-1] - equities[0] if equities else 0.0
    if equities and equities[0] != 0:
        total_return_percent = total_return / equities[0] * 100.0
    else:
        total_return_percent = 0.0

    average_win = _mean(winners)
    average_loss = _mean(losers)
    # zero when nothing was lost, even if every trade won
    if losers and average_loss != 0:
        profit_factor = abs(average_win * len(winners) / (average_loss * len(losers)))
    else:
        profit_factor = 0.0

    drawdown, drawdown_pct = max_drawdown(equities)

    return Summary(
        total_trades=len(trades),
        winning_trades=len(winners),
        losing_trades=len(losers),
        win_rate=len(winners) / len(trades) * 100.0 if trades else 0.0,
        total_return=total_return,
        total_return_percent=total_return_percent,
        max_drawdown=drawdown,
        max_drawdown_percent=drawdown_pct,
        sharpe_ratio=sharpe_ratio(equities),
        average_win=average_win,
        average_loss=average_loss,
        profit_factor=profit_factor,
        average_days_held=_mean([float(trade.days_held) for trade in trades]),
    )
