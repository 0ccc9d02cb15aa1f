"""Risk-based position sizing."""

from __future__ import annotations

from swing_backtester.strategy.models import SizeResult, SizerConfig


CASH_BUFFER = 0.95
SMALL_POSITION_NOTIONAL = 1000.0


def calculate_position_size(
    capital: float,
    entry_price: float,
    stop_loss: float,
    risk_percent_small: float,
    risk_percent_large: float,
    min_risk_dollar: float,
    max_position_size: float,
) -> float:
    """Shares risking a percentage of ``capital`` between entry and stop.

    Positions whose candidate notional is under $1000 use the small-tier
    percentage. Returns 0 when entry and stop coincide.
    """
    candidate_notional = min(capital * CASH_BUFFER, max_position_size)
    risk_percent = risk_percent_small if candidate_notional < SMALL_POSITION_NOTIONAL else risk_percent_large
    risk_amount = max(capital * (risk_percent / 100.0), min_risk_dollar)

    price_risk = abs(entry_price - stop_loss)
    if price_risk == 0 or entry_price <= 0:
        return 0.0

    shares = risk_amount / price_risk
    max_shares = min(capital * CASH_BUFFER / entry_price, max_position_size / entry_price)
    return min(shares, max_shares)


class Sizer:
    def __init__(self, config: SizerConfig) -> None:
        self.config = config

    def size_for_risk(self, capital: float, entry_price: float, stop_loss: float) -> SizeResult:
        if abs(entry_price - stop_loss) == 0:
            return SizeResult(False, 0.0, 0.0, "Invalid stop distance")

        shares = calculate_position_size(
            capital,
            entry_price,
            stop_loss,
            self.config.risk_percent_small,
            self.config.risk_percent_large,
            self.config.min_risk_dollar,
            self.config.max_position_size,
        )
        if shares <= 0:
            return SizeResult(False, 0.0, 0.0, "No capital to size")
        cost = shares * entry_price
        if cost > capital:
            return SizeResult(False, shares, cost, "Cost exceeds available cash")
        return SizeResult(True, shares, cost, "Sized")
