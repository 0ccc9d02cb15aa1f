"""Indicators, entry signals and sizing."""

from swing_backtester.strategy.indicators import adx, atr, ema, is_rising, true_range
from swing_backtester.strategy.models import (
    NO_TREND,
    Direction,
    EntrySignal,
    SizeResult,
    SizerConfig,
    TrendSignal,
)
from swing_backtester.strategy.signals import (
    calculate_stop_loss,
    check_daily_trend,
    check_hourly_entry,
)
from swing_backtester.strategy.sizer import Sizer, calculate_position_size

__all__ = [
    "NO_TREND",
    "Direction",
    "EntrySignal",
    "SizeResult",
    "Sizer",
    "SizerConfig",
    "TrendSignal",
    "adx",
    "atr",
    "calculate_position_size",
    "calculate_stop_loss",
    "check_daily_trend",
    "check_hourly_entry",
    "ema",
    "is_rising",
    "true_range",
]
