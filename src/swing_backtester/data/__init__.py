"""Price history models and loaders."""

from swing_backtester.data.loader import DAILY_SUFFIX, HOURLY_SUFFIX, load_candles, load_market_data
from swing_backtester.data.models import Candle, MarketData
from swing_backtester.data.synthetic import generate_daily, generate_hourly, write_candles, write_sample_data

__all__ = [
    "DAILY_SUFFIX",
    "HOURLY_SUFFIX",
    "Candle",
    "MarketData",
    "generate_daily",
    "generate_hourly",
    "load_candles",
    "load_market_data",
    "write_candles",
    "write_sample_data",
]
