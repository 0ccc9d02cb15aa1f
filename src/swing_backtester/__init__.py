"""Trend-following swing strategy backtester."""

__version__ = "0.1.0"
