"""Price history data structures."""

from __future__ import annotations

from bisect import bisect_right
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class Candle:
    timestamp: datetime
    open: float
    high: float
    low: float
    close: float
    volume: float = 0.0


@dataclass
class MarketData:
    """Daily and hourly candle series keyed by ticker.

    Series are expected in ascending timestamp order. A ticker missing from
    either mapping behaves like an empty series.
    """

    daily: dict[str, list[Candle]] = field(default_factory=dict)
    hourly: dict[str, list[Candle]] = field(default_factory=dict)

    def __post_init__(self) -> None:
        self._daily_times = {ticker: [c.timestamp for c in candles] for ticker, candles in self.daily.items()}
        self._hourly_times = {ticker: [c.timestamp for c in candles] for ticker, candles in self.hourly.items()}

    def tickers(self) -> list[str]:
        return sorted(set(self.daily) | set(self.hourly))

    def daily_until(self, ticker: str, when: datetime) -> list[Candle]:
        return _until(self.daily.get(ticker, []), self._daily_times.get(ticker, []), when)

    def hourly_until(self, ticker: str, when: datetime) -> list[Candle]:
        return _until(self.hourly.get(ticker, []), self._hourly_times.get(ticker, []), when)

    def candle_at(self, ticker: str, when: datetime) -> Optional[Candle]:
        candles = self.hourly.get(ticker, [])
        index = bisect_right(self._hourly_times.get(ticker, []), when)
        if index == 0:
            return None
        return candles[index - 1]

    def price_at(self, ticker: str, when: datetime) -> float:
        candle = self.candle_at(ticker, when)
        return candle.close if candle is not None else 0.0

    def hourly_timestamps(self) -> list[datetime]:
        stamps: set[datetime] = set()
        for times in self._hourly_times.values():
            stamps.update(times)
        return sorted(stamps)


def _until(candles: list[Candle], times: list[datetime], when: datetime) -> list[Candle]:
    return candles[: bisect_right(times, when)]
