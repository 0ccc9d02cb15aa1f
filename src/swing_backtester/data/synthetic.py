"""Synthetic price history for demos and tests."""

from __future__ import annotations

import csv
import random
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Iterable, Optional

from swing_backtester.data.loader import DAILY_SUFFIX, HOURLY_SUFFIX
from swing_backtester.data.models import Candle


HOURS_PER_SESSION = 8
SESSION_OPEN_HOUR = 9
DAILY_VOLUME = (1_000_000, 3_000_000)
HOURLY_VOLUME = (50_000, 150_000)


def _drift_for(ticker: str, per_bar: float) -> float:
    # bull tickers (SPXL-style) drift up, bear tickers drift down
    return per_bar if "L" in ticker.upper() else -per_bar


def _bar(
    rng: random.Random,
    stamp: datetime,
    price: float,
    noise: float,
    bias: float,
    drift: float,
    wick: float,
    volume_range: tuple[int, int],
) -> Candle:
    open_ = price
    change = (rng.random() - bias) * noise + drift * price
    close = max(open_ + change, 0.01)
    high = max(open_, close) * (1 + rng.random() * wick)
    low = min(open_, close) * (1 - rng.random() * wick)
    volume = float(rng.randint(*volume_range))
    return Candle(
        timestamp=stamp,
        open=round(open_, 2),
        high=round(high, 2),
        low=round(low, 2),
        close=round(close, 2),
        volume=volume,
    )


def _weekdays(start: datetime, days: int) -> Iterable[datetime]:
    for offset in range(days):
        day = start + timedelta(days=offset)
        if day.weekday() < 5:
            yield day


def generate_daily(
    ticker: str,
    days: int = 250,
    start: Optional[datetime] = None,
    seed: Optional[int] = None,
    start_price: float = 100.0,
) -> list[Candle]:
    rng = random.Random(seed)
    start = start or datetime(2024, 1, 1, tzinfo=timezone.utc)
    drift = _drift_for(ticker, 0.002)
    price = start_price
    candles: list[Candle] = []
    for day in _weekdays(start, days):
        candle = _bar(rng, day, price, noise=3.0, bias=0.45, drift=drift, wick=0.02, volume_range=DAILY_VOLUME)
        candles.append(candle)
        price = candle.close
    return candles


def generate_hourly(
    ticker: str,
    days: int = 250,
    start: Optional[datetime] = None,
    seed: Optional[int] = None,
    start_price: float = 100.0,
) -> list[Candle]:
    rng = random.Random(seed)
    start = start or datetime(2024, 1, 1, tzinfo=timezone.utc)
    drift = _drift_for(ticker, 0.0003)
    price = start_price
    candles: list[Candle] = []
    for day in _weekdays(start, days):
        for hour in range(HOURS_PER_SESSION):
            stamp = day.replace(hour=SESSION_OPEN_HOUR + hour, minute=0, second=0, microsecond=0)
            candle = _bar(rng, stamp, price, noise=1.0, bias=0.48, drift=drift, wick=0.01, volume_range=HOURLY_VOLUME)
            candles.append(candle)
            price = candle.close
    return candles


def write_candles(candles: Iterable[Candle], path: str | Path) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8", newline="") as handle:
        writer = csv.writer(handle)
        writer.writerow(["timestamp", "open", "high", "low", "close", "volume"])
        for candle in candles:
            writer.writerow(
                [candle.timestamp.isoformat(), candle.open, candle.high, candle.low, candle.close, int(candle.volume)]
            )
    return path


def write_sample_data(
    tickers: Iterable[str],
    output_dir: str | Path,
    days: int = 250,
    seed: Optional[int] = None,
) -> list[Path]:
    output_dir = Path(output_dir)
    written: list[Path] = []
    for index, ticker in enumerate(tickers):
        ticker_seed = None if seed is None else seed + index
        written.append(write_candles(generate_daily(ticker, days, seed=ticker_seed), output_dir / f"{ticker}{DAILY_SUFFIX}"))
        written.append(write_candles(generate_hourly(ticker, days, seed=ticker_seed), output_dir / f"{ticker}{HOURLY_SUFFIX}"))
    return written
