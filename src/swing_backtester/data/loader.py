"""CSV loaders for daily and hourly price history."""

from __future__ import annotations

import csv
from datetime import datetime
from pathlib import Path
from typing import Iterable, Optional
from zoneinfo import ZoneInfo

from swing_backtester.data.models import Candle, MarketData


DAILY_SUFFIX = "_D1.csv"
HOURLY_SUFFIX = "_H1.csv"


def _parse_timestamp(raw: str, tz: ZoneInfo) -> datetime:
    value = raw.strip()
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    stamp = datetime.fromisoformat(value)
    if stamp.tzinfo is None:
        return stamp.replace(tzinfo=tz)
    return stamp.astimezone(tz)


def _parse_candle(row: dict, tz: ZoneInfo) -> Candle | None:
    time_raw = row.get("timestamp") or row.get("date") or row.get("time")
    if not time_raw:
        return None
    try:
        return Candle(
            timestamp=_parse_timestamp(time_raw, tz),
            open=float(row["open"]),
            high=float(row["high"]),
            low=float(row["low"]),
            close=float(row["close"]),
            volume=float(row.get("volume") or 0.0),
        )
    except (KeyError, TypeError, ValueError) as exc:
        raise ValueError(f"Invalid candle row: {row}") from exc


def load_candles(path: str | Path, timezone: str = "UTC") -> list[Candle]:
    """Read a ``timestamp,open,high,low,close,volume`` CSV into ascending candles.

    Naive timestamps are interpreted in ``timezone``. When a timestamp repeats,
    the last row wins.
    """
    path = Path(path)
    tz = ZoneInfo(timezone)
    by_time: dict[datetime, Candle] = {}
    with path.open("r", encoding="utf-8", newline="") as handle:
        reader = csv.DictReader(handle, skipinitialspace=True)
        for row in reader:
            row = {(key or "").strip().lower(): value for key, value in row.items()}
            candle = _parse_candle(row, tz)
            if candle:
                by_time[candle.timestamp] = candle
    return [by_time[stamp] for stamp in sorted(by_time)]


def load_market_data(
    tickers: Iterable[str],
    data_dir: str | Path,
    timezone: str = "UTC",
    notifier: Optional[object] = None,
) -> MarketData:
    data_dir = Path(data_dir)
    daily: dict[str, list[Candle]] = {}
    hourly: dict[str, list[Candle]] = {}
    for ticker in tickers:
        daily_path = data_dir / f"{ticker}{DAILY_SUFFIX}"
        hourly_path = data_dir / f"{ticker}{HOURLY_SUFFIX}"
        missing = [str(path) for path in (daily_path, hourly_path) if not path.exists()]
        if missing:
            if notifier is not None:
                notifier.notify("DATA_MISSING", f"{ticker}: no file at {', '.join(missing)}")
            continue
        daily[ticker] = load_candles(daily_path, timezone)
        hourly[ticker] = load_candles(hourly_path, timezone)
        if notifier is not None:
            notifier.notify(
                "DATA_LOADED",
                f"{ticker}: {len(daily[ticker])} daily, {len(hourly[ticker])} hourly candles",
            )
    return MarketData(daily=daily, hourly=hourly)
