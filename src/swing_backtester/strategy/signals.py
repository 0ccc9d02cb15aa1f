"""Daily trend filter, hourly entry trigger and ATR stops."""

from __future__ import annotations

from typing import Sequence

from swing_backtester.data.models import Candle
from swing_backtester.strategy.indicators import adx, atr, ema, is_rising
from swing_backtester.strategy.models import NO_TREND, Direction, TrendSignal


MIN_DAILY_HISTORY = 200
MIN_ADX = 20.0
ENTRY_EMA_PERIOD = 20
ATR_PERIOD = 14
FALLBACK_STOP_PCT = 0.02


def check_daily_trend(daily_candles: Sequence[Candle]) -> TrendSignal:
    """EMA20/50/200 stack with all three rising (or none rising) and ADX(14) >= 20."""
    if len(daily_candles) < MIN_DAILY_HISTORY:
        return NO_TREND

    closes = [candle.close for candle in daily_candles]
    ema20 = ema(closes, 20)
    ema50 = ema(closes, 50)
    ema200 = ema(closes, 200)
    adx_values = adx(daily_candles, 14)

    last = len(daily_candles) - 1
    fast, mid, slow, strength = ema20[last], ema50[last], ema200[last], adx_values[last]
    if fast is None or mid is None or slow is None or strength is None:
        return TrendSignal(False, False, fast, mid, slow, strength)

    rising = [is_rising(series, 3)[last] for series in (ema20, ema50, ema200)]
    trending = strength >= MIN_ADX

    is_bullish = fast > mid > slow and all(rising) and trending
    # falling is the negation of the rising check, not a separate test
    is_bearish = fast < mid < slow and not any(rising) and trending
    return TrendSignal(
        is_bullish=is_bullish,
        is_bearish=is_bearish,
        ema20=fast,
        ema50=mid,
        ema200=slow,
        adx=strength,
    )


def check_hourly_entry(hourly_candles: Sequence[Candle], lookback: int = 20) -> bool:
    """Latest close back above EMA20 after a close below it within ``lookback`` bars."""
    if len(hourly_candles) < ENTRY_EMA_PERIOD + lookback:
        return False

    closes = [candle.close for candle in hourly_candles]
    ema20 = ema(closes, ENTRY_EMA_PERIOD)
    last = len(closes) - 1
    current = ema20[last]
    if current is None or closes[last] <= current:
        return False

    for offset in range(1, lookback + 1):
        idx = last - offset
        if idx < 0:
            break
        level = ema20[idx]
        if level is not None and closes[idx] < level:
            return True
    return False


def calculate_stop_loss(
    daily_candles: Sequence[Candle],
    entry_price: float,
    direction: Direction,
    atr_multiplier: float = 1.5,
) -> float:
    atr_values = atr(daily_candles, ATR_PERIOD)
    current_atr = atr_values[-1] if atr_values else None
    if current_atr is None:
        distance = entry_price * FALLBACK_STOP_PCT
    else:
        distance = current_atr * atr_multiplier
    if direction == Direction.LONG:
        return entry_price - distance
    return entry_price + distance
