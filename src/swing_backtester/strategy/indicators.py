"""Indicator helpers for the trend filter and entry trigger.

Every function returns one value per input element. Positions without enough
history hold ``None`` instead of a number.
"""

from __future__ import annotations

from typing import Optional, Sequence

from swing_backtester.data.models import Candle


def ema(values: Sequence[float], period: int) -> list[Optional[float]]:
    """Exponential moving average seeded with the simple average of the first ``period`` values."""
    if period < 1 or len(values) < period:
        return [None] * len(values)
    alpha = 2.0 / (period + 1.0)
    current = sum(values[:period]) / period
    result: list[Optional[float]] = [None] * (period - 1)
    result.append(current)
    for value in values[period:]:
        current = (value - current) * alpha + current
        result.append(current)
    return result


def true_range(candles: Sequence[Candle]) -> list[float]:
    ranges: list[float] = []
    for index, candle in enumerate(candles):
        if index == 0:
            ranges.append(candle.high - candle.low)
            continue
        prev_close = candles[index - 1].close
        ranges.append(
            max(candle.high - candle.low, abs(candle.high - prev_close), abs(candle.low - prev_close))
        )
    return ranges


def atr(candles: Sequence[Candle], period: int) -> list[Optional[float]]:
    return ema(true_range(candles), period)


def adx(candles: Sequence[Candle], period: int = 14) -> list[Optional[float]]:
    """Average directional index.

    Directional movement and true range start at the second bar, so the
    result is prefixed with one ``None`` to line up with ``candles``.
    """
    if not candles:
        return []

    plus_dm: list[float] = []
    minus_dm: list[float] = []
    trs: list[float] = []
    for idx in range(1, len(candles)):
        high = candles[idx].high
        low = candles[idx].low
        prev_high = candles[idx - 1].high
        prev_low = candles[idx - 1].low
        prev_close = candles[idx - 1].close
        up_move = high - prev_high
        down_move = prev_low - low
        plus_dm.append(up_move if up_move > down_move and up_move > 0 else 0.0)
        minus_dm.append(down_move if down_move > up_move and down_move > 0 else 0.0)
        trs.append(max(high - low, abs(high - prev_close), abs(low - prev_close)))

    smooth_plus = ema(plus_dm, period)
    smooth_minus = ema(minus_dm, period)
    smooth_tr = ema(trs, period)

    dx_values: list[float] = []
    for plus, minus, tr in zip(smooth_plus, smooth_minus, smooth_tr):
        if tr is None or tr == 0 or plus is None or minus is None:
            plus_di = minus_di = 0.0
        else:
            plus_di = plus / tr * 100.0
            minus_di = minus / tr * 100.0
        denom = plus_di + minus_di
        dx_values.append(0.0 if denom == 0 else abs(plus_di - minus_di) / denom * 100.0)

    return [None] + ema(dx_values, period)


def is_rising(values: Sequence[Optional[float]], lookback: int = 3) -> list[bool]:
    """True where each of the last ``lookback`` steps strictly increases.

    A step touching an undefined value does not count as an increase.
    """
    result: list[bool] = []
    for index, value in enumerate(values):
        if index < lookback or value is None:
            result.append(False)
            continue
        rising = True
        for step in range(lookback):
            later = values[index - step]
            earlier = values[index - step - 1]
            if later is None or earlier is None or later <= earlier:
                rising = False
                break
        result.append(rising)
    return result
