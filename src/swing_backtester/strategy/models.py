"""Strategy signal models."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class Direction(str, Enum):
    LONG = "LONG"
    SHORT = "SHORT"


@dataclass(frozen=True)
class TrendSignal:
    is_bullish: bool
    is_bearish: bool
    ema20: Optional[float] = None
    ema50: Optional[float] = None
    ema200: Optional[float] = None
    adx: Optional[float] = None


NO_TREND = TrendSignal(is_bullish=False, is_bearish=False)


@dataclass(frozen=True)
class EntrySignal:
    ticker: str
    direction: Direction
    entry_price: float


@dataclass(frozen=True)
class SizerConfig:
    risk_percent_small: float = 2.0
    risk_percent_large: float = 1.0
    min_risk_dollar: float = 25.0
    max_position_size: float = 1000.0


@dataclass(frozen=True)
class SizeResult:
    allow: bool
    shares: float
    cost: float
    reason: str
