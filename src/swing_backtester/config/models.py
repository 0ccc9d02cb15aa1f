"""Configuration models for reproducible runs."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from swing_backtester.strategy.models import SizerConfig


class SettlementMode(str, Enum):
    T0 = "T+0"
    T1 = "T+1"


@dataclass(frozen=True)
class BacktestConfig:
    initial_capital: float = 10000.0
    biweekly_deposit: float = 100.0
    bull_etf: str = "SPXL"
    bear_etf: str = "SPXS"
    enable_pdt_guard: bool = True
    cash_settlement: SettlementMode = SettlementMode.T1
    risk_percent_small: float = 2.0
    risk_percent_large: float = 1.0
    min_risk_dollar: float = 25.0
    max_position_size: float = 1000.0
    stop_loss_multiplier: float = 1.5
    time_stop_days: int = 10
    timezone: str = "UTC"

    @property
    def tickers(self) -> list[str]:
        return [self.bull_etf, self.bear_etf]

    def sizer_config(self) -> SizerConfig:
        return SizerConfig(
            risk_percent_small=self.risk_percent_small,
            risk_percent_large=self.risk_percent_large,
            min_risk_dollar=self.min_risk_dollar,
            max_position_size=self.max_position_size,
        )


@dataclass(frozen=True)
class PathsConfig:
    data_dir: str = "data"
    output_dir: str = "output"


@dataclass(frozen=True)
class RunConfig:
    name: str
    version: str
    run_id_prefix: str
    backtest: BacktestConfig = BacktestConfig()
    paths: PathsConfig = PathsConfig()
