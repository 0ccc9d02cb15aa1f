"""Config loading and freezing."""

from swing_backtester.config.loader import (
    compute_config_hash,
    freeze_config,
    load_config,
    lock_path_for,
    locked_hash,
    parse_backtest,
    serialize_config,
    verify_config_lock,
)
from swing_backtester.config.models import BacktestConfig, PathsConfig, RunConfig, SettlementMode

__all__ = [
    "BacktestConfig",
    "PathsConfig",
    "RunConfig",
    "SettlementMode",
    "compute_config_hash",
    "freeze_config",
    "load_config",
    "lock_path_for",
    "locked_hash",
    "parse_backtest",
    "serialize_config",
    "verify_config_lock",
]
