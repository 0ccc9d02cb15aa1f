"""Load and freeze configuration files."""

from __future__ import annotations

import hashlib
import json
from dataclasses import asdict
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import yaml

from swing_backtester.config.models import BacktestConfig, PathsConfig, RunConfig, SettlementMode


def load_config(path: str | Path) -> RunConfig:
    path = Path(path)
    data = _load_yaml(path)

    name = str(_require(data, "name"))
    version = str(data.get("version", "1"))
    run_id_prefix = str(data.get("run_id_prefix", name))

    return RunConfig(
        name=name,
        version=version,
        run_id_prefix=run_id_prefix,
        backtest=parse_backtest(data.get("backtest", {})),
        paths=_parse_paths(data.get("paths", {})),
    )


def compute_config_hash(path: str | Path) -> str:
    return hashlib.sha256(Path(path).read_bytes()).hexdigest()


def lock_path_for(path: str | Path) -> Path:
    path = Path(path)
    return path.with_name(f"{path.name}.lock.json")


def freeze_config(path: str | Path, lock_path: Optional[str | Path] = None) -> Path:
    """Write ``<config>.lock.json`` holding the config's current sha256."""
    path = Path(path)
    target = Path(lock_path) if lock_path is not None else lock_path_for(path)
    target.write_text(
        json.dumps(
            {
                "config_path": str(path),
                "config_hash": compute_config_hash(path),
                "frozen_at_utc": datetime.now(timezone.utc).isoformat(),
            },
            indent=2,
        ),
        encoding="utf-8",
    )
    return target


def locked_hash(lock_path: str | Path) -> Optional[str]:
    lock_path = Path(lock_path)
    if not lock_path.exists():
        return None
    return json.loads(lock_path.read_text(encoding="utf-8")).get("config_hash")


def verify_config_lock(path: str | Path, lock_path: Optional[str | Path] = None) -> bool:
    target = Path(lock_path) if lock_path is not None else lock_path_for(path)
    expected = locked_hash(target)
    return expected is not None and expected == compute_config_hash(path)


def _load_yaml(path: Path) -> dict[str, Any]:
    data = yaml.safe_load(path.read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise ValueError("Config must be a mapping")
    return data


def _require(data: dict[str, Any], key: str) -> Any:
    if key not in data:
        raise ValueError(f"Missing required config key: {key}")
    return data[key]


def _number(data: dict[str, Any], key: str, default: float, minimum: Optional[float] = 0.0) -> float:
    raw = data.get(key, default)
    try:
        value = float(raw)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"Invalid {key}: {raw}") from exc
    if minimum is not None and value < minimum:
        raise ValueError(f"{key} must be >= {minimum}, got {value}")
    return value


def parse_backtest(data: dict[str, Any]) -> BacktestConfig:
    if not isinstance(data, dict):
        raise ValueError("backtest section must be a mapping")
    defaults = BacktestConfig()

    settlement_raw = data.get("cash_settlement", defaults.cash_settlement.value)
    try:
        settlement = SettlementMode(str(settlement_raw).upper())
    except ValueError as exc:
        raise ValueError(f"Invalid cash_settlement: {settlement_raw}") from exc

    tz_name = str(data.get("timezone", defaults.timezone))
    try:
        ZoneInfo(tz_name)
    except (ZoneInfoNotFoundError, ValueError) as exc:
        raise ValueError(f"Invalid timezone: {tz_name}") from exc

    bull_etf = str(data.get("bull_etf", defaults.bull_etf))
    bear_etf = str(data.get("bear_etf", defaults.bear_etf))
    if bull_etf == bear_etf:
        raise ValueError("bull_etf and bear_etf must differ")

    return BacktestConfig(
        initial_capital=_number(data, "initial_capital", defaults.initial_capital),
        biweekly_deposit=_number(data, "biweekly_deposit", defaults.biweekly_deposit),
        bull_etf=bull_etf,
        bear_etf=bear_etf,
        enable_pdt_guard=bool(data.get("enable_pdt_guard", defaults.enable_pdt_guard)),
        cash_settlement=settlement,
        risk_percent_small=_number(data, "risk_percent_small", defaults.risk_percent_small),
        risk_percent_large=_number(data, "risk_percent_large", defaults.risk_percent_large),
        min_risk_dollar=_number(data, "min_risk_dollar", defaults.min_risk_dollar),
        max_position_size=_number(data, "max_position_size", defaults.max_position_size),
        stop_loss_multiplier=_number(data, "stop_loss_multiplier", defaults.stop_loss_multiplier),
        time_stop_days=int(_number(data, "time_stop_days", defaults.time_stop_days)),
        timezone=tz_name,
    )


def _parse_paths(data: dict[str, Any]) -> PathsConfig:
    return PathsConfig(
        data_dir=str(data.get("data_dir", "data")),
        output_dir=str(data.get("output_dir", "output")),
    )


def serialize_config(config: RunConfig) -> dict[str, Any]:
    payload = asdict(config)
    payload["backtest"]["cash_settlement"] = config.backtest.cash_settlement.value
    return payload
