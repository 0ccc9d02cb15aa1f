from __future__ import annotations

import argparse
from pathlib import Path

from swing_backtester.config import compute_config_hash, freeze_config, load_config, verify_config_lock


def main() -> None:
    parser = argparse.ArgumentParser(description="Pin a backtest config to its content hash")
    parser.add_argument("config")
    parser.add_argument("--check", action="store_true", help="Only verify an existing lock file")
    args = parser.parse_args()

    path = Path(args.config)
    config = load_config(path)
    if args.check:
        if not verify_config_lock(path):
            raise SystemExit(f"{path} does not match its lock ({compute_config_hash(path)[:8]})")
        print(f"{config.name} v{config.version}: lock ok")
        return

    lock_path = freeze_config(path)
    print(f"{config.name} v{config.version}: {compute_config_hash(path)[:8]} -> {lock_path}")


if __name__ == "__main__":
    main()
