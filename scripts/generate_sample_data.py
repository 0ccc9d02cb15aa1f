from __future__ import annotations

import argparse

from swing_backtester.data import write_sample_data


def main() -> None:
    parser = argparse.ArgumentParser(description="Write synthetic daily and hourly CSVs")
    parser.add_argument("--output-dir", default="data")
    parser.add_argument("--tickers", nargs="+", default=["SPXL", "SPXS"])
    parser.add_argument("--days", type=int, default=250)
    parser.add_argument("--seed", type=int, default=None)
    args = parser.parse_args()

    for path in write_sample_data(args.tickers, args.output_dir, days=args.days, seed=args.seed):
        print(f"Wrote {path}")


if __name__ == "__main__":
    main()
