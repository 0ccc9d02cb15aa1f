import csv
import json
from datetime import datetime, timedelta, timezone

from swing_backtester.reporting import format_summary, write_blotter, write_summary
from swing_backtester.simulator import (
    AccountState,
    BacktestResult,
    ExitReason,
    Position,
    Trade,
    calculate_summary,
)
from swing_backtester.strategy import Direction


T0 = datetime(2024, 5, 6, 9, 0, tzinfo=timezone.utc)


def _result() -> BacktestResult:
    position = Position(
        entry_date=T0,
        entry_price=100.0,
        shares=9.5,
        direction=Direction.LONG,
        ticker="SPXL",
        stop_loss=97.123,
    )
    trade = Trade(
        entry_date=T0,
        exit_date=T0 + timedelta(days=2),
        ticker="SPXL",
        direction=Direction.LONG,
        entry_price=100.0,
        exit_price=96.5,
        shares=9.5,
        pnl=-33.25,
        pnl_percent=-3.5,
        exit_reason=ExitReason.STOP_LOSS,
        days_held=2,
    )
    curve = [
        AccountState(date=T0, cash=9050.0, equity=10000.0, unsettled_cash=0.0, position=position),
        AccountState(date=T0 + timedelta(days=2), cash=9050.0, equity=9966.75, unsettled_cash=916.75),
    ]
    return BacktestResult(trades=[trade], equity_curve=curve, summary=calculate_summary([trade], curve))


def test_blotter_columns_and_rounding(tmp_path):
    path = write_blotter(_result(), tmp_path / "out" / "blotter.csv")

    with path.open(encoding="utf-8", newline="") as handle:
        rows = list(csv.reader(handle))

    assert rows[0][0] == "Entry Date"
    assert rows[0][-1] == "Exit Reason"
    assert rows[1][1:] == [
        (T0 + timedelta(days=2)).isoformat(),
        "SPXL",
        "LONG",
        "100.00",
        "96.50",
        "9.5000",
        "-33.25",
        "-3.50",
        "2",
        "STOP_LOSS",
    ]


def test_summary_document(tmp_path):
    path = write_summary(_result(), tmp_path / "summary.json")
    document = json.loads(path.read_text(encoding="utf-8"))

    assert set(document) == {"summary", "trades", "equityCurve"}
    assert document["summary"]["totalTrades"] == 1
    assert document["summary"]["maxDrawdownPercent"] > 0
    assert document["trades"][0]["exitReason"] == "STOP_LOSS"
    first, second = document["equityCurve"]
    assert first["position"]["stopLoss"] == 97.123
    assert first["position"]["direction"] == "LONG"
    assert second["position"] is None
    assert second["unsettledCash"] == 916.75


def test_format_summary_lists_metrics():
    text = format_summary(_result())

    assert "BACKTEST SUMMARY" in text
    assert "Total Trades:        1" in text
    assert "Losing Trades:       1" in text
    assert "Max Drawdown:        $33.25" in text
