from __future__ import annotations

import json
import os
from pathlib import Path

import streamlit as st


def _load_json(path: Path) -> dict | None:
    if not path.exists():
        return None
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError:
        return None


def _format_currency(value: float) -> str:
    return f"${value:,.2f}"


def main() -> None:
    st.set_page_config(page_title="Swing Backtest Results", layout="wide")
    st.title("Swing Backtest Results")

    default_summary_path = os.getenv("SWING_SUMMARY_PATH", "output/summary.json")
    summary_path = Path(st.sidebar.text_input("Summary path", value=default_summary_path))

    document = _load_json(summary_path)
    if document is None:
        st.warning(f"No results found at {summary_path}")
        return

    summary = document.get("summary", {})
    trades = document.get("trades", [])
    equity_curve = document.get("equityCurve", [])

    col_a, col_b, col_c, col_d = st.columns(4)
    col_a.metric(
        "Total Return",
        _format_currency(summary.get("totalReturn", 0.0)),
        f"{summary.get('totalReturnPercent', 0.0):.2f}%",
    )
    col_b.metric("Win Rate", f"{summary.get('winRate', 0.0):.2f}%")
    col_c.metric("Profit Factor", f"{summary.get('profitFactor', 0.0):.2f}")
    col_d.metric("Sharpe Ratio", f"{summary.get('sharpeRatio', 0.0):.2f}")

    col_e, col_f, col_g, col_h = st.columns(4)
    col_e.metric("Trades", str(summary.get("totalTrades", 0)))
    col_f.metric("Average Win", _format_currency(summary.get("averageWin", 0.0)))
    col_g.metric("Average Loss", _format_currency(summary.get("averageLoss", 0.0)))
    col_h.metric(
        "Max Drawdown",
        _format_currency(summary.get("maxDrawdown", 0.0)),
        f"-{summary.get('maxDrawdownPercent', 0.0):.2f}%",
        delta_color="inverse",
    )

    st.subheader("Equity Curve")
    if equity_curve:
        st.line_chart(
            {
                "equity": [point["equity"] for point in equity_curve],
                "cash": [point["cash"] for point in equity_curve],
            }
        )
    else:
        st.info("Equity curve is empty")

    st.subheader("Trade Blotter")
    if trades:
        st.dataframe(trades, use_container_width=True)
    else:
        st.info("No trades")


if __name__ == "__main__":
    main()
