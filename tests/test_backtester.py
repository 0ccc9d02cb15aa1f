from datetime import datetime, timedelta, timezone

import pytest

from swing_backtester.config import BacktestConfig, SettlementMode
from swing_backtester.data import Candle, MarketData
from swing_backtester.monitoring import AuditLog, MemoryNotifier, Monitor
from swing_backtester.simulator import Backtester, ExitReason, Flat, SimulationContext
from swing_backtester.strategy import Direction


DAILY_START = datetime(2023, 1, 1, tzinfo=timezone.utc)
SESSION_START = DAILY_START + timedelta(days=220, hours=9)
ENTRY_BAR = 39
# flat, one close under EMA20, then a close back above it on the entry bar
PATTERN = [100.0] * 38 + [90.0, 110.0]


def _daily(step: float, bars: int = 220) -> list[Candle]:
    candles = []
    for i in range(bars):
        close = 100.0 * (1.0 + step) ** i
        candles.append(
            Candle(
                timestamp=DAILY_START + timedelta(days=i),
                open=close,
                high=close * 1.005,
                low=close * 0.995,
                close=close,
                volume=1_000_000.0,
            )
        )
    return candles


def _hourly(closes: list[float], start: datetime = SESSION_START) -> list[Candle]:
    return [
        Candle(timestamp=start + timedelta(hours=i), open=close, high=close, low=close, close=close)
        for i, close in enumerate(closes)
    ]


def _config(**overrides) -> BacktestConfig:
    params = {"initial_capital": 10000.0, "biweekly_deposit": 0.0}
    params.update(overrides)
    return BacktestConfig(**params)


def _bull_market(closes: list[float]) -> MarketData:
    return MarketData(daily={"SPXL": _daily(0.01)}, hourly={"SPXL": _hourly(closes)})


def _assert_equity_identity(result, market: MarketData) -> None:
    for state in result.equity_curve:
        value = 0.0
        if state.position is not None:
            value = state.position.shares * market.price_at(state.position.ticker, state.date)
        assert state.cash + state.unsettled_cash + value == pytest.approx(state.equity)


def test_no_signals_keeps_initial_capital():
    market = MarketData(
        daily={"SPXL": _daily(0.01, bars=150)},
        hourly={"SPXL": _hourly(PATTERN + [120.0] * 60)},
    )
    result = Backtester(_config(), market).run()

    assert result.trades == []
    assert len(result.equity_curve) == 100
    assert all(state.equity == pytest.approx(10000.0) for state in result.equity_curve)
    assert all(state.position is None for state in result.equity_curve)


def test_stop_loss_exit_settles_next_day():
    market = _bull_market(PATTERN + [85.0] * 30)
    result = Backtester(_config(), market).run()

    assert len(result.trades) == 1
    trade = result.trades[0]
    assert trade.ticker == "SPXL"
    assert trade.direction == Direction.LONG
    assert trade.exit_reason == ExitReason.STOP_LOSS
    assert trade.entry_price == pytest.approx(110.0)
    assert trade.exit_price == pytest.approx(85.0)
    assert trade.entry_date == SESSION_START + timedelta(hours=ENTRY_BAR)
    assert trade.exit_date == SESSION_START + timedelta(hours=ENTRY_BAR + 1)
    assert trade.pnl == pytest.approx((85.0 - 110.0) * trade.shares)

    entry_state = result.equity_curve[ENTRY_BAR]
    assert entry_state.position is not None
    assert 85.0 < entry_state.position.stop_loss < 110.0
    assert trade.shares * trade.entry_price <= result.equity_curve[ENTRY_BAR - 1].cash

    proceeds = trade.shares * 85.0
    exit_state = result.equity_curve[ENTRY_BAR + 1]
    assert exit_state.position is None
    assert exit_state.unsettled_cash == pytest.approx(proceeds)

    day_later = result.equity_curve[ENTRY_BAR + 1 + 24]
    assert day_later.unsettled_cash == 0.0
    assert day_later.cash == pytest.approx(10000.0 + trade.pnl)
    assert result.equity_curve[ENTRY_BAR + 24].unsettled_cash == pytest.approx(proceeds)

    _assert_equity_identity(result, market)
    assert result.summary.losing_trades == 1


def test_same_day_settlement_credits_cash():
    market = _bull_market(PATTERN + [85.0] * 30)
    result = Backtester(_config(cash_settlement=SettlementMode.T0), market).run()

    trade = result.trades[0]
    assert all(state.unsettled_cash == 0.0 for state in result.equity_curve)
    assert result.equity_curve[ENTRY_BAR + 1].cash == pytest.approx(10000.0 + trade.pnl)
    _assert_equity_identity(result, market)


def test_time_stop_trade_reports_days_held_on_exit_step():
    market = _bull_market(PATTERN + [110.0] * 260)
    result = Backtester(_config(time_stop_days=10), market).run()

    assert len(result.trades) == 1
    trade = result.trades[0]
    assert trade.exit_reason == ExitReason.TIME_STOP
    assert trade.days_held == 10
    assert trade.exit_date - trade.entry_date == timedelta(days=10)
    assert trade.pnl == pytest.approx(0.0)
    assert result.equity_curve[ENTRY_BAR + 30].position.days_held == 1
    assert result.equity_curve[ENTRY_BAR + 239].position.days_held == 9
    _assert_equity_identity(result, market)


def test_open_position_closed_at_end_of_data():
    closes = PATTERN + [112.0] * 5
    market = _bull_market(closes)
    result = Backtester(_config(), market).run()

    assert len(result.equity_curve) == len(closes)
    assert result.equity_curve[-1].position is not None
    trade = result.trades[-1]
    assert trade.exit_reason == ExitReason.SIGNAL_EXIT
    assert trade.exit_price == pytest.approx(112.0)
    assert trade.exit_date == result.equity_curve[-1].date


def test_pdt_guard_blocks_same_day_reentry():
    closes = PATTERN + [85.0, 120.0] + [80.0] * 10

    guarded = Backtester(_config(enable_pdt_guard=True), _bull_market(closes)).run()
    unguarded = Backtester(_config(enable_pdt_guard=False), _bull_market(closes)).run()

    assert len(guarded.trades) == 1
    assert len(unguarded.trades) == 2
    second = unguarded.trades[1]
    assert second.entry_price == pytest.approx(120.0)
    assert second.entry_date == SESSION_START + timedelta(hours=ENTRY_BAR + 2)
    assert second.exit_reason == ExitReason.STOP_LOSS


def test_bull_signal_takes_priority_over_bear():
    closes = PATTERN + [112.0] * 3
    market = MarketData(
        daily={"SPXL": _daily(0.01), "SPXS": _daily(-0.01)},
        hourly={"SPXL": _hourly(closes), "SPXS": _hourly(closes)},
    )
    result = Backtester(_config(), market).run()

    assert len(result.trades) == 1
    assert result.trades[0].ticker == "SPXL"
    assert result.trades[0].direction == Direction.LONG


def test_bear_etf_entered_short_when_bull_has_no_data():
    closes = PATTERN + [112.0] * 3
    market = MarketData(daily={"SPXS": _daily(-0.01)}, hourly={"SPXS": _hourly(closes)})
    result = Backtester(_config(), market).run()

    assert len(result.trades) == 1
    trade = result.trades[0]
    assert trade.ticker == "SPXS"
    assert trade.direction == Direction.SHORT
    assert result.equity_curve[ENTRY_BAR].position.stop_loss > 110.0
    assert trade.pnl == pytest.approx((110.0 - 112.0) * trade.shares)
    _assert_equity_identity(result, market)


def test_biweekly_deposits():
    closes = [100.0] * (24 * 30)
    market = MarketData(hourly={"SPXL": _hourly(closes)})
    result = Backtester(_config(biweekly_deposit=100.0), market).run()

    assert result.equity_curve[0].cash == pytest.approx(10100.0)
    assert result.equity_curve[24 * 14 - 1].cash == pytest.approx(10100.0)
    assert result.equity_curve[24 * 14].cash == pytest.approx(10200.0)
    assert result.equity_curve[-1].equity == pytest.approx(10300.0)


def test_empty_market_data_completes():
    result = Backtester(_config(), MarketData()).run()

    assert result.trades == []
    assert result.equity_curve == []
    assert result.summary.total_trades == 0
    assert result.summary.sharpe_ratio == 0.0


def test_rerun_is_identical():
    market = _bull_market(PATTERN + [85.0, 120.0] + [80.0] * 30)
    backtester = Backtester(_config(enable_pdt_guard=False), market)

    first = backtester.run()
    second = backtester.run()
    fresh = Backtester(_config(enable_pdt_guard=False), market).run()

    assert first.trades == second.trades == fresh.trades
    assert first.equity_curve == second.equity_curve == fresh.equity_curve


def test_single_position_at_every_step():
    closes = PATTERN + [85.0, 120.0] + [80.0] * 10
    market = MarketData(
        daily={"SPXL": _daily(0.01), "SPXS": _daily(-0.01)},
        hourly={"SPXL": _hourly(closes), "SPXS": _hourly(closes)},
    )
    result = Backtester(_config(enable_pdt_guard=False), market).run()

    for earlier, later in zip(result.trades, result.trades[1:]):
        assert later.entry_date >= earlier.exit_date
    _assert_equity_identity(result, market)


def test_entry_rejected_without_cash():
    notifier = MemoryNotifier()
    market = _bull_market(PATTERN + [110.0] * 3)
    result = Backtester(_config(initial_capital=0.0), market, monitor=Monitor(notifier)).run()

    assert result.trades == []
    assert any(event == "ENTRY_REJECTED" for event, _ in notifier.events)


def test_events_reach_monitor_and_audit_log(tmp_path):
    notifier = MemoryNotifier()
    audit = AuditLog(tmp_path / "audit.log", run_id="test-run", config_hash="abc")
    market = _bull_market(PATTERN + [85.0] * 30)

    Backtester(_config(biweekly_deposit=50.0), market, audit_log=audit, monitor=Monitor(notifier)).run()

    events = [event for event, _ in notifier.events]
    assert events[0] == "RUN_START"
    assert events[-1] == "RUN_END"
    assert {"OPEN", "CLOSE", "DEPOSIT", "SETTLE"} <= set(events)
    assert events.index("OPEN") < events.index("CLOSE") < events.index("SETTLE")

    records = audit.read()
    assert {record["run_id"] for record in records} == {"test-run"}
    logged = [record["event"] for record in records]
    assert logged.index("position_open") < logged.index("position_close") < logged.index("settlement")


def test_manual_steps_over_simulation_context_match_run():
    market = _bull_market(PATTERN + [85.0] * 30)
    backtester = Backtester(_config(), market)

    ctx = SimulationContext(cash=10000.0)
    for now in market.hourly_timestamps():
        backtester.step(ctx, now)

    result = backtester.run()
    assert ctx.trades == result.trades
    assert ctx.equity_curve == result.equity_curve
    assert isinstance(ctx.slot, Flat)
