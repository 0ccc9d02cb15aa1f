from pathlib import Path

from swing_backtester.config import BacktestConfig, SettlementMode
from swing_backtester.data import load_market_data, write_sample_data
from swing_backtester.monitoring import LogNotifier, Monitor
from swing_backtester.reporting import format_summary
from swing_backtester.simulator import Backtester


data_dir = Path("runtime") / "demo_data"
config = BacktestConfig(
    initial_capital=5000,
    biweekly_deposit=250,
    cash_settlement=SettlementMode.T1,
    time_stop_days=7,
)

write_sample_data(config.tickers, data_dir, days=320, seed=11)
notifier = LogNotifier(prefix="[DEMO]")
market_data = load_market_data(config.tickers, data_dir, notifier=notifier)

result = Backtester(config, market_data, monitor=Monitor(notifier)).run()
print(format_summary(result))

for trade in result.trades[:5]:
    print(
        trade.ticker,
        trade.direction.value,
        trade.entry_date.date(),
        trade.exit_date.date(),
        f"{trade.pnl:.2f}",
        trade.exit_reason.value,
    )
