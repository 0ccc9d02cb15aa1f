from datetime import datetime, timedelta, timezone
from zoneinfo import ZoneInfo

from swing_backtester.data import load_candles
from swing_backtester.simulator.time import days_elapsed, whole_days_between


NEW_YORK = ZoneInfo("America/New_York")


def test_whole_days_floor_partial_days():
    start = datetime(2024, 5, 1, 10, tzinfo=timezone.utc)

    assert whole_days_between(start, start + timedelta(hours=23, minutes=59)) == 0
    assert whole_days_between(start, start + timedelta(days=1)) == 1
    assert whole_days_between(start, start + timedelta(days=14, hours=5)) == 14


def test_spring_forward_day_is_23_hours():
    start = datetime(2024, 3, 9, 10, tzinfo=NEW_YORK)

    assert whole_days_between(start, datetime(2024, 3, 10, 10, tzinfo=NEW_YORK)) == 0
    assert whole_days_between(start, datetime(2024, 3, 10, 11, tzinfo=NEW_YORK)) == 1


def test_fall_back_day_is_25_hours():
    start = datetime(2024, 11, 2, 10, tzinfo=NEW_YORK)

    assert whole_days_between(start, datetime(2024, 11, 3, 9, tzinfo=NEW_YORK)) == 1
    assert not days_elapsed(start, datetime(2024, 11, 3, 8, 59, tzinfo=NEW_YORK), 1)


def test_loaded_candles_across_dst_count_real_hours(tmp_path):
    path = tmp_path / "SPXL_H1.csv"
    path.write_text(
        "timestamp,open,high,low,close\n"
        "2024-03-09T10:00,1,1,1,1\n"
        "2024-03-10T10:00,1,1,1,1\n",
        encoding="utf-8",
    )

    first, second = load_candles(path, timezone="America/New_York")

    assert second.timestamp - first.timestamp == timedelta(days=1)
    assert whole_days_between(first.timestamp, second.timestamp) == 0
    assert not days_elapsed(first.timestamp, second.timestamp, 1)


def test_days_elapsed_without_mark():
    assert days_elapsed(None, datetime(2024, 1, 1, tzinfo=timezone.utc), 14)
