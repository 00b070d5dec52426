import json

from pricechart.data.loader import (
    FIELDS, bars_from_records, bars_to_frame, generate_sample_bars, generate_ticks, load_bars_json,
)
from pricechart.data.models import Bar, Timeframe


def _rec(t, o=10.0, h=12.0, l=9.0, c=11.0, v=100.0):
    return {"timestamp": t, "open": o, "high": h, "low": l, "close": c, "volume": v}


def test_records_with_missing_or_bad_fields_are_skipped():
    missing = _rec(300)
    del missing["volume"]
    records = [
        _rec(120),
        missing,
        _rec(180, c="11.5"),          # string is not numeric
        _rec(240, v=True),            # neither is a bool
        _rec(360, h=8.0),             # high below open
        "not an object",
        _rec(60, o=1, h=2, l=1, c=2, v=0),
    ]
    bars = bars_from_records(records)
    assert [b.timestamp for b in bars] == [60, 120]
    assert bars[0] == Bar(timestamp=60, open=1, high=2, low=1, close=2, volume=0)


def test_records_empty():
    assert bars_from_records([]) == []
    assert bars_from_records(["x", 1]) == []


def test_load_bars_json(tmp_path):
    path = tmp_path / "tesla_ohlc.json"
    path.write_text(json.dumps([_rec(0), _rec(3600, c=11.5), {"timestamp": 7200}]), encoding="utf-8")
    bars = load_bars_json(path)
    assert len(bars) == 2
    assert bars[1].close == 11.5


def test_bars_to_frame():
    bars = [Bar(**_rec(0)), Bar(**_rec(60))]
    df = bars_to_frame(bars)
    assert list(df.columns) == list(FIELDS)
    assert len(df) == 2
    assert df["close"].tolist() == [11.0, 11.0]


def test_sample_bars_are_deterministic_and_valid():
    a = generate_sample_bars(200, start=0, timeframe=Timeframe.M5, seed=42)
    b = generate_sample_bars(200, start=0, timeframe=Timeframe.M5, seed=42)
    assert a == b
    assert [x.timestamp for x in a[:3]] == [0, 300, 600]
    for bar in a:
        assert bar.low <= min(bar.open, bar.close) <= max(bar.open, bar.close) <= bar.high
    for prev, cur in zip(a, a[1:]):
        assert cur.open == prev.close


def test_generate_ticks():
    last = Bar(**_rec(3600))
    ticks = list(generate_ticks(last, 5, interval=10, seed=1))
    assert [t.timestamp for t in ticks] == [3610, 3620, 3630, 3640, 3650]
    assert all(t.price >= 1.0 for t in ticks)
