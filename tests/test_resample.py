import pytest

from pricechart.data.models import Bar, Tick, Timeframe
from pricechart.data.resample import BarAggregator
from pricechart.errors import InvalidParameterError, OutOfOrderTickError


def test_rollover_on_bucket_change():
    agg = BarAggregator(Timeframe.H1)

    r1 = agg.ingest(Tick(timestamp=3600, price=100, volume=1000))
    assert r1.updated is not None and r1.completed is None
    assert r1.updated.timestamp == 3600
    assert r1.updated.open == r1.updated.close == 100
    assert r1.updated.volume == 1000

    r2 = agg.ingest(Tick(timestamp=3650, price=105, volume=500))
    assert r2.completed is None
    assert r2.updated.high == 105 and r2.updated.close == 105
    assert r2.updated.volume == 1500

    r3 = agg.ingest(Tick(timestamp=7200, price=102, volume=800))
    assert r3.completed is not None
    assert r3.completed.timestamp == 3600
    assert r3.completed.close == 105 and r3.completed.low == 100
    assert r3.updated.timestamp == 7200
    assert r3.updated.open == r3.updated.close == 102
    assert r3.updated.volume == 800


def test_bucket_is_floor_of_timestamp():
    agg = BarAggregator(300)
    r = agg.ingest(Tick(timestamp=1234.5, price=1.0))
    assert r.updated.timestamp == 1200


def test_emitted_bars_are_snapshots():
    agg = BarAggregator(60)
    first = agg.ingest(Tick(timestamp=0, price=10)).updated
    agg.ingest(Tick(timestamp=30, price=20))
    agg.ingest(Tick(timestamp=40, price=5))
    assert first.high == 10 and first.low == 10 and first.close == 10
    assert agg.current.high == 20 and agg.current.low == 5


def test_out_of_order_tick_is_rejected_and_open_bar_kept():
    agg = BarAggregator(60)
    agg.ingest(Tick(timestamp=120, price=10, volume=1))
    before = agg.current
    with pytest.raises(OutOfOrderTickError) as exc:
        agg.ingest(Tick(timestamp=30, price=99, volume=1))
    assert exc.value.bucket == 0 and exc.value.open_bucket == 120
    assert agg.current == before


def test_reset_drops_open_bar():
    agg = BarAggregator(60)
    agg.ingest(Tick(timestamp=0, price=10))
    agg.reset()
    assert agg.current is None
    r = agg.ingest(Tick(timestamp=5, price=11))
    assert r.completed is None
    assert r.updated.open == 11


def test_seed_continues_history_bar():
    agg = BarAggregator(Timeframe.M1)
    agg.seed(Bar(timestamp=60, open=10, high=12, low=9, close=11, volume=5))
    r = agg.ingest(Tick(timestamp=90, price=13, volume=1))
    assert r.completed is None
    assert r.updated.open == 10 and r.updated.high == 13 and r.updated.volume == 6


def test_invalid_duration():
    with pytest.raises(InvalidParameterError):
        BarAggregator(0)
    with pytest.raises(InvalidParameterError):
        BarAggregator(-60)
