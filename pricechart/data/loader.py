# pricechart/data/loader.py
# Historical bars: JSON replay files, pandas views, and synthetic sample data.
from __future__ import annotations

import json
import math
import numbers
import random
import time
from pathlib import Path
from typing import Any, Iterable, Iterator, List, Optional

import pandas as pd
from pydantic import ValidationError

from pricechart.data.models import Bar, Tick, Timeframe
from pricechart.log import get_logger

logger = get_logger("loader")

FIELDS = ("timestamp", "open", "high", "low", "close", "volume")


def _is_number(v: Any) -> bool:
    return isinstance(v, numbers.Real) and not isinstance(v, bool) and math.isfinite(v)


def bars_from_records(records: Iterable[Any]) -> List[Bar]:
    """
    Build bars from `{timestamp, open, high, low, close, volume}` dicts.
    Rows missing a field, carrying a non-numeric value or breaking the
    OHLC invariants are skipped. Result is sorted by timestamp.
    """
    rows = list(records)
    dicts = [r for r in rows if isinstance(r, dict)]
    skipped = len(rows) - len(dicts)
    if not dicts:
        if skipped:
            logger.warning("bars_from_records: %d/%d rows skipped", skipped, len(rows))
        return []

    df = pd.DataFrame(dicts).reindex(columns=list(FIELDS))
    ok = df.map(_is_number).all(axis=1)
    skipped += int((~ok).sum())

    bars: List[Bar] = []
    for r in df[ok].itertuples(index=False):
        try:
            bars.append(Bar(
                timestamp=float(r.timestamp),
                open=float(r.open),
                high=float(r.high),
                low=float(r.low),
                close=float(r.close),
                volume=float(r.volume),
            ))
        except ValidationError as e:
            skipped += 1
            logger.debug("invalid bar at t=%s: %s", r.timestamp, e.errors()[0]["msg"])

    if skipped:
        logger.warning("bars_from_records: %d/%d rows skipped", skipped, len(rows))
    bars.sort(key=lambda b: b.timestamp)
    return bars


def load_bars_json(path: str | Path) -> List[Bar]:
    path = Path(path)
    with path.open("r", encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, list):
        raise ValueError(f"{path}: expected a JSON array of bar objects")
    bars = bars_from_records(data)
    logger.info("%s: %d bars loaded", path.name, len(bars))
    return bars


def bars_to_frame(bars: Iterable[Bar]) -> pd.DataFrame:
    return pd.DataFrame([b.model_dump() for b in bars], columns=list(FIELDS))


# ----------------- sample data -----------------
def generate_sample_bars(count: int = 1500,
                         base_price: float = 250.0,
                         start: Optional[float] = None,
                         timeframe: Timeframe = Timeframe.H1,
                         seed: Optional[int] = None) -> List[Bar]:
    """Random walk with 2% moves and up to 1% wicks."""
    rng = random.Random(seed)
    step = timeframe.seconds
    if start is None:
        now = time.time()
        start = (now // step) * step - count * step

    bars: List[Bar] = []
    price = base_price
    for i in range(count):
        o = price
        c = max(0.01, o + rng.uniform(-0.02, 0.02) * o)
        h = max(o, c) + rng.uniform(0.0, 0.01) * o
        l = max(0.0, min(o, c) - rng.uniform(0.0, 0.01) * o)
        bars.append(Bar(timestamp=start + i * step, open=o, high=h, low=l, close=c,
                        volume=rng.uniform(20_000_000, 80_000_000)))
        price = c
    return bars


def generate_ticks(last: Bar, count: int, interval: float = 1.0,
                   start: Optional[float] = None, seed: Optional[int] = None) -> Iterator[Tick]:
    """Ticks drifting +/-1.0 around `last.close`, `interval` seconds apart."""
    rng = random.Random(seed)
    ts = last.timestamp if start is None else start
    price = last.close
    for _ in range(count):
        ts += interval
        price = max(1.0, price + rng.uniform(-1.0, 1.0))
        yield Tick(timestamp=ts, price=price, volume=rng.uniform(100, 1000))
