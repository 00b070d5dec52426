# pricechart/data/resample.py
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import NamedTuple, Optional, Union

from pricechart.data.models import Bar, Tick, Timeframe
from pricechart.errors import InvalidParameterError, OutOfOrderTickError
from pricechart.log import get_logger

logger = get_logger("resample")


class IngestResult(NamedTuple):
    updated: Optional[Bar] = None     # snapshot of the open bar after the tick
    completed: Optional[Bar] = None   # bar closed by this tick, if any


@dataclass
class _OpenBar:
    """Mutable bar under construction (internal only)."""
    slot: float
    o: float
    h: float
    l: float
    c: float
    v: float = 0.0

    def apply(self, price: float, volume: float) -> None:
        self.h = max(self.h, price)
        self.l = min(self.l, price)
        self.c = price
        self.v += volume

    def freeze(self) -> Bar:
        return Bar(timestamp=self.slot, open=self.o, high=self.h, low=self.l, close=self.c, volume=self.v)


class BarAggregator:
    """
    Folds ticks into OHLCV bars of a fixed bucket duration.
    The open bar never leaves the aggregator: every emission is a frozen copy.
    Not thread-safe; callers serialize ingest().
    """

    def __init__(self, duration: Union[Timeframe, float, int]):
        seconds = duration.seconds if isinstance(duration, Timeframe) else float(duration)
        if not seconds > 0:
            raise InvalidParameterError(f"bucket duration must be > 0, got {duration!r}")
        self.duration = float(seconds)
        self._open: Optional[_OpenBar] = None

    def bucket_of(self, ts: float) -> float:
        return math.floor(ts / self.duration) * self.duration

    @property
    def current(self) -> Optional[Bar]:
        return self._open.freeze() if self._open is not None else None

    def seed(self, bar: Bar) -> None:
        """Adopt an existing bar (usually the last history bar) as the open bar."""
        self._open = _OpenBar(
            slot=self.bucket_of(bar.timestamp),
            o=bar.open, h=bar.high, l=bar.low, c=bar.close, v=bar.volume,
        )

    def ingest(self, tick: Tick) -> IngestResult:
        slot = self.bucket_of(tick.timestamp)
        price = float(tick.price)

        if self._open is None:
            self._open = _OpenBar(slot=slot, o=price, h=price, l=price, c=price)
            self._open.apply(price, tick.volume)
            return IngestResult(updated=self._open.freeze())

        if slot == self._open.slot:
            self._open.apply(price, tick.volume)
            return IngestResult(updated=self._open.freeze())

        if slot < self._open.slot:
            # late tick: open bar stays untouched
            raise OutOfOrderTickError(slot, self._open.slot)

        completed = self._open.freeze()
        self._open = _OpenBar(slot=slot, o=price, h=price, l=price, c=price)
        self._open.apply(price, tick.volume)
        logger.debug(
            "bar closed t=%s O=%.5f H=%.5f L=%.5f C=%.5f V=%.2f",
            completed.timestamp, completed.open, completed.high,
            completed.low, completed.close, completed.volume,
        )
        return IngestResult(updated=self._open.freeze(), completed=completed)

    def reset(self) -> None:
        self._open = None
