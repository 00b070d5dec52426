# pricechart/indicators/ta.py
from __future__ import annotations

import math
from collections import deque
from dataclasses import dataclass, field
from typing import Deque, Iterable, List, NamedTuple, Optional

from pricechart.errors import InvalidParameterError

BB_PERIOD = 20
BB_DEV = 2.0
RSI_PERIOD = 14
MACD_FAST, MACD_SLOW, MACD_SIGNAL = 12, 26, 9
SMA_RESYNC_EVERY = 1024   # steps between exact window re-sums

# One value per input price; None = not enough history yet (never 0.0)
Series = List[Optional[float]]


# ----------------- helpers -----------------
def _check_period(period: int, name: str = "period") -> int:
    if not isinstance(period, int) or period <= 0:
        raise InvalidParameterError(f"{name} must be a positive int, got {period!r}")
    return period


def _sma_series(values: List[float], period: int) -> Series:
    n = len(values)
    out: Series = [None] * n
    if n < period:
        return out
    s = sum(values[:period])
    out[period - 1] = s / period
    for i in range(period, n):
        if (i - period + 1) % SMA_RESYNC_EVERY == 0:
            s = sum(values[i - period + 1:i + 1])
        else:
            s += values[i] - values[i - period]
        out[i] = s / period
    return out


# ----------------- SMA -----------------
class SMACalculator:
    """Simple moving average. Pure: no state between calls."""

    def __init__(self, period: int):
        self.period = _check_period(period)

    def calculate(self, prices: Iterable[float]) -> Series:
        return _sma_series([float(p) for p in prices], self.period)


# ----------------- EMA -----------------
@dataclass
class EMAState:
    previous: Optional[float] = None
    warmup: List[float] = field(default_factory=list)   # prices collected before the SMA seed

    @property
    def initialized(self) -> bool:
        return self.previous is not None


class EMACalculator:
    """
    Incremental EMA, multiplier 2/(period+1).
    Cold start: the first value is the SMA of the first `period` prices.
    A `starting_ema` replaces the SMA seed so a stream can be resumed.
    """

    def __init__(self, period: int):
        self.period = _check_period(period)
        self.multiplier = 2.0 / (period + 1.0)
        self.state = EMAState()

    def update(self, price: float) -> Optional[float]:
        st = self.state
        price = float(price)
        if st.previous is None:
            st.warmup.append(price)
            if len(st.warmup) < self.period:
                return None
            st.previous = sum(st.warmup) / self.period
            st.warmup.clear()
            return st.previous
        st.previous = (price - st.previous) * self.multiplier + st.previous
        return st.previous

    def calculate(self, prices: Iterable[float], starting_ema: Optional[float] = None) -> Series:
        if starting_ema is not None:
            self.state = EMAState(previous=float(starting_ema))
        return [self.update(p) for p in prices]

    def reset(self) -> None:
        self.state = EMAState()


# ----------------- Bollinger -----------------
class BollingerBands(NamedTuple):
    upper: Optional[float] = None
    middle: Optional[float] = None
    lower: Optional[float] = None


class BollingerBandsCalculator:
    """SMA middle band +/- num_std population standard deviations."""

    def __init__(self, period: int = BB_PERIOD, num_std: float = BB_DEV):
        self.period = _check_period(period)
        if not num_std >= 0:
            raise InvalidParameterError(f"num_std must be >= 0, got {num_std!r}")
        self.num_std = float(num_std)

    def calculate(self, prices: Iterable[float]) -> List[BollingerBands]:
        values = [float(p) for p in prices]
        p = self.period
        out: List[BollingerBands] = []
        for i, mid in enumerate(_sma_series(values, p)):
            if mid is None:
                out.append(BollingerBands())
                continue
            var = sum((v - mid) ** 2 for v in values[i - p + 1:i + 1]) / p
            dev = self.num_std * math.sqrt(var)
            out.append(BollingerBands(upper=mid + dev, middle=mid, lower=mid - dev))
        return out


# ----------------- RSI (Wilder) -----------------
@dataclass
class RSIState:
    gains: Deque[float] = field(default_factory=deque)
    losses: Deque[float] = field(default_factory=deque)
    avg_gain: float = 0.0
    avg_loss: float = 0.0
    initialized: bool = False
    last_price: Optional[float] = None


class RSICalculator:
    """
    Wilder RSI over a sliding window of the last `period` gains/losses.
    With avg_loss == 0 the RS is pinned to 100, so RSI tops out at
    100 - 100/101 (~99.0099) rather than 100.
    """

    def __init__(self, period: int = RSI_PERIOD):
        self.period = _check_period(period)
        self.state = RSIState()

    def update(self, price: float) -> Optional[float]:
        st, p = self.state, self.period
        price = float(price)
        if st.last_price is None:
            st.last_price = price
            return None
        ch = price - st.last_price
        st.last_price = price
        st.gains.append(max(ch, 0.0))
        st.losses.append(max(-ch, 0.0))
        if len(st.gains) > p:
            st.gains.popleft()
            st.losses.popleft()
        if len(st.gains) < p:
            return None

        if not st.initialized:
            st.avg_gain = sum(st.gains) / p
            st.avg_loss = sum(st.losses) / p
            st.initialized = True
        else:
            st.avg_gain = (st.avg_gain * (p - 1) + st.gains[-1]) / p
            st.avg_loss = (st.avg_loss * (p - 1) + st.losses[-1]) / p

        rs = 100.0 if st.avg_loss == 0 else st.avg_gain / st.avg_loss
        return 100.0 - (100.0 / (1.0 + rs))

    def calculate(self, prices: Iterable[float]) -> Series:
        return [self.update(p) for p in prices]

    def reset(self) -> None:
        self.state = RSIState()


# ----------------- MACD -----------------
class MACDPoint(NamedTuple):
    macd: Optional[float] = None
    signal: Optional[float] = None
    hist: Optional[float] = None


class MACDCalculator:
    """MACD(fast, slow, signal); the signal EMA only sees defined MACD values."""

    def __init__(self, fast: int = MACD_FAST, slow: int = MACD_SLOW, signal: int = MACD_SIGNAL):
        self._fast = EMACalculator(_check_period(fast, "fast"))
        self._slow = EMACalculator(_check_period(slow, "slow"))
        self._signal = EMACalculator(_check_period(signal, "signal"))

    def update(self, price: float) -> MACDPoint:
        f = self._fast.update(price)
        s = self._slow.update(price)
        if f is None or s is None:
            return MACDPoint()
        line = f - s
        sig = self._signal.update(line)
        return MACDPoint(macd=line, signal=sig, hist=None if sig is None else line - sig)

    def calculate(self, prices: Iterable[float]) -> List[MACDPoint]:
        return [self.update(p) for p in prices]

    def reset(self) -> None:
        self._fast.reset()
        self._slow.reset()
        self._signal.reset()
