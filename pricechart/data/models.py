# pricechart/data/models.py
# Pydantic types (Bar, Tick) + Timeframe

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, model_validator

from pricechart.errors import InvalidParameterError


class Tick(BaseModel):
    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    timestamp: float     # epoch seconds
    price: float
    volume: float = Field(default=0.0, ge=0.0)


class Bar(BaseModel):
    """OHLCV bar; `timestamp` is the bucket start in epoch seconds."""
    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    timestamp: float
    open: float
    high: float
    low: float
    close: float
    volume: float = Field(default=0.0, ge=0.0)

    @model_validator(mode="after")
    def _check_ohlc(self) -> "Bar":
        if self.low > min(self.open, self.close) or self.high < max(self.open, self.close):
            raise ValueError(
                f"OHLC out of order: o={self.open} h={self.high} l={self.low} c={self.close}"
            )
        return self

    @property
    def is_green(self) -> bool:
        return self.close >= self.open

    @property
    def body_high(self) -> float:
        return max(self.open, self.close)

    @property
    def body_low(self) -> float:
        return min(self.open, self.close)

    @property
    def range(self) -> float:
        return self.high - self.low

    @property
    def body_height(self) -> float:
        return abs(self.close - self.open)


_TF_SECONDS = {"1m": 60, "5m": 300, "15m": 900, "1h": 3600, "1d": 86400}
_TF_NAMES = {"1m": "1 minute", "5m": "5 minutes", "15m": "15 minutes", "1h": "1 hour", "1d": "1 day"}


class Timeframe(str, Enum):
    M1 = "1m"
    M5 = "5m"
    M15 = "15m"
    H1 = "1h"
    D1 = "1d"

    @property
    def seconds(self) -> int:
        return _TF_SECONDS[self.value]

    @property
    def display_name(self) -> str:
        return _TF_NAMES[self.value]

    @property
    def short_display_name(self) -> str:
        return self.value.upper()

    @property
    def next(self) -> "Timeframe":
        order = list(Timeframe)
        i = order.index(self)
        return order[min(i + 1, len(order) - 1)]

    @property
    def previous(self) -> "Timeframe":
        order = list(Timeframe)
        i = order.index(self)
        return order[max(i - 1, 0)]

    @classmethod
    def parse(cls, value: str) -> "Timeframe":
        """Accepts "1h", "1H", "H1" style names."""
        key = value.strip().lower()
        for tf in cls:
            if key == tf.value or key == tf.name.lower():
                return tf
        raise InvalidParameterError(f"unknown timeframe: {value!r}")
