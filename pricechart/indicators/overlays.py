# pricechart/indicators/overlays.py
# Which series the chart asks for: price-pane overlays and lower-pane indicators.
from __future__ import annotations

from enum import Flag
from typing import List


class Overlay(Flag):
    NONE = 0
    EMA20 = 1 << 0
    EMA50 = 1 << 1
    SMA20 = 1 << 2
    SMA50 = 1 << 3
    BOLLINGER20 = 1 << 4
    ALL = EMA20 | EMA50 | SMA20 | SMA50 | BOLLINGER20

    @property
    def display_names(self) -> List[str]:
        return [_OVERLAY_NAMES[o] for o in _OVERLAY_NAMES if o in self]


class Indicator(Flag):
    NONE = 0
    RSI14 = 1 << 0
    MACD = 1 << 1
    ALL = RSI14 | MACD

    @property
    def display_names(self) -> List[str]:
        return [_INDICATOR_NAMES[i] for i in _INDICATOR_NAMES if i in self]


_OVERLAY_NAMES = {
    Overlay.EMA20: "EMA 20",
    Overlay.EMA50: "EMA 50",
    Overlay.SMA20: "SMA 20",
    Overlay.SMA50: "SMA 50",
    Overlay.BOLLINGER20: "Bollinger 20",
}

_INDICATOR_NAMES = {
    Indicator.RSI14: "RSI 14",
    Indicator.MACD: "MACD",
}
