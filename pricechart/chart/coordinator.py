# pricechart/chart/coordinator.py
from __future__ import annotations

from typing import Any, Dict, List, Optional, Sequence

from pricechart import config
from pricechart.chart.downsample import lttb, min_max_downsample
from pricechart.data.models import Bar, Tick, Timeframe
from pricechart.data.resample import BarAggregator, IngestResult
from pricechart.errors import InvalidParameterError, OutOfOrderTickError
from pricechart.indicators.overlays import Indicator, Overlay
from pricechart.indicators.ta import (
    BollingerBandsCalculator, EMACalculator, MACDCalculator, RSICalculator, SMACalculator,
)
from pricechart.log import get_logger

logger = get_logger("coordinator")

MIN_ZOOM, MAX_ZOOM = 0.1, 10.0
DOWNSAMPLERS = {"lttb": lttb, "minmax": min_max_downsample}


class ChartDataCoordinator:
    """
    Owns the bar history of one symbol/timeframe and feeds the core:
    ticks -> BarAggregator -> history -> {indicators, downsampler}.
    Not thread-safe: one caller (the UI thread or a worker) drives it.
    """

    def __init__(self, symbol: str = config.DEFAULT_SYMBOL,
                 timeframe: Timeframe | str = config.DEFAULT_TIMEFRAME):
        self.symbol = symbol
        self.timeframe = timeframe if isinstance(timeframe, Timeframe) else Timeframe.parse(timeframe)
        self.overlays = Overlay.NONE
        self.indicators = Indicator.NONE

        self._bars: List[Bar] = []
        self._agg = BarAggregator(self.timeframe)
        self._zoom = 1.0
        self._pan = 0          # bars back from the newest one

    # --------- history ---------
    @property
    def bars(self) -> List[Bar]:
        return list(self._bars)

    def set_data(self, bars: Sequence[Bar]) -> None:
        self._bars = list(bars)
        self.reset_viewport()
        self._agg.reset()
        if self._bars:
            # live ticks keep extending the last historical bar
            self._adopt_last(self._bars[-1])
        logger.info("%s %s history bars: %d", self.symbol, self.timeframe.value, len(self._bars))

    def _adopt_last(self, bar: Bar) -> None:
        # history holds the bucket-aligned copy so ticks upsert onto it
        self._agg.seed(bar)
        self._bars[-1] = self._agg.current

    def append(self, bar: Bar) -> None:
        if self._bars and self._agg.bucket_of(bar.timestamp) <= self._bars[-1].timestamp:
            raise InvalidParameterError(
                f"bar t={bar.timestamp} does not follow last bar t={self._bars[-1].timestamp}"
            )
        self._bars.append(bar)
        self._adopt_last(bar)

    def update_last(self, bar: Bar) -> None:
        if not self._bars:
            return
        self._adopt_last(bar)

    def _upsert(self, bar: Bar) -> None:
        if self._bars and self._bars[-1].timestamp == bar.timestamp:
            self._bars[-1] = bar
        else:
            self._bars.append(bar)

    def on_tick(self, tick: Tick) -> IngestResult:
        try:
            res = self._agg.ingest(tick)
        except OutOfOrderTickError as e:
            logger.debug("skip late tick t=%s: %s", tick.timestamp, e)
            return IngestResult()
        if res.completed is not None:
            self._upsert(res.completed)
        if res.updated is not None:
            self._upsert(res.updated)
        return res

    # --------- timeframe ---------
    def set_timeframe(self, timeframe: Timeframe) -> None:
        if timeframe is self.timeframe:
            return
        self.timeframe = timeframe
        # history belongs to the old timeframe: the caller reloads it via set_data()
        self._agg = BarAggregator(timeframe)
        logger.info("timeframe -> %s", timeframe.value)

    def cycle_timeframe_up(self) -> None:
        self.set_timeframe(self.timeframe.next)

    def cycle_timeframe_down(self) -> None:
        self.set_timeframe(self.timeframe.previous)

    # --------- overlays / indicators ---------
    def toggle_overlay(self, overlay: Overlay) -> None:
        self.overlays ^= overlay

    def toggle_indicator(self, indicator: Indicator) -> None:
        self.indicators ^= indicator

    # --------- viewport ---------
    @property
    def zoom(self) -> float:
        return self._zoom

    def visible_count(self) -> int:
        return max(1, int(config.DEFAULT_VISIBLE_BARS / self._zoom))

    def set_zoom(self, scale: float) -> None:
        self._zoom = max(MIN_ZOOM, min(MAX_ZOOM, float(scale)))
        self._pan = min(self._pan, self._max_pan())

    def _max_pan(self) -> int:
        return max(0, len(self._bars) - self.visible_count())

    def pan(self, by_bars: int) -> None:
        self._pan = max(0, min(self._max_pan(), self._pan + by_bars))

    def reset_viewport(self) -> None:
        self._zoom = 1.0
        self._pan = 0

    def visible_bars(self) -> List[Bar]:
        end = len(self._bars) - self._pan
        start = max(0, end - self.visible_count())
        return self._bars[start:end]

    # --------- render outputs ---------
    def render_bars(self, target_points: Optional[int] = None,
                    method: str = config.DOWNSAMPLE_METHOD) -> List[Bar]:
        fn = DOWNSAMPLERS.get(method)
        if fn is None:
            raise InvalidParameterError(f"unknown downsample method: {method!r}")
        if target_points is None:
            target_points = config.MAX_RENDER_POINTS
        return fn(self.visible_bars(), target_points)

    def indicator_series(self, bars: Optional[Sequence[Bar]] = None) -> Dict[str, Any]:
        """Series for every enabled overlay/indicator, index-aligned with `bars` (default: history)."""
        closes = [b.close for b in (self._bars if bars is None else bars)]
        out: Dict[str, Any] = {}
        for flag, period in ((Overlay.EMA20, 20), (Overlay.EMA50, 50)):
            if flag in self.overlays:
                out[f"ema{period}"] = EMACalculator(period).calculate(closes)
        for flag, period in ((Overlay.SMA20, 20), (Overlay.SMA50, 50)):
            if flag in self.overlays:
                out[f"sma{period}"] = SMACalculator(period).calculate(closes)
        if Overlay.BOLLINGER20 in self.overlays:
            out["bollinger20"] = BollingerBandsCalculator(20).calculate(closes)
        if Indicator.RSI14 in self.indicators:
            out["rsi14"] = RSICalculator(14).calculate(closes)
        if Indicator.MACD in self.indicators:
            out["macd"] = MACDCalculator().calculate(closes)
        return out

    def summary(self) -> Dict[str, Any]:
        visible = self.visible_bars()
        price = visible[-1].close if visible else 0.0
        first = visible[0].close if visible else price
        pct = (price - first) / first * 100.0 if first else 0.0
        return {
            "symbol": self.symbol,
            "timeframe": self.timeframe.value,
            "price": price,
            "percentChange": pct,
            "bars": len(self._bars),
        }
