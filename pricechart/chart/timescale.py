# pricechart/chart/timescale.py
from __future__ import annotations

from datetime import datetime, timezone

from pricechart.data.models import Timeframe

MIN_CANDLE_WIDTH = 1.0
MAX_CANDLE_WIDTH = 20.0

# (max visible range in seconds, grid step); last step applies beyond the table
_GRID_STEPS = {
    Timeframe.M1: ((3600, 300), (7200, 600), (None, 1800)),
    Timeframe.M5: ((3600, 900), (14400, 1800), (None, 3600)),
    Timeframe.M15: ((14400, 3600), (None, 7200)),
    Timeframe.H1: ((86400, 14400), (None, 43200)),
    Timeframe.D1: ((604800, 86400), (None, 604800)),
}


class TimeScale:
    """Time-axis helpers for one timeframe (labels, grid spacing, candle width)."""

    def __init__(self, timeframe: Timeframe):
        self.timeframe = timeframe

    def format_timestamp(self, ts: float) -> str:
        dt = datetime.fromtimestamp(ts, tz=timezone.utc)
        if self.timeframe is Timeframe.D1:
            return dt.strftime("%b %d")
        return dt.strftime("%H:%M")

    def grid_interval(self, visible_range: float) -> int:
        steps = _GRID_STEPS[self.timeframe]
        for limit, step in steps[:-1]:
            if visible_range <= limit:
                return step
        return steps[-1][1]

    @staticmethod
    def optimal_candle_width(container_width: float, visible_candles: int) -> float:
        if visible_candles <= 0:
            return MAX_CANDLE_WIDTH
        ideal = container_width / visible_candles
        return max(MIN_CANDLE_WIDTH, min(MAX_CANDLE_WIDTH, ideal))

    @staticmethod
    def should_show_candlesticks(candle_width: float) -> bool:
        return candle_width >= 2.0
