# pricechart/chart/chart_bridge.py
from __future__ import annotations

import json
from math import isfinite
from typing import Any, Dict, List, Optional, Sequence

from PyQt6.QtCore import QObject, pyqtSignal

from pricechart.chart.coordinator import ChartDataCoordinator
from pricechart.data.models import Bar, Tick
from pricechart.indicators.ta import BollingerBands, MACDPoint


def _dumps(obj: Any) -> str:
    return json.dumps(obj, separators=(",", ":"))


def line_points(times: Sequence[float], values: Sequence[Optional[float]]) -> List[Dict[str, float]]:
    """[{time, value}] for every defined point; absent values are left out, not zeroed."""
    return [
        {"time": t, "value": float(v)}
        for t, v in zip(times, values)
        if v is not None and isfinite(v)
    ]


def series_payload(bars: Sequence[Bar], series: Dict[str, Any]) -> Dict[str, Any]:
    times = [b.timestamp for b in bars]
    out: Dict[str, Any] = {}
    for name, values in series.items():
        if values and isinstance(values[0], BollingerBands):
            out[name] = {
                "upper": line_points(times, [b.upper for b in values]),
                "middle": line_points(times, [b.middle for b in values]),
                "lower": line_points(times, [b.lower for b in values]),
            }
        elif values and isinstance(values[0], MACDPoint):
            out[name] = {
                "line": line_points(times, [m.macd for m in values]),
                "signal": line_points(times, [m.signal for m in values]),
                "hist": line_points(times, [m.hist for m in values]),
            }
        else:
            out[name] = line_points(times, values)
    return out


class ChartBridge(QObject):
    """
    Qt side of the chart: pushes coordinator outputs to the front end as JSON.
    The front end connects to:
      bridge.seriesLoaded     (JSON list[bar], already downsampled)
      bridge.barUpdated       (JSON bar, live)
      bridge.indicatorsLoaded (JSON dict of series)
      bridge.summaryUpdated   (JSON HUD dict)
    """

    seriesLoaded = pyqtSignal(str)
    barUpdated = pyqtSignal(str)
    indicatorsLoaded = pyqtSignal(str)
    summaryUpdated = pyqtSignal(str)

    def __init__(self, coordinator: ChartDataCoordinator, parent=None):
        super().__init__(parent)
        self.coordinator = coordinator

    def send_bars_batch(self, target_points: Optional[int] = None) -> None:
        bars = self.coordinator.render_bars(target_points)
        self.seriesLoaded.emit(_dumps([b.model_dump() for b in bars]))

    def send_indicators_all(self) -> None:
        history = self.coordinator.bars
        payload = series_payload(history, self.coordinator.indicator_series(history))
        self.indicatorsLoaded.emit(_dumps(payload))

    def send_summary(self) -> None:
        self.summaryUpdated.emit(_dumps(self.coordinator.summary()))

    def refresh(self, target_points: Optional[int] = None) -> None:
        self.send_bars_batch(target_points)
        self.send_indicators_all()
        self.send_summary()

    def push_tick(self, tick: Tick) -> None:
        """Feed one live tick; a closed bar is sent before the new open one."""
        res = self.coordinator.on_tick(tick)
        if res.completed is not None:
            self.barUpdated.emit(_dumps(res.completed.model_dump()))
        if res.updated is not None:
            self.barUpdated.emit(_dumps(res.updated.model_dump()))
