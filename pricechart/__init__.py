# pricechart/__init__.py
from pricechart.data.models import Bar, Tick, Timeframe
from pricechart.data.resample import BarAggregator, IngestResult
from pricechart.errors import ChartCoreError, InvalidParameterError, OutOfOrderTickError

__all__ = [
    "Bar", "Tick", "Timeframe",
    "BarAggregator", "IngestResult",
    "ChartCoreError", "InvalidParameterError", "OutOfOrderTickError",
]
