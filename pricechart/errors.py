# pricechart/errors.py
"""Exceptions raised by the chart core."""


class ChartCoreError(Exception):
    """Base class for every error raised by pricechart."""


class InvalidParameterError(ChartCoreError, ValueError):
    """A period, duration or point budget is out of range."""


class OutOfOrderTickError(ChartCoreError):
    """A tick landed in a bucket older than the currently open bar."""

    def __init__(self, bucket: float, open_bucket: float):
        super().__init__(f"tick bucket {bucket} is before open bucket {open_bucket}")
        self.bucket = bucket
        self.open_bucket = open_bucket
