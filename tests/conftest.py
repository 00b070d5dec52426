import math
import random

import pytest

from pricechart.data.models import Bar


def make_bars(count, start=1699200000.0, step=3600.0, seed=7):
    """Sine wave + noise, same shape as the chart demo data."""
    rng = random.Random(seed)
    bars = []
    for i in range(count):
        price = 100 + math.sin(i * 0.1) * 10 + rng.uniform(-2, 2)
        close = price + rng.uniform(-1, 1)
        bars.append(Bar(
            timestamp=start + i * step,
            open=price,
            high=max(price, close) + rng.uniform(0, 3),
            low=min(price, close) - rng.uniform(0, 3),
            close=close,
            volume=rng.uniform(1000, 10000),
        ))
    return bars


@pytest.fixture
def bars_1000():
    return make_bars(1000)
