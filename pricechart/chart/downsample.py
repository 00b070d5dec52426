# pricechart/chart/downsample.py
"""
Point reduction for rendering. Both functions are pure: they return a
subsequence of the input bars (never interpolated bars) in input order.
"""
from __future__ import annotations

from typing import List, Sequence, Tuple

from pricechart.data.models import Bar
from pricechart.errors import InvalidParameterError

Point = Tuple[float, float]


def _point(bar: Bar) -> Point:
    return bar.timestamp, bar.close


def _centroid(bars: Sequence[Bar], start: int, end: int) -> Point:
    n = end - start
    sx = sum(bars[i].timestamp for i in range(start, end))
    sy = sum(bars[i].close for i in range(start, end))
    return sx / n, sy / n


def _triangle_area(a: Point, b: Point, c: Point) -> float:
    return abs((a[0] * (b[1] - c[1]) + b[0] * (c[1] - a[1]) + c[0] * (a[1] - b[1])) / 2.0)


def lttb(bars: Sequence[Bar], target_points: int) -> List[Bar]:
    """Largest-Triangle-Three-Buckets on (timestamp, close)."""
    n = len(bars)
    if target_points <= 0 or n <= target_points:
        return list(bars)
    if target_points < 3:
        return list(bars[:target_points])

    buckets = target_points - 2
    inner = n - 2
    sampled: List[Bar] = [bars[0]]
    for i in range(buckets):
        # integer edges: the interior points 1..n-2 are split with no gaps
        start = 1 + (i * inner) // buckets
        end = 1 + ((i + 1) * inner) // buckets
        next_end = min(1 + ((i + 2) * inner) // buckets, n - 1)

        if end < next_end:
            nxt = _centroid(bars, end, next_end)
        else:
            # last bucket: the only point after it is the final bar
            nxt = _point(bars[-1])
        prev = _point(sampled[-1])

        best, best_area = start, -1.0
        for j in range(start, end):
            area = _triangle_area(prev, _point(bars[j]), nxt)
            if area > best_area:  # strict: first max wins
                best, best_area = j, area
        sampled.append(bars[best])

    sampled.append(bars[-1])
    return sampled


def min_max_downsample(bars: Sequence[Bar], target_pixel_width: int) -> List[Bar]:
    """
    Per pixel column keep the lowest-low and highest-high bar, in time order.
    Output length lies in [target_pixel_width, 2 * target_pixel_width].
    """
    if not bars:
        return []
    if target_pixel_width <= 0:
        raise InvalidParameterError(f"target_pixel_width must be > 0, got {target_pixel_width!r}")
    n = len(bars)
    if n <= target_pixel_width * 2:
        return list(bars)

    per_pixel = n / target_pixel_width
    sampled: List[Bar] = []
    for k in range(target_pixel_width):
        lo = int(k * per_pixel)
        hi = n if k == target_pixel_width - 1 else min(int((k + 1) * per_pixel), n)
        if lo >= hi:
            continue
        i_min = min(range(lo, hi), key=lambda i: bars[i].low)
        i_max = max(range(lo, hi), key=lambda i: bars[i].high)
        if i_min == i_max:
            sampled.append(bars[i_min])
        elif bars[i_min].timestamp <= bars[i_max].timestamp:
            sampled.extend((bars[i_min], bars[i_max]))
        else:
            sampled.extend((bars[i_max], bars[i_min]))
    return sampled
