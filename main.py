# main.py
# Headless replay: history (JSON file or sample data) + synthetic live ticks
# through the chart core, then a summary of what a renderer would receive.
import argparse
import json
import sys

from pricechart import config
from pricechart.chart.coordinator import ChartDataCoordinator
from pricechart.data.loader import generate_sample_bars, generate_ticks, load_bars_json
from pricechart.data.models import Timeframe
from pricechart.indicators.overlays import Indicator, Overlay
from pricechart.log import get_logger, setup_logging

logger = get_logger("main")


def _last_defined(values):
    for v in reversed(values):
        if v is not None:
            return v
    return None


def main(argv=None) -> int:
    ap = argparse.ArgumentParser(description="Replay bars and ticks through the chart core.")
    ap.add_argument("--json", help="JSON array of {timestamp, open, high, low, close, volume}")
    ap.add_argument("--symbol", default=config.DEFAULT_SYMBOL)
    ap.add_argument("--timeframe", default=config.DEFAULT_TIMEFRAME)
    ap.add_argument("--ticks", type=int, default=600, help="synthetic live ticks after history")
    ap.add_argument("--points", type=int, default=config.MAX_RENDER_POINTS)
    ap.add_argument("--method", choices=("lttb", "minmax"), default=config.DOWNSAMPLE_METHOD)
    ap.add_argument("--zoom", type=float, default=1.0)
    ap.add_argument("--seed", type=int, default=None)
    args = ap.parse_args(argv)

    setup_logging()
    tf = Timeframe.parse(args.timeframe)

    bars = load_bars_json(args.json) if args.json else generate_sample_bars(timeframe=tf, seed=args.seed)
    coord = ChartDataCoordinator(args.symbol, tf)
    coord.set_data(bars)
    coord.overlays = Overlay.EMA20 | Overlay.BOLLINGER20
    coord.indicators = Indicator.ALL
    coord.set_zoom(args.zoom)

    closed = 0
    if coord.bars:
        for tick in generate_ticks(coord.bars[-1], args.ticks, interval=tf.seconds / 60, seed=args.seed):
            if coord.on_tick(tick).completed is not None:
                closed += 1
    logger.info("%d live ticks, %d bars closed", args.ticks, closed)

    rendered = coord.render_bars(args.points, args.method)
    series = coord.indicator_series()
    out = dict(coord.summary())
    out.update({
        "visible": len(coord.visible_bars()),
        "rendered": len(rendered),
        "method": args.method,
        "overlays": coord.overlays.display_names,
        "indicators": coord.indicators.display_names,
        "last": {name: _last_defined(values) for name, values in series.items()},
    })
    print(json.dumps(out, indent=2, default=str))
    return 0


if __name__ == "__main__":
    sys.exit(main())
