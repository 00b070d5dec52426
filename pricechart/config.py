# pricechart/config.py
import os

from dotenv import load_dotenv

load_dotenv()

# =========================
#  Chart / Data behavior
# =========================

DEFAULT_SYMBOL: str = os.getenv("DEFAULT_SYMBOL", "TSLA")
DEFAULT_TIMEFRAME: str = os.getenv("DEFAULT_TIMEFRAME", "1h")  # 1m, 5m, 15m, 1h, 1d

# Number of bars in the viewport at zoom 1.0
DEFAULT_VISIBLE_BARS: int = int(os.getenv("DEFAULT_VISIBLE_BARS", "100"))

# =========================
#  Rendering budget
# =========================

# Point budget handed to the downsampler when the caller gives none
MAX_RENDER_POINTS: int = int(os.getenv("MAX_RENDER_POINTS", "1000"))
DOWNSAMPLE_METHOD: str = os.getenv("DOWNSAMPLE_METHOD", "lttb")  # lttb | minmax

# =========================
#  Logs
# =========================

LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
