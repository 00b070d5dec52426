# pricechart/log.py
from __future__ import annotations

import logging
import sys
from typing import Optional, Union

from pricechart import config

ROOT_NAME = "pricechart"
_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)-24s | %(message)s"


def setup_logging(level: Optional[Union[int, str]] = None, stream=None) -> logging.Logger:
    """
    Attach one handler to the `pricechart` logger (stdout unless `stream`).
    Level defaults to config.LOG_LEVEL. Calling again only changes the level.
    """
    logger = logging.getLogger(ROOT_NAME)
    if level is None:
        level = config.LOG_LEVEL
    logger.setLevel(level.upper() if isinstance(level, str) else level)

    if not any(getattr(h, "_pricechart", False) for h in logger.handlers):
        handler = logging.StreamHandler(stream or sys.stdout)
        handler.setFormatter(logging.Formatter(_FORMAT, datefmt="%H:%M:%S"))
        handler._pricechart = True
        logger.addHandler(handler)
        logger.propagate = False
    return logger


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(f"{ROOT_NAME}.{name}")
