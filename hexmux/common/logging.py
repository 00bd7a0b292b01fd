# hexmux/common/logging.py
from __future__ import annotations

import logging


def get_logger(name: str = "hexmux", level: int | None = None) -> logging.Logger:
    """
    Return the package logger.
    If no handlers are set anywhere, we add a basicConfig once using the
    configured log level.
    """
    logger = logging.getLogger(name)
    if level is None:
        from hexmux.common.settings import get_settings
        level = logging.getLevelName(get_settings().log_level.upper())
        if not isinstance(level, int):
            level = logging.INFO
    if not logging.getLogger().handlers and not logger.handlers:
        logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    logger.setLevel(level)
    return logger
