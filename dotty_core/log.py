from __future__ import annotations

import logging
import os
from typing import Optional

LOGGER_NAME = "dotty"

_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def _env_debug() -> bool:
    return os.getenv('DOTTY_DEBUG', '0').lower() in ('1', 'true', 'yes', 'on')


def get_logger(suffix: Optional[str] = None) -> logging.Logger:
    """Returns the package logger or one of its children (dotty.<suffix>)."""
    return logging.getLogger(f"{LOGGER_NAME}.{suffix}" if suffix else LOGGER_NAME)


def configure_logging(debug: Optional[bool] = None) -> logging.Logger:
    """Installs a basic handler for entrypoints. Set DOTTY_DEBUG=1 for debug records."""
    if debug is None:
        debug = _env_debug()
    logging.basicConfig(level=logging.INFO, format=_FORMAT, datefmt="%H:%M:%S")
    log = get_logger()
    log.setLevel(logging.DEBUG if debug else logging.INFO)
    return log
