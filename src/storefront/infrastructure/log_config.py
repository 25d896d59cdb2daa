"""Logging setup for the storefront process.

Library modules only ever call ``logging.getLogger(__name__)``; handlers
and formatters are installed once, here, by the entry point.  JSON output
uses python-json-logger so that ``extra=`` fields become top-level keys.
"""

from __future__ import annotations

import logging

from pythonjsonlogger.json import JsonFormatter

_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


def configure_logging(level: str = "INFO", json_format: bool = True) -> logging.Logger:
    logger = logging.getLogger("storefront")
    if not logger.handlers:
        handler = logging.StreamHandler()
        if json_format:
            handler.setFormatter(JsonFormatter(_FORMAT))
        else:
            handler.setFormatter(logging.Formatter(_FORMAT))
        logger.addHandler(handler)
    logger.setLevel(level)
    return logger
