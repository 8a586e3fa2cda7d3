"""
Logging configuration for the armswing scripts.

Library modules only create loggers with `logging.getLogger(__name__)`;
handlers are installed here, by whoever runs the process.
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional, Union

LOGGER_NAME = "armswing"

_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


class JsonFormatter(logging.Formatter):
    """One JSON object per record."""

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.fromtimestamp(record.created).isoformat(),
            "level": record.levelname,
            "name": record.name,
            "message": record.getMessage(),
            "function": record.funcName,
            "line": record.lineno,
        }
        if record.exc_info:
            log_data["exception"] = {
                "type": record.exc_info[0].__name__,
                "message": str(record.exc_info[1]),
            }
        return json.dumps(log_data)


def parse_level(level: Union[int, str]) -> int:
    if isinstance(level, int):
        return level
    return _LEVELS.get(str(level).upper(), logging.INFO)


def setup_logging(
    level: Union[int, str] = logging.INFO,
    json_output: bool = False,
    log_file: Optional[str] = None,
) -> logging.Logger:
    """
    Attach a stdout handler (and optionally a file handler) to the
    `armswing` logger. Calling it again replaces the previous handlers.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(parse_level(level))

    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
        handler.close()

    if json_output:
        formatter: logging.Formatter = JsonFormatter()
    else:
        formatter = logging.Formatter(
            "[%(asctime)s] %(levelname)s [%(name)s:%(funcName)s:%(lineno)d] - %(message)s"
        )

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    logger.debug("Logging configured: level=%s json=%s", logging.getLevelName(logger.level), json_output)
    return logger
