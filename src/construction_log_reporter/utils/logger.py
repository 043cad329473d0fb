"""Logging setup for the report pipeline (plain text or JSON lines)."""

import logging
import sys
from pythonjsonlogger import jsonlogger

# httpx logs every request at INFO, PIL logs plugin probing at DEBUG
_LIBRARY_LOGGERS = ("httpx", "httpcore", "PIL")


def setup_logging(
    log_level: str = "INFO",
    json_format: bool = False,
    library_level: str = "WARNING",
) -> None:
    """
    Configure the root logger for a report run.

    Args:
        log_level: Level for the application's own loggers
        json_format: If True, emit one JSON object per line for log collectors
        library_level: Level applied to chatty third-party loggers
    """
    level = log_level.upper()
    root = logging.getLogger()
    root.setLevel(level)

    for handler in root.handlers[:]:
        root.removeHandler(handler)

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)

    if json_format:
        # Keep Chinese project names and labels readable in the output
        formatter = jsonlogger.JsonFormatter(
            fmt="%(asctime)s %(name)s %(levelname)s %(message)s",
            datefmt="%Y-%m-%dT%H:%M:%S",
            json_ensure_ascii=False,
        )
    else:
        formatter = logging.Formatter(
            fmt="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

    handler.setFormatter(formatter)
    root.addHandler(handler)

    for name in _LIBRARY_LOGGERS:
        logging.getLogger(name).setLevel(library_level.upper())


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
