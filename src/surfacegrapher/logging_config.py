"""
Logging Configuration
Sets up the 'surfacegrapher' logger for the application.

Setting the environment variable ``SURFACEGRAPHER_DEBUG`` switches to DEBUG
level and additionally writes everything to ``app_debug.log``.
"""
import logging
import os
import sys
from typing import Optional

DEBUG_ENV_VAR = "SURFACEGRAPHER_DEBUG"
DEBUG_LOG_FILE = "app_debug.log"

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%H:%M:%S"

# Third-party loggers that are too chatty below WARNING
_NOISY_LOGGERS = ("pyvista", "vtkmodules", "PIL")


def debug_requested() -> bool:
    value = os.environ.get(DEBUG_ENV_VAR, "")
    return value.strip().lower() not in ("", "0", "false", "no", "off")


def setup_logging(level: int = logging.INFO, log_file: Optional[str] = None) -> logging.Logger:
    """
    Attach console (and optional file) handlers to the package logger.

    Calling it again replaces the previous handlers.

    Args:
        level: Logging level, e.g. ``logging.DEBUG``.
        log_file: Optional path of a log file, truncated on start.

    Returns:
        The configured package logger.
    """
    logger = logging.getLogger("surfacegrapher")
    logger.setLevel(level)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, mode="w", encoding="utf-8"))
    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))

    logger.info(f"Logging initialized at {logging.getLevelName(level)}.")
    return logger


def setup_logging_from_env() -> logging.Logger:
    if debug_requested():
        return setup_logging(level=logging.DEBUG, log_file=DEBUG_LOG_FILE)
    return setup_logging(level=logging.INFO)
