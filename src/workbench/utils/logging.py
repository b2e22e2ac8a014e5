"""
Logging configuration for the Workbench extension host.

Modules get their logger from setup_logging(__name__) and normally leave
output to the "workbench" package logger, which the CLI configures once
through configure_logging().
"""

import logging
import sys
from pathlib import Path

from pythonjsonlogger.json import JsonFormatter

PACKAGE_LOGGER = "workbench"

STANDARD_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
STRUCTURED_FORMAT = "%(asctime)s %(name)s %(levelname)s %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _make_formatter(structured: bool) -> logging.Formatter:
    if structured:
        return JsonFormatter(fmt=STRUCTURED_FORMAT, datefmt=DATE_FORMAT)
    return logging.Formatter(fmt=STANDARD_FORMAT, datefmt=DATE_FORMAT)


def _make_handler(formatter: logging.Formatter, log_file: Path | None = None) -> logging.Handler:
    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handler: logging.Handler = logging.FileHandler(log_file)
    else:
        handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(formatter)
    return handler


def setup_logging(
    name: str | None = None,
    level: str | None = None,
    structured: bool = False,
    log_file: Path | None = None
) -> logging.Logger:
    """Setup logging configuration.

    Args:
        name: Logger name (defaults to calling module)
        level: Logging level (INFO, DEBUG, etc.)
        structured: Enable JSON structured logging
        log_file: Optional log file path

    Returns:
        Configured logger instance
    """
    if name is None:
        name = __name__

    logger = logging.getLogger(name)

    # Avoid duplicate handlers
    if logger.handlers:
        return logger

    # Without an explicit level the logger defers to the "workbench" parent
    if level is not None:
        logger.setLevel(getattr(logging, level.upper()))

    if log_file or structured or level is not None:
        logger.addHandler(_make_handler(_make_formatter(structured), log_file))

    return logger


def configure_logging(
    level: str = "INFO",
    structured: bool = False,
    log_file: Path | None = None
) -> logging.Logger:
    """Configure the "workbench" package logger for a CLI run.

    Output goes to stderr, and additionally to ``log_file`` when given.
    Calling it again replaces the previous handlers.

    Args:
        level: Logging level for every workbench module
        structured: Enable JSON structured logging
        log_file: Optional log file path

    Returns:
        The package logger
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = _make_formatter(structured)
    logger.addHandler(_make_handler(formatter))
    if log_file:
        logger.addHandler(_make_handler(formatter, log_file))

    # Unknown levels are reported by settings validation, not here
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    logger.propagate = False
    return logger
