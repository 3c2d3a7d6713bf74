"""Logging setup for the httpapi command line."""

import logging
import sys
from typing import Optional

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def _level_number(level: str) -> int:
    number = logging.getLevelName(level.upper())
    return number if isinstance(number, int) else logging.INFO


def setup_logging(
    level: str = "INFO",
    log_file: Optional[str] = None,
    name: str = "httpapi",
    format_string: str = LOG_FORMAT,
) -> logging.Logger:
    """
    Route the package's log records to stderr and, optionally, a file.

    Handlers installed by an earlier call are closed and replaced, so the
    CLI can be invoked repeatedly in one process without duplicate output.
    Unknown level names fall back to INFO.

    Returns:
        The configured logger
    """
    logger = logging.getLogger(name)
    logger.setLevel(_level_number(level))

    for handler in [h for h in logger.handlers if getattr(h, "_httpapi_owned", False)]:
        logger.removeHandler(handler)
        handler.close()

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))

    formatter = logging.Formatter(format_string)
    for handler in handlers:
        handler.setFormatter(formatter)
        handler._httpapi_owned = True  # type: ignore[attr-defined]
        logger.addHandler(handler)

    # Records are already written here; the root logger would print them twice
    logger.propagate = False
    return logger
