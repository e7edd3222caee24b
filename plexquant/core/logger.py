"""
Logging helpers for the plexquant package.
"""

import functools
import logging
import time
from pathlib import Path
from typing import Callable, Optional, Union

DEFAULT_FORMAT = "%(asctime)s [%(funcName)s] - %(message)s"


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger within the plexquant namespace.

    Parameters
    ----------
    name : str
        Logger name, e.g. "plexquant.crosstab.link".

    Returns
    -------
    logging.Logger
        The requested logger.
    """
    if not name.startswith("plexquant"):
        name = f"plexquant.{name}"
    return logging.getLogger(name)


def configure_logging(
    level: int = logging.INFO,
    log_file: Optional[Union[str, Path]] = None,
    fmt: str = DEFAULT_FORMAT,
) -> None:
    """
    Configure the root logger for command line use.

    Parameters
    ----------
    level : int
        Logging level for the console and the optional log file.
    log_file : str or Path, optional
        Also write the log to this file.
    fmt : str
        Format string for all handlers.
    """
    logging.basicConfig(format=fmt, level=level)
    logging.captureWarnings(True)

    if log_file:
        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(log_file)
        handler.setLevel(level)
        handler.setFormatter(logging.Formatter(fmt))
        logging.getLogger().addHandler(handler)


def log_execution_time(logger: logging.Logger, level: int = logging.INFO) -> Callable:
    """Decorator that logs how long the wrapped function took."""

    def decorator(func):
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            start = time.time()
            result = func(*args, **kwargs)
            logger.log(level, "%s finished in %.2f seconds", func.__qualname__, time.time() - start)
            return result

        return wrapper

    return decorator


def initialize_logging() -> None:
    """
    Attach a NullHandler to the package logger.

    Library users see nothing unless they configure logging themselves,
    e.g. through configure_logging() or the command line options.
    """
    package_logger = logging.getLogger("plexquant")
    if not any(isinstance(h, logging.NullHandler) for h in package_logger.handlers):
        package_logger.addHandler(logging.NullHandler())
