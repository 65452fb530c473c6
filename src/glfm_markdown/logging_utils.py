"""Logging setup for the glfm-markdown command line."""

from __future__ import annotations

import logging
import sys
from typing import Optional

PACKAGE_LOGGER_NAME = "glfm_markdown"


def resolve_log_level(log_level: int | str) -> int:
    """Return the numeric level for a level name such as ``"debug"``.

    Unknown names resolve to ``WARNING``, the CLI default.
    """
    if isinstance(log_level, int):
        return log_level
    level = logging.getLevelName(str(log_level).upper())
    return level if isinstance(level, int) else logging.WARNING


def configure_logging(
    log_level: int | str,
    log_file: Optional[str] = None,
    trace_mode: bool = False,
) -> logging.Logger:
    """Attach stderr (and optionally file) handlers to the package logger.

    Only the ``glfm_markdown`` logger hierarchy is touched, so embedding
    applications keep control of the root logger. Calling this again
    replaces the handlers installed by the previous call.

    Parameters
    ----------
    log_level : int | str
        Numeric logging level or level name (e.g., "DEBUG").
    log_file : str, optional
        Path of a file that receives the same records as stderr.
    trace_mode : bool, default False
        Include timestamps and logger names in every record.

    Returns
    -------
    logging.Logger
        The configured package logger.

    """
    level = resolve_log_level(log_level)

    package_logger = logging.getLogger(PACKAGE_LOGGER_NAME)
    package_logger.setLevel(level)
    package_logger.propagate = False
    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
        handler.close()

    if trace_mode:
        formatter = logging.Formatter("[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s", "%Y-%m-%d %H:%M:%S")
    else:
        formatter = logging.Formatter("%(levelname)s: %(message)s")

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_file:
        try:
            handlers.append(logging.FileHandler(log_file, mode="a", encoding="utf-8"))
        except OSError as exc:
            package_logger.warning("Could not open log file %s: %s", log_file, exc)

    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        package_logger.addHandler(handler)

    if log_file and len(handlers) > 1:
        package_logger.info("Logging to file: %s", log_file)

    return package_logger
