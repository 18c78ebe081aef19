"""Log output setup for the todofilter command.

Only the ``todofilter`` package logger is configured. The root logger and
the handlers of a host application are left alone, and package records do
not propagate to them once the command has installed its own handlers.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional

PACKAGE_LOGGER_NAME = "todofilter"

_PLAIN_FORMAT = "todofilter %(levelname)s: %(message)s"
_TRACE_FORMAT = "[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s"
_TRACE_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _resolve_level(log_level: int | str) -> int:
    if isinstance(log_level, int):
        return log_level
    level = logging.getLevelName(str(log_level).upper())
    return level if isinstance(level, int) else logging.INFO


def _drop_handlers(logger: logging.Logger) -> None:
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()


def configure_logging(
    log_level: int | str,
    log_file: Optional[str] = None,
    trace_mode: bool = False,
) -> logging.Logger:
    """Send the package's log records to stderr and, optionally, a file.

    stdout is never used: it carries the rewritten pandoc JSON. Calling this
    again replaces the handlers installed by the previous call.

    Parameters
    ----------
    log_level : int | str
        Numeric logging level or level name (e.g., "INFO"); unknown names
        fall back to INFO
    log_file : str, optional
        Path of a file that also receives every record, appended to
    trace_mode : bool, default False
        Include timestamps and logger names

    Returns
    -------
    logging.Logger
        The ``todofilter`` package logger

    """
    level = _resolve_level(log_level)
    package_logger = logging.getLogger(PACKAGE_LOGGER_NAME)
    _drop_handlers(package_logger)
    package_logger.setLevel(level)
    package_logger.propagate = False

    if trace_mode:
        formatter = logging.Formatter(_TRACE_FORMAT, datefmt=_TRACE_DATE_FORMAT)
    else:
        formatter = logging.Formatter(_PLAIN_FORMAT)

    targets: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    file_error: OSError | None = None
    if log_file:
        try:
            targets.append(logging.FileHandler(log_file, mode="a", encoding="utf-8"))
        except OSError as exc:
            file_error = exc

    for handler in targets:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        package_logger.addHandler(handler)

    if file_error is not None:
        package_logger.warning("Could not open log file %s: %s", log_file, file_error)
    elif log_file:
        package_logger.debug("Logging to file: %s", log_file)

    return package_logger
