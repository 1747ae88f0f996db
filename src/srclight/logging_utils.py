"""Logging setup for the ``srclight`` command.

The CLI flags map onto :func:`configure_logging` as follows:

- ``--log-level LEVEL`` sets the level of the ``srclight`` loggers
- ``--log-file PATH`` also appends every record to PATH
- ``--trace`` switches to DEBUG with timestamps and logger names, which
  includes the per-block timings written by ``debug_timer``

Library code never calls this; it only logs through module loggers.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional

PACKAGE_LOGGER = "srclight"

# Other libraries log at this level or above, whatever the srclight level
THIRD_PARTY_LEVEL = logging.WARNING

_PLAIN_FORMAT = "%(levelname)s: %(message)s"
_TRACE_FORMAT = "[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s"
_TRACE_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _resolve_level(log_level: int | str) -> int:
    if isinstance(log_level, int):
        return log_level
    return getattr(logging, str(log_level).upper(), logging.WARNING)


def configure_logging(
    log_level: int | str,
    log_file: Optional[str] = None,
    trace_mode: bool = False,
) -> logging.Logger:
    """Route srclight log records to standard error and an optional file.

    Parameters
    ----------
    log_level : int | str
        Level for the ``srclight`` loggers, as a number or a name
        (``"INFO"``). Unknown names fall back to WARNING.
    log_file : str, optional
        File to append records to, in addition to standard error.
    trace_mode : bool, default False
        Use DEBUG regardless of ``log_level`` and include timestamps and
        logger names in every record.

    Returns
    -------
    logging.Logger
        The ``srclight`` package logger.

    """
    level = logging.DEBUG if trace_mode else _resolve_level(log_level)
    if trace_mode:
        formatter = logging.Formatter(_TRACE_FORMAT, datefmt=_TRACE_DATE_FORMAT)
    else:
        formatter = logging.Formatter(_PLAIN_FORMAT)

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.setLevel(max(level, THIRD_PARTY_LEVEL))

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    package_logger.setLevel(level)

    if log_file:
        try:
            file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
        except OSError as exc:
            package_logger.warning("Could not create log file %s: %s", log_file, exc)
        else:
            file_handler.setFormatter(formatter)
            root_logger.addHandler(file_handler)
            package_logger.info("Logging to file: %s", log_file)

    return package_logger

