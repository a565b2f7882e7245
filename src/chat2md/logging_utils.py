"""Logging setup for the chat2md command line."""

from __future__ import annotations

import logging
import sys
from typing import Optional

from chat2md.constants import LOG_DATE_FORMAT, LOG_FORMAT, LOG_LEVEL_NAMES, TRACE_LOG_FORMAT
from chat2md.exceptions import ValidationError


def resolve_log_level(log_level: int | str) -> int:
    """Convert a level name (any case) or number to a numeric logging level.

    Raises
    ------
    ValidationError
        If ``log_level`` is not one of the standard level names

    """
    if isinstance(log_level, int):
        return log_level

    name = str(log_level).strip().upper()
    if name not in LOG_LEVEL_NAMES:
        raise ValidationError(
            f"Invalid log level '{log_level}'. Choose from: {', '.join(LOG_LEVEL_NAMES)}",
            parameter_name="log_level",
            parameter_value=log_level,
        )
    return getattr(logging, name)


def configure_logging(
    log_level: int | str,
    log_file: Optional[str] = None,
    trace_mode: bool = False,
) -> logging.Logger:
    """Install stderr (and optional file) handlers on the root logger.

    Parameters
    ----------
    log_level : int | str
        Numeric logging level or level name such as ``"INFO"``
    log_file : str, optional
        Also append log records to this file
    trace_mode : bool, default False
        Include timestamps and logger names in every record

    Returns
    -------
    logging.Logger
        The configured root logger

    Raises
    ------
    ValidationError
        If ``log_level`` is an unknown level name

    """
    level = resolve_log_level(log_level)
    formatter = logging.Formatter(
        TRACE_LOG_FORMAT if trace_mode else LOG_FORMAT,
        datefmt=LOG_DATE_FORMAT if trace_mode else None,
    )

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_file:
        try:
            handlers.append(logging.FileHandler(log_file, mode="a", encoding="utf-8"))
        except OSError as exc:
            root_logger.warning("Could not create log file %s: %s", log_file, exc)
            log_file = None

    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        root_logger.addHandler(handler)

    if log_file:
        root_logger.info("Logging to file: %s", log_file)
    return root_logger
