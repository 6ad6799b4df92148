"""Logging setup for the docweave command line."""

from __future__ import annotations

import logging
import sys
from typing import Optional

# Libraries pulled in by PDF rendering that log heavily at DEBUG.
_NOISY_LOGGERS = ("PIL", "reportlab", "mistune")

_PLAIN_FORMAT = "%(levelname)s: %(message)s"
_TRACE_FORMAT = "[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s"
_TRACE_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _resolve_level(log_level: int | str) -> int:
    if isinstance(log_level, int):
        return log_level
    return getattr(logging, str(log_level).upper(), logging.INFO)


def configure_logging(
    log_level: int | str,
    log_file: Optional[str] = None,
    trace_mode: bool = False,
) -> logging.Logger:
    """Install stderr (and optionally file) handlers on the root logger.

    Existing root handlers are replaced. Outside trace mode the PDF
    libraries are held at WARNING so ``--verbose`` shows docweave's own
    search and merge messages only.

    Parameters
    ----------
    log_level : int | str
        Numeric logging level or level name such as ``"INFO"``. Unknown
        names fall back to INFO.
    log_file : str, optional
        Path of a file that receives the same records as stderr.
    trace_mode : bool, default False
        Add timestamps and logger names to every record.

    Returns
    -------
    logging.Logger
        The root logger.

    """
    level = _resolve_level(log_level)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()

    if trace_mode:
        formatter = logging.Formatter(_TRACE_FORMAT, datefmt=_TRACE_DATE_FORMAT)
    else:
        formatter = logging.Formatter(_PLAIN_FORMAT)

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    file_error: OSError | None = None
    if log_file:
        try:
            handlers.append(logging.FileHandler(log_file, mode="a", encoding="utf-8"))
        except OSError as exc:
            file_error = exc

    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        root_logger.addHandler(handler)

    noisy_level = level if trace_mode else max(level, logging.WARNING)
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(noisy_level)

    if file_error is not None:
        root_logger.warning("Could not open log file %s: %s", log_file, file_error)
    elif log_file:
        root_logger.info("Logging to file: %s", log_file)

    return root_logger
