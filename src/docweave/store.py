#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/docweave/store.py
"""Read and write the README document."""

from __future__ import annotations

import logging
from pathlib import Path

from docweave.exceptions import FileAccessError, OutputWriteError

logger = logging.getLogger(__name__)


def read_document(path: str | Path) -> str | None:
    """Read a text document, stripped of surrounding whitespace.

    Parameters
    ----------
    path : str or Path
        Location of the document.

    Returns
    -------
    str or None
        The text, or None when the file does not exist.

    Raises
    ------
    FileAccessError
        If the file exists but cannot be read.

    """
    path = Path(path)
    try:
        return path.read_text(encoding="utf-8").strip()
    except FileNotFoundError:
        logger.debug("No document at %s", path)
        return None
    except (OSError, UnicodeDecodeError) as e:
        raise FileAccessError(str(path), original_error=e) from e


def write_document(path: str | Path, text: str) -> None:
    """Write the document text as UTF-8.

    Raises
    ------
    OutputWriteError
        If the file cannot be written.

    """
    path = Path(path)
    try:
        path.write_text(text, encoding="utf-8")
    except OSError as e:
        raise OutputWriteError(str(path), original_error=e) from e
    logger.info("Wrote %s", path)
