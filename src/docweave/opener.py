#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/docweave/opener.py
"""Open a generated file with the platform's default application."""

from __future__ import annotations

import logging
import webbrowser
from pathlib import Path

logger = logging.getLogger(__name__)


def open_artifact(path: str | Path) -> bool:
    """Open ``path`` in the default viewer.

    Parameters
    ----------
    path : str or Path
        File to open.

    Returns
    -------
    bool
        True if a viewer was launched.

    """
    path = Path(path)
    if not path.exists():
        logger.warning("%s not found to open", path)
        return False

    uri = path.resolve().as_uri()
    try:
        opened = webbrowser.open(uri)
    except webbrowser.Error as e:
        logger.warning("Could not open %s: %s", path, e)
        return False

    if not opened:
        logger.warning("No application available to open %s", path)
    return opened
