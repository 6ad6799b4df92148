"""Utility functions for cli output."""

#  Copyright (c) 2025 Tom Villani, Ph.D.

# src/docweave/cli/output.py
import argparse
import sys
from typing import TextIO

from docweave.exceptions import DependencyError


def check_rich_available() -> bool:
    """Check if Rich library is available.

    Returns
    -------
    bool
        True if Rich is available, False otherwise

    """
    try:
        import rich  # noqa: F401

        return True
    except ImportError:
        return False


def _is_tty(stream: TextIO) -> bool:
    isatty = getattr(stream, "isatty", None)
    return bool(callable(isatty) and isatty())


def should_use_rich_output(
    args: argparse.Namespace, raise_on_missing: bool = False, stream: TextIO | None = None
) -> bool:
    """Determine if Rich output should be used based on TTY and args.

    Rich output is used when ``--rich`` is set, Rich is installed, and
    either ``--force-rich`` is set or the stream is a terminal.

    Parameters
    ----------
    args : argparse.Namespace
        Parsed command line arguments
    raise_on_missing : bool, default False
        Raise DependencyError if rich is not installed
    stream : optional, default None
        Uses sys.stdout unless otherwise specified.

    """
    if not args.rich:
        return False

    if not check_rich_available():
        if raise_on_missing:
            raise DependencyError(
                feature="rich",
                missing_packages=[("rich", "")],
                message="--rich needs the optional rich package. Install with: pip install 'docweave[rich]'",
            )
        return False

    if getattr(args, "force_rich", False):
        return True

    return _is_tty(stream or sys.stdout)


def should_use_color(color_mode: str, stream: TextIO | None = None) -> bool:
    """Resolve ``--color {auto,always,never}`` against the output stream."""
    if color_mode == "always":
        return True
    if color_mode == "never":
        return False
    return _is_tty(stream or sys.stdout)
