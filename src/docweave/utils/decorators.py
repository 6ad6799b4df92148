#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/docweave/utils/decorators.py
"""Decorators and context managers shared across docweave.

PDF rendering needs packages the reconciliation core does not. The
``requires_dependencies`` decorator checks them at call time so the core
and CLI import cleanly without them.

"""

from __future__ import annotations

import importlib
import logging
import time
from contextlib import contextmanager
from functools import wraps
from typing import Any, Callable, Generator, List, Sequence, Tuple

from docweave.exceptions import DependencyError
from docweave.utils.packages import check_version_requirement

PackageRequirement = Tuple[str, str, str]


def find_missing_dependencies(
    packages: Sequence[PackageRequirement],
) -> tuple[list[tuple[str, str]], list[tuple[str, str, str]], ImportError | None]:
    """Import each package and compare its installed version.

    Returns
    -------
    tuple
        ``(missing, version_mismatches, first_import_error)``

    """
    missing: list[tuple[str, str]] = []
    mismatches: list[tuple[str, str, str]] = []
    first_error: ImportError | None = None

    for install_name, import_name, version_spec in packages:
        try:
            importlib.import_module(import_name)
        except ImportError as e:
            missing.append((install_name, version_spec))
            first_error = first_error or e
            continue
        if not version_spec:
            continue
        meets, installed = check_version_requirement(install_name, version_spec)
        if not meets:
            mismatches.append((install_name, version_spec, installed or "unknown"))

    return missing, mismatches, first_error


def requires_dependencies(feature: str, packages: List[PackageRequirement]) -> Callable:
    """Raise DependencyError before the call when ``packages`` are unusable.

    Parameters
    ----------
    feature : str
        Feature name used in the error and install hint (e.g. "pdf").
    packages : list of tuple
        ``(install_name, import_name, version_spec)`` triples. An empty
        version_spec accepts any installed version.

    Examples
    --------
        >>> @requires_dependencies("pdf", [("reportlab", "reportlab", ">=4.0.0")])
        ... def render(markdown_text, output):
        ...     from reportlab.platypus import SimpleDocTemplate

    """

    def decorator(method: Callable) -> Callable:
        @wraps(method)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            missing, mismatches, import_error = find_missing_dependencies(packages)
            if missing or mismatches:
                raise DependencyError(
                    feature=feature,
                    missing_packages=missing,
                    version_mismatches=mismatches,
                    original_import_error=import_error,
                ) from import_error
            return method(*args, **kwargs)

        return wrapper

    return decorator


@contextmanager
def debug_timer(logger: logging.Logger, operation: str) -> Generator[None, None, None]:
    """Time a block and log the elapsed time at DEBUG level.

    Parameters
    ----------
    logger : logging.Logger
        Logger instance to use for DEBUG messages
    operation : str
        Description of the operation being timed

    Examples
    --------
        >>> with debug_timer(logger, "Ordering search"):
        ...     result = session.run()
        ... # Logs: "Ordering search completed in 0.12s" at DEBUG level

    """
    if logger.isEnabledFor(logging.DEBUG):
        start_time = time.perf_counter()
        yield
        elapsed = time.perf_counter() - start_time
        logger.debug(f"{operation} completed in {elapsed:.2f}s")
    else:
        yield
