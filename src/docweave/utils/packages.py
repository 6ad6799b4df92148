#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/docweave/utils/packages.py
"""Installed-distribution lookups for optional docweave features."""

from __future__ import annotations

from importlib import metadata
from typing import Optional, Tuple

from packaging.specifiers import InvalidSpecifier, SpecifierSet
from packaging.version import InvalidVersion, Version


def get_package_version(package_name: str) -> Optional[str]:
    """Return the installed version of the ``package_name`` distribution, or None."""
    try:
        return metadata.version(package_name)
    except metadata.PackageNotFoundError:
        return None


def check_version_requirement(package_name: str, version_spec: str) -> Tuple[bool, Optional[str]]:
    """Check an installed distribution against a specifier such as ``">=4.0.0"``.

    A version or specifier that ``packaging`` cannot parse never satisfies
    the requirement.

    Returns
    -------
    tuple
        ``(meets_requirement, installed_version)``; the version is None
        when the distribution is not installed.

    """
    installed = get_package_version(package_name)
    if installed is None:
        return False, None
    try:
        meets = Version(installed) in SpecifierSet(version_spec)
    except (InvalidVersion, InvalidSpecifier):
        meets = False
    return meets, installed


def describe_dependency(package_name: str, version_spec: str = "") -> str:
    """Short status of an optional dependency, as printed by ``--about``."""
    meets, installed = check_version_requirement(package_name, version_spec or ">=0")
    if installed is None:
        return "not installed"
    if version_spec and not meets:
        return f"{installed} (requires {version_spec})"
    return installed
