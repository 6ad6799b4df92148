#  Copyright (c) 2025 Tom Villani, Ph.D.

"""Configuration file discovery and loading for the docweave CLI.

This module handles automatic discovery of configuration files, loading
configs from TOML, YAML or JSON, and the ``[tool.docweave]`` section of
``pyproject.toml``.
"""

import argparse
import json
import logging
import sys
from pathlib import Path

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib  # type: ignore[import-not-found,unused-ignore]
from typing import IO, Any, Callable, Dict, Optional

import yaml

from docweave.constants import CONFIG_FILENAMES

logger = logging.getLogger(__name__)


def _load_pyproject_section(pyproject_path: Path) -> Dict[str, Any]:
    """Load the [tool.docweave] section from pyproject.toml.

    Parameters
    ----------
    pyproject_path : Path
        Path to pyproject.toml file

    Returns
    -------
    dict
        Configuration from [tool.docweave], or empty dict if not present

    Raises
    ------
    argparse.ArgumentTypeError
        If pyproject.toml cannot be parsed

    """
    try:
        with open(pyproject_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise argparse.ArgumentTypeError(f"Invalid TOML in pyproject.toml {pyproject_path}: {e}") from e
    except OSError as e:
        raise argparse.ArgumentTypeError(f"Error reading pyproject.toml {pyproject_path}: {e}") from e

    config = data.get("tool", {}).get("docweave", {})
    if not isinstance(config, dict):
        raise argparse.ArgumentTypeError(
            f"[tool.docweave] section in {pyproject_path} must be a table, got {type(config).__name__}"
        )
    return config


def find_config_in_parents(start_dir: Optional[Path] = None) -> Optional[Path]:
    """Find a configuration file by searching parent directories.

    Walks up from ``start_dir`` (default: cwd) to the filesystem root,
    checking each directory for ``.docweave.toml``, ``.docweave.yaml``,
    ``.docweave.yml``, ``.docweave.json``, then ``pyproject.toml`` with a
    ``[tool.docweave]`` section.

    Parameters
    ----------
    start_dir : Path, optional
        Directory to start from

    Returns
    -------
    Path or None
        First configuration file found

    """
    current = (start_dir or Path.cwd()).resolve()

    while True:
        for filename in CONFIG_FILENAMES:
            config_path = current / filename
            if config_path.is_file():
                return config_path

        pyproject_path = current / "pyproject.toml"
        if pyproject_path.is_file():
            try:
                if _load_pyproject_section(pyproject_path):
                    return pyproject_path
            except argparse.ArgumentTypeError as e:
                logger.debug(f"Skipping unreadable {pyproject_path}: {e}")

        parent = current.parent
        if parent == current:
            break
        current = parent

    return None


def discover_config_file() -> Optional[Path]:
    """Discover a configuration file in the parent chain, then the home directory.

    Returns
    -------
    Path or None
        Path to discovered config file, or None if not found

    """
    found = find_config_in_parents()
    if found:
        return found

    home = Path.home()
    for filename in CONFIG_FILENAMES:
        config_path = home / filename
        if config_path.is_file():
            return config_path

    return None


def load_config_file(config_path: Path | str) -> Dict[str, Any]:
    """Load configuration from a JSON, TOML, YAML, or pyproject.toml file.

    Parameters
    ----------
    config_path : Path or str
        Path to the configuration file

    Returns
    -------
    dict
        Configuration dictionary loaded from file

    Raises
    ------
    argparse.ArgumentTypeError
        If the file cannot be read, parsed, or has an unsupported format

    """
    config_path = Path(config_path)

    if not config_path.exists():
        raise argparse.ArgumentTypeError(f"Configuration file does not exist: {config_path}")
    if not config_path.is_file():
        raise argparse.ArgumentTypeError(f"Configuration path is not a file: {config_path}")

    if config_path.name.lower() == "pyproject.toml":
        return _load_pyproject_section(config_path)

    suffix = config_path.suffix.lower()
    if suffix not in _PARSERS:
        raise argparse.ArgumentTypeError(f"Unsupported config file format: {suffix}. Use .json, .toml, or .yaml")
    return _load_mapping(config_path)


def _parse_toml(handle: IO[bytes]) -> Any:
    return tomllib.load(handle)


def _parse_json(handle: IO[bytes]) -> Any:
    return json.loads(handle.read().decode("utf-8"))


def _parse_yaml(handle: IO[bytes]) -> Any:
    return yaml.safe_load(handle)


# suffix -> (format label, parser, errors meaning "malformed file")
_PARSERS: Dict[str, tuple[str, Callable[[IO[bytes]], Any], tuple[type[Exception], ...]]] = {
    ".toml": ("TOML", _parse_toml, (tomllib.TOMLDecodeError,)),
    ".json": ("JSON", _parse_json, (json.JSONDecodeError, UnicodeDecodeError)),
    ".yaml": ("YAML", _parse_yaml, (yaml.YAMLError,)),
    ".yml": ("YAML", _parse_yaml, (yaml.YAMLError,)),
}


def _load_mapping(config_path: Path) -> Dict[str, Any]:
    label, parse, decode_errors = _PARSERS[config_path.suffix.lower()]
    try:
        with open(config_path, "rb") as f:
            config = parse(f)
    except decode_errors as e:
        raise argparse.ArgumentTypeError(f"Invalid {label} in config file {config_path}: {e}") from e
    except OSError as e:
        raise argparse.ArgumentTypeError(f"Error reading {label} config {config_path}: {e}") from e

    # An empty YAML document loads as None
    if config is None:
        return {}
    if not isinstance(config, dict):
        raise argparse.ArgumentTypeError(
            f"{label} config file {config_path} must contain a mapping, got {type(config).__name__}"
        )
    return config


def load_config_with_priority(
    explicit_path: Optional[str] = None, env_var_path: Optional[str] = None
) -> Dict[str, Any]:
    """Load configuration with priority handling.

    Priority order (highest to lowest):
    1. Explicit config file path (--config flag)
    2. Environment variable config path (DOCWEAVE_CONFIG)
    3. Auto-discovered config file

    Returns
    -------
    dict
        Loaded configuration dictionary (empty dict if no config found)

    Raises
    ------
    argparse.ArgumentTypeError
        If a config file is specified but cannot be loaded

    """
    if explicit_path:
        return load_config_file(explicit_path)

    if env_var_path:
        return load_config_file(env_var_path)

    discovered_path = discover_config_file()
    if discovered_path:
        logger.debug(f"Using configuration file {discovered_path}")
        return load_config_file(discovered_path)

    return {}
