"""Custom argparse Action classes for the docweave CLI.

Each environment-aware action looks up ``DOCWEAVE_<DEST>`` when it is
created and, when set, uses it as the argument default. Defaults taken
from a configuration file are passed in as ``default=`` and are therefore
overridden by the environment, which is in turn overridden by the command
line.
"""

#  Copyright (c) 2025 Tom Villani, Ph.D.

import argparse
import logging
import os
from typing import Any, Callable

from docweave.constants import ENV_PREFIX

logger = logging.getLogger(__name__)

_TRUE_VALUES = ("true", "1", "yes", "on")


def env_key_for(dest: str) -> str:
    """Return the environment variable consulted for ``dest``."""
    return f"{ENV_PREFIX}{dest.upper().replace('-', '_')}"


def _dest_from_option_strings(option_strings: Any, kwargs: dict) -> str | None:
    dest = kwargs.get("dest")
    if dest:
        return dest
    long_options = [opt for opt in option_strings if opt.startswith("--")]
    if long_options:
        return long_options[0][2:].replace("-", "_")
    for option in option_strings:
        if option.startswith("-"):
            return option[1:]
    return None


def positive_int(value: str) -> int:
    """Argparse type for integers of at least 1."""
    try:
        ivalue = int(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"{value} is not a valid integer") from e
    if ivalue <= 0:
        raise argparse.ArgumentTypeError(f"{value} is not a positive integer")
    return ivalue


def non_negative_int(value: str) -> int:
    """Argparse type for integers of at least 0."""
    try:
        ivalue = int(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"{value} is not a valid integer") from e
    if ivalue < 0:
        raise argparse.ArgumentTypeError(f"{value} must not be negative")
    return ivalue


class DynamicVersionAction(argparse._VersionAction):
    """Action that resolves the version string only when ``--version`` is used."""

    def __init__(self, option_strings, version_callback: Callable[[], str] | None = None, **kwargs):
        """Initialize with a callback to get version dynamically.

        Parameters
        ----------
        version_callback : callable, optional
            Function that returns the version string when called

        """
        self.version_callback = version_callback
        kwargs.setdefault("version", "unknown")
        kwargs.setdefault("dest", argparse.SUPPRESS)
        kwargs.setdefault("default", argparse.SUPPRESS)
        super().__init__(option_strings, **kwargs)

    def __call__(self, parser, namespace, values, option_string=None):
        """Display version and exit."""
        version = self.version_callback() if self.version_callback else self.version
        parser.exit(message=f"{version}\n")


class EnvironmentAwareAction(argparse._StoreAction):
    """Store action that takes its default from ``DOCWEAVE_<DEST>`` when set."""

    def __init__(self, option_strings, **kwargs):
        dest = _dest_from_option_strings(option_strings, kwargs)
        if dest:
            env_key = env_key_for(dest)
            env_value = os.environ.get(env_key)
            if env_value is not None:
                converter = kwargs.get("type")
                choices = kwargs.get("choices")
                try:
                    value = converter(env_value) if converter else env_value
                except (ValueError, TypeError, argparse.ArgumentTypeError) as e:
                    logger.warning(f"Invalid environment variable {env_key}={env_value}: {e}")
                else:
                    if choices is not None and value not in choices:
                        logger.warning(f"Invalid environment variable {env_key}={env_value}: expected one of {choices}")
                    else:
                        kwargs["default"] = value
        super().__init__(option_strings, **kwargs)


class EnvironmentAwareBooleanAction(argparse._StoreTrueAction):
    """Boolean flag whose default may come from ``DOCWEAVE_<DEST>``."""

    def __init__(self, option_strings, **kwargs):
        dest = _dest_from_option_strings(option_strings, kwargs)
        if dest:
            env_value = os.environ.get(env_key_for(dest))
            if env_value is not None:
                kwargs["default"] = env_value.strip().lower() in _TRUE_VALUES
        super().__init__(option_strings, **kwargs)


class EnvironmentAwareAppendAction(argparse._AppendAction):
    """Append action whose default may come from a comma separated ``DOCWEAVE_<DEST>``.

    The first value given on the command line replaces the default list
    instead of extending it.
    """

    def __init__(self, option_strings, **kwargs):
        dest = _dest_from_option_strings(option_strings, kwargs)
        if dest:
            env_value = os.environ.get(env_key_for(dest))
            if env_value is not None:
                kwargs["default"] = [item.strip() for item in env_value.split(",") if item.strip()]
        super().__init__(option_strings, **kwargs)

    def __call__(self, parser, namespace, values, option_string=None):
        """Append ``values``, discarding the default on first use."""
        current = getattr(namespace, self.dest, None)
        if current is self.default:
            setattr(namespace, self.dest, [])
        super().__call__(parser, namespace, values, option_string)


def create_env_aware_argument(parser, *args, **kwargs):
    """Add an argument whose action honours ``DOCWEAVE_<DEST>`` defaults.

    The environment-aware action is picked from the requested ``action``;
    other actions are passed through unchanged.
    """
    action = kwargs.get("action", "store")

    if action == "store_true":
        kwargs["action"] = EnvironmentAwareBooleanAction
    elif action == "append":
        kwargs["action"] = EnvironmentAwareAppendAction
    elif action in ("store", None):
        kwargs["action"] = EnvironmentAwareAction

    return parser.add_argument(*args, **kwargs)
