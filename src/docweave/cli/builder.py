#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/docweave/cli/builder.py
"""Argument parser construction and exit code mapping for the docweave CLI."""

import argparse
import logging
from typing import Any, Dict, Mapping, Optional

from docweave.cli.actions import (
    DynamicVersionAction,
    create_env_aware_argument,
    non_negative_int,
    positive_int,
)
from docweave.constants import (
    DEFAULT_LOOKAHEAD_WINDOW,
    DEFAULT_MISMATCH_PENALTY,
    DEFAULT_README,
    DEFAULT_SEARCH_WORKERS,
)
from docweave.exceptions import (
    DependencyError,
    FileError,
    RenderingError,
    SearchLimitError,
    ValidationError,
)

logger = logging.getLogger(__name__)

EXIT_SUCCESS = 0
EXIT_ERROR = 1
EXIT_DEPENDENCY_ERROR = 2
EXIT_VALIDATION_ERROR = 3
EXIT_FILE_ERROR = 4
EXIT_RENDERING_ERROR = 7
EXIT_SEARCH_LIMIT = 11

_DESCRIPTION = """Weave documentation comments from source files into a README.

Lines starting with //** or ##** are collected into blocks. docweave finds
the block order closest to the existing README, merges the blocks into it
keeping its image and HTML lines, and renders the result to PDF.
"""

_EPILOG = """Examples:
  docweave --src src --readme README.md
  docweave --dry-run --no-pdf
  docweave --ignore-src --pdf out/manual.pdf

Every option also reads a default from DOCWEAVE_<OPTION>, for example
DOCWEAVE_WORKERS=4 or DOCWEAVE_EXT=py,sh.
"""

# Keys accepted in configuration files, mapped to parser destinations.
CONFIG_KEYS = (
    "src",
    "readme",
    "pdf",
    "page_options",
    "ext",
    "ignore_src",
    "no_pdf",
    "no_open",
    "dry_run",
    "workers",
    "max_blocks",
    "lookahead",
    "mismatch_penalty",
    "color",
    "rich",
    "force_rich",
    "log_level",
    "log_file",
    "verbose",
    "trace",
)


def get_version() -> str:
    """Get the version of the docweave package."""
    try:
        from importlib.metadata import PackageNotFoundError, version

        return version("docweave")
    except PackageNotFoundError:
        return "unknown"


def config_to_parser_defaults(config: Mapping[str, Any]) -> Dict[str, Any]:
    """Translate a loaded configuration mapping into parser defaults.

    Keys may use dashes or underscores. The ``pdf`` key is only taken as the
    output path when it is a string; a ``[pdf]`` table holds PDF styling and
    is read separately. Unknown keys are logged and ignored.

    Parameters
    ----------
    config : Mapping
        Configuration as loaded from a file.

    Returns
    -------
    dict
        Defaults keyed by argparse destination.

    """
    defaults: Dict[str, Any] = {}
    for key, value in config.items():
        dest = str(key).replace("-", "_")
        if dest == "pdf" and isinstance(value, Mapping):
            continue
        if dest not in CONFIG_KEYS:
            logger.warning(f"Ignoring unknown configuration key: {key}")
            continue
        if dest == "ext" and isinstance(value, str):
            value = [value]
        defaults[dest] = value
    return defaults


def create_parser(config_defaults: Optional[Mapping[str, Any]] = None) -> argparse.ArgumentParser:
    """Create the docweave argument parser.

    Parameters
    ----------
    config_defaults : Mapping, optional
        Defaults loaded from a configuration file. The environment and the
        command line take precedence over them.

    Returns
    -------
    argparse.ArgumentParser
        Configured parser

    """
    defaults = dict(config_defaults or {})

    def default(dest: str, builtin: Any) -> Any:
        return defaults.get(dest, builtin)

    parser = argparse.ArgumentParser(
        prog="docweave",
        description=_DESCRIPTION,
        epilog=_EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "--version", "-v", action=DynamicVersionAction, version_callback=lambda: f"docweave {get_version()}"
    )
    parser.add_argument("--about", action="store_true", help="Show detailed information about docweave and exit")

    paths = parser.add_argument_group("Paths")
    create_env_aware_argument(
        paths, "--src", metavar="PATH", default=default("src", "."), help="Source file or directory (default: .)"
    )
    create_env_aware_argument(
        paths,
        "--readme",
        metavar="PATH",
        default=default("readme", DEFAULT_README),
        help=f"README to create or update (default: {DEFAULT_README})",
    )
    create_env_aware_argument(
        paths,
        "--pdf",
        metavar="PATH",
        default=default("pdf", None),
        help="PDF output path (default: README path with .pdf)",
    )
    create_env_aware_argument(
        paths,
        "--page-options",
        metavar="PATH",
        default=default("page_options", None),
        help="YAML page layout file (default: page.docweave beside the README)",
    )
    create_env_aware_argument(
        paths,
        "--ext",
        "-e",
        action="append",
        metavar="EXT",
        default=default("ext", None),
        help="Source file extension to scan; repeatable or comma separated (default: js,py,java,sql,ts,sh,go,c,cpp)",
    )
    create_env_aware_argument(
        paths,
        "--ignore-src",
        action="store_true",
        default=default("ignore_src", False),
        help="Do not scan sources; only render and open the existing README",
    )

    actions = parser.add_argument_group("Actions")
    create_env_aware_argument(
        actions, "--no-pdf", action="store_true", default=default("no_pdf", False), help="Skip PDF rendering"
    )
    create_env_aware_argument(
        actions,
        "--no-open",
        action="store_true",
        default=default("no_open", False),
        help="Do not open the PDF after rendering",
    )
    create_env_aware_argument(
        actions,
        "--dry-run",
        action="store_true",
        default=default("dry_run", False),
        help="Print the change report without writing the README or rendering",
    )

    search = parser.add_argument_group("Ordering search")
    create_env_aware_argument(
        search,
        "--workers",
        type=positive_int,
        metavar="N",
        default=default("workers", DEFAULT_SEARCH_WORKERS),
        help=f"Worker processes for the ordering search (default: {DEFAULT_SEARCH_WORKERS})",
    )
    create_env_aware_argument(
        search,
        "--max-blocks",
        type=non_negative_int,
        metavar="N",
        default=default("max_blocks", None),
        help="Fail instead of searching orderings of more than N blocks",
    )
    create_env_aware_argument(
        search,
        "--lookahead",
        type=positive_int,
        metavar="N",
        default=default("lookahead", DEFAULT_LOOKAHEAD_WINDOW),
        help=f"Aligner lookahead window (default: {DEFAULT_LOOKAHEAD_WINDOW})",
    )
    create_env_aware_argument(
        search,
        "--mismatch-penalty",
        type=non_negative_int,
        metavar="N",
        default=default("mismatch_penalty", DEFAULT_MISMATCH_PENALTY),
        help=f"Distance added when no realignment is found (default: {DEFAULT_MISMATCH_PENALTY})",
    )

    output = parser.add_argument_group("Output")
    create_env_aware_argument(
        output,
        "--color",
        choices=["auto", "always", "never"],
        default=default("color", "auto"),
        help="Color the change report (default: auto)",
    )
    create_env_aware_argument(
        output,
        "--rich",
        action="store_true",
        default=default("rich", False),
        help="Print the change report with rich",
    )
    create_env_aware_argument(
        output,
        "--force-rich",
        action="store_true",
        default=default("force_rich", False),
        help="Use rich output even when stdout is not a terminal",
    )

    misc = parser.add_argument_group("Configuration and logging")
    misc.add_argument(
        "--config",
        metavar="PATH",
        help="Configuration file (TOML, YAML or JSON). If not specified, DOCWEAVE_CONFIG is used, "
        "then .docweave.{toml,yaml,yml,json} or [tool.docweave] in pyproject.toml is searched for.",
    )
    create_env_aware_argument(
        misc,
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default=default("log_level", "WARNING"),
        help="Set logging level (default: WARNING). Overrides --verbose if both are specified.",
    )
    create_env_aware_argument(
        misc,
        "--log-file",
        metavar="PATH",
        default=default("log_file", None),
        help="Write log messages to this file in addition to stderr",
    )
    create_env_aware_argument(
        misc,
        "--verbose",
        action="store_true",
        default=default("verbose", False),
        help="Enable verbose output (equivalent to --log-level DEBUG)",
    )
    create_env_aware_argument(
        misc,
        "--trace",
        action="store_true",
        default=default("trace", False),
        help="Enable trace mode with very verbose logging and timing information",
    )

    return parser


def get_exit_code_for_exception(exception: Exception) -> int:
    """Map an exception to an appropriate CLI exit code.

    Parameters
    ----------
    exception : Exception
        The exception to map to an exit code

    Returns
    -------
    int
        The appropriate exit code for the exception type

    """
    if isinstance(exception, SearchLimitError):
        return EXIT_SEARCH_LIMIT

    if isinstance(exception, (DependencyError, ImportError)):
        return EXIT_DEPENDENCY_ERROR

    if isinstance(exception, ValidationError):
        return EXIT_VALIDATION_ERROR

    if isinstance(exception, FileError):
        return EXIT_FILE_ERROR

    if isinstance(exception, RenderingError):
        return EXIT_RENDERING_ERROR

    return EXIT_ERROR
