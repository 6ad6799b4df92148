"""Command-line interface for docweave.

docweave collects ``//**`` and ``##**`` documentation comments from source
files, merges them into a README while keeping its image and HTML lines,
and renders the README to PDF.

Environment Variable Support
----------------------------
All CLI options support environment variable defaults using the pattern
DOCWEAVE_<OPTION_NAME> where option names are converted to uppercase with
hyphens replaced by underscores. CLI arguments always override environment
variables, which override configuration files.

Examples
--------
Update README.md from the sources under the current directory::

    $ docweave

Scan only Python and shell sources under ``src``::

    $ docweave --src src -e py,sh

Show what would change without writing anything::

    $ docweave --dry-run

Render the existing README without scanning sources::

    $ docweave --ignore-src --pdf build/manual.pdf

Use environment variables for defaults::

    $ export DOCWEAVE_WORKERS=4
    $ export DOCWEAVE_NO_OPEN=true
    $ docweave

"""

#  Copyright (c) 2025 Tom Villani, Ph.D.

import argparse
import logging
import os
import platform
import sys
from typing import Any, Dict

from docweave.cli.builder import (
    EXIT_ERROR,
    EXIT_SUCCESS,
    EXIT_VALIDATION_ERROR,
    config_to_parser_defaults,
    create_parser,
    get_exit_code_for_exception,
    get_version,
)
from docweave.cli.config import load_config_with_priority
from docweave.constants import DEPS_PDF_RENDER
from docweave.exceptions import DocweaveError
from docweave.logging_utils import configure_logging
from docweave.utils.packages import describe_dependency

logger = logging.getLogger(__name__)


def _setup_logging_level(parsed_args: argparse.Namespace) -> None:
    """Set up logging level based on command-line arguments.

    Parameters
    ----------
    parsed_args : argparse.Namespace
        Parsed command-line arguments

    """
    # --trace takes highest precedence, then --verbose, then --log-level
    if parsed_args.trace:
        log_level = logging.DEBUG
    elif parsed_args.verbose and parsed_args.log_level == "WARNING":
        log_level = logging.DEBUG
    else:
        log_level = getattr(logging, parsed_args.log_level.upper())

    configure_logging(log_level, log_file=parsed_args.log_file, trace_mode=parsed_args.trace)


def get_about_info() -> str:
    """Get information about docweave, the interpreter and optional dependencies."""
    lines = [
        f"docweave {get_version()}",
        "Weave //** and ##** documentation comments into a README and render it to PDF.",
        "",
        f"Python:       {platform.python_version()} ({sys.executable})",
        f"Platform:     {platform.platform()}",
        "",
        "Optional dependencies:",
    ]
    for install_name, _import_name, version_spec in [*DEPS_PDF_RENDER, ("rich", "rich", "")]:
        lines.append(f"  {install_name:<12}{describe_dependency(install_name, version_spec)}")
    return "\n".join(lines)


def _create_config_preparser() -> argparse.ArgumentParser:
    preparser = argparse.ArgumentParser(add_help=False)
    preparser.add_argument("--config")
    return preparser


def main(args: list[str] | None = None) -> int:
    """Execute the docweave command line.

    Parameters
    ----------
    args : list of str, optional
        Arguments to parse; ``sys.argv[1:]`` when omitted.

    Returns
    -------
    int
        Process exit code

    """
    known, _ = _create_config_preparser().parse_known_args(args)
    try:
        config: Dict[str, Any] = load_config_with_priority(known.config, os.environ.get("DOCWEAVE_CONFIG"))
    except argparse.ArgumentTypeError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_VALIDATION_ERROR

    parser = create_parser(config_to_parser_defaults(config))
    parsed_args = parser.parse_args(args)

    if parsed_args.about:
        print(get_about_info())
        return EXIT_SUCCESS

    _setup_logging_level(parsed_args)

    pdf_settings = config.get("pdf")
    if not isinstance(pdf_settings, dict):
        pdf_settings = None

    from docweave.cli.processors import run_docweave

    try:
        return run_docweave(parsed_args, pdf_settings)
    except DocweaveError as e:
        logger.debug("docweave failed", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return get_exit_code_for_exception(e)
    except KeyboardInterrupt:
        print("Interrupted", file=sys.stderr)
        return EXIT_ERROR


if __name__ == "__main__":
    sys.exit(main())
