#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/docweave/cli/processors.py
"""The docweave run: discover blocks, reconcile the README, render and open."""

import argparse
import logging
import sys
from pathlib import Path
from typing import Any, Mapping, Optional

from docweave.cli.builder import EXIT_SUCCESS
from docweave.cli.output import should_use_color, should_use_rich_output
from docweave.constants import DEFAULT_EXTENSIONS, DEFAULT_PAGE_OPTIONS_FILE
from docweave.discovery import discover_blocks, normalize_extensions
from docweave.exceptions import FileNotFoundError
from docweave.opener import open_artifact
from docweave.options import AlignmentOptions, PdfOptions, SearchOptions
from docweave.page_options import load_page_options, page_options_to_pdf_options
from docweave.reconcile import ReconcileResult, reconcile
from docweave.renderers.report import ReportRenderer, print_rich_report
from docweave.store import read_document, write_document

logger = logging.getLogger(__name__)

NO_BLOCKS_MESSAGE = "No documentation comments found. Lines must start with //** or ##** to be collected."


def build_search_options(parsed_args: argparse.Namespace) -> SearchOptions:
    """Build search options from the parsed command line."""
    return SearchOptions(
        alignment=AlignmentOptions(
            lookahead_window=parsed_args.lookahead,
            mismatch_penalty=parsed_args.mismatch_penalty,
        ),
        workers=parsed_args.workers,
        max_blocks=parsed_args.max_blocks,
    )


def build_pdf_options(
    parsed_args: argparse.Namespace, readme_path: Path, pdf_settings: Optional[Mapping[str, Any]] = None
) -> PdfOptions:
    """Combine ``[pdf]`` configuration with the page layout file.

    The page layout file wins where both set the same field.
    """
    options = PdfOptions.from_dict(dict(pdf_settings)) if pdf_settings else PdfOptions()
    if options.title is None:
        options = options.create_updated(title=readme_path.stem)

    if parsed_args.page_options:
        page_path = Path(parsed_args.page_options)
        if not page_path.exists():
            raise FileNotFoundError(str(page_path))
    else:
        page_path = readme_path.parent / DEFAULT_PAGE_OPTIONS_FILE

    data = load_page_options(page_path)
    if data:
        logger.debug(f"Applying page options from {page_path}")
        options = page_options_to_pdf_options(data, base=options)
    return options


def resolve_pdf_path(parsed_args: argparse.Namespace, readme_path: Path) -> Path:
    """Return the PDF output path."""
    if parsed_args.pdf:
        return Path(parsed_args.pdf)
    return readme_path.with_suffix(".pdf")


def print_report(result: ReconcileResult, parsed_args: argparse.Namespace) -> None:
    """Print the change report to stdout."""
    if should_use_rich_output(parsed_args):
        print_rich_report(result.entries)
        return

    renderer = ReportRenderer(use_color=should_use_color(parsed_args.color))
    for line in renderer.render(result.entries):
        print(line)


def render_and_open(
    text: str,
    parsed_args: argparse.Namespace,
    readme_path: Path,
    pdf_settings: Optional[Mapping[str, Any]] = None,
) -> None:
    """Render ``text`` to the PDF output and open it, as the flags allow."""
    if parsed_args.no_pdf:
        logger.info("PDF rendering disabled")
        return

    from docweave.renderers.pdf import render_markdown_to_pdf

    pdf_path = resolve_pdf_path(parsed_args, readme_path)
    pdf_options = build_pdf_options(parsed_args, readme_path, pdf_settings)
    pdf_path.parent.mkdir(parents=True, exist_ok=True)
    render_markdown_to_pdf(text, pdf_path, options=pdf_options, base_dir=readme_path.parent)
    print(f"Rendered {pdf_path}")

    if not parsed_args.no_open:
        open_artifact(pdf_path)


def run_docweave(parsed_args: argparse.Namespace, pdf_settings: Optional[Mapping[str, Any]] = None) -> int:
    """Execute one docweave run.

    Parameters
    ----------
    parsed_args : argparse.Namespace
        Parsed command-line arguments
    pdf_settings : Mapping, optional
        ``[pdf]`` table from the configuration file

    Returns
    -------
    int
        Exit code

    Raises
    ------
    DocweaveError
        Any failure; the caller maps it to an exit code.

    """
    readme_path = Path(parsed_args.readme)
    existing = read_document(readme_path)

    if parsed_args.ignore_src:
        if existing is None:
            raise FileNotFoundError(str(readme_path), message=f"Nothing to render: {readme_path} does not exist")
        if not parsed_args.dry_run:
            render_and_open(existing, parsed_args, readme_path, pdf_settings)
        return EXIT_SUCCESS

    extensions = normalize_extensions(parsed_args.ext or ()) or DEFAULT_EXTENSIONS
    blocks = discover_blocks(parsed_args.src, extensions=extensions)

    if not blocks:
        print(NO_BLOCKS_MESSAGE, file=sys.stderr)
        if existing is None:
            print(f"{readme_path} does not exist either; nothing to render.", file=sys.stderr)
        elif not parsed_args.dry_run:
            render_and_open(existing, parsed_args, readme_path, pdf_settings)
        return EXIT_SUCCESS

    result = reconcile(blocks, existing, build_search_options(parsed_args))
    print_report(result, parsed_args)

    counts = result.counts()
    logger.info(
        "Ordering %s at distance %d (%d evaluated, %d pruned); %s",
        list(result.ordering),
        result.distance,
        result.evaluated,
        result.pruned,
        ", ".join(f"{kind.value}={count}" for kind, count in counts.items() if count),
    )

    if parsed_args.dry_run:
        return EXIT_SUCCESS

    write_document(readme_path, result.text)
    if result.first_generation:
        print(f"Created {readme_path}")
    elif result.changed:
        print(f"Updated {readme_path}")
    else:
        print(f"{readme_path} is up to date")

    render_and_open(result.text, parsed_args, readme_path, pdf_settings)
    return EXIT_SUCCESS
