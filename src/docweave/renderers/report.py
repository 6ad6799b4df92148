#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/docweave/renderers/report.py
"""Change report for a reconciliation run.

One report line per merge entry:

- fresh lines (first README generation): magenta
- added lines: blue
- unchanged lines: grey
- removed lines: red, wrapped as ``xxx <line> xxx``
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterable, Iterator

from docweave.merge import ChangeKind, DiffEntry

if TYPE_CHECKING:
    from rich.console import Console

_ANSI_COLORS = {
    ChangeKind.FRESH: "\033[35m",
    ChangeKind.ADDED: "\033[34m",
    ChangeKind.UNCHANGED: "\033[90m",
    ChangeKind.REMOVED: "\033[31m",
}
_RESET = "\033[0m"

_RICH_STYLES = {
    ChangeKind.FRESH: "magenta",
    ChangeKind.ADDED: "blue",
    ChangeKind.UNCHANGED: "grey50",
    ChangeKind.REMOVED: "red",
}


def format_entry(entry: DiffEntry) -> str:
    """Return the uncolored report text of one entry."""
    text = entry.line.strip()
    if entry.kind is ChangeKind.REMOVED:
        return f"xxx {text} xxx"
    return text


class ReportRenderer:
    """Render merge entries as report lines with optional ANSI colors.

    Parameters
    ----------
    use_color : bool, default = True
        If True, wrap each line in the ANSI color of its change kind

    Examples
    --------
        >>> renderer = ReportRenderer(use_color=False)
        >>> list(renderer.render([DiffEntry(ChangeKind.REMOVED, "old")]))
        ['xxx old xxx']

    """

    def __init__(self, use_color: bool = True):
        """Initialize the report renderer."""
        self.use_color = use_color

    def render(self, entries: Iterable[DiffEntry]) -> Iterator[str]:
        """Yield one report line per entry."""
        for entry in entries:
            text = format_entry(entry)
            if self.use_color:
                yield f"{_ANSI_COLORS[entry.kind]}{text}{_RESET}"
            else:
                yield text


def print_rich_report(entries: Iterable[DiffEntry], console: Console | None = None) -> None:
    """Print the report through a rich console.

    Parameters
    ----------
    entries : iterable of DiffEntry
        Merge entries to report.
    console : rich.console.Console, optional
        Console to print to; a new stdout console by default.

    """
    from rich.console import Console
    from rich.text import Text

    console = console or Console()
    for entry in entries:
        console.print(Text(format_entry(entry), style=_RICH_STYLES[entry.kind]))
