#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Constants and default values for docweave.

This module centralizes the hardcoded values and tuned heuristics used
across docweave so they can be discovered and overridden in one place.

Constants are organized by category:
1. Type Definitions - Literal types and type aliases
2. Extraction - Documentation comment markers
3. Alignment and Search - Heuristic scoring constants
4. Discovery - Source tree traversal defaults
5. Files - Default document and option file names
6. PDF Rendering - Page layout and font defaults
"""

from __future__ import annotations

import re
from typing import Literal

# =============================================================================
# Type Definitions
# =============================================================================

PageFormat = Literal["a3", "a4", "a5", "letter", "legal", "tabloid"]
ColorMode = Literal["auto", "always", "never"]

# =============================================================================
# Extraction
# =============================================================================

# Marker alone (optionally followed by one space) at end of line -> blank doc line
DOC_COMMENT_EMPTY_RE = re.compile(r"(?://|##)\*\* ?$")
# Marker followed by a single space and the payload
DOC_COMMENT_RE = re.compile(r"(?://|##)\*\* (.*)")

# =============================================================================
# Alignment and Search
# =============================================================================

# Lines compared per lockstep mismatch, including the current one
DEFAULT_LOOKAHEAD_WINDOW = 7
DEFAULT_MISMATCH_PENALTY = 2

# Above this many blocks the factorial search is slow enough to warn about
DEFAULT_BLOCK_WARNING_THRESHOLD = 10
DEFAULT_SEARCH_WORKERS = 1

# =============================================================================
# Discovery
# =============================================================================

DEFAULT_EXTENSIONS = (".js", ".py", ".java", ".sql", ".ts", ".sh", ".go", ".c", ".cpp")
IGNORED_DIRECTORIES = frozenset({"node_modules", "dist", "tmp", "_tmp"})

# =============================================================================
# Files
# =============================================================================

DEFAULT_README = "README.md"
DEFAULT_PAGE_OPTIONS_FILE = "page.docweave"
CONFIG_FILENAMES = (".docweave.toml", ".docweave.yaml", ".docweave.yml", ".docweave.json")
ENV_PREFIX = "DOCWEAVE_"

# =============================================================================
# PDF Rendering
# =============================================================================

DEPS_PDF_RENDER = [("reportlab", "reportlab", ">=4.0.0"), ("mistune", "mistune", ">=3.0.0")]

DEFAULT_PDF_PAGE_FORMAT: PageFormat = "a4"
DEFAULT_PDF_MARGIN = 72.0
DEFAULT_PDF_FONT_FAMILY = "Helvetica"
DEFAULT_PDF_FONT_SIZE = 11
DEFAULT_PDF_CODE_FONT = "Courier"
DEFAULT_PDF_LINE_SPACING = 1.2
DEFAULT_PDF_HEADER_FONT_SIZE = 7

# Points per unit for page option lengths
LENGTH_UNITS = {
    "pt": 1.0,
    "px": 0.75,
    "in": 72.0,
    "cm": 72.0 / 2.54,
    "mm": 72.0 / 25.4,
}
