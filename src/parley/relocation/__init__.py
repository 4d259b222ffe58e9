"""
Relocation package: the talk-to move engine.

Scans notes for open tasks tagged `to-talk-<name>`, splices selected ones
into a target note while marking them complete at their source, and keeps
an exact undo history of each move.
"""

from .config import CLOSED_MARKER, OPEN_MARKER, INDENT_DETECTION
from .editor import (
    DocumentMutator,
    build_insert_block,
    count_moved_lines,
    find_insertion_point,
)
from .scanner import (
    build_person_groups,
    extract_subtasks,
    indent_width,
    parse_recipients,
    scan_documents,
    scan_store,
    scan_text,
    strip_recipient_tags,
)
from .transaction import RelocationBuilder
from .undo import UndoStack

__all__ = [
    # Engine
    "DocumentMutator",
    "RelocationBuilder",
    "UndoStack",

    # Scanning
    "scan_store",
    "scan_documents",
    "scan_text",
    "build_person_groups",
    "parse_recipients",
    "strip_recipient_tags",
    "extract_subtasks",
    "indent_width",

    # Splicing helpers
    "find_insertion_point",
    "build_insert_block",
    "count_moved_lines",

    # Configuration
    "OPEN_MARKER",
    "CLOSED_MARKER",
    "INDENT_DETECTION",
]
