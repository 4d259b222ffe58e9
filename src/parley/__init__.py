"""
Parley - to-talk item relocation for Markdown notes

Scans notes for open tasks tagged `to-talk-<name>` and moves them into the
note for the next conversation with that person, with exact undo.
"""

__version__ = "0.1.0"

# Core exports
from parley.relocation import DocumentMutator, RelocationBuilder, UndoStack, scan_store
from parley.schemas import Document, PersonGroup, RelocationTransaction, TaggedItem
from parley.session import RelocationSession
from parley.store import FileDocumentStore

__all__ = [
    "__version__",
    "DocumentMutator",
    "RelocationBuilder",
    "UndoStack",
    "scan_store",
    "Document",
    "PersonGroup",
    "RelocationTransaction",
    "TaggedItem",
    "RelocationSession",
    "FileDocumentStore",
]
