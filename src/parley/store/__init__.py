"""
Document store package.

The relocation engine only depends on the DocumentStore protocol below;
FileDocumentStore is the Markdown-directory implementation used by the CLI.
"""

from typing import List, Protocol

from parley.schemas import Document

from .file_store import FileDocumentStore
from .frontmatter import render_header, split_header


class DocumentStore(Protocol):
    """Operations the relocation engine consumes from a document store."""

    def list_incomplete_documents(self) -> List[Document]: ...

    def load_document(self, name: str) -> Document: ...

    def read_raw_text(self, name: str) -> str: ...

    def write_raw_text(self, name: str, text: str) -> None: ...

    def search_documents(self, query: str) -> List[Document]: ...

    def create_document(self, title: str, initial_content: str = "") -> Document: ...


__all__ = [
    "DocumentStore",
    "FileDocumentStore",
    "render_header",
    "split_header",
]
