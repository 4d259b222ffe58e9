"""
FileDocumentStore: Markdown notes in a single directory.

Every read and write covers the whole document. Writes are atomic
(temp file + rename) and never translate line endings, so text the
caller did not touch is preserved byte for byte.
"""

import os
import tempfile
from datetime import date
from pathlib import Path
from typing import List, Optional

from parley.exceptions import DocumentIOError, DocumentNotFound
from parley.logging_config import logger
from parley.schemas import Document

from .frontmatter import (
    new_todo_header,
    parse_date,
    parse_tags,
    render_header,
    split_header,
)

NOTE_SUFFIX = ".md"


class FileDocumentStore:
    """
    Document store backed by `<notes_dir>/*.md`.

    A document is incomplete when its header carries `done: false`.
    """

    def __init__(self, notes_dir: Path, today: Optional[date] = None):
        """
        Args:
            notes_dir: Directory holding the notes
            today: Fixed creation date for new notes (defaults to the current date)
        """
        self.notes_dir = Path(notes_dir)
        self._today = today

    # ------------------------------------------------------------------
    # Raw access
    # ------------------------------------------------------------------

    def _path(self, name: str) -> Path:
        if not name or Path(name).name != name:
            raise DocumentIOError(name, f"Invalid document name: {name!r}")
        return self.notes_dir / name

    def read_raw_text(self, name: str) -> str:
        """Read the full document text, header included."""
        path = self._path(name)
        if not path.is_file():
            raise DocumentNotFound(name)
        try:
            with open(path, 'r', encoding='utf-8', newline='') as f:
                return f.read()
        except OSError as e:
            raise DocumentIOError(name, f"Failed to read file {name}: {e}") from e

    def write_raw_text(self, name: str, text: str) -> None:
        """Replace the full document text atomically."""
        path = self._path(name)
        if not self.notes_dir.is_dir():
            raise DocumentIOError(name, f"Notes directory does not exist: {self.notes_dir}")

        fd, temp_path = tempfile.mkstemp(dir=str(self.notes_dir), prefix=f".{name}.", suffix=".tmp")
        try:
            with os.fdopen(fd, 'w', encoding='utf-8', newline='') as f:
                f.write(text)
            os.replace(temp_path, str(path))
        except OSError as e:
            try:
                os.unlink(temp_path)
            except OSError:
                pass
            raise DocumentIOError(name, f"Failed to write file {name}: {e}") from e

        logger.debug(f"Atomic write completed: {path}")

    # ------------------------------------------------------------------
    # Documents
    # ------------------------------------------------------------------

    def _document_names(self) -> List[str]:
        if not self.notes_dir.is_dir():
            raise DocumentIOError(str(self.notes_dir), f"Notes directory does not exist: {self.notes_dir}")
        return sorted(p.name for p in self.notes_dir.glob(f"*{NOTE_SUFFIX}") if p.is_file())

    def load_document(self, name: str) -> Document:
        metadata, body = split_header(self.read_raw_text(name))
        return Document(
            name=name,
            title=metadata.get("title", ""),
            tags=parse_tags(metadata.get("tags", "")),
            created_at=parse_date(metadata.get("date-created", "")),
            due_at=parse_date(metadata.get("date-due", "")),
            done=metadata.get("done", "").lower() == "true",
            content=body,
            metadata=metadata,
        )

    def list_documents(self) -> List[Document]:
        return [self.load_document(name) for name in self._document_names()]

    def list_incomplete_documents(self) -> List[Document]:
        """Documents whose header says `done: false`."""
        return [
            doc for doc in self.list_documents()
            if doc.metadata.get("done", "").lower() == "false"
        ]

    def search_documents(self, query: str) -> List[Document]:
        """
        Case-insensitive substring match against incomplete document names and titles.

        An empty query returns every incomplete document.
        """
        documents = self.list_incomplete_documents()
        needle = query.lower()
        if not needle:
            return documents
        return [
            doc for doc in documents
            if needle in doc.name.lower() or needle in doc.title.lower()
        ]

    def create_document(self, title: str, initial_content: str = "") -> Document:
        """
        Create `<title>-<YYYY-MM-DD>.md` with a todo header and a `# <title>` heading.

        Raises:
            DocumentIOError: Empty/invalid title or the document already exists
        """
        title = title.strip()
        if not title:
            raise DocumentIOError(title, "Note title cannot be empty")

        created = self._today or date.today()
        name = f"{title}-{created.isoformat()}{NOTE_SUFFIX}"
        path = self._path(name)
        if path.exists():
            raise DocumentIOError(name, f"Document already exists: {name}")

        text = render_header(new_todo_header(title, created)) + f"\n# {title}\n\n" + initial_content
        self.write_raw_text(name, text)
        logger.info(f"Created note {name}")
        return self.load_document(name)
