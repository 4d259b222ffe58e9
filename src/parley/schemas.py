from datetime import date, datetime
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class Document(BaseModel):
    """
    Represents a Markdown note in the notes directory.

    `content` holds the body below the metadata header.
    """
    name: str
    title: str = ""
    tags: List[str] = Field(default_factory=list)
    created_at: Optional[date] = None
    due_at: Optional[date] = None
    done: bool = False
    content: str = ""
    metadata: Dict[str, str] = Field(default_factory=dict)  # Raw header values, unknown keys included


class Subtask(BaseModel):
    """
    A line nested under a tagged task.
    """
    model_config = ConfigDict(frozen=True)

    text: str
    line_number: int  # 1-indexed line in the source document
    indent: int       # Leading width, tabs count as 4


class TaggedItem(BaseModel):
    """
    An open task line earmarked for a recipient via a to-talk tag.

    Created fresh on every scan; the document is mutated, never this value.
    """
    model_config = ConfigDict(frozen=True)

    source_document: str
    line_number: int  # 1-indexed line in the source document at scan time
    raw_text: str
    subtasks: List[Subtask] = Field(default_factory=list)

    @property
    def line_count(self) -> int:
        """Lines this item occupies once relocated (task + subtasks)."""
        return 1 + len(self.subtasks)


class PersonGroup(BaseModel):
    """
    A recipient with pending to-talk items.
    """
    name: str   # Normalized lowercase name
    count: int


class LineModification(BaseModel):
    """
    One exact, verifiable edit applied to a single line.
    """
    line_number: int
    old_text: str
    new_text: str


class RelocationTransaction(BaseModel):
    """
    A completed move of tagged items into a target document.

    Only built after every recorded step has applied.
    """
    timestamp: datetime = Field(default_factory=datetime.now)
    person: str
    items: List[TaggedItem]
    target_document: str
    target_insertion_line: int  # 0-indexed line where the block starts
    inserted_lines: List[str]   # Block exactly as written into the target
    source_modifications: Dict[str, List[LineModification]] = Field(default_factory=dict)

    @property
    def inserted_line_count(self) -> int:
        return len(self.inserted_lines)

    @property
    def source_documents(self) -> List[str]:
        return list(self.source_modifications)

    @property
    def modification_count(self) -> int:
        return sum(len(mods) for mods in self.source_modifications.values())
