"""
DocumentMutator: verified line edits and block splicing for one document.

Every operation reads the whole document through the store, changes only
what it was asked to change, and writes the whole document back.
"""

from typing import List, Optional, Sequence, Tuple

from parley.exceptions import (
    LineOutOfRange,
    PatternNotFound,
    ReplacementNoOp,
    VerificationFailed,
)
from parley.logging_config import logger
from parley.schemas import LineModification, TaggedItem

from .config import INSERT_PADDING_LINES
from .scanner import strip_recipient_tags

FRONTMATTER_DELIMITER = "---"
HEADING_PREFIX = "# "


def count_moved_lines(items: Sequence[TaggedItem]) -> int:
    """
    Lines a relocation inserts into its target: items, subtasks and padding.
    """
    count = sum(item.line_count for item in items)
    if count > 0:
        count += INSERT_PADDING_LINES
    return count


def line_after_insert(line_number: int, insertion_line: int, inserted_count: int) -> int:
    """1-indexed position of an existing line once a block is spliced in at insertion_line."""
    if line_number - 1 >= insertion_line:
        return line_number + inserted_count
    return line_number


def line_after_removal(line_number: int, insertion_line: int, inserted_count: int) -> int:
    """Inverse of line_after_insert, for lines that were below the block."""
    if line_number - 1 >= insertion_line + inserted_count:
        return line_number - inserted_count
    return line_number


def find_insertion_point(lines: List[str]) -> int:
    """
    Index at which relocated content is spliced into a document.

    After a leading metadata block (skipping the blank lines that follow
    it), otherwise after the first top-level heading, otherwise at the top.
    """
    insertion_point = 0

    if lines and lines[0].strip() == FRONTMATTER_DELIMITER:
        for i in range(1, len(lines)):
            if lines[i].strip() == FRONTMATTER_DELIMITER:
                insertion_point = i + 1
                break
        while insertion_point < len(lines) and not lines[insertion_point].strip():
            insertion_point += 1
    else:
        for i, line in enumerate(lines):
            if line.strip().startswith(HEADING_PREFIX):
                insertion_point = i + 1
                break

    return insertion_point


def build_insert_block(lines: List[str], insertion_point: int, items: Sequence[TaggedItem]) -> List[str]:
    """
    Lines to splice in at `insertion_point`.

    Items lose their to-talk tags; subtasks are copied verbatim.
    """
    block: List[str] = []

    if insertion_point < len(lines) and lines[insertion_point].strip():
        block.append("")

    for item in items:
        block.append(strip_recipient_tags(item.raw_text))
        block.extend(subtask.text for subtask in item.subtasks)

    block.append("")
    return block


class DocumentMutator:
    """
    Perform verified edits on documents held by a document store.

    Features:
    - Single-line replacement with pre and post verification
    - Block insertion after the header/title of a note
    - Range removal for rollback and undo
    """

    def __init__(self, store):
        """
        Args:
            store: Document store providing read_raw_text/write_raw_text/load_document
        """
        self.store = store

    def _read_lines(self, document: str) -> List[str]:
        return self.store.read_raw_text(document).split("\n")

    def _write_lines(self, document: str, lines: List[str]) -> None:
        self.store.write_raw_text(document, "\n".join(lines))

    def replace_in_line(
        self,
        document: str,
        line_number: int,
        old_pattern: str,
        new_pattern: str
    ) -> LineModification:
        """
        Replace the first occurrence of `old_pattern` on one line.

        Args:
            document: Document name
            line_number: 1-indexed line to edit
            old_pattern: Text that must be present on the line
            new_pattern: Replacement text

        Returns:
            The applied modification (old and new line text)

        Raises:
            LineOutOfRange: line_number outside the document
            PatternNotFound: old_pattern not on the line (exact substring)
            ReplacementNoOp: the line did not change
            VerificationFailed: new_pattern missing after replacement
        """
        lines = self._read_lines(document)

        if line_number < 1 or line_number > len(lines):
            raise LineOutOfRange(document, line_number, len(lines))

        index = line_number - 1
        old_line = lines[index]

        if old_pattern not in old_line:
            raise PatternNotFound(document, line_number, old_pattern, old_line)

        new_line = old_line.replace(old_pattern, new_pattern, 1)

        if new_line == old_line:
            raise ReplacementNoOp(document, line_number, old_line)

        if new_pattern not in new_line:
            raise VerificationFailed(document, line_number, new_pattern)

        lines[index] = new_line
        self._write_lines(document, lines)

        logger.debug(f"Replaced {old_pattern!r} with {new_pattern!r} at {document}:{line_number}")
        return LineModification(line_number=line_number, old_text=old_line, new_text=new_line)

    def insert_items(self, document: str, items: Sequence[TaggedItem]) -> Tuple[int, List[str]]:
        """
        Insert tag-stripped items and their subtasks near the top of a document.

        The leading blank line is only added when the insertion point holds
        text, so the block is count_moved_lines(items) long in that case and
        one line shorter otherwise.

        Args:
            document: Target document name
            items: Items to insert, in order

        Returns:
            (insertion line index, inserted lines), needed to remove the block later

        Raises:
            DocumentNotFound: Target document does not exist
        """
        self.store.load_document(document)

        lines = self._read_lines(document)
        insertion_point = find_insertion_point(lines)
        block = build_insert_block(lines, insertion_point, items)

        new_lines = lines[:insertion_point] + block + lines[insertion_point:]
        self._write_lines(document, new_lines)

        logger.info(f"Inserted {len(block)} line(s) into {document} at line {insertion_point}")
        return insertion_point, block

    def remove_lines(
        self,
        document: str,
        start_line: int,
        line_count: int,
        expected: Optional[Sequence[str]] = None
    ) -> None:
        """
        Delete `line_count` lines starting at index `start_line`.

        Without `expected` the end of the range is clamped to the document.
        With it, the range must hold exactly those lines or nothing is removed.

        Raises:
            LineOutOfRange: start_line is outside the document, or the
                expected block runs past its end
            PatternNotFound: a line in the range differs from `expected`
        """
        lines = self._read_lines(document)

        if start_line < 0 or start_line >= len(lines):
            raise LineOutOfRange(document, start_line, len(lines))

        if expected is not None:
            line_count = len(expected)
            if start_line + line_count > len(lines):
                raise LineOutOfRange(document, start_line + line_count, len(lines))
            for offset, wanted in enumerate(expected):
                actual = lines[start_line + offset]
                if actual != wanted:
                    raise PatternNotFound(document, start_line + offset + 1, wanted, actual)

        end_line = min(start_line + max(line_count, 0), len(lines))
        new_lines = lines[:start_line] + lines[end_line:]
        self._write_lines(document, new_lines)

        logger.info(f"Removed {end_line - start_line} line(s) from {document} at line {start_line}")
