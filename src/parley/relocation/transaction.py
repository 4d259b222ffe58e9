"""
RelocationBuilder: moves tagged items into a target document as one unit.

Steps:
1. Insert the tag-stripped items (and subtasks) into the target.
2. Flip each item and subtask from open to closed at its source.
3. On any failure in (2), remove the inserted block and revert every flip
   already applied, then re-raise. Nothing is left half-moved.
4. Record the move on the undo stack.
"""

from typing import Dict, List, Sequence, Tuple

from parley.exceptions import NoSelection, NoTargetSelected, ParleyError
from parley.logging_config import logger
from parley.schemas import LineModification, RelocationTransaction, TaggedItem

from .config import CLOSED_MARKER, OPEN_MARKER
from .editor import DocumentMutator, line_after_insert, line_after_removal
from .undo import UndoStack


class RelocationBuilder:
    """
    Apply relocations through a DocumentMutator and record them for undo.
    """

    def __init__(self, mutator: DocumentMutator, undo_stack: UndoStack):
        self.mutator = mutator
        self.undo_stack = undo_stack

    def relocate(self, person: str, target: str, items: Sequence[TaggedItem]) -> RelocationTransaction:
        """
        Move `items` into `target` and mark them complete at their sources.

        Args:
            person: Group key the items were selected under
            target: Target document name
            items: Selected items, in order

        Returns:
            The recorded transaction (already pushed onto the undo stack)

        Raises:
            NoSelection: No items given
            NoTargetSelected: Empty target name
            MutationError: A source line could not be marked complete (after rollback)
            DocumentStoreError: The target could not be read or written
        """
        items = list(items)
        if not items:
            raise NoSelection()
        if not target:
            raise NoTargetSelected()

        insertion_line, block = self.mutator.insert_items(target, items)
        inserted_count = len(block)

        modifications: Dict[str, List[LineModification]] = {}
        applied: List[Tuple[str, LineModification]] = []

        for item in items:
            steps = [("todo", item.line_number)] + [("subtask", sub.line_number) for sub in item.subtasks]
            for kind, line_number in steps:
                if item.source_document == target:
                    line_number = line_after_insert(line_number, insertion_line, inserted_count)
                try:
                    mod = self.mutator.replace_in_line(
                        item.source_document, line_number, OPEN_MARKER, CLOSED_MARKER
                    )
                except ParleyError as e:
                    logger.error(
                        f"Failed to mark {kind} complete at {item.source_document}:{line_number}: {e}"
                    )
                    self._rollback(target, insertion_line, block, applied)
                    raise

                modifications.setdefault(item.source_document, []).append(mod)
                applied.append((item.source_document, mod))

        transaction = RelocationTransaction(
            person=person,
            items=items,
            target_document=target,
            target_insertion_line=insertion_line,
            inserted_lines=block,
            source_modifications=modifications,
        )
        self.undo_stack.push(transaction)

        logger.info(
            f"Moved {len(items)} todo(s) for '{person}' into {target} "
            f"({transaction.modification_count} source line(s) marked complete)"
        )
        return transaction

    def _rollback(
        self,
        target: str,
        insertion_line: int,
        block: List[str],
        applied: List[Tuple[str, LineModification]],
    ) -> None:
        """
        Undo a partially applied move, most recent edit first.

        Failures here are logged; the caller re-raises the original error.
        """
        logger.warning(f"Rolling back move into {target}: {len(applied)} source edit(s) to revert")

        removed = True
        try:
            self.mutator.remove_lines(target, insertion_line, len(block), expected=block)
        except ParleyError as e:
            removed = False
            logger.error(f"Rollback could not remove inserted lines from {target}: {e}")

        for document, mod in reversed(applied):
            line_number = mod.line_number
            if document == target and removed:
                line_number = line_after_removal(line_number, insertion_line, len(block))
            try:
                self.mutator.replace_in_line(document, line_number, mod.new_text, mod.old_text)
            except ParleyError as e:
                logger.error(f"Rollback could not restore {document}:{line_number}: {e}")
