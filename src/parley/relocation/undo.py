"""
UndoStack: in-memory history of relocations for one run.

Every completed move is pushed as a RelocationTransaction. Undo pops the
most recent one, removes its block from the target and puts each recorded
source line back to its text before the move. Every step first checks that
the line still reads what the move wrote. There is no redo.
"""

from typing import List, Optional

from parley.exceptions import NothingToUndo, ParleyError, UndoStepFailed
from parley.logging_config import logger
from parley.schemas import RelocationTransaction

from .editor import line_after_removal


class UndoStack:
    """
    Ordered list of completed relocations, append-only except for pop-on-undo.
    """

    def __init__(self):
        self._transactions: List[RelocationTransaction] = []

    def __len__(self) -> int:
        return len(self._transactions)

    def __bool__(self) -> bool:
        return bool(self._transactions)

    def push(self, transaction: RelocationTransaction) -> None:
        self._transactions.append(transaction)
        logger.debug(f"Recorded move into {transaction.target_document} (undo depth {len(self)})")

    def peek(self) -> Optional[RelocationTransaction]:
        return self._transactions[-1] if self._transactions else None

    def pop(self) -> RelocationTransaction:
        if not self._transactions:
            raise NothingToUndo()
        return self._transactions.pop()

    def history(self) -> List[RelocationTransaction]:
        """Transactions, most recent first."""
        return list(reversed(self._transactions))

    def undo_last(self, mutator) -> RelocationTransaction:
        """
        Reverse the most recent relocation.

        Args:
            mutator: DocumentMutator used to apply the reversal

        Returns:
            The transaction that was undone

        Raises:
            NothingToUndo: The stack is empty (no document is touched)
            UndoStepFailed: A reversal step could not be applied. Steps already
                reverted stay reverted and the transaction is not re-pushed.
        """
        transaction = self.pop()
        target = transaction.target_document
        insertion_line = transaction.target_insertion_line
        block = transaction.inserted_lines
        inserted_count = len(block)

        logger.info(f"Undoing move of {len(transaction.items)} todo(s) into {target}")

        try:
            mutator.remove_lines(target, insertion_line, inserted_count, expected=block)
        except ParleyError as e:
            raise UndoStepFailed(target, None, f"failed to remove todos from target: {e}") from e

        for document, modifications in transaction.source_modifications.items():
            for mod in modifications:
                line_number = mod.line_number
                if document == target:
                    line_number = line_after_removal(line_number, insertion_line, inserted_count)
                try:
                    mutator.replace_in_line(document, line_number, mod.new_text, mod.old_text)
                except ParleyError as e:
                    logger.error(f"Undo stopped at {document}:{line_number}: {e}")
                    raise UndoStepFailed(document, line_number, str(e)) from e

        logger.info(f"Undo successful: restored {transaction.modification_count} line(s)")
        return transaction
