# Custom exceptions for Parley

from typing import Optional


class ParleyError(Exception):
    """Base exception for all application-specific errors."""
    pass


# ----------------------------------------------------------------------------
# Document store
# ----------------------------------------------------------------------------

class DocumentStoreError(ParleyError):
    """Raised when the document store cannot serve a request."""

    def __init__(self, document: str, message: str):
        self.document = document
        self.message = message
        super().__init__(message)


class DocumentNotFound(DocumentStoreError):
    """Raised when a document does not exist in the notes directory."""

    def __init__(self, document: str):
        super().__init__(document, f"Document not found: {document}")


class DocumentIOError(DocumentStoreError):
    """Raised when reading, writing or creating a document fails."""
    pass


# ----------------------------------------------------------------------------
# Document mutation
# ----------------------------------------------------------------------------

class MutationError(ParleyError):
    """Raised when a verified line edit cannot be applied."""

    def __init__(self, document: str, line_number: int, message: str):
        self.document = document
        self.line_number = line_number
        self.message = message
        super().__init__(message)


class LineOutOfRange(MutationError):
    """Raised when a line number falls outside the document."""

    def __init__(self, document: str, line_number: int, total_lines: int):
        self.total_lines = total_lines
        super().__init__(
            document,
            line_number,
            f"Invalid line number {line_number} in {document} (document has {total_lines} lines)",
        )


class PatternNotFound(MutationError):
    """Raised when the expected text is not on the target line."""

    def __init__(self, document: str, line_number: int, pattern: str, line: str):
        self.pattern = pattern
        self.line = line
        super().__init__(
            document,
            line_number,
            f"Pattern {pattern!r} not found in line {line_number} of {document}\n"
            f"Line content: {line!r}",
        )


class ReplacementNoOp(MutationError):
    """Raised when a replacement leaves the line unchanged."""

    def __init__(self, document: str, line_number: int, line: str):
        self.line = line
        super().__init__(
            document,
            line_number,
            f"Replacement failed in line {line_number} of {document}\nLine: {line!r}",
        )


class VerificationFailed(MutationError):
    """Raised when the new text is missing after a replacement."""

    def __init__(self, document: str, line_number: int, pattern: str):
        self.pattern = pattern
        super().__init__(
            document,
            line_number,
            f"Verification failed: new pattern {pattern!r} not found after "
            f"replacement in line {line_number} of {document}",
        )


# ----------------------------------------------------------------------------
# Selection workflow preconditions
# ----------------------------------------------------------------------------

class SelectionError(ParleyError):
    """Raised when a workflow step is attempted without its preconditions."""
    pass


class NoSelection(SelectionError):
    """Raised when confirming with zero items checked."""

    def __init__(self, message: str = "No todos selected"):
        super().__init__(message)


class InvalidPersonIndex(SelectionError):
    """Raised when no person group exists at the requested index."""

    def __init__(self, index: int):
        self.index = index
        super().__init__(f"Invalid person index: {index}")


class NoTargetSelected(SelectionError):
    """Raised when a move is requested without a target document."""

    def __init__(self, message: str = "No note selected"):
        super().__init__(message)


# ----------------------------------------------------------------------------
# Undo
# ----------------------------------------------------------------------------

class UndoError(ParleyError):
    """Base class for undo failures."""
    pass


class NothingToUndo(UndoError):
    """Raised when the undo stack is empty."""

    def __init__(self):
        super().__init__("No moves to undo")


class UndoStepFailed(UndoError):
    """Raised when one reversal step of an undo cannot be applied."""

    def __init__(self, document: str, line_number: Optional[int], reason: str):
        self.document = document
        self.line_number = line_number
        self.reason = reason
        if line_number is None:
            message = f"Failed to restore {document}: {reason}"
        else:
            message = f"Failed to restore {document}:{line_number}: {reason}"
        super().__init__(message)
