"""
Error types for sizecmp.

Every failure that can end a size comparison query is a subclass of
SizeCmpError. Library functions raise them; the invocation boundary in
sizecmp.function catches them and reports them as diagnostics.
"""

from typing import Optional


class SizeCmpError(Exception):
    """Base class for all sizecmp errors."""
    pass


class InvalidOperator(SizeCmpError):
    """Raised when an operator string is not one of the recognized operators."""

    def __init__(self, operator: str):
        self.operator = operator
        super().__init__(f"invalid operator {operator}")


class InvalidRoot(SizeCmpError):
    """
    Raised when the root path cannot be walked.

    Attributes:
        path: The root path that was rejected
        reason: Either 'missing' or 'not_directory'
    """

    MISSING = "missing"
    NOT_DIRECTORY = "not_directory"

    def __init__(self, path: str, reason: str, detail: Optional[str] = None):
        self.path = path
        self.reason = reason
        if detail:
            message = detail
        elif reason == self.NOT_DIRECTORY:
            message = "is not a directory"
        else:
            message = f"{path}: no such file or directory"
        super().__init__(message)


class InvalidSize(SizeCmpError):
    """Raised when a size expression cannot be reduced to a byte count."""

    def __init__(self, expression: str, message: str = "unrecognized size unit"):
        self.expression = expression
        super().__init__(message)


class TraversalEntryError(SizeCmpError):
    """
    A failure confined to a single entry during a walk.

    These are never raised out of a walk; they are recorded as diagnostics
    and the walk moves on to the next entry.
    """

    def __init__(self, path: str, cause: BaseException):
        self.path = path
        self.cause = cause
        super().__init__(f"{path}: {cause}")
