from __future__ import annotations
from typing import Optional

WRONG_FORMAT_MESSAGE = "Input file has wrong format"


class SparseMatrixError(Exception):
    """Base class for every error raised by `sparse_matrix_calc`."""


class MatrixFormatError(SparseMatrixError, ValueError):
    """
    Raised when a matrix document violates the file grammar.

    The message is always the same coarse ``"Input file has wrong format"``
    regardless of what went wrong. The specific cause is kept on the instance
    for logging and debugging only.

    Parameters
    ----------
    reason : Optional[str]
        A short description of the violation (e.g., "missing rows= header").
    line_number : Optional[int]
        The 0-based index of the offending logical line, if known.
    """

    def __init__(self, reason: Optional[str] = None, line_number: Optional[int] = None):
        super().__init__(WRONG_FORMAT_MESSAGE)
        self.reason = reason
        self.line_number = line_number


class DimensionMismatchError(SparseMatrixError, ValueError):
    """
    Raised when two matrices have incompatible dimensions for an operation.

    Parameters
    ----------
    operation : str
        The operation name used in the message: "addition", "subtraction"
        or "multiplication".
    """

    def __init__(self, operation: str):
        super().__init__(f"Matrix dimensions do not match for {operation}")
        self.operation = operation
