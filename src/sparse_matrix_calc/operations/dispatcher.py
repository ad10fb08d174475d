from __future__ import annotations
import logging
from enum import Enum
from pathlib import Path
from typing import Callable, Dict, Optional

from sparse_matrix_calc.config import CalculatorConfig
from sparse_matrix_calc.formats.file_io import read_matrix_file
from sparse_matrix_calc.formats.tokenizer import trim_spaces
from sparse_matrix_calc.structures.sparse_matrix import SparseMatrix

__all__ = ["MatrixOperation", "OPERATION_MENU", "parse_operation_choice", "apply_operation", "run_operation"]

logger = logging.getLogger(__name__)


class MatrixOperation(Enum):
    """
    The arithmetic operations offered by the calculator.

    Each member's value is the menu code the user types.

    ADD       : "1", element-wise sum.
    SUBTRACT  : "2", element-wise difference.
    MULTIPLY  : "3", matrix product.
    """
    ADD = "1"
    SUBTRACT = "2"
    MULTIPLY = "3"

    @property
    def label(self) -> str:
        """The human-readable name used in the menu and log messages."""
        return _LABELS[self]


_LABELS: Dict[MatrixOperation, str] = {
    MatrixOperation.ADD: "addition",
    MatrixOperation.SUBTRACT: "subtraction",
    MatrixOperation.MULTIPLY: "multiplication",
}

_ALIASES: Dict[str, MatrixOperation] = {
    "add": MatrixOperation.ADD,
    "subtract": MatrixOperation.SUBTRACT,
    "multiply": MatrixOperation.MULTIPLY,
}

_HANDLERS: Dict[MatrixOperation, Callable[[SparseMatrix, SparseMatrix], SparseMatrix]] = {
    MatrixOperation.ADD: SparseMatrix.add,
    MatrixOperation.SUBTRACT: SparseMatrix.subtract,
    MatrixOperation.MULTIPLY: SparseMatrix.multiply,
}

OPERATION_MENU = "Select an operation:\n" + "".join(
    f" {operation.value}.{operation.label}\n" for operation in MatrixOperation
) + " Your choice: "


def parse_operation_choice(raw: str) -> Optional[MatrixOperation]:
    """
    Maps a user's menu answer to an operation.

    Accepts the menu code (`1`, `2`, `3`) or an operation name (`add`,
    `subtract`, `multiply`, any case). Surrounding spaces and tabs are ignored.

    Returns
    -------
    Optional[MatrixOperation]
        The chosen operation, or None if the answer is not recognised.
    """
    choice = trim_spaces(raw)
    try:
        return MatrixOperation(choice)
    except ValueError:
        return _ALIASES.get(choice.lower())


def apply_operation(operation: MatrixOperation, left: SparseMatrix, right: SparseMatrix) -> SparseMatrix:
    """
    Applies `operation` to two matrices and returns the new result matrix.

    Raises
    ------
    DimensionMismatchError
        If the operands' dimensions are incompatible for the operation.
    """
    logger.info(
        f"Applying {operation.label}: {left.num_rows}x{left.num_cols} ({left.nnz} nnz) "
        f"with {right.num_rows}x{right.num_cols} ({right.nnz} nnz)"
    )
    result = _HANDLERS[operation](left, right)
    logger.info(f"Result: {result.num_rows}x{result.num_cols} with {result.nnz} nonzero entries")

    return result


def run_operation(
    operation: MatrixOperation,
    left_path: str | Path,
    right_path: str | Path,
    config: Optional[CalculatorConfig] = None,
) -> SparseMatrix:
    """
    Loads two matrix files and applies `operation` to them.

    Parameters
    ----------
    operation : MatrixOperation
        The operation to perform.
    left_path, right_path : str | Path
        Paths of the left and right operand files.
    config : Optional[CalculatorConfig]
        Parsing settings; defaults to `CalculatorConfig()`.

    Returns
    -------
    SparseMatrix
        The result matrix.

    Raises
    ------
    OSError
        If either file cannot be read.
    MatrixFormatError
        If either file is malformed.
    DimensionMismatchError
        If the operands are incompatible.
    """
    if config is None:
        config = CalculatorConfig()

    load_options = {
        "encoding": config.encoding,
        "strict_headers": config.strict_headers,
        "check_bounds": config.check_bounds,
    }
    left = read_matrix_file(left_path, **load_options)
    right = read_matrix_file(right_path, **load_options)

    return apply_operation(operation, left, right)
