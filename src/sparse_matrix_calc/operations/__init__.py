from sparse_matrix_calc.operations.dispatcher import (
    MatrixOperation,
    OPERATION_MENU,
    parse_operation_choice,
    apply_operation,
    run_operation,
)

__all__ = [
    "MatrixOperation",
    "OPERATION_MENU",
    "parse_operation_choice",
    "apply_operation",
    "run_operation",
]
