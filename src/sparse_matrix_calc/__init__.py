from sparse_matrix_calc.errors import SparseMatrixError, MatrixFormatError, DimensionMismatchError
from sparse_matrix_calc.structures import SparseMatrix
from sparse_matrix_calc.formats import (
    decode_matrix,
    encode_matrix,
    parse_matrix_text,
    read_matrix_file,
    write_matrix_file,
)

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "SparseMatrix",
    "SparseMatrixError",
    "MatrixFormatError",
    "DimensionMismatchError",
    "decode_matrix",
    "encode_matrix",
    "parse_matrix_text",
    "read_matrix_file",
    "write_matrix_file",
]
