from sparse_matrix_calc.structures.sparse_matrix import SparseMatrix, MatrixKey

__all__ = [
    "SparseMatrix",
    "MatrixKey",
]
