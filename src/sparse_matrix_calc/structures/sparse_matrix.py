from __future__ import annotations
from collections import defaultdict
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Tuple

import numpy as np

from sparse_matrix_calc.errors import DimensionMismatchError

MatrixKey = Tuple[int, int]
Entry = Tuple[int, int, int]


@dataclass(frozen=True, slots=True)
class SparseMatrix:
    """
    A sparse integer matrix that stores only its nonzero entries.

    The entries live in a dictionary keyed by `(row, col)` tuples. Zero values
    are never stored: writing a zero removes the key. Dimensions are fixed at
    construction (the dataclass is frozen), but the entry map itself is
    populated in place through `set_element`.

    Indices are not checked against `num_rows`/`num_cols`; a matrix can hold
    entries outside its declared shape. Only the arithmetic compares
    dimensions.

    Attributes
    ----------
    num_rows : int
        Number of rows (>= 0).
    num_cols : int
        Number of columns (>= 0).
    entries : Dict[MatrixKey, int]
        Mapping from `(row, col)` to a nonzero integer value, in insertion order.
    """
    num_rows: int
    num_cols: int
    entries: Dict[MatrixKey, int] = field(default_factory=dict)

    # The entry map is mutable, so matrices are not hashable.
    __hash__ = None

    def __post_init__(self) -> None:
        if self.num_rows < 0 or self.num_cols < 0:
            raise ValueError(f"Matrix dimensions must be non-negative, got {self.num_rows}x{self.num_cols}")

        # Own a private copy of the entries with any zero values dropped.
        object.__setattr__(self, "entries", {key: value for key, value in self.entries.items() if value != 0})

    @property
    def shape(self) -> Tuple[int, int]:
        """Returns the declared shape as `(num_rows, num_cols)`."""
        return self.num_rows, self.num_cols

    @property
    def nnz(self) -> int:
        """Returns the number of stored (nonzero) entries."""
        return len(self.entries)

    def items(self) -> Iterator[Entry]:
        """Yields every stored entry as a `(row, col, value)` triple, in insertion order."""
        for (row, col), value in self.entries.items():
            yield row, col, value

    def get_element(self, row: int, col: int) -> int:
        """Returns the value at `(row, col)`, or 0 if nothing is stored there."""
        return self.entries.get((row, col), 0)

    def set_element(self, row: int, col: int, value: int) -> None:
        """
        Stores `value` at `(row, col)`.

        A value of 0 removes any existing entry for the key (and is a no-op if
        there is none), so the matrix never holds an explicit zero.

        Parameters
        ----------
        row : int
            The row index.
        col : int
            The column index.
        value : int
            The value to store.
        """
        if value == 0:
            self.entries.pop((row, col), None)
        else:
            self.entries[(row, col)] = value

    def add(self, other: SparseMatrix) -> SparseMatrix:
        """
        Returns the element-wise sum `self + other` as a new matrix.

        Raises
        ------
        DimensionMismatchError
            If the two matrices do not have the same shape.
        """
        if self.num_rows != other.num_rows or self.num_cols != other.num_cols:
            raise DimensionMismatchError("addition")

        result = SparseMatrix(self.num_rows, self.num_cols, self.entries)
        for (row, col), value in other.entries.items():
            result.set_element(row, col, result.get_element(row, col) + value)

        return result

    def subtract(self, other: SparseMatrix) -> SparseMatrix:
        """
        Returns the element-wise difference `self - other` as a new matrix.

        Raises
        ------
        DimensionMismatchError
            If the two matrices do not have the same shape.
        """
        if self.num_rows != other.num_rows or self.num_cols != other.num_cols:
            raise DimensionMismatchError("subtraction")

        result = SparseMatrix(self.num_rows, self.num_cols, self.entries)
        for (row, col), value in other.entries.items():
            result.set_element(row, col, result.get_element(row, col) - value)

        return result

    def multiply(self, other: SparseMatrix) -> SparseMatrix:
        """
        Returns the matrix product `self @ other` as a new matrix.

        Only nonzero pairs are visited. The entries of `other` are first grouped
        by row into an inverted index, then each nonzero `(i, k)` of `self` is
        combined with the nonzeros of row `k` of `other`. The cost is roughly
        `O(nnz(self) * average row density of other)` rather than the dense
        `O(rows * cols * inner)`.

        Every partial sum is written with `set_element`, so a running total
        that reaches 0 is dropped at that moment and re-inserted by any later
        term for the same cell.

        Parameters
        ----------
        other : SparseMatrix
            The right-hand operand.

        Returns
        -------
        SparseMatrix
            A `self.num_rows x other.num_cols` matrix.

        Raises
        ------
        DimensionMismatchError
            If `self.num_cols != other.num_rows`.
        """
        if self.num_cols != other.num_rows:
            raise DimensionMismatchError("multiplication")

        result = SparseMatrix(self.num_rows, other.num_cols)

        # --- 1. Inverted index of the right operand: row -> [(col, value)] ---
        row_index: Dict[int, List[Tuple[int, int]]] = defaultdict(list)
        for (row_y, col_y), value_y in other.entries.items():
            row_index[row_y].append((col_y, value_y))

        # --- 2. Accumulate products of matching nonzeros ---
        for (row_x, col_x), value_x in self.entries.items():
            for col_y, value_y in row_index.get(col_x, ()):
                previous = result.get_element(row_x, col_y)
                result.set_element(row_x, col_y, previous + value_x * value_y)

        return result

    __add__ = add
    __sub__ = subtract
    __matmul__ = multiply

    def to_dense(self) -> np.ndarray:
        """
        Expands the matrix into a dense `int64` NumPy array.

        Raises
        ------
        IndexError
            If a stored entry lies outside the declared shape.
        """
        dense = np.zeros((self.num_rows, self.num_cols), dtype=np.int64)
        for (row, col), value in self.entries.items():
            if not (0 <= row < self.num_rows and 0 <= col < self.num_cols):
                raise IndexError(f"Entry ({row}, {col}) lies outside a {self.num_rows}x{self.num_cols} matrix")
            dense[row, col] = value
        return dense

    @classmethod
    def from_dense(cls, array: Any) -> SparseMatrix:
        """Builds a sparse matrix from the nonzero cells of a 2D integer array-like."""
        dense = np.asarray(array)
        if dense.ndim != 2:
            raise ValueError(f"Expected a 2D array, got {dense.ndim} dimensions")

        matrix = cls(int(dense.shape[0]), int(dense.shape[1]))
        for row, col in zip(*np.nonzero(dense)):
            matrix.set_element(int(row), int(col), int(dense[row, col]))
        return matrix
