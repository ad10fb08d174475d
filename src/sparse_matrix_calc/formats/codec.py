from __future__ import annotations
import logging
from typing import List, Sequence

from sparse_matrix_calc.errors import MatrixFormatError
from sparse_matrix_calc.structures.sparse_matrix import SparseMatrix
from sparse_matrix_calc.formats.tokenizer import (
    is_integer,
    parse_leading_int,
    split_fields,
    split_lines,
    trim_spaces,
)

logger = logging.getLogger(__name__)

ROWS_PREFIX = "rows="
COLS_PREFIX = "cols="
FIELDS_PER_ENTRY = 3


def _format_error(reason: str, line_number: int | None = None) -> MatrixFormatError:
    """Logs the specific cause of a format failure and wraps it in the uniform error."""
    if line_number is None:
        logger.debug(f"Rejecting matrix document: {reason}")
    else:
        logger.debug(f"Rejecting matrix document at line {line_number}: {reason}")
    return MatrixFormatError(reason=reason, line_number=line_number)


def _parse_header(line: str, prefix: str, line_number: int, strict: bool) -> int:
    """
    Parses a `rows=<int>` or `cols=<int>` header line.

    By default the number is read leniently (trailing characters are ignored).
    With `strict` the remainder must be a clean integer literal.
    """
    if not line.startswith(prefix):
        raise _format_error(f"expected '{prefix}' header", line_number)

    remainder = line[len(prefix):]
    if strict:
        remainder = trim_spaces(remainder)
        value = int(remainder) if is_integer(remainder) else None
    else:
        value = parse_leading_int(remainder)

    if value is None:
        raise _format_error(f"non-numeric '{prefix}' value {remainder!r}", line_number)
    if value < 0:
        raise _format_error(f"negative '{prefix}' value {value}", line_number)

    return value


def _parse_entry(line: str, line_number: int) -> List[int]:
    """Parses a `(<row>, <col>, <value>)` entry line into three integers."""
    if not (line.startswith("(") and line.endswith(")")):
        raise _format_error("entry must be enclosed in parentheses", line_number)

    fields = split_fields(line[1:-1])
    if len(fields) != FIELDS_PER_ENTRY:
        raise _format_error(f"expected {FIELDS_PER_ENTRY} fields, found {len(fields)}", line_number)

    for field_text in fields:
        if not is_integer(field_text):
            raise _format_error(f"field {field_text!r} is not an integer", line_number)

    return [int(field_text) for field_text in fields]


def decode_matrix(lines: Sequence[str], strict_headers: bool = False, check_bounds: bool = False) -> SparseMatrix:
    """
    Builds a `SparseMatrix` from the logical lines of a matrix document.

    Parameters
    ----------
    lines : Sequence[str]
        Trimmed, non-empty lines as produced by `split_lines`.
    strict_headers : bool, optional
        If True, the `rows=`/`cols=` values must be clean integer literals.
        By default they are parsed leniently.
    check_bounds : bool, optional
        If True, entries outside the declared dimensions are rejected.
        By default they are accepted as-is.

    Returns
    -------
    SparseMatrix
        The populated matrix. Zero-valued entries are not stored.

    Raises
    ------
    MatrixFormatError
        For any violation of the document grammar.
    """
    if len(lines) < 2:
        raise _format_error(f"expected 2 header lines, found {len(lines)}")

    num_rows = _parse_header(lines[0], ROWS_PREFIX, 0, strict_headers)
    num_cols = _parse_header(lines[1], COLS_PREFIX, 1, strict_headers)
    matrix = SparseMatrix(num_rows, num_cols)

    for line_number in range(2, len(lines)):
        row, col, value = _parse_entry(lines[line_number], line_number)
        if check_bounds and not (0 <= row < num_rows and 0 <= col < num_cols):
            raise _format_error(f"entry ({row}, {col}) is outside a {num_rows}x{num_cols} matrix", line_number)
        matrix.set_element(row, col, value)

    logger.debug(f"Decoded {num_rows}x{num_cols} matrix with {matrix.nnz} nonzero entries")
    return matrix


def parse_matrix_text(content: str, strict_headers: bool = False, check_bounds: bool = False) -> SparseMatrix:
    """Tokenizes and decodes a whole matrix document in one step."""
    return decode_matrix(split_lines(content), strict_headers=strict_headers, check_bounds=check_bounds)


def encode_matrix(matrix: SparseMatrix, sort_entries: bool = False) -> str:
    """
    Renders a `SparseMatrix` as a matrix document.

    The output is `rows=<n>`, `cols=<m>`, then one `(<row>, <col>, <value>)`
    line per stored entry. Every line, including the last, ends with a newline.

    Parameters
    ----------
    matrix : SparseMatrix
        The matrix to render.
    sort_entries : bool, optional
        If True, entries are written in `(row, col)` order instead of the
        matrix's insertion order.

    Returns
    -------
    str
        A document that `parse_matrix_text` reads back into an equal matrix.
    """
    entries = sorted(matrix.items()) if sort_entries else matrix.items()

    out_lines = [f"{ROWS_PREFIX}{matrix.num_rows}", f"{COLS_PREFIX}{matrix.num_cols}"]
    out_lines.extend(f"({row}, {col}, {value})" for row, col, value in entries)

    return "\n".join(out_lines) + "\n"
