from __future__ import annotations
import logging
from pathlib import Path

from sparse_matrix_calc.errors import MatrixFormatError
from sparse_matrix_calc.structures.sparse_matrix import SparseMatrix
from sparse_matrix_calc.formats.codec import encode_matrix, parse_matrix_text

logger = logging.getLogger(__name__)


def read_matrix_file(
    path: str | Path,
    encoding: str = "utf-8",
    strict_headers: bool = False,
    check_bounds: bool = False,
) -> SparseMatrix:
    """
    Reads and decodes a matrix document from disk.

    Parameters
    ----------
    path : str | Path
        Location of the matrix file.
    encoding : str, optional
        Text encoding of the file, by default "utf-8".
    strict_headers, check_bounds : bool, optional
        Parsing options forwarded to `decode_matrix`.

    Returns
    -------
    SparseMatrix
        The decoded matrix.

    Raises
    ------
    OSError
        If the file cannot be read.
    MatrixFormatError
        If the content is not valid text in `encoding` or not a valid matrix
        document.
    """
    path_obj = Path(path)
    logger.info(f"Reading matrix from: {path_obj}")
    try:
        content = path_obj.read_text(encoding=encoding)
    except UnicodeDecodeError as e:
        logger.debug(f"Undecodable {encoding} content in {path_obj}: {e}")
        raise MatrixFormatError(reason=f"not valid {encoding} text: {e.reason}") from e

    matrix = parse_matrix_text(content, strict_headers=strict_headers, check_bounds=check_bounds)
    logger.info(f"Loaded {matrix.num_rows}x{matrix.num_cols} matrix ({matrix.nnz} nonzero) from {path_obj.name}")

    return matrix


def write_matrix_file(matrix: SparseMatrix, path: str | Path, sort_entries: bool = False, encoding: str = "utf-8") -> Path:
    """Encodes `matrix` and writes it to `path`, creating parent directories. Returns the written path."""
    path_obj = Path(path)
    path_obj.parent.mkdir(parents=True, exist_ok=True)
    path_obj.write_text(encode_matrix(matrix, sort_entries=sort_entries), encoding=encoding)
    logger.info(f"Wrote {matrix.num_rows}x{matrix.num_cols} matrix to: {path_obj}")
    return path_obj
