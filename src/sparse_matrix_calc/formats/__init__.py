from sparse_matrix_calc.formats.tokenizer import split_lines, trim_spaces, is_integer, parse_leading_int
from sparse_matrix_calc.formats.codec import decode_matrix, encode_matrix, parse_matrix_text
from sparse_matrix_calc.formats.file_io import read_matrix_file, write_matrix_file

__all__ = [
    "split_lines",
    "trim_spaces",
    "is_integer",
    "parse_leading_int",
    "decode_matrix",
    "encode_matrix",
    "parse_matrix_text",
    "read_matrix_file",
    "write_matrix_file",
]
