from __future__ import annotations
import re
from typing import List, Optional

# `\r\n` must come first so it is consumed as a single separator.
LINE_BREAK_PATTERN = re.compile(r"\r\n|\r|\n")
INTEGER_PATTERN = re.compile(r"[+-]?[0-9]+")
LEADING_INTEGER_PATTERN = re.compile(r"\s*([+-]?[0-9]+)")

TRIM_CHARS = " \t"


def trim_spaces(text: str) -> str:
    """Strips spaces and tabs (and nothing else) from both ends of `text`."""
    return text.strip(TRIM_CHARS)


def split_lines(content: str) -> List[str]:
    """
    Splits raw file content into trimmed, non-empty logical lines.

    Parameters
    ----------
    content : str
        The whole document. `\\n`, `\\r\\n` and a lone `\\r` all end a line.

    Returns
    -------
    List[str]
        Lines with surrounding spaces/tabs removed, in file order. Lines that
        are empty after trimming are dropped.
    """
    trimmed = (trim_spaces(raw_line) for raw_line in LINE_BREAK_PATTERN.split(content))
    return [line for line in trimmed if line]


def is_integer(token: str) -> bool:
    """
    Checks whether `token` is a strict integer literal.

    A valid literal is an optional `+` or `-` followed by one or more ASCII
    digits, with nothing else around it. A lone sign is rejected.
    """
    return INTEGER_PATTERN.fullmatch(token) is not None


def parse_leading_int(text: str) -> Optional[int]:
    """
    Leniently parses the integer at the start of `text`.

    Leading whitespace and a sign are accepted, and anything after the digit
    run is ignored, so `"12abc"` gives 12.

    Returns
    -------
    Optional[int]
        The parsed value, or `None` if `text` does not start with digits.
    """
    match = LEADING_INTEGER_PATTERN.match(text)
    if match is None:
        return None
    return int(match.group(1))


def split_fields(inner: str) -> List[str]:
    """Splits the interior of an entry line on commas and trims each field."""
    return [trim_spaces(part) for part in inner.split(",")]
