#!/usr/bin/env python3
"""
Add, subtract or multiply two sparse matrix files from the command line.

Any value not given as an argument is asked for interactively, so running the
script bare walks through the operation menu and both file paths.

Examples:
  - python matrix_calculator.py
  - python matrix_calculator.py --op multiply a.txt b.txt
  - python matrix_calculator.py --op 1 --sort --output result.txt a.txt b.txt
  - python matrix_calculator.py -vv --config my_settings.yaml --op 2 a.txt b.txt

"""

# --- Standard Library Imports ---
from __future__ import annotations
import argparse
import logging
import sys
from dataclasses import replace
from pathlib import Path
from typing import Callable, Optional

# --- Local Application Imports ---
from sparse_matrix_calc.config import CalculatorConfig, load_calculator_config
from sparse_matrix_calc.errors import DimensionMismatchError, MatrixFormatError
from sparse_matrix_calc.formats.codec import encode_matrix
from sparse_matrix_calc.formats.file_io import write_matrix_file
from sparse_matrix_calc.operations import MatrixOperation, OPERATION_MENU, parse_operation_choice, run_operation
from sparse_matrix_calc.utils.logging_utils import setup_logger

logger = logging.getLogger(__name__)

InputFn = Callable[[str], str]

INVALID_CHOICE_MESSAGE = "invalid option, please select a number 1, 2 or 3"
RESULT_HEADER = "Result Matrix:"


# --------------------------
# Logging Configuration
# --------------------------
def setup_cli_logging(verbose_level: int, log_file: Optional[str] = None, log_dir: Optional[Path] = None) -> None:
    """
    Configures the package logger from the command-line verbosity.

    Parameters
    ----------
    verbose_level : int
        0 for WARNING, 1 for INFO, 2 or more for DEBUG.
    log_file : Optional[str]
        Explicit log file path. When omitted and `verbose_level > 0`, a
        timestamped file is created in `log_dir`.
    log_dir : Optional[Path]
        Directory for the automatic log file.
    """
    level_map = {
        0: logging.WARNING,
        1: logging.INFO,
        2: logging.DEBUG,
    }
    log_level = level_map.get(min(verbose_level, 2), logging.INFO)
    should_log_to_file = (verbose_level > 0) or (log_file is not None)

    # Module loggers under the package propagate to this one.
    setup_logger(
        "sparse_matrix_calc",
        level=log_level,
        log_file=log_file,
        log_dir=log_dir,
        enable_file_logging=should_log_to_file,
        stream=sys.stderr,
    )


# --------------------------
# Prompts
# --------------------------
def prompt_operation(input_fn: InputFn = input) -> MatrixOperation:
    """Asks for an operation until the answer is a valid menu choice."""
    while True:
        operation = parse_operation_choice(input_fn(OPERATION_MENU))
        if operation is not None:
            return operation
        print(INVALID_CHOICE_MESSAGE)


def prompt_path(prompt: str, input_fn: InputFn = input) -> str:
    """Asks for a file path, stripping surrounding whitespace from the answer."""
    return input_fn(prompt).strip()


def build_parser() -> argparse.ArgumentParser:
    """Builds the argument parser for the calculator."""
    parser = argparse.ArgumentParser(description="Add, subtract or multiply two sparse matrix files.")
    parser.add_argument("first", nargs="?", default=None,
                        help="Path to the first (left) matrix file. Prompted for if omitted.")
    parser.add_argument("second", nargs="?", default=None,
                        help="Path to the second (right) matrix file. Prompted for if omitted.")
    parser.add_argument("--op", default=None,
                        help="Operation: 1/add, 2/subtract or 3/multiply. Prompted for if omitted.")
    parser.add_argument("--output", default=None,
                        help="Also write the result matrix to this file.")
    parser.add_argument("--sort", action="store_true",
                        help="Print entries in (row, col) order.")
    parser.add_argument("--config", default=None,
                        help="Path to a settings YAML overriding the bundled defaults.")

    # Parsing arguments
    parser.add_argument("--strict-headers", action="store_true",
                        help="Require clean integers after rows= and cols=.")
    parser.add_argument("--check-bounds", action="store_true",
                        help="Reject entries outside the declared dimensions.")

    # Logging arguments
    parser.add_argument("-v", "--verbose", action="count", default=0,
                        help="Increase verbosity (-v=INFO, -vv=DEBUG)")
    parser.add_argument("--log-file", default=None,
                        help="Path to log file (default: var/log/sparse_matrix_calc_TIMESTAMP.log if verbose)")
    parser.add_argument("--quiet", action="store_true",
                        help="Suppress all log output except errors")
    return parser


def resolve_config(cli_args: argparse.Namespace) -> CalculatorConfig:
    """Loads the YAML settings and applies any command-line overrides."""
    config = load_calculator_config(cli_args.config)

    overrides = {}
    if cli_args.strict_headers:
        overrides["strict_headers"] = True
    if cli_args.check_bounds:
        overrides["check_bounds"] = True
    if cli_args.sort:
        overrides["sort_entries"] = True

    return replace(config, **overrides) if overrides else config


# --------------------------
# Command-Line Interface
# --------------------------
def main(argv=None, input_fn: InputFn = input) -> int:
    """
    Runs one calculation and prints the result document.

    Returns
    -------
    int
        0 on success, 1 if the operation itself fails (dimension mismatch or
        unwritable output), 2 if the inputs or settings cannot be loaded.
    """
    parser = build_parser()
    cli_args = parser.parse_args(argv)

    operation = None
    if cli_args.op is not None:
        operation = parse_operation_choice(cli_args.op)
        if operation is None:
            parser.error(f"invalid --op {cli_args.op!r}; choose 1/add, 2/subtract or 3/multiply")

    try:
        config = resolve_config(cli_args)
    except (ValueError, OSError) as e:
        print(f"Failed to load settings: {e}", file=sys.stderr)
        return 2

    verbose_level = 0 if cli_args.quiet else cli_args.verbose
    setup_cli_logging(verbose_level, cli_args.log_file, config.log_dir)

    try:
        if operation is None:
            operation = prompt_operation(input_fn)
        first_path = cli_args.first or prompt_path("Enter your first matrix file path: ", input_fn)
        second_path = cli_args.second or prompt_path("Enter your second matrix file path: ", input_fn)
    except EOFError:
        print("No input provided.", file=sys.stderr)
        return 2

    logger.info(f"Requested {operation.label} of {first_path} and {second_path}")

    try:
        result = run_operation(operation, first_path, second_path, config)
    except (MatrixFormatError, OSError) as e:
        logger.error(f"Failed to load matrices: {e!r}")
        print(e if isinstance(e, MatrixFormatError) else f"Cannot read matrix file: {e}", file=sys.stderr)
        return 2
    except DimensionMismatchError as e:
        logger.error(f"{operation.label.capitalize()} failed: {e}")
        print(e, file=sys.stderr)
        return 1

    print(RESULT_HEADER)
    print(encode_matrix(result, sort_entries=config.sort_entries), end="")

    if cli_args.output:
        try:
            write_matrix_file(result, cli_args.output, sort_entries=config.sort_entries, encoding=config.encoding)
        except OSError as e:
            logger.error(f"Failed to write result: {e}")
            print(f"Failed to write result to {cli_args.output}: {e}", file=sys.stderr)
            return 1

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
