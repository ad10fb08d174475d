"""
Tests for mapping user choices to matrix operations and running them on files.
"""
import pytest

from sparse_matrix_calc.config import CalculatorConfig
from sparse_matrix_calc.errors import DimensionMismatchError, MatrixFormatError
from sparse_matrix_calc.operations import (
    MatrixOperation,
    OPERATION_MENU,
    apply_operation,
    parse_operation_choice,
    run_operation,
)
from sparse_matrix_calc.structures import SparseMatrix


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("1", MatrixOperation.ADD),
        ("2", MatrixOperation.SUBTRACT),
        ("3", MatrixOperation.MULTIPLY),
        (" 3\t", MatrixOperation.MULTIPLY),
        ("add", MatrixOperation.ADD),
        ("Subtract", MatrixOperation.SUBTRACT),
        ("MULTIPLY", MatrixOperation.MULTIPLY),
    ],
)
def test_parse_operation_choice_accepts_codes_and_names(raw, expected):
    """
    Menu codes and operation names (any case) select the operation.
    """
    assert parse_operation_choice(raw) is expected


@pytest.mark.parametrize("raw", ["", "0", "4", "12", "addition", "x"])
def test_parse_operation_choice_rejects_unknown(raw):
    """
    Anything else is not a valid choice.
    """
    assert parse_operation_choice(raw) is None


def test_operation_labels_and_menu():
    """
    Each operation has a readable label, and the menu lists all three.
    """
    assert [op.label for op in MatrixOperation] == ["addition", "subtraction", "multiplication"]
    assert OPERATION_MENU.startswith("Select an operation:\n")
    for line in (" 1.addition", " 2.subtraction", " 3.multiplication"):
        assert line in OPERATION_MENU


def test_apply_operation_dispatches():
    """
    `apply_operation` calls the matching `SparseMatrix` method.
    """
    left = SparseMatrix(2, 2, {(0, 0): 3, (1, 0): 1})
    right = SparseMatrix(2, 2, {(0, 0): 1, (0, 1): 2})

    assert apply_operation(MatrixOperation.ADD, left, right) == left.add(right)
    assert apply_operation(MatrixOperation.SUBTRACT, left, right) == left.subtract(right)
    assert apply_operation(MatrixOperation.MULTIPLY, left, right) == left.multiply(right)


def test_apply_operation_propagates_dimension_errors():
    """
    Dimension errors are not swallowed by the dispatcher.
    """
    with pytest.raises(DimensionMismatchError, match="for multiplication"):
        apply_operation(MatrixOperation.MULTIPLY, SparseMatrix(2, 3), SparseMatrix(2, 3))


def test_run_operation_on_files(tmp_path):
    """
    Both files are loaded and multiplied.
    """
    left_path = tmp_path / "left.txt"
    right_path = tmp_path / "right.txt"
    left_path.write_text("rows=1\ncols=2\n(0, 0, 2)\n(0, 1, 3)\n", encoding="utf-8")
    right_path.write_text("rows=2\ncols=1\n(0, 0, 4)\n(1, 0, 5)\n", encoding="utf-8")

    result = run_operation(MatrixOperation.MULTIPLY, left_path, right_path)

    assert result.shape == (1, 1)
    assert result.entries == {(0, 0): 23}


def test_run_operation_uses_config_parsing_options(tmp_path):
    """
    The config's `check_bounds` is applied when loading operands.
    """
    left_path = tmp_path / "left.txt"
    right_path = tmp_path / "right.txt"
    left_path.write_text("rows=1\ncols=1\n(5, 5, 1)\n", encoding="utf-8")
    right_path.write_text("rows=1\ncols=1\n", encoding="utf-8")

    assert run_operation(MatrixOperation.ADD, left_path, right_path).get_element(5, 5) == 1

    with pytest.raises(MatrixFormatError):
        run_operation(MatrixOperation.ADD, left_path, right_path, CalculatorConfig(check_bounds=True))
