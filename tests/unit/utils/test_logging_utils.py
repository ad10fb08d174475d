"""
Tests for the logger setup helpers.
"""
import io
import logging

from sparse_matrix_calc.utils.logging_utils import (
    get_log_file_path,
    setup_logger,
)


def test_get_log_file_path_sanitizes_name(tmp_path):
    """
    Dots in the logger name become underscores and the directory is created.
    """
    log_dir = tmp_path / "logs"

    path = get_log_file_path("sparse_matrix_calc.formats", log_dir=log_dir, include_timestamp=False)

    assert path == log_dir / "sparse_matrix_calc_formats.log"
    assert log_dir.is_dir()


def test_get_log_file_path_with_timestamp(tmp_path):
    """
    The timestamped name keeps the sanitized prefix.
    """
    path = get_log_file_path("a.b", log_dir=tmp_path)

    assert path.name.startswith("a_b_")
    assert path.suffix == ".log"


def test_setup_logger_console_only_and_no_duplicates():
    """
    Repeated setup replaces handlers instead of stacking them.
    """
    name = "sparse_matrix_calc.tests.console"
    setup_logger(name, level=logging.DEBUG, enable_file_logging=False)
    logger = setup_logger(name, level=logging.DEBUG, enable_file_logging=False)

    assert logger.level == logging.DEBUG
    assert len(logger.handlers) == 1
    assert isinstance(logger.handlers[0], logging.StreamHandler)

    logger.handlers.clear()


def test_setup_logger_writes_to_explicit_file(tmp_path):
    """
    An explicit `log_file` receives the formatted records.
    """
    log_file = tmp_path / "sub" / "run.log"
    logger = setup_logger("sparse_matrix_calc.tests.file", log_file=str(log_file))

    logger.info("hello file")
    for handler in logger.handlers:
        handler.flush()

    assert "INFO - hello file" in log_file.read_text()

    for handler in logger.handlers:
        handler.close()
    logger.handlers.clear()


def test_setup_logger_console_stream_override():
    """
    The console handler writes to the given stream instead of stdout.
    """
    buffer = io.StringIO()
    logger = setup_logger(
        "sparse_matrix_calc.tests.stream",
        enable_file_logging=False,
        stream=buffer,
    )

    logger.error("to the side channel")

    assert logger.handlers[0].stream is buffer
    assert "ERROR - to the side channel" in buffer.getvalue()

    logger.handlers.clear()
