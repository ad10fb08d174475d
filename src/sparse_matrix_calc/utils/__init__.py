from sparse_matrix_calc.utils.logging_utils import setup_logger, get_log_file_path, DEFAULT_LOG_DIR

__all__ = [
    "setup_logger",
    "get_log_file_path",
    "DEFAULT_LOG_DIR",
]
