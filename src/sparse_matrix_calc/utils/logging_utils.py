import logging
import sys
from pathlib import Path
from typing import Optional, TextIO
from datetime import datetime

# Default log directory
DEFAULT_LOG_DIR = Path("var/log")

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
LOG_DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


def get_log_file_path(
        module_name: str,
        log_dir: Optional[Path] = None,
        include_timestamp: bool = True
) -> Path:
    """
    Generates a log file path for a logger name, creating the directory if needed.

    Parameters
    ----------
    module_name : str
        The logger name (e.g., "sparse_matrix_calc.scripts.matrix_calculator").
        Dots become underscores in the filename.
    log_dir : Optional[Path], optional
        Target directory. Defaults to `DEFAULT_LOG_DIR`.
    include_timestamp : bool, optional
        If True, append a `YYYYmmdd_HHMMSS` timestamp so runs never overwrite
        each other, by default True.

    Returns
    -------
    Path
        The full path of the log file.
    """
    if log_dir is None:
        log_dir = DEFAULT_LOG_DIR

    log_dir.mkdir(parents=True, exist_ok=True)

    safe_name = module_name.replace(".", "_")

    if include_timestamp:
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        filename = f"{safe_name}_{timestamp}.log"
    else:
        filename = f"{safe_name}.log"

    return log_dir / filename


def setup_logger(
    name: str,
    level: int = logging.INFO,
    log_file: Optional[str] = None,
    log_dir: Optional[Path] = None,
    enable_file_logging: bool = True,
    console_level: Optional[int] = None,
    file_level: Optional[int] = None,
    stream: Optional[TextIO] = None,
) -> logging.Logger:
    """
    Configures and returns a logger with a console handler and an optional file handler.

    Existing handlers on the logger are cleared first so repeated calls do not
    duplicate output.

    Parameters
    ----------
    name : str
        The logger name, typically `__name__` or a package name.
    level : int, optional
        Base level for the logger and its handlers, by default `logging.INFO`.
    log_file : Optional[str], optional
        Explicit log file path. Overrides the automatic path.
    log_dir : Optional[Path], optional
        Directory for the automatic log file. Defaults to `DEFAULT_LOG_DIR`.
    enable_file_logging : bool, optional
        If True and `log_file` is not given, write to a timestamped file in
        `log_dir`. By default True.
    console_level : Optional[int], optional
        Level override for the console handler.
    file_level : Optional[int], optional
        Level override for the file handler.
    stream : Optional[TextIO], optional
        Stream for the console handler, by default `sys.stdout`.

    Returns
    -------
    logging.Logger
        The configured logger.
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)
    if logger.hasHandlers():
        logger.handlers.clear()

    formatter = logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT)

    console_handler = logging.StreamHandler(stream if stream is not None else sys.stdout)
    console_handler.setFormatter(formatter)
    console_handler.setLevel(console_level if console_level is not None else level)
    logger.addHandler(console_handler)

    file_handler = None
    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path, mode='a')
    elif enable_file_logging:
        log_path = get_log_file_path(name, log_dir=log_dir, include_timestamp=True)
        file_handler = logging.FileHandler(log_path, mode='a')
        logger.info(f"Logging to file: {log_path}")

    if file_handler:
        file_handler.setFormatter(formatter)
        file_handler.setLevel(file_level if file_level is not None else level)
        logger.addHandler(file_handler)

    return logger

