import logging

import pytest


@pytest.fixture(autouse=True)
def reset_package_logger():
    """
    Detaches any handlers the CLI attached to the package logger.

    The CLI binds a stream handler to the `sys.stderr` of the test that ran it;
    leaving it in place would write into a closed capture stream later on.
    """
    yield
    package_logger = logging.getLogger("sparse_matrix_calc")
    for handler in list(package_logger.handlers):
        handler.close()
        package_logger.removeHandler(handler)
    package_logger.setLevel(logging.NOTSET)
