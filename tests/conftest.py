import logging

import pytest


@pytest.fixture(autouse=True)
def _reset_package_logger():
    """configure_logging attaches a stderr handler; drop it between tests."""
    yield
    logger = logging.getLogger("profanity_filter")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)
