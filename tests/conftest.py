import logging

import pytest


@pytest.fixture(autouse=True)
def reset_logging():
    """Drop handlers the CLI installs so later tests do not write to closed streams."""
    yield
    logger = logging.getLogger("swagger_explorer")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.propagate = True
