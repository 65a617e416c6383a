import logging
import pytest
import sys
import os

# Add src dir to path to allow importing typescope without installing it
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '../src')))

import typescope
from typescope.logging import logger


@pytest.fixture(scope="function", autouse=True)
def clear_caches():
    """Clears the catalog and friendly-name caches before each test function runs."""
    typescope.clear_caches()
    yield # Test runs here
    typescope.clear_caches()


@pytest.fixture
def restore_log_level():
    """Puts the package logger back to its level after a test changes it."""
    level = logger.level
    yield logger
    logger.setLevel(level)
    logging.getLogger('typescope').setLevel(level)
