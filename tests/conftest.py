import logging
import os

import pytest

# Set test environment variables
os.environ["RECENCY_CACHE_LOG_LEVEL"] = "WARNING"


@pytest.fixture(autouse=True)
def _fresh_settings():
    """Drop memoised settings so env changes made by a test are picked up."""
    from recency_cache.core.config import get_settings

    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture(autouse=True)
def _strip_file_handlers():
    """Remove file handlers from root logger so tests never write log files."""
    root = logging.getLogger()
    saved = [h for h in root.handlers if isinstance(h, logging.FileHandler)]
    for h in saved:
        root.removeHandler(h)
    yield
    for h in list(root.handlers):
        if isinstance(h, logging.FileHandler):
            root.removeHandler(h)
    for h in saved:
        root.addHandler(h)
