import logging
import os
from datetime import datetime

import pytest

# Set test environment variables
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["GEMINI_API_KEY"] = "test-key"


@pytest.fixture(autouse=True)
def _strip_file_handlers():
    """Remove file handlers from root logger so tests never write to logs/app.log."""
    root = logging.getLogger()
    saved = [h for h in root.handlers if isinstance(h, logging.FileHandler)]
    for h in saved:
        root.removeHandler(h)
    yield
    # Restore any that were removed (and strip any new ones tests may have added)
    for h in list(root.handlers):
        if isinstance(h, logging.FileHandler):
            root.removeHandler(h)
    for h in saved:
        root.addHandler(h)


@pytest.fixture(autouse=True)
def _fresh_settings():
    """Drop the cached Settings so env changes in one test don't leak."""
    from life_calendar.core.config import get_settings

    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def now():
    """Fixed reference instant used instead of the wall clock."""
    return datetime(2026, 10, 19, 0, 0)


@pytest.fixture
def settings(tmp_path):
    """Settings pointing all file output at a temp directory."""
    from life_calendar.core.config import Settings

    return Settings(
        preferences_path=str(tmp_path / "prefs" / "preferences.json"),
        image_output_dir=str(tmp_path / "images"),
    )
