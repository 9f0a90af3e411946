"""Global fixtures and utilities for the bulkrename test suite.

This module provides common fixtures used across all test modules: a small
photo library on disk and isolation of the process-wide logging setup.
"""

import logging
import os

import pytest

from bulkrename.adapters.io.enhanced_logging import LoggerManager


# ================================================================================
# Filesystem Fixtures
# ================================================================================


@pytest.fixture
def photo_library(tmp_path):
    """Create a directory tree with a mix of .jpeg, .jpg and other files."""
    root = tmp_path / "photos"
    root.mkdir()

    (root / "beach.jpeg").write_text("beach")
    (root / "sunset.jpeg").write_text("sunset")
    (root / "notes.txt").write_text("notes")

    trip = root / "trip"
    trip.mkdir()
    (trip / "day1.jpeg").write_text("day1")
    (trip / "day2.jpg").write_text("day2")

    # Excluded by default
    git_dir = root / ".git"
    git_dir.mkdir()
    (git_dir / "HEAD.jpeg").write_text("ref")

    return root


@pytest.fixture(autouse=True)
def reset_logging():
    """Keep Rich handlers installed by one test from leaking into the next."""
    root_level = logging.getLogger().level
    yield
    LoggerManager.reset()
    logging.getLogger().setLevel(root_level)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Ignore BULKRENAME_* and CI variables from the developer's shell."""
    monkeypatch.delenv("CI", raising=False)
    for key in list(os.environ):
        if key.startswith("BULKRENAME_"):
            monkeypatch.delenv(key, raising=False)
