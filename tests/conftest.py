"""
Shared test fixtures.

Author: FileFlow Project
License: MIT
"""

import pytest

from fileflow.config import reset_settings


@pytest.fixture(autouse=True)
def restore_defaults():
    """Restore default settings and naming strategy after every test."""
    yield
    reset_settings()


@pytest.fixture
def make_file(tmp_path):
    """Create a file under tmp_path and return its path as a string."""
    def _make(name, content=b""):
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        if isinstance(content, str):
            content = content.encode("utf-8")
        path.write_bytes(content)
        return str(path)
    return _make
