"""
Shared pytest fixtures for matrixops tests.

This module provides:
- Sample matrices used across test modules
- A factory for writing matrix text files
- Isolation of the cached settings from the environment
"""

import pytest
from pathlib import Path
from typing import Callable

from matrixops.core.config import get_settings
from matrixops.math.matrix import Matrix


@pytest.fixture(autouse=True)
def fresh_settings(monkeypatch):
    """Make every test start from default settings."""
    for name in ("NUMBER_TYPE", "SKIP_BLANK_LINES", "LOG_LEVEL", "LOG_FORMAT", "LOG_FILE"):
        monkeypatch.delenv(f"MATRIX_{name}", raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def square() -> Matrix:
    """2x2 matrix [[1, 2], [3, 4]]."""
    return Matrix.from_2d([[1, 2], [3, 4]])


@pytest.fixture
def rectangular() -> Matrix:
    """2x3 matrix [[1, 2, 3], [4, 5, 6]]."""
    return Matrix.from_2d([[1, 2, 3], [4, 5, 6]])


@pytest.fixture
def write_matrix(tmp_path: Path) -> Callable[[str, str], Path]:
    """Factory writing matrix text to a file under tmp_path."""
    def _write(name: str, text: str) -> Path:
        path = tmp_path / name
        path.write_text(text, encoding="utf-8")
        return path
    return _write


pytestmark = [
    pytest.mark.filterwarnings("ignore::DeprecationWarning"),
]
