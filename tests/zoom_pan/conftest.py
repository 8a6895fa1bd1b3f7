# tests/zoom_pan/conftest.py
"""Fixtures for zoom/pan tests."""

from __future__ import annotations

import sys
from pathlib import Path

import numpy as np
import pytest


def pytest_configure() -> None:
    # Ensure `imgzoompan/src` is importable when running tests from the repo root.
    repo_root = Path(__file__).resolve().parents[2]
    src_dir = repo_root / "src"
    if src_dir.exists():
        sys.path.insert(0, str(src_dir))


@pytest.fixture
def full_extent():
    """Whole 400x300 raster."""
    from imgzoompan.zoom_pan.viewport import Rect

    return Rect(0, 400, 0, 300)


@pytest.fixture
def bounds():
    from imgzoompan.zoom_pan.viewport import RasterBounds

    return RasterBounds(width=400, height=300)


@pytest.fixture
def sample_image() -> np.ndarray:
    """Return a 30x40 ramp image (rows x cols)."""
    return np.arange(30 * 40, dtype=np.float32).reshape(30, 40)
