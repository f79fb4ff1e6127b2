"""Pytest configuration and fixtures."""

from pathlib import Path

import numpy as np
import pytest
from PIL import Image


@pytest.fixture
def rng():
    """Seeded generator so random palettes are reproducible."""
    return np.random.default_rng(1234)


@pytest.fixture
def two_tone_pixels():
    """Half black, half white RGB samples."""
    return [(0, 0, 0)] * 50 + [(255, 255, 255)] * 50


@pytest.fixture
def grey_ramp_pixels():
    """Black, mid grey and near-white clusters of ten pixels each."""
    return [(0, 0, 0)] * 10 + [(128, 128, 128)] * 10 + [(250, 250, 250)] * 10


@pytest.fixture
def write_png(tmp_path):
    """Write a uint8 (H, W, 4) RGBA array to a PNG under tmp_path."""

    def _write(name: str, rgba: np.ndarray) -> Path:
        path = tmp_path / name
        Image.fromarray(np.ascontiguousarray(rgba, dtype=np.uint8)).save(path)
        return path

    return _write
