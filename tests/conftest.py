"""Shared fixtures: synthetic sprite sheets and logging isolation."""

from pathlib import Path

import numpy as np
import pytest
from PIL import Image

from rsi_flip.utils import logging_config


def make_sheet(size: int) -> np.ndarray:
    """RGBA image where every pixel encodes its own (x, y).

    R = x, G = y, B = 7 * x + y (mod 256), A = 255, so each pixel is unique
    for sizes up to 256 and a flipped pixel reveals exactly where it came from.
    """
    ys, xs = np.mgrid[0:size, 0:size]
    sheet = np.empty((size, size, 4), dtype=np.uint8)
    sheet[..., 0] = xs
    sheet[..., 1] = ys
    sheet[..., 2] = (7 * xs + ys) % 256
    sheet[..., 3] = 255
    return sheet


def write_png(pixels: np.ndarray, path: Path) -> Path:
    Image.fromarray(pixels).save(path)
    return path


@pytest.fixture
def sheet8() -> np.ndarray:
    """8×8 coordinate-encoded RGBA sheet."""
    return make_sheet(8)


@pytest.fixture
def sprite_png(tmp_path, sheet8) -> Path:
    """8×8 sheet written as walk.png."""
    return write_png(sheet8, tmp_path / "walk.png")


@pytest.fixture(autouse=True)
def _reset_logging():
    yield
    logging_config.reset_logging()
