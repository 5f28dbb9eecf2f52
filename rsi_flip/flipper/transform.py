"""Pixel transform driver: builds the flipped image from a coordinate mapper.

For every output pixel (x, y) the selected mapper returns the source pixel
(x', y') and the destination is filled with destination[y, x] = source[y', x'].

Validation happens before any pixel work (fail-fast, no partial output):
    1. Direction mode must be SINGLE (1) or QUADRANT4 (4)   → InvalidModeError
    2. Image must have at least two axes and be square      → ShapeError
    3. QUADRANT4 needs an even side                         → ShapeError

Concurrency:
    Output pixels are independent. With workers > 1 the rows are split into
    contiguous bands and each band is gathered on a thread. Workers only read
    the source and write disjoint row ranges of the destination; no locks.
    The per-pixel mapper calls are pure Python and hold the GIL, so threads
    only overlap the numpy gather. Expect the output to be identical for any
    worker count, not a proportional speedup.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import List, Tuple

import numpy as np

from .mapping import DirectionMode, Mapper, ShapeError, get_mapper

logger = logging.getLogger(__name__)


def validate_shape(pixels: np.ndarray, mode: DirectionMode) -> Tuple[int, int]:
    """Check dimension constraints for a direction mode.

    Returns
    -------
    Tuple[int, int]
        (width, height) of the image
    """
    if pixels.ndim < 2:
        raise ShapeError(f"Image must be a 2D pixel grid, got array with shape {pixels.shape}")

    height, width = pixels.shape[:2]
    if width != height:
        raise ShapeError(f"Image must be square, got {width}x{height}")
    if mode is DirectionMode.QUADRANT4 and width % 2 != 0:
        raise ShapeError(
            f"Image must be composed of four quadrants, got odd size {width}x{height}"
        )
    return width, height


def row_bands(height: int, n_bands: int) -> List[slice]:
    """Split [0, height) into at most n_bands contiguous row slices.

    Band sizes differ by at most one row; empty bands are dropped.
    """
    n_bands = max(1, min(n_bands, height))
    base, extra = divmod(height, n_bands)
    bands = []
    start = 0
    for i in range(n_bands):
        stop = start + base + (1 if i < extra else 0)
        if stop > start:
            bands.append(slice(start, stop))
        start = stop
    return bands


def source_indices(
    mapper: Mapper,
    width: int,
    height: int,
    rows: slice
) -> Tuple[np.ndarray, np.ndarray]:
    """Source (y, x) index arrays for every output pixel in a row band.

    Returns
    -------
    Tuple[np.ndarray, np.ndarray]
        src_y, src_x, each shape (rows, width), dtype intp
    """
    n_rows = len(range(*rows.indices(height)))
    src_y = np.empty((n_rows, width), dtype=np.intp)
    src_x = np.empty((n_rows, width), dtype=np.intp)

    for row, y in enumerate(range(*rows.indices(height))):
        for x in range(width):
            src_x[row, x], src_y[row, x] = mapper(width, height, x, y)

    return src_y, src_x


def _fill_band(
    source: np.ndarray,
    destination: np.ndarray,
    mapper: Mapper,
    rows: slice
) -> None:
    height, width = source.shape[:2]
    src_y, src_x = source_indices(mapper, width, height, rows)
    destination[rows] = source[src_y, src_x]


def transform_image(pixels: np.ndarray, mode, *, workers: int = 1) -> np.ndarray:
    """Flip a square sprite image horizontally.

    Parameters
    ----------
    pixels : np.ndarray
        Source image, shape (H, W) or (H, W, C), indexed [y, x]. Not modified.
    mode : DirectionMode or int
        SINGLE / 1 mirrors the whole image; QUADRANT4 / 4 flips each
        direction of a 2×2 sprite sheet
    workers : int
        Threads used to fill row bands, default 1 (no pool). Index
        computation runs under the GIL, so extra workers change
        scheduling, not results

    Returns
    -------
    np.ndarray
        New image with the same shape and dtype as pixels

    Raises
    ------
    InvalidModeError
        If mode is not a recognised direction mode
    ShapeError
        If the image is not square, or is odd-sized in QUADRANT4 mode
    ValueError
        If workers < 1
    """
    mode = DirectionMode.coerce(mode)
    mapper = get_mapper(mode)
    pixels = np.asarray(pixels)
    width, height = validate_shape(pixels, mode)

    if workers < 1:
        raise ValueError(f"workers must be >= 1, got {workers}")

    destination = np.empty_like(pixels)
    if width == 0:
        return destination

    bands = row_bands(height, workers)
    logger.debug(
        "Transforming %dx%d image, mode=%s, bands=%d", width, height, mode.name, len(bands)
    )

    if len(bands) == 1:
        _fill_band(pixels, destination, mapper, bands[0])
        return destination

    with ThreadPoolExecutor(max_workers=len(bands)) as pool:
        futures = [
            pool.submit(_fill_band, pixels, destination, mapper, band) for band in bands
        ]
        for future in futures:
            future.result()

    return destination
