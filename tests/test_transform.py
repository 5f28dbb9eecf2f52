"""Test the pixel transform driver.

Tests for rsi_flip.flipper.transform:
    - SINGLE mode equals numpy.fliplr
    - QUADRANT4 moves each pixel to the mapped location
    - Output keeps shape and dtype; source is never mutated
    - Threaded (row-band) output equals single-threaded output
    - Fail-fast validation: non-square, odd size in QUADRANT4, bad mode

Run:
    pytest tests/test_transform.py -v
"""

import numpy as np
import pytest

from conftest import make_sheet
from rsi_flip.flipper.mapping import (
    DirectionMode,
    InvalidModeError,
    ShapeError,
    map_quadrant4,
)
from rsi_flip.flipper.transform import row_bands, source_indices, transform_image


class TestTransformSingle:
    """Whole-image mirror."""

    def test_matches_fliplr(self, sheet8):
        flipped = transform_image(sheet8, DirectionMode.SINGLE)
        np.testing.assert_array_equal(flipped, np.fliplr(sheet8))

    def test_odd_size_allowed(self):
        sheet = make_sheet(5)
        flipped = transform_image(sheet, 1)
        np.testing.assert_array_equal(flipped, np.fliplr(sheet))

    def test_twice_is_identity(self, sheet8):
        once = transform_image(sheet8, 1)
        np.testing.assert_array_equal(transform_image(once, 1), sheet8)

    def test_grayscale_2d(self):
        gray = np.arange(16, dtype=np.uint8).reshape(4, 4)
        np.testing.assert_array_equal(transform_image(gray, 1), np.fliplr(gray))


class TestTransformQuadrant4:
    """Four-direction sheet flip."""

    def test_pixels_follow_mapper(self, sheet8):
        flipped = transform_image(sheet8, DirectionMode.QUADRANT4)
        for y in range(8):
            for x in range(8):
                src_x, src_y = map_quadrant4(8, 8, x, y)
                np.testing.assert_array_equal(flipped[y, x], sheet8[src_y, src_x])

    def test_reference_sheet_4x4(self):
        sheet = make_sheet(4)
        flipped = transform_image(sheet, 4)
        # R channel holds the source x
        expected_x = np.array([
            [1, 0, 3, 2],
            [1, 0, 3, 2],
            [3, 2, 1, 0],
            [3, 2, 1, 0],
        ])
        np.testing.assert_array_equal(flipped[..., 0], expected_x)
        # G channel holds the source y: rows never move
        np.testing.assert_array_equal(flipped[..., 1], sheet[..., 1])

    def test_north_quadrant_is_local_mirror(self, sheet8):
        flipped = transform_image(sheet8, 4)
        np.testing.assert_array_equal(flipped[:4, :4], np.fliplr(sheet8[:4, :4]))
        np.testing.assert_array_equal(flipped[:4, 4:], np.fliplr(sheet8[:4, 4:]))

    def test_east_west_swapped_and_mirrored(self, sheet8):
        flipped = transform_image(sheet8, 4)
        np.testing.assert_array_equal(flipped[4:, :4], np.fliplr(sheet8[4:, 4:]))
        np.testing.assert_array_equal(flipped[4:, 4:], np.fliplr(sheet8[4:, :4]))

    def test_twice_is_identity(self, sheet8):
        once = transform_image(sheet8, 4)
        np.testing.assert_array_equal(transform_image(once, 4), sheet8)


class TestTransformContract:
    """Shape, dtype, immutability, threading."""

    @pytest.mark.parametrize("mode", [1, 4])
    @pytest.mark.parametrize("size", [2, 6, 16])
    def test_shape_and_dtype_preserved(self, mode, size):
        sheet = make_sheet(size)
        flipped = transform_image(sheet, mode)
        assert flipped.shape == sheet.shape
        assert flipped.dtype == sheet.dtype

    def test_source_not_mutated(self, sheet8):
        before = sheet8.copy()
        flipped = transform_image(sheet8, 4)
        np.testing.assert_array_equal(sheet8, before)
        assert not np.shares_memory(flipped, sheet8)

    @pytest.mark.parametrize("mode", [1, 4])
    @pytest.mark.parametrize("workers", [2, 3, 7, 64])
    def test_threaded_matches_serial(self, mode, workers):
        sheet = make_sheet(32)
        serial = transform_image(sheet, mode, workers=1)
        threaded = transform_image(sheet, mode, workers=workers)
        np.testing.assert_array_equal(threaded, serial)

    def test_empty_image(self):
        empty = np.zeros((0, 0, 4), dtype=np.uint8)
        assert transform_image(empty, 4).shape == (0, 0, 4)

    def test_rejects_zero_workers(self, sheet8):
        with pytest.raises(ValueError, match="workers"):
            transform_image(sheet8, 4, workers=0)


class TestTransformValidation:
    """Errors are raised before any pixel work."""

    def test_non_square_rejected(self):
        tall = np.zeros((6, 4, 4), dtype=np.uint8)
        with pytest.raises(ShapeError, match="square"):
            transform_image(tall, 4)
        with pytest.raises(ShapeError, match="square"):
            transform_image(tall, 1)

    def test_odd_size_rejected_in_quadrant4(self):
        with pytest.raises(ShapeError, match="four quadrants"):
            transform_image(make_sheet(3), DirectionMode.QUADRANT4)

    def test_one_dimensional_rejected(self):
        with pytest.raises(ShapeError):
            transform_image(np.zeros(4, dtype=np.uint8), 1)

    @pytest.mark.parametrize("mode", [0, 2, 3, "four"])
    def test_unknown_mode_rejected(self, sheet8, mode):
        with pytest.raises(InvalidModeError):
            transform_image(sheet8, mode)

    def test_mode_checked_before_shape(self):
        tall = np.zeros((6, 4, 4), dtype=np.uint8)
        with pytest.raises(InvalidModeError):
            transform_image(tall, 3)


class TestRowBands:
    """Row partitioning for threaded transforms."""

    def test_covers_all_rows_once(self):
        bands = row_bands(10, 3)
        rows = [y for band in bands for y in range(band.start, band.stop)]
        assert rows == list(range(10))
        assert [b.stop - b.start for b in bands] == [4, 3, 3]

    def test_more_bands_than_rows(self):
        assert len(row_bands(3, 8)) == 3

    def test_source_indices_band(self):
        src_y, src_x = source_indices(map_quadrant4, 4, 4, slice(2, 4))
        np.testing.assert_array_equal(src_y, [[2, 2, 2, 2], [3, 3, 3, 3]])
        np.testing.assert_array_equal(src_x, [[3, 2, 1, 0], [3, 2, 1, 0]])
