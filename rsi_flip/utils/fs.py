"""Filesystem and image I/O for sprite sheets.

Provides:
    - Image decode: any Pillow-readable file → (H, W, 4) uint8 RGBA array
    - Atomic image encode: tmp file → replace (no partial PNGs on failure)
    - YAML loading for configs
    - Directory creation with exist_ok semantics

Pixel arrays are indexed [y, x] and always carry an RGBA channel axis after
decoding, regardless of the source mode (P, L, RGB, ...).

Usage:
    from rsi_flip.utils import fs
    pixels = fs.load_image_rgba("sprite.png")
    fs.atomic_save_image(pixels, "sprite-flipped.png")
"""

from pathlib import Path
from typing import Any, Dict, Optional, Union

import numpy as np
import yaml
from PIL import Image, UnidentifiedImageError


class ImageIOError(RuntimeError):
    """Base class for image decode/encode failures."""


class DecodeError(ImageIOError):
    """Raised when a file is missing, unreadable or not a recognised image."""


class EncodeError(ImageIOError):
    """Raised when an image cannot be written to its target path."""


def ensure_dir(p: Union[str, Path]) -> Path:
    """Create directory if it doesn't exist, return Path object.

    Parameters
    ----------
    p : Union[str, Path]
        Directory path

    Returns
    -------
    Path
        Path object (guaranteed to exist)
    """
    p = Path(p)
    p.mkdir(parents=True, exist_ok=True)
    return p


def load_image_rgba(path: Union[str, Path]) -> np.ndarray:
    """Decode an image file into an RGBA pixel grid.

    Parameters
    ----------
    path : Union[str, Path]
        Image file path (PNG, GIF, BMP, ... anything Pillow can open)

    Returns
    -------
    np.ndarray
        Pixels, shape (H, W, 4), dtype uint8

    Raises
    ------
    DecodeError
        If the path doesn't exist, isn't a file, isn't a recognised image, or
        exceeds Pillow's decompression-bomb pixel limit
    """
    path = Path(path)
    if not path.is_file():
        raise DecodeError(f"Failed to open file={path}: no such file")

    try:
        with Image.open(path) as img:
            rgba = img.convert("RGBA")
    except UnidentifiedImageError as e:
        raise DecodeError(f"Failed to open file={path}: not a recognised image") from e
    except Image.DecompressionBombError as e:
        raise DecodeError(f"Failed to open file={path}: {e}") from e
    except OSError as e:
        raise DecodeError(f"Failed to open file={path}: {e}") from e

    return np.asarray(rgba, dtype=np.uint8).copy()


def atomic_save_image(
    img: np.ndarray,
    path: Union[str, Path],
    fmt: Optional[str] = None,
    pil_kwargs: Optional[Dict[str, Any]] = None
) -> None:
    """Save image atomically (prevents partial files).

    Parameters
    ----------
    img : np.ndarray
        Image data, (H, W, 4) / (H, W, 3) / (H, W) uint8
    path : Union[str, Path]
        Target file path
    fmt : Optional[str]
        Pillow format name (e.g. "PNG"); None infers it from the extension
    pil_kwargs : Optional[Dict[str, Any]]
        Additional kwargs for PIL.Image.save (e.g., optimize=True)

    Raises
    ------
    EncodeError
        If the image cannot be converted or written. The target path is left
        untouched and the temporary file is removed.

    Notes
    -----
    The tmp file keeps the target extension so format inference still works.
    """
    path = Path(path)
    pil_kwargs = pil_kwargs or {}

    if img.dtype != np.uint8:
        img = np.clip(img, 0, 255).astype(np.uint8)

    # Squeeze single-channel to (H, W)
    if img.ndim == 3 and img.shape[2] == 1:
        img = img.squeeze(2)

    tmp_path = path.with_name(path.stem + ".tmp" + path.suffix)
    try:
        ensure_dir(path.parent)
        pil_img = Image.fromarray(img)
        pil_img.save(tmp_path, format=fmt, **pil_kwargs)
        tmp_path.replace(path)
    except Exception as e:
        if tmp_path.exists():
            tmp_path.unlink()
        raise EncodeError(f"Failed to save image {path}: {e}") from e


def load_yaml(path: Union[str, Path]) -> Dict[str, Any]:
    """Load YAML file safely.

    Parameters
    ----------
    path : Union[str, Path]
        YAML file path

    Returns
    -------
    Dict[str, Any]
        Parsed YAML content

    Raises
    ------
    FileNotFoundError
        If file doesn't exist
    yaml.YAMLError
        If YAML parsing fails
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"YAML file not found: {path}")

    try:
        with open(path, 'r', encoding='utf-8') as f:
            return yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise yaml.YAMLError(f"Failed to parse YAML file {path}: {e}") from e
