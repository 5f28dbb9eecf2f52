"""Single-file flip pipeline: decode → transform → encode.

Public API:
    build_output_path(source, suffix="-flipped", fmt="PNG") → Path
    flip_file(path, mode, output=None, config=None, workers=None) → FlipResult

Output naming follows the RSI tooling convention: the flipped sprite sits
next to its source as "<stem>-flipped.png" unless an explicit output path is
given. The source file is never overwritten by the default naming.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from ..utils import fs, validators
from ..utils.logging_config import pop_context, push_context
from .mapping import DirectionMode
from .transform import transform_image

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FlipResult:
    """Outcome of flip_file()."""
    source_path: Path
    output_path: Path
    mode: DirectionMode
    width: int
    height: int


def _extension_for(fmt: str) -> str:
    return validators.OutputConfig(format=fmt).extension


def build_output_path(
    source: Union[str, Path],
    suffix: str = "-flipped",
    fmt: str = "PNG"
) -> Path:
    """Derive "<dir>/<stem><suffix>.<ext>" from the source path.

    Raises
    ------
    ValueError
        If the source path has no file name
    """
    source = Path(source)
    if not source.stem:
        raise ValueError(f"Given file doesn't have a filename: {source}")
    return source.with_name(f"{source.stem}{suffix}.{_extension_for(fmt)}")


def resolve_output_path(
    source: Union[str, Path],
    output: Optional[Union[str, Path]],
    suffix: str,
    fmt: str
) -> Path:
    """Explicit output wins; a suffix-less output gets the format extension."""
    if output is None:
        return build_output_path(source, suffix, fmt)
    output = Path(output)
    if not output.suffix:
        output = output.with_name(f"{output.name}.{_extension_for(fmt)}")
    return output


def flip_file(
    path: Union[str, Path],
    mode=None,
    *,
    output: Optional[Union[str, Path]] = None,
    config: Optional[validators.FlipConfigV1] = None,
    workers: Optional[int] = None
) -> FlipResult:
    """Flip one sprite image on disk.

    Parameters
    ----------
    path : Union[str, Path]
        Source image
    mode : DirectionMode or int, optional
        Direction mode; None uses config.directions
    output : Union[str, Path], optional
        Explicit destination; None builds "<stem><suffix>.<ext>" beside path
    config : FlipConfigV1, optional
        Defaults for mode, workers and output naming; None uses FlipConfigV1()
    workers : int, optional
        Transform threads; None uses config.workers

    Returns
    -------
    FlipResult
        Paths, resolved mode and image size

    Raises
    ------
    InvalidModeError, ShapeError
        Bad direction mode or image dimensions (nothing is written)
    DecodeError, EncodeError
        Source unreadable or destination unwritable
    """
    config = config or validators.FlipConfigV1()
    mode = DirectionMode.coerce(config.directions if mode is None else mode)
    workers = config.workers if workers is None else workers
    source = Path(path)
    destination = resolve_output_path(source, output, config.output.suffix, config.output.format)

    push_context(source=source.name)
    try:
        pixels = fs.load_image_rgba(source)
        height, width = pixels.shape[:2]
        logger.debug("Loaded %s (%dx%d), mode=%s", source, width, height, mode.name)

        flipped = transform_image(pixels, mode, workers=workers)
        fs.atomic_save_image(flipped, destination, fmt=config.output.format)
        logger.info("Saved %s", destination)
    finally:
        pop_context(keys=["source"])

    return FlipResult(
        source_path=source,
        output_path=destination,
        mode=mode,
        width=width,
        height=height,
    )
