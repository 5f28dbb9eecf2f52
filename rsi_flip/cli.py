"""Command-line entrypoint: horizontally flip the directions in an RSI sprite.

Usage:
    # Four-direction sprite sheet (default) → walk-flipped.png
    rsi-flip --path walk.png

    # Single-direction sprite
    rsi-flip --path icon.png --directions 1

    # Explicit output, 4 threads, debug logging
    rsi-flip -p walk.png -o out/walk_mirrored.png -j 4 -v
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from . import __version__
from .flipper import FlipError, flip_file
from .utils import validators
from .utils.fs import ImageIOError
from .utils.logging_config import get_logger, install_excepthook, setup_logging, shutdown

logger = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="rsi-flip",
        description="Horizontally flips the directions in a four-direction RSI.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Direction modes:
  1  Mirror the whole image left-to-right.
  4  Treat the image as a 2x2 sprite sheet (North, South / East, West).
     North and South are mirrored within their quadrant; East and West are
     mirrored and swapped.

The image must be square; with 4 directions its side must also be even.
Output defaults to <stem>-flipped.png next to the input.
""",
    )

    parser.add_argument(
        "-p",
        "--path",
        type=Path,
        required=True,
        help="The path of the image to flip.",
    )
    parser.add_argument(
        "-d",
        "--directions",
        type=int,
        default=None,
        help="Directions in this RSI state: 1 or 4 (default: from config, 4).",
    )
    parser.add_argument(
        "-o",
        "--output",
        type=Path,
        default=None,
        help="Output path (default: <stem><suffix>.<format> beside the input).",
    )
    parser.add_argument(
        "--suffix",
        default=None,
        help="Suffix appended to the input stem (default: from config, '-flipped').",
    )
    parser.add_argument(
        "--format",
        dest="fmt",
        default=None,
        help="Output image format, e.g. png (default: from config).",
    )
    parser.add_argument(
        "-j",
        "--workers",
        type=int,
        default=None,
        help="Threads used for the pixel transform (default: from config, 1).",
    )
    parser.add_argument(
        "-c",
        "--config",
        type=Path,
        default=None,
        help="flip.v1 YAML config (default: packaged flip.v1.yaml).",
    )

    # Logging
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    parser.add_argument(
        "--log-file",
        default=None,
        help="Also write logs to this file",
    )
    parser.add_argument(
        "--json-logs",
        action="store_true",
        help="Write the log file as JSON lines",
    )
    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    return parser


def _apply_overrides(
    cfg: validators.FlipConfigV1,
    args: argparse.Namespace
) -> validators.FlipConfigV1:
    """Merge CLI flags over the loaded config and re-validate."""
    data = cfg.model_dump(by_alias=True)
    if args.directions is not None:
        data["directions"] = args.directions
    if args.workers is not None:
        data["workers"] = args.workers
    if args.suffix is not None:
        data["output"]["suffix"] = args.suffix
    if args.fmt is not None:
        data["output"]["format"] = args.fmt
    if args.verbose:
        data["logging"]["level"] = "DEBUG"
    if args.log_file is not None:
        data["logging"]["file"] = args.log_file
    if args.json_logs:
        data["logging"]["json"] = True
    try:
        return validators.FlipConfigV1(**data)
    except ValueError as e:
        raise ValueError(f"Invalid arguments: {e}") from e


def main(argv: Optional[List[str]] = None) -> int:
    """CLI entrypoint for flipping one sprite."""
    args = build_parser().parse_args(argv)

    try:
        cfg = _apply_overrides(validators.load_flip_config(args.config), args)
    except (FileNotFoundError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    setup_logging(
        log_level=cfg.logging.level,
        log_file=cfg.logging.file,
        json=cfg.logging.json_format,
        color=cfg.logging.color,
        rotate=cfg.logging.rotate.as_handler_kwargs() if cfg.logging.rotate else None,
        quiet_libs=["PIL"],
        context={"app": "rsi-flip"},
    )

    try:
        result = flip_file(args.path, output=args.output, config=cfg)
    except (FlipError, ImageIOError, ValueError) as e:
        logger.debug("Flip failed", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(f"Saved {result.output_path}")
    return 0


def run() -> None:
    """Console-script wrapper: run main(), flush logs, exit with its status.

    Uncaught errors are logged at CRITICAL through the installed excepthook.
    """
    install_excepthook()
    code = main()
    shutdown()
    sys.exit(code)


if __name__ == "__main__":
    run()
