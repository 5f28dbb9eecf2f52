"""RSI Flip: horizontal flipping for square sprites and RSI sprite sheets.

Flips a single sprite image, or a four-direction sprite sheet whose
quadrants hold the North/South/East/West facings of an RSI state.

Architecture layers (strict one-way dependency):
    scripts/ → rsi_flip.cli → rsi_flip.flipper → rsi_flip.utils

Key invariants:
    - Images are (H, W, 4) uint8 RGBA arrays indexed [y, x]
    - Sources are never mutated; the flipped image is a fresh array
    - Shape and mode errors are raised before any pixel work or file write
    - YAML-only configs (flip.v1)
"""

__version__ = "0.2.0"
