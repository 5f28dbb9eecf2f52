#!/usr/bin/env python3
"""Flip an RSI sprite from a source checkout (no install needed).

Same interface as the installed `rsi-flip` console script.

Usage:
    python scripts/flip_rsi.py --path path/to/state.png
    python scripts/flip_rsi.py --path icon.png --directions 1
"""
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from rsi_flip.cli import run

if __name__ == "__main__":
    run()
