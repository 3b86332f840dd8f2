#!/usr/bin/env python3
"""Headless PCM format detection.

Usage:
    python cli.py capture.raw                  # classify one file
    python cli.py *.pcm --scores               # classify many, show all scores
    python cli.py dump.bin --threshold 6       # demand a wider margin
"""

import sys
import os

sys.path.insert(0, os.path.dirname(__file__))

from pcmsniff.cli_runtime import run_cli


def main():
    sys.exit(run_cli())


if __name__ == "__main__":
    main()
