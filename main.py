#!/usr/bin/env python3
"""
datamatch - Main Entry Point
Compare CSV/Excel files on key fields, map columns and export matches.
"""

import sys

from datamatch.cli import main


if __name__ == "__main__":
    sys.exit(main())
