"""
ARR Editor - Main Entry Point

Command-line editor for the typed-array (.arr) files of a legacy adventure game engine.
"""

import sys
import os

# Ensure the package is importable when run from a checkout
sys.path.insert(0, os.path.abspath(os.path.dirname(__file__)))

from arreditor.launcher import main


if __name__ == "__main__":
    sys.exit(main())
