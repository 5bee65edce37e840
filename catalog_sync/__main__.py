"""
Entry point for running the catalog sync layer as a module.

Usage:
    python -m catalog_sync <command>
"""

import sys

from .cli import main

if __name__ == "__main__":
    sys.exit(main())
