"""
MIDIcon Bridge - Entry point

Run with: python -m midicon_bridge
"""

import sys

from .cli import main

if __name__ == "__main__":
    sys.exit(main())
