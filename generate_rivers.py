#!/usr/bin/env python3
"""
Grow a river network from a contour preset and render it.

Usage:
    python generate_rivers.py --preset lake --seed demo --output output/lake.svg
"""

import sys
from pathlib import Path

sys.path.append(str(Path(__file__).parent))

from py_terrain.utils.cli import main

if __name__ == "__main__":
    sys.exit(main())
