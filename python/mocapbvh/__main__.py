"""
Entry point for running the package as a module.

Usage:
    python -m mocapbvh walk.bvh --joints
"""

import sys

from .main import main

if __name__ == '__main__':
    sys.exit(main())
