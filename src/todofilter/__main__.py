#!/usr/bin/env python3
"""Entry point for running todofilter as a module.

This allows the filter to be executed as:
    python -m todofilter FORMAT [arguments]
"""

import sys

from .cli import main

if __name__ == "__main__":
    sys.exit(main())
