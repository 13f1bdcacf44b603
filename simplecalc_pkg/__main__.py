"""Main entry point for running simplecalc_pkg as a module.

This allows running simplecalc with:
    python -m simplecalc_pkg 10 + 5
    python -m simplecalc_pkg --health-check
    python -m simplecalc_pkg --format json 10 / 3

This is equivalent to running:
    python -m simplecalc_pkg.cli
    simplecalc
"""

from __future__ import annotations

import sys

from .cli import main_entry

if __name__ == "__main__":
    sys.exit(main_entry())
