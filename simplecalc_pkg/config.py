"""Centralized configuration for simplecalc.

This module defines:
- Fixed word width and the 32-bit bounds derived from NumPy dtypes
- Output formatting defaults
- Regex pattern for operand parsing

Values can be overridden at startup via CLI flags (see cli.py).
"""

import re

import numpy as np

try:
    import importlib.metadata

    VERSION = importlib.metadata.version("simplecalc")
except importlib.metadata.PackageNotFoundError:
    # Running from a source checkout
    VERSION = "1.0.0"

# Word layout
WORD_BITS = 32
ROTATION_MASK = WORD_BITS - 1

INT32_MIN = int(np.iinfo(np.int32).min)
INT32_MAX = int(np.iinfo(np.int32).max)
UINT32_MAX = int(np.iinfo(np.uint32).max)

# Output
FLOAT_PRECISION = 2  # fraction digits for Float64 results
DEFAULT_LOG_LEVEL = "WARNING"

# Optional sign followed by decimal digits, nothing else
OPERAND_RE = re.compile(r"^[+-]?[0-9]+$")
