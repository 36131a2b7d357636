"""
sequence/
---------
Core data layer: the array being sorted.  Public API:

    from sequence import generate_array, parse_array, clamp_size
    from sequence import MIN_SIZE, MAX_SIZE, MIN_VALUE, MAX_VALUE
"""

from sequence.array import (
    generate_array,
    parse_array,
    clamp_size,
    MIN_SIZE,
    MAX_SIZE,
    DEFAULT_SIZE,
    MIN_VALUE,
    MAX_VALUE,
)

__all__ = [
    "generate_array", "parse_array", "clamp_size",
    "MIN_SIZE",       "MAX_SIZE",    "DEFAULT_SIZE",
    "MIN_VALUE",      "MAX_VALUE",
]
