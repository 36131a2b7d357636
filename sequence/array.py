"""
array.py — Array Generator & Parser
====================================
The Sequence being sorted is a plain list of ints.  This module is the
only place new Sequences come from:

  1. generate_array  – random input of configurable length   (slider)
  2. parse_array     – user-typed input, e.g. "5, 3, 8, 1"     (import box)

Design decisions:
  - Sizes handed to the generator are CLAMPED, never rejected, because the
    size slider can only produce in-range values anyway.  Typed input is
    different: parse_array rejects anything it cannot represent.
  - Every call gets its own random.Random, so two generators never share
    PRNG state and a seed always reproduces the same array.
"""

import random
import re
from typing import List, Optional

from errors import InvalidConfiguration


MIN_SIZE     = 3
MAX_SIZE     = 50
DEFAULT_SIZE = 15
MIN_VALUE    = 1
MAX_VALUE    = 100

_SEPARATORS = re.compile(r"[\s,;]+")


def clamp_size(size: int) -> int:
    """Pin `size` into [MIN_SIZE, MAX_SIZE]."""
    return max(MIN_SIZE, min(MAX_SIZE, int(size)))


def generate_array(
    size: int = DEFAULT_SIZE,
    seed: Optional[int] = None,
    rng: Optional[random.Random] = None,
) -> List[int]:
    """
    Returns `size` independent uniform integers in [MIN_VALUE, MAX_VALUE].

    Args:
        size : Requested length, clamped to [MIN_SIZE, MAX_SIZE].
        seed : Optional seed for a reproducible array.
        rng  : Optional Random instance to draw from (wins over `seed`).
    """
    if rng is None:
        rng = random.Random(seed)
    n = clamp_size(size)
    return [rng.randint(MIN_VALUE, MAX_VALUE) for _ in range(n)]


def parse_array(text: str) -> List[int]:
    """
    Parse a user-supplied array such as "5, 3, 8, 1" or "5 3 8 1".

    Raises:
        InvalidConfiguration – empty text, non-integer tokens, values
                               outside [MIN_VALUE, MAX_VALUE] or more than
                               MAX_SIZE elements.
    """
    tokens = [t for t in _SEPARATORS.split(text.strip().strip("[]")) if t]
    if not tokens:
        raise InvalidConfiguration("Array is empty")
    if len(tokens) > MAX_SIZE:
        raise InvalidConfiguration(
            f"Array has {len(tokens)} elements; at most {MAX_SIZE} are allowed"
        )

    values = []
    for tok in tokens:
        try:
            v = int(tok)
        except ValueError:
            raise InvalidConfiguration(f"Not an integer: {tok!r}") from None
        if not MIN_VALUE <= v <= MAX_VALUE:
            raise InvalidConfiguration(
                f"Value {v} outside [{MIN_VALUE}, {MAX_VALUE}]"
            )
        values.append(v)
    return values
