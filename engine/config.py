"""
config.py — Configuration Surface
==================================
The recognised options of a run:

    size          int in [3, 50]
    delay_preset  "Fast" (200 ms) | "Medium" (500 ms) | "Slow" (800 ms)
                  ("speed" is accepted as an alias, the HTTP body name)
                  (300 ms when no preset is given)
    delay_ms      explicit delay, wins over the preset
    algorithm     "Heap" | "Insertion" | "Merge" | "Quick"
    seed          optional PRNG seed for the generated array

Everything here is validated BEFORE a run starts; a bad option raises
InvalidConfiguration and the controller is left untouched.
"""

from dataclasses import dataclass
from typing import Any, Mapping, Optional

from algorithms import resolve_algorithm
from errors import InvalidConfiguration
from sequence import MIN_SIZE, MAX_SIZE, DEFAULT_SIZE


# ---------------------------------------------------------------------------
# Speed presets (milliseconds per step)
# ---------------------------------------------------------------------------
SPEED_PRESETS = {
    "fast":   200,
    "medium": 500,
    "slow":   800,
}

DEFAULT_DELAY_MS  = 300
DEFAULT_ALGORITHM = "quick"


def resolve_delay(preset: Optional[str]) -> int:
    """Map a speed preset to milliseconds.  None → DEFAULT_DELAY_MS."""
    if preset is None:
        return DEFAULT_DELAY_MS
    try:
        return SPEED_PRESETS[str(preset).strip().lower()]
    except KeyError:
        raise InvalidConfiguration(
            f"Unknown speed preset: {preset!r} (expected Fast, Medium or Slow)"
        ) from None


def validate_delay(delay_ms: Any) -> int:
    if isinstance(delay_ms, bool) or not isinstance(delay_ms, int):
        raise InvalidConfiguration(f"Delay must be an integer number of ms, got {delay_ms!r}")
    if delay_ms < 0:
        raise InvalidConfiguration(f"Delay must be non-negative, got {delay_ms}")
    return delay_ms


def validate_size(size: Any) -> int:
    if isinstance(size, bool) or not isinstance(size, int):
        raise InvalidConfiguration(f"Size must be an integer, got {size!r}")
    if not MIN_SIZE <= size <= MAX_SIZE:
        raise InvalidConfiguration(f"Size {size} outside [{MIN_SIZE}, {MAX_SIZE}]")
    return size


@dataclass
class PlaybackConfig:
    size:      int           = DEFAULT_SIZE
    delay_ms:  int           = DEFAULT_DELAY_MS
    algorithm: str           = DEFAULT_ALGORITHM
    seed:      Optional[int] = None

    @classmethod
    def from_options(cls, options: Mapping[str, Any]) -> "PlaybackConfig":
        """Build a validated config from loose options (JSON body, CLI, …)."""
        size = validate_size(options.get("size", DEFAULT_SIZE))

        if options.get("delay_ms") is not None:
            delay = validate_delay(options["delay_ms"])
        else:
            delay = resolve_delay(options.get("delay_preset", options.get("speed")))

        algorithm = resolve_algorithm(options.get("algorithm", DEFAULT_ALGORITHM)).key

        seed = options.get("seed")
        if seed is not None and (isinstance(seed, bool) or not isinstance(seed, int)):
            raise InvalidConfiguration(f"Seed must be an integer, got {seed!r}")

        return cls(size=size, delay_ms=delay, algorithm=algorithm, seed=seed)
