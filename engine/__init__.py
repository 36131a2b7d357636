"""
engine/
-------
Playback & recording layer.

    from engine import PlaybackController, run_algorithm, Recorder
"""

from engine.config     import (
    PlaybackConfig,
    SPEED_PRESETS,
    DEFAULT_DELAY_MS,
    resolve_delay,
)
from engine.controller import (
    PlaybackController,
    PlaybackState,
    RunStatus,
    RunOutcome,
    Frame,
    run_algorithm,
)
from engine.recorder   import Recorder, RunMetrics
from sequence          import generate_array

__all__ = [
    "PlaybackConfig",
    "SPEED_PRESETS",
    "DEFAULT_DELAY_MS",
    "resolve_delay",
    "PlaybackController",
    "PlaybackState",
    "RunStatus",
    "RunOutcome",
    "Frame",
    "run_algorithm",
    "generate_array",
    "Recorder",
    "RunMetrics",
]
