"""
controller.py — Playback Controller
====================================
The PlaybackController is the ONLY object the UI / HTTP layer talks to
during a run.  It owns the live Sequence, the algorithm generator and the
PlaybackState, and decides when the algorithm may take its next Step.

State machine:
    IDLE       →  start()            →  RUNNING
    RUNNING    →  COMPLETE step      →  COMPLETED
    RUNNING    →  cancel() observed  →  CANCELLED
    COMPLETED / CANCELLED behave like IDLE: start() begins a new run,
    reset() returns to IDLE explicitly.

Cadence:
    Every Step the algorithm yields is published as a Frame (snapshot +
    highlighted indices).  frames() then waits `delay_ms` before pulling
    the next Step; tick() does the same for callers that own an event
    loop.  The algorithm is suspended at its `yield` the whole time, so
    the Sequence is always observed between two complete operations.

Cancellation:
    cancel() only raises a flag (and wakes a sleeping frames()).  The flag
    is honoured at the next suspension point: the run ends with one
    terminal Frame whose outcome is CANCELLED and never reaches COMPLETED.
    The live Sequence keeps the last fully-applied snapshot.

Thread safety:
    start / cancel / reset may be called from different threads (a Flask
    request can cancel a run another request is streaming).  Stepping
    itself must stay on one thread.
"""

import logging
import random
import threading
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, Iterator, List, Optional, Sequence, Set, Tuple

from algorithms import AlgoInfo, resolve_algorithm
from algorithms.step import Step, StepKind, validate_sequence
from engine.config import DEFAULT_DELAY_MS, resolve_delay, validate_delay
from sequence import DEFAULT_SIZE, generate_array


log = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# States & outcomes
# ---------------------------------------------------------------------------
class RunStatus(Enum):
    IDLE      = "idle"
    RUNNING   = "running"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class RunOutcome(Enum):
    COMPLETED               = "completed"
    CANCELLED               = "cancelled"
    CONCURRENT_RUN_REJECTED = "concurrent_run_rejected"


@dataclass
class PlaybackState:
    """Transient per-run state; reset at the start of every run (delay survives)."""

    running:         bool            = False
    cancelled:       bool            = False
    delay_ms:        int             = DEFAULT_DELAY_MS
    active_indices:  Set[int]        = field(default_factory=set)
    snapshot:        Tuple[Any, ...] = ()
    steps_taken:     int             = 0

    def reset(self) -> None:
        self.running        = False
        self.cancelled      = False
        self.active_indices = set()
        self.snapshot       = ()
        self.steps_taken    = 0


@dataclass(frozen=True)
class Frame:
    """
    One published observation: what the renderer draws right now, plus the
    pseudocode line and explanation of the Step behind it (-1 / "" when no
    Step produced the Frame).
    """

    step_number:     int
    snapshot:        Tuple[Any, ...]
    active_indices:  Tuple[int, ...]        = ()
    kind:            Optional[StepKind]     = None
    done:            bool                   = False
    outcome:         Optional[RunOutcome]   = None
    pseudocode_line: int                    = -1
    explanation:     str                    = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "step":    self.step_number,
            "array":   list(self.snapshot),
            "active":  list(self.active_indices),
            "kind":    self.kind.value if self.kind else None,
            "done":    self.done,
            "outcome": self.outcome.value if self.outcome else None,
            "line":    self.pseudocode_line,
            "explanation": self.explanation,
        }


# ---------------------------------------------------------------------------
# Controller
# ---------------------------------------------------------------------------
class PlaybackController:
    """
    Attributes:
        state     : PlaybackState of the current / last run.
        status    : Current RunStatus.
        algorithm : AlgoInfo of the current / last run (None before the first).
        on_frame  : Optional callback(Frame) fired on every published Frame.
                    The UI hooks its re-render here.
    """

    def __init__(
        self,
        values: Optional[Sequence[int]] = None,
        delay_ms: int = DEFAULT_DELAY_MS,
        on_frame: Optional[Callable[[Frame], None]] = None,
        rng: Optional[random.Random] = None,
    ):
        self.state:     PlaybackState     = PlaybackState(delay_ms=validate_delay(delay_ms))
        self.status:    RunStatus         = RunStatus.IDLE
        self.algorithm: Optional[AlgoInfo] = None
        self.on_frame:  Optional[Callable[[Frame], None]] = on_frame

        self._rng = rng or random.Random()
        if values is None:
            self._sequence: List[Any] = generate_array(DEFAULT_SIZE, rng=self._rng)
        else:
            validate_sequence(values)
            self._sequence = list(values)

        self._generator: Optional[Iterator[Step]] = None
        self._lock  = threading.Lock()
        self._wake  = threading.Event()
        self._last_tick: float = 0.0

    # ------------------------------------------------------------------
    # Read-only accessors
    # ------------------------------------------------------------------
    @property
    def sequence(self) -> List[Any]:
        """Copy of the live Sequence (input of the next run)."""
        return list(self._sequence)

    @property
    def is_running(self) -> bool:
        return self.status is RunStatus.RUNNING

    # ------------------------------------------------------------------
    # Sequence management (only between runs)
    # ------------------------------------------------------------------
    def load(self, values: Sequence[int]) -> bool:
        """Replace the Sequence wholesale.  Returns False while running."""
        validate_sequence(values)
        with self._lock:
            if self.is_running:
                log.warning("load() rejected: a run is active")
                return False
            self._sequence = list(values)
        return True

    def generate(self, size: int = DEFAULT_SIZE, seed: Optional[int] = None) -> Optional[List[int]]:
        """Replace the Sequence with a random one.  Returns None while running."""
        rng = random.Random(seed) if seed is not None else self._rng
        with self._lock:
            if self.is_running:
                log.warning("generate(%s) rejected: a run is active", size)
                return None
            self._sequence = generate_array(size, rng=rng)
        log.debug("generated %d elements", len(self._sequence))
        return list(self._sequence)

    # ------------------------------------------------------------------
    # Speed
    # ------------------------------------------------------------------
    def set_delay(self, delay_ms: int) -> bool:
        """Change the cadence.  Only effective between runs."""
        delay_ms = validate_delay(delay_ms)
        with self._lock:
            if self.is_running:
                log.warning("set_delay(%d) ignored: a run is active", delay_ms)
                return False
            self.state.delay_ms = delay_ms
        return True

    def set_speed(self, preset: Optional[str]) -> bool:
        return self.set_delay(resolve_delay(preset))

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def start(
        self,
        name: str,
        values: Optional[Sequence[int]] = None,
        delay_ms: Optional[int] = None,
    ) -> bool:
        """
        Begin a run of algorithm `name` over a copy of the Sequence.

        `values` and `delay_ms`, when given, replace the Sequence and the
        cadence in the same locked section that starts the run, so nothing
        can slip in between.  Everything is validated first; a rejected or
        invalid request leaves the controller untouched.

        Returns False (and logs) when a run is already active; the active
        run is not disturbed.

        Raises:
            InvalidConfiguration – unknown algorithm name, bad delay.
            InvalidInput         – `values` is not a numeric sequence.
        """
        info = resolve_algorithm(name)
        if values is not None:
            validate_sequence(values)
        if delay_ms is not None:
            validate_delay(delay_ms)

        with self._lock:
            if self.is_running:
                log.warning(
                    "start(%s) rejected: concurrent run rejected, %s is running",
                    info.label, self.algorithm.label if self.algorithm else "?",
                )
                return False
            if values is not None:
                self._sequence = list(values)
            if delay_ms is not None:
                self.state.delay_ms = delay_ms
            working = list(self._sequence)
            self._generator = info.fn(working)
            self.algorithm  = info
            self.state.reset()
            self.state.running  = True
            self.state.snapshot = tuple(working)
            self._wake.clear()
            self._last_tick = 0.0
            self.status = RunStatus.RUNNING
        log.info("%s started on %d elements (delay %d ms)", info.label, len(working), self.state.delay_ms)
        return True

    def cancel(self) -> bool:
        """Request cancellation.  Observed at the next suspension point."""
        with self._lock:
            if not self.is_running:
                log.warning("cancel() ignored: no run is active")
                return False
            self.state.cancelled = True
            self._wake.set()
        log.info("cancel requested after %d steps", self.state.steps_taken)
        return True

    def reset(self) -> None:
        """Drop any run and go back to IDLE.  The Sequence is kept."""
        with self._lock:
            if self._generator is not None:
                self._generator.close()
            self._generator = None
            self.state.reset()
            self.status = RunStatus.IDLE

    # ------------------------------------------------------------------
    # Stepping
    # ------------------------------------------------------------------
    def advance(self) -> Optional[Frame]:
        """
        Resume the algorithm for exactly one Step and publish it.
        Returns None when no run is active.
        """
        if not self.is_running:
            return None
        if self.state.cancelled:
            return self._finish(RunOutcome.CANCELLED)

        try:
            step = next(self._generator)
        except StopIteration:
            # every algorithm ends with COMPLETE; treat a bare return the same way
            return self._finish(RunOutcome.COMPLETED)

        self.state.active_indices = set(step.active_indices)
        self.state.snapshot       = step.snapshot
        self.state.steps_taken   += 1

        if step.kind is StepKind.COMPLETE:
            return self._finish(RunOutcome.COMPLETED, step)

        frame = Frame(
            step_number=step.step_number,
            snapshot=step.snapshot,
            active_indices=step.active_indices,
            kind=step.kind,
            pseudocode_line=step.pseudocode_line,
            explanation=step.explanation,
        )
        self._publish(frame)
        return frame

    def frames(self) -> Iterator[Frame]:
        """
        Blocking driver: publish a Frame, wait out the delay, advance …
        until the run completes or is cancelled.
        """
        try:
            while True:
                frame = self.advance()
                if frame is None:
                    return
                yield frame
                if frame.done:
                    return
                self._wait()
        finally:
            # consumer went away mid-run (closed stream): don't leave the controller busy
            if self.is_running:
                self.cancel()
                self.advance()

    def tick(self) -> Optional[Frame]:
        """
        Non-blocking driver.  Call periodically (e.g. every 50 ms); advances
        one Step once `delay_ms` has elapsed since the previous one.
        """
        if not self.is_running:
            return None
        now = time.monotonic()
        if self.state.cancelled or now - self._last_tick >= self.state.delay_ms / 1000.0:
            self._last_tick = now
            return self.advance()
        return None

    def rejected_frame(self) -> Frame:
        """The single Frame a rejected run request resolves to."""
        return Frame(
            step_number=self.state.steps_taken,
            snapshot=tuple(self.state.snapshot or self._sequence),
            done=True,
            outcome=RunOutcome.CONCURRENT_RUN_REJECTED,
        )

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    def _wait(self) -> None:
        delay = self.state.delay_ms / 1000.0
        if delay > 0:
            self._wake.wait(delay)

    def _finish(self, outcome: RunOutcome, step: Optional[Step] = None) -> Frame:
        with self._lock:
            if self._generator is not None:
                self._generator.close()
            self._generator = None
            self.state.running        = False
            self.state.active_indices = set()
            # both outcomes keep the last fully-applied snapshot
            self._sequence = list(self.state.snapshot)
            self.status = (
                RunStatus.COMPLETED if outcome is RunOutcome.COMPLETED else RunStatus.CANCELLED
            )

        frame = Frame(
            step_number=step.step_number if step else self.state.steps_taken,
            snapshot=self.state.snapshot,
            kind=step.kind if step else None,
            done=True,
            outcome=outcome,
            pseudocode_line=step.pseudocode_line if step else -1,
            explanation=step.explanation if step else f"Run {outcome.value}.",
        )
        label = self.algorithm.label if self.algorithm else "run"
        log.info("%s %s after %d steps", label, outcome.value, self.state.steps_taken)
        self._publish(frame)
        return frame

    def _publish(self, frame: Frame) -> None:
        if self.on_frame is not None:
            self.on_frame(frame)


# ---------------------------------------------------------------------------
# One-call entry point
# ---------------------------------------------------------------------------
def run_algorithm(
    name: str,
    sequence: Sequence[int],
    delay_ms: int = DEFAULT_DELAY_MS,
    controller: Optional[PlaybackController] = None,
) -> Iterator[Frame]:
    """
    Run `name` over `sequence` and return the stream of Frames.

    Configuration and input are validated eagerly.  If `controller` is
    given and busy, the stream is a single CONCURRENT_RUN_REJECTED Frame.

    Raises:
        InvalidConfiguration – unknown algorithm, bad delay.
        InvalidInput         – `sequence` is not a numeric sequence.
    """
    info = resolve_algorithm(name)
    validate_delay(delay_ms)
    validate_sequence(sequence)

    ctrl = controller if controller is not None else PlaybackController(sequence, delay_ms)
    if not ctrl.start(info.key, values=sequence, delay_ms=delay_ms):
        return iter([ctrl.rejected_frame()])
    return ctrl.frames()
