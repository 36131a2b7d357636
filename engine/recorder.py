"""
recorder.py — Run Recorder & Analytics
========================================
Records a complete algorithm run (all Steps) without any pacing, then
computes the numbers the Analytics panel shows.

Usage:
    rec = Recorder()
    rec.start("merge", [5, 3, 8, 1])
    metrics = rec.run_to_completion()   # exhausts the generator
    rec.export()                        # serialisable snapshot of the trace

The recorder drives the algorithm generator directly, so it never
competes with a PlaybackController for the live Sequence.
"""

import time
from dataclasses import asdict, dataclass
from typing import Any, Dict, Iterator, List, Optional, Sequence

from algorithms import AlgoInfo, resolve_algorithm
from algorithms.step import Step, StepKind


# ---------------------------------------------------------------------------
# Metrics dataclass — what the Analytics panel renders
# ---------------------------------------------------------------------------
@dataclass
class RunMetrics:
    algo_key:      str   = ""
    algo_label:    str   = ""
    size:          int   = 0
    comparisons:   int   = 0
    swaps:         int   = 0
    overwrites:    int   = 0
    total_steps:   int   = 0          # including the COMPLETE step
    wall_time_ms:  float = 0.0        # wall-clock time to run to completion
    sorted_ok:     bool  = False      # final snapshot ascending and a permutation of the input


# ---------------------------------------------------------------------------
# Recorder
# ---------------------------------------------------------------------------
class Recorder:
    """
    Attributes:
        steps   : Full list of Steps from the run.
        metrics : Computed RunMetrics (available after run_to_completion).
    """

    def __init__(self):
        self.steps:   List[Step]           = []
        self.metrics: Optional[RunMetrics] = None

        self._algo_info:  Optional[AlgoInfo]        = None
        self._input:      List[Any]                 = []
        self._generator:  Optional[Iterator[Step]]  = None

    def start(self, algo_key: str, values: Sequence[int]) -> None:
        """Initialise the generator for this run."""
        info = resolve_algorithm(algo_key)
        self._algo_info = info
        self._input     = list(values)
        self._generator = info.fn(self._input)
        self.steps      = []
        self.metrics    = None

    def run_to_completion(self) -> RunMetrics:
        """Exhaust the generator, record every step, compute metrics."""
        if self._generator is None:
            raise RuntimeError("Call start() first.")

        t0 = time.monotonic()
        self.steps = list(self._generator)
        wall_ms = (time.monotonic() - t0) * 1000
        self._generator = None

        self.metrics = self._compute_metrics(wall_ms)
        return self.metrics

    @property
    def final_snapshot(self) -> List[Any]:
        return list(self.steps[-1].snapshot) if self.steps else list(self._input)

    def export(self) -> Dict[str, Any]:
        return {
            "algo_key": self._algo_info.key if self._algo_info else "",
            "input":    list(self._input),
            "metrics":  asdict(self.metrics) if self.metrics else {},
            "steps": [
                {
                    "step_number":     s.step_number,
                    "kind":            s.kind.value,
                    "indices":         list(s.indices),
                    "value":           s.value,
                    "snapshot":        list(s.snapshot),
                    "pseudocode_line": s.pseudocode_line,
                    "explanation":     s.explanation,
                    "is_final":        s.is_final,
                }
                for s in self.steps
            ],
        }

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    def _compute_metrics(self, wall_ms: float) -> RunMetrics:
        info = self._algo_info
        counts = {kind: 0 for kind in StepKind}
        for s in self.steps:
            counts[s.kind] += 1

        final = self.final_snapshot
        sorted_ok = (
            bool(self.steps)
            and self.steps[-1].kind is StepKind.COMPLETE
            and final == sorted(self._input)
        )

        return RunMetrics(
            algo_key=info.key if info else "",
            algo_label=info.label if info else "",
            size=len(self._input),
            comparisons=counts[StepKind.COMPARE],
            swaps=counts[StepKind.SWAP],
            overwrites=counts[StepKind.OVERWRITE],
            total_steps=len(self.steps),
            wall_time_ms=round(wall_ms, 2),
            sorted_ok=sorted_ok,
        )
