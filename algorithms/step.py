"""
step.py — Sorting Step & Step Emitter
======================================
Every algorithm is a generator that yields Step objects.
A Step is one atomic operation on the Sequence, together with a
frozen-in-time picture of the Sequence right after the operation:

    • COMPARE    (i, j)      – read-only, highlights i and j
    • SWAP       (i, j)      – exchanges Sequence[i] and Sequence[j]
    • OVERWRITE  (i, value)  – Sequence[i] = value
    • COMPLETE               – terminal marker, nothing follows

Design decisions:
  - Algorithms never touch the list directly.  They own a StepEmitter,
    read through it, and mutate ONLY through its compare / swap /
    overwrite / complete methods.  Each method applies the operation and
    hands back the Step; the algorithm then `yield`s it.  That yield is
    the suspension point: exactly one per Step, never mid-swap.
  - Step is a frozen dataclass.  `snapshot` is a tuple, so a consumer
    that keeps old Steps around (recorder, rewind buffer) can't be
    surprised by later mutations.
  - `overlay` is a free-form dict so algorithms can attach extra data
    (merge / partition buffers, heap size, …) for overlays and tests.
"""

import collections.abc
import logging
from dataclasses import dataclass, field
from enum import Enum
from numbers import Real
from typing import Any, Dict, Iterable, Tuple

from errors import InvalidInput
from sequence import MAX_SIZE


log = logging.getLogger(__name__)


class StepKind(Enum):
    COMPARE   = "compare"
    SWAP      = "swap"
    OVERWRITE = "overwrite"
    COMPLETE  = "complete"


@dataclass(frozen=True)
class Step:
    """
    Attributes:
        step_number     : 0-based index of this step in the run.
        kind            : Which atomic operation this is.
        indices         : Operand indices: (i, j) for compare/swap, (i,) for overwrite.
        value           : Value written by an OVERWRITE (None otherwise).
        snapshot        : The whole Sequence AFTER the operation was applied.
        pseudocode_line : 0-based index into the algorithm's PSEUDOCODE.
        explanation     : Human-readable "why" text for Learning Mode.
        overlay         : Free-form algorithm-specific data:
                            • "range"     – (lo, hi) of a merge / partition copy-back
                            • "buffer"    – the values being copied back
                            • "heap_size" – heap boundary during heap sort
        is_final        : True only on the COMPLETE step.
    """

    step_number:      int                 = 0
    kind:             StepKind            = StepKind.COMPARE
    indices:          Tuple[int, ...]     = ()
    value:            Any                 = None
    snapshot:         Tuple[Any, ...]     = ()
    pseudocode_line:  int                 = 0
    explanation:      str                 = ""
    overlay:          Dict[str, Any]      = field(default_factory=dict)
    is_final:         bool                = False

    @property
    def active_indices(self) -> Tuple[int, ...]:
        """Indices the renderer should highlight for this step."""
        if self.kind is StepKind.COMPLETE:
            return ()
        return self.indices

    @property
    def mutates(self) -> bool:
        return self.kind in (StepKind.SWAP, StepKind.OVERWRITE)


# ---------------------------------------------------------------------------
# Input validation
# ---------------------------------------------------------------------------
def validate_sequence(values: Any) -> None:
    """Raise InvalidInput unless `values` is a sortable numeric sequence."""
    if isinstance(values, (str, bytes)) or not isinstance(values, collections.abc.Sequence):
        raise InvalidInput(f"Expected a sequence of numbers, got {type(values).__name__}")
    if len(values) > MAX_SIZE:
        raise InvalidInput(f"Sequence length {len(values)} exceeds {MAX_SIZE}")
    for i, v in enumerate(values):
        if isinstance(v, bool) or not isinstance(v, Real):
            raise InvalidInput(f"Element {i} is not numeric: {v!r}")


# ---------------------------------------------------------------------------
# Step Emitter
# ---------------------------------------------------------------------------
class StepEmitter:
    """
    Owns the working copy of the Sequence for one algorithm run.

    Usage inside an algorithm generator:
        em = StepEmitter(values)
        yield em.compare(0, 1, line=3)
        if em[0] > em[1]:
            yield em.swap(0, 1, line=4)
        yield em.complete()
    """

    def __init__(self, values: Iterable[Any]):
        validate_sequence(values)
        self._values = list(values)
        self._count  = 0

    # -- read-only access --
    def __len__(self) -> int:
        return len(self._values)

    def __getitem__(self, idx: int) -> Any:
        return self._values[idx]

    @property
    def values(self) -> Tuple[Any, ...]:
        return tuple(self._values)

    def slice(self, lo: int, hi: int) -> list:
        """Copy of values[lo:hi]; reading never counts as a step."""
        return self._values[lo:hi]

    # -- operations --
    def compare(self, i: int, j: int, line: int = 0, explanation: str = "", **overlay) -> Step:
        self._check(i, j)
        return self._build(StepKind.COMPARE, (i, j), None, line, explanation, overlay)

    def swap(self, i: int, j: int, line: int = 0, explanation: str = "", **overlay) -> Step:
        self._check(i, j)
        self._values[i], self._values[j] = self._values[j], self._values[i]
        return self._build(StepKind.SWAP, (i, j), None, line, explanation, overlay)

    def overwrite(self, i: int, value: Any, line: int = 0, explanation: str = "", **overlay) -> Step:
        self._check(i)
        self._values[i] = value
        return self._build(StepKind.OVERWRITE, (i,), value, line, explanation, overlay)

    def complete(self, line: int = 0, explanation: str = "Sequence is sorted.") -> Step:
        return self._build(StepKind.COMPLETE, (), None, line, explanation, {})

    # -- internal --
    def _check(self, *indices: int) -> None:
        n = len(self._values)
        for idx in indices:
            if not 0 <= idx < n:
                raise InvalidInput(f"Index {idx} out of range for length {n}")

    def _build(self, kind, indices, value, line, explanation, overlay) -> Step:
        step = Step(
            step_number=self._count,
            kind=kind,
            indices=indices,
            value=value,
            snapshot=tuple(self._values),
            pseudocode_line=line,
            explanation=explanation,
            overlay=dict(overlay),
            is_final=kind is StepKind.COMPLETE,
        )
        self._count += 1
        log.debug("step %d %s %s", step.step_number, kind.value, indices)
        return step
