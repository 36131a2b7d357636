"""
merge_sort.py — Merge Sort
===========================
Top-down merge sort over index ranges [lo, hi) of ONE buffer — no
sub-array copies are sorted independently, so every emitted index
points into the real Sequence.

Per merge:
  1. Compare the heads of both halves            →  COMPARE (lo+i, mid+j)
  2. Copy the merged run back, one slot a time   →  OVERWRITE lo+k
     (overlay["range"] = (lo, hi), overlay["buffer"] = merged run)

Ties take the RIGHT element (`left < right` picks left, anything else
picks right).
"""

from typing import Generator, List, Sequence

from algorithms.step import Step, StepEmitter


PSEUDOCODE: List[str] = [
    "def merge_sort(A, lo, hi):",                          # 0
    "    if hi - lo ≤ 1: return",                          # 1
    "    mid ← lo + (hi - lo) / 2",                        # 2
    "    merge_sort(A, lo, mid)",                          # 3
    "    merge_sort(A, mid, hi)",                          # 4
    "    while i < mid and j < hi:",                       # 5
    "        if A[i] < A[j]: take A[i] else take A[j]",    # 6
    "    append the leftovers of both halves",             # 7
    "    for k from lo to hi - 1: A[k] ← merged[k - lo]",  # 8
]


def merge_sort(values: Sequence[int]) -> Generator[Step, None, None]:
    """
    Yields Step snapshots for every comparison and every copy-back.

    Raises:
        InvalidInput – immediately, if `values` is not a numeric sequence.
    """
    em = StepEmitter(values)
    return _run(em)


def _run(em: StepEmitter) -> Generator[Step, None, None]:
    yield from _merge_sort(em, 0, len(em))
    yield em.complete(line=0)


def _merge_sort(em: StepEmitter, lo: int, hi: int) -> Generator[Step, None, None]:
    if hi - lo <= 1:
        return

    mid = lo + (hi - lo) // 2
    yield from _merge_sort(em, lo, mid)
    yield from _merge_sort(em, mid, hi)

    left  = em.slice(lo, mid)
    right = em.slice(mid, hi)
    merged: List[int] = []
    i = j = 0

    # nothing is written until the copy-back, so lo+i / mid+j still hold left[i] / right[j]
    while i < len(left) and j < len(right):
        yield em.compare(
            lo + i, mid + j, line=6,
            explanation=f"Merge [{lo}, {hi}): take the smaller of {left[i]} and {right[j]}.",
        )
        if left[i] < right[j]:
            merged.append(left[i])
            i += 1
        else:
            merged.append(right[j])
            j += 1

    merged.extend(left[i:])
    merged.extend(right[j:])

    buffer = tuple(merged)
    for k, v in enumerate(buffer):
        yield em.overwrite(
            lo + k, v, line=8, range=(lo, hi), buffer=buffer,
            explanation=f"Copy merged value {v} back to position {lo + k}.",
        )
